from pps_core import read_record, load_schema, write_record
from pps_profile import get_profile_string, iter_entries, write_profile_string

from conftest import DATASET_HEX, DATASET_SCHEMA, DATASET_VALUE


def test_write_uses_profile_api_line_format(tmp_path):
    ini = tmp_path / "app.ini"
    assert write_profile_string("Test", "Data", DATASET_HEX, ini)

    lines = ini.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "[Test]"
    assert lines[1] == f"Data={DATASET_HEX}"


def test_lookup_is_case_insensitive_and_keeps_spelling(tmp_path):
    ini = tmp_path / "app.ini"
    write_profile_string("Test", "Data", "00", ini)
    write_profile_string("TEST", "DATA", "0101", ini)

    assert get_profile_string("test", "data", ini) == "0101"
    assert list(iter_entries(ini)) == [("Test", "Data", "0101")]


def test_missing_entries(tmp_path):
    ini = tmp_path / "app.ini"
    assert get_profile_string("Test", "Data", ini) is None

    write_profile_string("Test", "Data", "00", ini)
    assert get_profile_string("Other", "Data", ini) is None
    assert get_profile_string("Test", "Other", ini) is None


def test_other_entries_survive_rewrites(tmp_path):
    ini = tmp_path / "app.ini"
    ini.write_text("[Window]\nTitle=Main view\n\n[Test]\nName=demo\n", encoding="utf-8")
    write_profile_string("Test", "Data", DATASET_HEX, ini)

    assert list(iter_entries(ini)) == [
        ("Window", "Title", "Main view"),
        ("Test", "Name", "demo"),
        ("Test", "Data", DATASET_HEX),
    ]


def test_record_round_trip_through_file(tmp_path):
    ini = tmp_path / "app.ini"
    d = load_schema(DATASET_SCHEMA)["DatasetInfo"]

    assert write_record("Test", "Data", DATASET_VALUE, d, write_profile_string, ini)
    assert read_record("Test", "Data", d, get_profile_string, ini) == (True, DATASET_VALUE)


def test_read_record_from_hand_written_file(tmp_path):
    ini = tmp_path / "app.ini"
    ini.write_text(f"[Test]\nData={DATASET_HEX}\n", encoding="utf-8")
    d = load_schema(DATASET_SCHEMA)["DatasetInfo"]

    ok, value = read_record("Test", "Data", d, get_profile_string, ini)
    assert ok
    assert value["size"] == {"width": 1920, "height": 1080}


def test_unparseable_file_is_a_failed_read(tmp_path):
    ini = tmp_path / "app.ini"
    ini.write_text("Data=00\n", encoding="utf-8")
    d = load_schema(DATASET_SCHEMA)["DatasetInfo"]

    ok, _ = read_record("Test", "Data", d, get_profile_string, ini)
    assert not ok


def test_write_keeps_comments_and_other_lines(tmp_path):
    ini = tmp_path / "app.ini"
    ini.write_text("; user settings\n[Window]\nTitle=Main\n", encoding="utf-8")
    write_profile_string("Test", "Data", DATASET_HEX, ini)

    assert ini.read_text(encoding="utf-8") == (
        "; user settings\n[Window]\nTitle=Main\n\n[Test]\nData=" + DATASET_HEX + "\n"
    )


def test_update_replaces_only_the_entry_line(tmp_path):
    ini = tmp_path / "app.ini"
    original = (
        "[Test]\r\n"
        "; stored by the viewer\r\n"
        "Name = demo\r\n"
        "data=00\r\n"
        "\r\n"
        "# trailing notes\r\n"
        "[Window]\r\n"
        "Title=Main\r\n"
    )
    ini.write_bytes(original.encode("utf-8"))

    write_profile_string("TEST", "Data", DATASET_HEX, ini)
    assert ini.read_bytes().decode("utf-8") == original.replace("data=00", "data=" + DATASET_HEX)

    write_profile_string("Test", "Extra", "0101", ini)
    lines = ini.read_bytes().decode("utf-8").split("\r\n")
    assert lines[4] == "Extra=0101"
    assert lines[5] == ""
    assert lines[6] == "# trailing notes"


def test_insert_into_file_without_trailing_newline(tmp_path):
    ini = tmp_path / "app.ini"
    ini.write_text("[Test]\nName=demo", encoding="utf-8")
    write_profile_string("Test", "Data", "0101", ini)

    assert ini.read_text(encoding="utf-8") == "[Test]\nName=demo\nData=0101\n"


def test_default_is_an_ordinary_section(tmp_path):
    ini = tmp_path / "app.ini"
    ini.write_text(f"[DEFAULT]\nData={DATASET_HEX}\n\n[Other]\nX=1\n", encoding="utf-8")

    assert get_profile_string("Other", "Data", ini) is None
    assert get_profile_string("default", "data", ini) == DATASET_HEX
    assert list(iter_entries(ini)) == [("DEFAULT", "Data", DATASET_HEX), ("Other", "X", "1")]


def test_record_round_trip_through_default_section(tmp_path):
    ini = tmp_path / "app.ini"
    d = load_schema(DATASET_SCHEMA)["DatasetInfo"]

    assert write_record("DEFAULT", "Data", DATASET_VALUE, d, write_profile_string, ini)
    assert read_record("DEFAULT", "Data", d, get_profile_string, ini) == (True, DATASET_VALUE)
    assert read_record("Other", "Data", d, get_profile_string, ini)[0] is False
