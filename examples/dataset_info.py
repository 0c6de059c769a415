"""Write and read back a DatasetInfo struct in an INI profile file."""
from __future__ import annotations

import sys
from pathlib import Path

from pps_core import encode, iter_layout, load_schema, read_record, write_record
from pps_profile import get_profile_string, write_profile_string

SCHEMA = {
    "SIZE": [["width", "DWORD"], ["height", "DWORD"]],
    "POSITION": [["left", "DWORD"], ["top", "DWORD"]],
    "DatasetInfo": [["format", "int"], ["size", "SIZE"], ["pos", "POSITION"], ["colordeep", "int"]],
}


def main() -> None:
    if len(sys.argv) < 2:
        print("Usage: python dataset_info.py <file.ini>")
        sys.exit(1)

    ini = Path(sys.argv[1])
    dataset = load_schema(SCHEMA)["DatasetInfo"]

    for name, offset, kind in iter_layout(dataset):
        print(f"{offset:>3}  {kind.value:<7} {name}")

    value = {
        "format": 100,
        "size": {"width": 1920, "height": 1080},
        "pos": {"left": 10, "top": 20},
        "colordeep": 32,
    }
    print(f"\n[Test] Data={encode(value, dataset)}")

    if not write_record("Test", "Data", value, dataset, write_profile_string, ini):
        print("Write failed")
        sys.exit(1)

    ok, restored = read_record("Test", "Data", dataset, get_profile_string, ini)
    print(f"Read back ({'ok' if ok else 'failed'}): {restored}")


if __name__ == "__main__":
    main()
