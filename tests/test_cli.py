import json
import os
import subprocess
import sys
from pathlib import Path

import pyarrow.parquet as pq

from conftest import DATASET_HEX, DATASET_VALUE

REPO = Path(__file__).resolve().parents[1]


def run(*args):
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(REPO / "src"), env.get("PYTHONPATH")]))
    return subprocess.run([sys.executable, *args], cwd=REPO, env=env, check=False, capture_output=True, text=True)


def test_encode_decode_layout(schema_file):
    r = run("-m", "pps_profile.cli", "encode", "--schema", str(schema_file), "--record", "DatasetInfo",
            json.dumps(DATASET_VALUE))
    assert r.returncode == 0, r.stderr + r.stdout
    assert r.stdout.strip() == DATASET_HEX

    r = run("-m", "pps_profile.cli", "decode", "--schema", str(schema_file), "--record", "DatasetInfo", DATASET_HEX)
    assert r.returncode == 0, r.stderr + r.stdout
    assert json.loads(r.stdout) == DATASET_VALUE

    r = run("-m", "pps_profile.cli", "layout", "--schema", str(schema_file), "--record", "DatasetInfo")
    assert r.returncode == 0, r.stderr + r.stdout
    assert "size=24 alignment=4" in r.stdout
    assert "size.height" in r.stdout


def test_decode_failure_is_single_fatal_line(schema_file):
    r = run("-m", "pps_profile.cli", "decode", "--schema", str(schema_file), "--record", "DatasetInfo",
            DATASET_HEX[:-2] + "00")
    assert r.returncode == 1
    assert r.stdout.startswith("FATAL: Checksum mismatch")


def test_write_read_scan_and_corrupt(schema_file, tmp_path):
    ini = tmp_path / "app.ini"
    schema_args = ["--schema", str(schema_file), "--record", "DatasetInfo"]

    r = run("-m", "pps_profile.cli", "write", str(ini), "Test", "Data", json.dumps(DATASET_VALUE), *schema_args)
    assert r.returncode == 0, r.stderr + r.stdout
    assert f"Data={DATASET_HEX}" in ini.read_text(encoding="utf-8")

    r = run("-m", "pps_profile.cli", "read", str(ini), "Test", "Data", *schema_args)
    assert r.returncode == 0, r.stderr + r.stdout
    assert json.loads(r.stdout) == DATASET_VALUE

    report = tmp_path / "report"
    r = run("-m", "pps_verify.cli", "scan", str(ini), *schema_args, "--report", str(report))
    assert r.returncode == 0, r.stderr + r.stdout
    assert json.loads(r.stdout)["stats"]["verified"] == 1
    assert pq.read_table(report / "evidence" / "profile_scan.parquet").num_rows == 1

    # Corrupt and ensure failure
    r = run("scripts/corrupt_one_byte.py", str(ini), "Test", "Data")
    assert r.returncode == 0, r.stderr + r.stdout

    r = run("-m", "pps_profile.cli", "read", str(ini), "Test", "Data", *schema_args)
    assert r.returncode == 1
    assert r.stdout.startswith("FATAL:")

    r = run("-m", "pps_verify.cli", "scan", str(ini))
    assert r.returncode == 1
    summary = json.loads(r.stdout)
    assert summary["failed"][0]["status"] == "E_CHECKSUM_MISMATCH"


def test_check_command():
    r = run("-m", "pps_verify.cli", "check", "640000000000C03F63")
    assert r.returncode == 0, r.stderr + r.stdout
    assert json.loads(r.stdout)["checksum"] == 0x63

    r = run("-m", "pps_verify.cli", "check", "64000")
    assert r.returncode == 1
    assert json.loads(r.stdout)["errors"][0]["code"] == "E_HEX_MALFORMED"


def test_write_rejects_value_that_does_not_fit(schema_file, tmp_path):
    ini = tmp_path / "app.ini"
    r = run("-m", "pps_profile.cli", "write", str(ini), "Test", "Data", '{"format": 1}',
            "--schema", str(schema_file), "--record", "DatasetInfo")
    assert r.returncode == 1
    assert not ini.exists()
