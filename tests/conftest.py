import json

import pytest

DATASET_SCHEMA = {
    "DatasetInfo": [
        ["format", "int32"],
        ["size", "SIZE"],
        ["pos", "POSITION"],
        ["colordeep", "int32"],
    ],
    "SIZE": [["width", "uint32"], ["height", "uint32"]],
    "POSITION": [["left", "uint32"], ["top", "uint32"]],
}

DATASET_VALUE = {
    "format": 100,
    "size": {"width": 1920, "height": 1080},
    "pos": {"left": 10, "top": 20},
    "colordeep": 32,
}

# What WritePrivateProfileStructA writes for DATASET_VALUE.
DATASET_HEX = "64000000" "80070000" "38040000" "0A000000" "14000000" "20000000" "65"


@pytest.fixture
def schema_file(tmp_path):
    p = tmp_path / "schema.json"
    p.write_text(json.dumps(DATASET_SCHEMA), encoding="utf-8")
    return p
