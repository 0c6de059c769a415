"""PPS Profile - write and read structs in INI profile files."""
from __future__ import annotations

import json
from pathlib import Path

import click

from pps_core import (
    decode,
    encode,
    iter_layout,
    load_record,
    padding,
    read_record,
    write_record,
)
from pps_profile.store import get_profile_string, write_profile_string

# Field order is part of the record, so keys are never sorted.
JSON_OUT_KW = {"separators": (",", ":"), "ensure_ascii": False}

schema_option = click.option(
    "--schema", "schema_path", required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON schema describing the record types",
)
record_option = click.option("--record", required=True, help="Record name inside the schema")


def _fail(reason: str) -> None:
    # Fail closed with a single-line reason.
    click.echo(f"FATAL: {reason}")
    raise SystemExit(1)


@click.group()
def main():
    pass


@main.command("layout")
@schema_option
@record_option
def layout_cmd(schema_path: Path, record: str):
    """Print leaf offsets and padding gaps of a record."""
    try:
        d = load_record(schema_path, record)
    except (ValueError, OSError) as e:
        _fail(str(e))
    click.echo(f"{record}: size={d.size} alignment={d.alignment}")
    for name, offset, kind in iter_layout(d):
        click.echo(f"  {offset:>4}  {kind.value:<8} {name}")
    for start, length in padding(d):
        click.echo(f"  {start:>4}  pad[{length}]")


@main.command("encode")
@schema_option
@record_option
@click.argument("value")
def encode_cmd(schema_path: Path, record: str, value: str):
    """Encode a JSON record VALUE to profile hex."""
    try:
        click.echo(encode(json.loads(value), load_record(schema_path, record)))
    except (ValueError, OSError) as e:
        _fail(str(e))


@main.command("decode")
@schema_option
@record_option
@click.argument("hex_text")
def decode_cmd(schema_path: Path, record: str, hex_text: str):
    """Decode profile hex into a JSON record."""
    try:
        click.echo(json.dumps(decode(hex_text, load_record(schema_path, record)), **JSON_OUT_KW))
    except (ValueError, OSError) as e:
        _fail(str(e))


@main.command("write")
@click.argument("ini", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("section")
@click.argument("key")
@click.argument("value")
@schema_option
@record_option
def write_cmd(ini: Path, section: str, key: str, value: str, schema_path: Path, record: str):
    """Write a JSON record VALUE to [SECTION] KEY of an INI file."""
    try:
        d = load_record(schema_path, record)
        parsed = json.loads(value)
    except (ValueError, OSError) as e:
        _fail(str(e))
    if not write_record(section, key, parsed, d, write_profile_string, ini):
        _fail(f"could not write [{section}] {key} to {ini}")
    click.echo(f"PASS: [{section}] {key} written to {ini}")


@main.command("read")
@click.argument("ini", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("section")
@click.argument("key")
@schema_option
@record_option
def read_cmd(ini: Path, section: str, key: str, schema_path: Path, record: str):
    """Read [SECTION] KEY of an INI file as a JSON record."""
    try:
        d = load_record(schema_path, record)
    except (ValueError, OSError) as e:
        _fail(str(e))
    ok, value = read_record(section, key, d, get_profile_string, ini)
    if not ok:
        _fail(f"could not read [{section}] {key} from {ini}")
    click.echo(json.dumps(value, **JSON_OUT_KW))


if __name__ == "__main__":
    main()
