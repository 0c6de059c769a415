import json
from pathlib import Path

import click

from pps_core import load_record
from .logic import ProfileScanner, verify_payload
from .report import write_scan_report

CANONICAL_JSON_KW = {"sort_keys": True, "separators": (",", ":"), "ensure_ascii": False}


def _descriptor(schema, record):
    if schema is None and record is None:
        return None
    if schema is None or record is None:
        raise click.UsageError("--schema and --record must be given together")
    try:
        return load_record(schema, record)
    except ValueError as e:
        click.echo(f"FATAL: {e}")
        raise SystemExit(1)


@click.group()
def main():
    pass

@main.command("check")
@click.argument("hex_text")
@click.option("--schema", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--record")
def check_cmd(hex_text: str, schema: Path | None, record: str | None):
    result = verify_payload(hex_text, _descriptor(schema, record))
    click.echo(json.dumps(result, **CANONICAL_JSON_KW))
    if result["status"] != "PASS":
        raise SystemExit(1)

@main.command("scan")
@click.argument("ini", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--schema", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--record")
@click.option("--section", "sections", multiple=True, help="Only scan these sections (repeatable)")
@click.option("--report", "report_dir", type=click.Path(file_okay=False, path_type=Path),
              help="Write evidence/profile_scan.parquet under this directory")
def scan_cmd(ini: Path, schema, record, sections, report_dir):
    descriptor = _descriptor(schema, record)
    try:
        scanner = ProfileScanner(ini, descriptor, list(sections) or None)
    except (ValueError, OSError) as e:
        click.echo(f"FATAL: {e}")
        raise SystemExit(1)

    if report_dir is not None:
        write_scan_report(scanner.rows, report_dir)

    summary = {"stats": scanner.get_scan_stats(), "failed": [
        {"section": r["section"], "key": r["key"], "status": r["status"], "detail": r["detail"]}
        for r in scanner.failed
    ]}
    click.echo(json.dumps(summary, **CANONICAL_JSON_KW))
    if scanner.failed:
        raise SystemExit(1)

if __name__ == "__main__":
    main()
