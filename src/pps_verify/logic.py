from __future__ import annotations

import configparser
from pathlib import Path
from warnings import warn

from pps_core import (
    ChecksumMismatch,
    LayoutMismatch,
    LengthMismatch,
    MalformedHex,
    ProfileStructError,
    TypeDescriptor,
    checksum,
    decode,
    from_hex,
    verify,
)
from pps_profile.store import iter_entries
from .const import ERRORS, STATUS_VERIFIED

_CODES = {
    MalformedHex: "E_HEX_MALFORMED",
    LengthMismatch: "E_LENGTH_MISMATCH",
    ChecksumMismatch: "E_CHECKSUM_MISMATCH",
    LayoutMismatch: "E_LAYOUT_MISMATCH",
}

_STAT_KEYS = {
    "E_HEX_MALFORMED": "malformed",
    "E_LENGTH_MISMATCH": "length_mismatch",
    "E_CHECKSUM_MISMATCH": "checksum_mismatch",
    "E_LAYOUT_MISMATCH": "layout_mismatch",
}


def _error(exc: ProfileStructError) -> dict:
    code = _CODES.get(type(exc), "E_LAYOUT_MISMATCH")
    err = {"code": code, "message": ERRORS[code], "detail": str(exc)}
    if isinstance(exc, MalformedHex) and exc.position is not None:
        err["position"] = exc.position
    if isinstance(exc, (LengthMismatch, ChecksumMismatch)):
        err["expected"] = exc.expected
        err["actual"] = exc.actual
    return err


def verify_payload(hex_text: str, descriptor: TypeDescriptor | None = None) -> dict:
    """Validate one payload; with a descriptor it must also decode as that record."""
    try:
        payload = from_hex(hex_text)
        if descriptor is not None:
            record = decode(hex_text, descriptor)
        else:
            data, stored = payload[:-1], payload[-1]
            if not verify(data, stored):
                raise ChecksumMismatch(checksum(data), stored)
    except ProfileStructError as e:
        errors = [_error(e)]
        return {"status": "FAIL", "error_count": len(errors), "errors": errors}

    result = {
        "status": "PASS",
        "error_count": 0,
        "errors": [],
        "data_length": len(payload) - 1,
        "checksum": payload[-1],
    }
    if descriptor is not None:
        result["record"] = record
    return result


class ProfileScanner:
    """Validate every entry of a profile file.

    - Without a descriptor, entries are checked for hex form and checksum only.
    - With a descriptor, payloads must also match the record size and decode.
    - ``sections`` restricts the scan; other sections are skipped silently.
    """

    def __init__(
        self,
        profile_path: Path,
        descriptor: TypeDescriptor | None = None,
        sections: list[str] | None = None,
    ):
        self.profile_path = Path(profile_path)
        self.descriptor = descriptor
        self.sections = {s.lower() for s in sections} if sections else None
        self.rows: list[dict] = []
        self.scan_stats = {
            "entries": 0,
            "verified": 0,
            "malformed": 0,
            "length_mismatch": 0,
            "checksum_mismatch": 0,
            "layout_mismatch": 0,
        }

        self._scan()

    def _scan(self) -> None:
        if not self.profile_path.exists():
            raise FileNotFoundError(f"{ERRORS['E_PROFILE_MISSING']}: {self.profile_path}")

        try:
            entries = list(iter_entries(self.profile_path))
        except configparser.Error as e:
            raise ValueError(f"FATAL: Unreadable profile {self.profile_path}: {e}") from e

        for section, key, value in entries:
            if self.sections is not None and section.lower() not in self.sections:
                continue
            self.scan_stats["entries"] += 1

            result = verify_payload(value, self.descriptor)
            row = {
                "section": section,
                "key": key,
                "value": value,
                "status": STATUS_VERIFIED,
                "data_length": result.get("data_length"),
                "checksum": result.get("checksum"),
                "detail": None,
            }

            if result["status"] == "PASS":
                self.scan_stats["verified"] += 1
            else:
                err = result["errors"][0]
                row["status"] = err["code"]
                row["detail"] = err["detail"]
                self.scan_stats[_STAT_KEYS[err["code"]]] += 1
                if err["code"] == "E_HEX_MALFORMED":
                    warn(f"[{section}] {key} is not a struct payload: {err['detail']}")

            self.rows.append(row)

    def get_scan_stats(self) -> dict:
        return dict(self.scan_stats)

    @property
    def failed(self) -> list[dict]:
        return [r for r in self.rows if r["status"] != STATUS_VERIFIED]
