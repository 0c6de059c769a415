"""INI profile file store.

Section and key lookups are case-insensitive like the Windows profile API, but
the spelling written first is kept. ``[DEFAULT]`` is an ordinary section.
Writes touch only the ``Key=VALUE`` line being set; comments, blank lines and
every other entry keep their exact bytes.
"""
from __future__ import annotations

import configparser
import re
from pathlib import Path
from typing import Iterator

# No real section can be named with a NUL, so nothing is treated as defaults.
_NO_DEFAULT_SECTION = "\x00"

_SECTION_RE = re.compile(r"\s*\[(?P<name>[^\]]*)\]")
_KEY_RE = re.compile(r"(?P<key>[^=;#\s\[][^=]*?)\s*=")


def _new_parser() -> configparser.ConfigParser:
    parser = configparser.ConfigParser(
        interpolation=None,
        strict=False,
        delimiters=("=",),
        default_section=_NO_DEFAULT_SECTION,
    )
    parser.optionxform = str  # keep key spelling
    return parser


def load_profile(path: Path) -> configparser.ConfigParser:
    parser = _new_parser()
    path = Path(path)
    if path.exists():
        with open(path, "r", encoding="utf-8") as f:
            parser.read_file(f, source=str(path))
    return parser


def _find(names, wanted: str) -> str | None:
    wanted = wanted.lower()
    for name in names:
        if name.lower() == wanted:
            return name
    return None


def get_profile_string(section: str, key: str, path: Path) -> str | None:
    """Raw value of ``[section] key`` or ``None`` when absent."""
    parser = load_profile(path)
    sec = _find(parser.sections(), section)
    if sec is None:
        return None
    opt = _find(parser.options(sec), key)
    if opt is None:
        return None
    return parser.get(sec, opt)


def _set_line(lines: list[str], section: str, key: str, value: str, newline: str) -> list[str]:
    sec_wanted, key_wanted = section.lower(), key.lower()

    current = None
    in_first = False
    insert_at = None  # just past the last entry of the first matching section
    key_at = None
    for i, line in enumerate(lines):
        m = _SECTION_RE.match(line)
        if m:
            current = m.group("name").strip().lower()
            in_first = current == sec_wanted and insert_at is None
            if in_first:
                insert_at = i + 1
            continue
        if current != sec_wanted:
            continue
        if in_first and line.strip() and not line.lstrip().startswith((";", "#")):
            insert_at = i + 1
        k = _KEY_RE.match(line)
        if k and k.group("key").strip().lower() == key_wanted:
            # Readers keep the last duplicate, so that is the one replaced.
            key_at = i

    out = list(lines)
    if key_at is not None:
        old = out[key_at]
        ending = old[len(old.rstrip("\r\n")):]
        end = key_at + 1
        # Indented lines after a key are continuations of its old value.
        while end < len(out) and out[end][:1] in (" ", "\t") and out[end].strip():
            end += 1
        out[key_at:end] = [f"{_KEY_RE.match(old).group('key').strip()}={value}{ending}"]
        return out

    if insert_at is not None:
        if not out[insert_at - 1].endswith(("\n", "\r")):
            out[insert_at - 1] += newline
        out.insert(insert_at, f"{key}={value}{newline}")
        return out

    if out and not out[-1].endswith(("\n", "\r")):
        out[-1] += newline
    if out and out[-1].strip():
        out.append(newline)
    return out + [f"[{section}]{newline}", f"{key}={value}{newline}"]


def write_profile_string(section: str, key: str, value: str, path: Path) -> bool:
    """Create or replace ``[section] key=value``, leaving every other line untouched."""
    path = Path(path)
    text = ""
    if path.exists():
        with open(path, "r", encoding="utf-8", newline="") as f:
            text = f.read()
    newline = "\r\n" if "\r\n" in text else "\n"

    lines = _set_line(text.splitlines(keepends=True), section, key, value, newline)

    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write("".join(lines))
    return True


def iter_entries(path: Path) -> Iterator[tuple[str, str, str]]:
    """Yield ``(section, key, value)`` for every entry in file order."""
    parser = load_profile(path)
    for sec in parser.sections():
        for opt in parser.options(sec):
            yield sec, opt, parser.get(sec, opt)
