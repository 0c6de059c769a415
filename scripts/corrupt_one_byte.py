import sys
from pathlib import Path

from pps_core import from_hex, to_hex
from pps_profile.store import get_profile_string, write_profile_string

def main():
    if len(sys.argv) != 4:
        print("Usage: corrupt_one_byte.py <file.ini> <section> <key>")
        raise SystemExit(2)

    p = Path(sys.argv[1])
    section, key = sys.argv[2], sys.argv[3]
    value = get_profile_string(section, key, p)
    if value is None:
        print(f"No entry [{section}] {key} in {p}")
        raise SystemExit(2)

    b = bytearray(from_hex(value))
    # Flip the low bit of the first data byte; the trailing checksum stays stale.
    b[0] ^= 0x01
    write_profile_string(section, key, to_hex(b), p)
    print(f"Corrupted 1 byte at offset 0 of [{section}] {key} in {p}")

if __name__ == "__main__":
    main()
