"""Private profile struct protocol constants.

Single source of truth for the wire format written by WritePrivateProfileStructA.
Keep this file stable. Writers and readers must remain synchronized.
"""

# Scalars are stored little-endian, exactly as the native struct sits in memory.
BYTE_ORDER = "<"

# Scalar name -> (struct format char, size in bytes). Alignment equals size.
SCALAR_FORMATS = {
    "int8": ("b", 1),
    "uint8": ("B", 1),
    "int16": ("h", 2),
    "uint16": ("H", 2),
    "int32": ("i", 4),
    "uint32": ("I", 4),
    "int64": ("q", 8),
    "uint64": ("Q", 8),
    "float32": ("f", 4),
    "float64": ("d", 8),
    "bool": ("?", 1),
}

# Checksum: additive, one trailing byte
CHECKSUM_LEN = 1
CHECKSUM_MASK = 0xFF

# A payload carries at least one data byte plus the checksum byte.
MIN_PAYLOAD_BYTES = 2

HEX_PREFIXES = ("0x", "0X")
HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
