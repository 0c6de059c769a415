ERRORS = {
  "E_PROFILE_MISSING": "Profile file or entry missing",
  "E_SCHEMA_INVALID": "Record schema invalid",
  "E_HEX_MALFORMED": "Value is not a well-formed hex payload",
  "E_LENGTH_MISMATCH": "Payload length does not match record size",
  "E_CHECKSUM_MISMATCH": "Payload checksum does not match data",
  "E_LAYOUT_MISMATCH": "Payload does not fit record layout",
}

STATUS_VERIFIED = "VERIFIED"
