"""PPS Verify - payload validation and profile file scanning."""
from .logic import ProfileScanner, verify_payload

__all__ = ["ProfileScanner", "verify_payload"]
