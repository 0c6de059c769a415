"""PPS Profile - INI profile store for struct payloads."""
from .store import get_profile_string, iter_entries, load_profile, write_profile_string

__all__ = ["get_profile_string", "write_profile_string", "iter_entries", "load_profile"]
