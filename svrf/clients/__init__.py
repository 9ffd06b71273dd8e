"""Expose constructed client wrappers."""

from .keychain import SQLiteKeyChain
from .svrf_api import SvrfApiClient

__all__ = ["SQLiteKeyChain", "SvrfApiClient"]
