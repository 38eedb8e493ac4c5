"""Typed key/value preference storage."""

from pathops.preferences.store import PreferenceStore, PreferenceStoreError, PreferenceTypeError

__all__ = [
    "PreferenceStore",
    "PreferenceStoreError",
    "PreferenceTypeError",
]
