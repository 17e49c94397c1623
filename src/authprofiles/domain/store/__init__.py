"""Profile store: persisted profiles and the current-profile pointer."""

from __future__ import annotations

from .errors import ProfileNotFoundError, ProfileStoreError, ProfileTypeMismatchError
from .store import CURRENT_PROFILE_KEY, PROFILES_KEY, ProfileStore

__all__ = [
    "CURRENT_PROFILE_KEY",
    "PROFILES_KEY",
    "ProfileNotFoundError",
    "ProfileStore",
    "ProfileStoreError",
    "ProfileTypeMismatchError",
]
