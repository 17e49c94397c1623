"""Profile store contract violations."""

from __future__ import annotations


class ProfileStoreError(Exception):
    """Base class for misuse of the profile store."""


class ProfileNotFoundError(ProfileStoreError, LookupError):
    def __init__(self, profile_id: str) -> None:
        super().__init__(f"Profile does not exist: {profile_id}")
        self.profile_id = profile_id


class ProfileTypeMismatchError(ProfileStoreError, ValueError):
    def __init__(self, current: str, requested: str) -> None:
        super().__init__(f'Cannot change profile type from "{current}" to "{requested}"')
        self.current = current
        self.requested = requested
