"""Stored profile shapes.

A profile is a stateless description of how to obtain credentials. Three
variants exist:

* :class:`SsoProfile` - an identity (IAM Identity Center or Builder ID) without
  embedded credentials.
* :class:`LinkedIamProfile` - a role discovered through an SSO profile. These are
  created and removed exclusively by reconciliation.
* :class:`UnknownIamProfile` - a static credential profile managed outside of
  this package (shared credentials file, environment, ...).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, fields, replace
from typing import ClassVar, Final, assert_never

from .enums import ConnectionState, IamSubtype, ProfileSource, ProfileType
from .scopes import BUILDER_ID_START_URL, DEFAULT_SSO_REGION, SCOPES_SSO_ACCOUNT_ACCESS

LINKED_PROFILE_PREFIX: Final[str] = "sso:"

_START_URL_PATTERN = re.compile(r"https?://(.*)\.awsapps\.com/start")


@dataclass(frozen=True, slots=True, kw_only=True)
class SsoProfile:
    TYPE: ClassVar[ProfileType] = ProfileType.SSO

    sso_region: str
    start_url: str
    scopes: tuple[str, ...] | None = None

    @property
    def type(self) -> ProfileType:
        return self.TYPE


@dataclass(frozen=True, slots=True, kw_only=True)
class LinkedIamProfile:
    TYPE: ClassVar[ProfileType] = ProfileType.IAM
    SUBTYPE: ClassVar[IamSubtype] = IamSubtype.LINKED

    name: str
    sso_session: str
    sso_role_name: str
    sso_account_id: str

    @property
    def type(self) -> ProfileType:
        return self.TYPE

    @property
    def subtype(self) -> IamSubtype:
        return self.SUBTYPE


@dataclass(frozen=True, slots=True, kw_only=True)
class UnknownIamProfile:
    TYPE: ClassVar[ProfileType] = ProfileType.IAM
    SUBTYPE: ClassVar[IamSubtype] = IamSubtype.UNKNOWN

    name: str

    @property
    def type(self) -> ProfileType:
        return self.TYPE

    @property
    def subtype(self) -> IamSubtype:
        return self.SUBTYPE


IamProfile = LinkedIamProfile | UnknownIamProfile
Profile = SsoProfile | LinkedIamProfile | UnknownIamProfile


@dataclass(frozen=True, slots=True, kw_only=True)
class ProfileMetadata:
    label: str | None = None
    """Used for anything UI related when present."""
    connection_state: ConnectionState = ConnectionState.UNAUTHENTICATED
    source: ProfileSource | None = None


@dataclass(frozen=True, slots=True)
class StoredProfile:
    """A profile as persisted by the profile store, paired with its metadata."""

    profile: Profile
    metadata: ProfileMetadata

    @property
    def type(self) -> ProfileType:
        return self.profile.type

    @property
    def connection_state(self) -> ConnectionState:
        return self.metadata.connection_state

    def with_metadata(
        self,
        *,
        label: str | None = None,
        connection_state: ConnectionState | None = None,
        source: ProfileSource | None = None,
    ) -> StoredProfile:
        """Return a copy where the given (non-``None``) metadata fields are replaced."""

        changes = {
            name: value
            for name, value in (
                ("label", label),
                ("connection_state", connection_state),
                ("source", source),
            )
            if value is not None
        }
        return replace(self, metadata=replace(self.metadata, **changes))


def linked_profile_name(role_name: str, account_id: str) -> str:
    return f"{role_name}-{account_id}"


def linked_profile_id(sso_session: str, role_name: str, account_id: str) -> str:
    """Deterministic id of the linked profile for a (session, role, account) triple."""

    return f"{LINKED_PROFILE_PREFIX}{sso_session}#{linked_profile_name(role_name, account_id)}"


def merge_profile(current: Profile, update: Profile) -> Profile:
    """Overlay ``update`` on ``current``.

    Fields left as ``None`` on ``update`` keep the value of ``current`` when both
    are the same variant; a different variant replaces the body outright.
    """

    if type(current) is not type(update):
        return update
    changes = {
        item.name: getattr(update, item.name)
        for item in fields(update)
        if getattr(update, item.name) is not None
    }
    return replace(current, **changes)


def describe_profile(profile: Profile) -> str:
    match profile:
        case SsoProfile():
            return f"sso ({truncate_start_url(profile.start_url)}, {profile.sso_region})"
        case LinkedIamProfile():
            return f"iam/linked ({profile.sso_role_name} in {profile.sso_account_id})"
        case UnknownIamProfile():
            return f"iam/unknown ({profile.name})"
        case _:
            assert_never(profile)


def truncate_start_url(start_url: str) -> str:
    """Return the directory name of an ``awsapps.com`` start url, or the url itself."""

    found = _START_URL_PATTERN.match(start_url)
    return found.group(1) if found else start_url


def create_sso_profile(
    start_url: str,
    region: str = DEFAULT_SSO_REGION,
    scopes: tuple[str, ...] = SCOPES_SSO_ACCOUNT_ACCESS,
) -> SsoProfile:
    return SsoProfile(sso_region=region, start_url=start_url, scopes=tuple(scopes))


def create_builder_id_profile(scopes: tuple[str, ...] = SCOPES_SSO_ACCOUNT_ACCESS) -> SsoProfile:
    return create_sso_profile(BUILDER_ID_START_URL, DEFAULT_SSO_REGION, scopes)
