"""Runtime connection view and classification predicates.

A *profile* is stateless configuration describing how to get credentials; a
*connection* is a live entity that can produce credentials (IAM) or bearer
tokens (SSO) for a specific target. Connections are never persisted.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, Protocol, TypeGuard, assert_never, runtime_checkable

from .enums import AuthType, ConnectionState, CredentialSourceId, ProfileType, SsoKind
from .profiles import SsoProfile, StoredProfile
from .scopes import BUILDER_ID_START_URL, SCOPES_CODECATALYST

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(frozen=True, slots=True)
class AwsCredentials:
    access_key_id: str
    secret_access_key: str = ""
    session_token: str | None = None
    expiration: datetime | None = None


@dataclass(frozen=True, slots=True)
class SsoToken:
    access_token: str
    expires_at: datetime


@dataclass(frozen=True, slots=True)
class ClientRegistration:
    client_id: str
    expires_at: datetime


@runtime_checkable
class IamConnection(Protocol):
    # Currently equivalent to a serialized credentials provider id.
    @property
    def type(self) -> Literal[ProfileType.IAM]: ...

    @property
    def id(self) -> str: ...

    @property
    def label(self) -> str: ...

    async def get_credentials(self) -> AwsCredentials: ...


@runtime_checkable
class SsoConnection(Protocol):
    @property
    def type(self) -> Literal[ProfileType.SSO]: ...

    @property
    def id(self) -> str: ...

    @property
    def label(self) -> str: ...

    @property
    def sso_region(self) -> str: ...

    @property
    def start_url(self) -> str: ...

    @property
    def scopes(self) -> tuple[str, ...] | None: ...

    async def get_token(self) -> SsoToken:
        """Retrieve a bearer token, refreshing or re-authenticating as needed.

        Call this for each new API request. Handling a token the service rejects
        is up to the caller.
        """
        ...

    async def get_registration(self) -> ClientRegistration | None: ...


Connection = IamConnection | SsoConnection


@dataclass(frozen=True, slots=True)
class StatefulConnection:
    """A connection paired with its live state.

    The true state can only be known after trying to use the connection, which is
    why it lives beside the connection rather than on it.
    """

    connection: Connection
    state: ConnectionState

    @property
    def id(self) -> str:
        return self.connection.id

    @property
    def label(self) -> str:
        return self.connection.label

    @property
    def type(self) -> ProfileType:
        return self.connection.type


def is_iam_connection(conn: Connection | None) -> TypeGuard[IamConnection]:
    return conn is not None and conn.type == ProfileType.IAM


def is_sso_connection(
    conn: Connection | None,
    kind: SsoKind = SsoKind.ANY,
) -> TypeGuard[SsoConnection]:
    if conn is None or conn.type != ProfileType.SSO:
        return False
    builder_id = getattr(conn, "start_url", None) == BUILDER_ID_START_URL
    match kind:
        case SsoKind.ANY:
            return True
        case SsoKind.BUILDER_ID:
            return builder_id
        case SsoKind.IDC:
            # Identity Center has no positive marker of its own: it is whatever
            # SSO connection is not one of the other kinds.
            return not builder_id
        case _:
            assert_never(kind)


def is_any_sso_connection(conn: Connection | None) -> TypeGuard[SsoConnection]:
    return is_sso_connection(conn, SsoKind.ANY)


def is_idc_sso_connection(conn: Connection | None) -> TypeGuard[SsoConnection]:
    return is_sso_connection(conn, SsoKind.IDC)


def is_builder_id_connection(conn: Connection | None) -> TypeGuard[SsoConnection]:
    return is_sso_connection(conn, SsoKind.BUILDER_ID)


ScopeTarget = Sequence[str] | SsoProfile | StoredProfile | SsoConnection


def _target_scopes(target: ScopeTarget) -> Sequence[str]:
    if isinstance(target, str):
        raise TypeError("Expected a sequence of scopes, not a single string")
    if isinstance(target, StoredProfile):
        target = target.profile
        if not isinstance(target, SsoProfile):
            return ()
    if isinstance(target, Sequence):
        return target
    return target.scopes or ()


def has_scopes(target: ScopeTarget, scopes: Sequence[str]) -> bool:
    """Whether every scope in ``scopes`` is present on ``target``."""

    target_scopes = _target_scopes(target)
    return all(scope in target_scopes for scope in scopes)


def has_exact_scopes(target: ScopeTarget, scopes: Sequence[str]) -> bool:
    """Stricter :func:`has_scopes`: ``target`` must hold all and only ``scopes``."""

    target_scopes = _target_scopes(target)
    return len(scopes) == len(target_scopes) and all(scope in target_scopes for scope in scopes)


def is_valid_codecatalyst_connection(conn: Connection | None) -> TypeGuard[SsoConnection]:
    return is_sso_connection(conn) and has_scopes(conn, SCOPES_CODECATALYST)


def auth_type_for_connection(conn: Connection | None) -> AuthType:
    if is_builder_id_connection(conn):
        return AuthType.BUILDER_ID
    if is_idc_sso_connection(conn):
        return AuthType.IDENTITY_CENTER
    if is_iam_connection(conn):
        return AuthType.CREDENTIALS
    return AuthType.UNKNOWN


async def telemetry_metadata_for_connection(conn: Connection | None) -> dict[str, str | None]:
    """Audit fields describing ``conn``."""

    if conn is None:
        return {"id": "undefined"}

    if is_sso_connection(conn):
        registration = await conn.get_registration()
        return {
            "auth_type": auth_type_for_connection(conn),
            "auth_scopes": ",".join(conn.scopes) if conn.scopes is not None else None,
            "credential_source_id": CredentialSourceId.AWS_ID
            if is_builder_id_connection(conn)
            else CredentialSourceId.IAM_IDENTITY_CENTER,
            "credential_start_url": conn.start_url,
            "aws_region": conn.sso_region,
            "sso_registration_expires_at": registration.expires_at.isoformat()
            if registration
            else None,
            "sso_registration_client_id": registration.client_id if registration else None,
        }
    if is_iam_connection(conn):
        return {
            "auth_type": auth_type_for_connection(conn),
            "credential_source_id": CredentialSourceId.SHARED_CREDENTIALS,
        }

    raise TypeError(f"Unknown connection type: {conn.type!r}")
