"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class ProfileType(StrEnum):
    SSO = "sso"
    IAM = "iam"


class IamSubtype(StrEnum):
    LINKED = "linked"
    UNKNOWN = "unknown"


class ConnectionState(StrEnum):
    """Last known state of a connection.

    * ``unauthenticated`` -> try to login
    * ``valid`` -> ``invalid`` -> notify that the credentials are invalid, prompt to login again
    * ``invalid`` -> ``invalid`` -> fail immediately so the user is not prompted repeatedly
    """

    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATING = "authenticating"
    VALID = "valid"
    INVALID = "invalid"


class ProfileSource(StrEnum):
    """Product surface where a profile was first created."""

    AMAZONQ = "amazonq"
    TOOLKIT = "toolkit"


class SsoKind(StrEnum):
    ANY = "any"
    IDC = "idc"
    BUILDER_ID = "builderId"


class AuthType(StrEnum):
    CREDENTIALS = "credentials"
    BUILDER_ID = "builderId"
    IDENTITY_CENTER = "identityCenter"
    UNKNOWN = "unknown"


class CredentialSourceId(StrEnum):
    AWS_ID = "awsId"
    IAM_IDENTITY_CENTER = "iamIdentityCenter"
    SHARED_CREDENTIALS = "sharedCredentials"
