"""Public domain model surface."""

from __future__ import annotations

from authprofiles.domain.model.connection import (
    AwsCredentials,
    ClientRegistration,
    Connection,
    IamConnection,
    ScopeTarget,
    SsoConnection,
    SsoToken,
    StatefulConnection,
    auth_type_for_connection,
    has_exact_scopes,
    has_scopes,
    is_any_sso_connection,
    is_builder_id_connection,
    is_iam_connection,
    is_idc_sso_connection,
    is_sso_connection,
    is_valid_codecatalyst_connection,
    telemetry_metadata_for_connection,
)
from authprofiles.domain.model.enums import (
    AuthType,
    ConnectionState,
    CredentialSourceId,
    IamSubtype,
    ProfileSource,
    ProfileType,
    SsoKind,
)
from authprofiles.domain.model.profiles import (
    LINKED_PROFILE_PREFIX,
    IamProfile,
    LinkedIamProfile,
    Profile,
    ProfileMetadata,
    SsoProfile,
    StoredProfile,
    UnknownIamProfile,
    create_builder_id_profile,
    create_sso_profile,
    describe_profile,
    linked_profile_id,
    linked_profile_name,
    merge_profile,
    truncate_start_url,
)
from authprofiles.domain.model.scopes import (
    BUILDER_ID_START_URL,
    DEFAULT_SSO_REGION,
    SCOPES_CODECATALYST,
    SCOPES_CODEWHISPERER_CHAT,
    SCOPES_CODEWHISPERER_CORE,
    SCOPES_FEATURE_DEV,
    SCOPES_GUMBY,
    SCOPES_SSO_ACCOUNT_ACCESS,
)

__all__ = [  # noqa: RUF022
    # profiles
    "Profile",
    "IamProfile",
    "SsoProfile",
    "LinkedIamProfile",
    "UnknownIamProfile",
    "ProfileMetadata",
    "StoredProfile",
    "LINKED_PROFILE_PREFIX",
    "linked_profile_id",
    "linked_profile_name",
    "merge_profile",
    "describe_profile",
    "truncate_start_url",
    "create_sso_profile",
    "create_builder_id_profile",
    # connections
    "Connection",
    "IamConnection",
    "SsoConnection",
    "StatefulConnection",
    "AwsCredentials",
    "SsoToken",
    "ClientRegistration",
    "ScopeTarget",
    "is_iam_connection",
    "is_sso_connection",
    "is_any_sso_connection",
    "is_idc_sso_connection",
    "is_builder_id_connection",
    "is_valid_codecatalyst_connection",
    "has_scopes",
    "has_exact_scopes",
    "auth_type_for_connection",
    "telemetry_metadata_for_connection",
    # enums
    "AuthType",
    "ConnectionState",
    "CredentialSourceId",
    "IamSubtype",
    "ProfileSource",
    "ProfileType",
    "SsoKind",
    # scopes
    "BUILDER_ID_START_URL",
    "DEFAULT_SSO_REGION",
    "SCOPES_CODECATALYST",
    "SCOPES_CODEWHISPERER_CHAT",
    "SCOPES_CODEWHISPERER_CORE",
    "SCOPES_FEATURE_DEV",
    "SCOPES_GUMBY",
    "SCOPES_SSO_ACCOUNT_ACCESS",
]
