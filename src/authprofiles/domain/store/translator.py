"""Translate between persisted records and domain profiles."""

from __future__ import annotations

from typing import TYPE_CHECKING, assert_never

from authprofiles.domain.model import (
    LinkedIamProfile,
    ProfileMetadata,
    SsoProfile,
    StoredProfile,
    UnknownIamProfile,
)

from .schema import (
    PROFILE_RECORD_ADAPTER,
    LinkedIamRecord,
    MetadataRecord,
    SsoRecord,
    UnknownIamRecord,
)

if TYPE_CHECKING:
    from authprofiles.domain.ports.persistence import JsonValue


def decode_stored_profile(raw: JsonValue) -> StoredProfile:
    """Validate one persisted entry; raises ``pydantic.ValidationError`` when malformed."""

    record = PROFILE_RECORD_ADAPTER.validate_python(raw)
    metadata = ProfileMetadata(
        label=record.metadata.label,
        connection_state=record.metadata.connection_state,
        source=record.metadata.source,
    )
    match record:
        case SsoRecord():
            profile = SsoProfile(
                sso_region=record.sso_region,
                start_url=record.start_url,
                scopes=tuple(record.scopes) if record.scopes is not None else None,
            )
        case LinkedIamRecord():
            profile = LinkedIamProfile(
                name=record.name,
                sso_session=record.sso_session,
                sso_role_name=record.sso_role_name,
                sso_account_id=record.sso_account_id,
            )
        case UnknownIamRecord():
            profile = UnknownIamProfile(name=record.name)
        case _:
            assert_never(record)
    return StoredProfile(profile=profile, metadata=metadata)


def encode_stored_profile(stored: StoredProfile) -> JsonValue:
    metadata = MetadataRecord(
        label=stored.metadata.label,
        connection_state=stored.metadata.connection_state,
        source=stored.metadata.source,
    )
    profile = stored.profile
    match profile:
        case SsoProfile():
            record = SsoRecord(
                sso_region=profile.sso_region,
                start_url=profile.start_url,
                scopes=list(profile.scopes) if profile.scopes is not None else None,
                metadata=metadata,
            )
        case LinkedIamProfile():
            record = LinkedIamRecord(
                name=profile.name,
                sso_session=profile.sso_session,
                sso_role_name=profile.sso_role_name,
                sso_account_id=profile.sso_account_id,
                metadata=metadata,
            )
        case UnknownIamProfile():
            record = UnknownIamRecord(name=profile.name, metadata=metadata)
        case _:
            assert_never(profile)
    return PROFILE_RECORD_ADAPTER.dump_python(
        record,
        mode="json",
        by_alias=True,
        exclude_none=True,
    )
