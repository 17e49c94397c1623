"""Pydantic models for the persisted profile mapping.

Field names follow the camelCase wire format shared with other clients of the
same state, e.g. ``{"type": "sso", "ssoRegion": ..., "metadata": {...}}``.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Discriminator, Tag, TypeAdapter
from pydantic.alias_generators import to_camel

from authprofiles.domain.model import ConnectionState, ProfileSource  # noqa: TC001


class RecordModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class MetadataRecord(RecordModel):
    label: str | None = None
    connection_state: ConnectionState = ConnectionState.UNAUTHENTICATED
    source: ProfileSource | None = None


class SsoRecord(RecordModel):
    type: Literal["sso"] = "sso"
    sso_region: str
    start_url: str
    scopes: list[str] | None = None
    metadata: MetadataRecord


class LinkedIamRecord(RecordModel):
    type: Literal["iam"] = "iam"
    subtype: Literal["linked"] = "linked"
    name: str
    sso_session: str
    sso_role_name: str
    sso_account_id: str
    metadata: MetadataRecord


class UnknownIamRecord(RecordModel):
    type: Literal["iam"] = "iam"
    subtype: Literal["unknown"] = "unknown"
    name: str
    metadata: MetadataRecord


def _record_tag(value: object) -> str | None:
    if isinstance(value, dict):
        kind, subtype = value.get("type"), value.get("subtype")
    else:
        kind, subtype = getattr(value, "type", None), getattr(value, "subtype", None)
    if kind == "iam":
        return f"iam/{subtype}"
    return kind if isinstance(kind, str) else None


ProfileRecord = Annotated[
    Annotated[SsoRecord, Tag("sso")]
    | Annotated[LinkedIamRecord, Tag("iam/linked")]
    | Annotated[UnknownIamRecord, Tag("iam/unknown")],
    Discriminator(_record_tag),
]

PROFILE_RECORD_ADAPTER: TypeAdapter[SsoRecord | LinkedIamRecord | UnknownIamRecord] = TypeAdapter(
    ProfileRecord
)
