"""Port for structured audit events emitted on profile state changes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol, runtime_checkable


class AuditResult(StrEnum):
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"


class AuditAction(StrEnum):
    GET_PROFILE = "getProfile"
    ADD_PROFILE = "addProfile"
    UPDATE_PROFILE = "updateProfile"
    DELETE_PROFILE = "deleteProfile"


@dataclass(frozen=True, slots=True, kw_only=True)
class AuditEvent:
    action: AuditAction
    id: str
    result: AuditResult
    reason: str | None = None
    reason_desc: str | None = None
    source: str | None = None
    """Logical call site that triggered the event."""
    connection_state: str | None = None
    auth_scopes: str | None = None
    credential_start_url: str | None = None
    aws_region: str | None = None


@runtime_checkable
class AuditSink(Protocol):
    def emit(self, event: AuditEvent) -> None: ...
