"""Explicit audit spans bracketing profile store operations."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, assert_never

from authprofiles.domain.model import LinkedIamProfile, SsoProfile, UnknownIamProfile
from authprofiles.domain.ports.audit import AuditAction, AuditEvent, AuditResult

if TYPE_CHECKING:
    from collections.abc import Iterator

    from authprofiles.domain.model import StoredProfile
    from authprofiles.domain.ports.audit import AuditSink

_MAX_REASON_DESC = 200


def profile_audit_fields(stored: StoredProfile | None) -> dict[str, str | None]:
    """Audit fields describing a stored profile (empty when there is none)."""

    if stored is None:
        return {}
    fields: dict[str, str | None] = {"connection_state": stored.connection_state}
    profile = stored.profile
    match profile:
        case SsoProfile():
            fields["auth_scopes"] = ",".join(profile.scopes) if profile.scopes else None
            fields["credential_start_url"] = profile.start_url
            fields["aws_region"] = profile.sso_region
        case LinkedIamProfile() | UnknownIamProfile():
            pass
        case _:
            assert_never(profile)
    return fields


def failure_fields(error: BaseException) -> dict[str, str | None]:
    return {
        "reason": type(error).__name__,
        "reason_desc": str(error)[:_MAX_REASON_DESC] or None,
    }


@dataclass(slots=True)
class AuditSpan:
    action: AuditAction
    id: str
    source: str | None = None
    _fields: dict[str, str | None] = field(default_factory=dict)

    def record(self, fields: dict[str, str | None]) -> None:
        self._fields.update(fields)

    def build(self, result: AuditResult) -> AuditEvent:
        return AuditEvent(
            action=self.action,
            id=self.id,
            result=result,
            source=self.source,
            **self._fields,
        )


@contextmanager
def audit_span(
    sink: AuditSink,
    action: AuditAction,
    profile_id: str,
    *,
    source: str | None = None,
) -> Iterator[AuditSpan]:
    """Emit exactly one audit event for the enclosed operation.

    The event is ``Succeeded`` when the block exits normally and ``Failed`` (with
    the error class and message as reason) when it raises; the error propagates.
    """

    span = AuditSpan(action=action, id=profile_id, source=source)
    try:
        yield span
    except Exception as error:
        span.record(failure_fields(error))
        sink.emit(span.build(AuditResult.FAILED))
        raise
    sink.emit(span.build(AuditResult.SUCCEEDED))
