"""Durable CRUD over stored profiles."""

from __future__ import annotations

from dataclasses import replace
from logging import getLogger
from typing import TYPE_CHECKING, Final

from pydantic import ValidationError

from authprofiles.domain.audit import audit_span, failure_fields, profile_audit_fields
from authprofiles.domain.model import ConnectionState, ProfileMetadata, StoredProfile, merge_profile
from authprofiles.domain.ports.audit import AuditAction, AuditEvent, AuditResult

from .errors import ProfileNotFoundError, ProfileTypeMismatchError
from .translator import decode_stored_profile, encode_stored_profile

if TYPE_CHECKING:
    from authprofiles.domain.model import Profile, ProfileSource
    from authprofiles.domain.ports.audit import AuditSink
    from authprofiles.domain.ports.persistence import JsonValue, Memento

log = getLogger(__name__)

PROFILES_KEY: Final[str] = "auth.profiles"
CURRENT_PROFILE_KEY: Final[str] = "auth.currentProfileId"


class ProfileStore:
    """Persists profiles keyed by id, plus a pointer to the current profile.

    Every mutation reads the whole mapping from the memento, applies the change
    and writes the whole mapping back. The store does no locking of its own:
    callers must not interleave mutations on the same instance.
    """

    def __init__(self, memento: Memento, audit: AuditSink) -> None:
        self._memento = memento
        self._audit = audit
        # Last (id, state) pair reported per call site, to de-duplicate lookups.
        self._last_emitted: dict[str, tuple[str, ConnectionState]] = {}

    def reset_audit_state(self) -> None:
        self._last_emitted.clear()

    def get_profile(self, profile_id: str) -> StoredProfile | None:
        raw = self._read_mapping().get(profile_id)
        return decode_stored_profile(raw) if raw is not None else None

    def get_profile_or_throw(
        self,
        profile_id: str,
        *,
        call_site: str = AuditAction.GET_PROFILE,
    ) -> StoredProfile:
        """Return the profile or raise :class:`ProfileNotFoundError`.

        Failures are always audited. Successes are audited only when the
        ``(id, connection_state)`` pair differs from the last one reported for
        ``call_site``.
        """

        try:
            stored = self.get_profile(profile_id)
            if stored is None:
                raise ProfileNotFoundError(profile_id)
        except Exception as error:
            self._audit.emit(
                AuditEvent(
                    action=AuditAction.GET_PROFILE,
                    id=profile_id,
                    result=AuditResult.FAILED,
                    source=call_site,
                    **failure_fields(error),
                )
            )
            raise

        seen = (profile_id, stored.connection_state)
        if self._last_emitted.get(call_site) != seen:
            self._audit.emit(
                AuditEvent(
                    action=AuditAction.GET_PROFILE,
                    id=profile_id,
                    result=AuditResult.SUCCEEDED,
                    source=call_site,
                    **profile_audit_fields(stored),
                )
            )
            self._last_emitted[call_site] = seen
        return stored

    def list_profiles(self) -> list[tuple[str, StoredProfile]]:
        """All stored profiles; callers must not rely on the order."""

        return [
            (profile_id, decode_stored_profile(raw))
            for profile_id, raw in self._read_mapping().items()
        ]

    async def add_profile(
        self,
        profile_id: str,
        profile: Profile,
        *,
        call_site: str | None = None,
    ) -> StoredProfile:
        with audit_span(
            self._audit, AuditAction.ADD_PROFILE, profile_id, source=call_site
        ) as span:
            stored = StoredProfile(profile=profile, metadata=ProfileMetadata())
            span.record(profile_audit_fields(stored))
            return await self._put_profile(profile_id, stored)

    async def update_profile(
        self,
        profile_id: str,
        profile: Profile,
        *,
        call_site: str | None = None,
    ) -> StoredProfile:
        """Overlay ``profile`` on the stored body, keeping the stored metadata.

        Raises :class:`ProfileTypeMismatchError` when ``profile`` is not of the
        stored type; nothing is written in that case.
        """

        with audit_span(
            self._audit, AuditAction.UPDATE_PROFILE, profile_id, source=call_site
        ) as span:
            current = self.get_profile_or_throw(profile_id, call_site=AuditAction.UPDATE_PROFILE)
            if current.type != profile.type:
                raise ProfileTypeMismatchError(current.type, profile.type)

            updated = replace(current, profile=merge_profile(current.profile, profile))
            stored = await self._put_profile(profile_id, updated)
            span.record(profile_audit_fields(stored))
            return stored

    async def update_metadata(
        self,
        profile_id: str,
        *,
        label: str | None = None,
        connection_state: ConnectionState | None = None,
        source: ProfileSource | None = None,
    ) -> StoredProfile:
        current = self.get_profile_or_throw(profile_id, call_site="updateMetadata")
        updated = current.with_metadata(
            label=label,
            connection_state=connection_state,
            source=source,
        )
        return await self._put_profile(profile_id, updated)

    async def delete_profile(self, profile_id: str, *, call_site: str | None = None) -> None:
        """Remove ``profile_id``; absent ids are ignored."""

        data = self._read_mapping()
        if profile_id not in data:
            log.debug("delete_profile: %s is not stored", profile_id)
            return

        with audit_span(
            self._audit, AuditAction.DELETE_PROFILE, profile_id, source=call_site
        ) as span:
            try:
                span.record(profile_audit_fields(decode_stored_profile(data[profile_id])))
            except ValidationError:
                log.warning("delete_profile: %s is malformed, deleting without details", profile_id)
            del data[profile_id]
            await self._memento.update(PROFILES_KEY, data)

    def get_current_profile_id(self) -> str | None:
        value = self._memento.get(CURRENT_PROFILE_KEY)
        return value if isinstance(value, str) else None

    async def set_current_profile_id(self, profile_id: str | None) -> None:
        await self._memento.update(CURRENT_PROFILE_KEY, profile_id)

    def _read_mapping(self) -> dict[str, JsonValue]:
        raw = self._memento.get(PROFILES_KEY, {})
        if raw is None:
            return {}
        if not isinstance(raw, dict):
            raise TypeError(f"Stored {PROFILES_KEY} is not a mapping: {type(raw).__name__}")
        return dict(raw)

    async def _put_profile(self, profile_id: str, stored: StoredProfile) -> StoredProfile:
        data = self._read_mapping()
        data[profile_id] = encode_stored_profile(stored)
        await self._memento.update(PROFILES_KEY, data)
        return stored
