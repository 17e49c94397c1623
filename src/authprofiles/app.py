"""Application orchestration entry points."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING
from uuid import uuid4

from authprofiles.adapters.logging_sinks import LoggingAuditSink, LoggingNotifier
from authprofiles.adapters.memento import SqlAlchemyMemento
from authprofiles.adapters.shared_credentials import SharedCredentialsProviders
from authprofiles.adapters.sso_portal import SsoPortalClient
from authprofiles.config import (
    get_database_config,
    get_shared_credentials_config,
    get_sso_portal_config,
    get_storage_config,
)
from authprofiles.domain.model import (
    DEFAULT_SSO_REGION,
    SCOPES_SSO_ACCOUNT_ACCESS,
    SsoProfile,
    StoredProfile,
    create_sso_profile,
)
from authprofiles.domain.reconciliation import (
    OnceChangedNotifier,
    UnmanagedSyncResult,
    load_linked_profiles,
    load_unmanaged_profiles,
)
from authprofiles.domain.store import ProfileStore

if TYPE_CHECKING:
    from authprofiles.config.sso_portal import SsoPortalConfig
    from authprofiles.domain.ports import (
        AuditSink,
        CredentialsProviderManager,
        FederationClient,
        Memento,
        Notifier,
    )

log = getLogger(__name__)

# One per process so a repeated "no roles" warning is shown once across syncs.
_NOTIFIER = OnceChangedNotifier(LoggingNotifier())


class NotAnSsoProfileError(ValueError):
    def __init__(self, profile_id: str) -> None:
        super().__init__(f"Profile is not an SSO profile: {profile_id}")
        self.profile_id = profile_id


@dataclass(slots=True)
class SyncLinkedProfilesResult:
    """Outcome of a linked-profile discovery run."""

    source_id: str
    added: list[str] = field(default_factory=list)


def build_profile_store(
    *,
    memento: Memento | None = None,
    audit: AuditSink | None = None,
) -> ProfileStore:
    """Profile store over the configured database (or the given memento)."""

    if memento is None:
        database = get_database_config(storage=get_storage_config())
        memento = SqlAlchemyMemento.from_uri(database.uri)
    return ProfileStore(memento, audit or LoggingAuditSink())


async def add_sso_profile(
    store: ProfileStore,
    *,
    start_url: str,
    region: str = DEFAULT_SSO_REGION,
    scopes: tuple[str, ...] = SCOPES_SSO_ACCOUNT_ACCESS,
    profile_id: str | None = None,
) -> tuple[str, StoredProfile]:
    new_id = profile_id or str(uuid4())
    stored = await store.add_profile(new_id, create_sso_profile(start_url, region, scopes))
    log.info("Added SSO profile %s for %s", new_id, start_url)
    return new_id, stored


async def use_profile(store: ProfileStore, profile_id: str | None) -> StoredProfile | None:
    """Point the current-profile pointer at ``profile_id`` (``None`` clears it)."""

    stored = None
    if profile_id is not None:
        stored = store.get_profile_or_throw(profile_id, call_site="useProfile")
    await store.set_current_profile_id(profile_id)
    return stored


async def sync_linked_profiles(
    store: ProfileStore,
    source_id: str,
    *,
    access_token: str | None = None,
    client: FederationClient | None = None,
    portal_config: SsoPortalConfig | None = None,
    notifier: Notifier | None = None,
) -> SyncLinkedProfilesResult:
    """Discover roles for the SSO profile ``source_id`` and store them as linked profiles.

    Either ``client`` or ``access_token`` is required; with a token the SSO portal
    of the profile's region is queried.
    """

    stored = store.get_profile_or_throw(source_id, call_site="syncLinkedProfiles")
    sso_profile = stored.profile
    if not isinstance(sso_profile, SsoProfile):
        raise NotAnSsoProfileError(source_id)

    active_notifier = notifier or _NOTIFIER
    if client is not None:
        return await _drain_linked_profiles(
            store, source_id, sso_profile, client, notifier=active_notifier
        )

    if access_token is None:
        raise ValueError("An access token or a federation client is required")
    config = portal_config or get_sso_portal_config(
        region=sso_profile.sso_region,
        storage=get_storage_config(),
    )
    log.info("Starting linked profile sync for %s (%s)", source_id, config.region)
    async with SsoPortalClient(config=config, access_token=access_token) as portal:
        return await _drain_linked_profiles(
            store, source_id, sso_profile, portal, notifier=active_notifier
        )


async def _drain_linked_profiles(
    store: ProfileStore,
    source_id: str,
    sso_profile: SsoProfile,
    client: FederationClient,
    *,
    notifier: Notifier,
) -> SyncLinkedProfilesResult:
    result = SyncLinkedProfilesResult(source_id=source_id)
    async for profile_id, _stored in load_linked_profiles(
        store, source_id, sso_profile, client, notifier=notifier
    ):
        result.added.append(profile_id)
    log.info("Finished linked profile sync for %s: added=%d", source_id, len(result.added))
    return result


async def sync_unmanaged_profiles(
    store: ProfileStore,
    *,
    manager: CredentialsProviderManager | None = None,
) -> UnmanagedSyncResult:
    """Align stored IAM profiles with the shared credentials files (or ``manager``)."""

    effective_manager = manager or SharedCredentialsProviders(
        config=get_shared_credentials_config()
    )
    return await load_unmanaged_profiles(store, effective_manager)
