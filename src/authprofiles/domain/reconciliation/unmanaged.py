"""Synchronisation of statically configured credential profiles."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, assert_never

from authprofiles.domain.model import (
    LINKED_PROFILE_PREFIX,
    LinkedIamProfile,
    ProfileType,
    SsoProfile,
    UnknownIamProfile,
)

if TYPE_CHECKING:
    from authprofiles.domain.ports.credentials import CredentialsProviderManager
    from authprofiles.domain.store import ProfileStore

log = getLogger(__name__)


@dataclass(slots=True)
class UnmanagedSyncResult:
    """Outcome of an unmanaged-profile sync."""

    added: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)


async def load_unmanaged_profiles(
    store: ProfileStore,
    manager: CredentialsProviderManager,
) -> UnmanagedSyncResult:
    """Align stored IAM profiles with the host's credentials providers.

    Linked profiles whose SSO session no longer exists are removed (from the store
    and from ``manager``), unknown IAM profiles the manager no longer lists are
    removed, and newly listed providers are stored as unknown IAM profiles.
    """

    result = UnmanagedSyncResult()
    providers = await manager.get_credential_provider_names()

    for profile_id, stored in store.list_profiles():
        profile = stored.profile
        match profile:
            case SsoProfile():
                continue
            case LinkedIamProfile():
                source = store.get_profile(profile.sso_session)
                if source is None or source.type != ProfileType.SSO:
                    await store.delete_profile(profile_id, call_site="loadUnmanagedProfiles")
                    manager.remove_provider(profile_id)
                    result.removed.append(profile_id)
            case UnknownIamProfile():
                if profile_id not in providers:
                    await store.delete_profile(profile_id, call_site="loadUnmanagedProfiles")
                    result.removed.append(profile_id)
            case _:
                assert_never(profile)

    for provider_id, descriptor in providers.items():
        if provider_id.startswith(LINKED_PROFILE_PREFIX):
            continue
        if store.get_profile(provider_id) is not None:
            continue
        await store.add_profile(
            provider_id,
            UnknownIamProfile(name=descriptor.credential_type_id),
            call_site="loadUnmanagedProfiles",
        )
        result.added.append(provider_id)

    log.info(
        "Unmanaged profiles synced: added=%d, removed=%d",
        len(result.added),
        len(result.removed),
    )
    return result
