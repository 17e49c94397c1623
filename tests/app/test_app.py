from __future__ import annotations

import asyncio
import uuid

import pytest

from authprofiles.adapters.memento import InMemoryMemento
from authprofiles.app import (
    NotAnSsoProfileError,
    add_sso_profile,
    build_profile_store,
    sync_linked_profiles,
    sync_unmanaged_profiles,
    use_profile,
)
from authprofiles.domain.model import SCOPES_SSO_ACCOUNT_ACCESS, SsoProfile, UnknownIamProfile
from authprofiles.domain.store import ProfileNotFoundError, ProfileStore
from tests.support.fakes import (
    FakeCredentialsProviderManager,
    FakeFederationClient,
    RecordingAuditSink,
    RecordingNotifier,
)

START_URL = "https://corp.awsapps.com/start"


def test_add_sso_profile_generates_an_id(store: ProfileStore) -> None:
    profile_id, stored = asyncio.run(add_sso_profile(store, start_url=START_URL))

    assert uuid.UUID(profile_id)
    assert stored.profile == SsoProfile(
        sso_region="us-east-1", start_url=START_URL, scopes=SCOPES_SSO_ACCOUNT_ACCESS
    )
    assert store.get_profile(profile_id) == stored


def test_use_profile_requires_existing_profile(store: ProfileStore) -> None:
    asyncio.run(add_sso_profile(store, start_url=START_URL, profile_id="corp"))

    assert asyncio.run(use_profile(store, "corp")) is not None
    assert store.get_current_profile_id() == "corp"

    with pytest.raises(ProfileNotFoundError):
        asyncio.run(use_profile(store, "missing"))
    assert store.get_current_profile_id() == "corp"

    assert asyncio.run(use_profile(store, None)) is None
    assert store.get_current_profile_id() is None


def test_sync_linked_profiles_with_client(
    store: ProfileStore, notifier: RecordingNotifier
) -> None:
    asyncio.run(add_sso_profile(store, start_url=START_URL, profile_id="corp"))
    client = FakeFederationClient({"111": ["Admin"], "222": ["Admin", "Dev"]})

    result = asyncio.run(
        sync_linked_profiles(store, "corp", client=client, notifier=notifier)
    )

    assert result.source_id == "corp"
    assert sorted(result.added) == [
        "sso:corp#Admin-111",
        "sso:corp#Admin-222",
        "sso:corp#Dev-222",
    ]
    assert notifier.warnings == []


def test_sync_linked_profiles_needs_an_sso_profile(store: ProfileStore) -> None:
    asyncio.run(store.add_profile("profile:dev", UnknownIamProfile(name="profile")))

    with pytest.raises(NotAnSsoProfileError):
        asyncio.run(sync_linked_profiles(store, "profile:dev", client=FakeFederationClient()))
    with pytest.raises(ProfileNotFoundError):
        asyncio.run(sync_linked_profiles(store, "missing", client=FakeFederationClient()))


def test_sync_linked_profiles_needs_a_token_or_client(store: ProfileStore) -> None:
    asyncio.run(add_sso_profile(store, start_url=START_URL, profile_id="corp"))

    with pytest.raises(ValueError, match="access token"):
        asyncio.run(sync_linked_profiles(store, "corp"))


def test_sync_unmanaged_profiles_with_manager(store: ProfileStore) -> None:
    manager = FakeCredentialsProviderManager({"profile:dev": "profile"})

    result = asyncio.run(sync_unmanaged_profiles(store, manager=manager))

    assert result.added == ["profile:dev"]


@pytest.mark.integration
def test_build_profile_store_persists_in_data_dir() -> None:
    first = build_profile_store(audit=RecordingAuditSink())
    asyncio.run(add_sso_profile(first, start_url=START_URL, profile_id="corp"))

    second = build_profile_store(audit=RecordingAuditSink())

    assert second.get_profile("corp") is not None


def test_build_profile_store_accepts_a_memento() -> None:
    memento = InMemoryMemento()
    store = build_profile_store(memento=memento, audit=RecordingAuditSink())

    asyncio.run(add_sso_profile(store, start_url=START_URL, profile_id="corp"))

    assert memento.keys() == ["auth.profiles"]
