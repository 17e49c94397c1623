from __future__ import annotations

import pytest

from authprofiles.domain.model import (
    BUILDER_ID_START_URL,
    SCOPES_SSO_ACCOUNT_ACCESS,
    ConnectionState,
    IamSubtype,
    LinkedIamProfile,
    ProfileMetadata,
    ProfileSource,
    ProfileType,
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


def test_linked_profile_id_is_deterministic() -> None:
    assert linked_profile_name("Admin", "111") == "Admin-111"
    assert linked_profile_id("sso:1", "Admin", "111") == "sso:sso:1#Admin-111"
    assert linked_profile_id("sso:1", "Admin", "111") == linked_profile_id("sso:1", "Admin", "111")


def test_variants_expose_type_and_subtype() -> None:
    linked = LinkedIamProfile(
        name="Admin-111", sso_session="s", sso_role_name="Admin", sso_account_id="111"
    )
    unknown = UnknownIamProfile(name="profile")

    assert SsoProfile(sso_region="us-east-1", start_url="https://x").type is ProfileType.SSO
    assert linked.type is ProfileType.IAM
    assert linked.subtype is IamSubtype.LINKED
    assert unknown.type is ProfileType.IAM
    assert unknown.subtype is IamSubtype.UNKNOWN


def test_merge_profile_keeps_fields_left_unset() -> None:
    current = SsoProfile(
        sso_region="eu-west-1",
        start_url="https://corp.awsapps.com/start",
        scopes=("sso:account:access",),
    )
    update = SsoProfile(sso_region="us-west-2", start_url="https://corp.awsapps.com/start")

    merged = merge_profile(current, update)

    assert merged == SsoProfile(
        sso_region="us-west-2",
        start_url="https://corp.awsapps.com/start",
        scopes=("sso:account:access",),
    )


def test_merge_profile_replaces_a_different_variant() -> None:
    current = LinkedIamProfile(
        name="Admin-111", sso_session="s", sso_role_name="Admin", sso_account_id="111"
    )
    update = UnknownIamProfile(name="profile")

    assert merge_profile(current, update) is update


def test_with_metadata_only_replaces_given_fields() -> None:
    stored = StoredProfile(
        profile=UnknownIamProfile(name="profile"),
        metadata=ProfileMetadata(label="mine", source=ProfileSource.TOOLKIT),
    )

    updated = stored.with_metadata(connection_state=ConnectionState.VALID)

    assert updated.metadata == ProfileMetadata(
        label="mine",
        connection_state=ConnectionState.VALID,
        source=ProfileSource.TOOLKIT,
    )
    assert stored.connection_state is ConnectionState.UNAUTHENTICATED


@pytest.mark.parametrize(
    ("start_url", "expected"),
    [
        ("https://corp.awsapps.com/start", "corp"),
        ("https://d-123456.awsapps.com/start/", "d-123456"),
        ("https://example.com/sso", "https://example.com/sso"),
    ],
)
def test_truncate_start_url(start_url: str, expected: str) -> None:
    assert truncate_start_url(start_url) == expected


def test_profile_factories() -> None:
    builder_id = create_builder_id_profile()
    idc = create_sso_profile("https://corp.awsapps.com/start", "eu-central-1", ("a", "b"))

    assert builder_id.start_url == BUILDER_ID_START_URL
    assert builder_id.scopes == SCOPES_SSO_ACCOUNT_ACCESS
    assert idc.sso_region == "eu-central-1"
    assert idc.scopes == ("a", "b")


def test_describe_profile() -> None:
    assert describe_profile(create_sso_profile("https://corp.awsapps.com/start")) == (
        "sso (corp, us-east-1)"
    )
    assert describe_profile(
        LinkedIamProfile(
            name="Admin-111", sso_session="s", sso_role_name="Admin", sso_account_id="111"
        )
    ) == "iam/linked (Admin in 111)"
    assert describe_profile(UnknownIamProfile(name="profile")) == "iam/unknown (profile)"
