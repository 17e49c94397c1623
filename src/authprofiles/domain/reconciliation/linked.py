"""Discovery of linked IAM profiles from an SSO account/role catalog."""

from __future__ import annotations

from contextlib import aclosing
from logging import getLogger
from typing import TYPE_CHECKING, Final

from authprofiles.domain.model import (
    SCOPES_SSO_ACCOUNT_ACCESS,
    LinkedIamProfile,
    linked_profile_id,
    linked_profile_name,
    truncate_start_url,
)

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from authprofiles.domain.model import SsoProfile, StoredProfile
    from authprofiles.domain.ports.federation import AccountInfo, FederationClient, RoleInfo
    from authprofiles.domain.ports.notify import Notifier
    from authprofiles.domain.store import ProfileStore

log = getLogger(__name__)

PERMISSION_SETS_HELP_URL: Final[str] = (
    "https://docs.aws.amazon.com/singlesignon/latest/userguide/getting-started.html"
)


async def _iter_accounts(client: FederationClient) -> AsyncGenerator[AccountInfo, None]:
    try:
        async with aclosing(client.list_accounts()) as accounts:
            async for account in accounts:
                yield account
    except Exception as error:  # noqa: BLE001
        log.error("list_accounts() failed: %s", error)


async def _iter_roles(
    client: FederationClient,
    accounts: set[str],
) -> AsyncGenerator[RoleInfo, None]:
    async with aclosing(_iter_accounts(client)) as stream:
        async for account in stream:
            accounts.add(account.account_id)
            async with aclosing(client.list_account_roles(account.account_id)) as roles:
                async for role in roles:
                    yield role


async def load_linked_profiles(
    store: ProfileStore,
    source_id: str,
    sso_profile: SsoProfile,
    client: FederationClient,
    *,
    notifier: Notifier,
) -> AsyncGenerator[tuple[str, StoredProfile], None]:
    """Create a linked profile for every role reachable through ``source_id``.

    Yields each newly created ``(id, profile)`` as soon as it is stored; roles that
    already have a profile are skipped. Once the catalog is fully drained, linked
    profiles of ``source_id`` that were not seen are deleted. A consumer that stops
    early therefore never triggers deletions.
    """

    accounts: set[str] = set()
    found: set[str] = set()

    async with aclosing(_iter_roles(client, accounts)) as roles:
        async for role in roles:
            profile_id = linked_profile_id(source_id, role.role_name, role.account_id)
            found.add(profile_id)

            if store.get_profile(profile_id) is not None:
                continue

            stored = await store.add_profile(
                profile_id,
                LinkedIamProfile(
                    name=linked_profile_name(role.role_name, role.account_id),
                    sso_session=source_id,
                    sso_role_name=role.role_name,
                    sso_account_id=role.account_id,
                ),
                call_site="loadLinkedProfiles",
            )
            yield profile_id, stored

    only_account_access = all(
        scope in SCOPES_SSO_ACCOUNT_ACCESS for scope in sso_profile.scopes or ()
    )
    if only_account_access and (not accounts or not found):
        # No OIDC scopes to fall back on and no roles: the user is probably not
        # assigned to any account, or the org has no permission sets.
        _warn_no_roles(notifier, sso_profile, accounts)

    removed = 0
    for profile_id, stored in store.list_profiles():
        profile = stored.profile
        if (
            isinstance(profile, LinkedIamProfile)
            and profile.sso_session == source_id
            and profile_id not in found
        ):
            await store.delete_profile(profile_id, call_site="loadLinkedProfiles")
            removed += 1

    log.info(
        "Linked profiles for %s: accounts=%d, roles=%d, removed=%d",
        source_id,
        len(accounts),
        len(found),
        removed,
    )


def _warn_no_roles(notifier: Notifier, sso_profile: SsoProfile, accounts: set[str]) -> None:
    name = truncate_start_url(sso_profile.start_url)
    if not accounts:
        log.warning("auth: SSO org (%s) returned no accounts", name)
        message = (
            f"IAM Identity Center ({name}) returned no accounts. "
            "Ensure the user is assigned to an account with a Permission Set."
        )
    else:
        log.warning(
            "auth: SSO org (%s) returned no roles for account: %s",
            name,
            ",".join(sorted(accounts)),
        )
        message = (
            f"IAM Identity Center ({name}) returned no roles for any account. "
            "Ensure the user is assigned to an account with a Permission Set."
        )
    notifier.warn(message, PERMISSION_SETS_HELP_URL)
