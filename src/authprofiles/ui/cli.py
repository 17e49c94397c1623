# ruff: noqa: T201

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING, Final

from dotenv import load_dotenv

from authprofiles.app import (
    add_sso_profile,
    build_profile_store,
    sync_linked_profiles,
    sync_unmanaged_profiles,
    use_profile,
)
from authprofiles.config import DEFAULT_SSO_REGION, configure_logging, require_env_var
from authprofiles.domain.model import SCOPES_SSO_ACCOUNT_ACCESS, describe_profile

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from authprofiles.domain.store import ProfileStore

log = logging.getLogger(__name__)

ACCESS_TOKEN_ENV: Final[str] = "AUTHPROFILES_SSO_TOKEN"


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage stored authentication profiles")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List stored profiles")
    subparsers.add_parser("current", help="Show the current profile id")

    add_sso = subparsers.add_parser("add-sso", help="Store a new SSO profile")
    add_sso.add_argument("--start-url", required=True, help="SSO start url")
    add_sso.add_argument(
        "--region",
        default=DEFAULT_SSO_REGION,
        help="SSO region (default: %(default)s)",
    )
    add_sso.add_argument(
        "--scope",
        dest="scopes",
        action="append",
        help="Requested scope; repeat for several (default: sso:account:access)",
    )
    add_sso.add_argument("--id", dest="profile_id", help="Explicit profile id")

    delete = subparsers.add_parser("delete", help="Delete a stored profile")
    delete.add_argument("profile_id")

    use = subparsers.add_parser("use", help="Make a profile the current one")
    use.add_argument("profile_id", nargs="?", help="Profile id; omit to clear")

    sync_roles = subparsers.add_parser(
        "sync-roles",
        help="Discover roles of an SSO profile and store them as linked profiles",
    )
    sync_roles.add_argument("profile_id", help="Id of the SSO profile")
    sync_roles.add_argument(
        "--token-env",
        default=ACCESS_TOKEN_ENV,
        help="Environment variable holding the SSO access token (default: %(default)s)",
    )

    subparsers.add_parser(
        "sync-local",
        help="Reconcile IAM profiles with the shared credentials files",
    )

    return parser.parse_args(list(argv))


def _print_profiles(store: ProfileStore) -> None:
    current = store.get_current_profile_id()
    profiles = sorted(store.list_profiles(), key=lambda item: item[0])
    if not profiles:
        print("No profiles stored.")
        return
    for profile_id, stored in profiles:
        marker = "*" if profile_id == current else " "
        label = f" [{stored.metadata.label}]" if stored.metadata.label else ""
        print(
            f"{marker} {profile_id}{label}: {describe_profile(stored.profile)}"
            f" ({stored.connection_state})"
        )


async def _run(args: argparse.Namespace) -> None:
    store = build_profile_store()
    match args.command:
        case "list":
            _print_profiles(store)
        case "current":
            print(store.get_current_profile_id() or "")
        case "add-sso":
            profile_id, _stored = await add_sso_profile(
                store,
                start_url=args.start_url,
                region=args.region,
                scopes=tuple(args.scopes) if args.scopes else SCOPES_SSO_ACCOUNT_ACCESS,
                profile_id=args.profile_id,
            )
            print(profile_id)
        case "delete":
            await store.delete_profile(args.profile_id, call_site="cli")
        case "use":
            await use_profile(store, args.profile_id)
        case "sync-roles":
            result = await sync_linked_profiles(
                store,
                args.profile_id,
                access_token=require_env_var(args.token_env),
            )
            for profile_id in result.added:
                print(profile_id)
        case "sync-local":
            outcome = await sync_unmanaged_profiles(store)
            log.info("Added %s, removed %s", outcome.added, outcome.removed)
        case _:
            raise ValueError(f"Unsupported command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)

    try:
        asyncio.run(_run(parsed_args))
    except Exception:
        log.exception("Command %s failed", parsed_args.command)
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
