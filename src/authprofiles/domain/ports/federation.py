"""Ports for discovering accounts and roles from a federation provider."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator


class FederationError(RuntimeError):
    """Raised when the account/role catalog cannot be listed."""


@dataclass(frozen=True, slots=True)
class AccountInfo:
    account_id: str
    account_name: str | None = None
    email_address: str | None = None


@dataclass(frozen=True, slots=True)
class RoleInfo:
    role_name: str
    account_id: str


@runtime_checkable
class FederationClient(Protocol):
    """Paginated account/role listing exposed as flat lazy streams.

    Pagination happens inside the client; consumers may stop iterating at any
    point, which stops further page requests.
    """

    def list_accounts(self) -> AsyncGenerator[AccountInfo, None]: ...

    def list_account_roles(self, account_id: str) -> AsyncGenerator[RoleInfo, None]: ...
