"""Account/role listing against the SSO portal REST API."""

from __future__ import annotations

from contextlib import aclosing
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Final, Self

import httpx
from pydantic import ValidationError

from authprofiles.adapters.http_resilience import ResilientClient
from authprofiles.domain.ports.federation import AccountInfo, FederationError, RoleInfo

from .schema import AccountListPage, PortalPage, RoleListPage

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Callable
    from types import TracebackType

    from authprofiles.config.http_resilience import ResilienceConfig
    from authprofiles.config.sso_portal import SsoPortalConfig

log = getLogger(__name__)

ACCOUNTS_PATH: Final[str] = "/assignment/accounts"
ROLES_PATH: Final[str] = "/assignment/roles"
BEARER_TOKEN_HEADER: Final[str] = "x-amz-sso_bearer_token"


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


@dataclass(slots=True)
class SsoPortalClient:
    """List accounts and roles visible to an SSO access token.

    Use as an async context manager; the underlying HTTP client is closed on exit.
    """

    config: SsoPortalConfig
    access_token: str
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )
    _http: ResilientClient | None = field(default=None, init=False, repr=False)

    async def __aenter__(self) -> Self:
        self._http = self.client_factory(self.config.resilience)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    async def list_accounts(self) -> AsyncGenerator[AccountInfo, None]:
        async with aclosing(self._pages(ACCOUNTS_PATH, AccountListPage, {})) as pages:
            async for page in pages:
                for account in page.account_list:
                    yield AccountInfo(
                        account_id=account.account_id,
                        account_name=account.account_name,
                        email_address=account.email_address,
                    )

    async def list_account_roles(self, account_id: str) -> AsyncGenerator[RoleInfo, None]:
        params = {"account_id": account_id}
        async with aclosing(self._pages(ROLES_PATH, RoleListPage, params)) as pages:
            async for page in pages:
                for role in page.role_list:
                    yield RoleInfo(role_name=role.role_name, account_id=role.account_id)

    async def _pages[TPage: PortalPage](
        self,
        path: str,
        page_type: type[TPage],
        params: dict[str, str],
    ) -> AsyncGenerator[TPage, None]:
        next_token: str | None = None
        while True:
            query = {**params, "max_result": str(self.config.page_size)}
            if next_token is not None:
                query["next_token"] = next_token
            page = _validate_page(page_type, await self._request(path, query))
            yield page
            if not page.next_token or page.next_token == next_token:
                return
            next_token = page.next_token

    async def _request(self, path: str, query: dict[str, str]) -> object:
        if self._http is None:
            raise RuntimeError("SsoPortalClient must be used as an async context manager")
        try:
            response = await self._http.get(
                path,
                params=query,
                headers={BEARER_TOKEN_HEADER: self.access_token},
            )
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as error:
            log.debug("SSO portal %s returned %s", path, error.response.status_code)
            raise FederationError(
                f"SSO portal {path} failed with HTTP {error.response.status_code}"
            ) from error
        except (httpx.HTTPError, ValueError) as error:
            raise FederationError(f"SSO portal {path} failed: {error}") from error


def _validate_page[TPage: PortalPage](page_type: type[TPage], payload: object) -> TPage:
    try:
        return page_type.model_validate(payload)
    except ValidationError as error:
        raise FederationError(f"Unexpected SSO portal payload: {error}") from error
