from __future__ import annotations

import asyncio
from collections.abc import Callable  # noqa: TC003

import httpx
import pytest

from authprofiles.adapters.http_resilience import ResilientClient
from authprofiles.adapters.sso_portal import BEARER_TOKEN_HEADER, SsoPortalClient
from authprofiles.config import ResilienceConfig, get_sso_portal_config
from authprofiles.domain.ports import AccountInfo, FederationClient, FederationError, RoleInfo


def _make_client_factory(
    handler: Callable[[httpx.Request], httpx.Response],
) -> Callable[[ResilienceConfig], ResilientClient]:
    async def async_handler(request: httpx.Request) -> httpx.Response:
        return handler(request)

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        client = ResilientClient(resilience)
        client._client = httpx.AsyncClient(  # noqa: SLF001  # type: ignore[reportPrivateUsage]
            base_url=resilience.base_url or "",
            headers=dict(resilience.default_headers or {}),
            transport=httpx.MockTransport(async_handler),
        )
        return client

    return factory


def _portal(handler: Callable[[httpx.Request], httpx.Response]) -> SsoPortalClient:
    return SsoPortalClient(
        config=get_sso_portal_config(region="eu-west-1"),
        access_token="secret-token",
        client_factory=_make_client_factory(handler),
    )


def _list_accounts(portal: SsoPortalClient) -> list[AccountInfo]:
    async def run() -> list[AccountInfo]:
        async with portal:
            return [account async for account in portal.list_accounts()]

    return asyncio.run(run())


def test_portal_client_is_a_federation_client() -> None:
    assert isinstance(_portal(lambda _request: httpx.Response(200)), FederationClient)


def test_list_accounts_follows_next_token() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if "next_token" not in request.url.params:
            return httpx.Response(
                200,
                json={
                    "nextToken": "page-2",
                    "accountList": [
                        {"accountId": "111", "accountName": "prod", "emailAddress": "a@b.c"}
                    ],
                },
            )
        return httpx.Response(200, json={"accountList": [{"accountId": "222"}]})

    accounts = _list_accounts(_portal(handler))

    assert accounts == [
        AccountInfo(account_id="111", account_name="prod", email_address="a@b.c"),
        AccountInfo(account_id="222"),
    ]
    assert len(requests) == 2
    first, second = requests
    assert first.url.host == "portal.sso.eu-west-1.amazonaws.com"
    assert first.url.path == "/assignment/accounts"
    assert first.url.params["max_result"] == "100"
    assert first.headers[BEARER_TOKEN_HEADER] == "secret-token"
    assert first.headers["User-Agent"].startswith("authprofiles/")
    assert second.url.params["next_token"] == "page-2"


def test_repeated_next_token_stops_pagination() -> None:
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        _ = request
        return httpx.Response(200, json={"nextToken": "same", "accountList": []})

    assert _list_accounts(_portal(handler)) == []
    assert calls == 2


def test_list_account_roles_passes_account_id() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/assignment/roles"
        account_id = request.url.params["account_id"]
        return httpx.Response(
            200,
            json={
                "roleList": [
                    {"roleName": "Admin", "accountId": account_id},
                    {"roleName": "ReadOnly", "accountId": account_id},
                ]
            },
        )

    portal = _portal(handler)

    async def run() -> list[RoleInfo]:
        async with portal:
            return [role async for role in portal.list_account_roles("111")]

    assert asyncio.run(run()) == [
        RoleInfo(role_name="Admin", account_id="111"),
        RoleInfo(role_name="ReadOnly", account_id="111"),
    ]


def test_stopping_early_requests_no_further_pages() -> None:
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        _ = request
        return httpx.Response(
            200,
            json={"nextToken": f"page-{calls + 1}", "accountList": [{"accountId": str(calls)}]},
        )

    portal = _portal(handler)

    async def run() -> AccountInfo:
        async with portal:
            async for account in portal.list_accounts():
                return account
        raise AssertionError("no accounts")

    assert asyncio.run(run()) == AccountInfo(account_id="1")
    assert calls == 1


def test_http_errors_become_federation_errors() -> None:
    portal = _portal(lambda _request: httpx.Response(403, json={"message": "denied"}))

    with pytest.raises(FederationError, match="HTTP 403"):
        _list_accounts(portal)


def test_unexpected_payload_becomes_federation_error() -> None:
    portal = _portal(lambda _request: httpx.Response(200, json={"accountList": [{}]}))

    with pytest.raises(FederationError, match="Unexpected SSO portal payload"):
        _list_accounts(portal)


def test_client_must_be_entered() -> None:
    portal = _portal(lambda _request: httpx.Response(200, json={}))

    async def run() -> None:
        async for _account in portal.list_accounts():
            pass

    with pytest.raises(RuntimeError, match="async context manager"):
        asyncio.run(run())
