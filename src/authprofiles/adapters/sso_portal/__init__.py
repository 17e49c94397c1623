"""Public interface for the SSO portal adapter."""

from __future__ import annotations

from .client import BEARER_TOKEN_HEADER, SsoPortalClient
from .schema import AccountListPage, RoleListPage

__all__ = [
    "BEARER_TOKEN_HEADER",
    "AccountListPage",
    "RoleListPage",
    "SsoPortalClient",
]
