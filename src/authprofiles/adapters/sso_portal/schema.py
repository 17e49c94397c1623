"""Minimal Pydantic models for the SSO portal assignment API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class PortalModel(BaseModel):
    model_config = ConfigDict(extra="ignore", alias_generator=to_camel, populate_by_name=True)


class PortalPage(PortalModel):
    next_token: str | None = None


class AccountPayload(PortalModel):
    account_id: str
    account_name: str | None = None
    email_address: str | None = None


class AccountListPage(PortalPage):
    account_list: list[AccountPayload] = Field(default_factory=list["AccountPayload"])


class RolePayload(PortalModel):
    role_name: str
    account_id: str


class RoleListPage(PortalPage):
    role_list: list[RolePayload] = Field(default_factory=list["RolePayload"])
