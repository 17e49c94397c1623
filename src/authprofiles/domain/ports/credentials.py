"""Port for the host's enumeration of statically configured credentials."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True, slots=True)
class CredentialProviderDescriptor:
    credential_type_id: str


@runtime_checkable
class CredentialsProviderManager(Protocol):
    async def get_credential_provider_names(self) -> Mapping[str, CredentialProviderDescriptor]:
        """Return every known credentials provider keyed by its serialized id."""
        ...

    def remove_provider(self, provider_id: str) -> None: ...
