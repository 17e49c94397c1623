"""Credentials providers enumerated from the shared AWS config files."""

from __future__ import annotations

import configparser
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Final

from authprofiles.config.errors import ConfigurationError
from authprofiles.domain.ports.credentials import CredentialProviderDescriptor

if TYPE_CHECKING:
    from pathlib import Path

    from authprofiles.config.credentials import SharedCredentialsConfig

log = getLogger(__name__)

PROVIDER_TYPE: Final[str] = "profile"
PROFILE_SECTION_PREFIX: Final[str] = "profile "


def provider_id(profile_name: str) -> str:
    return f"{PROVIDER_TYPE}:{profile_name}"


def _read_sections(path: Path) -> list[str]:
    if not path.is_file():
        return []
    parser = configparser.ConfigParser(interpolation=None, default_section="__none__")
    try:
        parser.read(path, encoding="utf-8")
    except configparser.Error as error:
        raise ConfigurationError(f"Cannot parse {path}: {error}") from error
    return parser.sections()


def _profile_names(config: SharedCredentialsConfig) -> set[str]:
    # The credentials file names profiles bare; the config file prefixes them
    # with "profile " except for "default". Other sections (sso-session,
    # services) are not profiles.
    names = {section.strip() for section in _read_sections(config.credentials_file)}
    for section in _read_sections(config.config_file):
        if section == "default":
            names.add(section)
        elif section.startswith(PROFILE_SECTION_PREFIX):
            names.add(section.removeprefix(PROFILE_SECTION_PREFIX).strip())
    return {name for name in names if name}


@dataclass(slots=True)
class SharedCredentialsProviders:
    """Enumerate ``profile:<name>`` providers from the shared credentials/config files.

    ``remove_provider`` hides an id for the lifetime of this instance; the files
    themselves are never modified.
    """

    config: SharedCredentialsConfig
    _removed: set[str] = field(default_factory=set)

    async def get_credential_provider_names(self) -> dict[str, CredentialProviderDescriptor]:
        providers = {
            provider_id(name): CredentialProviderDescriptor(credential_type_id=PROVIDER_TYPE)
            for name in sorted(_profile_names(self.config))
        }
        for hidden in self._removed & providers.keys():
            del providers[hidden]
        log.debug("Found %d shared credentials profiles", len(providers))
        return providers

    def remove_provider(self, provider_id: str) -> None:
        self._removed.add(provider_id)
