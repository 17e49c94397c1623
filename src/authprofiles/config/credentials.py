"""Locations of the shared AWS credential files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import optional_env_var

CREDENTIALS_FILE_ENV: Final[str] = "AWS_SHARED_CREDENTIALS_FILE"
CONFIG_FILE_ENV: Final[str] = "AWS_CONFIG_FILE"


@dataclass(frozen=True, slots=True)
class SharedCredentialsConfig:
    credentials_file: Path
    config_file: Path


def get_shared_credentials_config() -> SharedCredentialsConfig:
    aws_dir = Path.home() / ".aws"
    credentials_file = optional_env_var(CREDENTIALS_FILE_ENV)
    config_file = optional_env_var(CONFIG_FILE_ENV)
    return SharedCredentialsConfig(
        credentials_file=Path(credentials_file).expanduser()
        if credentials_file
        else aws_dir / "credentials",
        config_file=Path(config_file).expanduser() if config_file else aws_dir / "config",
    )
