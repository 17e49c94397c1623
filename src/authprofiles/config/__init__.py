"""Application configuration helpers."""

from __future__ import annotations

from .credentials import SharedCredentialsConfig, get_shared_credentials_config
from .env import optional_env_var, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .sso_portal import (
    DEFAULT_SSO_REGION,
    SsoPortalConfig,
    get_sso_portal_config,
    sso_portal_base_url,
)
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "DEFAULT_SSO_REGION",
    "CacheConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "SharedCredentialsConfig",
    "SsoPortalConfig",
    "StorageConfig",
    "configure_logging",
    "get_database_config",
    "get_shared_credentials_config",
    "get_sso_portal_config",
    "get_storage_config",
    "optional_env_var",
    "require_env_var",
    "require_env_vars",
    "sso_portal_base_url",
]
