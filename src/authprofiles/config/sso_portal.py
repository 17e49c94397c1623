"""SSO portal (account/role catalog) configuration values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final, get_args

from authprofiles import __version__
from authprofiles.domain.model.scopes import DEFAULT_SSO_REGION

from .env import optional_env_var
from .errors import ConfigurationError
from .http_resilience import CacheBackend, CacheConfig, RateLimit, ResilienceConfig

if TYPE_CHECKING:
    from .storage import StorageConfig

SSO_PORTAL_TIMEOUT_SECONDS: Final[float] = 15.0
SSO_PORTAL_PAGE_SIZE: Final[int] = 100

SSO_REGION_ENV: Final[str] = "AUTHPROFILES_SSO_REGION"
HTTP_CACHE_ENV: Final[str] = "AUTHPROFILES_HTTP_CACHE"


def sso_portal_base_url(region: str) -> str:
    return f"https://portal.sso.{region}.amazonaws.com"


@dataclass(frozen=True, slots=True)
class SsoPortalConfig:
    region: str
    resilience: ResilienceConfig
    page_size: int = SSO_PORTAL_PAGE_SIZE


def _cache_from_environment(storage: StorageConfig | None) -> CacheConfig | None:
    mode = optional_env_var(HTTP_CACHE_ENV)
    if mode is None or mode.lower() in {"off", "none", "0"}:
        return None
    backend = mode.lower()
    if backend not in get_args(CacheBackend):
        raise ConfigurationError(f"Unsupported {HTTP_CACHE_ENV} value: {mode}")
    if backend == "sqlite":
        if storage is None:
            raise ConfigurationError("The sqlite HTTP cache needs a storage configuration")
        return CacheConfig(backend="sqlite", sqlite_path=str(storage.http_cache_path()))
    return CacheConfig(backend="memory")


def get_sso_portal_config(
    *,
    region: str | None = None,
    storage: StorageConfig | None = None,
    resilience: ResilienceConfig | None = None,
) -> SsoPortalConfig:
    resolved_region = region or optional_env_var(SSO_REGION_ENV) or DEFAULT_SSO_REGION
    return SsoPortalConfig(
        region=resolved_region,
        resilience=resilience
        or ResilienceConfig(
            name=f"sso-portal-{resolved_region}",
            base_url=sso_portal_base_url(resolved_region),
            timeout_seconds=SSO_PORTAL_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
            cache=_cache_from_environment(storage),
            default_headers={"User-Agent": f"authprofiles/{__version__}"},
        ),
    )
