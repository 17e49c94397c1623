"""Well-known SSO scopes and start urls."""

from __future__ import annotations

from typing import Final

BUILDER_ID_START_URL: Final[str] = "https://view.awsapps.com/start"
DEFAULT_SSO_REGION: Final[str] = "us-east-1"

SCOPES_SSO_ACCOUNT_ACCESS: Final[tuple[str, ...]] = ("sso:account:access",)
SCOPES_CODECATALYST: Final[tuple[str, ...]] = ("codecatalyst:read_write",)
# Non-chat scopes.
SCOPES_CODEWHISPERER_CORE: Final[tuple[str, ...]] = (
    "codewhisperer:completions",
    "codewhisperer:analysis",
)
SCOPES_CODEWHISPERER_CHAT: Final[tuple[str, ...]] = ("codewhisperer:conversations",)
SCOPES_FEATURE_DEV: Final[tuple[str, ...]] = ("codewhisperer:taskassist",)
SCOPES_GUMBY: Final[tuple[str, ...]] = ("codewhisperer:transformations",)
