"""Port for user-facing warnings."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Notifier(Protocol):
    def warn(self, message: str, url: str | None = None) -> None: ...
