"""De-duplication of user-facing warnings."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from authprofiles.domain.ports.notify import Notifier


class OnceChangedNotifier:
    """Forward a warning unless it is identical to the previous one forwarded.

    Identity is the rendered ``(message, url)`` pair, so two different sources
    producing the same text share one warning.
    """

    def __init__(self, notifier: Notifier) -> None:
        self._notifier = notifier
        self._last: tuple[str, str | None] | None = None

    def warn(self, message: str, url: str | None = None) -> None:
        key = (message, url)
        if key == self._last:
            return
        self._last = key
        self._notifier.warn(message, url)

    def reset(self) -> None:
        self._last = None
