"""Audit and notification sinks that write to the standard logger."""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import TYPE_CHECKING

from authprofiles.domain.ports.audit import AuditResult

if TYPE_CHECKING:
    from authprofiles.domain.ports.audit import AuditEvent

audit_log = logging.getLogger("authprofiles.audit")
notify_log = logging.getLogger("authprofiles.notify")


class LoggingAuditSink:
    """Log each audit event; failures at WARNING, successes at INFO."""

    def __init__(self, logger: logging.Logger = audit_log) -> None:
        self._logger = logger

    def emit(self, event: AuditEvent) -> None:
        fields = {key: value for key, value in asdict(event).items() if value is not None}
        level = logging.WARNING if event.result is AuditResult.FAILED else logging.INFO
        self._logger.log(
            level,
            "%s %s %s",
            event.action,
            event.id,
            event.result,
            extra={"audit": fields},
        )


class LoggingNotifier:
    def __init__(self, logger: logging.Logger = notify_log) -> None:
        self._logger = logger

    def warn(self, message: str, url: str | None = None) -> None:
        if url:
            self._logger.warning("%s (%s)", message, url)
        else:
            self._logger.warning("%s", message)
