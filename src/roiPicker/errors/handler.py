"""Central reporting of collaborator failures."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from ..events.signal import Signal


class ErrorSeverity(Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


@dataclass(frozen=True)
class ErrorReport:
    error: Exception
    severity: ErrorSeverity
    context: dict = field(default_factory=dict)


class ErrorHandler:
    """Log failures, publish them on ``errorOccurred`` and notify the UI.

    Only ``ERROR`` and ``CRITICAL`` reports reach the UI callback; lower
    severities are logged and published but never interrupt the user.
    """

    def __init__(self, logger: logging.Logger | None = None):
        self._logger = logger or logging.getLogger(__name__)
        self._ui_callback: Optional[Callable[[str, ErrorSeverity], None]] = None
        self.errorOccurred = Signal("errorOccurred")

    def register_ui_callback(self, callback: Callable[[str, ErrorSeverity], None]):
        self._ui_callback = callback

    def handle(
        self,
        error: Exception,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: dict | None = None,
    ) -> ErrorReport:
        report = ErrorReport(error=error, severity=severity, context=dict(context or {}))

        log_method = getattr(self._logger, severity.value, self._logger.error)
        log_method("%s: %s", error.__class__.__name__, error, extra={"context": report.context})

        self.errorOccurred.emit(report)

        if self._ui_callback and severity in (ErrorSeverity.ERROR, ErrorSeverity.CRITICAL):
            self._ui_callback(str(error), severity)
        return report
