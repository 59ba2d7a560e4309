"""Diagnostic sinks for operator-facing shipping calculation messages."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

logger = logging.getLogger(__name__)


class Severity(str, Enum):
    ERROR = "error"
    DEBUG = "debug"


class DiagnosticSink(Protocol):
    def log(self, severity: Severity, message: str) -> None: ...


class LoggingDiagnosticSink:
    """Forward diagnostics to the standard logging module."""

    def __init__(self, target: logging.Logger | None = None):
        self.logger = target or logger

    def log(self, severity: Severity, message: str) -> None:
        if severity == Severity.ERROR:
            self.logger.error(message)
        else:
            self.logger.debug(message)


@dataclass
class RecordingDiagnosticSink:
    """Keep diagnostics in memory, e.g. to return them with a rate quote."""

    entries: list[tuple[Severity, str]] = field(default_factory=list)

    def log(self, severity: Severity, message: str) -> None:
        self.entries.append((severity, message))

    def messages(self, severity: Severity | None = None) -> list[str]:
        return [msg for sev, msg in self.entries if severity is None or sev == severity]
