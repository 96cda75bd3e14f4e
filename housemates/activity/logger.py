"""
Activity Logger

DESIGN DECISION: Every command the session handles is logged.
This provides:
1. A trace of a whole run, tied together by one correlation ID
2. The reason behind every refusal, which the printed output hides

The activity logger:
- Writes to stderr through the stdlib root logger, so stdout carries
  only command results
- Keeps nothing in memory once an event is written
- Is synchronous, like everything else in the command loop
"""

import logging
import sys
from typing import Any, Optional
from uuid import UUID, uuid4

import structlog

from housemates.config.settings import LoggingSettings
from housemates.models.activity import (
    ActivityEvent,
    ActivityEventBuilder,
    ActivitySeverity,
)
from housemates.models.command import CommandOutcome


_SHARED_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
]


def _configure_structlog(json_output: bool = True) -> None:
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[*_SHARED_PROCESSORS, renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


# Configure structlog for local logging
_configure_structlog()


def configure_logging(settings: Optional[LoggingSettings] = None) -> None:
    """
    Route structured logs to stderr at the configured level.

    Call once at startup, before the first event is logged.
    """
    settings = settings or LoggingSettings()
    logging.basicConfig(
        stream=sys.stderr,
        level=getattr(logging, settings.level),
        format="%(message)s",
        force=True,
    )
    _configure_structlog(json_output=settings.json_output)


class ActivityLogger:
    """
    Central activity logging service.

    Turns command outcomes and input problems into ActivityEvents
    and writes them as structured log records.
    """

    def __init__(self, logger: Optional[Any] = None):
        """
        Initialize activity logger.

        Args:
            logger: structlog-compatible logger.
                    If None, the "housemates.activity" logger is used.
        """
        self._logger = logger or structlog.get_logger("housemates.activity")

    def log(self, event: ActivityEvent) -> None:
        """Write one event at the level matching its severity."""
        log_dict = event.to_log_dict()

        if event.severity == ActivitySeverity.ERROR:
            self._logger.error("activity_event", **log_dict)
        elif event.severity == ActivitySeverity.WARNING:
            self._logger.warning("activity_event", **log_dict)
        elif event.severity == ActivitySeverity.DEBUG:
            self._logger.debug("activity_event", **log_dict)
        else:
            self._logger.info("activity_event", **log_dict)

    def log_outcome(
        self,
        outcome: CommandOutcome,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a command the ledger handled."""
        event = ActivityEventBuilder.command_processed(
            outcome=outcome,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_unknown_command(
        self,
        command: str,
        line: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a line whose keyword is not a known command."""
        event = ActivityEventBuilder.unknown_command(
            command=command,
            line=line,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_invalid_arguments(
        self,
        command: str,
        line: str,
        reason: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a known command whose arguments could not be used."""
        event = ActivityEventBuilder.invalid_arguments(
            command=command,
            line=line,
            reason=reason,
            correlation_id=correlation_id,
        )
        self.log(event)


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this once per session (one input file, one browser session).
    Pass it to every event logged during that session.
    """
    return uuid4()
