"""
Activity Models for Housemates

Every processed command produces one activity event for the structured log.
This provides:
1. Traceability of a run from the log alone
2. Debugging information when an input file misbehaves
3. A clear record of why a request was refused

DESIGN DECISION: Events are emitted, not kept. Nothing here stores
a history of past transactions; once logged, an event is gone.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from housemates.models.command import CommandName, CommandOutcome


class ActivityEventType(str, Enum):
    """
    Types of events we log.

    Successful commands get their own type; refusals share one.
    """
    # Membership
    MEMBER_MOVED_IN = "member_moved_in"
    MEMBER_MOVED_OUT = "member_moved_out"

    # Money
    EXPENSE_RECORDED = "expense_recorded"
    EXPENSE_SKIPPED = "expense_skipped"
    DUE_CLEARED = "due_cleared"
    DUES_REPORTED = "dues_reported"

    # Refusals
    REQUEST_REJECTED = "request_rejected"

    # Input problems
    UNKNOWN_COMMAND = "unknown_command"
    INVALID_ARGUMENTS = "invalid_arguments"


class ActivitySeverity(str, Enum):
    """Severity level for activity events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


_SUCCESS_EVENT_TYPES = {
    CommandName.MOVE_IN: ActivityEventType.MEMBER_MOVED_IN,
    CommandName.MOVE_OUT: ActivityEventType.MEMBER_MOVED_OUT,
    CommandName.SPEND: ActivityEventType.EXPENSE_RECORDED,
    CommandName.DUES: ActivityEventType.DUES_REPORTED,
    CommandName.CLEAR_DUE: ActivityEventType.DUE_CLEARED,
}


class ActivityEvent(BaseModel):
    """
    A single activity event.

    One of these is logged for every line the session handles.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: ActivityEventType = Field(
        ...,
        description="Type of event"
    )
    severity: ActivitySeverity = Field(
        default=ActivitySeverity.INFO,
        description="Event severity"
    )

    # Context
    command: Optional[str] = Field(
        default=None,
        description="Command keyword, as typed"
    )
    member: Optional[str] = Field(
        default=None,
        description="Resident the command was about"
    )
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID shared by every event in one session"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "command": self.command,
            "member": self.member,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
        }


class ActivityEventBuilder:
    """
    Helper class to build activity events with common patterns.

    Usage:
        event = ActivityEventBuilder.command_processed(outcome, correlation_id)
        event = ActivityEventBuilder.unknown_command("PAY", line, correlation_id)
    """

    @staticmethod
    def command_processed(
        outcome: CommandOutcome,
        correlation_id: Optional[UUID] = None,
    ) -> ActivityEvent:
        command = outcome.command.value
        details: dict[str, Any] = {"output": list(outcome.output)}

        if outcome.skipped:
            return ActivityEvent(
                event_type=ActivityEventType.EXPENSE_SKIPPED,
                severity=ActivitySeverity.DEBUG,
                command=command,
                member=outcome.member,
                correlation_id=correlation_id,
                description=f"{command} ignored: fewer than two people to share it",
                details=details,
            )

        details["result"] = outcome.code.value
        if outcome.rejected:
            return ActivityEvent(
                event_type=ActivityEventType.REQUEST_REJECTED,
                severity=ActivitySeverity.WARNING,
                command=command,
                member=outcome.member,
                correlation_id=correlation_id,
                description=f"{command} rejected: {outcome.code.value}",
                details=details,
            )

        return ActivityEvent(
            event_type=_SUCCESS_EVENT_TYPES[outcome.command],
            command=command,
            member=outcome.member,
            correlation_id=correlation_id,
            description=f"{command} succeeded",
            details=details,
        )

    @staticmethod
    def unknown_command(
        command: str,
        line: str,
        correlation_id: Optional[UUID] = None,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.UNKNOWN_COMMAND,
            severity=ActivitySeverity.WARNING,
            command=command,
            correlation_id=correlation_id,
            description=f"Unknown command: {command}",
            details={"line": line},
        )

    @staticmethod
    def invalid_arguments(
        command: str,
        line: str,
        reason: str,
        correlation_id: Optional[UUID] = None,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.INVALID_ARGUMENTS,
            severity=ActivitySeverity.WARNING,
            command=command,
            correlation_id=correlation_id,
            description=f"{command} ignored: invalid arguments",
            details={"line": line, "reason": reason},
        )
