"""
Main Orchestrator for Housemates

This module ties together all the components and defines the
end-to-end flow for one session:

    line -> parse -> dispatch to ledger -> render -> log

DESIGN DECISION: The orchestrator enforces the boundaries:
- The ledger only ever sees well-formed commands
- Every line gets logged, whether it succeeded, was refused,
  or could not be parsed
- A bad line never stops the lines after it

This is the "glue" that the CLI and the Streamlit app share.
"""

from typing import Iterable, Iterator, Optional
from uuid import UUID

from housemates.activity import ActivityLogger, create_correlation_id
from housemates.commands import (
    CommandArgumentError,
    CommandDispatcher,
    CommandParser,
    UnknownCommandError,
)
from housemates.config import LedgerSettings, get_settings
from housemates.ledger import Ledger
from housemates.models.command import Command, CommandOutcome


UNKNOWN_COMMAND_TOKEN = "UNKNOWN_COMMAND"


class HouseholdSession:
    """
    Processes commands for one house, one at a time, in order.

    Flow per line:
    1. Parse   -> typed Command (or a parse error)
    2. Execute -> one ledger operation
    3. Render  -> zero or more output lines
    4. Log     -> one activity event

    Unknown commands print "UNKNOWN_COMMAND <name>".
    Malformed arguments print nothing and are logged as warnings.
    """

    def __init__(
        self,
        ledger: Optional[Ledger] = None,
        parser: Optional[CommandParser] = None,
        activity_logger: Optional[ActivityLogger] = None,
        correlation_id: Optional[UUID] = None,
    ):
        self._ledger = ledger if ledger is not None else Ledger()
        self._parser = parser or CommandParser()
        self._dispatcher = CommandDispatcher(self._ledger)
        self._activity_logger = activity_logger
        self._correlation_id = correlation_id or create_correlation_id()

    @property
    def ledger(self) -> Ledger:
        return self._ledger

    @property
    def correlation_id(self) -> UUID:
        return self._correlation_id

    def execute(self, command: Command) -> CommandOutcome:
        """
        Run an already-built command.

        Used directly by the Streamlit forms, which construct
        commands without going through text.
        """
        outcome = self._dispatcher.dispatch(command)

        if self._activity_logger:
            self._activity_logger.log_outcome(
                outcome=outcome,
                correlation_id=self._correlation_id,
            )

        return outcome

    def process_line(self, line: str) -> list[str]:
        """
        Handle one input line.

        Returns:
            Lines to print, possibly none
        """
        line = line.strip()
        try:
            command = self._parser.parse(line)
        except UnknownCommandError as e:
            if self._activity_logger:
                self._activity_logger.log_unknown_command(
                    command=e.command,
                    line=line,
                    correlation_id=self._correlation_id,
                )
            return [f"{UNKNOWN_COMMAND_TOKEN} {e.command}"]
        except CommandArgumentError as e:
            if self._activity_logger:
                self._activity_logger.log_invalid_arguments(
                    command=e.command,
                    line=line,
                    reason=e.reason,
                    correlation_id=self._correlation_id,
                )
            return []

        if command is None:
            return []

        return self.execute(command).output

    def process_lines(self, lines: Iterable[str]) -> Iterator[str]:
        """Handle every line in order, yielding output as it is produced."""
        for line in lines:
            yield from self.process_line(line)


def create_app_components(
    ledger_settings: Optional[LedgerSettings] = None,
    with_logging: bool = True,
) -> HouseholdSession:
    """
    Factory function to create a fully wired session.

    Args:
        ledger_settings: House rules. If None, loaded from the environment.
        with_logging: Whether to attach an ActivityLogger.
                      Set to False for quiet runs and tests.

    Returns:
        A new HouseholdSession with an empty house
    """
    ledger_settings = ledger_settings or get_settings().ledger

    ledger = Ledger(
        capacity=ledger_settings.house_capacity,
        rounding=ledger_settings.share_rounding,
    )
    activity_logger = ActivityLogger() if with_logging else None

    return HouseholdSession(
        ledger=ledger,
        activity_logger=activity_logger,
    )
