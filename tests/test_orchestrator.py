"""
Tests for the household session and activity logging

Flow tests run whole command scripts through HouseholdSession
and compare printed output line by line.
"""

import pytest
from uuid import uuid4

from housemates.activity import ActivityLogger, create_correlation_id
from housemates.config import LedgerSettings
from housemates.ledger import Ledger
from housemates.models.activity import (
    ActivityEvent,
    ActivityEventType,
    ActivitySeverity,
)
from housemates.models.command import MoveIn
from housemates.models.ledger import RoundingMode
from housemates.orchestrator import HouseholdSession, create_app_components


class RecordingLogger:
    """Stands in for a structlog logger and remembers every call."""

    def __init__(self):
        self.calls = []

    def _record(self, level):
        def method(event, **kwargs):
            self.calls.append((level, event, kwargs))
        return method

    def __getattr__(self, level):
        return self._record(level)


@pytest.fixture
def recorder():
    return RecordingLogger()


@pytest.fixture
def session(recorder):
    return HouseholdSession(activity_logger=ActivityLogger(logger=recorder))


class TestHouseholdSession:
    """Tests for processing command scripts."""

    def test_full_script(self, session):
        """Test a complete run matches the expected output."""
        script = [
            "MOVE_IN ANDY",
            "MOVE_IN WOODY",
            "MOVE_IN BO",
            "MOVE_IN REX",
            "SPEND 3000 ANDY WOODY BO",
            "SPEND 300 WOODY BO",
            "SPEND 300 WOODY REX",
            "DUES BO",
            "DUES WOODY",
            "CLEAR_DUE BO ANDY 500",
            "CLEAR_DUE BO ANDY 2500",
            "MOVE_OUT ANDY",
            "MOVE_OUT WOODY",
            "MOVE_OUT BO",
            "CLEAR_DUE WOODY ANDY 1000",
            "CLEAR_DUE BO ANDY 500",
            "MOVE_OUT WOODY",
            "CLEAR_DUE BO WOODY 150",
            "MOVE_OUT WOODY",
            "MOVE_OUT BO",
        ]
        assert list(session.process_lines(script)) == [
            "SUCCESS",
            "SUCCESS",
            "SUCCESS",
            "HOUSEFUL",
            "SUCCESS",
            "SUCCESS",
            "MEMBER_NOT_FOUND",
            "ANDY 1000",
            "WOODY 150",
            "ANDY 1000",
            "BO 0",
            "500",
            "INCORRECT_PAYMENT",
            "FAILURE",
            "FAILURE",
            "FAILURE",
            "0",
            "0",
            "FAILURE",
            "0",
            "SUCCESS",
            "SUCCESS",
        ]

    def test_netting_script(self, session):
        """Test mutual expenses cancel and both can move out."""
        script = [
            "MOVE_IN ANDY",
            "MOVE_IN BO",
            "SPEND 1000 ANDY BO",
            "SPEND 1000 BO ANDY",
            "DUES ANDY",
            "DUES BO",
            "MOVE_OUT ANDY",
            "MOVE_OUT BO",
            "DUES BO",
        ]
        assert list(session.process_lines(script)) == [
            "SUCCESS",
            "SUCCESS",
            "SUCCESS",
            "SUCCESS",
            "BO 0",
            "ANDY 0",
            "SUCCESS",
            "SUCCESS",
            "MEMBER_NOT_FOUND",
        ]

    def test_very_large_expense(self, session):
        """Test a share wider than the default decimal precision doesn't stop the run."""
        script = [
            "MOVE_IN ANDY",
            "MOVE_IN BO",
            "SPEND 1000000000000000000000000000000 ANDY BO",
            "DUES BO",
        ]
        assert list(session.process_lines(script)) == [
            "SUCCESS",
            "SUCCESS",
            "SUCCESS",
            "ANDY 500000000000000000000000000000",
        ]

    def test_zero_expense_clears_what_is_owed_to_payer(self, session):
        """Test SPEND 0 by the creditor wipes the debt owed to them."""
        script = [
            "MOVE_IN ANDY",
            "MOVE_IN BO",
            "SPEND 1000 ANDY BO",
            "SPEND 0 ANDY BO",
            "DUES BO",
            "MOVE_OUT BO",
        ]
        assert list(session.process_lines(script)) == [
            "SUCCESS",
            "SUCCESS",
            "SUCCESS",
            "SUCCESS",
            "ANDY 0",
            "SUCCESS",
        ]

    def test_unknown_command_is_reported(self, session):
        """Test unknown keywords print UNKNOWN_COMMAND and the run continues."""
        assert list(session.process_lines(["PAY ANDY 100", "MOVE_IN ANDY"])) == [
            "UNKNOWN_COMMAND PAY",
            "SUCCESS",
        ]

    def test_bad_arguments_print_nothing(self, session):
        """Test malformed lines are silent and the run continues."""
        assert list(session.process_lines(["MOVE_IN", "SPEND x ANDY", "MOVE_IN ANDY"])) == [
            "SUCCESS",
        ]

    def test_blank_lines_skipped(self, session):
        """Test blank lines produce nothing and log nothing."""
        assert session.process_line("   ") == []

    def test_dues_for_lone_resident(self, session):
        """Test DUES prints CLEAR when there is nobody to owe."""
        session.process_line("MOVE_IN ANDY")
        assert session.process_line("DUES ANDY") == ["CLEAR"]

    def test_execute_accepts_commands(self, session):
        """Test running a built command directly."""
        outcome = session.execute(MoveIn(member="ANDY"))
        assert outcome.output == ["SUCCESS"]
        assert session.ledger.members == ("ANDY",)

    def test_session_without_logger(self):
        """Test a session works with no activity logger."""
        session = HouseholdSession()
        assert session.process_line("PAY") == ["UNKNOWN_COMMAND PAY"]
        assert session.process_line("MOVE_IN") == []
        assert session.process_line("MOVE_IN ANDY") == ["SUCCESS"]


class TestSessionLogging:
    """Tests for what the session logs."""

    def test_one_event_per_command(self, session, recorder):
        """Test each handled line logs exactly once."""
        list(session.process_lines(["MOVE_IN ANDY", "", "DUES REX", "NOPE", "CLEAR_DUE A"]))
        levels = [level for level, _, _ in recorder.calls]
        assert levels == ["info", "warning", "warning", "warning"]
        assert all(event == "activity_event" for _, event, _ in recorder.calls)

    def test_events_share_correlation_id(self, recorder):
        """Test every event in a session carries the session's ID."""
        correlation_id = uuid4()
        session = HouseholdSession(
            activity_logger=ActivityLogger(logger=recorder),
            correlation_id=correlation_id,
        )
        list(session.process_lines(["MOVE_IN ANDY", "MOVE_IN BO", "BAD"]))
        assert session.correlation_id == correlation_id
        assert {kw["correlation_id"] for _, _, kw in recorder.calls} == {str(correlation_id)}

    def test_rejection_details(self, session, recorder):
        """Test a refusal logs the result code."""
        session.process_line("MOVE_OUT REX")
        _, _, kwargs = recorder.calls[-1]
        assert kwargs["event_type"] == "request_rejected"
        assert kwargs["details"]["result"] == "UNKNOWN_MEMBER"
        assert kwargs["member"] == "REX"

    def test_invalid_arguments_details(self, session, recorder):
        """Test a malformed line logs the reason."""
        session.process_line("CLEAR_DUE BO ANDY lots")
        _, _, kwargs = recorder.calls[-1]
        assert kwargs["event_type"] == "invalid_arguments"
        assert kwargs["command"] == "CLEAR_DUE"
        assert "amount" in kwargs["details"]["reason"]

    def test_skipped_expense_logged_at_debug(self, session, recorder):
        """Test an ignored expense logs at debug level."""
        session.process_line("MOVE_IN ANDY")
        session.process_line("SPEND 100 ANDY BO")
        level, _, kwargs = recorder.calls[-1]
        assert level == "debug"
        assert kwargs["event_type"] == "expense_skipped"


class TestActivityLogger:
    """Tests for ActivityLogger level routing."""

    @pytest.mark.parametrize(
        "severity, level",
        [
            (ActivitySeverity.DEBUG, "debug"),
            (ActivitySeverity.INFO, "info"),
            (ActivitySeverity.WARNING, "warning"),
            (ActivitySeverity.ERROR, "error"),
        ],
    )
    def test_severity_maps_to_level(self, recorder, severity, level):
        """Test each severity is written at its own level."""
        ActivityLogger(logger=recorder).log(
            ActivityEvent(
                event_type=ActivityEventType.MEMBER_MOVED_IN,
                severity=severity,
                description="test",
            )
        )
        assert recorder.calls[0][0] == level

    def test_default_logger_is_structlog(self):
        """Test the logger can be built without arguments."""
        ActivityLogger().log(
            ActivityEvent(
                event_type=ActivityEventType.MEMBER_MOVED_IN,
                description="smoke test",
            )
        )

    def test_correlation_ids_are_unique(self):
        """Test create_correlation_id."""
        assert create_correlation_id() != create_correlation_id()


class TestCreateAppComponents:
    """Tests for the session factory."""

    def test_uses_given_settings(self):
        """Test the ledger is built from LedgerSettings."""
        session = create_app_components(
            LedgerSettings(house_capacity=2, share_rounding="half_even"),
            with_logging=False,
        )
        assert session.ledger.capacity == 2
        assert session.ledger.rounding is RoundingMode.HALF_EVEN
        assert session.process_line("MOVE_IN A") == ["SUCCESS"]
        assert session.process_line("MOVE_IN B") == ["SUCCESS"]
        assert session.process_line("MOVE_IN C") == ["HOUSEFUL"]

    def test_each_call_gets_a_fresh_house(self):
        """Test sessions don't share state."""
        first = create_app_components(LedgerSettings(), with_logging=False)
        second = create_app_components(LedgerSettings(), with_logging=False)
        first.process_line("MOVE_IN ANDY")
        assert second.ledger.members == ()
        assert first.correlation_id != second.correlation_id

    def test_session_accepts_prebuilt_ledger(self):
        """Test injecting a ledger."""
        ledger = Ledger(capacity=1)
        session = HouseholdSession(ledger=ledger)
        assert session.ledger is ledger

    def test_empty_prebuilt_ledger_keeps_its_rules(self):
        """Test an empty injected ledger is used, not replaced by a default one."""
        session = HouseholdSession(ledger=Ledger(capacity=1, rounding=RoundingMode.HALF_EVEN))
        assert list(session.process_lines(["MOVE_IN ANDY", "MOVE_IN BO"])) == [
            "SUCCESS",
            "HOUSEFUL",
        ]
        assert session.ledger.rounding is RoundingMode.HALF_EVEN


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
