"""Tests for operator messages."""

from __future__ import annotations

from clipgate.errors import CommitFailed, EmptySource, NoSafeContent, TooLarge, ToolMissing
from clipgate.outcome import Outcome, OutcomeKind
from clipgate.reporter import Reporter, error_message


class TestErrorMessage:
    """Tests for the fixed error texts."""

    def test_tool_missing(self) -> None:
        assert error_message(ToolMissing("xclip")) == "ERROR: Package xclip is not installed"

    def test_empty_source(self) -> None:
        assert error_message(EmptySource()) == "Global clipboard empty"

    def test_too_large(self) -> None:
        msg = error_message(TooLarge("work-vm", 10485761, 10485760))
        assert msg == "ERROR: Clipboard from 'work-vm' is too large (10485761 bytes)"

    def test_no_safe_content(self) -> None:
        msg = error_message(NoSafeContent("vault", "all 3 bytes removed"))
        assert "'vault'" in msg
        assert "no safe ASCII characters" in msg
        assert "3" not in msg

    def test_commit_failed(self) -> None:
        msg = error_message(CommitFailed("vault", "xclip exited with 1"))
        assert msg.startswith("ERROR")
        assert "'vault'" in msg


class TestReporter:
    """Tests for notification dispatch."""

    def test_error_single_notification(self, notifier) -> None:
        Reporter(notifier, 7500).error(EmptySource())
        assert notifier.messages == [("Global clipboard empty", 7500)]

    def test_clean_commit_single_notification(self, notifier) -> None:
        outcome = Outcome(OutcomeKind.CLEAN, "work-vm", 11, 0, b"hello\nworld")
        Reporter(notifier, 7500).committed(outcome)
        assert notifier.messages == [("Copied 11 safe ASCII chars from 'work-vm'", 7500)]

    def test_warned_commit_two_notifications(self, notifier) -> None:
        outcome = Outcome(OutcomeKind.WARNED, "vault", 12, 5, b"hithere")
        Reporter(notifier, 7500).committed(outcome)
        (warning, warn_ms), (copied, copied_ms) = notifier.messages
        assert warning.startswith("WARNING: 5 unsafe bytes from 'vault' removed")
        assert "incomplete" in warning
        assert warn_ms == 15000
        assert copied == "Copied 7 safe ASCII chars from 'vault'"
        assert copied_ms == 7500

    def test_blocked_does_not_disclose_count(self, notifier) -> None:
        outcome = Outcome(OutcomeKind.BLOCKED, "vault", 12, 5)
        Reporter(notifier, 7500).blocked(outcome)
        assert len(notifier.messages) == 1
        msg, duration = notifier.messages[0]
        assert msg.startswith("ERROR: Clipboard from 'vault' contained unsafe characters")
        assert "5" not in msg
        assert duration == 7500

    def test_wipe_failed(self, notifier) -> None:
        Reporter(notifier, 100).wipe_failed("work-vm")
        assert notifier.messages == [
            ("WARNING: Could not wipe global clipboard from 'work-vm' after copying", 100)
        ]
