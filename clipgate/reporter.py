"""Operator-facing messages for every terminal state of a run.

Messages are built from fixed text, numeric counts and the filtered
origin label only. Raw clipboard bytes never reach a notification.
"""

from __future__ import annotations

import structlog

from clipgate.errors import (
    CommitFailed,
    EmptySource,
    GatewayError,
    NoSafeContent,
    TooLarge,
    ToolMissing,
)
from clipgate.outcome import Outcome
from clipgate.sinks.base import Notifier

logger = structlog.get_logger()


class Reporter:
    """Turn run results into notifications."""

    def __init__(self, notifier: Notifier, timeout_ms: int = 7500) -> None:
        self._notifier = notifier
        self._timeout = timeout_ms

    @property
    def extended_timeout(self) -> int:
        """Duration for warnings the operator has to read."""
        return self._timeout * 2

    def error(self, err: GatewayError) -> None:
        """Report a terminal error."""
        logger.error("run_failed", kind=err.kind, label=err.label, detail=err.detail)
        self._notifier.notify(error_message(err), self._timeout)

    def blocked(self, outcome: Outcome) -> None:
        """Report content refused by the abort policy."""
        logger.error("clipboard_blocked", label=outcome.label, policy="abort")
        self._notifier.notify(
            f"ERROR: Clipboard from '{outcome.label}' contained unsafe characters. "
            "Set policy to 'warn' to allow filtered content",
            self._timeout,
        )

    def committed(self, outcome: Outcome) -> None:
        """Report sanitized content that reached the trusted clipboard."""
        if outcome.removed:
            logger.warning("clipboard_filtered", label=outcome.label, removed=outcome.removed)
            self._notifier.notify(
                f"WARNING: {outcome.removed} unsafe bytes from '{outcome.label}' removed. "
                "Copied content is incomplete, check before use",
                self.extended_timeout,
            )
        logger.info("clipboard_committed", label=outcome.label, chars=len(outcome.sanitized))
        self._notifier.notify(
            f"Copied {len(outcome.sanitized)} safe ASCII chars from '{outcome.label}'",
            self._timeout,
        )

    def wipe_failed(self, label: str) -> None:
        """Report that the inbox still holds the unsanitized clipboard."""
        self._notifier.notify(
            f"WARNING: Could not wipe global clipboard from '{label}' after copying",
            self._timeout,
        )


def error_message(err: GatewayError) -> str:
    """Fixed operator text for each error kind."""
    if isinstance(err, ToolMissing):
        return f"ERROR: Package {err.tool} is not installed"
    if isinstance(err, EmptySource):
        return "Global clipboard empty"
    if isinstance(err, TooLarge):
        return f"ERROR: Clipboard from '{err.label}' is too large ({err.size} bytes)"
    if isinstance(err, NoSafeContent):
        return (
            f"Clipboard from '{err.label}' contained no safe ASCII characters "
            "after filtering"
        )
    if isinstance(err, CommitFailed):
        return f"ERROR: Could not copy clipboard from '{err.label}'"
    return f"ERROR: Clipboard from '{err.label}' could not be processed"
