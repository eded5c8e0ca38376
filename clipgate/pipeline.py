"""The gateway run: guard, read, limit, filter, compare, commit, wipe.

Every stage runs once, in order, on a single thread. Stages raise a
GatewayError to end the run; ClipboardGateway.run reports it exactly
once and turns it into a process exit code. The inbox is wiped only
after the sink confirmed the commit, so an interrupted or failed run
leaves the untrusted source where it was.
"""

from __future__ import annotations

from contextlib import nullcontext

import structlog

from clipgate.config import FilterPolicy, GatewayConfig
from clipgate.errors import CommitFailed, GatewayError, NoSafeContent, ToolMissing, WipeFailed
from clipgate.inbox import ClipboardInbox
from clipgate.outcome import Outcome, OutcomeKind
from clipgate.reporter import Reporter
from clipgate.security.audit import AuditLogger
from clipgate.security.filter import sanitize_bytes
from clipgate.sinks.base import ClipboardSink, Notifier

logger = structlog.get_logger()


def compare(raw: bytes, sanitized: bytes, label: str, policy: FilterPolicy) -> Outcome:
    """Apply the filter policy to the number of removed bytes.

    Args:
        raw: The buffer as read from the inbox.
        sanitized: Its allow-list projection.
        label: Filtered origin label.
        policy: What to do when anything was removed.

    Returns:
        A clean, warned or blocked Outcome.
    """
    removed = len(raw) - len(sanitized)
    if removed < 0:
        raise ValueError("sanitized buffer is longer than its source")
    if removed == 0:
        return Outcome(OutcomeKind.CLEAN, label, len(raw), 0, sanitized)
    if policy is FilterPolicy.ABORT:
        return Outcome(OutcomeKind.BLOCKED, label, len(raw), removed)
    if policy is FilterPolicy.WARN:
        return Outcome(OutcomeKind.WARNED, label, len(raw), removed, sanitized)
    raise ValueError(f"Unknown filter policy: {policy!r}")


class ClipboardGateway:
    """One-shot sanitization of the inbox into the trusted clipboard."""

    def __init__(
        self,
        config: GatewayConfig,
        inbox: ClipboardInbox,
        sink: ClipboardSink,
        notifier: Notifier,
        audit: AuditLogger | None = None,
    ) -> None:
        self._config = config
        self._inbox = inbox
        self._sink = sink
        self._reporter = Reporter(notifier, config.notify_timeout)
        self._audit = audit

    def run(self) -> int:
        """Execute the whole pipeline.

        Returns:
            The process exit code: 0 on commit, ``blocked_exit_code`` when
            the abort policy refused the content, 1 on any error.
        """
        try:
            if not self._sink.available():
                raise ToolMissing(self._sink.name)
            lock = self._inbox.claimed() if self._config.use_lock else nullcontext()
            with lock:
                return self._process()
        except GatewayError as e:
            self._reporter.error(e)
            if self._audit:
                self._audit.log_error(e.kind, e.label, e.exit_code)
            return e.exit_code

    def _process(self) -> int:
        cfg = self._config
        self._inbox.check_source()
        label = self._inbox.read_label()

        size = self._inbox.check_size(cfg.max_size, label)
        logger.debug("clipboard_size_ok", label=label, bytes=size, limit=cfg.max_size)

        raw = self._inbox.read_buffer(cfg.max_size, label)
        sanitized = sanitize_bytes(raw)
        if not sanitized:
            raise NoSafeContent(label, f"all {len(raw)} bytes removed")

        outcome = compare(raw, sanitized, label, cfg.policy)
        if not outcome.committable:
            self._reporter.blocked(outcome)
            self._log_outcome(outcome, cfg.blocked_exit_code)
            return cfg.blocked_exit_code

        self._commit(outcome)
        self._log_outcome(outcome, 0)
        return 0

    def _commit(self, outcome: Outcome) -> None:
        """Write to the sink, then wipe the inbox once the write is confirmed."""
        try:
            self._sink.write(outcome.sanitized)
        except CommitFailed as e:
            raise CommitFailed(outcome.label, e.detail) from e

        self._reporter.committed(outcome)

        try:
            self._inbox.wipe()
        except WipeFailed as e:
            logger.warning("inbox_not_wiped", label=outcome.label, files=e.detail)
            self._reporter.wipe_failed(outcome.label)
            if self._audit:
                self._audit.log_wipe_failed(outcome.label)

    def _log_outcome(self, outcome: Outcome, exit_code: int) -> None:
        if self._audit:
            self._audit.log_outcome(
                outcome.kind.value,
                outcome.label,
                outcome.raw_size,
                outcome.raw_size - outcome.removed,
                exit_code,
            )
