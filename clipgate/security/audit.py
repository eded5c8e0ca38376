"""Structured JSON audit logging using structlog.

Every run outcome is recorded to a JSONL file for post-hoc review:
clean and warned commits, policy blocks, and failures. Entries carry
the filtered origin label and byte counts only, never clipboard
content.
"""

from __future__ import annotations

from pathlib import Path
from types import TracebackType

import structlog


class AuditLogger:
    """Structured audit logger for gateway run events."""

    def __init__(self, log_path: str) -> None:
        """Initialize the audit logger.

        Args:
            log_path: Path to the JSONL audit log file.
        """
        self._log_path = Path(log_path)
        self._log_path.parent.mkdir(parents=True, exist_ok=True)
        self._file = open(self._log_path, "a", buffering=1)  # noqa: SIM115

        self._logger = structlog.wrap_logger(
            structlog.PrintLogger(file=self._file),
            processors=[
                structlog.processors.add_log_level,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.JSONRenderer(),
            ],
            # Independent of the console log level: every audit entry is kept
            wrapper_class=structlog.make_filtering_bound_logger(0),
            context_class=dict,
        )

    def __enter__(self) -> AuditLogger:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def log_outcome(
        self,
        outcome: str,
        label: str,
        raw_bytes: int,
        sanitized_bytes: int,
        exit_code: int,
    ) -> None:
        """Log the comparator outcome of a run that got past filtering."""
        log = self._logger.warning if outcome != "clean" else self._logger.info
        log(
            "run_outcome",
            outcome=outcome,
            label=label,
            raw_bytes=raw_bytes,
            sanitized_bytes=sanitized_bytes,
            removed_bytes=raw_bytes - sanitized_bytes,
            exit_code=exit_code,
        )

    def log_error(self, kind: str, label: str, exit_code: int) -> None:
        """Log a run that ended with an error."""
        self._logger.error("run_error", kind=kind, label=label, exit_code=exit_code)

    def log_wipe_failed(self, label: str) -> None:
        """Log that the inbox could not be cleared after commit."""
        self._logger.warning("wipe_failed", label=label)

    def close(self) -> None:
        """Close the audit log file."""
        self._file.close()
