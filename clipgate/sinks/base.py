"""Interfaces for the two outputs of a gateway run.

The trusted clipboard sink receives sanitized bytes; the notifier
receives operator messages. The pipeline only talks to these
abstractions so that tests and alternative platforms can supply their
own implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class ClipboardSink(ABC):
    """Trusted clipboard commit capability."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Name of the underlying tool, used in operator messages."""

    @abstractmethod
    def available(self) -> bool:
        """Whether the commit capability can be reached at all."""

    @abstractmethod
    def write(self, data: bytes) -> None:
        """Commit exactly ``data`` to the trusted clipboard.

        The sink must not append a line terminator of its own accord.
        Returning normally confirms the commit.

        Raises:
            CommitFailed: If the clipboard did not accept the content.
        """


class Notifier(ABC):
    """Operator notification sink, fire-and-forget."""

    @abstractmethod
    def notify(self, message: str, duration_ms: int) -> None:
        """Show ``message`` to the operator for ``duration_ms`` milliseconds."""
