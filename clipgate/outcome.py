"""Result of comparing the raw buffer with its sanitized projection."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class OutcomeKind(str, Enum):
    """Comparator verdict for a run that produced safe content."""

    CLEAN = "clean"
    WARNED = "warned"
    BLOCKED = "blocked"


@dataclass(frozen=True)
class Outcome:
    """Comparator result consumed by the commit step and the reporter.

    ``sanitized`` is empty for blocked outcomes; blocked content is
    never handed to the sink.
    """

    kind: OutcomeKind
    label: str
    raw_size: int
    removed: int
    sanitized: bytes = b""

    @property
    def committable(self) -> bool:
        """Whether the sanitized content may be written to the clipboard."""
        return self.kind is not OutcomeKind.BLOCKED
