"""Operator notifiers: desktop notifications and a Rich console fallback.

Notifications are fire-and-forget. A notifier that cannot deliver logs
the failure and returns; the run outcome does not depend on it.
"""

from __future__ import annotations

import subprocess

import structlog
from rich.console import Console
from rich.text import Text

from clipgate.sinks.base import Notifier

logger = structlog.get_logger()


class NotifySendNotifier(Notifier):
    """Desktop notifications through notify-send."""

    def __init__(self, title: str = "Dom0 clipboard", tool: str = "notify-send") -> None:
        self._title = title
        self._tool = tool

    def notify(self, message: str, duration_ms: int) -> None:
        args = [self._tool, "-t", str(duration_ms), self._title, message]
        try:
            subprocess.run(
                args,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                timeout=10,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.warning("notify_failed", tool=self._tool, error=str(e))


class ConsoleNotifier(Notifier):
    """Print notifications to the terminal using Rich."""

    def __init__(self, title: str = "Dom0 clipboard", console: Console | None = None) -> None:
        self._title = title
        self._console = console or Console(stderr=True, soft_wrap=True)

    def notify(self, message: str, duration_ms: int) -> None:
        if message.startswith("ERROR"):
            style = "bold red"
        elif message.startswith("WARNING"):
            style = "bold yellow"
        else:
            style = "green"

        # Build with Text to avoid Rich markup parsing of label values
        text = Text()
        text.append(f"[{self._title}] ", style="dim")
        text.append(message, style=style)
        self._console.print(text)
