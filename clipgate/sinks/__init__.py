"""Output sinks: the trusted clipboard and operator notifications."""

from __future__ import annotations

from clipgate.sinks.base import ClipboardSink, Notifier
from clipgate.sinks.notify import ConsoleNotifier, NotifySendNotifier
from clipgate.sinks.xclip import XclipSink

__all__ = [
    "ClipboardSink",
    "ConsoleNotifier",
    "Notifier",
    "NotifySendNotifier",
    "XclipSink",
]
