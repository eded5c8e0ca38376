"""Shared fixtures and test doubles for the gateway tests."""

from __future__ import annotations

from pathlib import Path

import pytest
import structlog

from clipgate.config import GatewayConfig
from clipgate.errors import CommitFailed
from clipgate.inbox import ClipboardInbox
from clipgate.sinks.base import ClipboardSink, Notifier


class FakeSink(ClipboardSink):
    """In-memory clipboard sink recording every write."""

    def __init__(self, present: bool = True, fail: bool = False) -> None:
        self.present = present
        self.fail = fail
        self.writes: list[bytes] = []
        self.inbox_at_write: list[bytes] = []
        self.watch: Path | None = None

    @property
    def name(self) -> str:
        return "fakeclip"

    def available(self) -> bool:
        return self.present

    def write(self, data: bytes) -> None:
        if self.watch is not None:
            self.inbox_at_write.append(self.watch.read_bytes())
        if self.fail:
            raise CommitFailed(detail="fakeclip refused")
        self.writes.append(data)


class RecordingNotifier(Notifier):
    """Notifier that keeps (message, duration) pairs."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, int]] = []

    def notify(self, message: str, duration_ms: int) -> None:
        self.messages.append((message, duration_ms))

    @property
    def texts(self) -> list[str]:
        return [m for m, _ in self.messages]


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Undo any structlog configuration made by the CLI under test."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def sink() -> FakeSink:
    return FakeSink()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def clip_path(tmp_path: Path) -> Path:
    return tmp_path / "qubes-clipboard.bin"


@pytest.fixture
def config(clip_path: Path) -> GatewayConfig:
    return GatewayConfig(clipboard_path=str(clip_path))


@pytest.fixture
def inbox(config: GatewayConfig) -> ClipboardInbox:
    return ClipboardInbox.from_config(config)


@pytest.fixture
def fill_inbox(clip_path: Path):
    """Write a buffer and its label the way the transport would."""

    def _fill(content: bytes, label: bytes = b"work-vm") -> None:
        clip_path.write_bytes(content)
        Path(str(clip_path) + ".source").write_bytes(label)

    return _fill
