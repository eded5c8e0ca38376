"""The untrusted clipboard inbox: a buffer file and its origin label.

The inbox is owned by the inter-VM transport and only borrowed for the
duration of a run: validated, size-checked from filesystem metadata,
read once, and wiped once after the trusted sink confirmed the commit.
Nothing read from it is kept between runs.
"""

from __future__ import annotations

import fcntl
import os
import stat
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import structlog

from clipgate.config import GatewayConfig
from clipgate.errors import EmptySource, TooLarge, WipeFailed
from clipgate.security.filter import sanitize_label

logger = structlog.get_logger()

# Qubes names are at most 31 characters; anything longer is not a real label
MAX_LABEL_BYTES = 256
MAX_LABEL_CHARS = 64


def _open_regular(path: Path) -> int | None:
    """Open ``path`` read-only without blocking on FIFOs or devices.

    Returns:
        A file descriptor, or None if ``path`` is not a regular file.

    Raises:
        OSError: If the path cannot be opened at all.
    """
    fd = os.open(path, os.O_RDONLY | os.O_NONBLOCK)
    if not stat.S_ISREG(os.fstat(fd).st_mode):
        os.close(fd)
        return None
    return fd


class ClipboardInbox:
    """Handle on the buffer/label file pair deposited by the transport."""

    def __init__(self, buffer_path: str | Path, label_path: str | Path) -> None:
        self.buffer_path = Path(buffer_path)
        self.label_path = Path(label_path)

    @classmethod
    def from_config(cls, config: GatewayConfig) -> ClipboardInbox:
        """Build the inbox handle from the configured paths."""
        return cls(config.clipboard_path, config.label_path)

    @contextmanager
    def claimed(self) -> Iterator[None]:
        """Hold an exclusive advisory lock on the buffer for a whole run.

        A concurrent run blocks here until the holder has committed and
        wiped, then finds an empty inbox. A missing buffer is not locked;
        check_source reports it, as it reports FIFOs and other
        non-regular files, which are never opened for locking.
        """
        try:
            fd = _open_regular(self.buffer_path)
        except OSError:
            fd = None
        if fd is None:
            yield
            return
        try:
            fcntl.flock(fd, fcntl.LOCK_EX)
            logger.debug("inbox_claimed", path=str(self.buffer_path))
            yield
        finally:
            os.close(fd)

    def check_source(self) -> None:
        """Verify the buffer exists, is a regular file and is non-empty.

        Raises:
            EmptySource: If any of those checks fails.
        """
        try:
            st = os.stat(self.buffer_path)
        except OSError:
            raise EmptySource(detail="clipboard buffer missing") from None
        if not stat.S_ISREG(st.st_mode):
            raise EmptySource(detail="clipboard buffer is not a regular file")
        if st.st_size == 0:
            raise EmptySource(detail="clipboard buffer is empty")

    def read_label(self) -> str:
        """Read the origin label and pass it through the allow-list filter.

        The label is short and untrusted: at most MAX_LABEL_BYTES are read
        and the filtered result is cut to MAX_LABEL_CHARS. A missing,
        unreadable or non-regular label file yields an empty label.
        """
        try:
            fd = _open_regular(self.label_path)
        except OSError:
            fd = None
        if fd is None:
            logger.warning("label_unreadable", path=str(self.label_path))
            return ""
        with os.fdopen(fd, "rb") as f:
            raw = f.read(MAX_LABEL_BYTES)
        return sanitize_label(raw)[:MAX_LABEL_CHARS]

    def check_size(self, max_size: int, label: str) -> int:
        """Return the buffer size from filesystem metadata.

        The content itself is never read here.

        Raises:
            TooLarge: If the buffer is larger than ``max_size`` bytes.
            EmptySource: If the buffer disappeared since check_source.
        """
        try:
            size = os.stat(self.buffer_path).st_size
        except OSError:
            raise EmptySource(label, "clipboard buffer missing") from None
        if size > max_size:
            raise TooLarge(label, size, max_size)
        return size

    def read_buffer(self, max_size: int, label: str) -> bytes:
        """Read the raw buffer, never more than ``max_size + 1`` bytes.

        Raises:
            TooLarge: If the file grew past ``max_size`` after check_size.
            EmptySource: If the buffer is gone or now empty.
        """
        try:
            fd = _open_regular(self.buffer_path)
        except OSError:
            fd = None
        if fd is None:
            raise EmptySource(label, "clipboard buffer unreadable")
        with os.fdopen(fd, "rb") as f:
            data = f.read(max_size + 1)
        if len(data) > max_size:
            raise TooLarge(label, len(data), max_size)
        if not data:
            raise EmptySource(label, "clipboard buffer is empty")
        return data

    def wipe(self) -> None:
        """Truncate both the buffer and the label file to empty.

        Raises:
            WipeFailed: If either file could not be truncated.
        """
        failed: list[str] = []
        for path in (self.buffer_path, self.label_path):
            try:
                with open(path, "wb"):
                    pass
            except OSError as e:
                logger.warning("wipe_failed", path=str(path), error=e.strerror)
                failed.append(path.name)
        if failed:
            raise WipeFailed(detail=", ".join(failed))
        logger.debug("inbox_wiped")
