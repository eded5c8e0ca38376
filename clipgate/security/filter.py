"""Allow-list byte filter.

Keeps only tab, newline, carriage return and printable ASCII
(0x20-0x7E). Everything else is removed outright, never escaped or
replaced: C0 controls, DEL, and every byte of 0x80 and above,
including all multi-byte encodings.

Terminal escape sequences are removed as a unit. Dropping only the
ESC byte of ``ESC [ 3 1 m`` would leave ``[31m`` in the clipboard, so
a complete CSI or terminated OSC sequence goes together with its
introducer. Any other ESC is dropped on its own and the allowed bytes
after it stay, so a stray ESC never costs the following text. The
result is still a subsequence of the input made only of allowed bytes.
"""

from __future__ import annotations

import re

ALLOWED_BYTES: frozenset[int] = frozenset({0x09, 0x0A, 0x0D, *range(0x20, 0x7F)})

# Deletion set for bytes.translate, the complement of ALLOWED_BYTES
_REMOVED_BYTES = bytes(b for b in range(256) if b not in ALLOWED_BYTES)

_ESCAPE_SEQUENCE = re.compile(
    rb"\x1b\[[\x30-\x3f]*[\x20-\x2f]*[\x40-\x7e]"  # CSI: ESC [ params intermediates final
    rb"|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)"  # OSC: ESC ] ... BEL or ST
)


def sanitize_bytes(data: bytes) -> bytes:
    """Project a byte string onto the allow-set.

    Stateless; no data is carried between calls. The result is a
    subsequence of ``data``: surviving bytes keep their order and are
    never duplicated. Applying it twice changes nothing.

    Args:
        data: Untrusted input bytes. Not modified.

    Returns:
        A new bytes object containing only allowed bytes.
    """
    data = bytes(data)
    if b"\x1b" in data:
        data = _ESCAPE_SEQUENCE.sub(b"", data)
    return data.translate(None, _REMOVED_BYTES)


def sanitize_label(data: bytes) -> str:
    """Filter an origin label and decode it for display."""
    return sanitize_bytes(data).decode("ascii")


def is_safe(data: bytes) -> bool:
    """Whether every byte of ``data`` is in the allow-set."""
    return all(b in ALLOWED_BYTES for b in data)
