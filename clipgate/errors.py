"""Error taxonomy for a gateway run.

Every error is terminal for the run except WipeFailed, which is raised
after the sanitized content was already delivered. Messages carried by
these exceptions never include clipboard content; labels are expected
to be filtered before they are passed in.
"""

from __future__ import annotations


class GatewayError(Exception):
    """Base class for all gateway run failures."""

    kind = "gateway_error"
    exit_code = 1

    def __init__(self, label: str = "", detail: str = "") -> None:
        self.label = label
        self.detail = detail
        super().__init__(f"{self.kind}: {detail}" if detail else self.kind)


class ToolMissing(GatewayError):
    """The trusted clipboard commit tool is not installed."""

    kind = "tool_missing"

    def __init__(self, tool: str) -> None:
        self.tool = tool
        super().__init__(detail=f"{tool} not found")


class EmptySource(GatewayError):
    """The clipboard buffer is missing, not a regular file, or empty."""

    kind = "empty_source"


class TooLarge(GatewayError):
    """The clipboard buffer exceeds the configured maximum size."""

    kind = "too_large"

    def __init__(self, label: str, size: int, limit: int) -> None:
        self.size = size
        self.limit = limit
        super().__init__(label, f"{size} bytes exceeds {limit}")


class NoSafeContent(GatewayError):
    """Nothing was left after allow-list filtering."""

    kind = "no_safe_content"


class CommitFailed(GatewayError):
    """The trusted clipboard sink did not confirm the write."""

    kind = "commit_failed"


class WipeFailed(GatewayError):
    """The inbox could not be cleared after a successful commit."""

    kind = "wipe_failed"
    exit_code = 0
