"""Trusted clipboard sink backed by xclip.

Runs xclip with subprocess and an argument list, never through a
shell. Only sanitized bytes ever reach this module.
"""

from __future__ import annotations

import shutil
import subprocess

import structlog

from clipgate.errors import CommitFailed
from clipgate.sinks.base import ClipboardSink

logger = structlog.get_logger()


class XclipSink(ClipboardSink):
    """Write the sanitized clipboard into an X selection via xclip."""

    def __init__(
        self,
        tool: str = "xclip",
        selection: str = "clipboard",
        strip_last_newline: bool = True,
        timeout: float = 10.0,
    ) -> None:
        self._tool = tool
        self._selection = selection
        self._strip_last_newline = strip_last_newline
        self._timeout = timeout

    @property
    def name(self) -> str:
        return self._tool

    def available(self) -> bool:
        return shutil.which(self._tool) is not None

    def command(self) -> list[str]:
        """Build the xclip argument list."""
        args = [self._tool]
        # Terminator normalization belongs to the sink: drop one trailing newline
        if self._strip_last_newline:
            args.append("-rmlastnl")
        args.extend(["-selection", self._selection])
        return args

    def write(self, data: bytes) -> None:
        """Pipe ``data`` into xclip.

        xclip forks to serve the selection and keeps inherited streams
        open, so its output is discarded rather than captured.

        Raises:
            CommitFailed: If xclip cannot be started or fed, times out, or exits
                non-zero.
        """
        args = self.command()
        try:
            proc = subprocess.run(
                args,
                input=data,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                timeout=self._timeout,
                check=False,
            )
        except FileNotFoundError:
            raise CommitFailed(detail=f"{self._tool} not found") from None
        except OSError as e:
            logger.error("clipboard_tool_unusable", tool=self._tool, error=e.strerror)
            raise CommitFailed(detail=f"{self._tool} could not run: {e.strerror}") from None
        except subprocess.TimeoutExpired:
            raise CommitFailed(detail=f"{self._tool} timed out") from None

        if proc.returncode != 0:
            logger.error(
                "clipboard_tool_failed",
                tool=self._tool,
                exit_code=proc.returncode,
            )
            raise CommitFailed(detail=f"{self._tool} exited with {proc.returncode}")
