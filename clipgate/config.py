"""Configuration loading and validation using Pydantic models.

Loads gateway configuration from a single YAML file. Every value is
fixed for the lifetime of a run; an invalid value is a startup error
raised before the clipboard inbox is touched.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field

DEFAULT_CONFIG_PATH = "/etc/clipgate/clipgate.yaml"


class FilterPolicy(str, Enum):
    """What to do when the allow-list filter removed any bytes."""

    ABORT = "abort"
    WARN = "warn"


class NotifierKind(str, Enum):
    """Where operator notifications are sent."""

    NOTIFY_SEND = "notify-send"
    CONSOLE = "console"


class GatewayConfig(BaseModel):
    """Gateway behavior configuration loaded from clipgate.yaml."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    clipboard_path: str = "/run/qubes/qubes-clipboard.bin"
    source_path: str | None = None
    notify_timeout: int = Field(default=7500, ge=1, le=600_000)
    notify_title: str = "Dom0 clipboard"
    max_size: int = Field(default=10 * 1024 * 1024, ge=1)
    policy: FilterPolicy = FilterPolicy.WARN
    blocked_exit_code: int = Field(default=0, ge=0, le=255)
    notifier: NotifierKind = NotifierKind.NOTIFY_SEND
    clipboard_tool: str = "xclip"
    selection: str = "clipboard"
    strip_last_newline: bool = True
    audit_log_path: str | None = None
    use_lock: bool = True

    @property
    def label_path(self) -> Path:
        """Path of the origin label file, derived from the clipboard path."""
        if self.source_path:
            return Path(self.source_path)
        return Path(self.clipboard_path + ".source")


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load and parse a YAML file, returning an empty dict if missing."""
    if not path.exists():
        return {}
    with open(path) as f:
        data = yaml.safe_load(f)
    return data if isinstance(data, dict) else {}


def load_config(path: str | Path, **overrides: Any) -> GatewayConfig:
    """Load gateway configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file. A missing file
            yields the defaults.
        **overrides: Values taking precedence over the file; ``None``
            values are ignored.

    Returns:
        The validated GatewayConfig.

    Raises:
        pydantic.ValidationError: If the file or overrides hold invalid values.
    """
    data = _load_yaml(Path(path))
    data.update({k: v for k, v in overrides.items() if v is not None})
    return GatewayConfig(**data)
