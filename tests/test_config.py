"""Tests for configuration loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from clipgate.config import FilterPolicy, GatewayConfig, NotifierKind, load_config


class TestGatewayConfig:
    """Tests for defaults and field validation."""

    def test_defaults(self) -> None:
        cfg = GatewayConfig()
        assert cfg.clipboard_path == "/run/qubes/qubes-clipboard.bin"
        assert cfg.notify_timeout == 7500
        assert cfg.max_size == 10 * 1024 * 1024
        assert cfg.policy is FilterPolicy.WARN
        assert cfg.blocked_exit_code == 0
        assert cfg.notifier is NotifierKind.NOTIFY_SEND
        assert cfg.audit_log_path is None

    def test_label_path_derived(self) -> None:
        cfg = GatewayConfig(clipboard_path="/tmp/clip.bin")
        assert cfg.label_path == Path("/tmp/clip.bin.source")

    def test_label_path_explicit(self) -> None:
        cfg = GatewayConfig(clipboard_path="/tmp/clip.bin", source_path="/tmp/origin")
        assert cfg.label_path == Path("/tmp/origin")

    def test_policy_from_string(self) -> None:
        assert GatewayConfig(policy="abort").policy is FilterPolicy.ABORT

    def test_unknown_policy_rejected(self) -> None:
        with pytest.raises(ValidationError):
            GatewayConfig(policy="sometimes")

    def test_zero_max_size_rejected(self) -> None:
        with pytest.raises(ValidationError):
            GatewayConfig(max_size=0)

    def test_blocked_exit_code_range(self) -> None:
        with pytest.raises(ValidationError):
            GatewayConfig(blocked_exit_code=256)

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ValidationError):
            GatewayConfig(allow_filtered=1)

    def test_frozen(self) -> None:
        cfg = GatewayConfig()
        with pytest.raises(ValidationError):
            cfg.policy = FilterPolicy.ABORT  # type: ignore[misc]


class TestLoadConfig:
    """Tests for YAML loading."""

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        cfg = load_config(tmp_path / "nope.yaml")
        assert cfg == GatewayConfig()

    def test_values_from_file(self, tmp_path: Path) -> None:
        path = tmp_path / "clipgate.yaml"
        path.write_text("policy: abort\nmax_size: 1024\nnotifier: console\n")
        cfg = load_config(path)
        assert cfg.policy is FilterPolicy.ABORT
        assert cfg.max_size == 1024
        assert cfg.notifier is NotifierKind.CONSOLE

    def test_non_mapping_document_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "clipgate.yaml"
        path.write_text("- just\n- a list\n")
        assert load_config(path) == GatewayConfig()

    def test_overrides_win(self, tmp_path: Path) -> None:
        path = tmp_path / "clipgate.yaml"
        path.write_text("policy: abort\n")
        cfg = load_config(path, policy="warn", max_size=None)
        assert cfg.policy is FilterPolicy.WARN
        assert cfg.max_size == GatewayConfig().max_size

    def test_invalid_policy_in_file(self, tmp_path: Path) -> None:
        path = tmp_path / "clipgate.yaml"
        path.write_text("policy: 2\n")
        with pytest.raises(ValidationError):
            load_config(path)
