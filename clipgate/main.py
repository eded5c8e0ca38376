"""CLI entry point for the clipboard gateway using Click."""

from __future__ import annotations

import logging
import os
import sys

import click
import structlog
import yaml
from pydantic import ValidationError

from clipgate import __version__
from clipgate.config import DEFAULT_CONFIG_PATH, GatewayConfig, NotifierKind, load_config

logger = structlog.get_logger()


def _configure_logging(log_level: str) -> None:
    """Configure structlog for console output on stderr."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer() if sys.stderr.isatty() else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(log_level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def _resolve_config_path(config_path: str | None) -> str:
    return config_path or os.environ.get("CLIPGATE_CONFIG", DEFAULT_CONFIG_PATH)


def _build_gateway(cfg: GatewayConfig):
    """Build the gateway and its collaborators from configuration.

    Returns:
        Tuple of (ClipboardGateway, AuditLogger or None).
    """
    from clipgate.inbox import ClipboardInbox
    from clipgate.pipeline import ClipboardGateway
    from clipgate.security.audit import AuditLogger
    from clipgate.sinks.notify import ConsoleNotifier, NotifySendNotifier
    from clipgate.sinks.xclip import XclipSink

    sink = XclipSink(
        tool=cfg.clipboard_tool,
        selection=cfg.selection,
        strip_last_newline=cfg.strip_last_newline,
    )
    if cfg.notifier == NotifierKind.CONSOLE:
        notifier = ConsoleNotifier(cfg.notify_title)
    else:
        notifier = NotifySendNotifier(cfg.notify_title)
    audit = AuditLogger(cfg.audit_log_path) if cfg.audit_log_path else None

    gateway = ClipboardGateway(cfg, ClipboardInbox.from_config(cfg), sink, notifier, audit)
    return gateway, audit


@click.group()
@click.version_option(version=__version__, prog_name="clipgate")
def cli() -> None:
    """Clipgate - sanitize the inter-VM clipboard into the trusted clipboard."""


@cli.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help=f"Path to configuration file. Defaults to CLIPGATE_CONFIG env or {DEFAULT_CONFIG_PATH}.",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Logging level. Defaults to CLIPGATE_LOG_LEVEL env or WARNING.",
)
@click.option(
    "--policy",
    type=click.Choice(["abort", "warn"]),
    default=None,
    help="Override the filter policy from the configuration file.",
)
@click.option("--max-size", type=int, default=None, help="Override the maximum clipboard size in bytes.")
@click.option("--console", is_flag=True, default=False, help="Print notifications to the terminal.")
def run(
    config_path: str | None,
    log_level: str | None,
    policy: str | None,
    max_size: int | None,
    console: bool,
) -> None:
    """Sanitize the global clipboard and copy it into the local clipboard."""
    level = log_level or os.environ.get("CLIPGATE_LOG_LEVEL", "WARNING")
    _configure_logging(level)

    try:
        cfg = load_config(
            _resolve_config_path(config_path),
            policy=policy,
            max_size=max_size,
            notifier=NotifierKind.CONSOLE if console else None,
        )
    except (ValidationError, OSError, yaml.YAMLError) as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    try:
        gateway, audit = _build_gateway(cfg)
    except OSError as e:
        click.echo(f"Startup error: {e}", err=True)
        logger.exception("startup_failed")
        sys.exit(1)

    try:
        exit_code = gateway.run()
    except Exception:
        logger.exception("run_crashed")
        exit_code = 1
    finally:
        if audit:
            audit.close()
    sys.exit(exit_code)


@cli.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to configuration file.",
)
def check_config(config_path: str | None) -> None:
    """Validate the configuration file without touching the clipboard."""
    path = _resolve_config_path(config_path)

    try:
        cfg = load_config(path)
    except (ValidationError, OSError, yaml.YAMLError) as e:
        click.echo(f"FAIL: {e}", err=True)
        sys.exit(1)

    click.echo("Configuration OK")
    click.echo(f"  Clipboard: {cfg.clipboard_path}")
    click.echo(f"  Source label: {cfg.label_path}")
    click.echo(f"  Policy: {cfg.policy.value}")
    click.echo(f"  Max size: {cfg.max_size} bytes")
    click.echo(f"  Blocked exit code: {cfg.blocked_exit_code}")
    click.echo(f"  Clipboard tool: {cfg.clipboard_tool} ({cfg.selection})")
    click.echo(f"  Notifier: {cfg.notifier.value} ({cfg.notify_timeout} ms)")
    click.echo(f"  Audit log: {cfg.audit_log_path or 'disabled'}")


@cli.command(name="filter")
@click.option(
    "--max-size",
    type=int,
    default=GatewayConfig().max_size,
    show_default=True,
    help="Refuse input larger than this many bytes.",
)
def filter_command(max_size: int) -> None:
    """Apply the allow-list filter to stdin and write the result to stdout.

    The number of removed bytes is reported on stderr.
    """
    from clipgate.security.filter import sanitize_bytes

    data = click.get_binary_stream("stdin").read(max_size + 1)
    if len(data) > max_size:
        click.echo(f"Input too large (more than {max_size} bytes)", err=True)
        sys.exit(1)

    sanitized = sanitize_bytes(data)
    click.get_binary_stream("stdout").write(sanitized)
    click.echo(f"removed {len(data) - len(sanitized)} bytes", err=True)


if __name__ == "__main__":
    cli()
