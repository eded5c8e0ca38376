"""Clipboard sanitization gateway for the trusted control domain."""

__version__ = "0.1.0"
