"""Core infrastructure for the Crazy Eights server and CLI."""

from core.config import Settings, load_settings, setup_logging

__all__ = [
    "Settings",
    "load_settings",
    "setup_logging",
]
