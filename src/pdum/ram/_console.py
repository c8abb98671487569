"""Shared rich console and verbose-mode switch."""

from __future__ import annotations

import os

from rich.console import Console

console = Console()

_verbose = bool(os.getenv("PDUM_RAM_DEBUG"))


def set_verbose(enabled: bool) -> None:
    """Turn debug output on or off for the whole package."""
    global _verbose
    _verbose = enabled


def is_verbose() -> bool:
    return _verbose


def debug(message: str) -> None:
    """Print ``message`` dimmed, only in verbose mode."""
    if _verbose:
        console.print(f"[dim]{message}[/dim]", highlight=False)
