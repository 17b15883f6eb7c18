"""
Console output helpers built on rich.

Respects NO_COLOR and FORCE_COLOR, and falls back to plain text when stdout
is not a terminal.
"""

from __future__ import annotations

import os
import sys
from typing import Any

from rich.console import Console
from rich.theme import Theme

# Nord color palette (https://www.nordtheme.com/)
CLOUDING_THEME = Theme(
    {
        "info": "#88C0D0",
        "success": "#A3BE8C",
        "warning": "#EBCB8B",
        "error": "#BF616A bold",
        "muted": "#D8DEE9",
    }
)


def _should_use_color() -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    return sys.stdout.isatty()


console = Console(theme=CLOUDING_THEME, no_color=not _should_use_color())
err_console = Console(theme=CLOUDING_THEME, stderr=True, no_color=not _should_use_color())


def success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]✓ {message}[/success]", soft_wrap=True)


def error(message: str) -> None:
    """Print an error message to stderr."""
    err_console.print(f"[error]✗ {message}[/error]", soft_wrap=True)


def info(message: str) -> None:
    console.print(f"[info]ℹ {message}[/info]", soft_wrap=True)


def print_record(record: dict[str, Any]) -> None:
    """Print a decoded record as JSON."""
    console.print_json(data=record)
