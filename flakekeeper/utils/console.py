"""
Console output utilities for flakekeeper using Rich.

This module renders extraction results and status messages for CLI
commands. For diagnostic or debug output, use :mod:`flakekeeper.utils.logger`.

Guidelines:
- print_* functions: user-facing status messages
- dependency_table / print_dependencies: extracted flake inputs
- print_extraction_summary: the closing per-run summary line
- Logging should never go through this module
"""

from __future__ import annotations

import os
import sys
import threading
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Sequence, Tuple

from rich.table import Table
from rich.theme import Theme
from rich.console import Console

if TYPE_CHECKING:
    from flakekeeper.models.dependency import PackageFileContent

# ---------------------------------------------------------------------------
# Theme configuration
# ---------------------------------------------------------------------------

FLAKEKEEPER_THEME = Theme(
    {
        "success": "bold green",
        "error": "bold red",
        "warning": "bold yellow",
        "dim": "dim",
        "flake.input": "bold cyan",
        "flake.package": "bright_cyan",
        "flake.digest": "dim",
    }
)

# ---------------------------------------------------------------------------
# Console lifecycle management
# ---------------------------------------------------------------------------

_console: Optional[Console] = None
_console_lock = threading.Lock()


def _should_use_color() -> bool:
    """Return True if the environment allows colored output."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("CI"):
        return False
    try:
        return sys.stdout.isatty()
    except (AttributeError, OSError):
        return False


def _build_console(color: bool) -> Console:
    use_color = color and _should_use_color()
    return Console(
        theme=FLAKEKEEPER_THEME,
        no_color=not use_color,
        highlight=False,
    )


def configure_console(*, color: bool = True) -> Console:
    """Replace the shared console for a CLI invocation.

    Args:
        color: The ``--color/--no-color`` switch. Colors are still
            disabled when ``NO_COLOR`` or ``CI`` is set, or stdout is not
            a terminal.

    Returns:
        The new console.
    """
    global _console

    with _console_lock:
        _console = _build_console(color)
        return _console


def get_console() -> Console:
    """Return the shared console, creating a default one on first use."""
    global _console

    if _console is None:
        with _console_lock:
            if _console is None:
                _console = _build_console(True)
    return _console


# ---------------------------------------------------------------------------
# Status message helpers
# ---------------------------------------------------------------------------


def print_success(message: str, *, prefix: str = "[OK]") -> None:
    """Print a success message."""
    get_console().print(f"{prefix} {message}", style="success", markup=False)


def print_error(message: str, *, prefix: str = "[ERROR]") -> None:
    """Print an error message."""
    get_console().print(f"{prefix} {message}", style="error", markup=False)


def print_warning(message: str, *, prefix: str = "[WARNING]") -> None:
    """Print a warning message."""
    get_console().print(f"{prefix} {message}", style="warning", markup=False)


# ---------------------------------------------------------------------------
# Extraction results
# ---------------------------------------------------------------------------


def short_digest(digest: str, length: int = 12) -> str:
    """Shorten a revision hash for table display."""
    return digest if len(digest) <= length else digest[:length]


def dependency_table(
    found: Sequence[Tuple[Path, "PackageFileContent"]],
    *,
    title: str = "Flake Inputs",
) -> Table:
    """Build a table with one row per extracted flake input.

    Args:
        found: ``(file, extraction result)`` pairs, in display order.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold")
    # Long URLs and paths fold instead of being cut with an ellipsis
    table.add_column("File", style="dim", overflow="fold")
    table.add_column("Input", style="flake.input", no_wrap=True, overflow="fold")
    table.add_column("Package", style="flake.package", overflow="fold")
    table.add_column("Current", justify="center", overflow="fold")
    table.add_column(
        "Digest", style="flake.digest", justify="center", no_wrap=True, overflow="fold"
    )
    table.add_column("Datasource", justify="center", overflow="fold")

    for path, result in found:
        for dep in result.deps:
            table.add_row(
                str(path),
                dep.dep_name,
                dep.package_name,
                dep.current_value or "-",
                short_digest(dep.current_digest),
                dep.datasource,
            )
    return table


def print_dependencies(found: Sequence[Tuple[Path, "PackageFileContent"]]) -> None:
    """Print the dependency table, or nothing when no input was found."""
    if not any(len(result) for _, result in found):
        return
    get_console().print(dependency_table(found))


def print_extraction_summary(
    found: Sequence[Tuple[Path, "PackageFileContent"]],
) -> None:
    """Print how many inputs were found across how many package files."""
    total = sum(len(result) for _, result in found)
    if total:
        print_success(f"Found {total} updatable input(s) in {len(found)} file(s)")
    else:
        print_warning("No updatable flake inputs found")
