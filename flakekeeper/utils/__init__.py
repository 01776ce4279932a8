"""
Utility helpers for flakekeeper.

This package provides reusable utilities used across flakekeeper, including:

- Rich console output for status messages and extracted inputs
- Logging configuration and retrieval
- Read-only filesystem helpers for package and lock files

Only symbols listed in ``__all__`` are considered part of the public API.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Filesystem utilities
# ---------------------------------------------------------------------------

from flakekeeper.utils.filesystem import (
    find_package_files,
    get_sibling_file_name,
    read_local_file,
    safe_read_file,
)

# ---------------------------------------------------------------------------
# Logging utilities
# ---------------------------------------------------------------------------

from flakekeeper.utils.logger import (
    get_logger,
    setup_logging,
    verbosity_to_level,
)

# ---------------------------------------------------------------------------
# Console utilities
# ---------------------------------------------------------------------------

from flakekeeper.utils.console import (
    configure_console,
    dependency_table,
    get_console,
    print_dependencies,
    print_error,
    print_extraction_summary,
    print_success,
    print_warning,
    short_digest,
)

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    # Console
    "configure_console",
    "get_console",
    "print_error",
    "print_success",
    "print_warning",
    "dependency_table",
    "print_dependencies",
    "print_extraction_summary",
    "short_digest",
    # Logging
    "get_logger",
    "setup_logging",
    "verbosity_to_level",
    # Filesystem
    "safe_read_file",
    "read_local_file",
    "get_sibling_file_name",
    "find_package_files",
]
