"""
Filesystem utilities for flakekeeper.

This module provides the read-only file access used by extraction:
locating package files, deriving the sibling lock file, and reading it
with size limits. Unexpected filesystem errors are normalized to
``FileOperationError``; a missing lock file is reported as ``None``
because a flake without a lock is a normal state.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import List, Optional, Union

from flakekeeper.utils.logger import get_logger
from flakekeeper.exceptions import FileOperationError
from flakekeeper.constants import LOCK_FILE_NAME, MAX_FILE_SIZE, PACKAGE_FILE_NAME


logger = get_logger("filesystem")

PathLike = Union[str, Path]


def _validated_file(path: Path) -> Path:
    """Validate and resolve a file path that must exist."""
    if not path.exists():
        raise FileOperationError(
            f"File not found: {path}",
            file_path=str(path),
            operation="read",
        )
    if not path.is_file():
        raise FileOperationError(
            f"Not a file: {path}",
            file_path=str(path),
            operation="read",
        )
    return path.resolve()


def safe_read_file(
    file_path: PathLike,
    *,
    max_size: Optional[int] = MAX_FILE_SIZE,
    encoding: str = "utf-8",
) -> str:
    """Safely read a text file with optional size limits.

    Args:
        file_path: Path to the file.
        max_size: Maximum allowed file size in bytes (None disables limit).
        encoding: Text encoding.

    Returns:
        File contents as a string.

    Raises:
        FileOperationError: Missing, not a regular file, too large, or
            unreadable.
    """
    path = _validated_file(Path(file_path))
    size = path.stat().st_size

    if max_size is not None and size > max_size:
        raise FileOperationError(
            f"File too large: {size} bytes (max {max_size})",
            file_path=str(path),
            operation="read",
        )

    try:
        return path.read_text(encoding=encoding)
    except Exception as exc:
        raise FileOperationError(
            f"Failed to read file: {exc}",
            file_path=str(path),
            operation="read",
            original_error=exc,
        ) from exc


def get_sibling_file_name(
    package_file: PathLike,
    file_name: str = LOCK_FILE_NAME,
) -> Path:
    """Return the path of ``file_name`` in the directory of ``package_file``."""
    return Path(package_file).parent / file_name


async def read_local_file(file_path: PathLike) -> Optional[str]:
    """Read a text file without blocking the event loop.

    Args:
        file_path: Path to read.

    Returns:
        File contents, or ``None`` when the file does not exist.

    Raises:
        FileOperationError: The path exists but cannot be read.
    """
    path = Path(file_path)
    if not path.exists():
        logger.debug("No file at %s", path)
        return None

    return await asyncio.to_thread(safe_read_file, path)


def find_package_files(
    directory: PathLike = ".",
    *,
    recursive: bool = True,
) -> List[Path]:
    """Find ``flake.nix`` package files within a directory."""
    root = Path(directory).resolve()
    if not root.is_dir():
        return []

    iterator = (
        root.rglob(PACKAGE_FILE_NAME) if recursive else root.glob(PACKAGE_FILE_NAME)
    )
    return sorted(set(iterator))

