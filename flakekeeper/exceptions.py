"""
Custom exception hierarchy for flakekeeper.

This module defines structured exception types used across flakekeeper.
All exceptions inherit from :class:`FlakeKeeperError` and support optional
structured metadata via the ``details`` attribute to improve diagnostics
and logging.
"""

from __future__ import annotations

from typing import Any, Mapping, MutableMapping, Optional


class FlakeKeeperError(Exception):
    """Base exception for all flakekeeper errors.

    All flakekeeper-specific exceptions should inherit from this class.
    It supports structured metadata via ``details`` for richer error
    reporting and debugging.

    Args:
        message: Human-readable error message.
        details: Optional structured metadata describing the error.
    """

    __slots__ = ("message", "details")

    def __init__(
        self,
        message: str,
        details: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.message: str = message
        # Internally normalize to a mutable dict
        self.details: MutableMapping[str, Any] = dict(details) if details else {}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        formatted = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({formatted})"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, details={dict(self.details)!r})"
        )


def _add_if(details: MutableMapping[str, Any], key: str, value: Any) -> None:
    """Add a key to ``details`` only if ``value`` is not ``None``."""
    if value is not None:
        details[key] = value


def _truncate(text: str, max_length: int = 200) -> str:
    """Truncate long text for safe logging or error reporting."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


class LockFileError(FlakeKeeperError):
    """Raised when a lock file cannot be turned into a lock graph.

    Args:
        message: Error description.
        file_path: Package or lock file the content came from.
    """

    __slots__ = ("file_path",)

    def __init__(
        self,
        message: str,
        *,
        file_path: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "file", file_path)

        super().__init__(message, details)

        self.file_path = file_path


class LockFileValidationError(LockFileError):
    """Raised when lock content does not match the lock graph schema.

    Args:
        message: Error description.
        diagnostic: Validator output describing every mismatch.
        file_path: Package or lock file the content came from.
    """

    __slots__ = ("diagnostic",)

    def __init__(
        self,
        message: str,
        *,
        diagnostic: Optional[str] = None,
        file_path: Optional[str] = None,
    ) -> None:
        super().__init__(message, file_path=file_path)

        self.diagnostic = diagnostic
        if diagnostic is not None:
            self.details["diagnostic"] = _truncate(diagnostic)


class UnsupportedLockVersionError(LockFileError):
    """Raised when a lock graph uses a format version we do not handle.

    Args:
        message: Error description.
        version: Version found in the lock file.
        supported_version: The version this tool understands.
        file_path: Package or lock file the content came from.
    """

    __slots__ = ("version", "supported_version")

    def __init__(
        self,
        message: str,
        *,
        version: Optional[int] = None,
        supported_version: Optional[int] = None,
        file_path: Optional[str] = None,
    ) -> None:
        super().__init__(message, file_path=file_path)

        self.version = version
        self.supported_version = supported_version
        _add_if(self.details, "version", version)
        _add_if(self.details, "supported", supported_version)


class FileOperationError(FlakeKeeperError):
    """Raised when file system operations fail.

    Args:
        message: Error description.
        file_path: Path to the file involved.
        operation: Operation being performed (read/find/validate).
        original_error: Original exception that triggered this error.
    """

    __slots__ = ("file_path", "operation", "original_error")

    def __init__(
        self,
        message: str,
        *,
        file_path: Optional[str] = None,
        operation: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", file_path)
        _add_if(details, "operation", operation)
        _add_if(
            details,
            "original_error",
            str(original_error) if original_error else None,
        )

        super().__init__(message, details)

        self.file_path = file_path
        self.operation = operation
        self.original_error = original_error


class ConfigError(FlakeKeeperError):
    """Raised when the configuration file is missing, unreadable, or invalid.

    Args:
        message: Error description.
        config_path: Path to the configuration file.
        option: Name of the offending option, if any.
    """

    __slots__ = ("config_path", "option")

    def __init__(
        self,
        message: str,
        *,
        config_path: Optional[str] = None,
        option: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "config", config_path)
        _add_if(details, "option", option)

        super().__init__(message, details)

        self.config_path = config_path
        self.option = option
