"""Lock graph schema validation.

Turns raw ``flake.lock`` content into a validated :class:`LockGraph`.
Validation is all-or-nothing: any structural mismatch (missing required
field, wrong primitive type, unknown provider type, a root that names no
node) rejects the whole document with a diagnostic. Callers never attempt
partial recovery.

Typical usage::

    from flakekeeper.core.schema import parse_lock_graph

    graph = parse_lock_graph(text, package_file="flake.nix", supported_version=7)
"""

from __future__ import annotations

import json
from typing import Any, Optional

from pydantic import ValidationError

from flakekeeper.models.lock import LockGraph
from flakekeeper.exceptions import LockFileValidationError, UnsupportedLockVersionError


def validate_lock_graph(data: Any, *, package_file: Optional[str] = None) -> LockGraph:
    """Coerce already-deserialized lock content into a :class:`LockGraph`.

    Args:
        data: Decoded JSON document.
        package_file: File the content came from, for diagnostics.

    Returns:
        The validated lock graph.

    Raises:
        LockFileValidationError: ``data`` does not match the lock graph shape.
    """
    try:
        return LockGraph.model_validate(data)
    except ValidationError as exc:
        raise LockFileValidationError(
            f"Invalid lock file: {exc.error_count()} validation error(s)",
            diagnostic=str(exc),
            file_path=package_file,
        ) from exc


def parse_lock_graph(
    content: str,
    *,
    package_file: Optional[str] = None,
    supported_version: Optional[int] = None,
) -> LockGraph:
    """Decode and validate lock content.

    Args:
        content: Raw ``flake.lock`` text.
        package_file: File the content came from, for diagnostics.
        supported_version: When given, reject graphs of any other version.

    Returns:
        The validated lock graph.

    Raises:
        LockFileValidationError: The text is not JSON or not a lock graph.
        UnsupportedLockVersionError: The graph is valid but its ``version``
            differs from ``supported_version``.
    """
    try:
        data = json.loads(content)
    except (json.JSONDecodeError, RecursionError) as exc:
        # RecursionError: nesting deeper than the decoder can follow
        raise LockFileValidationError(
            "Invalid lock file: not valid JSON",
            diagnostic=str(exc),
            file_path=package_file,
        ) from exc

    graph = validate_lock_graph(data, package_file=package_file)

    if supported_version is not None and graph.version != supported_version:
        raise UnsupportedLockVersionError(
            "Unsupported flake lock version",
            version=graph.version,
            supported_version=supported_version,
            file_path=package_file,
        )

    return graph
