"""
Unified data model exports for flakekeeper.

This module re-exports all core data models to provide a stable and
convenient public API. Users can import models directly from
``flakekeeper.models`` instead of individual submodules.

Example:
    >>> from flakekeeper.models import LockGraph, DependencyRecord
"""

from __future__ import annotations

from flakekeeper.models.dependency import DependencyRecord, PackageFileContent
from flakekeeper.models.lock import (
    InputType,
    LockedInput,
    LockGraph,
    Node,
    OriginalInput,
)

__all__ = [
    "InputType",
    "LockedInput",
    "OriginalInput",
    "Node",
    "LockGraph",
    "DependencyRecord",
    "PackageFileContent",
]
