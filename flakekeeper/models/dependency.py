"""
Dependency data model for flakekeeper.

This module defines the records produced by extraction: one
:class:`DependencyRecord` per updatable flake input, wrapped in a
:class:`PackageFileContent` envelope per package file.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class DependencyRecord:
    """
    An updatable dependency recovered from a lock graph.

    Attributes:
        dep_name: Name of the lock graph node.
        current_value: Loose reference the user declared (branch or tag).
        current_digest: Revision the input is pinned to.
        replace_string: Literal text to replace when updating.
        datasource: Resolution scheme for newer revisions.
        package_name: Fully qualified remote identifier (a URL).
    """

    dep_name: str
    current_value: Optional[str]
    current_digest: str
    replace_string: str
    datasource: str
    package_name: str

    def to_json(self) -> Dict[str, Any]:
        """
        Serialize the record to its camelCase, JSON-compatible form.

        Returns:
            Dictionary keyed the way downstream update engines expect.
        """
        entry: Dict[str, Any] = {"depName": self.dep_name}
        if self.current_value is not None:
            entry["currentValue"] = self.current_value
        entry.update(
            {
                "currentDigest": self.current_digest,
                "replaceString": self.replace_string,
                "datasource": self.datasource,
                "packageName": self.package_name,
            }
        )
        return entry

    def __str__(self) -> str:
        ref = self.current_value or "-"
        return f"{self.dep_name} {self.package_name} ({ref} @ {self.current_digest})"


@dataclass
class PackageFileContent:
    """
    Extraction result for a single package file.

    Attributes:
        deps: Dependencies in extraction order. Never empty; an empty
            extraction is reported as ``None`` instead of an envelope.
        package_file: Package file the dependencies belong to.
    """

    deps: List[DependencyRecord] = field(default_factory=list)
    package_file: Optional[str] = None

    def to_json(self) -> Dict[str, Any]:
        """Serialize the envelope, keeping only the ``deps`` field."""
        return {"deps": [dep.to_json() for dep in self.deps]}

    def __len__(self) -> int:
        return len(self.deps)
