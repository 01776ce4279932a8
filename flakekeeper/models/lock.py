"""
Lock graph data model for flakekeeper.

This module defines the typed representation of a ``flake.lock`` file.
The models double as the schema: validating raw lock content is a matter
of calling :meth:`LockGraph.model_validate` (see
:mod:`flakekeeper.core.schema`).

Field names follow Python conventions; the lock-file spelling
(``narHash``, ``revCount``, ``lastModified``) is accepted through aliases.
Keys the model does not know about are ignored.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional, Set, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, model_validator


class InputType(str, Enum):
    """Provider kinds a flake input can be fetched from."""

    GIT = "git"
    GITHUB = "github"
    GITLAB = "gitlab"
    INDIRECT = "indirect"
    SOURCEHUT = "sourcehut"
    TARBALL = "tarball"


class _LockModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class LockedInput(_LockModel):
    """The pinned, immutable provider record of an input.

    Attributes:
        type: Provider the revision was fetched from.
        rev: Pinned revision identifier.
        nar_hash: Content hash of the fetched tree.
        rev_count: Number of ancestors of ``rev``.
        last_modified: Commit timestamp of ``rev`` (seconds since epoch).
        host: Forge host, when not the provider default.
        owner: Repository owner on the forge.
        repo: Repository name on the forge.
        ref: Branch or tag the revision was resolved from.
        url: Fetch URL for ``git`` and ``tarball`` inputs.
    """

    type: InputType
    rev: StrictStr
    nar_hash: StrictStr = Field(alias="narHash")
    rev_count: StrictInt = Field(alias="revCount")
    last_modified: StrictInt = Field(alias="lastModified")
    host: Optional[StrictStr] = None
    owner: Optional[StrictStr] = None
    repo: Optional[StrictStr] = None
    ref: Optional[StrictStr] = None
    url: Optional[StrictStr] = None


class OriginalInput(_LockModel):
    """The loose reference as declared by the user in ``flake.nix``."""

    type: InputType
    host: Optional[StrictStr] = None
    owner: Optional[StrictStr] = None
    repo: Optional[StrictStr] = None
    ref: Optional[StrictStr] = None
    url: Optional[StrictStr] = None


#: An input either names a node directly or "follows" a path of aliases.
InputReference = Union[StrictStr, List[StrictStr]]


class Node(_LockModel):
    """One named entry of the lock graph."""

    inputs: Optional[Dict[str, InputReference]] = None
    locked: Optional[LockedInput] = None
    original: Optional[OriginalInput] = None

    @property
    def is_empty(self) -> bool:
        """True when the node lacks either side of the locked/original pair."""
        return self.locked is None or self.original is None


class LockGraph(_LockModel):
    """Top-level lock graph.

    Attributes:
        nodes: Every node in the graph, keyed by name.
        root: Name of the synthetic entrypoint node.
        version: Lock format version.
    """

    nodes: Dict[str, Node]
    root: StrictStr
    version: StrictInt

    @model_validator(mode="after")
    def _root_must_exist(self) -> "LockGraph":
        if self.root not in self.nodes:
            raise ValueError(f"root node {self.root!r} is not present in nodes")
        return self

    @property
    def root_node(self) -> Node:
        """The entrypoint node."""
        return self.nodes[self.root]

    def root_input_names(self) -> Set[str]:
        """Return the node names declared directly as inputs of root.

        Follows-style references (lists of aliases) point through another
        input and are not direct declarations.
        """
        inputs = self.root_node.inputs or {}
        return {ref for ref in inputs.values() if isinstance(ref, str)}
