"""Lock graph traversal.

Selects the nodes of a validated lock graph that are worth classifying.
Only root is structural; every other node is a candidate that may be
dropped for one of these reasons, checked in order:

1. it is the root node itself;
2. root does not declare it as an input (optional, see
   ``check_root_inputs``);
3. it lacks a ``locked`` or ``original`` record;
4. its original reference is ``indirect`` (a registry alias).

A dropped node never aborts the walk.
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional, Tuple

from flakekeeper.models.lock import InputType, LockedInput, LockGraph, OriginalInput
from flakekeeper.utils.logger import get_logger

logger = get_logger("core.walker")

#: ``(node name, locked record, original record)``
UpdatableInput = Tuple[str, LockedInput, OriginalInput]


def iter_updatable_inputs(
    graph: LockGraph,
    *,
    check_root_inputs: bool = True,
    package_file: Optional[str] = None,
    observer: Optional[logging.Logger] = None,
) -> Iterator[UpdatableInput]:
    """Yield the nodes of ``graph`` that can be classified.

    Args:
        graph: Validated lock graph.
        check_root_inputs: Skip nodes root does not declare as inputs.
        package_file: File the graph came from, for diagnostics.
        observer: Logger for skip diagnostics; defaults to the module logger.

    Yields:
        ``(name, locked, original)`` in the order of ``graph.nodes``.
    """
    log = observer or logger
    root_inputs = graph.root_input_names()

    for name, node in graph.nodes.items():
        if name == graph.root:
            continue

        if check_root_inputs and name not in root_inputs:
            log.error(
                "Flake input %r in %s is not declared by root %r, skipping",
                name,
                package_file,
                graph.root,
            )
            continue

        if node.locked is None or node.original is None:
            log.debug(
                "Found empty flake input %r in %s: %s, skipping",
                name,
                package_file,
                node.model_dump_json(by_alias=True, exclude_none=True),
            )
            continue

        # Registry aliases cannot be resolved to a fetchable location
        if node.original.type is InputType.INDIRECT:
            log.debug("Skipping indirect flake input %r in %s", name, package_file)
            continue

        yield name, node.locked, node.original
