"""Flake input classification.

Maps a node's ``locked``/``original`` pair to a :class:`DependencyRecord`.
Dispatch is on ``locked.type``, the authoritative provider; ``original``
supplies the human-facing reference (branch or tag) and the
owner/repo/host/url needed to build the remote URL.

Provider mapping:

============  ===================================================  ===============
locked.type   package name                                         current value
============  ===================================================  ===============
github        ``https://{host or github.com}/{owner}/{repo}``      ``original.ref``
gitlab        ``https://{host or gitlab.com}/{owner}/{repo}``      ``original.ref``
sourcehut     ``https://{host or git.sr.ht}/{owner}/{repo}``       ``original.ref``
git           ``original.url``                                     ``original.ref``
tarball       ``original.url`` without ``/archive/<rev>.tar.gz``   ``locked.ref``
============  ===================================================  ===============

Every record is resolved through the ``git-refs`` datasource and pins
``locked.rev`` as both its digest and its replace string.

With ``allow_custom_host`` disabled, ``original.host`` is ignored and
tarball inputs are not recognized.
"""

from __future__ import annotations

import re
import logging
from typing import Optional

from flakekeeper.models.dependency import DependencyRecord
from flakekeeper.models.lock import InputType, LockedInput, OriginalInput
from flakekeeper.utils.logger import get_logger
from flakekeeper.constants import (
    DEFAULT_PROVIDER_HOSTS,
    GIT_REFS_DATASOURCE,
    TARBALL_ARCHIVE_PATTERN,
)

logger = get_logger("core.classifier")

_TARBALL_ARCHIVE_RE = re.compile(TARBALL_ARCHIVE_PATTERN)

_FORGE_TYPES = frozenset({InputType.GITHUB, InputType.GITLAB, InputType.SOURCEHUT})


def tarball_remote_url(url: str) -> Optional[str]:
    """Map a tarball archive URL back to its repository URL.

    ``https://example.org/owner/repo/archive/<rev>.tar.gz`` becomes
    ``https://example.org/owner/repo``.

    Args:
        url: Tarball URL from the original input.

    Returns:
        The repository URL, or ``None`` if ``url`` is not an archive URL.
    """
    match = _TARBALL_ARCHIVE_RE.match(url)
    return match.group("base") if match else None


def forge_remote_url(
    input_type: InputType,
    original: OriginalInput,
    *,
    allow_custom_host: bool = True,
) -> Optional[str]:
    """Build the HTTPS URL of a forge-hosted repository.

    Returns ``None`` when the owner, the repo or a custom host is missing
    or empty. An empty custom host is not replaced by the default host.
    """
    if original.owner is None or original.repo is None:
        return None

    host = DEFAULT_PROVIDER_HOSTS[input_type.value]
    if allow_custom_host and original.host is not None:
        host = original.host

    if not (host and original.owner and original.repo):
        return None

    return f"https://{host}/{original.owner}/{original.repo}"


def classify_input(
    dep_name: str,
    locked: LockedInput,
    original: OriginalInput,
    *,
    allow_custom_host: bool = True,
    package_file: Optional[str] = None,
    observer: Optional[logging.Logger] = None,
) -> Optional[DependencyRecord]:
    """Classify a flake input into a dependency record.

    Args:
        dep_name: Node name in the lock graph.
        locked: Pinned provider record.
        original: User-declared reference.
        allow_custom_host: Honor ``original.host`` and recognize tarballs.
        package_file: File the input came from, for diagnostics.
        observer: Logger for skip diagnostics; defaults to the module logger.

    Returns:
        The dependency record, or ``None`` if the input cannot be updated.
    """
    log = observer or logger
    input_type = locked.type
    current_value = original.ref

    if input_type in _FORGE_TYPES:
        package_name = forge_remote_url(
            input_type, original, allow_custom_host=allow_custom_host
        )
        if package_name is None:
            log.debug(
                "Flake input %r in %s has incomplete owner/repo/host, skipping",
                dep_name,
                package_file,
            )
            return None

    elif input_type is InputType.GIT:
        if not original.url:
            log.debug(
                "Git flake input %r in %s has no url, skipping",
                dep_name,
                package_file,
            )
            return None
        package_name = original.url

    elif input_type is InputType.TARBALL and allow_custom_host:
        package_name = tarball_remote_url(original.url) if original.url else None
        if package_name is None:
            log.debug(
                "Tarball flake input %r in %s has unrecognized url %r, skipping",
                dep_name,
                package_file,
                original.url,
            )
            return None
        # Tarball originals have no branch; the locked ref is authoritative
        current_value = locked.ref

    else:
        log.debug(
            "Unknown flake.lock type %r for input %r in %s, skipping",
            input_type.value,
            dep_name,
            package_file,
        )
        return None

    return DependencyRecord(
        dep_name=dep_name,
        current_value=current_value,
        current_digest=locked.rev,
        replace_string=locked.rev,
        datasource=GIT_REFS_DATASOURCE,
        package_name=package_name,
    )
