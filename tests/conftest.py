from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, Generator, Optional

import pytest


NAR_HASH = "sha256-7sL5U6WnGkgQhpu0fEhkgMIB/3cz+nVazBHOnCPqDhI="


def _locked(input_type: str = "github", rev: str = "abc123", **fields: Any) -> Dict[str, Any]:
    node: Dict[str, Any] = {
        "type": input_type,
        "rev": rev,
        "narHash": NAR_HASH,
        "revCount": 42,
        "lastModified": 1700000000,
    }
    node.update(fields)
    return node


def _original(input_type: str = "github", **fields: Any) -> Dict[str, Any]:
    node: Dict[str, Any] = {"type": input_type}
    node.update(fields)
    return node


def _lock(
    nodes: Dict[str, Dict[str, Any]],
    *,
    root: str = "root",
    version: int = 7,
    root_inputs: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    if root_inputs is None:
        root_inputs = {name: name for name in nodes}
    document_nodes: Dict[str, Any] = {root: {"inputs": root_inputs}}
    document_nodes.update(nodes)
    return {"nodes": document_nodes, "root": root, "version": version}


@pytest.fixture
def make_locked() -> Callable[..., Dict[str, Any]]:
    """Factory for ``locked`` records with every required field filled in."""
    return _locked


@pytest.fixture
def make_original() -> Callable[..., Dict[str, Any]]:
    """Factory for ``original`` records."""
    return _original


@pytest.fixture
def make_lock() -> Callable[..., Dict[str, Any]]:
    """Factory for lock documents whose root declares every node by default."""
    return _lock


@pytest.fixture
def sample_lock() -> Dict[str, Any]:
    """A realistic lock document mixing every provider kind.

    Updatable inputs: nixpkgs, home-manager, sops, private, fenix, crane.
    Skipped: registry (indirect), empty (no locked/original).
    """
    return _lock(
        {
            "nixpkgs": {
                "locked": _locked(
                    "github",
                    rev="5e4fbfb6b3de1aa2872b76d49fafc942626e2add",
                    owner="NixOS",
                    repo="nixpkgs",
                ),
                "original": _original(
                    "github", owner="NixOS", repo="nixpkgs", ref="nixos-unstable"
                ),
            },
            "home-manager": {
                "inputs": {"nixpkgs": ["nixpkgs"]},
                "locked": _locked(
                    "gitlab",
                    rev="0b7bbd5e1aeb0d0fb9f6e4e2c2a8c1d6f1f3e2a1",
                    owner="rycee",
                    repo="home-manager",
                ),
                "original": _original("gitlab", owner="rycee", repo="home-manager"),
            },
            "sops": {
                "locked": _locked(
                    "sourcehut",
                    rev="d1e2f3a4b5c6d7e8f9a0b1c2d3e4f5a6b7c8d9e0",
                    owner="~user",
                    repo="sops-nix",
                ),
                "original": _original(
                    "sourcehut", owner="~user", repo="sops-nix", ref="main"
                ),
            },
            "private": {
                "locked": _locked(
                    "git",
                    rev="9f8e7d6c5b4a39281706f5e4d3c2b1a098765432",
                    url="https://git.example.com/team/private.git",
                ),
                "original": _original(
                    "git", url="https://git.example.com/team/private.git", ref="develop"
                ),
            },
            "fenix": {
                "locked": _locked(
                    "gitlab",
                    rev="1111111111111111111111111111111111111111",
                    owner="infra",
                    repo="fenix",
                    host="gitlab.example.com",
                ),
                "original": _original(
                    "gitlab",
                    owner="infra",
                    repo="fenix",
                    host="gitlab.example.com",
                    ref="stable",
                ),
            },
            "crane": {
                "locked": _locked(
                    "tarball",
                    rev="deadbeef",
                    ref="v1.2.0",
                    url="https://code.example.org/ipetkov/crane/archive/deadbeef.tar.gz",
                ),
                "original": _original(
                    "tarball",
                    url="https://code.example.org/ipetkov/crane/archive/deadbeef.tar.gz",
                ),
            },
            "registry": {
                "locked": _locked("github", owner="NixOS", repo="nixpkgs"),
                "original": _original("indirect", id="nixpkgs"),
            },
            "empty": {},
        }
    )


@pytest.fixture
def sample_lock_text(sample_lock: Dict[str, Any]) -> str:
    """``sample_lock`` serialized the way ``nix`` writes it."""
    return json.dumps(sample_lock, indent=2)


@pytest.fixture(autouse=True)
def clean_logger_state() -> Generator[None, None, None]:
    """Reset the flakekeeper logger so caplog sees records in every test.

    CLI tests configure logging, which stops propagation to the root
    logger where caplog listens.
    """
    root_logger = logging.getLogger("flakekeeper")
    yield
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)
    root_logger.propagate = True
