# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of CommitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
Helpers for the ref decorations that `git log --format=%D` attaches to commits,
e.g. "HEAD -> main", "origin/main", "tag: v1.0".
"""

from collections.abc import Iterable

HEAD_PREFIX = "HEAD -> "
TAG_PREFIX = "tag: "

DEFAULT_MAIN_BRANCHES = ("main", "master")
DEFAULT_REMOTES = ("origin",)


def stripRefPrefix(ref: str, remoteNames: Iterable[str] = DEFAULT_REMOTES) -> str:
    """
    Get the bare branch name out of a ref decoration.

    >>> stripRefPrefix("HEAD -> main")
    'main'
    >>> stripRefPrefix("origin/feature/login")
    'feature/login'
    """
    ref = ref.strip().removeprefix(HEAD_PREFIX)
    for remote in remoteNames:
        prefix = remote + "/"
        if ref.startswith(prefix):
            return ref.removeprefix(prefix)
    return ref


def isMainBranchRef(
        ref: str,
        mainNames: Iterable[str] = DEFAULT_MAIN_BRANCHES,
        remoteNames: Iterable[str] = DEFAULT_REMOTES,
) -> bool:
    return stripRefPrefix(ref, remoteNames) in mainNames


def parseRefs(refs: Iterable[str]) -> tuple[list[str], list[str]]:
    """
    Split ref decorations into branch names and tag names, for branch badges.
    Remote-tracking branches are folded into their last path component.
    Duplicates are dropped; order of first appearance is kept.
    """
    branches = {}
    tags = {}

    for ref in refs:
        if ref.startswith(HEAD_PREFIX):
            branches[ref.removeprefix(HEAD_PREFIX)] = None
        elif ref.startswith(TAG_PREFIX):
            tags[ref.removeprefix(TAG_PREFIX)] = None
        elif "/" in ref:
            branches[ref.rsplit("/", 1)[-1] or ref] = None
        else:
            branches[ref] = None

    return list(branches), list(tags)
