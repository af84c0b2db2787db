# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of CommitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import dataclasses
import enum
from collections.abc import Iterable, Mapping
from typing import Any

from commitlanes.porcelain import Oid, commitDate, commitSubject, oidToStr, shortHash


class MalformedCommitError(ValueError):
    """ A commit record can't be laid out (missing hash, bogus parent list...) """


@dataclasses.dataclass(frozen=True)
class Commit:
    """
    A commit record as produced by the git log parser, newest first.
    Only `hash` and `parents` matter to the layout; `refs` drive colors.
    """

    hash: str
    shortHash: str = ""
    message: str = ""
    author: str = ""
    date: str = ""
    parents: list[str] = dataclasses.field(default_factory=list)
    "Parent hashes. The first one is the primary parent (first-parent convention)."

    refs: list[str] = dataclasses.field(default_factory=list)
    "Ref decorations pointing at this commit, e.g. 'HEAD -> main', 'origin/main'."

    isLocal: bool | None = None
    isMerge: bool | None = None

    def __post_init__(self):
        # Frozen dataclass: normalize fields through object.__setattr__
        def normalize(name, value):
            object.__setattr__(self, name, value)

        if isinstance(self.hash, Oid):
            normalize("hash", oidToStr(self.hash))
        if not isinstance(self.hash, str) or not self.hash:
            raise MalformedCommitError(f"commit hash must be a non-empty string, got {self.hash!r}")

        normalize("parents", _hashList(self.parents, "parents", self.hash))
        normalize("refs", _stringList(self.refs, "refs", self.hash))

        if not self.shortHash:
            normalize("shortHash", shortHash(self.hash))
        if self.isMerge is None:
            normalize("isMerge", len(self.parents) > 1)

    @property
    def isRoot(self) -> bool:
        return not self.parents

    @property
    def isOrphan(self) -> bool:
        return not self.parents and not self.refs

    @classmethod
    def fromDict(cls, d: Mapping[str, Any]) -> Commit:
        """ Build a Commit from a git log JSON record (camelCase keys). """
        try:
            oid = d["hash"]
        except KeyError:
            raise MalformedCommitError(f"commit record has no hash: {dict(d)!r}")

        return cls(
            hash=oid,
            shortHash=d.get("shortHash") or "",
            message=d.get("message") or "",
            author=d.get("author") or "",
            date=d.get("date") or "",
            parents=d.get("parents") or [],
            refs=d.get("refs") or [],
            isLocal=d.get("isLocal"),
            isMerge=d.get("isMerge"),
        )

    @classmethod
    def fromPygit2(cls, commit, refs: Iterable[str] = (), isLocal: bool | None = None) -> Commit:
        """
        Adapt a commit that was already loaded with pygit2.
        The caller supplies the ref decorations since a bare commit object
        doesn't know which refs point to it.
        """
        return cls(
            hash=oidToStr(commit.id),
            shortHash=shortHash(commit.id),
            message=commitSubject(commit),
            author=commit.author.name,
            date=commitDate(commit),
            parents=[oidToStr(p) for p in commit.parent_ids],
            refs=list(refs),
            isLocal=isLocal,
        )

    @classmethod
    def coerce(cls, obj) -> Commit:
        """ Accept a Commit, a JSON-like mapping, or any object with the same attributes. """
        if isinstance(obj, Commit):
            return obj
        if isinstance(obj, Mapping):
            return cls.fromDict(obj)
        if not hasattr(obj, "hash") or not hasattr(obj, "parents"):
            raise MalformedCommitError(f"not a commit record: {obj!r}")
        return cls.fromDict({f.name: getattr(obj, f.name, None) for f in dataclasses.fields(cls)})

    def toDict(self) -> dict:
        return dataclasses.asdict(self)


def _stringList(values, what: str, oid: str) -> list[str]:
    if values is None:
        return []
    if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
        raise MalformedCommitError(f"{oid}: {what} must be a list of strings, got {values!r}")
    values = list(values)
    for v in values:
        if not isinstance(v, str):
            raise MalformedCommitError(f"{oid}: {what} must be a list of strings, got {v!r}")
    return values


def _hashList(values, what: str, oid: str) -> list[str]:
    if values is not None and not isinstance(values, (str, bytes)) and isinstance(values, Iterable):
        values = [oidToStr(v) for v in values]
    values = _stringList(values, what, oid)
    if not all(values):
        raise MalformedCommitError(f"{oid}: empty hash in {what}")
    return values


def ensureCommits(commits: Iterable) -> list[Commit]:
    """
    Turn any sequence of commit-like records into a list of Commits.
    Raises MalformedCommitError on the first invalid record.
    """
    return [Commit.coerce(c) for c in commits]


@dataclasses.dataclass
class LaneAssignment:
    commitHash: str
    lane: int
    "Horizontal slot of the commit (0 = leftmost)"

    inLanes: list[int] = dataclasses.field(default_factory=list)
    "Lanes already expecting this commit's parents when the commit was laid out"

    outLanes: list[int] = dataclasses.field(default_factory=list)
    color: str = ""

    def toDict(self) -> dict:
        return dataclasses.asdict(self)


class SegmentType(enum.StrEnum):
    LINE = "line"
    MERGE = "merge"
    BRANCH = "branch"


@dataclasses.dataclass
class PathSegment:
    d: str
    "SVG path data (M/L/C commands only)"

    color: str
    type: SegmentType

    def toDict(self) -> dict:
        return {"d": self.d, "color": self.color, "type": str(self.type)}


@dataclasses.dataclass
class GraphData:
    lanes: list[LaneAssignment]
    maxLane: int
    colorMap: dict[str, str]
    "Commit hash -> color, including parents that were only colored ahead of time"

    def laneOf(self, commitHash: str) -> LaneAssignment:
        for assignment in self.lanes:
            if assignment.commitHash == commitHash:
                return assignment
        raise KeyError(commitHash)

    def toDict(self) -> dict:
        return {
            "lanes": [a.toDict() for a in self.lanes],
            "maxLane": self.maxLane,
            "colorMap": dict(self.colorMap),
        }
