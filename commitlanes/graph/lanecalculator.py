# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of CommitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable, Sequence

from commitlanes import colors
from commitlanes import settings
from commitlanes.graph.graphtypes import Commit, GraphData, LaneAssignment, ensureCommits
from commitlanes.refnames import DEFAULT_MAIN_BRANCHES, DEFAULT_REMOTES, isMainBranchRef

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class ColorScheme:
    mainColor: str = colors.MAIN_COLOR
    orphanColor: str = colors.ORPHAN_COLOR
    palette: tuple[str, ...] = tuple(colors.PALETTE)
    mainBranchNames: tuple[str, ...] = DEFAULT_MAIN_BRANCHES
    remoteNames: tuple[str, ...] = DEFAULT_REMOTES

    def __post_init__(self):
        if not self.palette:
            raise ValueError("color palette can't be empty")

    @staticmethod
    def fromPrefs(prefs: settings.Prefs | None = None) -> ColorScheme:
        prefs = prefs or settings.prefs
        return ColorScheme(
            mainColor=prefs.mainColor,
            orphanColor=prefs.orphanColor,
            palette=tuple(prefs.palette),
            mainBranchNames=tuple(prefs.mainBranchNames),
            remoteNames=tuple(prefs.remoteNames),
        )

    def isMainBranch(self, ref: str) -> bool:
        return isMainBranchRef(ref, self.mainBranchNames, self.remoteNames)

    def branchColor(self, ref: str) -> str:
        """ Hash of the ref decoration exactly as git log printed it. """
        return colors.hashBranchColor(ref, self.palette)

    def laneColor(self, lane: int) -> str:
        return colors.laneColor(lane, self.palette)


class ActiveLanes:
    """
    Lane slots, each holding the hash of the commit that the lane expects
    next, or None if the lane is free.

    New lanes reuse the lowest free slot before growing the list,
    so lane numbers stay dense.
    """

    def __init__(self):
        self.slots: list[str | None] = []

    def __len__(self):
        return len(self.slots)

    def __iter__(self):
        return iter(self.slots)

    def __getitem__(self, lane: int) -> str | None:
        return self.slots[lane]

    def find(self, oid: str) -> int:
        """ Lowest lane expecting the given commit, or -1. """
        try:
            return self.slots.index(oid)
        except ValueError:
            return -1

    def firstFree(self) -> int:
        """ Lowest free lane; a lane past the end if all are taken. """
        try:
            return self.slots.index(None)
        except ValueError:
            return len(self.slots)

    def assign(self, lane: int, oid: str | None):
        assert lane <= len(self.slots), "lanes must grow one at a time"
        if lane == len(self.slots):
            self.slots.append(oid)
        else:
            self.slots[lane] = oid

    def claim(self, oid: str) -> int:
        lane = self.firstFree()
        self.assign(lane, oid)
        return lane

    def releaseDuplicates(self, oid: str, keepLane: int):
        """ Free every lane other than keepLane that is still waiting for oid. """
        for i, expected in enumerate(self.slots):
            if i != keepLane and expected == oid:
                self.slots[i] = None

    def busyCount(self) -> int:
        return sum(1 for s in self.slots if s is not None)


class LaneCalculator:
    """
    Walks a newest-first commit sequence once and assigns each commit a lane
    and a color. Feed commits one by one with newCommit(), then collect the
    result with graphData().
    """

    def __init__(self, scheme: ColorScheme | None = None):
        self.scheme = scheme or ColorScheme.fromPrefs()
        self.activeLanes = ActiveLanes()
        self.commitColors: dict[str, str] = {}
        self.assignments: list[LaneAssignment] = []
        self.seen: set[str] = set()
        self.peakLaneCount = 0

    def resolveColor(self, commit: Commit, lane: int) -> str:
        scheme = self.scheme

        if commit.refs:
            if any(scheme.isMainBranch(ref) for ref in commit.refs):
                return scheme.mainColor
            return scheme.branchColor(commit.refs[0])

        if not commit.parents:
            return scheme.orphanColor

        parentColor = self.commitColors.get(commit.parents[0])
        if parentColor:
            return parentColor

        return scheme.laneColor(lane)

    def newCommit(self, commit: Commit) -> LaneAssignment:
        activeLanes = self.activeLanes
        oid = commit.hash
        parents = commit.parents

        if settings.DEVDEBUG:
            self._checkOrder(commit)
        self.seen.add(oid)

        # Find the lane expecting this commit, or start a new lane (branch head)
        lane = activeLanes.find(oid)
        if lane < 0:
            lane = activeLanes.firstFree()
        else:
            activeLanes.releaseDuplicates(oid, lane)

        color = self.resolveColor(commit, lane)
        self.commitColors[oid] = color

        # Lanes of the parents that are already expected by other commits
        inLanes = [parentLane for p in parents if (parentLane := activeLanes.find(p)) >= 0]

        assignment = LaneAssignment(
            commitHash=oid,
            lane=lane,
            inLanes=inLanes,
            outLanes=[lane],
            color=color,
        )
        self.assignments.append(assignment)

        if parents:
            # First parent continues in the same lane and inherits our color
            activeLanes.assign(lane, parents[0])
            self.commitColors.setdefault(parents[0], color)

            # Each extra parent (merge) claims a lane of its own
            for p in parents[1:]:
                mergeLane = activeLanes.claim(p)
                self.commitColors.setdefault(p, self.scheme.laneColor(mergeLane))
        else:
            # Root commit: terminate lane
            activeLanes.assign(lane, None)

        self.peakLaneCount = max(self.peakLaneCount, activeLanes.busyCount())
        return assignment

    def _checkOrder(self, commit: Commit):
        for p in commit.parents:
            if p in self.seen:
                logger.warning(f"Commit {commit.hash} appears after its parent {p}; "
                               f"the commit sequence isn't newest-first, layout will be off")

    @property
    def maxLane(self) -> int:
        return max((a.lane for a in self.assignments), default=0)

    def graphData(self) -> GraphData:
        return GraphData(
            lanes=list(self.assignments),
            maxLane=self.maxLane,
            colorMap=dict(self.commitColors),
        )


def calculateLanes(commits: Iterable[Commit], scheme: ColorScheme | None = None) -> GraphData:
    """
    Assign a lane and a color to every commit.

    `commits` must be ordered newest-first, i.e. a commit appears before
    any of its ancestors (the order `git log` gives). Parents that don't
    appear in the sequence are tolerated: they just don't get drawn.
    """
    commits: Sequence[Commit] = ensureCommits(commits)
    calculator = LaneCalculator(scheme)

    for commit in commits:
        calculator.newCommit(commit)

    logger.debug(f"Laid out {len(commits)} commits; peak active lanes: {calculator.peakLaneCount}")
    return calculator.graphData()
