# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of CommitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Sequence

from commitlanes import settings
from commitlanes.graph.graphtypes import Commit, LaneAssignment, PathSegment, SegmentType, ensureCommits

LANE_WIDTH = 20
"Horizontal spacing between lanes"

ROW_HEIGHT = 28
"Vertical spacing between commits"

DOT_RADIUS = 5
"Commit bullet point size"

CURVE_CONTROL = 0.4
"Where the Bezier control points sit between the two rows (0 = child row, 1 = parent row)"


@dataclasses.dataclass(frozen=True)
class GraphGeometry:
    laneWidth: float = LANE_WIDTH
    rowHeight: float = ROW_HEIGHT
    dotRadius: float = DOT_RADIUS
    curveControl: float = CURVE_CONTROL

    @staticmethod
    def fromPrefs(prefs: settings.Prefs | None = None) -> GraphGeometry:
        prefs = prefs or settings.prefs
        return GraphGeometry(
            laneWidth=prefs.laneWidth,
            rowHeight=prefs.rowHeight,
            dotRadius=prefs.dotRadius,
            curveControl=prefs.curveControl,
        )

    def laneX(self, lane: int) -> float:
        return lane * self.laneWidth

    def rowY(self, row: int) -> float:
        """ Vertical center of a row """
        return row * self.rowHeight + self.rowHeight / 2

    def canvasSize(self, maxLane: int, numRows: int) -> tuple[float, float]:
        """ Room needed to draw every lane and row, bullet points included. """
        width = self.laneX(maxLane) + 2 * self.dotRadius
        height = numRows * self.rowHeight
        return width, height


def formatNumber(n: float) -> str:
    """ Integral values are written without a trailing '.0' ('14', not '14.0'). """
    n = float(n)
    if n.is_integer():
        return str(int(n))
    return repr(n)


def linePath(x: float, y1: float, y2: float) -> str:
    x, y1, y2 = formatNumber(x), formatNumber(y1), formatNumber(y2)
    return f"M {x} {y1} L {x} {y2}"


def curvePath(x1: float, y1: float, x2: float, y2: float, curveControl: float) -> str:
    """
    S-curve from (x1, y1) down to (x2, y2). Both control points sit at the
    same height so the curve leaves and enters the rows vertically.
    """
    controlY = y1 + (y2 - y1) * curveControl
    x1, y1, x2, y2, cy = (formatNumber(v) for v in (x1, y1, x2, y2, controlY))
    return f"M {x1} {y1} C {x1} {cy}, {x2} {cy}, {x2} {y2}"


def generatePaths(
        lanes: Sequence[LaneAssignment],
        commits: Iterable[Commit],
        geometry: GraphGeometry | None = None,
) -> list[PathSegment]:
    """
    Build one path segment per commit -> parent edge.

    `lanes[i]` must be the lane assignment of `commits[i]`. Edges to parents
    that aren't part of `commits` are skipped silently. Each segment takes
    the color of the child commit, i.e. the branch the edge departs from.
    """
    commits = ensureCommits(commits)
    geometry = geometry or GraphGeometry.fromPrefs()

    if len(lanes) != len(commits):
        raise ValueError(f"got {len(lanes)} lane assignments for {len(commits)} commits")

    # First occurrence wins, like a linear scan would
    rowOf: dict[str, int] = {}
    for row, commit in enumerate(commits):
        rowOf.setdefault(commit.hash, row)

    paths = []

    for row, (current, commit) in enumerate(zip(lanes, commits)):
        if current.commitHash != commit.hash:
            raise ValueError(f"lane assignment {row} is for {current.commitHash}, not for commit {commit.hash}")
        currentY = geometry.rowY(row)

        for parentHash in commit.parents:
            try:
                parentRow = rowOf[parentHash]
            except KeyError:
                continue  # parent not in visible range

            parentLane = lanes[parentRow].lane
            parentY = geometry.rowY(parentRow)

            if current.lane == parentLane:
                d = linePath(geometry.laneX(current.lane), currentY, parentY)
                segmentType = SegmentType.LINE
            else:
                d = curvePath(geometry.laneX(current.lane), currentY,
                              geometry.laneX(parentLane), parentY,
                              geometry.curveControl)
                # Edges out of a merge commit join two branches;
                # other lane changes are where a branch forked off its parent.
                segmentType = SegmentType.MERGE if len(commit.parents) > 1 else SegmentType.BRANCH

            paths.append(PathSegment(d=d, color=current.color, type=segmentType))

    return paths
