import json

import pytest

from commitlanes import settings
from commitlanes.graph import *
from commitlanes.graph.pathgenerator import curvePath, formatNumber, linePath
from .util import *


def findPath(paths, commits, child, parent):
    """ generatePaths emits edges in commit order, then parent order """
    i = 0
    for commit in commits:
        for p in commit.parents:
            if p not in [c.hash for c in commits]:
                continue
            if commit.hash == child and p == parent:
                return paths[i]
            i += 1
    assert False, f"no path {child} -> {parent}"


def testStraightLinesForLinearHistory():
    commits = [
        makeCommit("c", ["b"]),
        makeCommit("b", ["a"]),
        makeCommit("a", []),
    ]
    graphData = calculateLanes(commits)
    paths = generatePaths(graphData.lanes, commits)

    assert len(paths) == 2
    assert [p.type for p in paths] == [SegmentType.LINE, SegmentType.LINE]
    assert paths[0].d == "M 0 14 L 0 42"
    assert paths[1].d == "M 0 42 L 0 70"


def testMergeEdges():
    sequence, graphData, paths = layOut("d:b,c c:a b:a a")

    assert len(paths) == 4
    assert sum(1 for p in paths if p.type == "merge") == 1

    db = findPath(paths, sequence, "d", "b")
    assert db.type == "line"
    assert db.d == "M 0 14 L 0 70"

    dc = findPath(paths, sequence, "d", "c")
    assert dc.type == "merge"
    assert "C" in dc.d
    assert dc.d.startswith("M 0 14 C 0 ")
    assert dc.d.endswith(", 20 42")

    ca = findPath(paths, sequence, "c", "a")
    assert ca.type == "branch"
    assert ca.d.startswith("M 20 42 C 20 ")
    assert ca.d.endswith(", 0 98")

    ba = findPath(paths, sequence, "b", "a")
    assert ba.type == "line"


def testCurveControlPoints():
    sequence, _heads = GraphDiagram.parseDefinition("d:b,c c:a b:a a")
    graphData = calculateLanes(sequence)
    geometry = GraphGeometry(laneWidth=10, rowHeight=20, curveControl=0.5)
    paths = generatePaths(graphData.lanes, sequence, geometry)

    dc = findPath(paths, sequence, "d", "c")
    assert dc.d == "M 0 10 C 0 20, 10 20, 10 30"

    ca = findPath(paths, sequence, "c", "a")
    assert ca.d == "M 10 30 C 10 50, 0 50, 0 70"


def testPathColorComesFromChild():
    sequence, graphData, paths = layOut("d[feature]:b,c c[develop]:a b:a a")
    colorOf = {a.commitHash: a.color for a in graphData.lanes}

    assert findPath(paths, sequence, "d", "c").color == colorOf["d"]
    assert findPath(paths, sequence, "c", "a").color == colorOf["c"]
    assert colorOf["c"] != colorOf["d"]


def testMissingParentsAreSkipped():
    commits = [
        makeCommit("c", ["b", "gone"]),
        makeCommit("b", ["alsogone"]),
    ]
    graphData = calculateLanes(commits)
    paths = generatePaths(graphData.lanes, commits)
    assert len(paths) == 1
    assert paths[0].type == "line"


def testEmptyInput():
    assert generatePaths([], []) == []


def testLaneCountMismatch():
    commits = [makeCommit("a", [])]
    with pytest.raises(ValueError):
        generatePaths([], commits)


def testGeometryFollowsPrefs():
    settings.prefs.laneWidth = 30
    settings.prefs.rowHeight = 10
    sequence, graphData, paths = layOut("b:a c:a a")

    ca = findPath(paths, sequence, "c", "a")
    assert ca.d.startswith("M 30 15 C 30 ")
    assert ca.d.endswith(", 0 25")


def testFormatNumber():
    assert formatNumber(14) == "14"
    assert formatNumber(14.0) == "14"
    assert formatNumber(-20.0) == "-20"
    assert formatNumber(25.5) == "25.5"
    assert formatNumber(14 + 28 * 0.4) == repr(14 + 28 * 0.4)


def testPathData():
    assert linePath(20, 14, 42) == "M 20 14 L 20 42"
    assert curvePath(0, 0, 20, 100, 0.25) == "M 0 0 C 0 25, 20 25, 20 100"


def testDefaultGeometry():
    geometry = GraphGeometry()
    assert (geometry.laneWidth, geometry.rowHeight, geometry.dotRadius, geometry.curveControl) == (20, 28, 5, 0.4)
    assert geometry.rowY(0) == 14
    assert geometry.rowY(2) == 70
    assert geometry.laneX(3) == 60
    assert geometry.canvasSize(maxLane=2, numRows=4) == (50, 112)


def testLayoutGraph():
    sequence, _heads = GraphDiagram.parseDefinition("d[HEAD->main]:b,c c:a b:a a")
    layout = layoutGraph(sequence)

    assert layout.graphData.maxLane == 1
    assert len(layout.paths) == 4
    assert layout.canvasSize == (30, 112)

    blob = json.loads(json.dumps(layout.toDict()))
    assert [lane["lane"] for lane in blob["lanes"]] == [0, 1, 0, 0]
    assert {p["type"] for p in blob["paths"]} == {"line", "merge", "branch"}
    assert blob["lanes"][0]["color"] == "#f59e0b"


def testLaneAssignmentsMustMatchCommits():
    commits = [makeCommit("b", ["a"]), makeCommit("a", [])]
    graphData = calculateLanes(commits)
    with pytest.raises(ValueError, match="not for commit b"):
        generatePaths(list(reversed(graphData.lanes)), commits)
