import pytest

from commitlanes import colors, settings
from commitlanes.colors import MAIN_COLOR, ORPHAN_COLOR, PALETTE
from commitlanes.graph import *
from .util import *


@pytest.mark.parametrize("name,expected", [
    ("", 0),
    ("main", 3343801),
    ("feature", 3315759862),
    ("develop", 1559690845),
    ("feature-branch", -3824618407),
    ("HEAD -> feature", -120847929),
    ("feature/some-really-long-branch-name", -6614925689),
    ("\U0001F600", 0xD83D * 31 + 0xDE00),  # one code point, two UTF-16 code units
])
def testBranchNameHash(name, expected):
    assert colors.branchNameHash(name) == expected


def testHashBranchColor():
    assert colors.hashBranchColor("feature") == PALETTE[6]
    assert colors.hashBranchColor("feature-branch") == PALETTE[7]
    assert colors.hashBranchColor("bugfix/login") == PALETTE[3]
    assert colors.hashBranchColor("develop") == PALETTE[5]
    assert colors.hashBranchColor("develop", ["#000000", "#ffffff"]) == "#ffffff"


@pytest.mark.parametrize("ref", ["main", "master", "origin/main", "HEAD -> main", "HEAD -> master"])
def testMainBranchColor(ref):
    graphData = calculateLanes([makeCommit("a", [], [ref])])
    assert graphData.lanes[0].color == MAIN_COLOR


def testMainBranchColorWinsOverOtherRefs():
    graphData = calculateLanes([makeCommit("a", [], ["feature", "tag: v1.0", "origin/main"])])
    assert graphData.lanes[0].color == MAIN_COLOR


def testOrphanColor():
    graphData = calculateLanes([makeCommit("a", [])])
    assert graphData.lanes[0].color == ORPHAN_COLOR


def testOtherBranchesGetPaletteColor():
    graphData = calculateLanes([makeCommit("a", [], ["feature-branch"])])
    assert graphData.lanes[0].color in PALETTE
    assert graphData.lanes[0].color == colors.hashBranchColor("feature-branch")


def testFirstRefIsHashedAsPrinted():
    plain = calculateLanes([makeCommit("a", [], ["feature"])])
    head = calculateLanes([makeCommit("a", [], ["HEAD -> feature"])])
    assert plain.lanes[0].color == PALETTE[6]
    assert head.lanes[0].color == PALETTE[1]


def testInheritsColorFromParentInLinearHistory():
    commits = [
        makeCommit("b", ["a"]),
        makeCommit("a", [], ["main"]),
    ]
    graphData = calculateLanes(commits)
    assert graphData.lanes[0].color == MAIN_COLOR
    assert graphData.lanes[1].color == MAIN_COLOR


def testRefsWinOverLanePosition():
    commits = [
        makeCommit("b", ["a"], ["feature"]),
        makeCommit("c", ["a"], ["main"]),
        makeCommit("a", []),
    ]
    graphData = calculateLanes(commits)
    c = graphData.laneOf("c")
    assert c.lane == 1
    assert c.color == MAIN_COLOR


def testRefColorDoesNotDependOnLane():
    # "develop" in lane 0, then in lane 2
    alone = calculateLanes([makeCommit("x", ["y"], ["develop"])])
    crowded = calculateLanes([
        makeCommit("p", ["z"]),
        makeCommit("q", ["z"]),
        makeCommit("x", ["y"], ["develop"]),
    ])
    assert alone.laneOf("x").lane == 0
    assert crowded.laneOf("x").lane == 2
    assert alone.laneOf("x").color == crowded.laneOf("x").color == colors.hashBranchColor("develop")


def testLaneFallbackColor():
    graphData = calculateLanes([
        makeCommit("p", ["z"]),
        makeCommit("q", ["y"]),
    ])
    assert graphData.lanes[0].color == PALETTE[0]
    assert graphData.lanes[1].color == PALETTE[1]


def testSiblingInheritsColorPropagatedToSharedParent():
    sequence, graphData, paths = layOut("c[feature]:a b:a a")
    featureColor = colors.hashBranchColor("feature")
    assert graphData.laneOf("c").color == featureColor
    assert graphData.laneOf("b").color == featureColor
    assert graphData.laneOf("a").color == ORPHAN_COLOR


def testColorPropagatesToParentOutsideWindow():
    graphData = calculateLanes([makeCommit("c", ["x"], ["develop"])])
    assert graphData.colorMap["x"] == colors.hashBranchColor("develop")
    assert graphData.colorMap["c"] == graphData.lanes[0].color


def testMergeParentsGetLaneColors():
    calculator = LaneCalculator()
    calculator.newCommit(makeCommit("m", ["a", "b", "c"], ["feature"]))
    assert calculator.commitColors["a"] == colors.hashBranchColor("feature")
    assert calculator.commitColors["b"] == PALETTE[1]
    assert calculator.commitColors["c"] == PALETTE[2]


def testColorOfLaidOutCommitIsNeverReassigned():
    # "a" shows up twice: a child listing it after it was laid out must not recolor it
    commits = [
        makeCommit("a", [], ["develop"]),
        makeCommit("b", ["a"], ["feature"]),
    ]
    graphData = calculateLanes(commits)
    assert graphData.colorMap["a"] == colors.hashBranchColor("develop")


def testCustomColorScheme():
    scheme = ColorScheme(mainColor="#000001", orphanColor="#000002", palette=("#00000a", "#00000b"),
                         mainBranchNames=("trunk",), remoteNames=("upstream",))
    graphData = calculateLanes([
        makeCommit("t", ["x"], ["upstream/trunk"]),
        makeCommit("m", ["y"], ["main"]),
        makeCommit("o", []),
    ], scheme)
    assert graphData.laneOf("t").color == "#000001"
    assert graphData.laneOf("m").color in ("#00000a", "#00000b")
    assert graphData.laneOf("o").color == "#000002"


def testEmptyPaletteIsRejected():
    with pytest.raises(ValueError):
        ColorScheme(palette=())


def testColorSchemeFollowsPrefs():
    settings.prefs.mainColor = "#123456"
    settings.prefs.mainBranchNames = ["trunk"]
    graphData = calculateLanes([makeCommit("a", [], ["trunk"])])
    assert graphData.lanes[0].color == "#123456"
