# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of CommitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from commitlanes.graph.graphtypes import (
    Commit,
    GraphData,
    LaneAssignment,
    MalformedCommitError,
    PathSegment,
    SegmentType,
    ensureCommits,
)
from commitlanes.graph.lanecalculator import (
    ActiveLanes,
    ColorScheme,
    LaneCalculator,
    calculateLanes,
)
from commitlanes.graph.pathgenerator import (
    CURVE_CONTROL,
    DOT_RADIUS,
    LANE_WIDTH,
    ROW_HEIGHT,
    GraphGeometry,
    generatePaths,
)
from commitlanes.graph.graphlayout import GraphLayout, layoutGraph
from commitlanes.graph.graphdiagram import GraphDiagram
