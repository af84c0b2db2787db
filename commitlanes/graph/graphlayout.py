# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of CommitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import dataclasses
import logging
from collections.abc import Iterable

from commitlanes.graph.graphtypes import Commit, GraphData, PathSegment, ensureCommits
from commitlanes.graph.lanecalculator import ColorScheme, calculateLanes
from commitlanes.graph.pathgenerator import GraphGeometry, generatePaths
from commitlanes.toolbox import Benchmark

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class GraphLayout:
    """ Everything a renderer needs to draw a commit graph. """

    commits: list[Commit]
    graphData: GraphData
    paths: list[PathSegment]
    geometry: GraphGeometry

    @property
    def canvasSize(self) -> tuple[float, float]:
        return self.geometry.canvasSize(self.graphData.maxLane, len(self.commits))

    def toDict(self) -> dict:
        width, height = self.canvasSize
        return {
            "lanes": [a.toDict() for a in self.graphData.lanes],
            "paths": [p.toDict() for p in self.paths],
            "maxLane": self.graphData.maxLane,
            "width": width,
            "height": height,
        }


def layoutGraph(
        commits: Iterable[Commit],
        geometry: GraphGeometry | None = None,
        scheme: ColorScheme | None = None,
) -> GraphLayout:
    """ Lay out lanes, then edge paths, for a newest-first commit sequence. """
    commits = ensureCommits(commits)
    geometry = geometry or GraphGeometry.fromPrefs()

    with Benchmark("Calculate lanes"):
        graphData = calculateLanes(commits, scheme)

    with Benchmark("Generate paths"):
        paths = generatePaths(graphData.lanes, commits, geometry)

    logger.debug(f"Graph layout: {len(commits)} rows, {graphData.maxLane + 1} lanes, {len(paths)} edges")
    return GraphLayout(commits=commits, graphData=graphData, paths=paths, geometry=geometry)
