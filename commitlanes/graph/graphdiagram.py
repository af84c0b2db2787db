# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of CommitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import dataclasses
import re
from itertools import zip_longest

from commitlanes.graph.graphtypes import Commit, GraphData, ensureCommits
from commitlanes.graph.lanecalculator import calculateLanes
from commitlanes.refnames import HEAD_PREFIX

PADDING = 2

_MEMBER_PATTERN = re.compile(r"([^\[\]\-,:\s]+)(?:\[([^\]]*)\])?")


def padx(x):
    assert x >= 0
    return x * PADDING


@dataclasses.dataclass(frozen=True)
class _Edge:
    childRow: int
    parentRow: int
    lane: int
    "Lane that the edge runs down in between the two rows"


class GraphDiagram:
    """
    Text rendition of a lane layout, for unit tests and the command line.

    Definitions are whitespace-separated tokens such as "a-b-c:d,e", where
    "a-b-c" is a chain (b is the sole parent of a, c is the sole parent of b)
    and "d,e" are the parents of the last commit in the chain. Any commit may
    carry refs in brackets: "a[main,origin/main]". "HEAD->x" in brackets
    stands for the "HEAD -> x" decoration.
    """

    @staticmethod
    def parseDefinition(text: str) -> tuple[list[Commit], set[str]]:
        sequence = []
        parentMap = {}
        seen = set()
        heads = set()

        for token in text.split():
            chain, rootParents = GraphDiagram._parseToken(token)
            parents = [[name] for name, _refs in chain[1:]] + [rootParents]

            for (name, refs), commitParents in zip(chain, parents):
                if name in parentMap:
                    raise ValueError(f"Commit hash appears twice in sequence! {name}")
                parentMap[name] = commitParents
                sequence.append(Commit(hash=name, parents=commitParents, refs=refs))
                if name not in seen:
                    heads.add(name)
                seen.update(commitParents)

        return sequence, heads

    @staticmethod
    def _parseToken(token: str) -> tuple[list[tuple[str, list[str]]], list[str]]:
        chain = []
        pos = 0

        while True:
            match = _MEMBER_PATTERN.match(token, pos)
            if not match:
                raise ValueError(f"Malformed graph definition near '{token[pos:]}' in '{token}'")
            name, refsText = match.groups()
            refs = [r.replace("HEAD->", HEAD_PREFIX) for r in (refsText or "").split(",") if r]
            chain.append((name, refs))
            pos = match.end()
            if pos >= len(token) or token[pos] != "-":
                break
            pos += 1

        rootParents = []
        if pos < len(token):
            if token[pos] != ":":
                raise ValueError(f"Expecting ':' before parent list in '{token}'")
            rootParents = token[pos+1:].split(",")
            if not all(rootParents):
                raise ValueError(f"Empty parent name in '{token}'")

        return chain, rootParents

    @staticmethod
    def diagram(commits, graphData: GraphData | None = None, verbose=False) -> str:
        commits = ensureCommits(commits)
        if not commits:
            return "Won't draw graph because it's empty!"

        if graphData is None:
            graphData = calculateLanes(commits)

        lanes = [a.lane for a in graphData.lanes]
        rowOf = {}
        for row, commit in enumerate(commits):
            rowOf.setdefault(commit.hash, row)

        edges = []
        for row, commit in enumerate(commits):
            for i, parent in enumerate(commit.parents):
                parentRow = rowOf.get(parent, -1)
                if parentRow <= row:
                    continue  # not in the diagram (or out of order)
                # First parent keeps the child's lane; merge parents run in the parent's lane
                lane = lanes[row] if i == 0 else lanes[parentRow]
                edges.append(_Edge(row, parentRow, lane))

        diagram = GraphDiagram()
        for row, commit in enumerate(commits):
            margin = [commit.hash]
            if verbose:
                margin += [str(lanes[row]), graphData.lanes[row].color]
            diagram.newRow(row, lanes[row], edges, margin)

        return diagram.bake()

    # -----------------------------------------------------------------

    def __init__(self):
        self.scanlines = []
        self.margins = []

    def reserve(self, x, y, fill=" "):
        assert len(fill) == 1
        for j in range(len(self.scanlines), y + 1):
            self.scanlines.append([])
            self.margins.append([])
        scanline = self.scanlines[y]
        for i in range(len(scanline), padx(x) + 1):
            scanline.append(fill)
        return scanline

    def plot(self, x, y, c):
        assert len(c) == 1
        scanline = self.reserve(x, y)
        scanline[padx(x)] = c

    def hline(self, x1, y, x2, fill="─"):
        assert len(fill) == 1
        left, right = min(x1, x2), max(x1, x2)
        scanline = self.reserve(right, y)
        for i in range(padx(left), padx(right) + 1):
            scanline[i] = fill

    def addMarginText(self, y, text):
        self.reserve(0, y)
        self.margins[y].append(text)

    def bake(self):
        if self.margins:
            numMargins = max(len(rowMargins) for rowMargins in self.margins)
        else:
            numMargins = 0
        marginWidths = [0] * numMargins
        for margins in self.margins:
            for i, mText in enumerate(margins):
                marginWidths[i] = max(marginWidths[i], len(mText))

        lines = []
        for margins, scanline in zip(self.margins, self.scanlines):
            text = ""
            for mWidth, mText in zip_longest(marginWidths, margins, fillvalue=""):
                text += mText.ljust(mWidth) + " "
            text += ''.join(scanline)
            lines.append(text.rstrip())
        return "\n".join(lines)

    def newRow(self, row: int, homeLane: int, edges: list[_Edge], margin: list[str]):
        upper = len(self.scanlines)
        lower = upper + 1

        passing = [e for e in edges if e.childRow < row < e.parentRow]
        closed = [e for e in edges if e.parentRow == row]
        opened = [e for e in edges if e.childRow == row]

        for edge in passing:
            self.plot(edge.lane, upper, "│")

        for edge in closed:
            if edge.lane != homeLane:
                self.hline(homeLane, upper, edge.lane)
        for edge in closed:
            if edge.lane != homeLane:
                self.plot(edge.lane, upper, "╰╯"[edge.lane > homeLane])

        commitGlyph = "╳┷┯┿"[bool(opened) << 1 | bool(closed)]
        self.plot(homeLane, upper, commitGlyph)
        for text in margin:
            self.addMarginText(upper, text)

        forks = [e for e in opened if e.lane != homeLane]
        if not forks:
            return

        # Extra row to fan out merge parents into their own lanes
        self.reserve(0, lower)
        for edge in passing:
            self.plot(edge.lane, lower, "│")
        for edge in forks:
            self.hline(homeLane, lower, edge.lane)
        for edge in forks:
            self.plot(edge.lane, lower, "╭╮"[edge.lane > homeLane])

        toTheLeft = any(e.lane < homeLane for e in forks)
        toTheRight = any(e.lane > homeLane for e in forks)
        continues = any(e.lane == homeLane for e in opened)
        if continues:
            homeGlyph = "┼" if toTheLeft and toTheRight else "┤├"[toTheRight]
        else:
            homeGlyph = "┴" if toTheLeft and toTheRight else "╯╰"[toTheRight]
        self.plot(homeLane, lower, homeGlyph)
