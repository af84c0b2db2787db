from commitlanes.graph import Commit, GraphDiagram, calculateLanes, generatePaths


def makeCommit(oid: str, parents: list[str], refs: list[str] = None) -> Commit:
    return Commit(
        hash=oid,
        shortHash=oid[:7],
        message=f"Commit {oid}",
        author="Author",
        date="2024-01-01T00:00:00+00:00",
        parents=parents,
        refs=refs or [],
    )


def layOut(definition: str):
    sequence, _heads = GraphDiagram.parseDefinition(definition)
    graphData = calculateLanes(sequence)
    paths = generatePaths(graphData.lanes, sequence)
    print("\n" + GraphDiagram.diagram(sequence, graphData))
    return sequence, graphData, paths


def lanesByHash(graphData) -> dict[str, int]:
    return {a.commitHash: a.lane for a in graphData.lanes}
