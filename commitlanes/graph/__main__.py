# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of CommitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import json
import logging
import sys
from argparse import ArgumentParser

from commitlanes import settings
from commitlanes.graph import GraphDiagram, layoutGraph
from commitlanes.settings import LoggingLevel


def makeParser() -> ArgumentParser:
    parser = ArgumentParser(prog="commitlanes", description="CommitLanes graph layout tool")
    parser.add_argument("definition", nargs="+",
                        help="Graph definition (e.g.: \"d[main]:b,c c:a b:a a\")")
    parser.add_argument("-l", "--lanes", action="store_true", help="Print the lane table")
    parser.add_argument("-p", "--paths", action="store_true", help="Print SVG path segments as JSON")
    parser.add_argument("-j", "--json", action="store_true", help="Print the whole layout as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show lanes and colors in diagram margins")
    parser.add_argument("--debug", action="store_true", help="Enable expensive assertions and debug logging")
    parser.add_argument("--no-prefs", action="store_true", help="Ignore the prefs file, use default geometry and colors")
    return parser


def main(argv=None) -> int:
    args = makeParser().parse_args(argv)

    if args.debug:
        settings.DEVDEBUG = True
    if not args.no_prefs:
        settings.prefs.load()

    logging.basicConfig(
        stream=sys.stderr,
        level=LoggingLevel.DEBUG if args.debug else settings.prefs.verbosity,
        format='%(levelname).1s %(asctime)s %(filename)-16s | %(message)s',
        datefmt="%H:%M:%S")

    definition = " ".join(args.definition)
    try:
        sequence, _heads = GraphDiagram.parseDefinition(definition)
    except ValueError as error:
        print(f"commitlanes: {error}", file=sys.stderr)
        return 2

    layout = layoutGraph(sequence)

    if args.json:
        print(json.dumps(layout.toDict(), indent=2))
        return 0

    print(GraphDiagram.diagram(layout.commits, layout.graphData, verbose=args.verbose))

    if args.lanes:
        print()
        for assignment in layout.graphData.lanes:
            inLanes = ",".join(str(i) for i in assignment.inLanes) or "-"
            print(f"{assignment.commitHash:>8} lane={assignment.lane} in={inLanes} {assignment.color}")

    if args.paths:
        print()
        print(json.dumps([p.toDict() for p in layout.paths], indent=2))

    return 0


if __name__ == "__main__":
    sys.exit(main())
