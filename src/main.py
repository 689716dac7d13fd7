"""
Trains - route planner entry point.

Usage:
    cat routes.txt | python -m src.main
    python -m src.main routes.txt
    python -m src.main routes.txt --distance A-B-C
    python -m src.main routes.txt --trips C C --max-stops 3
    python -m src.main routes.txt --shortest A C
    python -m src.main --help
"""

import argparse
import logging
import sys
from pathlib import Path

from src.config import configure_logging, get_config
from src.parsing import (
    format_answer,
    format_outputs,
    format_route,
    load_routes,
    parse_path,
    parse_routes,
)
from src.routing import (
    ExactStops,
    MaxDistance,
    MaxStops,
    NoSuchRouteError,
    Route,
    RouteFinder,
    RouteGraph,
    RoutingError,
    from_options,
)

logger = logging.getLogger(__name__)

# Paths measured by the first five canonical queries
CANONICAL_PATHS = [
    ["A", "B", "C"],
    ["A", "D"],
    ["A", "D", "C"],
    ["A", "E", "B", "C", "D"],
    ["A", "E", "D"],
]


def load_finder(routes: list[Route]) -> RouteFinder:
    """Build the graph from parsed routes and wrap it in a finder."""
    graph = RouteGraph.build(routes)
    logger.info("Loaded %r", graph)
    return RouteFinder(graph)


def measure(finder: RouteFinder, path: list[str]):
    """Trace a path, returning the error instead of raising it."""
    try:
        return finder.trace(path)
    except NoSuchRouteError as e:
        return e


def canonical_answers(finder: RouteFinder) -> list:
    """
    Answer the ten standard questions about a network.

    1-5. Distance of A-B-C, A-D, A-D-C, A-E-B-C-D, A-E-D
    6. Trips from C to C with at most 3 stops
    7. Trips from A to C with exactly 4 stops
    8. Shortest route from A to C
    9. Shortest route from B to B
    10. Trips from C to C with a distance under 30
    """
    answers = [measure(finder, path) for path in CANONICAL_PATHS]
    answers.append(finder.count_trips("C", "C", MaxStops(3)))
    answers.append(finder.count_trips("A", "C", ExactStops(4)))
    answers.append(finder.shortest_route("A", "C"))
    answers.append(finder.shortest_route("B", "B"))
    # MaxDistance is inclusive, "under 30" means at most 29
    answers.append(finder.count_trips("C", "C", MaxDistance(29)))
    return answers


def run_queries(finder: RouteFinder, args: argparse.Namespace) -> list[str]:
    """Run the ad hoc queries requested on the command line."""
    lines = []

    if args.distance:
        lines.append(format_answer(measure(finder, parse_path(args.distance))))

    if args.trips:
        origin, destination = args.trips
        constraint = from_options(
            max_stops=args.max_stops,
            exact_stops=args.exact_stops,
            max_distance=args.max_distance,
        )
        trips = finder.trips(origin, destination, constraint)
        lines.append(str(len(trips)))
        if args.list:
            lines.extend(f"  {trip} ({trip.distance})" for trip in trips)

    if args.shortest:
        route = finder.shortest_route(*args.shortest)
        if route is None:
            lines.append(format_route(None))
        else:
            lines.append(f"{route} ({route.distance})")

    return lines


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Trains - distances, trips and shortest routes between towns"
    )
    parser.add_argument(
        "input",
        nargs="?",
        type=Path,
        help="File with the route list, e.g. 'AB5, BC4' (default: TRAINS_NETWORK_FILE or stdin)",
    )
    parser.add_argument(
        "--distance",
        metavar="PATH",
        help="Distance of an exact path such as A-B-C",
    )
    parser.add_argument(
        "--trips",
        nargs=2,
        metavar=("ORIGIN", "DESTINATION"),
        help="Count trips between two towns (needs one of the limits below)",
    )
    parser.add_argument("--max-stops", type=int, help="Trips with at most this many stops")
    parser.add_argument("--exact-stops", type=int, help="Trips with exactly this many stops")
    parser.add_argument("--max-distance", type=int, help="Trips with at most this distance")
    parser.add_argument(
        "--list",
        action="store_true",
        help="List the trips found, not only their count",
    )
    parser.add_argument(
        "--shortest",
        nargs=2,
        metavar=("ORIGIN", "DESTINATION"),
        help="Shortest route between two towns",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Debug logging",
    )
    return parser


def read_routes(path: Path | None) -> list[Route]:
    """Parse the route list from a file, the configured file, or stdin."""
    path = path or get_config().network_file
    if path is None:
        return parse_routes(sys.stdin.read())
    if not path.exists():
        print(f"Error: Route file not found: {path}", file=sys.stderr)
        sys.exit(1)
    return load_routes(path)


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging("DEBUG" if args.verbose else None)

    try:
        finder = load_finder(read_routes(args.input))
        if args.distance or args.trips or args.shortest:
            lines = run_queries(finder, args)
        else:
            lines = format_outputs(canonical_answers(finder))
    except RoutingError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    for line in lines:
        print(line)


if __name__ == "__main__":
    main()
