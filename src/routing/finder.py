"""Route search over a town network: tracing, trip enumeration, shortest route."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence

import networkx as nx

from .constraints import MaxDistance, TripConstraint
from .errors import InvalidOptionsError, InvalidPathError
from .graph import RouteGraph
from .route import Route

logger = logging.getLogger(__name__)


class RouteFinder:
    """
    Answer routing questions over a RouteGraph.

    The finder only reads the graph, so one finder (or several) can
    serve concurrent queries over the same network.
    """

    def __init__(self, graph: RouteGraph):
        """
        Initialize finder with a town network.

        Args:
            graph: RouteGraph instance
        """
        self.graph = graph

    def trace(self, path: Sequence[str]) -> Route:
        """
        Follow exactly the given stops and measure the distance.

        Args:
            path: Towns to visit, in order

        Returns:
            Route over the whole path

        Raises:
            InvalidPathError: if fewer than two towns are given
            NoSuchRouteError: at the first pair of consecutive towns
                without a direct route
        """
        if len(path) < 2:
            raise InvalidPathError(
                f"A path needs at least two towns, got {len(path)}",
                path=tuple(path),
            )

        route = Route.start(path[0])
        for town in path[1:]:
            route = route.add_stop(
                town, self.graph.edge_distance(route.destination, town)
            )
        return route

    def iter_trips(
        self, origin: str, destination: str, constraint: TripConstraint
    ) -> Iterator[Route]:
        """
        Lazily enumerate trips from origin to destination.

        Depth-first over every neighbour (sorted by name), revisiting
        towns freely. A route is yielded when it ends at ``destination``
        and the constraint accepts it, and is extended while the
        constraint allows it, so one route can be both yielded and
        extended. Routes come out in depth-first pre-order.

        Raises:
            InvalidOptionsError: for a MaxDistance limit on a network with
                a zero-distance cycle, where the trips never run out
        """
        if isinstance(constraint, MaxDistance) and self.graph.has_zero_distance_cycle:
            raise InvalidOptionsError(
                "max_distance cannot be used on a network with a cycle of zero-distance routes"
            )
        return self._walk_trips(origin, destination, constraint)

    def _walk_trips(
        self, origin: str, destination: str, constraint: TripConstraint
    ) -> Iterator[Route]:
        stack = [Route.start(origin)]
        while stack:
            route = stack.pop()
            if (
                route.num_stops > 0
                and route.destination == destination
                and constraint.accepts(route)
            ):
                yield route
            if not constraint.can_extend(route):
                continue

            current = route.destination
            # Reversed so the first neighbour is popped first
            for town in reversed(self.graph.neighbors(current)):
                stack.append(
                    route.add_stop(town, self.graph.edge_distance(current, town))
                )

    def trips(
        self, origin: str, destination: str, constraint: TripConstraint
    ) -> list[Route]:
        """
        Find every trip from origin to destination within a constraint.

        Args:
            origin: Starting town
            destination: Ending town (may equal origin)
            constraint: MaxStops, ExactStops or MaxDistance

        Returns:
            Matching trips in depth-first order, possibly empty
        """
        found = list(self.iter_trips(origin, destination, constraint))
        logger.debug(
            "%d trips from %s to %s with %s", len(found), origin, destination, constraint
        )
        return found

    def count_trips(
        self, origin: str, destination: str, constraint: TripConstraint
    ) -> int:
        """Count trips without keeping them in memory."""
        return sum(1 for _ in self.iter_trips(origin, destination, constraint))

    def shortest_route(self, origin: str, destination: str) -> Route | None:
        """
        Find the shortest route between two towns.

        Nearest towns are explored first. A branch never re-enters a town
        already on it, except for the destination, which is also how
        ``origin == destination`` yields the shortest cycle back to the
        start. Every branch is considered and branches that already reach
        the best known distance are dropped; among equally short routes
        the first one found wins.

        Args:
            origin: Starting town
            destination: Ending town

        Returns:
            The shortest route, or None if destination cannot be reached
        """
        if not self._reachable(origin, destination):
            logger.debug("No route from %s to %s", origin, destination)
            return None

        best: Route | None = None
        stack = [Route.start(origin)]
        while stack:
            route = stack.pop()
            if best is not None and route.distance >= best.distance:
                continue

            current = route.destination
            if route.num_stops > 0 and current == destination:
                best = route
                continue

            excluded = set(route.stops)
            excluded.discard(destination)
            candidates = []
            while True:
                nearest = self.graph.nearest_neighbors(current, excluded)
                if not nearest:
                    break
                candidates.extend(nearest)
                excluded.update(nearest)

            for town in reversed(candidates):
                stack.append(
                    route.add_stop(town, self.graph.edge_distance(current, town))
                )

        return best

    def _reachable(self, origin: str, destination: str) -> bool:
        if not (self.graph.has_town(origin) and self.graph.has_town(destination)):
            return False
        digraph = self.graph.graph
        if origin != destination:
            return nx.has_path(digraph, origin, destination)
        return any(
            nx.has_path(digraph, town, origin) for town in digraph.successors(origin)
        )
