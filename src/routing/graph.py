"""Town network construction and one-step lookups."""

from __future__ import annotations

import logging
from collections.abc import Iterable

import networkx as nx

from .errors import DuplicateRouteError, NoSuchRouteError
from .route import Route

logger = logging.getLogger(__name__)


class RouteGraph:
    """
    Directed, weighted network of towns.

    Edges live in a frozen networkx DiGraph (``distance`` attribute).
    Next to it, every origin keeps an index of the towns it reaches
    grouped by edge distance, so the nearest towns of an origin are a
    lookup rather than a sort over all of its edges.

    The graph is never modified after ``build`` and can be queried from
    several callers at once. ``has_zero_distance_cycle`` tells whether
    some towns can be circled forever without travelling any distance.
    """

    def __init__(self):
        """Initialize empty graph. Use ``build`` to load edges."""
        self.graph = nx.freeze(nx.DiGraph())
        self._by_distance: dict[str, dict[int, frozenset[str]]] = {}
        self.has_zero_distance_cycle = False

    @classmethod
    def build(cls, edges: Iterable[Route]) -> RouteGraph:
        """
        Build a graph from two-stop routes, in input order.

        An edge repeating an existing (origin, destination) pair with the
        same distance is ignored.

        Args:
            edges: Validated two-stop routes

        Raises:
            DuplicateRouteError: if the same pair appears with two
                different distances. No graph is returned in that case.
        """
        digraph = nx.DiGraph()
        index: dict[str, dict[int, set[str]]] = {}
        skipped = 0

        for edge in edges:
            origin, destination = edge.origin, edge.destination
            if digraph.has_edge(origin, destination):
                known = digraph[origin][destination]["distance"]
                if known != edge.distance:
                    logger.warning(
                        "Conflicting distances for %s-%s: %d and %d",
                        origin, destination, known, edge.distance,
                    )
                    raise DuplicateRouteError(
                        f"Route {origin}-{destination} defined with distances "
                        f"{known} and {edge.distance}",
                        origin=origin,
                        destination=destination,
                        distances=(known, edge.distance),
                    )
                skipped += 1
                logger.debug("Ignoring duplicate route %s", edge)
                continue

            digraph.add_edge(origin, destination, distance=edge.distance)
            index.setdefault(origin, {}).setdefault(edge.distance, set()).add(destination)

        graph = cls()
        graph.graph = nx.freeze(digraph)
        zero_edges = [(o, d) for o, d, dist in digraph.edges(data="distance") if dist == 0]
        graph.has_zero_distance_cycle = not nx.is_directed_acyclic_graph(nx.DiGraph(zero_edges))
        if graph.has_zero_distance_cycle:
            logger.warning("Network has a cycle of zero-distance routes")
        graph._by_distance = {
            origin: {distance: frozenset(towns) for distance, towns in buckets.items()}
            for origin, buckets in index.items()
        }
        logger.debug(
            "Built graph with %d towns and %d routes (%d duplicates ignored)",
            digraph.number_of_nodes(), digraph.number_of_edges(), skipped,
        )
        return graph

    def get_towns(self) -> list[str]:
        """Get all town names, sorted."""
        return sorted(self.graph.nodes())

    def has_town(self, town: str) -> bool:
        """Check if a town appears in any route."""
        return town in self.graph

    def neighbors(self, town: str) -> list[str]:
        """Get towns one hop away from ``town``, sorted by name."""
        if town not in self.graph:
            return []
        return sorted(self.graph.successors(town))

    def nearest_neighbors(self, town: str, excluding: Iterable[str] = ()) -> list[str]:
        """
        Get the towns reachable from ``town`` through its shortest edge.

        Excluded towns are ignored first, then the smallest remaining
        distance wins. Every town tied at that distance is returned,
        sorted by name.
        """
        excluded = set(excluding)
        for _, towns in self.buckets(town):
            remaining = sorted(t for t in towns if t not in excluded)
            if remaining:
                return remaining
        return []

    def buckets(self, town: str) -> list[tuple[int, frozenset[str]]]:
        """Get ``(distance, towns)`` groups leaving ``town``, nearest first."""
        return sorted(self._by_distance.get(town, {}).items())

    def edge_distance(self, origin: str, destination: str) -> int:
        """
        Get the distance of the direct route from origin to destination.

        Raises:
            NoSuchRouteError: if there is no direct route (a town never
                routes to itself)
        """
        if origin != destination and self.graph.has_edge(origin, destination):
            return self.graph[origin][destination]["distance"]
        raise NoSuchRouteError(
            f"No route from {origin} to {destination}",
            origin=origin,
            destination=destination,
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, RouteGraph):
            return NotImplemented
        return self._by_distance == other._by_distance

    __hash__ = None

    def __len__(self) -> int:
        """Return number of towns."""
        return len(self.graph)

    def __repr__(self) -> str:
        return f"RouteGraph(towns={len(self)}, routes={self.graph.number_of_edges()})"
