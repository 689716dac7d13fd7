"""Tests for routing module."""

import networkx as nx
import pytest

from src.routing.constraints import ExactStops, MaxDistance, MaxStops, from_options
from src.routing.errors import (
    DuplicateRouteError,
    InvalidOptionsError,
    InvalidPathError,
    InvalidRouteError,
    NoSuchRouteError,
)
from src.routing.finder import RouteFinder
from src.routing.graph import RouteGraph
from src.routing.route import Route

# AB5, BC4, CD8, DC8, DE6, AD5, CE2, EB3, AE7
CANONICAL_EDGES = [
    ("A", "B", 5),
    ("B", "C", 4),
    ("C", "D", 8),
    ("D", "C", 8),
    ("D", "E", 6),
    ("A", "D", 5),
    ("C", "E", 2),
    ("E", "B", 3),
    ("A", "E", 7),
]


def edges(*triples):
    return [Route.edge(o, d, dist) for o, d, dist in triples]


@pytest.fixture
def graph():
    return RouteGraph.build(edges(*CANONICAL_EDGES))


@pytest.fixture
def finder(graph):
    return RouteFinder(graph)


class TestRoute:
    """Tests for Route."""

    def test_edge(self):
        route = Route.edge("A", "B", 5)
        assert route.stops == ("A", "B")
        assert route.distance == 5
        assert route.origin == "A"
        assert route.destination == "B"
        assert route.num_stops == 1

    def test_zero_distance_allowed(self):
        assert Route.edge("A", "B", 0).distance == 0

    def test_edge_to_itself_rejected(self):
        with pytest.raises(InvalidRouteError):
            Route.edge("A", "A", 9)

    @pytest.mark.parametrize("distance", [-3, "9", None, 1.5, True])
    def test_invalid_distance_rejected(self, distance):
        with pytest.raises(InvalidRouteError):
            Route.edge("A", "B", distance)

    def test_add_stop_returns_new_route(self):
        route = Route.edge("A", "C", 10)
        extended = route.add_stop("B", 5)
        assert extended.stops == ("A", "C", "B")
        assert extended.distance == 15
        assert route.stops == ("A", "C")
        assert route.distance == 10

    def test_add_stop_at_current_destination_rejected(self):
        with pytest.raises(InvalidRouteError):
            Route.edge("A", "C", 5).add_stop("C", 2)

    def test_revisiting_earlier_town_allowed(self):
        route = Route.edge("A", "B", 1).add_stop("A", 2)
        assert route.stops == ("A", "B", "A")
        assert route.num_stops == 2

    def test_single_town(self):
        route = Route.start("A")
        assert route.num_stops == 0
        assert route.distance == 0
        assert route.origin == route.destination == "A"

    def test_empty_route_rejected(self):
        with pytest.raises(InvalidRouteError):
            Route(stops=())

    def test_str(self):
        assert str(Route.edge("A", "B", 10).add_stop("C", 5)) == "A-B-C"

    def test_value_equality(self):
        assert Route.edge("A", "B", 5) == Route(stops=("A", "B"), distance=5)


class TestConstraints:
    """Tests for trip constraints."""

    @pytest.mark.parametrize("factory", [MaxStops, ExactStops, MaxDistance])
    @pytest.mark.parametrize("bound", [0, -1, "3", None, True])
    def test_invalid_bound(self, factory, bound):
        with pytest.raises(InvalidOptionsError):
            factory(bound)

    def test_max_stops(self):
        constraint = MaxStops(2)
        two = Route.edge("A", "B", 1).add_stop("C", 1)
        assert constraint.accepts(two)
        assert not constraint.can_extend(two)
        assert constraint.can_extend(Route.edge("A", "B", 1))

    def test_exact_stops(self):
        constraint = ExactStops(2)
        one = Route.edge("A", "B", 1)
        assert not constraint.accepts(one)
        assert constraint.can_extend(one)
        assert constraint.accepts(one.add_stop("C", 1))

    def test_max_distance_is_inclusive_for_results_only(self):
        constraint = MaxDistance(10)
        route = Route.edge("A", "B", 10)
        assert constraint.accepts(route)
        assert not constraint.can_extend(route)

    def test_from_options(self):
        assert from_options(max_stops=3) == MaxStops(3)
        assert from_options(exact_stops=4) == ExactStops(4)
        assert from_options(max_distance=30) == MaxDistance(30)

    def test_from_options_rejects_several(self):
        with pytest.raises(InvalidOptionsError):
            from_options(max_stops=3, exact_stops=3)
        with pytest.raises(InvalidOptionsError):
            from_options(max_stops=3, max_distance=30)

    def test_from_options_rejects_none(self):
        with pytest.raises(InvalidOptionsError):
            from_options()

    def test_from_options_rejects_bad_bound(self):
        with pytest.raises(InvalidOptionsError):
            from_options(exact_stops=0)


class TestRouteGraph:
    """Tests for RouteGraph."""

    def test_build_simple(self):
        graph = RouteGraph.build(edges(("A", "B", 3)))
        assert graph.buckets("A") == [(3, frozenset({"B"}))]
        assert graph.edge_distance("A", "B") == 3

    def test_buckets_grouped_by_distance(self):
        graph = RouteGraph.build(edges(("A", "B", 3), ("B", "C", 5), ("B", "D", 10)))
        assert graph.buckets("B") == [(5, frozenset({"C"})), (10, frozenset({"D"}))]

    def test_same_distance_shares_bucket(self):
        graph = RouteGraph.build(edges(("A", "F", 1), ("A", "C", 1), ("A", "B", 3)))
        assert graph.buckets("A") == [(1, frozenset({"C", "F"})), (3, frozenset({"B"}))]

    def test_empty(self):
        graph = RouteGraph.build([])
        assert len(graph) == 0
        assert graph.neighbors("A") == []

    def test_duplicate_same_distance_collapsed(self):
        graph = RouteGraph.build(edges(("A", "B", 3), ("A", "B", 3)))
        assert graph.buckets("A") == [(3, frozenset({"B"}))]
        assert graph.graph.number_of_edges() == 1

    def test_duplicate_different_distance_rejected(self):
        with pytest.raises(DuplicateRouteError) as excinfo:
            RouteGraph.build(edges(("A", "B", 3), ("A", "B", 10)))
        assert excinfo.value.origin == "A"
        assert excinfo.value.destination == "B"
        assert excinfo.value.distances == (3, 10)

    def test_reverse_direction_is_not_duplicate(self):
        graph = RouteGraph.build(edges(("A", "B", 3), ("B", "A", 10)))
        assert graph.edge_distance("A", "B") == 3
        assert graph.edge_distance("B", "A") == 10

    def test_distances_round_trip(self, graph):
        for origin, destination, distance in CANONICAL_EDGES:
            assert graph.edge_distance(origin, destination) == distance

    def test_build_is_deterministic(self):
        assert RouteGraph.build(edges(*CANONICAL_EDGES)) == RouteGraph.build(
            edges(*reversed(CANONICAL_EDGES))
        )
        assert RouteGraph.build(edges(("A", "B", 1))) != RouteGraph.build(
            edges(("A", "B", 2))
        )

    def test_graph_is_frozen(self, graph):
        with pytest.raises(nx.NetworkXError):
            graph.graph.add_edge("A", "Z", distance=1)

    def test_neighbors(self):
        graph = RouteGraph.build(edges(("A", "F", 1), ("A", "C", 1), ("A", "B", 3)))
        assert graph.neighbors("A") == ["B", "C", "F"]
        assert graph.neighbors("Z") == []
        assert graph.neighbors("B") == []

    def test_nearest_neighbors(self):
        graph = RouteGraph.build(edges(("A", "F", 1), ("A", "C", 1), ("A", "B", 3)))
        assert graph.nearest_neighbors("A") == ["C", "F"]
        assert graph.nearest_neighbors("A", ["F"]) == ["C"]
        assert graph.nearest_neighbors("A", ["F", "C"]) == ["B"]
        assert graph.nearest_neighbors("A", ["F", "C", "B"]) == []
        assert graph.nearest_neighbors("Z", ["F"]) == []

    def test_edge_distance_missing(self, graph):
        with pytest.raises(NoSuchRouteError):
            graph.edge_distance("A", "C")
        with pytest.raises(NoSuchRouteError):
            graph.edge_distance("B", "A")
        with pytest.raises(NoSuchRouteError):
            graph.edge_distance("A", "Z")

    def test_edge_distance_to_itself(self, graph):
        with pytest.raises(NoSuchRouteError):
            graph.edge_distance("A", "A")

    def test_towns(self, graph):
        assert graph.get_towns() == ["A", "B", "C", "D", "E"]
        assert graph.has_town("E")
        assert not graph.has_town("Z")

    @pytest.mark.parametrize(
        "triples, expected",
        [
            ((("A", "B", 0), ("B", "A", 0)), True),
            ((("A", "B", 0), ("B", "C", 0), ("C", "A", 0)), True),
            ((("A", "B", 0), ("B", "C", 0)), False),
            ((("A", "B", 0), ("B", "A", 1)), False),
            (CANONICAL_EDGES, False),
        ],
    )
    def test_zero_distance_cycle(self, triples, expected):
        assert RouteGraph.build(edges(*triples)).has_zero_distance_cycle is expected


class TestTrace:
    """Tests for RouteFinder.trace."""

    @pytest.mark.parametrize(
        "path, distance",
        [
            (["A", "B", "C"], 9),
            (["A", "D"], 5),
            (["A", "D", "C"], 13),
            (["A", "E", "B", "C", "D"], 22),
        ],
    )
    def test_canonical_distances(self, finder, path, distance):
        route = finder.trace(path)
        assert route.distance == distance
        assert list(route.stops) == path

    def test_missing_hop(self, finder):
        with pytest.raises(NoSuchRouteError) as excinfo:
            finder.trace(["A", "E", "D"])
        assert excinfo.value.origin == "E"
        assert excinfo.value.destination == "D"

    @pytest.mark.parametrize("path", [[], ["A"]])
    def test_too_short(self, finder, path):
        with pytest.raises(InvalidPathError):
            finder.trace(path)

    def test_not_symmetric(self, finder):
        assert finder.trace(["A", "B"]).distance == 5
        with pytest.raises(NoSuchRouteError):
            finder.trace(["B", "A"])

    def test_cycle(self):
        finder = RouteFinder(
            RouteGraph.build(
                edges(("A", "B", 3), ("A", "C", 5), ("C", "B", 2), ("B", "A", 4))
            )
        )
        route = finder.trace(["A", "C", "B", "A"])
        assert route.distance == 11

    def test_repeated_town(self, finder):
        with pytest.raises(NoSuchRouteError):
            finder.trace(["A", "A"])


class TestTrips:
    """Tests for RouteFinder.trips."""

    def test_simple(self):
        finder = RouteFinder(
            RouteGraph.build(
                edges(("A", "B", 3), ("A", "C", 5), ("B", "C", 5), ("B", "D", 9), ("B", "A", 4), ("C", "B", 2), ("C", "D", 3))
            )
        )
        assert finder.trips("B", "C", MaxStops(1)) == [Route.edge("B", "C", 5)]

    def test_max_stops(self, finder):
        trips = finder.trips("C", "C", MaxStops(3))
        assert [str(t) for t in trips] == ["C-D-C", "C-E-B-C"]
        assert [t.distance for t in trips] == [16, 9]

    def test_exact_stops(self, finder):
        trips = finder.trips("A", "C", ExactStops(4))
        assert [str(t) for t in trips] == ["A-B-C-D-C", "A-D-C-D-C", "A-D-E-B-C"]
        assert [t.distance for t in trips] == [25, 29, 18]

    def test_max_distance(self, finder):
        trips = finder.trips("C", "C", MaxDistance(30))
        assert [(str(t), t.distance) for t in trips] == [
            ("C-D-C", 16),
            ("C-D-C-E-B-C", 25),
            ("C-D-E-B-C", 21),
            ("C-D-E-B-C-E-B-C", 30),
            ("C-E-B-C", 9),
            ("C-E-B-C-D-C", 25),
            ("C-E-B-C-D-E-B-C", 30),
            ("C-E-B-C-E-B-C", 18),
            ("C-E-B-C-E-B-C-E-B-C", 27),
        ]

    def test_under_thirty(self, finder):
        assert len(finder.trips("C", "C", MaxDistance(29))) == 7

    def test_max_stops_contains_exact_stops(self, finder):
        for n in range(1, 6):
            bounded = [t for t in finder.trips("A", "C", MaxStops(n)) if t.num_stops == n]
            assert bounded == finder.trips("A", "C", ExactStops(n))

    def test_no_trips(self, finder):
        assert finder.trips("C", "A", MaxStops(5)) == []
        assert finder.trips("Z", "A", MaxStops(5)) == []

    def test_count_and_iter_match(self, finder):
        constraint = MaxDistance(29)
        assert finder.count_trips("C", "C", constraint) == 7
        assert list(finder.iter_trips("C", "C", constraint)) == finder.trips("C", "C", constraint)

    def test_no_single_town_trip(self, finder):
        assert all(t.num_stops >= 1 for t in finder.trips("C", "C", MaxStops(3)))

    def test_max_distance_rejected_on_zero_distance_cycle(self):
        finder = RouteFinder(RouteGraph.build(edges(("A", "B", 0), ("B", "A", 0))))
        with pytest.raises(InvalidOptionsError):
            finder.iter_trips("A", "A", MaxDistance(1))
        with pytest.raises(InvalidOptionsError):
            finder.count_trips("A", "A", MaxDistance(1))
        assert [str(t) for t in finder.trips("A", "A", MaxStops(4))] == ["A-B-A", "A-B-A-B-A"]


class TestShortestRoute:
    """Tests for RouteFinder.shortest_route."""

    def test_direct(self, finder):
        route = finder.shortest_route("A", "B")
        assert route == Route.edge("A", "B", 5)

    def test_multi_hop(self, finder):
        route = finder.shortest_route("A", "C")
        assert str(route) == "A-B-C"
        assert route.distance == 9

    def test_cycle(self, finder):
        route = finder.shortest_route("B", "B")
        assert str(route) == "B-C-E-B"
        assert route.distance == 9
        assert str(finder.shortest_route("C", "C")) == "C-E-B-C"

    def test_no_route(self, finder):
        assert finder.shortest_route("C", "A") is None
        assert finder.shortest_route("A", "A") is None
        assert finder.shortest_route("A", "Z") is None
        assert finder.shortest_route("Z", "A") is None

    def test_nearest_first_edge_is_not_enough(self):
        # A-B is the nearest first hop, but the route through it is long
        finder = RouteFinder(
            RouteGraph.build(
                edges(("A", "B", 1), ("B", "D", 100), ("A", "C", 2), ("C", "D", 2))
            )
        )
        route = finder.shortest_route("A", "D")
        assert str(route) == "A-C-D"
        assert route.distance == 4

    def test_diverging_tied_branches(self):
        finder = RouteFinder(
            RouteGraph.build(
                edges(
                    ("A", "B", 1),
                    ("A", "C", 1),
                    ("B", "X", 1),
                    ("X", "D", 50),
                    ("C", "Y", 3),
                    ("Y", "D", 3),
                )
            )
        )
        assert finder.shortest_route("A", "D").distance == 7

    def test_tie_keeps_first_found(self):
        finder = RouteFinder(
            RouteGraph.build(
                edges(("A", "C", 2), ("C", "D", 2), ("A", "B", 2), ("B", "D", 2))
            )
        )
        assert str(finder.shortest_route("A", "D")) == "A-B-D"

    def test_never_longer_than_a_traced_path(self, finder):
        shortest = finder.shortest_route("A", "C").distance
        for path in (["A", "B", "C"], ["A", "D", "C"], ["A", "E", "B", "C"], ["A", "D", "E", "B", "C"]):
            assert shortest <= finder.trace(path).distance

    def test_zero_distance_edges(self):
        finder = RouteFinder(
            RouteGraph.build(edges(("A", "B", 0), ("B", "A", 0), ("B", "C", 4)))
        )
        assert finder.shortest_route("A", "C").distance == 4
        assert finder.shortest_route("A", "A").distance == 0
