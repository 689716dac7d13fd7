"""Route value object: ordered towns plus the distance travelled."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import InvalidRouteError


def _is_distance(value) -> bool:
    # bool is an int subclass but never a distance
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


@dataclass(frozen=True, slots=True)
class Route:
    """
    Immutable sequence of stops with its cumulative distance.

    A single-town route (distance 0) is a valid starting point for a
    search, edges are two-town routes. Extending a route always returns
    a new one, so search branches can share a common prefix safely.
    """

    stops: tuple[str, ...]
    distance: int = 0

    def __post_init__(self) -> None:
        if not self.stops:
            raise InvalidRouteError("A route needs at least one stop")
        if not _is_distance(self.distance):
            raise InvalidRouteError(
                f"Route distance must be a non-negative integer, got {self.distance!r}"
            )

    @classmethod
    def start(cls, town: str) -> Route:
        """Route standing at a single town."""
        return cls(stops=(town,), distance=0)

    @classmethod
    def edge(cls, origin: str, destination: str, distance: int) -> Route:
        """
        Create a two-stop route, the unit the graph is built from.

        Raises:
            InvalidRouteError: if origin and destination are the same town
                or the distance is not a non-negative integer
        """
        if origin == destination:
            raise InvalidRouteError(
                f"Route from {origin} cannot lead back to itself"
            )
        return cls.start(origin).add_stop(destination, distance)

    @property
    def origin(self) -> str:
        return self.stops[0]

    @property
    def destination(self) -> str:
        return self.stops[-1]

    @property
    def num_stops(self) -> int:
        """Number of hops travelled (towns visited minus one)."""
        return len(self.stops) - 1

    def add_stop(self, town: str, distance: int) -> Route:
        """
        Return a new route extended by one hop.

        Args:
            town: Next town to visit
            distance: Length of the hop from the current destination

        Raises:
            InvalidRouteError: on a negative distance or a hop that stays
                at the current destination
        """
        if not _is_distance(distance):
            raise InvalidRouteError(
                f"Hop distance must be a non-negative integer, got {distance!r}"
            )
        if town == self.destination:
            raise InvalidRouteError(f"Route already stands at {town}")
        return Route(stops=self.stops + (town,), distance=self.distance + distance)

    def __str__(self) -> str:
        return "-".join(self.stops)
