"""Constraints bounding trip enumeration.

A constraint answers two questions about a candidate route: may it be
reported as a trip (``accepts``), and may the search keep extending it
(``can_extend``). The second check is what stops enumeration on cyclic
networks.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .errors import InvalidOptionsError
from .route import Route


def _check_bound(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidOptionsError(f"{name} must be an integer >= 1, got {value!r}")


@dataclass(frozen=True, slots=True)
class MaxStops:
    """Trips with at most ``n`` stops."""

    n: int

    def __post_init__(self) -> None:
        _check_bound("max_stops", self.n)

    def accepts(self, route: Route) -> bool:
        return route.num_stops <= self.n

    def can_extend(self, route: Route) -> bool:
        return route.num_stops < self.n


@dataclass(frozen=True, slots=True)
class ExactStops:
    """Trips with exactly ``n`` stops."""

    n: int

    def __post_init__(self) -> None:
        _check_bound("exact_stops", self.n)

    def accepts(self, route: Route) -> bool:
        return route.num_stops == self.n

    def can_extend(self, route: Route) -> bool:
        return route.num_stops < self.n


@dataclass(frozen=True, slots=True)
class MaxDistance:
    """
    Trips whose total distance is at most ``d``.

    Reporting is inclusive while extension is exclusive: a route of
    exactly ``d`` is a trip but is never extended further.
    """

    d: int

    def __post_init__(self) -> None:
        _check_bound("max_distance", self.d)

    def accepts(self, route: Route) -> bool:
        return route.distance <= self.d

    def can_extend(self, route: Route) -> bool:
        return route.distance < self.d


TripConstraint = Union[MaxStops, ExactStops, MaxDistance]


def from_options(
    max_stops: int | None = None,
    exact_stops: int | None = None,
    max_distance: int | None = None,
) -> TripConstraint:
    """
    Build a constraint from keyword-style options.

    Exactly one option must be given.

    Raises:
        InvalidOptionsError: if zero or several options are set, or the
            chosen bound is invalid
    """
    given = {
        name: value
        for name, value in (
            ("max_stops", max_stops),
            ("exact_stops", exact_stops),
            ("max_distance", max_distance),
        )
        if value is not None
    }
    if len(given) != 1:
        names = ", ".join(given) or "none"
        raise InvalidOptionsError(
            f"Exactly one of max_stops, exact_stops, max_distance is required (got {names})"
        )

    if max_stops is not None:
        return MaxStops(max_stops)
    if exact_stops is not None:
        return ExactStops(exact_stops)
    return MaxDistance(max_distance)
