"""Routing module for distances, trips and shortest routes between towns."""

from .constraints import ExactStops, MaxDistance, MaxStops, TripConstraint, from_options
from .errors import (
    DuplicateRouteError,
    InvalidOptionsError,
    InvalidPathError,
    InvalidRouteError,
    NoSuchRouteError,
    ParseError,
    RoutingError,
)
from .finder import RouteFinder
from .graph import RouteGraph
from .route import Route

__all__ = [
    "Route",
    "RouteGraph",
    "RouteFinder",
    "MaxStops",
    "ExactStops",
    "MaxDistance",
    "TripConstraint",
    "from_options",
    "RoutingError",
    "InvalidPathError",
    "NoSuchRouteError",
    "DuplicateRouteError",
    "InvalidOptionsError",
    "InvalidRouteError",
    "ParseError",
]
