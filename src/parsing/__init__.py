"""Parsing module for route lists, paths and answer formatting."""

from .formatting import NO_ROUTE, format_answer, format_outputs, format_route
from .parser import is_town_name, load_routes, parse_path, parse_route, parse_routes

__all__ = [
    "parse_route",
    "parse_routes",
    "parse_path",
    "load_routes",
    "is_town_name",
    "format_route",
    "format_answer",
    "format_outputs",
    "NO_ROUTE",
]
