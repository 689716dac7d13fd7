"""Parse edge lists and paths written as text."""

import re
import unicodedata
from pathlib import Path

from src.routing.errors import InvalidRouteError, ParseError
from src.routing.route import Route

# One route: origin letter, destination letter, distance (e.g. "AB5")
ROUTE_PATTERN = re.compile(r"^(?P<origin>\S)(?P<destination>\S)(?P<distance>[0-9]+)$")
SEPARATOR_PATTERN = re.compile(r"\s*[,\n]\s*")


def is_town_name(text: str) -> bool:
    """Check that text is a single uppercase letter (any alphabet)."""
    return len(text) == 1 and unicodedata.category(text) == "Lu"


def parse_route(text: str) -> Route:
    """
    Parse a single route such as ``AB5``.

    Raises:
        ParseError: if the text is not two uppercase letters followed by
            a distance, or both letters are the same town
    """
    match = ROUTE_PATTERN.match(text.strip())
    if not match:
        raise ParseError(f"Invalid route: {text!r}", text=text)

    origin = match.group("origin")
    destination = match.group("destination")
    if not (is_town_name(origin) and is_town_name(destination)):
        raise ParseError(f"Invalid town name in route: {text!r}", text=text)

    try:
        distance = int(match.group("distance"))
    except ValueError as e:
        raise ParseError(f"Invalid distance in route: {text[:20]!r}...", text=text) from e

    try:
        return Route.edge(origin, destination, distance)
    except InvalidRouteError as e:
        raise ParseError(f"Invalid route: {text!r} ({e})", text=text) from e


def parse_routes(text: str) -> list[Route]:
    """
    Parse a list of routes separated by commas or newlines.

    Examples:
        "AB5, BC4" -> [A-B (5), B-C (4)]
        "" -> []

    Any malformed route rejects the whole input.

    Raises:
        ParseError: on any malformed route or non-string input
    """
    if not isinstance(text, str):
        raise ParseError(f"Expected route text, got {type(text).__name__}", text=repr(text))

    pieces = [piece for piece in SEPARATOR_PATTERN.split(text.strip()) if piece]
    return [parse_route(piece) for piece in pieces]


def parse_path(text: str) -> list[str]:
    """
    Parse a path such as ``A-B-C`` into its towns.

    Raises:
        ParseError: unless text is at least two town names joined by '-'
    """
    towns = text.strip().split("-")
    if len(towns) < 2 or not all(is_town_name(town) for town in towns):
        raise ParseError(f"Invalid path: {text!r}", text=text)
    return towns


def load_routes(filepath: str | Path) -> list[Route]:
    """Parse the route list stored in a text file."""
    filepath = Path(filepath)
    with open(filepath, encoding="utf-8") as f:
        return parse_routes(f.read())
