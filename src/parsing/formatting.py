"""Render query answers as text."""

from src.routing.errors import RoutingError
from src.routing.route import Route

NO_ROUTE = "NO SUCH ROUTE"


def format_route(route: Route | None) -> str:
    """Format a route as its stops joined by '-' (e.g. "A-B-C")."""
    if route is None:
        return NO_ROUTE
    return str(route)


def format_answer(answer) -> str:
    """
    Format one query answer.

    Routes are reported by their distance, counts as-is, and a missing
    route (None or a routing error) as "NO SUCH ROUTE".
    """
    if answer is None or isinstance(answer, RoutingError):
        return NO_ROUTE
    if isinstance(answer, Route):
        return str(answer.distance)
    return str(answer)


def format_outputs(answers: list) -> list[str]:
    """Number answers as "Output #1: ..." lines."""
    return [f"Output #{i}: {format_answer(answer)}" for i, answer in enumerate(answers, start=1)]
