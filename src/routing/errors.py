"""Typed errors for the route planner.

Every error raised by the routing core or the text parser derives from
RoutingError, so callers can reject a single query without caring which
operation failed.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class RoutingError(Exception):
    """Base error for route planning.

    Attributes:
        message: Human-readable error description
    """

    message: str

    def __str__(self) -> str:
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class InvalidPathError(RoutingError):
    """A path needs at least two towns to be traced."""

    path: tuple[str, ...] = ()


@dataclass
class NoSuchRouteError(RoutingError):
    """No direct connection exists between two towns.

    Attributes:
        origin: Town the hop starts from
        destination: Town the hop should reach
    """

    origin: str = ""
    destination: str = ""


@dataclass
class DuplicateRouteError(RoutingError):
    """Two edges between the same towns carry different distances.

    Attributes:
        origin: Origin town of the conflicting edges
        destination: Destination town of the conflicting edges
        distances: Recorded distance first, conflicting one second
    """

    origin: str = ""
    destination: str = ""
    distances: tuple[int, ...] = field(default_factory=tuple)


@dataclass
class InvalidOptionsError(RoutingError):
    """Trip constraint is malformed (bad bound or conflicting options)."""


@dataclass
class InvalidRouteError(RoutingError):
    """A Route cannot be created or extended with the given values."""


@dataclass
class ParseError(RoutingError):
    """Edge list or path text is not well formed.

    Attributes:
        text: The offending piece of input
    """

    text: str = ""
