"""
FastAPI web interface for the route planner.

JSON endpoints over a single in-memory network, loaded at startup from
the configured route file or replaced through the API.
"""

import logging

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel

from src.config import get_config
from src.parsing import load_routes, parse_path, parse_routes
from src.routing import (
    InvalidOptionsError,
    InvalidPathError,
    NoSuchRouteError,
    ParseError,
    Route,
    RouteFinder,
    RouteGraph,
    RoutingError,
    from_options,
)

logger = logging.getLogger(__name__)

# Initialize FastAPI
app = FastAPI(
    title="Trains",
    description="Distances, trips and shortest routes between towns",
    version="0.1.0",
)

# Global instance (loaded on startup or via POST /api/network)
finder: RouteFinder | None = None


def load_network(routes: list[Route]) -> RouteGraph:
    """Build a network from parsed routes and make it the one served by the API."""
    global finder

    graph = RouteGraph.build(routes)
    finder = RouteFinder(graph)
    logger.info("Serving %r", graph)
    return graph


@app.on_event("startup")
async def startup_event():
    """Load the configured network, if any."""
    network_file = get_config().network_file
    if network_file and network_file.exists():
        load_network(load_routes(network_file))
    elif network_file:
        logger.warning("Route file not found: %s", network_file)


class NetworkRequest(BaseModel):
    """Route list, e.g. "AB5, BC4"."""

    routes: str


class NetworkResponse(BaseModel):
    towns: list[str]
    num_routes: int


class RouteResponse(BaseModel):
    """A route and its total distance."""

    stops: list[str]
    distance: int
    num_stops: int

    @classmethod
    def from_route(cls, route: Route) -> "RouteResponse":
        return cls(stops=list(route.stops), distance=route.distance, num_stops=route.num_stops)


class TripsResponse(BaseModel):
    count: int
    trips: list[RouteResponse]  # Truncated to max_trip_results
    truncated: bool = False


class ShortestResponse(BaseModel):
    found: bool
    route: RouteResponse | None = None


def require_finder() -> RouteFinder:
    if finder is None:
        raise HTTPException(status_code=503, detail="No route network loaded")
    return finder


@app.post("/api/network", response_model=NetworkResponse)
async def api_network(request: NetworkRequest) -> NetworkResponse:
    """Replace the network served by the API."""
    try:
        graph = load_network(parse_routes(request.routes))
    except RoutingError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return NetworkResponse(towns=graph.get_towns(), num_routes=graph.graph.number_of_edges())


@app.get("/api/distance", response_model=RouteResponse)
async def api_distance(path: str = Query(..., description="Towns joined by '-', e.g. A-B-C")) -> RouteResponse:
    """Distance along an exact path."""
    current = require_finder()
    try:
        route = current.trace(parse_path(path))
    except NoSuchRouteError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (ParseError, InvalidPathError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    return RouteResponse.from_route(route)


@app.get("/api/trips", response_model=TripsResponse)
async def api_trips(
    origin: str,
    destination: str,
    max_stops: int | None = None,
    exact_stops: int | None = None,
    max_distance: int | None = None,
) -> TripsResponse:
    """Trips between two towns under exactly one limit."""
    current = require_finder()
    try:
        constraint = from_options(
            max_stops=max_stops, exact_stops=exact_stops, max_distance=max_distance
        )
        trips = current.trips(origin, destination, constraint)
    except InvalidOptionsError as e:
        raise HTTPException(status_code=400, detail=str(e))

    limit = get_config().max_trip_results
    return TripsResponse(
        count=len(trips),
        trips=[RouteResponse.from_route(trip) for trip in trips[:limit]],
        truncated=len(trips) > limit,
    )


@app.get("/api/shortest", response_model=ShortestResponse)
async def api_shortest(origin: str, destination: str) -> ShortestResponse:
    """Shortest route between two towns (may be a cycle)."""
    route = require_finder().shortest_route(origin, destination)
    if route is None:
        return ShortestResponse(found=False)
    return ShortestResponse(found=True, route=RouteResponse.from_route(route))


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "ok",
        "network_loaded": finder is not None,
        "towns": len(finder.graph) if finder is not None else 0,
    }
