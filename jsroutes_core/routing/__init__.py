"""Routing module - Route table, request context and name matching."""

from jsroutes_core.routing.router import (
    Router,
    RouterInterface,
    Route,
    RouteCollection,
    RequestContext,
    RouteNotFoundError,
)
from jsroutes_core.routing.matcher import (
    PatternMatcher,
    RegexMatcher,
    NamePatternMatcher,
    build_pattern,
)

__all__ = [
    "Router",
    "RouterInterface",
    "Route",
    "RouteCollection",
    "RequestContext",
    "RouteNotFoundError",
    "PatternMatcher",
    "RegexMatcher",
    "NamePatternMatcher",
    "build_pattern",
]
