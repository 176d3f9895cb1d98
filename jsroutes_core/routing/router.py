"""Router - Route table and request context.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import re
import threading
from abc import ABC, abstractmethod
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)

_VARIABLE = re.compile(r"\{(\w+)\}")

# Characters that may separate a variable from the text before it
SEPARATORS = "/,;.:-_~+*=@|"


class RouteNotFoundError(KeyError):
    """Unknown route name."""
    pass


@dataclass
class Route:
    """Route definition.

    Paths use ``{name}`` placeholders, e.g. ``/blog/{slug}``.
    """

    path: str
    defaults: Dict[str, Any] = field(default_factory=dict)
    requirements: Dict[str, str] = field(default_factory=dict)
    options: Dict[str, Any] = field(default_factory=dict)
    host: str = ""
    schemes: List[str] = field(default_factory=list)
    methods: List[str] = field(default_factory=list)

    def __post_init__(self):
        """Normalize path to a leading slash."""
        if not self.path.startswith("/"):
            self.path = "/" + self.path

    def get_option(self, name: str, default: Any = None) -> Any:
        """Get a route option."""
        return self.options.get(name, default)

    @property
    def variables(self) -> List[str]:
        """Variable names in the path, then in the host."""
        return _VARIABLE.findall(self.path) + _VARIABLE.findall(self.host)

    def compile_tokens(self) -> List[List[str]]:
        """Compile the path into reverse-ordered tokens.

        Text tokens are ``["text", value]`` and variables are
        ``["variable", separator, regex, name]``. A separator character
        right before a variable belongs to the variable.
        """
        return _tokenize(self.path, self.requirements)

    def compile_host_tokens(self) -> List[List[str]]:
        """Compile the host pattern into reverse-ordered tokens."""
        if not self.host:
            return []
        return _tokenize(self.host, self.requirements, separator=".")


def _tokenize(
    pattern: str,
    requirements: Dict[str, str],
    separator: str = "/",
) -> List[List[str]]:
    tokens: List[List[str]] = []
    pos = 0

    for match in _VARIABLE.finditer(pattern):
        name = match.group(1)
        text = pattern[pos:match.start()]
        pos = match.end()

        sep = ""
        if text and text[-1] in SEPARATORS:
            sep = text[-1]
            text = text[:-1]
        if text:
            tokens.append(["text", text])

        regex = requirements.get(name) or _default_requirement(
            separator, pattern[pos:pos + 1]
        )
        tokens.append(["variable", sep, regex, name])

    if pos < len(pattern):
        tokens.append(["text", pattern[pos:]])

    tokens.reverse()
    return tokens


def _default_requirement(separator: str, next_char: str) -> str:
    """Match up to the default separator and the separator that follows."""
    if next_char and next_char in SEPARATORS and next_char != separator:
        return f"[^{separator}{next_char}]++"
    return f"[^{separator}]++"


class RouteCollection:
    """Ordered mapping of route name to route.

    Adding a route under an existing name replaces it and moves it to the
    end, matching how later definitions override earlier ones.
    """

    def __init__(self):
        self._routes: "OrderedDict[str, Route]" = OrderedDict()
        self._resources: List[str] = []

    def add(self, name: str, route: Route) -> "RouteCollection":
        """Add a route."""
        self._routes.pop(name, None)
        self._routes[name] = route
        return self

    def get(self, name: str) -> Optional[Route]:
        """Get a route by name."""
        return self._routes.get(name)

    def remove(self, name: str) -> bool:
        """Remove a route by name."""
        return self._routes.pop(name, None) is not None

    def all(self) -> Dict[str, Route]:
        """Get all routes in order."""
        return OrderedDict(self._routes)

    def items(self) -> Iterator[Tuple[str, Route]]:
        return iter(list(self._routes.items()))

    def add_resource(self, resource: str) -> "RouteCollection":
        """Track a file the routes were loaded from."""
        if resource not in self._resources:
            self._resources.append(resource)
        return self

    @property
    def resources(self) -> List[str]:
        return list(self._resources)

    def __len__(self) -> int:
        return len(self._routes)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._routes))

    def __contains__(self, name: object) -> bool:
        return name in self._routes


@dataclass
class RequestContext:
    """Serving context used to build absolute URLs."""

    base_url: str = ""
    method: str = "GET"
    host: str = "localhost"
    scheme: str = "http"
    http_port: int = 80
    https_port: int = 443
    path_info: str = "/"

    def get_port_for_scheme(self, scheme: Optional[str] = None) -> int:
        """Get configured port for a scheme (defaults to current scheme)."""
        scheme = (scheme or self.scheme).lower()
        if scheme == "https":
            return self.https_port
        if scheme == "http":
            return self.http_port
        raise ValueError(f"No port configured for scheme: {scheme}")


class RouterInterface(ABC):
    """Source of the route table and the request context."""

    @abstractmethod
    def get_route_collection(self) -> RouteCollection:
        """Get the full route collection."""
        pass

    @abstractmethod
    def get_context(self) -> RequestContext:
        """Get the current request context."""
        pass


class Router(RouterInterface):
    """In-memory router.

    Usage:
        router = Router(RequestContext(host="example.com"))
        router.add("blog_show", "/blog/{slug}", options={"expose": True})
        router.get("home", "/")

        collection = router.get_route_collection()
    """

    def __init__(self, context: Optional[RequestContext] = None):
        self._collection = RouteCollection()
        self._context = context or RequestContext()
        self._lock = threading.RLock()

    def add(
        self,
        name: str,
        path: str,
        defaults: Optional[Dict[str, Any]] = None,
        requirements: Optional[Dict[str, str]] = None,
        options: Optional[Dict[str, Any]] = None,
        host: str = "",
        schemes: Optional[List[str]] = None,
        methods: Optional[List[str]] = None,
    ) -> "Router":
        """Add a route.

        Args:
            name: Route name
            path: Path pattern
            defaults: Default variable values
            requirements: Variable regex requirements
            options: Route options (e.g. ``expose``)
            host: Host pattern
            schemes: Allowed schemes
            methods: HTTP methods
        """
        route = Route(
            path=path,
            defaults=defaults or {},
            requirements=requirements or {},
            options=options or {},
            host=host,
            schemes=[s.lower() for s in schemes or []],
            methods=[m.upper() for m in methods or []],
        )

        with self._lock:
            self._collection.add(name, route)

        logger.debug(f"Registered route {name} -> {route.path}")
        return self

    def add_resource(self, resource: str) -> "Router":
        """Track a route definition file."""
        with self._lock:
            self._collection.add_resource(resource)
        return self

    def route(self, name: str) -> Route:
        """Get a route by name."""
        route = self._collection.get(name)
        if route is None:
            raise RouteNotFoundError(name)
        return route

    def get_route_collection(self) -> RouteCollection:
        return self._collection

    def get_context(self) -> RequestContext:
        return self._context

    def get(self, name: str, path: str, **kwargs) -> "Router":
        """Add GET route."""
        return self.add(name, path, methods=["GET"], **kwargs)


__all__ = [
    "Router",
    "RouterInterface",
    "Route",
    "RouteCollection",
    "RequestContext",
    "RouteNotFoundError",
]
