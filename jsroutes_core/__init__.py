"""jsroutes - Exposed routes for client-side URL generation.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

jsroutes selects the routes a front-end script may see and computes the
serving context it needs to build absolute URLs:
- Route exposure by explicit ``expose`` option or route-name patterns
- Role-based visibility through path access rules and role hierarchy
- Non-standard port detection for http/https
- Locale routing prefixes when i18n routing is loaded
- JSON payload cached per locale

Architecture Overview:
┌─────────────────────────────────────────────────────────────────────────────┐
│                                jsroutes                                      │
├─────────────────────────────────────────────────────────────────────────────┤
│                                                                              │
│  ┌─────────────────┐  ┌─────────────────┐  ┌─────────────────────────────┐ │
│  │    Routing      │  │    Security     │  │        Extractor            │ │
│  │                 │  │                 │  │                             │ │
│  │ - Router        │  │ - TokenStorage  │  │ - expose flag / patterns    │ │
│  │ - Collection    │──│ - AccessMap     │──│ - role filtering            │ │
│  │ - Context       │  │ - RoleHierarchy │  │ - host / port / prefix      │ │
│  └─────────────────┘  └─────────────────┘  └──────────────┬──────────────┘ │
│                                                           │                 │
│                                            ┌──────────────▼──────────────┐ │
│                                            │  Serializer ──▶ RoutesCache │ │
│                                            │  fosJsRouting/data.json     │ │
│                                            └─────────────────────────────┘ │
└─────────────────────────────────────────────────────────────────────────────┘

Usage:
    from jsroutes_core import ExposedRoutesExtractor, RequestContext, RoutesCache, Router

    router = Router(RequestContext(host="example.com", http_port=8080))
    router.add("home", "/", options={"expose": True})
    router.add("api_user", "/api/users/{id}")

    extractor = ExposedRoutesExtractor(
        router,
        routes_to_expose=["^api_"],
        cache_dir="/var/cache/app",
    )
    payload = RoutesCache(extractor).get("en")
"""

__version__ = "0.1.0"
__author__ = "BlackRoad OS, Inc."

# Routing
from jsroutes_core.routing.router import (
    Router,
    RouterInterface,
    Route,
    RouteCollection,
    RequestContext,
)
from jsroutes_core.routing.matcher import NamePatternMatcher

# Security
from jsroutes_core.security.auth import (
    User,
    AnonymousUser,
    Token,
    TokenStorage,
    TokenNotFoundError,
)
from jsroutes_core.security.acl import AccessMap, AccessRule, RoleHierarchy

# Extractor
from jsroutes_core.extractor.extractor import (
    ExposedRoutesExtractor,
    ExposedRoutesExtractorInterface,
)
from jsroutes_core.extractor.serializer import (
    serialize_routes,
    serialize_exposed_routes,
    filter_payload,
    to_json,
)

# Cache
from jsroutes_core.cache.routes_cache import RoutesCache

# Utils
from jsroutes_core.utils.config import Config, load_config
from jsroutes_core.utils.helpers import CacheDirectoryError

__all__ = [
    # Version
    "__version__",
    # Routing
    "Router",
    "RouterInterface",
    "Route",
    "RouteCollection",
    "RequestContext",
    "NamePatternMatcher",
    # Security
    "User",
    "AnonymousUser",
    "Token",
    "TokenStorage",
    "TokenNotFoundError",
    "AccessMap",
    "AccessRule",
    "RoleHierarchy",
    # Extractor
    "ExposedRoutesExtractor",
    "ExposedRoutesExtractorInterface",
    "serialize_routes",
    "serialize_exposed_routes",
    "filter_payload",
    "to_json",
    # Cache
    "RoutesCache",
    # Utils
    "Config",
    "load_config",
    "CacheDirectoryError",
]
