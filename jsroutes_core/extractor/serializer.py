"""Serializer - Payload for the client-side router.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable

from jsroutes_core.extractor.extractor import (
    ExposedRoutesExtractorInterface,
    is_visible,
)
from jsroutes_core.routing.router import Route


def serialize_route(route: Route) -> Dict[str, Any]:
    """Serialize one route.

    Only defaults for path and host variables are kept; the rest are
    server-side details the client cannot use.
    """
    variables = set(route.variables)

    return {
        "tokens": route.compile_tokens(),
        "defaults": {
            k: v for k, v in route.defaults.items() if k in variables
        },
        "requirements": dict(route.requirements),
        "hosttokens": route.compile_host_tokens(),
        "methods": list(route.methods),
        "schemes": list(route.schemes),
    }


def _context(extractor: ExposedRoutesExtractorInterface, locale: str) -> Dict[str, Any]:
    return {
        "base_url": extractor.get_base_url(),
        "prefix": extractor.get_prefix(locale),
        "host": extractor.get_host(),
        "port": extractor.get_port(),
        "scheme": extractor.get_scheme(),
        "locale": locale,
    }


def serialize_routes(
    extractor: ExposedRoutesExtractorInterface,
    locale: str = "",
) -> Dict[str, Any]:
    """Build the payload of routes visible to the current user."""
    payload = _context(extractor, locale)
    payload["routes"] = {
        name: serialize_route(route) for name, route in extractor.get_routes().items()
    }
    return payload


def serialize_exposed_routes(
    extractor: ExposedRoutesExtractorInterface,
    locale: str = "",
) -> Dict[str, Any]:
    """Build a payload of every exposed route, independent of the user.

    Each route carries a ``roles`` entry with the roles it requires
    (``None`` when unrestricted). Pass it through ``filter_payload``
    before handing it to a client.
    """
    payload = _context(extractor, locale)
    routes: Dict[str, Any] = {}
    for name, route, required in extractor.get_exposed_routes():
        data = serialize_route(route)
        data["roles"] = list(required) if required else None
        routes[name] = data
    payload["routes"] = routes
    return payload


def filter_payload(payload: Dict[str, Any], user_roles: Iterable[str]) -> Dict[str, Any]:
    """Keep the routes user_roles may see and drop the role data."""
    user_roles = list(user_roles)
    routes: Dict[str, Any] = {}

    for name, data in payload["routes"].items():
        if not is_visible(data.get("roles"), user_roles):
            continue
        routes[name] = {k: v for k, v in data.items() if k != "roles"}

    filtered = dict(payload)
    filtered["routes"] = routes
    return filtered


def to_json(payload: Dict[str, Any]) -> str:
    """Render payload as compact JSON."""
    return json.dumps(payload, separators=(",", ":"))


__all__ = [
    "serialize_route",
    "serialize_routes",
    "serialize_exposed_routes",
    "filter_payload",
    "to_json",
]
