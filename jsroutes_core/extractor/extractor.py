"""Exposed Routes Extractor - Select routes for the client-side router.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Sequence, Tuple

from jsroutes_core.http.request import Request
from jsroutes_core.routing.matcher import NamePatternMatcher
from jsroutes_core.routing.router import Route, RouteCollection, RouterInterface
from jsroutes_core.security.acl import AccessMapInterface, RoleHierarchyInterface
from jsroutes_core.security.auth import TokenStorageInterface
from jsroutes_core.utils.config import I18N_ROUTING_EXTENSION, Config
from jsroutes_core.utils.helpers import ensure_dir, is_standard_port

logger = logging.getLogger(__name__)

CACHE_SUBDIR = "fosJsRouting"
I18N_ROUTING_PREFIX = "__RG__"


def is_visible(required: Optional[Sequence[str]], user_roles: Iterable[str]) -> bool:
    """Check if a role requirement is empty or shares a role with the user."""
    if not required:
        return True
    return not set(required).isdisjoint(user_roles)


class ExposedRoutesExtractorInterface(ABC):
    """What the serializer and cache need from an extractor."""

    @abstractmethod
    def get_routes(self) -> RouteCollection:
        """Get the exposed routes visible to the current user."""
        pass

    @abstractmethod
    def get_exposed_routes(self) -> List[Tuple[str, Route, Optional[List[str]]]]:
        """Get (name, route, required roles) for every exposed route."""
        pass

    @abstractmethod
    def get_user_roles(self) -> List[str]:
        pass

    @abstractmethod
    def get_base_url(self) -> str:
        pass

    @abstractmethod
    def get_prefix(self, locale: str) -> str:
        """Get the locale routing prefix."""
        pass

    @abstractmethod
    def get_host(self) -> str:
        """Get host, with ``:port`` when the port is non-standard."""
        pass

    @abstractmethod
    def get_port(self) -> str:
        pass

    @abstractmethod
    def get_scheme(self) -> str:
        pass

    @abstractmethod
    def get_cache_path(self, locale: str) -> str:
        """Get the cache file path for locale."""
        pass

    @abstractmethod
    def get_resources(self) -> List[str]:
        """Get the files the route table was loaded from."""
        pass

    @abstractmethod
    def is_route_exposed(self, route: Route, name: str) -> bool:
        pass


class ExposedRoutesExtractor(ExposedRoutesExtractorInterface):
    """Extracts exposed routes and the serving context.

    A route is exposed when its ``expose`` option is ``True`` or ``"true"``,
    or when its name matches one of ``routes_to_expose``. Pattern-matched
    routes are further filtered by the role the access map requires for the
    route's path.

    Usage:
        extractor = ExposedRoutesExtractor(
            router,
            routes_to_expose=["^api_"],
            cache_dir="/var/cache/app",
            access_map=access_map,
            token_storage=token_storage,
        )
        routes = extractor.get_routes()
        path = extractor.get_cache_path("en")
    """

    def __init__(
        self,
        router: RouterInterface,
        routes_to_expose: Optional[Sequence[str]] = None,
        cache_dir: str = "",
        bundles: Optional[Iterable[str]] = None,
        access_map: Optional[AccessMapInterface] = None,
        hierarchy: Optional[RoleHierarchyInterface] = None,
        token_storage: Optional[TokenStorageInterface] = None,
        i18n_extension: str = I18N_ROUTING_EXTENSION,
    ):
        """Initialize extractor.

        Args:
            router: Route table and request context source
            routes_to_expose: Route name regex fragments
            cache_dir: Base cache directory
            bundles: Names of loaded extensions
            access_map: Path access rules
            hierarchy: Role hierarchy used to expand the user's roles
            token_storage: Current token source
            i18n_extension: Extension name that enables locale prefixes
        """
        self.router = router
        self.routes_to_expose = list(routes_to_expose or [])
        self.cache_dir = cache_dir
        self.bundles = set(bundles or [])
        self.access_map = access_map
        self.hierarchy = hierarchy
        self.token_storage = token_storage
        self.i18n_extension = i18n_extension
        self._name_matcher = NamePatternMatcher(self.routes_to_expose)

    @classmethod
    def from_config(
        cls,
        router: RouterInterface,
        config: Config,
        **kwargs,
    ) -> "ExposedRoutesExtractor":
        """Create extractor from a Config."""
        return cls(
            router,
            routes_to_expose=config.routes_to_expose,
            cache_dir=config.cache_dir,
            bundles=config.extensions,
            i18n_extension=config.i18n_extension,
            **kwargs,
        )

    @property
    def uses_i18n(self) -> bool:
        return self.i18n_extension in self.bundles

    def get_routes(self) -> RouteCollection:
        routes = RouteCollection()
        user_roles = self.get_user_roles()

        for name, route, required in self.get_exposed_routes():
            if not is_visible(required, user_roles):
                logger.debug(f"Route {name} hidden: requires one of {required}")
                continue
            routes.add(name, route)

        logger.debug(f"Extracted {len(routes)} routes for roles {user_roles}")
        return routes

    def get_exposed_routes(self) -> List[Tuple[str, Route, Optional[List[str]]]]:
        """Get every exposed route with the roles it requires.

        The result does not depend on the current user. Explicitly exposed
        routes carry no role requirement.
        """
        exposed: List[Tuple[str, Route, Optional[List[str]]]] = []

        for name, route in self.router.get_route_collection().items():
            if self._is_explicitly_exposed(route):
                exposed.append((name, route, None))
            elif self._matches_expose_pattern(name):
                exposed.append((name, route, self.get_roles_for_route(route)))

        return exposed

    def get_user_roles(self) -> List[str]:
        """Get the current user's roles, expanded through the hierarchy."""
        if self.token_storage is None:
            return []
        roles = self.token_storage.get_token().get_user().get_roles()
        if self.hierarchy is not None:
            roles = self.hierarchy.get_reachable_roles(roles)
        return roles

    def get_base_url(self) -> str:
        return self.router.get_context().base_url or ""

    def get_prefix(self, locale: str) -> str:
        if self.uses_i18n:
            return f"{locale}{I18N_ROUTING_PREFIX}"
        return ""

    def get_host(self) -> str:
        host = self.router.get_context().host
        port = self.get_port()
        if port == "":
            return host
        return f"{host}:{port}"

    def get_port(self) -> str:
        if not self.uses_non_standard_port():
            return ""
        context = self.router.get_context()
        return str(context.get_port_for_scheme(context.scheme))

    def get_scheme(self) -> str:
        return self.router.get_context().scheme

    def get_cache_path(self, locale: str) -> str:
        cache_path = os.path.join(self.cache_dir, CACHE_SUBDIR)
        ensure_dir(cache_path)

        if self.uses_i18n:
            return os.path.join(cache_path, f"data.{locale}.json")
        return os.path.join(cache_path, "data.json")

    def get_resources(self) -> List[str]:
        return self.router.get_route_collection().resources

    def is_route_exposed(self, route: Route, name: str) -> bool:
        return self._is_explicitly_exposed(route) or self._matches_expose_pattern(name)

    def build_pattern(self) -> str:
        """Get the combined expose pattern (empty when nothing configured)."""
        return self._name_matcher.pattern

    def uses_non_standard_port(self) -> bool:
        """Check if the context serves http or https off its default port."""
        context = self.router.get_context()
        scheme = context.scheme.lower()
        if scheme not in ("http", "https"):
            return False
        return not is_standard_port(scheme, context.get_port_for_scheme(scheme))

    def get_roles_for_route(self, route: Route) -> Optional[List[str]]:
        """Get roles the access map requires for the route's path.

        The access-map request takes host and scheme from the router context, so
        host-bound access rules apply.
        """
        if self.access_map is None:
            return None
        context = self.router.get_context()
        request = Request.create(
            route.path, "GET", host=context.host, scheme=context.scheme
        )
        roles, _channel = self.access_map.get_patterns(request)
        return roles

    def _is_explicitly_exposed(self, route: Route) -> bool:
        expose = route.get_option("expose")
        return expose is True or expose == "true"

    def _matches_expose_pattern(self, name: str) -> bool:
        return self._name_matcher.matches(name)


__all__ = [
    "ExposedRoutesExtractorInterface",
    "ExposedRoutesExtractor",
    "CACHE_SUBDIR",
    "I18N_ROUTING_PREFIX",
    "is_visible",
]
