"""Access Control - Path access rules and role hierarchy.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set, Tuple

from jsroutes_core.http.request import Request
from jsroutes_core.routing.matcher import RegexMatcher

logger = logging.getLogger(__name__)

_matcher = RegexMatcher()


@dataclass
class AccessRule:
    """A path access rule.

    ``path`` is a regex searched in the request path, so ``^/admin`` is a
    prefix rule and ``/admin`` matches anywhere.
    """

    path: Optional[str] = None
    roles: List[str] = field(default_factory=list)
    channel: Optional[str] = None  # "http" / "https" / None for any
    methods: List[str] = field(default_factory=list)
    host: Optional[str] = None

    def matches(self, request: Request) -> bool:
        """Check if rule applies to request."""
        if self.methods and request.method.upper() not in [m.upper() for m in self.methods]:
            return False

        if self.host and not _matcher.matches(self.host, request.host):
            return False

        if self.path and not _matcher.matches(self.path, request.path):
            return False

        return True


class AccessMapInterface(ABC):
    """Maps requests to required roles and channel."""

    @abstractmethod
    def get_patterns(self, request: Request) -> Tuple[Optional[List[str]], Optional[str]]:
        """Get (roles, channel) for request; (None, None) when nothing applies."""
        pass


class AccessMap(AccessMapInterface):
    """Ordered access rules, first match wins.

    Usage:
        access_map = AccessMap()
        access_map.add("^/admin", roles=["ROLE_ADMIN"])
        access_map.add("^/secure", roles=["ROLE_USER"], channel="https")

        roles, channel = access_map.get_patterns(Request.create("/admin/users"))
    """

    def __init__(self, rules: Optional[Iterable[AccessRule]] = None):
        self._rules: List[AccessRule] = list(rules or [])
        self._lock = threading.RLock()

    def add(
        self,
        path: Optional[str],
        roles: Optional[List[str]] = None,
        channel: Optional[str] = None,
        methods: Optional[List[str]] = None,
        host: Optional[str] = None,
    ) -> "AccessMap":
        """Append a rule."""
        rule = AccessRule(
            path=path,
            roles=list(roles or []),
            channel=channel,
            methods=list(methods or []),
            host=host,
        )
        with self._lock:
            self._rules.append(rule)
        return self

    @property
    def rules(self) -> List[AccessRule]:
        return list(self._rules)

    def get_patterns(self, request: Request) -> Tuple[Optional[List[str]], Optional[str]]:
        with self._lock:
            for rule in self._rules:
                if rule.matches(request):
                    return list(rule.roles), rule.channel

        return None, None


class RoleHierarchyInterface(ABC):
    """Resolves granted roles to every role they imply."""

    @abstractmethod
    def get_reachable_roles(self, roles: Iterable[str]) -> List[str]:
        pass


class RoleHierarchy(RoleHierarchyInterface):
    """Role hierarchy from a mapping of role to implied roles.

    Usage:
        hierarchy = RoleHierarchy({
            "ROLE_ADMIN": ["ROLE_USER"],
            "ROLE_SUPER_ADMIN": ["ROLE_ADMIN", "ROLE_ALLOWED_TO_SWITCH"],
        })
        hierarchy.get_reachable_roles(["ROLE_SUPER_ADMIN"])
        # ['ROLE_SUPER_ADMIN', 'ROLE_ADMIN', 'ROLE_ALLOWED_TO_SWITCH', 'ROLE_USER']
    """

    def __init__(self, hierarchy: Optional[Dict[str, List[str]]] = None):
        self._hierarchy: Dict[str, List[str]] = {
            role: list(implied) for role, implied in (hierarchy or {}).items()
        }

    def get_reachable_roles(self, roles: Iterable[str]) -> List[str]:
        reachable: List[str] = []
        seen: Set[str] = set()
        queue = deque(roles)

        while queue:
            role = queue.popleft()
            if role in seen:
                continue
            seen.add(role)
            reachable.append(role)
            queue.extend(self._hierarchy.get(role, []))

        return reachable


__all__ = [
    "AccessRule",
    "AccessMapInterface",
    "AccessMap",
    "RoleHierarchyInterface",
    "RoleHierarchy",
]
