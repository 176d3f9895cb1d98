"""Security module - Principal, token storage and access rules."""

from jsroutes_core.security.auth import (
    User,
    AnonymousUser,
    Token,
    TokenStorageInterface,
    TokenStorage,
    TokenNotFoundError,
)
from jsroutes_core.security.acl import (
    AccessRule,
    AccessMapInterface,
    AccessMap,
    RoleHierarchyInterface,
    RoleHierarchy,
)

__all__ = [
    "User",
    "AnonymousUser",
    "Token",
    "TokenStorageInterface",
    "TokenStorage",
    "TokenNotFoundError",
    "AccessRule",
    "AccessMapInterface",
    "AccessMap",
    "RoleHierarchyInterface",
    "RoleHierarchy",
]
