"""Authentication - Current principal and token storage.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional

logger = logging.getLogger(__name__)


class TokenNotFoundError(Exception):
    """No authentication token is stored for the current request."""
    pass


@dataclass
class User:
    """An authenticated principal."""

    identity: str
    roles: List[str] = field(default_factory=list)

    @property
    def is_authenticated(self) -> bool:
        return True

    def get_roles(self) -> List[str]:
        """Get granted roles."""
        return list(self.roles)


@dataclass
class AnonymousUser(User):
    """Principal for requests without credentials."""

    identity: str = "anon."

    @property
    def is_authenticated(self) -> bool:
        return False


@dataclass
class Token:
    """Result of an authentication already performed elsewhere."""

    user: User

    def get_user(self) -> User:
        return self.user

    def get_roles(self) -> List[str]:
        return self.user.get_roles()


class TokenStorageInterface(ABC):
    """Holds the token for the current request."""

    @abstractmethod
    def get_token(self) -> Token:
        """Get the current token.

        Raises:
            TokenNotFoundError: if no token is stored
        """
        pass

    @abstractmethod
    def set_token(self, token: Optional[Token]) -> None:
        """Set or clear the current token."""
        pass


class TokenStorage(TokenStorageInterface):
    """In-memory token storage.

    Usage:
        storage = TokenStorage()
        storage.set_token(Token(User("alice", roles=["ROLE_ADMIN"])))
        roles = storage.get_token().get_roles()
    """

    def __init__(self, token: Optional[Token] = None):
        self._token = token

    def get_token(self) -> Token:
        if self._token is None:
            raise TokenNotFoundError("No token in storage")
        return self._token

    def set_token(self, token: Optional[Token]) -> None:
        if token is not None:
            logger.debug(f"Token set for {token.user.identity}")
        self._token = token

    def has_token(self) -> bool:
        return self._token is not None


__all__ = [
    "User",
    "AnonymousUser",
    "Token",
    "TokenStorageInterface",
    "TokenStorage",
    "TokenNotFoundError",
]
