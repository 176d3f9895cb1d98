"""Route Matcher - Pattern matching utilities.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence


class PatternMatcher(ABC):
    """Abstract pattern matcher."""

    @abstractmethod
    def matches(self, pattern: str, value: str) -> bool:
        """Check if value matches pattern."""
        pass


class RegexMatcher(PatternMatcher):
    """Regex pattern matcher.

    Searches anywhere in the value; anchor the pattern with ``^`` or ``$``
    where a prefix or exact match is wanted.
    """

    def __init__(self):
        self._cache: Dict[str, re.Pattern] = {}

    def matches(self, pattern: str, value: str) -> bool:
        """Match using regex."""
        regex = self._get_regex(pattern)
        return regex.search(value) is not None

    def _get_regex(self, pattern: str) -> re.Pattern:
        """Get compiled regex (cached)."""
        if pattern not in self._cache:
            self._cache[pattern] = re.compile(pattern)
        return self._cache[pattern]


class NamePatternMatcher:
    """Matches route names against a list of regex fragments.

    The fragments are grouped and joined into a single alternation,
    ``(a)|(b)``. An empty list never matches.

    Usage:
        matcher = NamePatternMatcher(["^api_", "blog_.*"])
        matcher.matches("api_users")  # True
    """

    def __init__(self, patterns: Optional[Sequence[str]] = None):
        self._patterns: List[str] = list(patterns or [])
        self._matcher = RegexMatcher()

    @property
    def patterns(self) -> List[str]:
        return list(self._patterns)

    @property
    def pattern(self) -> str:
        """The combined alternation, or an empty string."""
        return build_pattern(self._patterns)

    def matches(self, name: str) -> bool:
        """Check if route name matches any fragment."""
        pattern = self.pattern
        if pattern == "":
            return False
        return self._matcher.matches(pattern, name)


def build_pattern(patterns: Sequence[str]) -> str:
    """Join regex fragments into ``(p1)|(p2)|...``."""
    return "|".join(f"({p})" for p in patterns)


__all__ = [
    "PatternMatcher",
    "RegexMatcher",
    "NamePatternMatcher",
    "build_pattern",
]
