"""Cache module - Serialized routes on disk."""

from jsroutes_core.cache.routes_cache import RoutesCache

__all__ = ["RoutesCache"]
