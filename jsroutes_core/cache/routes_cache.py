"""Routes Cache - JSON cache file for extracted routes.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from typing import Any, Dict, List, Optional

from jsroutes_core.extractor.extractor import ExposedRoutesExtractorInterface
from jsroutes_core.extractor.serializer import (
    filter_payload,
    serialize_exposed_routes,
    to_json,
)
from jsroutes_core.utils.config import Config

logger = logging.getLogger(__name__)


class RoutesCache:
    """Caches exposed routes per locale and filters them per user.

    The file holds every exposed route with the roles it requires, so it
    is shared by all users; ``get`` applies the current user's roles on
    each read. The file is stale once a route resource still on disk is
    newer than it. A route table with no resources is never fresh.

    Usage:
        cache = RoutesCache(extractor)
        payload = cache.get("en")
    """

    def __init__(self, extractor: ExposedRoutesExtractorInterface):
        self.extractor = extractor

    def path(self, locale: str) -> str:
        return self.extractor.get_cache_path(locale)

    def is_fresh(self, locale: str) -> bool:
        """Check if the cache file exists and is newer than all resources."""
        path = self.path(locale)
        if not os.path.isfile(path):
            return False

        resources = self.extractor.get_resources()
        if not resources:
            return False

        cached_at = os.path.getmtime(path)
        for resource in resources:
            if os.path.exists(resource) and os.path.getmtime(resource) > cached_at:
                logger.debug(f"Cache {path} stale: {resource} changed")
                return False

        return True

    def write(self, locale: str) -> str:
        """Serialize exposed routes for locale and write them; returns the path."""
        path = self.path(locale)
        payload = serialize_exposed_routes(self.extractor, locale)

        tmp = tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=os.path.dirname(path),
            prefix=".data.",
            suffix=".tmp",
            delete=False,
        )
        try:
            with tmp:
                tmp.write(to_json(payload))
            os.replace(tmp.name, path)
        finally:
            if os.path.exists(tmp.name):
                os.unlink(tmp.name)

        logger.info(f"Wrote {len(payload['routes'])} routes to {path}")
        return path

    def read(self, locale: str) -> Optional[Dict[str, Any]]:
        """Read the unfiltered cached payload, or None when absent."""
        path = self.path(locale)
        if not os.path.isfile(path):
            return None

        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)

    def get(self, locale: str) -> Dict[str, Any]:
        """Get the current user's payload, rebuilding the cache when stale."""
        if not self.is_fresh(locale):
            self.write(locale)

        payload = self.read(locale)
        if payload is None:
            raise FileNotFoundError(self.path(locale))
        return filter_payload(payload, self.extractor.get_user_roles())

    def warm(self, config: Config) -> List[str]:
        """Write the cache for every configured locale; returns the paths.

        Without configured locales only ``default_locale`` is written.
        """
        locales = config.locales or [config.default_locale]
        return [self.write(locale) for locale in locales]


__all__ = ["RoutesCache"]
