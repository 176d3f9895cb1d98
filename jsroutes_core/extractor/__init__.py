"""Extractor module - Exposed route selection and serialization."""

from jsroutes_core.extractor.extractor import (
    ExposedRoutesExtractorInterface,
    ExposedRoutesExtractor,
    CACHE_SUBDIR,
    I18N_ROUTING_PREFIX,
    is_visible,
)
from jsroutes_core.extractor.serializer import (
    serialize_route,
    serialize_routes,
    serialize_exposed_routes,
    filter_payload,
    to_json,
)

__all__ = [
    "ExposedRoutesExtractorInterface",
    "ExposedRoutesExtractor",
    "CACHE_SUBDIR",
    "I18N_ROUTING_PREFIX",
    "is_visible",
    "serialize_route",
    "serialize_routes",
    "serialize_exposed_routes",
    "filter_payload",
    "to_json",
]
