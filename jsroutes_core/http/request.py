"""Request - Minimal HTTP request matched against access rules.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlparse


@dataclass
class Request:
    """HTTP Request object.

    Only the parts the access map looks at: method, path, host and scheme.
    """

    method: str
    path: str
    host: str = ""
    scheme: str = "http"

    @classmethod
    def create(
        cls,
        uri: str,
        method: str = "GET",
        host: str = "",
        scheme: str = "http",
    ) -> "Request":
        """Create a request from a URI or bare path.

        ``host`` and ``scheme`` apply when the URI does not carry its own.
        """
        parsed = urlparse(uri)
        path = parsed.path or "/"
        if not path.startswith("/"):
            path = "/" + path

        return cls(
            method=method.upper(),
            path=path,
            host=parsed.hostname or host,
            scheme=parsed.scheme or scheme,
        )


__all__ = ["Request"]
