"""HTTP module - Request objects."""

from jsroutes_core.http.request import Request

__all__ = ["Request"]
