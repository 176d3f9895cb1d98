"""Helper utilities.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Union

STANDARD_PORTS: Dict[str, int] = {
    "http": 80,
    "https": 443,
}


class CacheDirectoryError(OSError):
    """Cache directory could not be created."""
    pass


def is_standard_port(scheme: str, port: Union[int, str]) -> bool:
    """Check if port is the default for scheme.

    Schemes without a known default are treated as standard, so no port
    suffix is ever emitted for them.
    """
    default = STANDARD_PORTS.get(scheme.lower())
    if default is None:
        return True
    return str(default) == str(port)


def ensure_dir(path: Union[str, os.PathLike]) -> Path:
    """Create directory if absent.

    Safe to race: an existing directory is not an error.

    Raises:
        CacheDirectoryError: if the directory cannot be created
    """
    path_obj = Path(path)
    try:
        path_obj.mkdir(parents=True, exist_ok=True)
    except FileExistsError as e:
        # exists as something other than a directory
        raise CacheDirectoryError(
            e.errno, f"Not a directory: {path_obj}", str(path_obj)
        ) from e
    except OSError as e:
        raise CacheDirectoryError(
            e.errno, f"Unable to create directory: {path_obj}", str(path_obj)
        ) from e

    return path_obj


__all__ = [
    "STANDARD_PORTS",
    "CacheDirectoryError",
    "is_standard_port",
    "ensure_dir",
]
