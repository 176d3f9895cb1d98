"""Utils module - Utility functions."""

from jsroutes_core.utils.config import (
    Config,
    load_config,
    I18N_ROUTING_EXTENSION,
)
from jsroutes_core.utils.helpers import (
    CacheDirectoryError,
    ensure_dir,
    is_standard_port,
)

__all__ = [
    "Config",
    "load_config",
    "I18N_ROUTING_EXTENSION",
    "CacheDirectoryError",
    "ensure_dir",
    "is_standard_port",
]
