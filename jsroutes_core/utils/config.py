"""Configuration utilities.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="Config")

I18N_ROUTING_EXTENSION = "JMSI18nRoutingBundle"


@dataclass
class Config:
    """Extractor configuration."""

    # Exposure
    routes_to_expose: List[str] = field(default_factory=list)

    # Cache
    cache_dir: str = field(default_factory=lambda: os.path.join(tempfile.gettempdir(), "jsroutes"))

    # Loaded extensions, checked for i18n routing
    extensions: List[str] = field(default_factory=list)
    i18n_extension: str = I18N_ROUTING_EXTENSION

    # Locales
    default_locale: str = "en"
    locales: List[str] = field(default_factory=list)

    # Logging
    log_level: str = "INFO"

    @property
    def i18n_enabled(self) -> bool:
        return self.i18n_extension in self.extensions

    @classmethod
    def from_dict(cls: Type[T], data: Dict[str, Any]) -> T:
        """Create config from dictionary."""
        # Filter to only valid fields
        valid_fields = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in data.items() if k in valid_fields}
        return cls(**filtered)

    @classmethod
    def from_json(cls: Type[T], path: str) -> T:
        """Load config from JSON file."""
        with open(path, "r") as f:
            data = json.load(f)
        return cls.from_dict(data)

    @classmethod
    def from_yaml(cls: Type[T], path: str) -> T:
        """Load config from YAML file."""
        try:
            import yaml
        except ImportError:
            raise ImportError("PyYAML required for YAML config")

        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
        return cls.from_dict(data)

    @classmethod
    def from_env(cls: Type[T], prefix: str = "JSROUTES_") -> T:
        """Load config from environment variables.

        List fields take comma-separated values.
        """
        list_fields = {
            f.name for f in fields(cls)
            if str(f.type).startswith(("List", "list"))
        }
        data: Dict[str, Any] = {}

        for key, value in os.environ.items():
            if key.startswith(prefix):
                config_key = key[len(prefix):].lower()

                if config_key in list_fields:
                    data[config_key] = [v.strip() for v in value.split(",") if v.strip()]
                else:
                    data[config_key] = value

        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            result[f.name] = list(value) if isinstance(value, list) else value
        return result

    def merge(self, other: Dict[str, Any]) -> "Config":
        """Merge with overrides (overrides take precedence)."""
        data = self.to_dict()
        data.update(other)
        return type(self).from_dict(data)


def _explicit_env(prefix: str) -> Dict[str, Any]:
    """Only the keys actually present in the environment."""
    env_config = Config.from_env(prefix)
    present = {
        key[len(prefix):].lower()
        for key in os.environ
        if key.startswith(prefix)
    }
    return {k: v for k, v in env_config.to_dict().items() if k in present}


def load_config(
    path: Optional[str] = None,
    env_prefix: str = "JSROUTES_",
) -> Config:
    """Load configuration from multiple sources.

    Priority (highest to lowest):
    1. Environment variables
    2. Config file (if provided)
    3. Defaults
    """
    config = Config()

    # Load from file if provided
    if path:
        path_obj = Path(path)
        if path_obj.exists():
            if path.endswith(".json"):
                config = Config.from_json(path)
            elif path.endswith((".yaml", ".yml")):
                config = Config.from_yaml(path)
            else:
                logger.warning(f"Unknown config format: {path}")
        else:
            logger.warning(f"Config file not found: {path}")

    # Override with environment variables
    config = config.merge(_explicit_env(env_prefix))

    logging.getLogger("jsroutes_core").setLevel(config.log_level.upper())
    return config


__all__ = [
    "Config",
    "I18N_ROUTING_EXTENSION",
    "load_config",
]
