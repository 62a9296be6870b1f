from __future__ import annotations

"""Public configuration API for the MyAnimeList client."""

from MyAnimeList.config.api import ApiConfig
from MyAnimeList.config.app import (
    ClientConfig,
    load_config,
    load_config_with_defaults,
    parse_config_dict,
)
from MyAnimeList.config.runtime import RuntimeConfig

__all__ = [
    "ApiConfig",
    "ClientConfig",
    "RuntimeConfig",
    "load_config",
    "load_config_with_defaults",
    "parse_config_dict",
]
