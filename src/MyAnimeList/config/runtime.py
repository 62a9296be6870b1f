"""Runtime configuration (logging)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from MyAnimeList.config.common import (
    expect_bool,
    expect_str,
    get_optional_value,
    get_section,
)

_ALLOWED_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """Store validated logging settings."""

    level: str
    to_file: bool
    dir: str


def load_runtime(raw: Mapping[str, Any]) -> RuntimeConfig:
    """Load runtime configuration from the optional `log` section.

    Raises:
        TypeError: If config types are invalid.
    """
    section = get_section(raw, "log", required=False)
    return RuntimeConfig(
        level=expect_str(get_optional_value(section, "level", "INFO"), "log.level").upper(),
        to_file=expect_bool(get_optional_value(section, "to_file", False), "log.to_file"),
        dir=expect_str(get_optional_value(section, "dir", "log"), "log.dir"),
    )


def check_runtime(config: RuntimeConfig) -> None:
    """Validate runtime constraints.

    Raises:
        ValueError: If values violate runtime constraints.
    """
    if config.level not in _ALLOWED_LOG_LEVELS:
        raise ValueError(f"log.level must be one of {sorted(_ALLOWED_LOG_LEVELS)}")
    if config.to_file and not config.dir.strip():
        raise ValueError("log.dir must not be empty when log.to_file is true")
