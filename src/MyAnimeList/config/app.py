from __future__ import annotations

"""Client config orchestration and YAML loading entrypoints."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml
from dotenv import load_dotenv

from MyAnimeList.config.api import ApiConfig, check_api, load_api
from MyAnimeList.config.runtime import RuntimeConfig, check_runtime, load_runtime


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """Client root configuration."""

    runtime: RuntimeConfig
    api: ApiConfig


def parse_config_dict(raw: Mapping[str, Any]) -> ClientConfig:
    """Parse normalized mapping into ClientConfig."""
    runtime = load_runtime(raw)
    api = load_api(raw)

    check_runtime(runtime)
    check_api(api)

    return ClientConfig(runtime=runtime, api=api)


def load_config(path: Path) -> ClientConfig:
    """Load YAML config file without default merge."""
    return load_config_with_defaults(path, default_path=path)


def load_config_with_defaults(
    config_path: Path,
    default_path: Path = Path("config/default.yml"),
    *,
    dotenv_path: Path | None = None,
) -> ClientConfig:
    """Load config by merging defaults and optional override.

    A `.env` file is loaded first so credential environment variables can be
    kept out of the shell; variables already set take precedence.
    """
    load_dotenv(dotenv_path)
    base = parse_yaml(default_path.read_text(encoding="utf-8"))
    if config_path == default_path:
        return parse_config_dict(base)
    override = parse_yaml(config_path.read_text(encoding="utf-8"))
    merged = merge_config_dicts(base, override)
    return parse_config_dict(merged)


def parse_yaml(text: str) -> dict[str, Any]:
    """Parse raw YAML text into a mapping."""
    data = yaml.safe_load(text) or {}
    if not isinstance(data, Mapping):
        raise ValueError("Config root must be a mapping/object")
    return dict(data)


def merge_config_dicts(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge two config mappings."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], Mapping) and isinstance(value, Mapping):
            merged[key] = merge_config_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged
