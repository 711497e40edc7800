"""Configuration helpers for adfmd."""
from __future__ import annotations

import argparse
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .errors import ConfigError
from .nodes import DEFAULT_MAX_DEPTH

DEFAULT_ERROR_MESSAGE = "*Error converting content format*"
DEFAULT_CONFIG_FILE = "adfmd.yaml"

# Environment variables mapped onto option names.
ENV_KEYS: Dict[str, str] = {
    "ADFMD_MAX_DEPTH": "max_depth",
    "ADFMD_ERROR_MESSAGE": "error_message",
}


@dataclass(frozen=True)
class RenderOptions:
    """Knobs for :class:`adfmd.renderer.MarkdownRenderer`.

    ``max_depth`` bounds how deep the node tree is walked; anything below is
    dropped. ``error_message`` is returned instead of Markdown when a
    conversion fails unexpectedly.
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    error_message: str = DEFAULT_ERROR_MESSAGE

    def as_dict(self) -> dict[str, Any]:
        return {item.name: getattr(self, item.name) for item in fields(self)}


def load_yaml_defaults(path: str | Path | None) -> dict:
    """Load YAML configuration defaults from ``path``.

    If the file is missing, an empty dictionary is returned.

    Parameters
    ----------
    path:
        Path to the YAML file. ``None`` is treated as a missing file.

    Returns
    -------
    dict
        Parsed YAML data or ``{}`` if the file does not exist.
    """

    if not path:
        return {}

    yaml_path = Path(path)
    if not yaml_path.exists():
        return {}

    with yaml_path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}

    if not isinstance(data, dict):
        raise ConfigError(
            f"Expected top-level mapping in configuration file '{yaml_path}',"
            f" but received {type(data).__name__}.",
            context={"path": str(yaml_path)},
        )

    return data


def load_env_overrides(env: Mapping[str, str] | None = None) -> dict:
    """Return option overrides found in ``env`` (defaults to ``os.environ``)."""

    source = os.environ if env is None else env
    overrides: Dict[str, Any] = {}
    for env_key, option in ENV_KEYS.items():
        value = source.get(env_key)
        if value is None or value == "":
            continue
        overrides[option] = value
    return overrides


def merge_configs(*dicts: Optional[Mapping[str, Any]]) -> dict:
    """Merge dictionaries honoring precedence from left to right."""

    merged: Dict[str, Any] = {}
    for cfg in reversed(dicts):
        if not cfg:
            continue
        merged.update(cfg)
    return merged


def _coerce_depth(value: Any) -> int:
    depth: int | None = None
    if not isinstance(value, bool):
        try:
            depth = int(value)
        except (TypeError, ValueError):
            depth = None
    if depth is None or depth < 1:
        raise ConfigError(
            f"max_depth must be a positive integer, got {value!r}.",
            context={"max_depth": value},
        )
    return depth


def options_from_mapping(data: Mapping[str, Any]) -> RenderOptions:
    """Validate ``data`` and turn it into :class:`RenderOptions`.

    Unknown keys are ignored so the YAML file may carry settings for other
    tools.
    """

    kwargs: Dict[str, Any] = {}
    if data.get("max_depth") is not None:
        kwargs["max_depth"] = _coerce_depth(data["max_depth"])
    if data.get("error_message") is not None:
        kwargs["error_message"] = str(data["error_message"])
    return RenderOptions(**kwargs)


def _extract_cli_overrides(cli_args: argparse.Namespace) -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    for key in ("max_depth", "error_message"):
        value = getattr(cli_args, key, None)
        if value is not None:
            data[key] = value
    return data


def build_options(
    cli_args: argparse.Namespace,
    env: Mapping[str, str] | None = None,
) -> RenderOptions:
    """Build render options from CLI, environment and YAML, in that order."""

    if not isinstance(cli_args, argparse.Namespace):
        raise TypeError("cli_args must be an argparse.Namespace instance")

    config_path: Path | None = None
    if getattr(cli_args, "config", None):
        config_path = Path(cli_args.config)
        if not config_path.exists():
            raise ConfigError(
                f"Configuration file '{config_path}' was not found.",
                context={"path": str(config_path)},
            )
    else:
        default_path = Path(DEFAULT_CONFIG_FILE)
        if default_path.exists():
            config_path = default_path

    merged = merge_configs(
        _extract_cli_overrides(cli_args),
        load_env_overrides(env),
        load_yaml_defaults(config_path),
    )
    return options_from_mapping(merged)


__all__ = [
    "DEFAULT_CONFIG_FILE",
    "DEFAULT_ERROR_MESSAGE",
    "RenderOptions",
    "build_options",
    "load_env_overrides",
    "load_yaml_defaults",
    "merge_configs",
    "options_from_mapping",
]
