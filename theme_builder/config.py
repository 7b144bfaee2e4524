"""
config.py

Responsibility: Load the builder configuration into a deterministic, typed model.

Every setting has a compiled-in default matching the stock theme template. A
`builder.yaml` at the project root may override any of them; the engine
treats the resulting `BuilderConfig` as the single source of truth for file
scanning, prototype cloning and workspace resets.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

CONFIG_FILENAME = "builder.yaml"


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class InstanceTemplate:
    """How the repeatable prototype file is cloned and wired in."""

    prototype: str = "extensions/custom-post-types/custom-post-type.php"
    filename: str = "{{ name }}-post-type-class.php"
    name_token: str = "{%= post_type_name %}"
    name_capitalized_token: str = "{%= post_type_name_capitalize %}"
    include_marker: str = "{%= post_type_include %}"
    include_directive: str = "require get_template_directory() . '/{{ path }}';"


@dataclass(frozen=True)
class BuilderConfig:
    """Settings for one run of the theme builder."""

    extensions: tuple[str, ...] = ("php", "css", "txt", "scss", "js", "json")
    excluded: tuple[str, ...] = ("node_modules", "vendor_modules")
    readme: str = "README.md"
    driver_file: str | None = None
    reset_commands: tuple[tuple[str, ...], ...] = (
        ("git", "reset", "--hard"),
        ("git", "clean", "-f"),
    )
    post_types: InstanceTemplate = field(default_factory=InstanceTemplate)


def _str_list(data: dict[str, Any], key: str) -> tuple[str, ...] | None:
    raw = data.get(key)
    if raw is None:
        return None
    if not isinstance(raw, list) or not all(isinstance(v, str) and v for v in raw):
        raise ConfigError(f"`{key}` must be a list of non-empty strings.")
    return tuple(raw)


def _optional_str(data: dict[str, Any], key: str) -> str | None:
    raw = data.get(key)
    if raw is None:
        return None
    if not isinstance(raw, str) or not raw.strip():
        raise ConfigError(f"`{key}` must be a non-empty string when provided.")
    return raw.strip()


def _parse_reset_commands(data: dict[str, Any]) -> tuple[tuple[str, ...], ...] | None:
    raw = data.get("reset_commands")
    if raw is None:
        return None
    if not isinstance(raw, list):
        raise ConfigError("`reset_commands` must be a list of argument lists.")
    commands = []
    for cmd in raw:
        if not isinstance(cmd, list) or not cmd or not all(isinstance(a, str) for a in cmd):
            raise ConfigError("Each entry of `reset_commands` must be a non-empty list of strings.")
        commands.append(tuple(cmd))
    return tuple(commands)


def _parse_instance_template(data: dict[str, Any]) -> InstanceTemplate:
    raw = data.get("post_types") or {}
    if not isinstance(raw, dict):
        raise ConfigError("`post_types` must be an object/mapping when provided.")

    known = {f.name for f in fields(InstanceTemplate)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ConfigError(f"Unknown `post_types` keys: {', '.join(map(str, unknown))}")

    overrides = {k: _optional_str(raw, k) for k in known}
    return InstanceTemplate(**{k: v for k, v in overrides.items() if v is not None})


def parse_config(data: dict[str, Any]) -> BuilderConfig:
    """
    Build a `BuilderConfig` from an already-loaded mapping.

    Keys that are absent keep their defaults.
    """
    overrides: dict[str, Any] = {}

    extensions = _str_list(data, "extensions")
    if extensions is not None:
        overrides["extensions"] = tuple(ext.lstrip(".").lower() for ext in extensions)

    excluded = _str_list(data, "excluded")
    if excluded is not None:
        overrides["excluded"] = excluded

    readme = _optional_str(data, "readme")
    if readme is not None:
        overrides["readme"] = readme

    driver_file = _optional_str(data, "driver_file")
    if driver_file is not None:
        overrides["driver_file"] = driver_file

    reset_commands = _parse_reset_commands(data)
    if reset_commands is not None:
        overrides["reset_commands"] = reset_commands

    overrides["post_types"] = _parse_instance_template(data)
    return BuilderConfig(**overrides)


def load_config(root: str | Path) -> BuilderConfig:
    """
    Load `builder.yaml` from `root`, or return the defaults when it is absent.
    """
    path = Path(root) / CONFIG_FILENAME
    if not path.exists():
        return BuilderConfig()

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must be a mapping/object at the top level.")
    return parse_config(data)
