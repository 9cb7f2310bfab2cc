"""Gate configuration loader.

Supports .stagegate/config.toml or .stagegate/config.yaml for overriding tool
commands, the style standard and the forbidden debug-code table. Every
value has a default, so a repository without configuration gets the stock
PHP pipeline.
"""

from __future__ import annotations

import os
import re
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

from stagegate.classify import FilePatternRule
from stagegate.errors import ConfigError

CONFIG_DIR = ".stagegate"


@dataclass(frozen=True)
class DebugCodeGroup:
    """Files matched by ``file_pattern`` must not contain any ``forbidden`` snippet."""

    file_pattern: str
    forbidden: tuple[str, ...]

    def __post_init__(self) -> None:
        re.compile(self.file_pattern)

    @property
    def rule(self) -> FilePatternRule:
        return FilePatternRule(name="debug-code", pattern=self.file_pattern)


DEFAULT_DEBUG_CODE_RULES: tuple[tuple[str, DebugCodeGroup], ...] = (
    (
        "js/coffee",
        DebugCodeGroup(
            file_pattern=r"\.(js|coffee)(\..+)?$",
            forbidden=("console.log(", "console.debug(", r"debugger\;"),
        ),
    ),
    (
        "php",
        DebugCodeGroup(
            file_pattern=r"\.(php|phtml|inc)(\..+)?$",
            forbidden=("var_dump(", "print_r(", "die(", r"exit\;"),
        ),
    ),
    (
        "twig",
        DebugCodeGroup(
            file_pattern=r"\.twig(\..+)?$",
            forbidden=("{{ dump(", "{% dump"),
        ),
    ),
)


@dataclass(frozen=True)
class ToolCommands:
    """Base argv for each external tool."""

    php: tuple[str, ...] = ("php",)
    php_cs_fixer: tuple[str, ...] = ("php-cs-fixer",)
    phpcs: tuple[str, ...] = ("phpcs",)
    phpunit: tuple[str, ...] = ("phpunit",)


@dataclass(frozen=True)
class StyleSettings:
    standard: str = "PSR2"
    encoding: str = "utf-8"
    source_dir: str = "src"


@dataclass(frozen=True)
class GateConfig:
    """Complete, immutable configuration for one gate run."""

    tools: ToolCommands = field(default_factory=ToolCommands)
    style: StyleSettings = field(default_factory=StyleSettings)
    debug_code: tuple[tuple[str, DebugCodeGroup], ...] = DEFAULT_DEBUG_CODE_RULES
    collect_all_debug_matches: bool = True
    color: bool = True
    source: Path | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any], *, source: Path | None = None) -> GateConfig:
        """Parse and validate config dict into GateConfig."""
        tools_data = data.get("tools", {})
        defaults = ToolCommands()
        tools = ToolCommands(
            php=_argv(tools_data.get("php"), defaults.php),
            php_cs_fixer=_argv(tools_data.get("php_cs_fixer"), defaults.php_cs_fixer),
            phpcs=_argv(tools_data.get("phpcs"), defaults.phpcs),
            phpunit=_argv(tools_data.get("phpunit"), defaults.phpunit),
        )

        style_data = data.get("style", {})
        style = StyleSettings(
            standard=str(style_data.get("standard", StyleSettings.standard)),
            encoding=str(style_data.get("encoding", StyleSettings.encoding)),
            source_dir=str(style_data.get("source_dir", StyleSettings.source_dir)),
        )

        debug_data = data.get("debug_code", {})
        groups = dict(DEFAULT_DEBUG_CODE_RULES)
        order = [name for name, _ in DEFAULT_DEBUG_CODE_RULES]
        for name, group_data in debug_data.get("groups", {}).items():
            groups[name] = DebugCodeGroup(
                file_pattern=str(group_data["file_pattern"]),
                forbidden=_strings(group_data["forbidden"], f"debug_code.groups.{name}.forbidden"),
            )
            if name not in order:
                order.append(name)

        return cls(
            tools=tools,
            style=style,
            debug_code=tuple((name, groups[name]) for name in order),
            collect_all_debug_matches=_flag(debug_data.get("collect_all", True), "debug_code.collect_all"),
            source=source,
        )


def _argv(value: Any, default: tuple[str, ...]) -> tuple[str, ...]:
    if value is None:
        return default
    if isinstance(value, str):
        return (value,)
    if isinstance(value, list) and value and all(isinstance(v, str) for v in value):
        return tuple(value)
    raise ValueError(f"tool command must be a string or non-empty list of strings, got {value!r}")


def _strings(value: Any, key: str) -> tuple[str, ...]:
    if isinstance(value, list) and value and all(isinstance(v, str) for v in value):
        return tuple(value)
    raise ValueError(f"{key} must be a non-empty list of strings, got {value!r}")


def _flag(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    raise ValueError(f"{key} must be true or false, got {value!r}")


def _load_file(path: Path) -> dict[str, Any]:
    if path.suffix == ".toml":
        try:
            with open(path, "rb") as f:
                return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Malformed TOML config at {path}: {e}") from e

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Malformed YAML config at {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config at {path} must be a mapping")
    return data


def load_gate_config(repo_root: Path, explicit: Path | None = None) -> GateConfig:
    """Load gate configuration from an explicit path or .stagegate/.

    Priority order:
    1. ``explicit`` (format chosen by suffix)
    2. .stagegate/config.toml
    3. .stagegate/config.yaml

    Returns:
        GateConfig, defaults when no config file is present

    Raises:
        ConfigError: If config file is missing, malformed or invalid
    """
    if explicit is not None:
        if not explicit.exists():
            raise ConfigError(f"Config file not found: {explicit}")
        candidates = [explicit]
    else:
        config_dir = repo_root / CONFIG_DIR
        candidates = [p for p in (config_dir / "config.toml", config_dir / "config.yaml") if p.exists()]

    if candidates:
        path = candidates[0]
        data = _load_file(path)
        try:
            config = GateConfig.from_dict(data, source=path)
        except (AttributeError, KeyError, TypeError, ValueError, re.error) as e:
            raise ConfigError(f"Invalid config structure in {path}: {e}") from e
    else:
        config = GateConfig()

    if os.getenv("STAGEGATE_COLOR", "1") == "0":
        config = replace(config, color=False)
    return config
