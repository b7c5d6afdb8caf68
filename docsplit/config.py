"""Configuration loading for docsplit (.docsplit.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .models import LINK_STYLES, SIMPLE_LINKS

CONFIG_FILENAME = ".docsplit.yml"
DEFAULT_PADDING = 3


class ConfigError(RuntimeError):
    """Raised when the configuration is unreadable or invalid."""


@dataclass
class ConverterConfig:
    """Settings for the external document converter."""

    executable: str = "pandoc"
    extra_args: List[str] = field(default_factory=list)
    timeout: Optional[float] = None


@dataclass
class DocSplitConfig:
    """Represents the settings defined in .docsplit.yml merged with CLI overrides."""

    root: Path
    padding: int = DEFAULT_PADDING
    link_style: str = SIMPLE_LINKS
    output_dir: Optional[Path] = None
    clean: bool = True
    templates_dir: Optional[Path] = None
    converter: ConverterConfig = field(default_factory=ConverterConfig)

    def with_overrides(self, **overrides: Any) -> "DocSplitConfig":
        """Return a copy with every non-None override applied."""
        values = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **values)


def load_config(config_path: Path) -> DocSplitConfig:
    """Load configuration from disk, returning defaults when no file exists."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return DocSplitConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = DocSplitConfig(root=root)

    padding = _typed(data, "padding", int)
    if padding is not None:
        config.padding = padding

    link_style = _typed(data, "link_style", str)
    if link_style:
        config.link_style = link_style.lower()

    output_dir = _typed(data, "output_dir", str)
    if output_dir:
        config.output_dir = root / output_dir

    clean = _typed(data, "clean", bool)
    if clean is not None:
        config.clean = clean

    templates_dir = _typed(data, "templates_dir", str)
    if templates_dir:
        config.templates_dir = root / templates_dir

    converter_data = _typed(data, "converter", dict)
    if converter_data:
        timeout = _typed(converter_data, "timeout", float, section="converter")
        config.converter = ConverterConfig(
            executable=_typed(converter_data, "executable", str, section="converter") or "pandoc",
            extra_args=_string_list(converter_data, "extra_args", section="converter"),
            timeout=timeout,
        )

    return validate_config(config)


def validate_config(config: DocSplitConfig) -> DocSplitConfig:
    """Reject settings that would make every document fail."""
    if isinstance(config.padding, bool) or not isinstance(config.padding, int):
        raise ConfigError(f"padding must be an integer, got {config.padding!r}")
    if config.padding < 1:
        raise ConfigError(f"padding must be at least 1, got {config.padding}")
    if config.link_style not in LINK_STYLES:
        choices = ", ".join(LINK_STYLES)
        raise ConfigError(f"link_style must be one of {choices}, got {config.link_style!r}")
    if config.templates_dir is not None and not config.templates_dir.is_dir():
        raise ConfigError(f"templates_dir does not exist: {config.templates_dir}")
    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME and config_path.suffix not in {".yml", ".yaml"}:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


_TYPE_LABELS = {int: "an integer", float: "a number", str: "a string", bool: "true or false", dict: "a mapping"}


def _typed(data: Dict[str, Any], key: str, expected: type, *, section: str | None = None) -> Any:
    """Return ``data[key]`` checked against ``expected``; missing or null gives None.

    YAML booleans are never accepted as numbers, and integers are widened
    when a float is expected.
    """
    value = data.get(key)
    if value is None:
        return None
    if expected is float and isinstance(value, int) and not isinstance(value, bool):
        return float(value)
    if isinstance(value, expected) and not (expected is not bool and isinstance(value, bool)):
        return value
    name = f"{section}.{key}" if section else key
    raise ConfigError(f"{name} must be {_TYPE_LABELS[expected]}, got {value!r}")


def _string_list(data: Dict[str, Any], key: str, *, section: str | None = None) -> List[str]:
    value = data.get(key)
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    name = f"{section}.{key}" if section else key
    if not isinstance(value, list) or any(isinstance(item, (dict, list)) for item in value):
        raise ConfigError(f"{name} must be a list of strings, got {value!r}")
    return [str(item) for item in value]
