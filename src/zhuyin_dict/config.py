"""
Engine configuration and its YAML loader.
"""
from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from zhuyin_dict.exceptions import ConfigError
from zhuyin_dict.models import SchemaLayout


@dataclass(frozen=True)
class EngineConfig:
    """Size caps for searches, candidate pools and the bounded stores."""

    search_limit_idiom: int = 100
    search_limit_character: int = 50
    history_limit: int = 50
    favorites_limit: int = 30
    candidate_limit: int = 300

    def search_limit(self, layout: SchemaLayout) -> int:
        """Result cap for a store revision."""
        if layout is SchemaLayout.CHARACTER:
            return self.search_limit_character
        return self.search_limit_idiom


DEFAULT_CONFIG = EngineConfig()


def load_config(
    source: Union[str, Path, Dict[str, Any], None] = None,
) -> EngineConfig:
    """Load engine configuration from a YAML file, YAML string or mapping.

    Keys that are not given keep their defaults.

    Args:
        source: Path to YAML file, YAML string, parsed dictionary, or None

    Returns:
        EngineConfig object

    Raises:
        ConfigError: If the YAML is invalid or a value is out of range
        FileNotFoundError: If the file does not exist
    """
    if source is None:
        return DEFAULT_CONFIG

    if isinstance(source, dict):
        data = source
    elif isinstance(source, Path) or (isinstance(source, str) and _is_file_path(source)):
        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        with open(path, "r", encoding="utf-8") as f:
            data = _safe_load(f)
    else:
        data = _safe_load(source)

    return _parse_config(data)


def _is_file_path(s: str) -> bool:
    """Check if a string looks like a file path."""
    if "\n" in s:
        return False
    if "/" in s or "\\" in s:
        return True
    return s.endswith((".yaml", ".yml"))


def _safe_load(stream: Any) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(stream)
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        line_num = mark.line + 1 if mark else None
        raise ConfigError(f"Invalid YAML: {e}", line=line_num) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("YAML root must be a mapping (dictionary)")
    return data


def _parse_config(data: Dict[str, Any]) -> EngineConfig:
    known = {f.name for f in fields(EngineConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown configuration key(s): {', '.join(unknown)}")

    values: Dict[str, int] = {}
    for key, value in data.items():
        # bool is an int subclass; reject it explicitly
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"Field '{key}' must be an integer")
        if value <= 0:
            raise ConfigError(f"Field '{key}' must be positive, got {value}")
        values[key] = value

    return replace(DEFAULT_CONFIG, **values)

