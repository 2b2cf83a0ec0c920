"""Configuration loading for aquin (.aquin.yml)."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .errors import ConfigError
from .models import DirPattern, ProcessOptions

CONFIG_FILENAME = ".aquin.yml"
PATTERN_PREFIX = "re:"


@dataclass
class ServiceConfig:
    """Bind address for service mode."""

    host: str = "127.0.0.1"
    port: int = 8000


@dataclass
class AquinConfig:
    """Represents the settings defined in .aquin.yml."""

    root: Path
    include_extensions: List[str] = field(default_factory=list)
    exclude_extensions: List[str] = field(default_factory=list)
    exclude_dirs: List[str] = field(default_factory=list)
    extractors: Optional[List[str]] = None
    output_dir: Optional[Path] = None
    workers: Optional[int] = None
    log_file: Optional[Path] = None
    service: ServiceConfig = field(default_factory=ServiceConfig)

    def to_options(self) -> ProcessOptions:
        return ProcessOptions(
            include_extensions=tuple(self.include_extensions),
            exclude_extensions=tuple(self.exclude_extensions),
            exclude_dirs=compile_dir_patterns(self.exclude_dirs),
        )


def compile_dir_patterns(values: Sequence[str]) -> tuple[DirPattern, ...]:
    """Turn ``re:``-prefixed entries into compiled patterns, keep the rest literal."""
    patterns: List[DirPattern] = []
    for value in values:
        if value.startswith(PATTERN_PREFIX):
            expression = value[len(PATTERN_PREFIX):]
            try:
                patterns.append(re.compile(expression))
            except re.error as exc:
                raise ConfigError(f"Invalid exclude_dirs pattern {expression!r}: {exc}") from exc
        else:
            patterns.append(value)
    return tuple(patterns)


def load_config(config_path: Path) -> AquinConfig:
    """Load configuration from disk, returning defaults when the file is absent."""
    config_file = _resolve_config_path(Path(config_path))
    root = config_file.parent.resolve()

    if not config_file.exists():
        return AquinConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    extractor_data = _as_dict(data.get("extractors"))
    extractors = None
    if "enabled" in extractor_data:
        extractors = _as_str_list(extractor_data.get("enabled"))

    output_data = _as_dict(data.get("output"))
    output_dir_str = _as_str(output_data.get("directory"))

    logging_data = _as_dict(data.get("logging"))
    log_file_str = _as_str(logging_data.get("file"))

    service_data = _as_dict(data.get("service"))
    service = ServiceConfig()
    host = _as_str(service_data.get("host"))
    if host:
        service.host = host
    port = _as_int(service_data.get("port"))
    if port is not None:
        service.port = port

    config = AquinConfig(
        root=root,
        include_extensions=_as_str_list(data.get("include_extensions")),
        exclude_extensions=_as_str_list(data.get("exclude_extensions")),
        exclude_dirs=_as_str_list(data.get("exclude_dirs")),
        extractors=extractors,
        output_dir=root / output_dir_str if output_dir_str else None,
        workers=_as_int(data.get("workers")),
        log_file=root / log_file_str if log_file_str else None,
        service=service,
    )
    # Surface bad patterns at load time rather than mid-traversal.
    compile_dir_patterns(config.exclude_dirs)
    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.suffix in {".yml", ".yaml"}:
        return config_path.resolve()
    return (config_path.parent / CONFIG_FILENAME).resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "AquinConfig",
    "CONFIG_FILENAME",
    "ConfigError",
    "ServiceConfig",
    "compile_dir_patterns",
    "load_config",
]
