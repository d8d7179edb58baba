"""
Kataify Configuration System
============================

Loads and manages configuration from kataify.yaml with environment variable overrides.

Example kataify.yaml:

    transform:
      mode: next_line
    batch:
      max_parallel: 8
      fail_fast: false
    source_dir: src/solutions
    destination_dir: katas
    patterns: ["*.spec.js"]
    mappings:
      - source_filename: extra/answer.js
        destination_filename: katas/answer.js

Author: Kataify maintainers | 2026-10-18
"""

import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .batch import FileMapping
from .discovery import discover_mappings
from .file_access import KataifyError
from .kataifier import KataMode

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "kataify.yaml"

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(KataifyError):
    """Invalid or unreadable configuration."""


# =============================================================================
# Configuration Data Classes
# =============================================================================

@dataclass
class TransformConfig:
    """Line transformer configuration."""
    mode: str = KataMode.NEXT_LINE.value


@dataclass
class BatchConfig:
    """Batch driver configuration."""
    max_parallel: Optional[int] = None  # None = all files at once
    fail_fast: bool = False
    encoding: str = "utf-8"
    create_dirs: bool = True


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"


@dataclass
class KataifyConfig:
    """Root configuration container."""
    transform: TransformConfig = field(default_factory=TransformConfig)
    batch: BatchConfig = field(default_factory=BatchConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    source_dir: Optional[str] = None
    destination_dir: Optional[str] = None
    patterns: List[str] = field(default_factory=lambda: ["*"])
    exclude: List[str] = field(default_factory=list)
    mappings: List[FileMapping] = field(default_factory=list)

    @property
    def mode(self) -> KataMode:
        return KataMode(self.transform.mode)

    def build_mappings(self) -> List[FileMapping]:
        """Explicit mappings followed by the ones discovered under source_dir."""
        result = list(self.mappings)
        if self.source_dir:
            if not self.destination_dir:
                raise ConfigError("source_dir is set but destination_dir is missing")
            result.extend(
                discover_mappings(self.source_dir, self.destination_dir, self.patterns, self.exclude)
            )
        return result

    def to_dict(self) -> Dict[str, Any]:
        return {
            "transform": asdict(self.transform),
            "batch": asdict(self.batch),
            "logging": asdict(self.logging),
            "source_dir": self.source_dir,
            "destination_dir": self.destination_dir,
            "patterns": list(self.patterns),
            "exclude": list(self.exclude),
            "mappings": [m.to_dict() for m in self.mappings],
        }


# =============================================================================
# Configuration Loader
# =============================================================================

def find_config_file(start_path: Optional[Path] = None) -> Optional[Path]:
    """
    Find kataify.yaml by searching upward from start_path.

    Search order:
    1. start_path / kataify.yaml
    2. start_path / .kataify / kataify.yaml
    3. Parent directories (recursive)
    4. ~/.config/kataify/kataify.yaml

    Args:
        start_path: Starting directory (defaults to cwd)

    Returns:
        Path to config file or None if not found
    """
    if start_path is None:
        start_path = Path.cwd()

    current = Path(start_path).resolve()
    while True:
        for candidate in (current / CONFIG_FILENAME, current / ".kataify" / CONFIG_FILENAME):
            if candidate.is_file():
                return candidate
        if current.parent == current:
            break
        current = current.parent

    user_config = Path.home() / ".config" / "kataify" / CONFIG_FILENAME
    if user_config.is_file():
        return user_config

    return None


def load_config(config_path: Optional[Path] = None) -> KataifyConfig:
    """
    Load configuration from YAML file with environment variable overrides.

    Environment variables override config file values:
    - KATAIFY_MODE -> transform.mode
    - KATAIFY_MAX_PARALLEL -> batch.max_parallel
    - KATAIFY_FAIL_FAST -> batch.fail_fast
    - KATAIFY_ENCODING -> batch.encoding
    - KATAIFY_LOG_LEVEL -> logging.level

    Args:
        config_path: Path to config file (auto-detected if None)

    Returns:
        KataifyConfig instance

    Raises:
        ConfigError: If the file cannot be parsed or holds invalid values
    """
    config = KataifyConfig()

    if config_path is None:
        config_path = find_config_file()

    if config_path is not None and Path(config_path).exists():
        logger.info(f"Loading config from: {config_path}")
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to load config {config_path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config {config_path} must be a mapping, got {type(data).__name__}")
        config = _parse_config_dict(data)
    else:
        logger.debug("No config file found, using defaults")

    config = _apply_env_overrides(config)
    _validate_config(config)
    return config


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    """Return a config section, which must be a mapping (or empty)."""
    section = data[name] or {}
    if not isinstance(section, dict):
        raise ConfigError(f"Section '{name}' must be a mapping, got {type(section).__name__}")
    return section


def _string_list(data: Dict[str, Any], name: str, default: List[str]) -> List[str]:
    """Read a list of strings; a single string counts as a one-element list."""
    value = data.get(name, default)
    if value is None:
        return list(default)
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"'{name}' must be a string or a list of strings, got {value!r}")
    return list(value)


def _parse_config_dict(data: Dict[str, Any]) -> KataifyConfig:
    """Parse configuration dictionary into KataifyConfig."""
    config = KataifyConfig()

    if "transform" in data:
        transform = _section(data, "transform")
        config.transform = TransformConfig(
            mode=transform.get("mode", config.transform.mode),
        )

    if "batch" in data:
        batch = _section(data, "batch")
        config.batch = BatchConfig(
            max_parallel=batch.get("max_parallel", config.batch.max_parallel),
            fail_fast=batch.get("fail_fast", config.batch.fail_fast),
            encoding=batch.get("encoding", config.batch.encoding),
            create_dirs=batch.get("create_dirs", config.batch.create_dirs),
        )

    if "logging" in data:
        log = _section(data, "logging")
        config.logging = LoggingConfig(
            level=str(log.get("level", config.logging.level)).upper(),
        )

    config.source_dir = data.get("source_dir", config.source_dir)
    config.destination_dir = data.get("destination_dir", config.destination_dir)
    config.patterns = _string_list(data, "patterns", config.patterns)
    config.exclude = _string_list(data, "exclude", config.exclude)

    try:
        config.mappings = [FileMapping.from_dict(m) for m in data.get("mappings") or []]
    except (ValueError, AttributeError) as e:
        raise ConfigError(f"Invalid mapping: {e}") from e

    return config


def _apply_env_overrides(config: KataifyConfig) -> KataifyConfig:
    """Apply environment variable overrides to config."""

    if os.environ.get("KATAIFY_MODE"):
        config.transform.mode = os.environ["KATAIFY_MODE"]

    if os.environ.get("KATAIFY_MAX_PARALLEL"):
        try:
            config.batch.max_parallel = int(os.environ["KATAIFY_MAX_PARALLEL"])
        except ValueError as e:
            raise ConfigError(f"KATAIFY_MAX_PARALLEL must be an integer: {e}") from e

    if os.environ.get("KATAIFY_FAIL_FAST"):
        config.batch.fail_fast = os.environ["KATAIFY_FAIL_FAST"].lower() in ("true", "1", "yes")

    if os.environ.get("KATAIFY_ENCODING"):
        config.batch.encoding = os.environ["KATAIFY_ENCODING"]

    if os.environ.get("KATAIFY_LOG_LEVEL"):
        config.logging.level = os.environ["KATAIFY_LOG_LEVEL"].upper()

    return config


def _validate_config(config: KataifyConfig) -> None:
    """Validate configuration, raising on values that cannot be used."""

    valid_modes = [m.value for m in KataMode]
    if config.transform.mode not in valid_modes:
        raise ConfigError(
            f"Unknown mode '{config.transform.mode}', expected one of {', '.join(valid_modes)}"
        )

    max_parallel = config.batch.max_parallel
    if max_parallel is not None and (not isinstance(max_parallel, int) or max_parallel < 1):
        raise ConfigError(f"batch.max_parallel must be a positive integer, got {max_parallel!r}")

    if config.logging.level not in VALID_LOG_LEVELS:
        logger.warning(f"Unknown log level '{config.logging.level}', defaulting to 'INFO'")
        config.logging.level = "INFO"


def save_config(config: KataifyConfig, path: Path) -> None:
    """
    Save configuration to YAML file.

    Args:
        config: Configuration to save
        path: Output path
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)
    logger.info(f"Config saved to: {path}")
