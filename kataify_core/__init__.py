"""
Kataify Core - Turn annotated solutions into kata exercises

Author: Kataify maintainers | 2026-10-18
"""

from .version import __version__
from .kataifier import (
    KATA_MARKER,
    KataMode,
    KataLine,
    parse_kata_line,
    is_kata_line,
    contains_kata_markers,
    kataify_lines,
    kataify_file,
)
from .file_access import (
    KataifyError,
    ReadError,
    WriteError,
    FileAccess,
    FileAccessProtocol,
    LocalFileAccess,
    InMemoryFileAccess,
    DryRunFileAccess,
)
from .batch import (
    FileMapping,
    MappingStatus,
    MappingSkipped,
    MappingResult,
    KataifyResult,
    KataifyExitCode,
    KataifyExecutor,
    kataify,
    kataify_mapping,
    run_kataify_sync,
)
from .discovery import discover_mappings, parse_mapping_arg
from .config import (
    ConfigError,
    KataifyConfig,
    TransformConfig,
    BatchConfig,
    LoggingConfig,
    find_config_file,
    load_config,
    save_config,
)

__all__ = [
    "__version__",
    # Line transformer
    "KATA_MARKER",
    "KataMode",
    "KataLine",
    "parse_kata_line",
    "is_kata_line",
    "contains_kata_markers",
    "kataify_lines",
    "kataify_file",
    # File access
    "KataifyError",
    "ReadError",
    "WriteError",
    "FileAccess",
    "FileAccessProtocol",
    "LocalFileAccess",
    "InMemoryFileAccess",
    "DryRunFileAccess",
    # Batch driver
    "FileMapping",
    "MappingStatus",
    "MappingSkipped",
    "MappingResult",
    "KataifyResult",
    "KataifyExitCode",
    "KataifyExecutor",
    "kataify",
    "kataify_mapping",
    "run_kataify_sync",
    # Discovery
    "discover_mappings",
    "parse_mapping_arg",
    # Configuration
    "ConfigError",
    "KataifyConfig",
    "TransformConfig",
    "BatchConfig",
    "LoggingConfig",
    "find_config_file",
    "load_config",
    "save_config",
]
