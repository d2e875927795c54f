# phaseflow/utils/__init__.py
"""
Utilities for phaseflow.

Contains:
- config: package-wide policy settings and parameter validation helpers
- logging: timers, memory monitoring, progress tracking
"""

from .config import (
    PackageConfig,
    InvalidConfigurationError,
    configure,
    get_config,
    reset_config,
    require_positive,
    require_non_negative,
    require_count,
)

from .logging import (
    Timer,
    timeit,
    memory_info,
    create_progress_callback,
    ProgressCallback,
)

__all__ = [
    # config
    "PackageConfig",
    "InvalidConfigurationError",
    "configure",
    "get_config",
    "reset_config",
    "require_positive",
    "require_non_negative",
    "require_count",
    # logging
    "Timer",
    "timeit",
    "memory_info",
    "create_progress_callback",
    "ProgressCallback",
]
