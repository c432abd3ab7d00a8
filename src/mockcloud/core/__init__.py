# src/mockcloud/core/__init__.py
"""Core infrastructure: record stores, configuration, logging.

Databases and containers live in core.database and core.container; they are
re-exported from the top-level package rather than here because they depend
on the engine and fault registry, which themselves import core.
"""

from mockcloud.core.config import (
    DEFAULT_CONTAINER_IDENTIFIER,
    DEFAULT_MAX_RESULTS_LIMIT,
    FaultSettings,
    MockCloudSettings,
    deep_merge,
    list_presets,
    load_preset,
    load_settings,
)
from mockcloud.core.logging import configure_logging, get_logger
from mockcloud.core.store import RecordStore

__all__ = [
    "DEFAULT_CONTAINER_IDENTIFIER",
    "DEFAULT_MAX_RESULTS_LIMIT",
    "FaultSettings",
    "MockCloudSettings",
    "RecordStore",
    "configure_logging",
    "deep_merge",
    "get_logger",
    "list_presets",
    "load_preset",
    "load_settings",
]
