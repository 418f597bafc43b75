"""Core types, configuration and errors for tagstash."""

from .config import CacheConfig, Config, StorageConfig
from .exceptions import (
    AdmissionRefusedError,
    DamagedDataError,
    DatabaseError,
    FailedToCacheError,
    NotSupportedError,
    TagStashError,
)
from .types import Entry

__all__ = [
    # Config
    "CacheConfig",
    "Config",
    "StorageConfig",
    # Exceptions
    "AdmissionRefusedError",
    "DamagedDataError",
    "DatabaseError",
    "FailedToCacheError",
    "NotSupportedError",
    "TagStashError",
    # Types
    "Entry",
]
