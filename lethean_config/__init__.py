"""Lethean configuration service.

Loads, mutates and saves the application settings record, and stores auxiliary
key-value data as JSON, YAML, INI or XML next to it.
"""

from __future__ import annotations

import logging

__version__ = "0.3.0"

from .core import ConfigService, Core, ServiceRuntime
from .errors import (
    ConfigError,
    DecodeError,
    DirectoryCreationError,
    EnvironmentResolutionError,
    KeyNotFoundError,
    PersistenceError,
    SerializationError,
    TypeMismatchError,
    UnsupportedFormatError,
)
from .formats import get_config_format
from .paths import DirectorySet
from .settings import Options, Settings, SettingsStore, new, register

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    # registry
    "ConfigService",
    "Core",
    "ServiceRuntime",
    # errors
    "ConfigError",
    "DecodeError",
    "DirectoryCreationError",
    "EnvironmentResolutionError",
    "KeyNotFoundError",
    "PersistenceError",
    "SerializationError",
    "TypeMismatchError",
    "UnsupportedFormatError",
    # formats
    "get_config_format",
    # store
    "DirectorySet",
    "Options",
    "Settings",
    "SettingsStore",
    "new",
    "register",
]
