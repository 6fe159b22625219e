"""Exception taxonomy for the configuration service.

Every error raised on purpose by this package derives from :class:`ConfigError`,
so hosts can catch one type. Most classes also derive from the builtin that
best describes them (``ValueError``, ``TypeError``...) so generic handlers keep
working.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class ConfigError(Exception):
    """Base class for configuration service failures."""


class EnvironmentResolutionError(ConfigError, RuntimeError):
    """The home directory or a platform data/cache location is unavailable."""


class DirectoryCreationError(ConfigError):
    """A required directory could not be created."""

    def __init__(self, path: Union[str, Path], reason: Optional[BaseException] = None):
        self.path = Path(path)
        msg = f"could not create directory {self.path}"
        if reason is not None:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class DecodeError(ConfigError, ValueError):
    """An on-disk document is malformed, empty or has the wrong shape."""


class KeyNotFoundError(ConfigError, LookupError):
    """No settings field is bound to the requested logical key."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"key '{key}' not found in config")


class TypeMismatchError(ConfigError, TypeError):
    """An output slot or input value is incompatible with a bound field."""


class UnsupportedFormatError(ConfigError, ValueError):
    """A file extension is not handled by any format adapter."""

    def __init__(self, extension: str):
        self.extension = extension
        super().__init__(f"unsupported config format: {extension or '<none>'}")


class SerializationError(ConfigError, TypeError):
    """A value cannot be encoded into the target document format."""


class PersistenceError(ConfigError):
    """The settings file could not be read or written."""
