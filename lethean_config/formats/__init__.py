"""Format adapters for auxiliary key-value files.

Each adapter stores a flat ``str -> value`` mapping in one syntax (JSON, YAML,
INI or XML). :func:`get_config_format` picks the adapter from a file name.
"""

from __future__ import annotations

import os
from typing import Dict, Type

from ..errors import UnsupportedFormatError
from .base import ConfigFormat, PathLike, stringify
from .ini_format import INIFormat
from .json_format import JSONFormat
from .xml_format import XMLFormat
from .yaml_format import YAMLFormat

_FORMATS_BY_EXT: Dict[str, Type] = {
    ".json": JSONFormat,
    ".yaml": YAMLFormat,
    ".yml": YAMLFormat,
    ".ini": INIFormat,
    ".xml": XMLFormat,
}

SUPPORTED_EXTENSIONS = tuple(_FORMATS_BY_EXT)


def get_config_format(path: PathLike) -> ConfigFormat:
    """Return the adapter for ``path``'s extension (case-insensitive).

    Raises :class:`UnsupportedFormatError` for any other extension, including
    a name with no extension at all.
    """

    ext = os.path.splitext(os.fspath(path))[1].lower()
    try:
        cls = _FORMATS_BY_EXT[ext]
    except KeyError:
        raise UnsupportedFormatError(ext) from None
    return cls()


__all__ = [
    "ConfigFormat",
    "INIFormat",
    "JSONFormat",
    "SUPPORTED_EXTENSIONS",
    "XMLFormat",
    "YAMLFormat",
    "get_config_format",
    "stringify",
]
