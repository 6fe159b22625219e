from __future__ import annotations

import configparser
import io
from typing import Any, Dict

from ..errors import DecodeError, SerializationError
from .base import PathLike, read_text, stringify, write_text

DEFAULT_SECTION = "DEFAULT"

# configparser treats its default section specially (keys leak into every other
# section). Park that behaviour on a name no real file uses so "DEFAULT" is an
# ordinary section.
_UNUSED_DEFAULT_SECTION = "\x00defaults"

_COMMENT_PREFIXES = ("#", ";")


def _parser() -> configparser.ConfigParser:
    # strict=False lets the implicit leading [DEFAULT] merge with an explicit one.
    cp = configparser.ConfigParser(
        interpolation=None,
        default_section=_UNUSED_DEFAULT_SECTION,
        delimiters=("=",),
        strict=False,
    )
    cp.optionxform = str  # keep key case
    return cp


def split_key(key: str) -> tuple[str, str]:
    """``"server.port"`` -> ``("server", "port")``; no section -> default section."""
    section, sep, name = key.partition(".")
    if not sep:
        return DEFAULT_SECTION, key
    return section or DEFAULT_SECTION, name


def _check_writable(key: str, section: str, name: str) -> None:
    if "\n" in section or "\r" in section:
        raise SerializationError(f"INI section name in key {key!r} contains a line break")
    problem = None
    if not name.strip():
        problem = "an empty key name"
    elif name != name.strip():
        problem = "leading or trailing whitespace"
    elif name.startswith(_COMMENT_PREFIXES) or name.startswith("["):
        problem = "a name that reads back as a comment or section header"
    elif "=" in name or "\n" in name or "\r" in name:
        problem = "'=' or a line break in the key name"
    if problem:
        raise SerializationError(f"cannot write key {key!r} to INI: {problem}")


class INIFormat:
    """INI file with ``section.key`` flattening.

    Keys are split on the first dot into section and key name; keys without a
    section go to the ``DEFAULT`` section. On load every key comes back as
    ``section.key`` and every value as a string. Keys placed before the first
    section header belong to ``DEFAULT``.

    Key names INI cannot carry (``#tag``, ``;x``, ``a=b``, blanks) raise
    :class:`SerializationError` on save.
    """

    name = "ini"

    def load(self, path: PathLike) -> Dict[str, Any]:
        raw = read_text(path)
        cp = _parser()
        try:
            cp.read_string(f"[{DEFAULT_SECTION}]\n{raw}", source=str(path))
        except configparser.Error as exc:
            raise DecodeError(f"invalid INI in {path}: {exc}") from exc

        result: Dict[str, Any] = {}
        for section in cp.sections():
            for key, value in cp.items(section, raw=True):
                result[f"{section}.{key}"] = value
        return result

    def save(self, path: PathLike, data: Dict[str, Any]) -> None:
        cp = _parser()
        for key, value in (data or {}).items():
            section, name = split_key(str(key))
            _check_writable(str(key), section, name)
            if not cp.has_section(section):
                cp.add_section(section)
            cp.set(section, name, stringify(value))

        buf = io.StringIO()
        cp.write(buf)
        write_text(path, buf.getvalue())
