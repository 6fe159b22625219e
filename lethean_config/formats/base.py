from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Protocol, Union

from ..errors import DecodeError

PathLike = Union[str, Path]


class ConfigFormat(Protocol):
    """Format adapter contract.

    An adapter reads and writes a flat ``str -> value`` mapping in one on-disk
    syntax. Whether value types survive a round trip is up to the syntax:
    INI and XML hand every value back as a string.
    """

    name: str

    def load(self, path: PathLike) -> Dict[str, Any]: ...

    def save(self, path: PathLike, data: Dict[str, Any]) -> None: ...


def stringify(value: Any) -> str:
    """Render a value the way the text-only formats (INI, XML) store it.

    - ``True``/``False`` become ``true``/``false``
    - whole floats drop the trailing ``.0`` (``123.0`` -> ``123``)
    - ``None`` becomes an empty string
    - lists and dicts become compact JSON
    """

    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    if isinstance(value, (list, tuple, dict)):
        return json.dumps(value, separators=(",", ":"), default=str)
    return str(value)


def write_text(path: PathLike, text: str) -> None:
    Path(path).write_text(text, encoding="utf-8")


def read_text(path: PathLike) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError(f"{path} is not valid UTF-8: {exc}") from exc
