from __future__ import annotations

import json
from typing import Any, Dict

from ..errors import DecodeError, SerializationError
from .base import PathLike, read_text, write_text


class JSONFormat:
    """Indented JSON object.

    Numbers are decoded as floats whatever their spelling on disk, so ``123``
    comes back as ``123.0``.
    """

    name = "json"

    def load(self, path: PathLike) -> Dict[str, Any]:
        raw = read_text(path)
        try:
            data = json.loads(raw, parse_int=float)
        except json.JSONDecodeError as exc:
            raise DecodeError(f"invalid JSON in {path}: {exc}") from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise DecodeError(f"{path}: JSON root is {type(data).__name__}, expected an object")
        return data

    def save(self, path: PathLike, data: Dict[str, Any]) -> None:
        try:
            txt = json.dumps(data or {}, indent=2, sort_keys=True, allow_nan=False)
        except (TypeError, ValueError) as exc:
            raise SerializationError(f"cannot encode data as JSON: {exc}") from exc
        write_text(path, txt)
