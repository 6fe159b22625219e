from __future__ import annotations

from typing import Any, Dict

import yaml

from ..errors import DecodeError, SerializationError
from .base import PathLike, read_text, write_text


class YAMLFormat:
    """Block-style YAML mapping.

    Whole numbers written without a decimal point load back as ``int``, unlike
    :class:`~lethean_config.formats.json_format.JSONFormat`.
    """

    name = "yaml"

    def load(self, path: PathLike) -> Dict[str, Any]:
        raw = read_text(path)
        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise DecodeError(f"invalid YAML in {path}: {exc}") from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise DecodeError(f"{path}: YAML root is {type(data).__name__}, expected a mapping")
        return data

    def save(self, path: PathLike, data: Dict[str, Any]) -> None:
        try:
            txt = yaml.safe_dump(
                dict(data or {}),
                default_flow_style=False,
                sort_keys=True,
                allow_unicode=True,
            )
        except yaml.YAMLError as exc:
            raise SerializationError(f"cannot encode data as YAML: {exc}") from exc
        write_text(path, txt)
