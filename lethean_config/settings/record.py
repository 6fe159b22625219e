from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, get_args, get_origin

from ..errors import DecodeError, TypeMismatchError
from ..paths import DirectorySet

CONFIG_FILE_NAME = "config.json"


@dataclass
class Settings:
    """The persisted settings record.

    Path fields are filled in from the resolved directories at startup; the
    rest carry user preferences.
    """

    config_path: str = ""
    user_home_dir: str = ""
    root_dir: str = ""
    cache_dir: str = ""
    config_dir: str = ""
    data_dir: str = ""
    workspace_dir: str = ""
    default_route: str = "/"
    features: List[str] = field(default_factory=list)
    language: str = "en"

    @classmethod
    def defaults(cls, dirs: DirectorySet, config_file_name: str = CONFIG_FILE_NAME) -> "Settings":
        return cls(
            config_path=str(dirs.config / config_file_name),
            user_home_dir=str(dirs.user_home),
            root_dir=str(dirs.root),
            cache_dir=str(dirs.cache),
            config_dir=str(dirs.config),
            data_dir=str(dirs.data),
            workspace_dir=str(dirs.workspace),
        )


@dataclass(frozen=True)
class SettingField:
    """Binding between a logical key and one attribute of :class:`Settings`."""

    key: str
    attr: str
    kind: type
    omit_empty: bool = False

    def read(self, settings: Settings) -> Any:
        value = getattr(settings, self.attr)
        if self.kind is list:
            return list(value)
        return value

    def write(self, settings: Settings, value: Any) -> None:
        if not self.accepts(value):
            raise TypeMismatchError(
                f"type mismatch for key '{self.key}': expected {self.type_name}, got {type(value).__name__}"
            )
        setattr(settings, self.attr, list(value) if self.kind is list else value)

    def accepts(self, value: Any) -> bool:
        if self.kind is list:
            return isinstance(value, list) and all(isinstance(v, str) for v in value)
        return isinstance(value, self.kind)

    def assignable_to(self, target: Any) -> bool:
        """Whether this field's value can be handed to a slot typed ``target``."""
        if target is Any:
            return True
        origin = get_origin(target) or target
        if not isinstance(origin, type):
            return False
        if not issubclass(self.kind, origin):
            return False
        args = get_args(target)
        if self.kind is list and args:
            item = args[0]
            return item is Any or (isinstance(item, type) and issubclass(str, item))
        return True

    @property
    def type_name(self) -> str:
        return "list[str]" if self.kind is list else self.kind.__name__


FIELDS: Sequence[SettingField] = (
    SettingField("configPath", "config_path", str, omit_empty=True),
    SettingField("userHomeDir", "user_home_dir", str, omit_empty=True),
    SettingField("rootDir", "root_dir", str, omit_empty=True),
    SettingField("cacheDir", "cache_dir", str, omit_empty=True),
    SettingField("configDir", "config_dir", str, omit_empty=True),
    SettingField("dataDir", "data_dir", str, omit_empty=True),
    SettingField("workspaceDir", "workspace_dir", str, omit_empty=True),
    SettingField("default_route", "default_route", str),
    SettingField("features", "features", list),
    SettingField("language", "language", str),
)


def build_key_index(fields: Sequence[SettingField]) -> Dict[str, SettingField]:
    """Index fields by lower-cased logical key; duplicate keys are a bug."""
    index: Dict[str, SettingField] = {}
    for f in fields:
        k = f.key.lower()
        if k in index:
            raise ValueError(f"logical key '{f.key}' is bound to both '{index[k].attr}' and '{f.attr}'")
        index[k] = f
    return index


KEY_INDEX = build_key_index(FIELDS)


def lookup(key: str) -> Optional[SettingField]:
    return KEY_INDEX.get(key.lower())


def to_document(settings: Settings) -> Dict[str, Any]:
    """Settings -> JSON-ready dict, in field order, dropping empty optional paths."""
    doc: Dict[str, Any] = {}
    for f in FIELDS:
        value = f.read(settings)
        if f.omit_empty and not value:
            continue
        doc[f.key] = value
    return doc


def apply_document(settings: Settings, doc: Mapping[str, Any], source: Optional[Path] = None) -> None:
    """Overlay a decoded settings document onto ``settings``.

    Keys match case-insensitively; unknown keys and null values are ignored.
    A value of the wrong type aborts the whole load with :class:`DecodeError`
    before anything is modified.
    """
    where = f" in {source}" if source else ""
    updates = []
    for key, value in doc.items():
        f = lookup(str(key))
        if f is None or value is None:
            continue
        if not f.accepts(value):
            raise DecodeError(
                f"cannot decode '{key}'{where}: expected {f.type_name}, got {type(value).__name__}"
            )
        updates.append((f, value))

    for f, value in updates:
        f.write(settings, value)
