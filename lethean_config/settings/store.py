from __future__ import annotations

import copy
import dataclasses
import json
import logging
import os
import threading
from collections.abc import MutableMapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Type

from ..core import Core, ServiceRuntime
from ..errors import (
    DecodeError,
    KeyNotFoundError,
    PersistenceError,
    SerializationError,
    TypeMismatchError,
)
from ..formats import get_config_format
from ..paths import APP_NAME, DirectorySet, ensure_directories, resolve_directories
from .record import CONFIG_FILE_NAME, Settings, SettingField, apply_document, lookup, to_document

logger = logging.getLogger(__name__)


@dataclass
class Options:
    app_name: str = APP_NAME
    config_file_name: str = CONFIG_FILE_NAME
    # Overrides Path.home(); mostly useful for tests and portable installs.
    home: Optional[Path] = None


def _encode_struct_value(obj: Any) -> Any:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: getattr(obj, f.name) for f in dataclasses.fields(obj)}
    if isinstance(obj, os.PathLike):
        return os.fspath(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def _fill_struct(out: Any, data: Any, source: Path) -> None:
    if not isinstance(data, dict):
        raise DecodeError(f"{source}: expected a JSON object, got {type(data).__name__}")

    if isinstance(out, MutableMapping):
        out.update(data)
        return

    by_name = {f.name.lower(): f.name for f in dataclasses.fields(out)}
    for key, value in data.items():
        attr = by_name.get(str(key).lower())
        if attr is None:
            continue
        current = getattr(out, attr)
        if dataclasses.is_dataclass(current) and not isinstance(current, type) and isinstance(value, dict):
            _fill_struct(current, value, source)
        else:
            setattr(out, attr, value)


def _check_struct_slot(out: Any) -> None:
    if isinstance(out, MutableMapping):
        return
    if not dataclasses.is_dataclass(out) or isinstance(out, type):
        raise TypeMismatchError(
            f"output must be a dataclass instance or a mutable mapping, got {type(out).__name__}"
        )
    if out.__dataclass_params__.frozen:
        raise TypeMismatchError(f"output {type(out).__name__} is frozen and cannot be written")


class SettingsStore:
    """Owns the settings record and everything persisted next to it.

    Build one with :meth:`create` (or :func:`new` / :func:`register`). The
    store resolves and creates its directories, then loads ``config.json`` or
    writes it with defaults when it does not exist yet.

    Every :meth:`set` rewrites the whole settings file. ``get``, ``set`` and
    ``save`` share one re-entrant lock, so concurrent writers always leave a
    complete document on disk. The write itself is a plain overwrite.
    """

    def __init__(self, settings: Settings, directories: DirectorySet) -> None:
        self._settings = settings
        self._dirs = directories
        self._lock = threading.RLock()
        self.runtime: Optional[ServiceRuntime[Options]] = None

    @classmethod
    def create(cls, options: Optional[Options] = None) -> "SettingsStore":
        opts = options or Options()
        dirs = ensure_directories(resolve_directories(opts.app_name, opts.home))
        store = cls(Settings.defaults(dirs, opts.config_file_name), dirs)
        store._load_or_create()
        return store

    # Read-only views ------------------------------------------------------
    @property
    def settings(self) -> Settings:
        """A copy of the current record. Change values through :meth:`set`."""
        with self._lock:
            return copy.deepcopy(self._settings)

    @property
    def directories(self) -> DirectorySet:
        return self._dirs

    @property
    def config_path(self) -> Path:
        return Path(self._settings.config_path)

    @property
    def config_dir(self) -> Path:
        return Path(self._settings.config_dir)

    # Settings record ------------------------------------------------------
    def _load_or_create(self) -> None:
        path = self.config_path
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            try:
                self.save()
            except PersistenceError as exc:
                raise PersistenceError(f"failed to create default config file: {exc}") from exc
            logger.info("Created default settings at %s", path)
            return
        except OSError as exc:
            raise PersistenceError(f"failed to read config file {path}: {exc}") from exc

        try:
            doc = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise DecodeError(f"failed to decode config {path}: {exc}") from exc

        if doc is not None:
            if not isinstance(doc, dict):
                raise DecodeError(
                    f"failed to decode config {path}: root is {type(doc).__name__}, expected an object"
                )
            apply_document(self._settings, doc, source=path)
        logger.info("Loaded settings from %s", path)

    def save(self) -> None:
        """Write the whole settings record to ``config_path``."""
        with self._lock:
            try:
                txt = json.dumps(
                    to_document(self._settings), indent=2, ensure_ascii=False, allow_nan=False
                )
            except (TypeError, ValueError) as exc:
                raise SerializationError(f"failed to encode config: {exc}") from exc
            try:
                self.config_path.write_text(txt, encoding="utf-8")
            except OSError as exc:
                raise PersistenceError(f"failed to write config file {self.config_path}: {exc}") from exc

    def _field(self, key: str) -> SettingField:
        f = lookup(key)
        if f is None:
            raise KeyNotFoundError(key)
        return f

    def get(self, key: str, expected_type: Optional[Type[Any]] = None) -> Any:
        """Return the value bound to logical ``key`` (case-insensitive).

        ``expected_type`` is the type the caller wants to receive. When given,
        the field's type must be assignable to it, otherwise
        :class:`TypeMismatchError` is raised.

        Example::

            lang = store.get("language", str)
        """
        f = self._field(key)
        if expected_type is not None and not f.assignable_to(expected_type):
            raise TypeMismatchError(
                f"cannot assign config value of type {f.type_name} to output of type "
                f"{getattr(expected_type, '__name__', repr(expected_type))}"
            )
        with self._lock:
            return f.read(self._settings)

    def set(self, key: str, value: Any) -> None:
        """Assign ``value`` to logical ``key`` and save the settings file.

        If saving fails the new value stays in memory while the file keeps the
        old one; the error is raised to the caller.
        """
        f = self._field(key)
        with self._lock:
            f.write(self._settings, value)
            self.save()

    # Auxiliary structs ----------------------------------------------------
    def _struct_path(self, name: str) -> Path:
        return self.config_dir / f"{name}.json"

    def save_struct(self, name: str, value: Any) -> None:
        """Store ``value`` as ``<configDir>/<name>.json``.

        Accepts anything JSON can encode plus dataclass instances (nested
        ones too). Live objects such as sockets or locks raise
        :class:`SerializationError`.
        """
        path = self._struct_path(name)
        try:
            txt = json.dumps(
                value, indent=2, ensure_ascii=False, allow_nan=False, default=_encode_struct_value
            )
        except (TypeError, ValueError) as exc:
            raise SerializationError(f"failed to encode struct for key '{name}': {exc}") from exc
        try:
            path.write_text(txt, encoding="utf-8")
        except OSError as exc:
            raise PersistenceError(f"failed to write struct file for key '{name}': {exc}") from exc
        logger.debug("Saved struct %r to %s", name, path)

    def load_struct(self, name: str, out: Any) -> Any:
        """Fill ``out`` from ``<configDir>/<name>.json`` and return it.

        ``out`` is a dataclass instance (matching fields are assigned, nested
        dataclasses filled recursively) or a mutable mapping (updated). A file
        that was never saved, or holds ``null``, leaves ``out`` untouched.
        """
        _check_struct_slot(out)
        path = self._struct_path(name)
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            return out
        except OSError as exc:
            raise PersistenceError(f"failed to read struct file for key '{name}': {exc}") from exc

        try:
            data = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise DecodeError(f"failed to decode struct file for key '{name}': {exc}") from exc
        if data is not None:
            _fill_struct(out, data, path)
        return out

    # Key-value files ------------------------------------------------------
    def save_key_values(self, name: str, data: Dict[str, Any]) -> None:
        """Store ``data`` as ``<configDir>/<name>``; the extension picks the format.

        Example::

            store.save_key_values("database.yml", {"host": "localhost", "port": 8080})
        """
        fmt = get_config_format(name)
        fmt.save(self.config_dir / name, data)
        logger.debug("Saved %s key-values to %s", fmt.name, name)

    def load_key_values(self, name: str) -> Dict[str, Any]:
        fmt = get_config_format(name)
        return fmt.load(self.config_dir / name)


def new(options: Optional[Options] = None) -> SettingsStore:
    """Create a standalone settings store."""
    return SettingsStore.create(options)


def register(core: Core, options: Optional[Options] = None) -> SettingsStore:
    """Create a settings store and register it as ``core``'s config service."""
    opts = options or Options()
    store = SettingsStore.create(opts)
    store.runtime = ServiceRuntime(core, opts)
    core.set_config(store)
    return store
