"""Persistent settings for Lethean.

A single JSON document (``config.json``) holds the settings record under the
per-user config directory. The same directory stores auxiliary structs
(``<name>.json``) and key-value files in JSON, YAML, INI or XML.

Design goals:
  * Fields addressed by stable logical keys, not attribute names
  * Load-or-create at startup: a broken file is an error, never silently reset
  * Whole-record writes on every change
"""

from .record import FIELDS, Settings, SettingField
from .store import Options, SettingsStore, new, register

__all__ = ["FIELDS", "Options", "Settings", "SettingField", "SettingsStore", "new", "register"]
