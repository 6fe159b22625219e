from __future__ import annotations

import logging
from dataclasses import astuple, dataclass
from pathlib import Path
from typing import Optional

import platformdirs

from .errors import DirectoryCreationError, EnvironmentResolutionError

logger = logging.getLogger(__name__)

APP_NAME = "lethean"


@dataclass(frozen=True)
class DirectorySet:
    root: Path
    cache: Path
    config: Path
    data: Path
    workspace: Path
    user_home: Path

    def all(self) -> tuple[Path, ...]:
        return astuple(self)


def _home_dir(home: Optional[Path]) -> Path:
    if home is not None:
        return Path(home).expanduser()
    try:
        return Path.home()
    except (KeyError, RuntimeError) as exc:
        raise EnvironmentResolutionError(f"could not resolve user home directory: {exc}") from exc


def resolve_directories(app_name: str = APP_NAME, home: Optional[Path] = None) -> DirectorySet:
    """Compute the service directories without touching the filesystem.

    Layout:
      <user data dir>/<app>          root
      <user cache dir>/<app>         cache
      <home>/<app>/                  user_home
        config/
        data/
        workspace/

    Data and cache locations follow ``platformdirs`` (XDG on Linux, Library on
    macOS, AppData on Windows).
    """
    user_home = (_home_dir(home) / app_name).absolute()

    try:
        root = Path(platformdirs.user_data_dir(app_name, appauthor=False))
    except Exception as exc:
        raise EnvironmentResolutionError(f"could not resolve data directory: {exc}") from exc
    try:
        cache = Path(platformdirs.user_cache_dir(app_name, appauthor=False))
    except Exception as exc:
        raise EnvironmentResolutionError(f"could not resolve cache directory: {exc}") from exc

    return DirectorySet(
        root=root.absolute(),
        cache=cache.absolute(),
        config=user_home / "config",
        data=user_home / "data",
        workspace=user_home / "workspace",
        user_home=user_home,
    )


def ensure_directories(dirs: DirectorySet) -> DirectorySet:
    """Create every directory in ``dirs``; existing ones are left alone."""
    for path in dirs.all():
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise DirectoryCreationError(path, exc) from exc
    logger.debug("Directories ready under %s", dirs.user_home)
    return dirs
