from __future__ import annotations

import sys
from pathlib import Path

import pytest

from lethean_config.errors import DirectoryCreationError, EnvironmentResolutionError
from lethean_config.paths import DirectorySet, ensure_directories, resolve_directories


def test_layout_under_home(isolated_home: Path) -> None:
    dirs = resolve_directories()

    user_home = isolated_home / "lethean"
    assert dirs.user_home == user_home
    assert dirs.config == user_home / "config"
    assert dirs.data == user_home / "data"
    assert dirs.workspace == user_home / "workspace"
    assert str(dirs.root).startswith(str(isolated_home))
    assert str(dirs.cache).startswith(str(isolated_home))
    assert dirs.root.name == "lethean"
    assert dirs.cache.name == "lethean"
    assert all(p.is_absolute() for p in dirs.all())


def test_resolve_does_not_touch_disk(isolated_home: Path) -> None:
    dirs = resolve_directories()
    assert not any(p.exists() for p in dirs.all())


@pytest.mark.skipif(not sys.platform.startswith("linux"), reason="XDG variables only apply on Linux")
def test_xdg_overrides_are_honoured(isolated_home: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg-data"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "xdg-cache"))

    dirs = resolve_directories("myapp")
    assert dirs.root == tmp_path / "xdg-data" / "myapp"
    assert dirs.cache == tmp_path / "xdg-cache" / "myapp"
    assert dirs.user_home == isolated_home / "myapp"


def test_explicit_home_wins(isolated_home: Path, tmp_path: Path) -> None:
    other = tmp_path / "portable"
    dirs = resolve_directories(home=other)
    assert dirs.user_home == other / "lethean"


def test_ensure_creates_everything_and_is_idempotent(isolated_home: Path) -> None:
    dirs = resolve_directories()

    assert ensure_directories(dirs) is dirs
    assert all(p.is_dir() for p in dirs.all())

    (dirs.config / "keep.txt").write_text("x", encoding="utf-8")
    ensure_directories(dirs)
    assert (dirs.config / "keep.txt").read_text(encoding="utf-8") == "x"


def test_ensure_reports_the_failing_directory(tmp_path: Path) -> None:
    blocker = tmp_path / "app"
    blocker.write_text("not a directory", encoding="utf-8")
    dirs = DirectorySet(
        root=tmp_path / "root",
        cache=tmp_path / "cache",
        config=blocker / "config",
        data=blocker / "data",
        workspace=blocker / "workspace",
        user_home=blocker,
    )

    with pytest.raises(DirectoryCreationError) as excinfo:
        ensure_directories(dirs)
    assert excinfo.value.path == blocker / "config"


def test_missing_home_is_an_environment_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def _no_home(cls):
        raise RuntimeError("Could not determine home directory.")

    monkeypatch.setattr(Path, "home", classmethod(_no_home))
    with pytest.raises(EnvironmentResolutionError, match="home directory"):
        resolve_directories()


def test_platform_dir_failure_is_an_environment_error(isolated_home: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import platformdirs

    def _boom(*args, **kwargs):
        raise OSError("no data dir")

    monkeypatch.setattr(platformdirs, "user_cache_dir", _boom)
    with pytest.raises(EnvironmentResolutionError, match="cache directory"):
        resolve_directories()
