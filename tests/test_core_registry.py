from __future__ import annotations

from pathlib import Path

from lethean_config import ConfigService, Core, Options, register


def test_core_starts_without_config() -> None:
    assert Core().config is None


def test_register_wires_core_and_runtime(isolated_home: Path) -> None:
    core = Core()
    store = register(core)

    assert core.config is store
    assert isinstance(store, ConfigService)
    assert store.runtime is not None
    assert store.runtime.core is core
    assert store.runtime.config is store
    assert store.runtime.options == Options()


def test_components_use_config_by_reference(isolated_home: Path, tmp_path: Path) -> None:
    core = Core()
    register(core, Options(home=tmp_path))

    core.config.set("language", "fr")
    assert core.config.get("language", str) == "fr"
    assert (tmp_path / "lethean" / "config" / "config.json").is_file()
