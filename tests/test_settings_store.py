from __future__ import annotations

import json
from pathlib import Path

import pytest

from product_settings.settings.model import DEFAULT_SETTINGS, ProductSettings
from product_settings.settings.store import SettingsStore, default_settings_path


def test_default_path_lives_under_project_config_dir(tmp_path: Path) -> None:
    assert default_settings_path(tmp_path) == tmp_path / ".aaagent" / "product-settings.json"
    assert SettingsStore.for_workdir(tmp_path).path == default_settings_path(tmp_path)


def test_load_missing_file_returns_defaults(tmp_path: Path) -> None:
    settings = SettingsStore(tmp_path / "missing.json").load()
    assert settings == DEFAULT_SETTINGS
    assert settings.name == "new-project"
    assert settings.platform == "Windows"
    assert settings.modules == ()


def test_load_partial_file_merges_over_defaults(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text('{"platform":"Linux"}', encoding="utf-8")
    settings = SettingsStore(path).load()
    assert settings.platform == "Linux"
    assert settings.name == "new-project"
    assert settings.style_reference_url == ""
    assert settings.modules == ()


def test_load_replaces_modules_wholesale(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text(
        json.dumps({"name": "shop", "modules": ["i18n", "sqlite", "i18n"]}),
        encoding="utf-8",
    )
    settings = SettingsStore(path).load()
    assert settings.name == "shop"
    assert settings.modules == ("i18n", "sqlite")


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        "[1, 2, 3]",
        '"just a string"',
        "",
    ],
)
def test_load_malformed_file_returns_defaults(
    tmp_path: Path, content: str, caplog: pytest.LogCaptureFixture
) -> None:
    path = tmp_path / "settings.json"
    path.write_text(content, encoding="utf-8")
    with caplog.at_level("WARNING"):
        assert SettingsStore(path).load() == DEFAULT_SETTINGS
    assert "product settings" in caplog.text


def test_load_ignores_ill_typed_values_individually(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text(
        json.dumps(
            {
                "name": 42,
                "styleReferenceUrl": "https://example.com/style",
                "platform": "Plan9",
                "modules": "sqlite",
                "extra": True,
            }
        ),
        encoding="utf-8",
    )
    settings = SettingsStore(path).load()
    assert settings == ProductSettings(style_reference_url="https://example.com/style")


def test_load_unreadable_bytes_returns_defaults(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_bytes(b"\xff\xfe\x00garbage")
    assert SettingsStore(path).load() == DEFAULT_SETTINGS


def test_save_creates_parent_directories_and_writes_full_shape(tmp_path: Path) -> None:
    store = SettingsStore.for_workdir(tmp_path / "nested" / "project")
    settings = ProductSettings(name="shop", platform="Linux", modules=("sqlite",))
    assert store.save(settings) == settings

    payload = json.loads(store.path.read_text(encoding="utf-8"))
    assert payload == {
        "name": "shop",
        "styleReferenceUrl": "",
        "platform": "Linux",
        "modules": ["sqlite"],
    }


def test_save_twice_is_byte_identical(tmp_path: Path) -> None:
    store = SettingsStore(tmp_path / "settings.json")
    settings = ProductSettings(name="café", modules=("i18n", "sqlite"))
    store.save(settings)
    first = store.path.read_bytes()
    store.save(settings)
    assert store.path.read_bytes() == first


def test_save_then_load_round_trips(tmp_path: Path) -> None:
    store = SettingsStore(tmp_path / "settings.json")
    settings = ProductSettings(
        name="shop",
        style_reference_url="https://example.com",
        platform="Linux",
        modules=("i18n",),
    )
    store.save(settings)
    assert store.load() == settings


def test_save_failure_returns_none(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = SettingsStore(blocker / "settings.json")
    with caplog.at_level("WARNING"):
        assert store.save(DEFAULT_SETTINGS) is None
    assert "Failed to save product settings" in caplog.text


def test_load_with_overlong_path_returns_defaults(tmp_path: Path) -> None:
    store = SettingsStore(tmp_path / ("x" * 300) / "settings.json")
    assert store.load() == DEFAULT_SETTINGS


def test_save_of_unencodable_settings_returns_none(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    store = SettingsStore(tmp_path / "settings.json")
    with caplog.at_level("WARNING"):
        assert store.save(ProductSettings(name="bad\ud800")) is None
    assert "unencodable" in caplog.text
    assert not store.path.exists()


def test_failed_save_keeps_previous_file(tmp_path: Path) -> None:
    store = SettingsStore(tmp_path / "settings.json")
    store.save(ProductSettings(name="shop"))
    before = store.path.read_bytes()

    assert store.save(ProductSettings(name="bad\ud800")) is None
    assert store.path.read_bytes() == before
    assert store.load().name == "shop"


def test_failed_write_keeps_previous_file_and_cleans_staging(
    monkeypatch, tmp_path: Path  # noqa: ANN001
) -> None:
    import product_settings.settings.store as store_mod

    store = SettingsStore(tmp_path / "settings.json")
    store.save(ProductSettings(name="shop"))
    before = store.path.read_bytes()

    def _fail_replace(*_args, **_kwargs):  # noqa: ANN002, ANN003
        raise OSError("disk full")

    monkeypatch.setattr(store_mod.os, "replace", _fail_replace)
    assert store.save(ProductSettings(name="other")) is None
    assert store.path.read_bytes() == before
    assert sorted(p.name for p in tmp_path.iterdir()) == ["settings.json"]
