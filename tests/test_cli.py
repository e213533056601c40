from __future__ import annotations

import json
import re
from pathlib import Path

from typer.testing import CliRunner

from product_settings import __version__
from product_settings.cli import app
from product_settings.settings.model import ProductSettings
from product_settings.settings.store import SettingsStore


def _plain(text: str) -> str:
    return re.sub(r"\x1b\[[0-9;?]*[A-Za-z]", "", text)


def test_version_prints_version() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_path_prints_default_location(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["path", "--workdir", str(tmp_path)])
    assert result.exit_code == 0
    assert result.stdout.strip() == str(tmp_path / ".aaagent" / "product-settings.json")


def test_path_honours_env_file_override(tmp_path: Path) -> None:
    runner = CliRunner()
    target = tmp_path / "custom.json"
    result = runner.invoke(app, ["path"], env={"PRODUCT_SETTINGS_FILE": str(target)})
    assert result.exit_code == 0
    assert result.stdout.strip() == str(target)


def test_show_prints_defaults_when_file_missing(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["show", "--workdir", str(tmp_path)])
    assert result.exit_code == 0
    plain = _plain(result.stdout)
    assert "new-project" in plain
    assert "Windows" in plain
    assert "(defaults)" in plain


def test_show_merges_file_over_defaults(tmp_path: Path) -> None:
    file = tmp_path / "settings.json"
    file.write_text(json.dumps({"platform": "Linux", "modules": ["sqlite"]}), encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(app, ["show", "--file", str(file)])
    assert result.exit_code == 0
    plain = _plain(result.stdout)
    assert "Linux" in plain
    assert "SQLite" in plain
    assert "new-project" in plain


def test_edit_requires_tty(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["edit", "--workdir", str(tmp_path)])
    assert result.exit_code == 2
    assert "requires a TTY" in result.stderr


def test_edit_prints_saved_path(monkeypatch, tmp_path: Path) -> None:  # noqa: ANN001
    import product_settings.cli as cli_mod

    calls: list[SettingsStore] = []

    def _fake_dialog(store: SettingsStore) -> ProductSettings:
        calls.append(store)
        return ProductSettings(name="shop")

    monkeypatch.setattr(cli_mod, "_can_launch_interactive_dialog", lambda _console: True)
    monkeypatch.setattr(cli_mod, "run_product_settings_dialog", _fake_dialog)
    runner = CliRunner()
    result = runner.invoke(app, ["edit", "--workdir", str(tmp_path)])
    assert result.exit_code == 0
    assert calls == [SettingsStore.for_workdir(tmp_path)]
    assert result.stdout.strip() == str(tmp_path / ".aaagent" / "product-settings.json")


def test_edit_reports_when_nothing_saved(monkeypatch, tmp_path: Path) -> None:  # noqa: ANN001
    import product_settings.cli as cli_mod

    monkeypatch.setattr(cli_mod, "_can_launch_interactive_dialog", lambda _console: True)
    monkeypatch.setattr(cli_mod, "run_product_settings_dialog", lambda _store: None)
    runner = CliRunner()
    result = runner.invoke(app, ["edit", "--workdir", str(tmp_path)])
    assert result.exit_code == 0
    assert "No settings saved." in result.stderr
