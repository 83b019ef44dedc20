"""Tests for SatSettings — CLI flags, env vars, and TOML merged."""

from __future__ import annotations

from pathlib import Path

import click
import pytest
from pydantic import ValidationError

from satorder.config.settings import SatSettings


def _write_config(root: Path, body: str) -> Path:
    path = root / "satorder.toml"
    path.write_text(body, encoding="utf-8")
    return path


class TestDefaults:
    def test_code_defaults(self, tmp_path: Path) -> None:
        settings = SatSettings.from_cli(project_root=tmp_path)
        assert settings.pagination.default_limit == 5
        assert settings.api.port == 3000
        assert settings.api.prefix == "/api"
        assert settings.database_path == tmp_path / ".satorder" / "satorder.db"
        assert settings.config_path is None

    def test_frozen(self, tmp_path: Path) -> None:
        settings = SatSettings.from_cli(project_root=tmp_path)
        with pytest.raises(ValidationError):
            settings.verbose = True  # type: ignore[misc]


class TestToml:
    def test_discovered_by_walk_up(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _write_config(tmp_path, "[pagination]\ndefault_limit = 12\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)

        settings = SatSettings.from_cli()
        assert settings.pagination.default_limit == 12
        assert settings.project_root == tmp_path.resolve()

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        path = _write_config(tmp_path, '[database]\npath = "data/orders.db"\n')
        settings = SatSettings.from_cli(config_path=str(path))
        assert settings.config_path == path
        assert settings.database_path == tmp_path / "data" / "orders.db"

    def test_config_env_var(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = _write_config(tmp_path, "[api]\nport = 8080\n")
        monkeypatch.setenv("SATORDER_CONFIG", str(path))
        assert SatSettings.from_cli().api.port == 8080

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = _write_config(tmp_path, "[api\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            SatSettings.from_cli(config_path=str(path))

    def test_invalid_value_rejected(self, tmp_path: Path) -> None:
        path = _write_config(tmp_path, "[pagination]\ndefault_limit = 0\n")
        with pytest.raises(ValidationError):
            SatSettings.from_cli(config_path=str(path))

    def test_max_limit_configurable(self, tmp_path: Path) -> None:
        path = _write_config(tmp_path, "[pagination]\nmax_limit = 500\n")
        assert SatSettings.from_cli(config_path=str(path)).pagination.max_limit == 500

    def test_default_limit_above_max_rejected(self, tmp_path: Path) -> None:
        path = _write_config(tmp_path, "[pagination]\ndefault_limit = 50\nmax_limit = 10\n")
        with pytest.raises(ValidationError, match="exceeds max_limit"):
            SatSettings.from_cli(config_path=str(path))


class TestPriority:
    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = _write_config(tmp_path, "[api]\nport = 8080\n")
        monkeypatch.setenv("SATORDER_API__PORT", "9090")
        assert SatSettings.from_cli(config_path=str(path)).api.port == 9090

    def test_cli_overrides_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SATORDER_VERBOSE", "false")
        settings = SatSettings.from_cli(project_root=tmp_path, verbose=True)
        assert settings.verbose is True

    def test_absolute_database_path(self, tmp_path: Path) -> None:
        target = tmp_path / "elsewhere" / "x.db"
        settings = SatSettings.from_cli(
            project_root=tmp_path / "proj", database={"path": str(target)}
        )
        assert settings.database_path == target
