"""Tests for CatalogSettings — unified settings with TOML source."""

from pathlib import Path

import click
import pytest

from taskcatalog.config.settings import CatalogSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("TASKCATALOG_CONFIG", "TASKCATALOG_PLUGINS__ENABLED", "TASKCATALOG_VERBOSE"):
        monkeypatch.delenv(name, raising=False)


class TestCatalogSettingsDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        """With no TOML and no env vars, all fields use code defaults."""
        settings = CatalogSettings.from_cli(catalog_root=tmp_path)
        assert settings.catalog_root == tmp_path
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.quiet is False
        assert settings.catalog.tasks_dir == "tasks"
        assert settings.catalog.document_name == "task.md"
        assert settings.plugins.enabled is True
        assert settings.tasks_path == tmp_path / "tasks"
        assert settings.index_path == tmp_path / "metadata.json"

    def test_frozen(self, tmp_path: Path) -> None:
        settings = CatalogSettings.from_cli(catalog_root=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]

    def test_default_rules(self, tmp_path: Path) -> None:
        settings = CatalogSettings.from_cli(catalog_root=tmp_path)
        assert ".diff" in settings.reference_rules().extensions
        assert settings.validation_rules().allowed_types == ("task",)


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        (tmp_path / "taskcatalog.toml").write_text(
            '[catalog]\nindex_file = "catalog.json"\n[validation]\nallowed_types = ["task", "epic"]\n'
        )
        settings = CatalogSettings.from_cli(catalog_root=tmp_path)
        assert settings.index_path == tmp_path / "catalog.json"
        assert settings.validation.allowed_types == ["task", "epic"]
        assert settings.catalog.tasks_dir == "tasks"  # default preserved

    def test_empty_toml_uses_defaults(self, tmp_path: Path) -> None:
        (tmp_path / "taskcatalog.toml").write_text("")
        settings = CatalogSettings.from_cli(catalog_root=tmp_path)
        assert settings.catalog.index_file == "metadata.json"

    def test_root_defaults_to_config_dir(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "taskcatalog.toml").write_text("")
        nested = tmp_path / "tasks" / "deep"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)
        settings = CatalogSettings.from_cli()
        assert settings.catalog_root == tmp_path
        assert settings.config_path == tmp_path / "taskcatalog.toml"

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text('[catalog]\ntasks_dir = "work"\n')
        settings = CatalogSettings.from_cli(config_path=str(custom), catalog_root=tmp_path)
        assert settings.tasks_path == tmp_path / "work"
        assert settings.config_path == custom

    def test_invalid_toml_raises_click_error(self, tmp_path: Path) -> None:
        (tmp_path / "taskcatalog.toml").write_text("[catalog\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            CatalogSettings.from_cli(catalog_root=tmp_path)

    def test_extra_patterns_extend_defaults(self, tmp_path: Path) -> None:
        (tmp_path / "taskcatalog.toml").write_text(
            "[[validation.extra_forbidden]]\n"
            'id = "docker-priv"\n'
            'pattern = "--privileged"\n'
        )
        rules = CatalogSettings.from_cli(catalog_root=tmp_path).validation_rules()
        ids = [rule.id for rule in rules.forbidden_patterns]
        assert ids[0] == "eval-call"
        assert ids[-1] == "docker-priv"


class TestPriority:
    def test_cli_flags_override(self, tmp_path: Path) -> None:
        settings = CatalogSettings.from_cli(
            catalog_root=tmp_path, json_output=True, quiet=True, verbose=True
        )
        assert settings.json_output is True
        assert settings.quiet is True
        assert settings.verbose is True

    def test_cli_flags_override_toml(self, tmp_path: Path) -> None:
        (tmp_path / "taskcatalog.toml").write_text("verbose = true\n")
        settings = CatalogSettings.from_cli(catalog_root=tmp_path, verbose=False)
        assert settings.verbose is False

    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "taskcatalog.toml").write_text("[plugins]\nenabled = true\n")
        monkeypatch.setenv("TASKCATALOG_PLUGINS__ENABLED", "false")
        settings = CatalogSettings.from_cli(catalog_root=tmp_path)
        assert settings.plugins.enabled is False
