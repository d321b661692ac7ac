"""Tests for sitehooks.config -- discovery, JSON/YAML parsing, validation."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from sitehooks.config import (
    CONFIG_ENV_VAR,
    _parse_content,
    find_site_config,
    load_site_config,
    resolve_site_config,
)
from sitehooks.exceptions import ConfigError
from sitehooks.models import SiteConfig


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _write_json(path: Path, data: Any) -> Path:
    """Write a dict as JSON to *path*, creating parent dirs."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# SiteConfig model
# ---------------------------------------------------------------------------


class TestSiteConfig:
    """Model defaults and coercion."""

    def test_defaults(self) -> None:
        config = SiteConfig()
        assert config.plugins == []
        assert config.context == {}
        assert config.source_dir is None
        assert config.output.format == "auto"

    @pytest.mark.parametrize("plugins", [None, "search", {"name": "x"}, 3])
    def test_non_list_plugins_become_empty(self, plugins: Any) -> None:
        assert SiteConfig.model_validate({"plugins": plugins}).plugins == []

    def test_tuple_plugins_kept(self) -> None:
        assert SiteConfig(plugins=("a", "b")).plugins == ["a", "b"]

    def test_extra_keys_preserved(self) -> None:
        config = SiteConfig.model_validate({"title": "Docs"})
        assert config.model_extra == {"title": "Docs"}

    def test_root_context(self) -> None:
        config = SiteConfig(source_dir="/site", context={"base": "/guide/"})
        assert config.root_context() == {"source_dir": "/site", "base": "/guide/"}

    def test_context_can_override_source_dir(self) -> None:
        config = SiteConfig(source_dir="/site", context={"source_dir": "/other"})
        assert config.root_context()["source_dir"] == "/other"


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


class TestParseContent:
    """JSON first, YAML fallback."""

    def test_json(self) -> None:
        assert _parse_content('{"plugins": ["a"]}') == {"plugins": ["a"]}

    def test_yaml(self) -> None:
        content = 'plugins:\n  - search\n  - ["site.plugins:seo", {lang: en}]\n'
        assert _parse_content(content) == {
            "plugins": ["search", ["site.plugins:seo", {"lang": "en"}]]
        }

    def test_json_hint_does_not_fall_back(self) -> None:
        with pytest.raises(ConfigError, match="Invalid JSON"):
            _parse_content("plugins: []", hint="json")

    def test_empty_yaml_is_empty_mapping(self) -> None:
        assert _parse_content("", hint="yaml") == {}

    def test_non_mapping_rejected(self) -> None:
        with pytest.raises(ConfigError, match="must be an object"):
            _parse_content("[1, 2]")
        with pytest.raises(ConfigError, match="must be a mapping"):
            _parse_content("- a\n- b\n", hint="yaml")

    def test_garbage_rejected(self) -> None:
        with pytest.raises(ConfigError, match="Failed to parse"):
            _parse_content("plugins: [unclosed\n")


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


class TestFindSiteConfig:
    """CLI path > env var > default file names."""

    def test_cli_path(self, isolated_config: Path) -> None:
        path = _write_json(isolated_config / "custom.json", {})
        assert find_site_config(path) == path

    def test_cli_path_missing(self, isolated_config: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            find_site_config(isolated_config / "nope.json")

    def test_env_var(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = _write_json(isolated_config / "env.json", {})
        _write_json(isolated_config / "sitehooks.json", {})
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
        assert find_site_config() == path

    def test_env_var_missing_file(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(CONFIG_ENV_VAR, str(isolated_config / "gone.yml"))
        with pytest.raises(ConfigError, match=CONFIG_ENV_VAR):
            find_site_config()

    def test_cli_beats_env(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        cli = _write_json(isolated_config / "cli.json", {})
        env = _write_json(isolated_config / "env.json", {})
        monkeypatch.setenv(CONFIG_ENV_VAR, str(env))
        assert find_site_config(cli) == cli

    def test_default_file_order(self, isolated_config: Path) -> None:
        (isolated_config / "sitehooks.yml").write_text("plugins: []\n")
        assert find_site_config().name == "sitehooks.yml"
        _write_json(isolated_config / "sitehooks.json", {})
        assert find_site_config().name == "sitehooks.json"

    def test_nothing_found(self, isolated_config: Path) -> None:
        with pytest.raises(ConfigError, match="No site config found"):
            find_site_config()


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


class TestLoadSiteConfig:
    """File reading, validation, and source_dir resolution."""

    def test_source_dir_defaults_to_config_dir(self, tmp_path: Path) -> None:
        path = _write_json(tmp_path / "site" / "sitehooks.json", {"plugins": ["a"]})
        config = load_site_config(path)
        assert config.source_dir == str((tmp_path / "site").resolve())
        assert config.plugins == ["a"]

    def test_relative_source_dir(self, tmp_path: Path) -> None:
        path = _write_json(tmp_path / "sitehooks.json", {"source_dir": "docs"})
        assert load_site_config(path).source_dir == str(tmp_path.resolve() / "docs")

    def test_absolute_source_dir_kept(self, tmp_path: Path) -> None:
        absolute = str(tmp_path.resolve() / "elsewhere")
        path = _write_json(tmp_path / "sitehooks.json", {"source_dir": absolute})
        assert load_site_config(path).source_dir == absolute

    def test_yaml_file(self, tmp_path: Path) -> None:
        path = tmp_path / "sitehooks.yaml"
        path.write_text("plugins:\n  - [search, {max: 5}]\ncontext:\n  base: /docs/\n")
        config = load_site_config(path)
        assert config.plugins == [["search", {"max": 5}]]
        assert config.context == {"base": "/docs/"}

    def test_invalid_fields(self, tmp_path: Path) -> None:
        path = _write_json(tmp_path / "sitehooks.json", {"context": ["not", "a", "dict"]})
        with pytest.raises(ConfigError, match="Invalid site config"):
            load_site_config(path)

    def test_unreadable(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Cannot read"):
            load_site_config(tmp_path / "missing.json")

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "sitehooks.json"
        path.write_bytes(b'{"plugins": ["\xff\xfe"]}')
        with pytest.raises(ConfigError, match="Cannot read") as excinfo:
            load_site_config(path)
        assert excinfo.value.exit_code == 3

    def test_resolve_site_config(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "sitehooks.json", {"plugins": [["seo", {"lang": "en"}]]})
        assert resolve_site_config().plugins == [["seo", {"lang": "en"}]]
