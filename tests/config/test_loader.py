"""Tests for config/loader.py module.

Covers:
- _load_yaml() function
- _deep_merge() function
- load_config() precedence: defaults < global yaml < repo yaml < env < kwargs
"""

from __future__ import annotations

from pathlib import Path

import pytest

from covmerge.config import loader
from covmerge.config.loader import REPO_CONFIG_RELPATH, _deep_merge, _load_yaml, load_config
from covmerge.core.errors import ConfigError, ErrorCode


def _write_repo_config(workdir: Path, text: str) -> None:
    path = workdir / REPO_CONFIG_RELPATH
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)


class TestLoadYaml:
    """Tests for _load_yaml function."""

    def test_returns_empty_dict_for_missing_file(self, tmp_path: Path) -> None:
        assert _load_yaml(tmp_path / "nonexistent.yaml") == {}

    def test_loads_valid_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("output:\n  profile_path: merged.txt\n")

        assert _load_yaml(yaml_file) == {"output": {"profile_path": "merged.txt"}}

    def test_returns_empty_for_empty_file(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")

        assert _load_yaml(yaml_file) == {}

    def test_invalid_yaml_raises_config_error(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "bad.yaml"
        yaml_file.write_text("output: [unclosed\n")

        with pytest.raises(ConfigError) as exc_info:
            _load_yaml(yaml_file)

        assert exc_info.value.code == ErrorCode.CONFIG_PARSE_ERROR

    def test_non_mapping_raises_config_error(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "list.yaml"
        yaml_file.write_text("- a\n- b\n")

        with pytest.raises(ConfigError, match="mapping"):
            _load_yaml(yaml_file)


class TestDeepMerge:
    def test_nested_keys_merge(self) -> None:
        base = {"render": {"enabled": True, "gopath": "go"}, "output": {"profile_path": "a"}}
        override = {"render": {"gopath": "/opt/go"}}

        assert _deep_merge(base, override) == {
            "render": {"enabled": True, "gopath": "/opt/go"},
            "output": {"profile_path": "a"},
        }

    def test_base_is_not_mutated(self) -> None:
        base = {"render": {"enabled": True}}

        _deep_merge(base, {"render": {"enabled": False}})

        assert base == {"render": {"enabled": True}}


class TestLoadConfig:
    """Source precedence."""

    def test_defaults(self, tmp_path: Path) -> None:
        config = load_config(tmp_path)

        assert config.output.profile_path == "cover.txt"
        assert config.output.report_path == "cover.html"
        assert config.source.source_prefix == "go/src"
        assert config.source.repo_path == "."
        assert config.render.enabled is True
        assert config.render.gopath == "go"
        assert config.logging.level == "INFO"

    def test_repo_yaml(self, tmp_path: Path) -> None:
        _write_repo_config(tmp_path, "render:\n  enabled: false\nsource:\n  source_prefix: /src/\n")

        config = load_config(tmp_path)

        assert config.render.enabled is False
        assert config.source.source_prefix == "src"

    def test_repo_yaml_overrides_global(self, tmp_path: Path) -> None:
        loader.GLOBAL_CONFIG_PATH.write_text(
            "output:\n  profile_path: global.txt\n  report_path: global.html\n"
        )
        _write_repo_config(tmp_path, "output:\n  profile_path: repo.txt\n")

        config = load_config(tmp_path)

        assert config.output.profile_path == "repo.txt"
        assert config.output.report_path == "global.html"

    def test_env_overrides_yaml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _write_repo_config(tmp_path, "render:\n  go_binary: go1.21\n")
        monkeypatch.setenv("COVMERGE__RENDER__GO_BINARY", "/usr/local/go/bin/go")

        config = load_config(tmp_path)

        assert config.render.go_binary == "/usr/local/go/bin/go"

    def test_kwargs_override_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("COVMERGE__OUTPUT__PROFILE_PATH", "env.txt")

        config = load_config(tmp_path, output={"profile_path": "flag.txt"})

        assert config.output.profile_path == "flag.txt"

    def test_invalid_value_raises_config_error(self, tmp_path: Path) -> None:
        _write_repo_config(tmp_path, "logging:\n  level: LOUD\n")

        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path)

        assert exc_info.value.code == ErrorCode.CONFIG_INVALID_VALUE
        assert "logging" in exc_info.value.details["field"]

    def test_empty_output_path_is_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="must not be empty"):
            load_config(tmp_path, output={"profile_path": "  "})
