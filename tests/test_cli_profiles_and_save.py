# tests/test_cli_profiles_and_save.py
"""
Tests for TOML configuration files, profiles and saving profiles from the CLI.
"""
import os
from pathlib import Path

import pytest
import toml
from click.testing import CliRunner

from filehound.cli.interface import main_cli
from filehound.config.loader import load_and_merge_configs, resolve_config_values, save_options_to_profile
from filehound.config.settings import SearchOptions
from filehound.exceptions import ConfigError

from conftest import create_project_structure

PROJECT_TOML = """
# top-level defaults
ignore_hidden_files = true

[profiles.logs]
ext = "log"

[profiles.shallow_txt]
ext = ["txt"]
depth = 0

[profiles.broken_depth]
depth = -3
"""


def make_project(base: Path):
    create_project_structure(base, {
        ".filehound.toml": PROJECT_TOML,
        ".secret.txt": "s",
        "a.txt": "a",
        "b.log": "b",
        "nested": {"c.txt": "c"},
    })


def output_lines(result) -> list:
    return [line for line in result.output.splitlines() if line]


class TestLoader:
    def test_project_file_is_loaded(self, tmp_path: Path):
        make_project(tmp_path)
        raw = load_and_merge_configs(tmp_path)
        assert raw["ignore_hidden_files"] is True
        assert set(raw["profiles"]) == {"logs", "shallow_txt", "broken_depth"}

    def test_pyproject_tool_table(self, tmp_path: Path):
        (tmp_path / "pyproject.toml").write_text('[tool.filehound]\next = ["py"]\n\n[tool.other]\nx = 1\n')
        raw = load_and_merge_configs(tmp_path)
        assert resolve_config_values(raw) == {"extensions": ["py"]}

    def test_profile_overrides_top_level(self, tmp_path: Path):
        make_project(tmp_path)
        values = resolve_config_values(load_and_merge_configs(tmp_path), "shallow_txt")
        assert values == {"ignore_hidden_files": True, "extensions": ["txt"], "max_depth": 0}

    def test_scalar_list_values_are_wrapped(self, tmp_path: Path):
        make_project(tmp_path)
        values = resolve_config_values(load_and_merge_configs(tmp_path), "logs")
        assert values["extensions"] == ["log"]

    def test_missing_profile(self, tmp_path: Path):
        make_project(tmp_path)
        with pytest.raises(ConfigError):
            resolve_config_values(load_and_merge_configs(tmp_path), "nope")

    def test_invalid_depth(self, tmp_path: Path):
        make_project(tmp_path)
        with pytest.raises(ConfigError):
            resolve_config_values(load_and_merge_configs(tmp_path), "broken_depth")

    def test_malformed_toml(self, tmp_path: Path):
        (tmp_path / ".filehound.toml").write_text("ext = [unterminated")
        with pytest.raises(ConfigError):
            load_and_merge_configs(tmp_path)

    def test_save_skips_defaults(self, tmp_path: Path):
        options = SearchOptions(extensions=["py"], max_depth=2, negate=True)
        assert save_options_to_profile(options, "py", tmp_path) is True
        saved = toml.load(tmp_path / ".filehound.toml")
        assert saved["profiles"]["py"] == {"ext": ["py"], "not": True, "depth": 2}

    def test_save_default_profile_writes_top_level(self, tmp_path: Path):
        (tmp_path / ".filehound.toml").write_text('[profiles.keep]\nsize = "<1kb"\n')
        assert save_options_to_profile(SearchOptions(directories_only=True), "DEFAULT", tmp_path) is True
        saved = toml.load(tmp_path / ".filehound.toml")
        assert saved["directory"] is True
        assert saved["profiles"] == {"keep": {"size": "<1kb"}}

    def test_save_nothing(self, tmp_path: Path):
        assert save_options_to_profile(SearchOptions(), "empty", tmp_path) is False
        assert not (tmp_path / ".filehound.toml").exists()


class TestCliWithConfig:
    def test_top_level_defaults_apply(self):
        runner = CliRunner()
        with runner.isolated_filesystem() as td:
            make_project(Path(td))
            result = runner.invoke(main_cli, ["--ext", "txt"], catch_exceptions=False)
            cwd = os.getcwd()
        assert result.exit_code == 0
        assert output_lines(result) == [os.path.join(cwd, "a.txt"), os.path.join(cwd, "nested", "c.txt")]

    def test_profile_selection(self):
        runner = CliRunner()
        with runner.isolated_filesystem() as td:
            make_project(Path(td))
            result = runner.invoke(main_cli, ["--config-profile", "shallow_txt"], catch_exceptions=False)
            cwd = os.getcwd()
        assert result.exit_code == 0
        assert output_lines(result) == [os.path.join(cwd, "a.txt")]

    def test_command_line_overrides_profile(self):
        runner = CliRunner()
        with runner.isolated_filesystem() as td:
            make_project(Path(td))
            result = runner.invoke(main_cli, ["--config-profile", "shallow_txt", "--depth", "1"], catch_exceptions=False)
            cwd = os.getcwd()
        assert result.exit_code == 0
        assert output_lines(result) == [os.path.join(cwd, "a.txt"), os.path.join(cwd, "nested", "c.txt")]

    def test_unknown_profile_fails(self):
        runner = CliRunner()
        with runner.isolated_filesystem() as td:
            make_project(Path(td))
            result = runner.invoke(main_cli, ["--config-profile", "missing"])
        assert result.exit_code == 1
        assert "profile 'missing' not found" in result.output

    def test_save_then_use_profile(self):
        runner = CliRunner()
        with runner.isolated_filesystem() as td:
            create_project_structure(Path(td), {"x.py": "", "y.md": "", "pkg": {"z.py": ""}})
            saved = runner.invoke(main_cli, ["--ext", "py", "--depth", "0", "--save", "shallow_py"], catch_exceptions=False)
            assert saved.exit_code == 0
            assert toml.load(".filehound.toml")["profiles"]["shallow_py"] == {"ext": ["py"], "depth": 0}

            result = runner.invoke(main_cli, ["--config-profile", "shallow_py"], catch_exceptions=False)
            cwd = os.getcwd()
        assert result.exit_code == 0
        assert output_lines(result) == [os.path.join(cwd, "x.py")]
