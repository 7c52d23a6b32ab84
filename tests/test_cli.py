# tests/test_cli.py
"""End-to-end tests for the filehound command line."""

import os
from pathlib import Path

import pytest
from click.testing import CliRunner

from filehound import __version__
from filehound.cli.interface import main_cli


def output_lines(result) -> list:
    return [line for line in result.output.splitlines() if line]


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestSearchCommand:
    def test_lists_every_file(self, runner: CliRunner, sample_tree: Path):
        result = runner.invoke(main_cli, [str(sample_tree)], catch_exceptions=False)
        assert result.exit_code == 0
        assert output_lines(result) == [
            str(sample_tree / ".c.txt"),
            str(sample_tree / "a.txt"),
            str(sample_tree / "b.log"),
            str(sample_tree / "sub" / "d.txt"),
        ]

    def test_filter_flags(self, runner: CliRunner, sample_tree: Path):
        result = runner.invoke(
            main_cli,
            [str(sample_tree), "--ext", "txt", "--ignore-hidden-files", "--size", "<5kb"],
            catch_exceptions=False,
        )
        assert result.exit_code == 0
        assert output_lines(result) == [str(sample_tree / "a.txt")]

    def test_not_and_depth(self, runner: CliRunner, sample_tree: Path):
        result = runner.invoke(main_cli, [str(sample_tree), "--not", "--ext", "txt", "--depth", "0"], catch_exceptions=False)
        assert result.exit_code == 0
        assert output_lines(result) == [str(sample_tree / "b.log")]

    def test_directory_mode(self, runner: CliRunner, nested_tree: Path):
        result = runner.invoke(main_cli, [str(nested_tree), "-d", "--ignore-hidden-dirs", "--depth", "1"], catch_exceptions=False)
        assert result.exit_code == 0
        assert output_lines(result) == [str(nested_tree / "empty"), str(nested_tree / "one")]

    def test_multiple_roots_keep_order(self, runner: CliRunner, nested_tree: Path, sample_tree: Path):
        result = runner.invoke(
            main_cli,
            [str(sample_tree / "sub"), str(nested_tree / "one"), "--glob", "*.txt", "--depth", "0"],
            catch_exceptions=False,
        )
        assert result.exit_code == 0
        assert output_lines(result) == [str(sample_tree / "sub" / "d.txt"), str(nested_tree / "one" / "one.txt")]

    def test_sync_mode_gives_same_output(self, runner: CliRunner, nested_tree: Path):
        concurrent = runner.invoke(main_cli, [str(nested_tree)], catch_exceptions=False)
        sequential = runner.invoke(main_cli, [str(nested_tree), "--sync"], catch_exceptions=False)
        assert concurrent.exit_code == sequential.exit_code == 0
        assert output_lines(concurrent) == output_lines(sequential)

    def test_null_separated_output(self, runner: CliRunner, sample_tree: Path):
        result = runner.invoke(main_cli, [str(sample_tree), "--ext", "log", "-0"], catch_exceptions=False)
        assert result.exit_code == 0
        assert result.output == f"{sample_tree / 'b.log'}\0"

    def test_output_file(self, runner: CliRunner, sample_tree: Path, tmp_path: Path):
        out_file = tmp_path / "matches.txt"
        result = runner.invoke(main_cli, [str(sample_tree), "--ext", "log", "-o", str(out_file)], catch_exceptions=False)
        assert result.exit_code == 0
        assert out_file.read_text() == f"{sample_tree / 'b.log'}\n"

    def test_defaults_to_current_directory(self, runner: CliRunner):
        with runner.isolated_filesystem():
            Path("only.txt").write_text("x")
            cwd = os.getcwd()
            result = runner.invoke(main_cli, [], catch_exceptions=False)
        assert result.exit_code == 0
        assert output_lines(result) == [os.path.join(cwd, "only.txt")]

    def test_symlinked_directories_followed_unless_disabled(self, runner: CliRunner, tmp_path: Path):
        real = tmp_path / "real"
        real.mkdir()
        (real / "inner.txt").write_text("i")
        root = tmp_path / "root"
        root.mkdir()
        (root / "link").symlink_to(real, target_is_directory=True)

        followed = runner.invoke(main_cli, [str(root)], catch_exceptions=False)
        not_followed = runner.invoke(main_cli, [str(root), "--no-follow-symlinks"], catch_exceptions=False)

        assert output_lines(followed) == [str(root / "link" / "inner.txt")]
        assert output_lines(not_followed) == [str(root / "link")]

    def test_version(self, runner: CliRunner):
        result = runner.invoke(main_cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestFailures:
    def test_missing_root_exits_non_zero(self, runner: CliRunner, tmp_path: Path):
        result = runner.invoke(main_cli, [str(tmp_path / "does-not-exist")])
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_invalid_size_expression(self, runner: CliRunner, sample_tree: Path):
        result = runner.invoke(main_cli, [str(sample_tree), "--size", "huge"])
        assert result.exit_code == 1
        assert "invalid size expression" in result.output

    def test_negative_depth_rejected_by_click(self, runner: CliRunner, sample_tree: Path):
        result = runner.invoke(main_cli, [str(sample_tree), "--depth", "-1"])
        assert result.exit_code != 0

    def test_summary_reports_error(self, runner: CliRunner, tmp_path: Path):
        result = runner.invoke(main_cli, [str(tmp_path / "gone"), "--summary"])
        assert result.exit_code == 1
        assert "search summary" in result.output
