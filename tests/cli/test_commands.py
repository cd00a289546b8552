"""End-to-end tests for the wdapty command line."""

import polars as pl
import pytest
from typer.testing import CliRunner

from wdapty import __version__
from wdapty.cli import app

runner = CliRunner()


@pytest.fixture
def env(tmp_path):
    """Point the pattern store and credentials file into tmp_path."""
    return {
        "WDAPTY_PATTERN_STORE_PATH": str(tmp_path / ".wdapty" / "config.ini"),
        "WDAPTY_CREDENTIALS_PATH": str(tmp_path / "credentials"),
    }


def invoke(args, env, **kwargs):
    return runner.invoke(app, args, env=env, **kwargs)


class TestRoot:
    def test_version(self, env):
        result = invoke(["--version"], env)
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_bad_config_setting(self, env):
        result = invoke(["patterns", "list"], {**env, "WDAPTY_PROVIDER": "gcp"})
        assert result.exit_code == 1
        assert "Invalid provider" in result.output

    def test_wrongly_typed_config_value(self, env, tmp_path):
        config = tmp_path / "wdapty.toml"
        config.write_text("default_profile = 5\n")
        result = invoke(["--config", str(config), "patterns", "list"], env)
        assert result.exit_code == 1
        assert "Invalid value for default_profile" in result.output


class TestConfigure:
    def test_patterns_option(self, env, tmp_path):
        result = invoke(["configure", "--patterns", "a=1", "--patterns", "b=2"], env)
        assert result.exit_code == 0, result.output
        assert "Saved config.ini in" in result.output
        assert (tmp_path / ".wdapty" / "config.ini").read_text() == "a=1\nb=2\n"

    def test_interactive_until_exit_word(self, env, tmp_path):
        result = invoke(["configure"], env, input="a=1\n\nb=2\nx\nc=3\n")
        assert result.exit_code == 0, result.output
        assert (tmp_path / ".wdapty" / "config.ini").read_text() == "a=1\nb=2\n"

    def test_interactive_end_of_input(self, env, tmp_path):
        result = invoke(["configure"], env, input="a=1\n")
        assert result.exit_code == 0, result.output
        assert (tmp_path / ".wdapty" / "config.ini").read_text() == "a=1\n"

    def test_malformed_entry(self, env):
        result = invoke(["configure", "--patterns", "novalue"], env)
        assert result.exit_code == 1
        assert "not compliant" in result.output


class TestPatterns:
    def test_list_empty(self, env):
        result = invoke(["patterns", "list"], env)
        assert result.exit_code == 0
        assert "No patterns available in config.ini" in result.output

    def test_add_list_remove(self, env):
        assert invoke(["patterns", "add", "--name", "x", "--value", "1"], env).exit_code == 0
        assert invoke(["patterns", "add", "--name", "y", "--value", "2"], env).exit_code == 0

        listed = invoke(["patterns", "list"], env)
        assert listed.exit_code == 0
        assert "x" in listed.output and "y" in listed.output

        removed = invoke(["patterns", "remove", "--name", "x"], env)
        assert removed.exit_code == 0
        assert "Removed pattern x" in removed.output

    def test_add_duplicate(self, env):
        invoke(["patterns", "add", "--name", "x", "--value", "1"], env)
        result = invoke(["patterns", "add", "--name", "x", "--value", "2"], env)
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_add_rejects_whitespace(self, env, tmp_path):
        result = invoke(["patterns", "add", "--name", "x", "--value", "a b"], env)
        assert result.exit_code == 1
        assert "not compliant" in result.output

    def test_remove_unknown_succeeds(self, env):
        assert invoke(["patterns", "remove", "--name", "nope"], env).exit_code == 0


class TestDownload:
    def test_to_csv(self, env, abc_parquet, tmp_path):
        out = tmp_path / "out.csv"
        result = invoke(
            ["processing", "download", "--file-name", str(abc_parquet), "--output-file", str(out)],
            env,
        )
        assert result.exit_code == 0, result.output
        assert "Saved 3 rows" in result.output
        assert pl.read_csv(out).columns == ["A", "B", "C"]

    def test_output_directory_missing(self, env, abc_parquet, tmp_path):
        out = tmp_path / "nope" / "out.csv"
        result = invoke(
            ["processing", "download", "--file-name", str(abc_parquet), "--output-file", str(out)],
            env,
        )
        assert result.exit_code == 1
        assert "Failed to create file" in result.output

    def test_missing_file(self, env, tmp_path):
        result = invoke(
            [
                "processing",
                "download",
                "--file-name",
                str(tmp_path / "absent.parq"),
                "--output-file",
                str(tmp_path / "out.csv"),
            ],
            env,
        )
        assert result.exit_code == 1
        assert "File does not exist" in result.output
        assert not (tmp_path / "out.csv").exists()

    def test_no_source(self, env, tmp_path):
        result = invoke(
            ["processing", "download", "--output-file", str(tmp_path / "out.csv")], env
        )
        assert result.exit_code == 1
        assert "file name should be valued" in result.output

    def test_invalid_execution_type(self, env, abc_parquet, tmp_path):
        result = invoke(
            [
                "processing",
                "download",
                "--file-name",
                str(abc_parquet),
                "--execution-type",
                "csv",
                "--output-file",
                str(tmp_path / "out.csv"),
            ],
            env,
        )
        assert result.exit_code == 1
        assert "Invalid Execution type" in result.output

    def test_pattern_with_bound_variable(self, env, abc_parquet, tmp_path):
        template = str(abc_parquet.parent / "{name}.parq")
        invoke(["patterns", "add", "--name", "abc", "--value", template], env)
        out = tmp_path / "out.csv"
        result = invoke(
            [
                "processing",
                "download",
                "--pattern",
                "abc",
                "--var",
                "name=abc",
                "--output-file",
                str(out),
            ],
            env,
        )
        assert result.exit_code == 0, result.output
        assert pl.read_csv(out).height == 3

    def test_pattern_prompts_for_unbound_variable(self, env, abc_parquet, tmp_path):
        template = str(abc_parquet.parent / "{name}.parq")
        invoke(["patterns", "add", "--name", "abc", "--value", template], env)
        out = tmp_path / "out.csv"
        result = invoke(
            ["processing", "download", "--pattern", "abc", "--output-file", str(out)],
            env,
            input="abc\n",
        )
        assert result.exit_code == 0, result.output
        assert "Please type value for name" in result.output
        assert out.exists()

    def test_malformed_var(self, env, abc_parquet, tmp_path):
        result = invoke(
            [
                "processing",
                "download",
                "--file-name",
                str(abc_parquet),
                "--var",
                "novalue",
                "--output-file",
                str(tmp_path / "out.csv"),
            ],
            env,
        )
        assert result.exit_code == 2


class TestSearch:
    def _args(self, path, *extra):
        return [
            "processing",
            "search",
            "--file-name",
            str(path),
            "--index-name",
            "t",
            *extra,
        ]

    def test_prints_matching_rows(self, env, trades_parquet):
        result = invoke(
            self._args(trades_parquet, "--index-value", "2024-02-01 17:02:00", "--cols", "open"),
            env,
        )
        assert result.exit_code == 0, result.output
        assert "11.0" in result.output
        assert "10.0" not in result.output
        assert "close" not in result.output

    def test_comma_separated_cols_to_csv(self, env, trades_parquet, tmp_path):
        out = tmp_path / "out.csv"
        result = invoke(
            self._args(
                trades_parquet,
                "--index-value",
                "2024-02-01 17:03:00",
                "--cols",
                "open,close",
                "--output-file",
                str(out),
            ),
            env,
        )
        assert result.exit_code == 0, result.output
        assert pl.read_csv(out).to_dict(as_series=False) == {"open": [12.0], "close": [12.5]}

    def test_invalid_index_value(self, env, trades_parquet):
        result = invoke(
            self._args(trades_parquet, "--index-value", "testinvalidindexvalue"), env
        )
        assert result.exit_code == 1
        assert "Failed to format index-value" in result.output

    def test_unknown_column(self, env, trades_parquet):
        result = invoke(
            self._args(
                trades_parquet, "--index-value", "2024-02-01 17:02:00", "--cols", "donotexist"
            ),
            env,
        )
        assert result.exit_code == 1
        assert "Column not found" in result.output

    def test_index_value_required(self, env, trades_parquet):
        result = invoke(self._args(trades_parquet), env)
        assert result.exit_code == 2
