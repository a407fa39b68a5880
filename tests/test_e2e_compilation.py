"""
End-to-end compilation tests

Tests the full pipeline: fixture document -> compile_file -> expected output,
and the CLI pipeline stages around it.
"""

import pytest
from argparse import Namespace
from pathlib import Path

from turf import compile_file
from turf.__main__ import env_check, output_write, results_report, source_compile, variables_load
from turf.models import ProgramState, pipeline


FIXTURES = Path(__file__).parent / "fixtures"


def fixture_pair(name: str):
    """Input path and expected output text for a fixture"""
    input_file = FIXTURES / "input" / name
    output_file = FIXTURES / "output" / Path(name).with_suffix(".html").name
    return input_file, output_file.read_text(encoding="utf-8")


class TestFixtureCompilation:
    """Compile fixture documents and compare with expected output"""

    @pytest.mark.parametrize("name", ["basic.kit", "scoped.kit"])
    def test_fixture(self, name):
        """Fixture input compiles to the expected output"""
        input_file, expected = fixture_pair(name)
        assert compile_file(str(input_file)) == expected


class TestCliPipeline:
    """Test the CLI stages without the chris_plugin wrapper"""

    def make_state(self, inputdir, outputdir, **options):
        defaults = {"inputFile": "index.kit", "variablesFile": None, "rootDir": None, "verbosity": 0}
        defaults.update(options)
        return ProgramState.state_createFromNamespace(
            Namespace(**defaults), inputdir=inputdir, outputdir=outputdir
        )

    def test_compile_to_output_dir(self, tmp_path):
        """The compiled file keeps the input's stem with the output extension"""
        inputdir = tmp_path / "in"
        inputdir.mkdir()
        (inputdir / "index.kit").write_text("<!--@who-->\n", encoding="utf-8")
        (inputdir / "vars.yaml").write_text("who: world\nyear: 2024\n", encoding="utf-8")

        state = self.make_state(inputdir, tmp_path / "out", variablesFile="vars.yaml")
        final = pipeline(state, env_check, source_compile, output_write, results_report)

        assert final.variables == {"who": "world", "year": "2024"}
        assert final.outputFile == tmp_path / "out" / "index.html"
        assert final.outputFile.read_text(encoding="utf-8") == "world\n"

    def test_missing_input_exits(self, tmp_path):
        """A missing input file exits with status 1"""
        state = self.make_state(tmp_path, tmp_path / "out", inputFile="nothere.kit")
        with pytest.raises(SystemExit) as excinfo:
            env_check(state)
        assert excinfo.value.code == 1

    def test_compile_error_exits(self, tmp_path, capsys):
        """Compile errors are printed with their location"""
        (tmp_path / "index.kit").write_text("\n<!--@missing-->", encoding="utf-8")
        state = env_check(self.make_state(tmp_path, tmp_path / "out"))

        with pytest.raises(SystemExit):
            source_compile(state)
        assert "index.kit:2:1: Undefined variable 'missing'" in capsys.readouterr().err

    def test_undecodable_input_exits(self, tmp_path, capsys):
        """An input file that is not valid text is reported, not raised"""
        (tmp_path / "index.kit").write_bytes(b"\xff\xfe bad")
        state = env_check(self.make_state(tmp_path, tmp_path / "out"))

        with pytest.raises(SystemExit) as excinfo:
            source_compile(state)
        assert excinfo.value.code == 1
        err = capsys.readouterr().err
        assert err.startswith("Compile error: Cannot decode")
        assert "index.kit" in err


class TestVariablesFile:
    """Test loading initial variables from YAML"""

    def test_scalars_become_strings(self, tmp_path):
        """YAML scalars are converted to strings"""
        path = tmp_path / "vars.yaml"
        path.write_text("a: 1\nb: true\nc:\n", encoding="utf-8")
        assert variables_load(path) == {"a": "1", "b": "True", "c": ""}

    def test_empty_file(self, tmp_path):
        """An empty variables file gives no variables"""
        path = tmp_path / "vars.yaml"
        path.write_text("", encoding="utf-8")
        assert variables_load(path) == {}

    def test_nested_value_rejected(self, tmp_path):
        """Mappings and lists are not valid variable values"""
        path = tmp_path / "vars.yaml"
        path.write_text("a:\n  b: 1\n", encoding="utf-8")
        with pytest.raises(ValueError, match="must be a scalar"):
            variables_load(path)
