"""
Tests for CLI Commands
======================
Tests for namekit CLI interface in namekit/cli.py.
"""

import json
import pytest
import subprocess
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from namekit.cli import main


def run_cli(*args, timeout=60):
    return subprocess.run(
        [sys.executable, "-m", "namekit", *args],
        capture_output=True,
        text=True,
        cwd=str(ROOT),
        timeout=timeout,
    )


class TestCLIBasic:
    """Basic CLI tests."""

    def test_version_flag(self):
        """Test --version flag."""
        result = run_cli("--version")
        assert result.returncode == 0
        assert "namekit" in result.stdout.lower()

    def test_help_flag(self):
        """Test --help flag."""
        result = run_cli("--help")
        assert result.returncode == 0
        assert "generate" in result.stdout.lower()
        assert "train" in result.stdout.lower()

    def test_generate_help(self):
        """Test generate --help."""
        result = run_cli("generate", "--help")
        assert result.returncode == 0
        assert "--starts-with" in result.stdout

    def test_no_command(self, capsys):
        """Test that no command prints help."""
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out.lower()


class TestCLIGenerate:
    """Tests for generate command."""

    def test_generate_json(self, capsys):
        """Test JSON output with constraints."""
        code = main(["generate", "-n", "5", "--corpus", "roman", "--seed", "1",
                     "--min-length", "3", "--max-length", "12", "--excludes", "z", "--json"])
        assert code == 0
        names = json.loads(capsys.readouterr().out)
        assert len(names) <= 5
        for name in names:
            assert 3 <= len(name) <= 12
            assert "z" not in name
            assert "#" not in name

    def test_generate_table(self, capsys):
        """Test table output."""
        code = main(["generate", "-n", "3", "--corpus", "norse", "--seed", "3",
                     "--min-length", "0"])
        assert code == 0
        assert "Name" in capsys.readouterr().out

    def test_generate_seed_repeatable(self, capsys):
        """Test that --seed gives repeatable output."""
        args = ["generate", "-n", "5", "--corpus", "elements", "--seed", "7",
                "--min-length", "0", "--no-unique", "--json"]
        main(args)
        first = json.loads(capsys.readouterr().out)
        main(args)
        second = json.loads(capsys.readouterr().out)
        assert first == second

    def test_generate_contradictory(self, capsys):
        """Test that impossible constraints finish with no names."""
        code = main(["generate", "-n", "3", "--corpus", "roman", "--includes", "a",
                     "--excludes", "a", "--max-time-per-name", "10", "--json"])
        assert code == 0
        assert json.loads(capsys.readouterr().out) == []

    def test_generate_from_words_file(self, tmp_path, capsys):
        """Test training from a word-list file."""
        words = tmp_path / "words.txt"
        words.write_text("anna\nhannah\nsavannah\njohanna\n", encoding="utf-8")
        code = main(["generate", "-n", "3", "--words", str(words), "--order", "2",
                     "--prior", "0", "--no-backoff", "--min-length", "0", "--json"])
        assert code == 0
        for name in json.loads(capsys.readouterr().out):
            assert set(name) <= set("anhsvjo")

    def test_invalid_prior(self, capsys):
        """Test that a bad prior is reported as an error."""
        code = main(["generate", "--corpus", "roman", "--prior", "5"])
        assert code == 1
        assert "prior" in capsys.readouterr().err

    def test_min_greater_than_max(self, capsys):
        """Test that inverted length bounds are reported."""
        code = main(["generate", "--corpus", "roman", "--min-length", "9", "--max-length", "3"])
        assert code == 1

    def test_unknown_corpus(self, capsys):
        """Test that an unknown corpus is reported."""
        code = main(["generate", "--corpus", "klingon"])
        assert code == 1
        assert "klingon" in capsys.readouterr().err

    def test_missing_words_file(self, tmp_path):
        """Test that a missing word list is reported."""
        assert main(["generate", "--words", str(tmp_path / "nope.txt")]) == 1


class TestCLITrain:
    """Tests for train command and loading saved models."""

    def test_train_then_generate(self, tmp_path, capsys):
        """Test saving a generator and generating from it."""
        model = tmp_path / "roman.json"
        assert main(["train", "--corpus", "roman", "--order", "2", "--output", str(model)]) == 0
        assert model.exists()
        data = json.loads(model.read_text(encoding="utf-8"))
        assert data["order"] == 2
        capsys.readouterr()

        code = main(["generate", "--model", str(model), "-n", "3", "--min-length", "0",
                     "--seed", "2", "--json"])
        assert code == 0
        assert len(json.loads(capsys.readouterr().out)) <= 3

    def test_corrupt_model(self, tmp_path):
        """Test that a corrupt model file is reported."""
        model = tmp_path / "bad.json"
        model.write_text("{", encoding="utf-8")
        assert main(["generate", "--model", str(model)]) == 1

    def test_model_with_bad_tables(self, tmp_path, capsys):
        """Test that a model whose tables are not mappings is reported."""
        model = tmp_path / "bad.json"
        assert main(["train", "--corpus", "roman", "--order", "1", "--output", str(model)]) == 0
        data = json.loads(model.read_text(encoding="utf-8"))
        data["models"][0]["observations"] = []
        model.write_text(json.dumps(data), encoding="utf-8")
        capsys.readouterr()

        assert main(["generate", "--model", str(model)]) == 1
        assert "mapping" in capsys.readouterr().err


class TestCLICorpora:
    """Tests for corpora command."""

    def test_lists_categories(self, capsys):
        assert main(["corpora"]) == 0
        out = capsys.readouterr().out
        assert "roman" in out
        assert "norse" in out

    def test_quiet(self, capsys):
        assert main(["--quiet", "corpora"]) == 0
        assert capsys.readouterr().out == ""
