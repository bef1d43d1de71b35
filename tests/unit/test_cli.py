"""
Unit tests for the Monkey command-line interface.
"""

import pytest

from monkey import __version__
from monkey.cli import create_parser, main


@pytest.fixture
def source_file(tmp_path):
    """Factory fixture that writes Monkey source to a temporary file."""

    def _write(text: str, name: str = "prog.monkey"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


class TestArgumentParser:
    """Tests for argument parsing."""

    def test_subcommands(self):
        parser = create_parser()
        args = parser.parse_args(["check", "a.monkey"])
        assert args.command == "check"
        assert str(args.input) == "a.monkey"
        assert args.verbose is False

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage: monkey" in capsys.readouterr().out


class TestCheckCommand:
    """Tests for `monkey check`."""

    def test_clean_file(self, source_file, capsys):
        path = source_file("let x = 5;")
        assert main(["check", str(path)]) == 0
        out = capsys.readouterr().out
        assert "OK:" in out
        assert f"{path} (no syntax errors)" in out

    def test_file_with_errors(self, source_file, capsys):
        path = source_file("let = 5;")
        assert main(["check", str(path)]) == 1
        err = capsys.readouterr().err
        assert "error[E0201]: expected next token to be IDENT, got = instead" in err
        assert "2 syntax errors" in err

    def test_missing_file(self, tmp_path, capsys):
        path = tmp_path / "nope.monkey"
        assert main(["check", str(path)]) == 1
        assert f"Error: File not found: {path}" in capsys.readouterr().err

    def test_deeply_nested_file(self, source_file, capsys):
        path = source_file("(" * 500 + "1" + ")" * 500)
        assert main(["check", str(path)]) == 1
        err = capsys.readouterr().err
        assert "error[E0209]: expression nested too deeply" in err
        assert "1 syntax error" in err


class TestFmtCommand:
    """Tests for `monkey fmt`."""

    def test_prints_canonical_rendering(self, source_file, capsys):
        path = source_file("let x = 1 + 2 * 3\nadd(x, -y)")
        assert main(["fmt", str(path)]) == 0
        out = capsys.readouterr().out
        assert out.splitlines() == ["let x = (1 + (2 * 3));", "add(x, (-y))"]

    def test_refuses_broken_input(self, source_file, capsys):
        path = source_file("(1")
        assert main(["fmt", str(path)]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "1 syntax error" in captured.err


class TestTokensCommand:
    """Tests for `monkey tokens`."""

    def test_prints_tokens(self, source_file, capsys):
        path = source_file("let x = 5;")
        assert main(["tokens", str(path)]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == f"{path}:1:1\tLET\t'let'"
        assert lines[-1] == f"{path}:1:11\tEOF\t'\\x00'"
        assert len(lines) == 6

    def test_missing_file(self, tmp_path, capsys):
        path = tmp_path / "nope.monkey"
        assert main(["tokens", str(path)]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.strip() == f"Error: File not found: {path}"


class TestAstCommand:
    """Tests for `monkey ast`."""

    def test_prints_tree(self, source_file, capsys):
        path = source_file("let x = [1, 2];")
        assert main(["ast", str(path)]) == 0
        out = capsys.readouterr().out
        assert out.splitlines()[0] == "Program"
        assert "LetStatement" in out
        assert "ArrayLiteral" in out
        assert "value: 1" in out

    def test_missing_subtree(self, source_file, capsys):
        path = source_file("let x = ;")
        assert main(["ast", str(path)]) == 1
        assert "value: <missing>" in capsys.readouterr().out

    def test_hash_pairs(self, source_file, capsys):
        path = source_file('{"a": 1}')
        assert main(["ast", str(path)]) == 0
        out = capsys.readouterr().out
        assert "key: StringLiteral" in out
        assert "value: IntegerLiteral" in out
