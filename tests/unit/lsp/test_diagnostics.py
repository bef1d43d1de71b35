"""Tests for the Monkey LSP diagnostics provider."""

from lsprotocol.types import DiagnosticSeverity

from monkey.lsp.diagnostics import DiagnosticProvider, get_diagnostics_for_document

URI = "file:///test.monkey"


class TestDiagnosticProvider:
    """Test suite for DiagnosticProvider."""

    def test_valid_code_no_errors(self) -> None:
        """Test that valid code produces no diagnostics."""
        source = """
let x = 42;
let add = fn(a, b) { a + b };
add(x, 1);
"""
        assert get_diagnostics_for_document(source, URI) == []

    def test_unclosed_paren(self) -> None:
        """An unclosed delimiter points at the end and links the opener."""
        diagnostics = get_diagnostics_for_document("(1 + 2", URI)

        assert len(diagnostics) == 1
        diag = diagnostics[0]
        assert diag.severity == DiagnosticSeverity.Error
        assert diag.source == "monkey"
        assert diag.code == "E0202"
        assert diag.message.startswith("expected next token to be ), got EOF instead")
        assert "help: add matching closing ')'" in diag.message
        assert (diag.range.start.line, diag.range.start.character) == (0, 6)
        assert (diag.range.end.line, diag.range.end.character) == (0, 7)

        assert len(diag.related_information) == 1
        related = diag.related_information[0]
        assert related.message == "unclosed '(' starts here"
        assert related.location.uri == URI
        assert related.location.range.start.character == 0

    def test_positions_are_zero_indexed(self) -> None:
        diagnostics = get_diagnostics_for_document("let x = 1;\nlet = 2;", URI)

        first = diagnostics[0]
        assert first.message == "expected next token to be IDENT, got = instead"
        assert first.code == "E0201"
        assert (first.range.start.line, first.range.start.character) == (1, 4)
        assert first.related_information is None

    def test_unterminated_string_error(self) -> None:
        """Test diagnostic for unterminated string."""
        diagnostics = get_diagnostics_for_document('let s = "hello', URI)

        assert len(diagnostics) == 1
        assert diagnostics[0].code == "E0206"
        assert "unterminated string literal" in diagnostics[0].message

    def test_one_diagnostic_per_error(self) -> None:
        source = "let = 1; let x 2; (3"
        diagnostics = DiagnosticProvider(source, URI).get_diagnostics()
        assert len(diagnostics) == 4
        assert all(d.severity == DiagnosticSeverity.Error for d in diagnostics)

    def test_provider_is_reusable(self) -> None:
        provider = DiagnosticProvider("@", URI)
        first = provider.get_diagnostics()
        second = provider.get_diagnostics()
        assert len(first) == len(second) == 1

    def test_help_text_is_appended_to_message(self) -> None:
        diagnostics = get_diagnostics_for_document("(1", URI)
        assert diagnostics[0].message.splitlines()[-1] == "help: add matching closing ')'"

    def test_deeply_nested_document(self) -> None:
        diagnostics = get_diagnostics_for_document("(" * 600 + "1" + ")" * 600, URI)
        assert len(diagnostics) == 1
        assert diagnostics[0].code == "E0209"
        assert diagnostics[0].severity == DiagnosticSeverity.Error
