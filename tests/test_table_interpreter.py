"""Tests for quote, code block and data table interpretation."""

import pytest

from converters.google_document import GoogleDocument
from converters.table_interpreter import TableInterpreter, is_code_block, is_quote
from converters.text_formatter import TextRunFormatter
from models import BlockquoteElement, CodeElement, TableElement

from document_builders import cell, code_run, document, paragraph, table, text_run


@pytest.fixture
def interpreter():
    return TableInterpreter(TextRunFormatter())


def code_table(*lines):
    return table([cell(*[paragraph(code_run(line)) for line in lines])])['table']


class TestPredicates:
    """Test quote and code block detection."""

    def test_smart_quoted_cell_is_quote(self):
        """Test a smart-quoted single cell is a quote."""
        quote = table([cell(paragraph(text_run("“To be or not to be”\n")))])['table']
        assert is_quote(quote) is True
        assert is_code_block(quote) is False

    def test_monospace_cell_is_code(self):
        """Test a monospace single cell is code."""
        code = code_table("x = 1\n")
        assert is_code_block(code) is True
        assert is_quote(code) is False

    def test_multi_cell_table_is_neither(self):
        """Test tables with several cells are data tables."""
        data = table([cell(paragraph(code_run("a"))), cell(paragraph(code_run("b")))])['table']
        assert is_quote(data) is False
        assert is_code_block(data) is False

    def test_plain_single_cell_is_neither(self):
        """Test a plain single cell is a data table."""
        plain = table([cell(paragraph(text_run("Just text\n")))])['table']
        assert is_quote(plain) is False
        assert is_code_block(plain) is False


class TestQuote:
    """Test quote extraction."""

    def test_quote_strips_smart_quotes_and_joins_lines(self, interpreter):
        """Test smart quotes are removed and paragraphs joined."""
        quote = table([cell(
            paragraph(text_run("“First line\n")),
            paragraph(text_run("second line”\n")),
        )])['table']

        assert interpreter.quote(quote) == BlockquoteElement(text="First line<br/>second line")


class TestCode:
    """Test code block extraction."""

    def test_language_tag_line(self, interpreter):
        """Test a lang: first line sets the language."""
        code = code_table("lang: python\n", "x = 1\n")
        assert interpreter.code(code) == CodeElement(lines=["x = 1"], language="python")

    def test_no_language(self, interpreter):
        """Test code without a tag line."""
        code = code_table("a = 1\n", "b = 2\n")
        assert interpreter.code(code) == CodeElement(lines=["a = 1", "b = 2"], language=None)

    def test_vertical_tab_becomes_newline(self, interpreter):
        """Test soft line breaks split lines."""
        code = code_table("a = 1\x0bb = 2\n")
        assert interpreter.code(code).lines == ["a = 1", "b = 2"]

    def test_only_one_surrounding_newline_trimmed(self, interpreter):
        """Test only one leading and trailing newline is trimmed."""
        code = code_table("\n", "\n", "x\n", "\n")
        assert interpreter.code(code).lines == ["", "x", ""]

    def test_empty_cell_yields_nothing(self, interpreter):
        """Test an empty code cell produces no element."""
        assert interpreter.code(code_table("\n")) is None


class TestDataTable:
    """Test data table extraction."""

    def test_header_and_rows(self, interpreter):
        """Test the first row becomes the header."""
        data = table(
            [cell(paragraph(text_run("Name\n"))), cell(paragraph(text_run("Role\n")))],
            [cell(paragraph(text_run("Ada\n"))), cell(paragraph(text_run("Engineer\n")))],
        )['table']

        assert interpreter.table(data) == TableElement(
            headers=["Name", "Role"],
            rows=[["Ada", "Engineer"]]
        )

    def test_multi_paragraph_cell_uses_br(self, interpreter):
        """Test multi-paragraph cells are joined with <br/>."""
        data = table(
            [cell(paragraph(text_run("Head\n")))],
            [cell(paragraph(text_run("one\n")), paragraph(text_run("two\n")))],
        )['table']

        assert interpreter.table(data).rows == [["one<br/>two"]]


class TestTablesInDocument:
    """Test table dispatch while walking a document."""

    def test_dispatch_order(self):
        """Test quote, code and data tables are told apart."""
        doc = GoogleDocument(document(
            table([cell(paragraph(text_run("“Quoted”\n")))]),
            table([cell(paragraph(code_run("lang: js\n")), paragraph(code_run("let a\n")))]),
            table([cell(paragraph(text_run("H\n")))], [cell(paragraph(text_run("V\n")))]),
        ))

        assert doc.elements == [
            BlockquoteElement(text="Quoted"),
            CodeElement(lines=["let a"], language="js"),
            TableElement(headers=["H"], rows=[["V"]]),
        ]

    def test_empty_code_block_skipped(self):
        """Test empty code blocks are dropped."""
        doc = GoogleDocument(document(
            table([cell(paragraph(code_run("\n")))]),
        ), is_code_block=lambda t: True)

        assert doc.elements == []

    def test_table_without_rows_skipped(self):
        """Test tables without rows are dropped."""
        doc = GoogleDocument(document({'table': {'rows': 0, 'tableRows': []}}))
        assert doc.elements == []

    def test_injected_predicates(self):
        """Test caller predicates replace the defaults."""
        quote_table = table([cell(paragraph(text_run("Plain words\n")))])
        doc = GoogleDocument(document(quote_table), is_quote=lambda t: True)

        assert doc.elements == [BlockquoteElement(text="Plain words")]
