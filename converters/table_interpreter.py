"""Interprets Google Docs tables as quotes, code blocks or data tables."""

import logging
import re
from typing import Any, Callable, Dict, Iterable, List, Optional

from models import BlockquoteElement, CodeElement, TableElement

from .document_tree import (
    SMART_QUOTES,
    cell_paragraphs,
    delete_smart_quotes,
    first_cell,
    get_in,
    paragraph_elements,
    row_cells,
    table_rows,
)
from .text_formatter import DEFAULT_CODE_FONTS, TextRunFormatter

logger = logging.getLogger('google_docs_markdown.converters.table_interpreter')

TablePredicate = Callable[[Dict[str, Any]], bool]


def _is_single_cell(table: Any) -> bool:
    rows = table_rows(table)
    return len(rows) == 1 and len(row_cells(rows[0])) == 1


def _cell_runs(table: Any) -> List[Dict[str, Any]]:
    runs = []
    for paragraph in cell_paragraphs(first_cell(table).get('content')):
        runs.extend(el['textRun'] for el in paragraph_elements(paragraph)
                    if isinstance(el.get('textRun'), dict))
    return runs


def is_quote(table: Dict[str, Any]) -> bool:
    """A single-cell table whose text is wrapped in smart quotes."""
    if not _is_single_cell(table):
        return False

    text = "".join(run.get('content') or "" for run in _cell_runs(table)).strip()
    return len(text) >= 2 and text.startswith(SMART_QUOTES[0]) and text.endswith(SMART_QUOTES[1])


def is_code_block(table: Dict[str, Any], code_fonts: Iterable[str] = DEFAULT_CODE_FONTS) -> bool:
    """A single-cell table whose every non-blank run uses a code font."""
    if not _is_single_cell(table):
        return False

    fonts = set(code_fonts)
    runs = [run for run in _cell_runs(table) if (run.get('content') or "").strip()]
    if not runs:
        return False

    return all(
        get_in(run, ['textStyle', 'weightedFontFamily', 'fontFamily']) in fonts
        for run in runs
    )


class TableInterpreter:
    """Extracts blockquote, code and table elements from table nodes."""

    LANGUAGE_PATTERN = re.compile(r'^\s*lang:\s*(.*)$')

    def __init__(self, formatter: TextRunFormatter, logger: logging.Logger = None):
        """
        Initialize the interpreter.

        Args:
            formatter: Formatter used for quote and data table cells
            logger: Logger instance
        """
        self.formatter = formatter
        self.logger = logger or logging.getLogger('google_docs_markdown.converters.table_interpreter')

    def cell_content(self, content: Any) -> str:
        """Flatten a cell to one line, paragraphs and newlines become ``<br/>``."""
        paragraphs = [
            self.formatter.format_all(paragraph_elements(paragraph))
            for paragraph in cell_paragraphs(content)
        ]
        text = "\n".join(text for text in paragraphs if text)
        return text.replace("\n", "<br/>")

    def quote(self, table: Dict[str, Any]) -> BlockquoteElement:
        content = self.cell_content(first_cell(table).get('content'))
        return BlockquoteElement(text=delete_smart_quotes(content))

    def code(self, table: Dict[str, Any]) -> Optional[CodeElement]:
        """
        Build a code element from a single-cell table.

        A first line of the form ``lang: <name>`` sets the language.

        Returns:
            The code element, or None when the cell holds no code
        """
        raw = "".join(
            "".join(get_in(el, ['textRun', 'content'], "") for el in paragraph_elements(paragraph))
            for paragraph in cell_paragraphs(first_cell(table).get('content'))
        )
        raw = raw.replace("\x0b", "\n")
        if raw.startswith("\n"):
            raw = raw[1:]
        if raw.endswith("\n"):
            raw = raw[:-1]

        lines = raw.split("\n")
        if lines == [""]:
            self.logger.debug("Skipping empty code block")
            return None

        language = None
        match = self.LANGUAGE_PATTERN.match(lines[0])
        if match:
            language = match.group(1)
            lines = lines[1:]

        return CodeElement(lines=lines, language=language)

    def table(self, table: Dict[str, Any]) -> Optional[TableElement]:
        rows = table_rows(table)
        if not rows:
            return None

        head, body = rows[0], rows[1:]
        return TableElement(
            headers=[self.cell_content(cell.get('content')) for cell in row_cells(head)],
            rows=[
                [self.cell_content(cell.get('content')) for cell in row_cells(row)]
                for row in body
            ]
        )
