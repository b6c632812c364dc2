"""Footnote reference tracking and footnote block resolution."""

import logging
from typing import Any, Dict, List

from models import FootnoteElement

from .document_tree import get_in, paragraph_elements
from .text_formatter import TextRunFormatter

logger = logging.getLogger('google_docs_markdown.converters.footnote_collector')


def _number_key(footnote: FootnoteElement):
    try:
        return (0, int(footnote.number))
    except (TypeError, ValueError):
        return (1, 0)


class FootnoteCollector:
    """Records footnote references during the walk, then renders definitions."""

    def __init__(self, logger: logging.Logger = None):
        self.numbers: Dict[str, str] = {}
        self.logger = logger or logging.getLogger('google_docs_markdown.converters.footnote_collector')

    def reference(self, footnote_reference: Dict[str, Any]) -> str:
        """
        Record a footnote reference and return its inline marker.

        The number is the one Google Docs displays for the footnote.
        """
        number = footnote_reference.get('footnoteNumber')
        footnote_id = footnote_reference.get('footnoteId')
        if footnote_id is not None:
            self.numbers[footnote_id] = number
        return f"[^{number}]"

    def resolve(self, definitions: Any, formatter: TextRunFormatter) -> List[FootnoteElement]:
        """
        Resolve referenced footnote definitions to elements.

        Args:
            definitions: The document's ``footnotes`` table
            formatter: Formatter for the footnote text

        Returns:
            Footnote elements sorted by their numeric number
        """
        if not isinstance(definitions, dict):
            return []

        footnotes = []
        for key, definition in definitions.items():
            footnote_id = get_in(definition, ['footnoteId'], key)
            if footnote_id not in self.numbers:
                self.logger.debug(f"Footnote {footnote_id} is never referenced, skipping")
                continue

            paragraph = get_in(definition, ['content', 0, 'paragraph'], {})
            text = formatter.format_all(paragraph_elements(paragraph))
            if text.endswith("\n"):
                text = text[:-1]

            footnotes.append(FootnoteElement(number=self.numbers[footnote_id], text=text))

        footnotes.sort(key=_number_key)
        return footnotes
