"""Rebuilds nested markdown lists from Google Docs' flat list paragraphs."""

import logging
from typing import Any, Dict, List, Optional

from models import ListElement, ListNode

from .document_tree import get_in

logger = logging.getLogger('google_docs_markdown.converters.list_builder')

UNSPECIFIED_GLYPH = 'GLYPH_TYPE_UNSPECIFIED'


class ListBuilder:
    """
    Folds consecutive list paragraphs into a ListElement tree.

    Google Docs stores every list item as a standalone paragraph carrying a
    ``bullet`` with the list id and a nesting level. Items of the same list
    that follow each other are appended to the list element created by the
    first one; a nested item descends one level per step below the last
    entry of the current list.
    """

    def __init__(self, lists: Optional[Dict[str, Any]] = None, logger: logging.Logger = None):
        """
        Initialize the builder.

        Args:
            lists: The document's ``lists`` table (list id -> definition)
            logger: Logger instance
        """
        self.lists = lists or {}
        self.logger = logger or logging.getLogger('google_docs_markdown.converters.list_builder')

    def is_ordered(self, list_id: Optional[str], level: int) -> bool:
        """Whether the given nesting level of a list uses a numbered glyph."""
        glyph = get_in(self.lists, [list_id, 'listProperties', 'nestingLevels', level, 'glyphType'])
        return bool(glyph) and glyph != UNSPECIFIED_GLYPH

    def add(
        self,
        text: str,
        list_id: Optional[str],
        nesting_level: int,
        current: Optional[ListElement]
    ) -> Optional[ListElement]:
        """
        Add one list item.

        Args:
            text: Formatted inline text of the item
            list_id: The paragraph's list id
            nesting_level: Zero-based nesting level of the item
            current: The list element to continue, or None to start a new one

        Returns:
            The newly created top-level ListElement, or None when the item was
            appended to ``current``
        """
        if current is None:
            self.logger.debug(f"Starting list {list_id}")
            return ListElement(ordered=self.is_ordered(list_id, 0), items=[text])

        if nesting_level:
            self._append(current.items, text, list_id, nesting_level, level=0)
        else:
            current.items.append(text)
        return None

    def _append(
        self,
        items: List[ListNode],
        text: str,
        list_id: Optional[str],
        nesting_level: int,
        level: int
    ) -> None:
        if nesting_level > level:
            last_item = items[-1] if items else None
            if isinstance(last_item, ListElement):
                self._append(last_item.items, text, list_id, nesting_level, level + 1)
            else:
                # The sublist follows the previous leaf, which becomes its parent item
                items.append(ListElement(ordered=self.is_ordered(list_id, nesting_level), items=[text]))
        else:
            items.append(text)
