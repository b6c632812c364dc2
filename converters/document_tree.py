"""Safe accessors for the raw Google Docs document tree."""

from typing import Any, Dict, Iterable, List, Sequence, Union

# Google Docs expresses indentation in points, one nesting step is 18pt.
GOOGLE_DOCS_INDENT = 18

HORIZONTAL_TAB_CHAR = "&#09;"

SMART_QUOTES = ('“', '”')

PathKey = Union[str, int]


def get_in(data: Any, path: Sequence[PathKey], default: Any = None) -> Any:
    """
    Walk nested dicts and lists, returning ``default`` on any missing step.

    Args:
        data: Root structure
        path: Keys (for dicts) and indices (for lists)
        default: Value returned when the path does not resolve

    Returns:
        Value at the path or default
    """
    value = data
    for key in path:
        if isinstance(value, dict):
            if key not in value:
                return default
            value = value[key]
        elif isinstance(value, (list, tuple)) and isinstance(key, int):
            if not -len(value) <= key < len(value):
                return default
            value = value[key]
        else:
            return default
    return default if value is None else value


def paragraph_elements(paragraph: Any) -> List[Dict[str, Any]]:
    """Inline elements of a paragraph, or an empty list."""
    elements = get_in(paragraph, ['elements'], [])
    return [el for el in elements if isinstance(el, dict)] if isinstance(elements, list) else []


def cell_paragraphs(content: Any) -> Iterable[Dict[str, Any]]:
    """Paragraphs found in a table cell's structural content."""
    if not isinstance(content, list):
        return []
    return [item['paragraph'] for item in content
            if isinstance(item, dict) and isinstance(item.get('paragraph'), dict)]


def table_rows(table: Any) -> List[Dict[str, Any]]:
    rows = get_in(table, ['tableRows'], [])
    return rows if isinstance(rows, list) else []


def row_cells(row: Any) -> List[Dict[str, Any]]:
    cells = get_in(row, ['tableCells'], [])
    return cells if isinstance(cells, list) else []


def table_row_count(table: Any) -> int:
    """Declared row count, falling back to the number of row nodes."""
    rows = get_in(table, ['rows'])
    if isinstance(rows, int):
        return rows
    return len(table_rows(table))


def first_cell(table: Any) -> Dict[str, Any]:
    return get_in(table, ['tableRows', 0, 'tableCells', 0], {})


def delete_smart_quotes(text: str) -> str:
    for quote in SMART_QUOTES:
        text = text.replace(quote, "")
    return text


def indent_level(magnitude: Any) -> int:
    """Convert an ``indentStart`` magnitude in points to a nesting level."""
    if not isinstance(magnitude, (int, float)):
        return 0
    # Round half up, as the editor does
    return int(magnitude / GOOGLE_DOCS_INDENT + 0.5)


def indent_text(text: str, level: int) -> str:
    return HORIZONTAL_TAB_CHAR * level + text
