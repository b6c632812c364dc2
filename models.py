"""Data models for the Google Docs to Markdown conversion pipeline."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

logger = logging.getLogger('google_docs_markdown')


HEADING_TAGS = ('h1', 'h2', 'h3', 'h4', 'h5', 'h6')
MAX_HEADING_LEVEL = 6


@dataclass
class HeadingElement:
    """A heading block (h1 to h6)."""

    level: int
    text: str

    @property
    def type(self) -> str:
        return f"h{self.level}"

    def to_dict(self) -> Dict[str, Any]:
        return {'type': self.type, 'value': self.text}


@dataclass
class ParagraphElement:
    text: str
    type: str = field(default='p', init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {'type': self.type, 'value': self.text}


@dataclass
class BlockquoteElement:
    text: str
    type: str = field(default='blockquote', init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {'type': self.type, 'value': self.text}


@dataclass
class CodeElement:
    """A fenced code block; language is None when the cell had no tag line."""

    lines: List[str]
    language: Optional[str] = None
    type: str = field(default='code', init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.type,
            'value': {'language': self.language, 'lines': list(self.lines)}
        }


@dataclass
class TableElement:
    headers: List[str]
    rows: List[List[str]] = field(default_factory=list)
    type: str = field(default='table', init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.type,
            'value': {
                'headers': list(self.headers),
                'rows': [list(row) for row in self.rows]
            }
        }


@dataclass
class ListElement:
    """
    An ordered or unordered list.

    Items are either leaf strings or nested ListElement instances. A nested
    list directly follows the leaf it belongs to.
    """

    ordered: bool
    items: List['ListNode'] = field(default_factory=list)

    @property
    def type(self) -> str:
        return 'ol' if self.ordered else 'ul'

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.type,
            'value': [
                item.to_dict() if isinstance(item, ListElement) else item
                for item in self.items
            ]
        }


ListNode = Union[str, ListElement]


@dataclass
class ImageElement:
    source: str
    title: str = ""
    alt: str = ""
    type: str = field(default='img', init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.type,
            'value': {'source': self.source, 'title': self.title, 'alt': self.alt}
        }


@dataclass
class FootnoteElement:
    number: str
    text: str
    type: str = field(default='footnote', init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {'type': self.type, 'value': {'number': self.number, 'text': self.text}}


Element = Union[
    HeadingElement,
    ParagraphElement,
    BlockquoteElement,
    CodeElement,
    TableElement,
    ListElement,
    ImageElement,
    FootnoteElement,
]


def element_from_dict(data: Dict[str, Any]) -> Element:
    """
    Rebuild an element from its ``{type, value}`` form.

    Args:
        data: Dictionary produced by an element's ``to_dict``

    Returns:
        The matching element instance

    Raises:
        ValueError: If the type tag is unknown
    """
    element_type = data.get('type')
    value = data.get('value')

    if element_type in HEADING_TAGS:
        return HeadingElement(level=int(element_type[1:]), text=value)
    if element_type == 'p':
        return ParagraphElement(text=value)
    if element_type == 'blockquote':
        return BlockquoteElement(text=value)
    if element_type == 'code':
        return CodeElement(lines=list(value.get('lines', [])), language=value.get('language'))
    if element_type == 'table':
        return TableElement(
            headers=list(value.get('headers', [])),
            rows=[list(row) for row in value.get('rows', [])]
        )
    if element_type in ('ul', 'ol'):
        return ListElement(
            ordered=element_type == 'ol',
            items=[
                element_from_dict(item) if isinstance(item, dict) else item
                for item in value
            ]
        )
    if element_type == 'img':
        return ImageElement(
            source=value.get('source', ''),
            title=value.get('title', ''),
            alt=value.get('alt', '')
        )
    if element_type == 'footnote':
        return FootnoteElement(number=value.get('number'), text=value.get('text', ''))

    raise ValueError(f"Unknown element type: {element_type!r}")


@dataclass
class HeadingRecord:
    """A heading seen while walking the body, with the index of its element."""

    tag: str
    text: str
    index: int = -1


@dataclass
class Cover:
    """Cover image taken from the first-page header."""

    image: str
    title: str = ""
    alt: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {'image': self.image, 'title': self.title, 'alt': self.alt}


@dataclass
class ConversionOptions:
    """Options recognized by the conversion engine."""

    demote_headings: bool = False
    indented_blockquotes: bool = False
    crosslinks_paths: Dict[str, str] = field(default_factory=dict)
    code_fonts: List[str] = field(default_factory=lambda: ['Consolas'])

    KEY_ALIASES = {
        'demoteHeadings': 'demote_headings',
        'indentedBlockquotes': 'indented_blockquotes',
        'crosslinksPaths': 'crosslinks_paths',
        'codeFonts': 'code_fonts',
    }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'ConversionOptions':
        """Build options from a mapping using snake_case or camelCase keys."""
        if not data:
            return cls()

        normalized = {}
        for key, value in data.items():
            key = cls.KEY_ALIASES.get(key, key)
            if key in ('demote_headings', 'indented_blockquotes', 'crosslinks_paths', 'code_fonts'):
                normalized[key] = value
            else:
                logger.debug(f"Ignoring unknown conversion option: {key}")

        options = cls(**normalized)
        options.crosslinks_paths = dict(options.crosslinks_paths or {})
        return options
