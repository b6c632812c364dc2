"""Google Docs document tree to markdown element conversion."""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from exporters.markdown_renderer import MarkdownRenderer
from models import (
    BlockquoteElement,
    ConversionOptions,
    Cover,
    Element,
    HeadingElement,
    HeadingRecord,
    ListElement,
    ParagraphElement,
)

from . import table_interpreter
from .document_tree import (
    delete_smart_quotes,
    get_in,
    indent_level,
    indent_text,
    paragraph_elements,
    table_row_count,
)
from .footnote_collector import FootnoteCollector
from .list_builder import ListBuilder
from .table_interpreter import TableInterpreter
from .text_formatter import TextRunFormatter
from .transforms import demote_headings, rewrite_crosslinks

logger = logging.getLogger('google_docs_markdown.converters.google_document')

NAMED_STYLE_TAGS = {
    'NORMAL_TEXT': 'p',
    'SUBTITLE': 'blockquote',
    'HEADING_1': 'h1',
    'HEADING_2': 'h2',
    'HEADING_3': 'h3',
    'HEADING_4': 'h4',
    'HEADING_5': 'h5',
    'HEADING_6': 'h6',
}

# Errors raised by node shapes the walker does not expect
MALFORMED_NODE_ERRORS = (AttributeError, KeyError, IndexError, TypeError, ValueError)

TablePredicate = Callable[[Dict[str, Any]], bool]


class GoogleDocument:
    """
    Converts one Google Docs document into markdown elements.

    The body is walked once at construction. ``to_object`` and
    ``to_markdown`` apply heading demotion and cross-link rewriting on each
    call, so the recorded elements are never modified by them.

    Example:
        >>> document = GoogleDocument(raw_document, {'id': 'abc', 'path': '/intro'})
        >>> print(document.to_markdown())
    """

    def __init__(
        self,
        document: Dict[str, Any],
        metadata: Optional[Mapping[str, Any]] = None,
        options: Union[ConversionOptions, Mapping[str, Any], None] = None,
        is_quote: Optional[TablePredicate] = None,
        is_code_block: Optional[TablePredicate] = None,
        renderer: Optional[MarkdownRenderer] = None,
        logger: logging.Logger = None
    ):
        """
        Initialize and convert the document.

        Args:
            document: Raw Google Docs API document
            metadata: Caller metadata emitted as frontmatter
            options: ConversionOptions or a mapping of option values
            is_quote: Predicate classifying single-cell tables as quotes
            is_code_block: Predicate classifying single-cell tables as code
            renderer: Markdown renderer used by ``to_markdown``
            logger: Logger instance
        """
        self.document = document if isinstance(document, dict) else {}
        self.metadata = dict(metadata or {})
        if not isinstance(options, ConversionOptions):
            options = ConversionOptions.from_dict(options)
        self.options = options
        self.logger = logger or logging.getLogger('google_docs_markdown.converters.google_document')

        self.is_quote = is_quote or table_interpreter.is_quote
        self.is_code_block = is_code_block or (
            lambda table: table_interpreter.is_code_block(table, options.code_fonts)
        )
        self.renderer = renderer or MarkdownRenderer()

        self.formatter = TextRunFormatter(
            inline_objects=self.document.get('inlineObjects'),
            code_fonts=options.code_fonts
        )
        self.list_builder = ListBuilder(self.document.get('lists'))
        self.table_interpreter = TableInterpreter(self.formatter)
        self.footnote_collector = FootnoteCollector()

        self.cover: Optional[Cover] = None
        self.elements: List[Element] = []
        self.headings: List[HeadingRecord] = []
        self.first_indent_level: Optional[int] = None
        self._previous_list_id: Optional[str] = None

        self.process()

    @property
    def demote_headings(self) -> bool:
        return self.options.demote_headings

    @property
    def indented_blockquotes(self) -> bool:
        return self.options.indented_blockquotes

    @property
    def crosslinks_paths(self) -> Dict[str, str]:
        return self.options.crosslinks_paths

    @property
    def footnotes(self) -> Dict[str, str]:
        """Footnote id -> displayed number, in first-reference order."""
        return self.footnote_collector.numbers

    def process(self) -> None:
        self.process_cover()

        content = get_in(self.document, ['body', 'content'], [])
        if not isinstance(content, list):
            self.logger.warning("Document body has no content list")
            content = []

        for index, node in enumerate(content):
            try:
                self.process_node(node)
            except MALFORMED_NODE_ERRORS as e:
                self.logger.warning(f"Skipping malformed body node {index}: {e}")
                self._previous_list_id = None

        try:
            footnotes = self.footnote_collector.resolve(self.document.get('footnotes'), self.formatter)
        except MALFORMED_NODE_ERRORS as e:
            self.logger.warning(f"Skipping malformed footnotes: {e}")
            footnotes = []
        self.elements.extend(footnotes)

        self.logger.debug(
            f"Converted document into {len(self.elements)} elements "
            f"({len(self.headings)} headings, {len(footnotes)} footnotes)"
        )

    def process_node(self, node: Any) -> None:
        paragraph = get_in(node, ['paragraph'])
        table = get_in(node, ['table'])
        list_id = get_in(paragraph, ['bullet', 'listId']) if isinstance(paragraph, dict) else None

        if isinstance(paragraph, dict) and paragraph.get('bullet'):
            self.process_list(paragraph)
        elif isinstance(paragraph, dict):
            self.process_paragraph(paragraph)
        elif isinstance(table, dict):
            self.process_table(table)

        self._previous_list_id = list_id

    def process_cover(self) -> None:
        """Take the cover from the first element of the first-page header."""
        header_id = get_in(self.document, ['documentStyle', 'firstPageHeaderId'])
        if not header_id:
            return

        header_element = get_in(
            self.document,
            ['headers', header_id, 'content', 0, 'paragraph', 'elements', 0]
        )
        image = self.formatter.get_image(header_element)
        if image:
            self.cover = Cover(image=image.source, title=image.title, alt=image.alt)
            self.logger.debug(f"Found cover image {image.source}")

    def process_list(self, paragraph: Dict[str, Any]) -> None:
        bullet = paragraph['bullet']
        list_id = bullet.get('listId')
        text = self.formatter.format_all(paragraph_elements(paragraph))
        if text.endswith("\n"):
            text = text[:-1]

        current = None
        if (list_id is not None and self._previous_list_id == list_id
                and self.elements and isinstance(self.elements[-1], ListElement)):
            current = self.elements[-1]

        new_list = self.list_builder.add(text, list_id, bullet.get('nestingLevel') or 0, current)
        if new_list is not None:
            self.elements.append(new_list)

    def process_paragraph(self, paragraph: Dict[str, Any]) -> None:
        style = get_in(paragraph, ['paragraphStyle'], {})
        tag = NAMED_STYLE_TAGS.get(get_in(style, ['namedStyleType']), 'p')
        is_heading = tag not in ('p', 'blockquote')

        headings = []
        parts = []

        for el in paragraph_elements(paragraph):
            if el.get('horizontalRule') is not None:
                parts.append("<hr/>")
            elif el.get('footnoteReference'):
                parts.append(self.footnote_collector.reference(el['footnoteReference']))
            elif is_heading:
                text = self.formatter.format(el, with_bold=False)
                if text:
                    headings.append(HeadingRecord(tag=tag, text=text))
                    parts.append(text)
            else:
                text = self.formatter.format(el)
                if text:
                    parts.append(text)

        if not parts:
            return

        content = "".join(parts)
        if content.endswith("\n"):
            content = content[:-1]

        level = indent_level(get_in(style, ['indentStart', 'magnitude']))
        if self.first_indent_level is None:
            self.first_indent_level = level

        if self.indented_blockquotes and level > self.first_indent_level:
            tag = 'blockquote'
            content = delete_smart_quotes(content)

        if level > 0:
            content = indent_text(content, level)

        if not content.strip():
            return

        self.elements.append(self._make_element(tag, content))

        index = len(self.elements) - 1
        for heading in headings:
            heading.index = index
            self.headings.append(heading)

    @staticmethod
    def _make_element(tag: str, content: str) -> Element:
        if tag == 'blockquote':
            return BlockquoteElement(text=content)
        if tag == 'p':
            return ParagraphElement(text=content)
        return HeadingElement(level=int(tag[1:]), text=content)

    def process_table(self, table: Dict[str, Any]) -> None:
        if self.is_quote(table):
            self.elements.append(self.table_interpreter.quote(table))
        elif self.is_code_block(table):
            code = self.table_interpreter.code(table)
            if code is not None:
                self.elements.append(code)
        elif table_row_count(table) > 0:
            data_table = self.table_interpreter.table(table)
            if data_table is not None:
                self.elements.append(data_table)

    def get_updated_elements(self) -> List[Element]:
        """Elements with heading demotion and cross-link rewriting applied."""
        elements = list(self.elements)

        if self.demote_headings:
            elements = demote_headings(elements, self.headings)

        if self.crosslinks_paths:
            elements = rewrite_crosslinks(elements, self.crosslinks_paths)

        return elements

    def to_object(self) -> Dict[str, Any]:
        return {
            'elements': [element.to_dict() for element in self.get_updated_elements()],
            'metadata': dict(self.metadata),
            'cover': self.cover.to_dict() if self.cover else None,
        }

    def to_markdown(self) -> str:
        """Frontmatter (metadata and cover) followed by the markdown body."""
        return self.renderer.render_document(self.get_updated_elements(), self.metadata, self.cover)
