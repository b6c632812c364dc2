"""Markdown rendering of element sequences with a YAML frontmatter header."""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

import yaml

from models import (
    BlockquoteElement,
    CodeElement,
    Cover,
    Element,
    FootnoteElement,
    HeadingElement,
    ImageElement,
    ListElement,
    ParagraphElement,
    TableElement,
)

logger = logging.getLogger('google_docs_markdown.exporters.markdown_renderer')

RenderRule = Callable[[Any, 'MarkdownRenderer'], str]


def render_heading(element: HeadingElement, renderer: 'MarkdownRenderer') -> str:
    return f"{'#' * element.level} {element.text}"


def render_paragraph(element: ParagraphElement, renderer: 'MarkdownRenderer') -> str:
    return element.text


def render_blockquote(element: BlockquoteElement, renderer: 'MarkdownRenderer') -> str:
    return "\n".join(f"> {line}" for line in element.text.split("\n"))


def render_code(element: CodeElement, renderer: 'MarkdownRenderer') -> str:
    body = "\n".join(element.lines)
    return f"```{element.language or ''}\n{body}\n```"


def _table_cell(text: str) -> str:
    return text.replace("|", "\\|")


def render_table(element: TableElement, renderer: 'MarkdownRenderer') -> str:
    width = max([len(element.headers)] + [len(row) for row in element.rows])

    def format_row(cells: Sequence[str]) -> str:
        padded = list(cells) + [""] * (width - len(cells))
        return "| " + " | ".join(_table_cell(cell) for cell in padded) + " |"

    lines = [format_row(element.headers), "| " + " | ".join(["---"] * width) + " |"]
    lines.extend(format_row(row) for row in element.rows)
    return "\n".join(lines)


def render_list(element: ListElement, renderer: 'MarkdownRenderer') -> str:
    return "\n".join(_list_lines(element, indent=""))


def _list_lines(element: ListElement, indent: str) -> List[str]:
    lines = []
    number = 0
    marker_width = 2

    for item in element.items:
        if isinstance(item, ListElement):
            # Nested under the previous item
            lines.extend(_list_lines(item, indent + " " * marker_width))
            continue

        number += 1
        marker = f"{number}. " if element.ordered else "- "
        marker_width = len(marker)
        lines.append(f"{indent}{marker}{item}")

    return lines


def render_image(element: ImageElement, renderer: 'MarkdownRenderer') -> str:
    return f'![{element.alt}]({element.source} "{element.title}")'


def render_footnote(element: FootnoteElement, renderer: 'MarkdownRenderer') -> str:
    return f"[^{element.number}]: {element.text}"


def default_rules() -> Dict[str, RenderRule]:
    """Fresh rule registry keyed by element type tag."""
    rules: Dict[str, RenderRule] = {
        f"h{level}": render_heading for level in range(1, 7)
    }
    rules.update({
        'p': render_paragraph,
        'blockquote': render_blockquote,
        'code': render_code,
        'table': render_table,
        'ul': render_list,
        'ol': render_list,
        'img': render_image,
        'footnote': render_footnote,
    })
    return rules


class MarkdownRenderer:
    """
    Serializes elements to markdown.

    Rules are looked up by element type in the registry given at
    construction, so callers can override or extend individual block types.
    """

    def __init__(self, rules: Optional[Mapping[str, RenderRule]] = None, logger: logging.Logger = None):
        self.rules = default_rules()
        if rules:
            self.rules.update(rules)
        self.logger = logger or logging.getLogger('google_docs_markdown.exporters.markdown_renderer')

    def render_frontmatter(self, metadata: Optional[Mapping[str, Any]], cover: Optional[Cover]) -> str:
        """
        Generate the YAML frontmatter block.

        Args:
            metadata: Document metadata, emitted in its own key order
            cover: Cover image, emitted as ``cover`` (null when absent)

        Returns:
            Frontmatter delimited by ``---`` lines, ending with a newline
        """
        frontmatter = dict(metadata or {})
        frontmatter['cover'] = cover.to_dict() if cover else None

        yaml_str = yaml.dump(
            frontmatter,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=1000
        )
        return f"---\n{yaml_str}---\n"

    def render_element(self, element: Element) -> str:
        rule = self.rules.get(element.type)
        if rule is None:
            self.logger.warning(f"No markdown rule for element type '{element.type}', skipping")
            return ""
        return rule(element, self)

    def render(self, elements: Sequence[Element]) -> str:
        """Render the body, one block per element separated by blank lines."""
        blocks = [self.render_element(element) for element in elements]
        body = "\n\n".join(block for block in blocks if block)
        return f"{body}\n" if body else ""

    def render_document(
        self,
        elements: Sequence[Element],
        metadata: Optional[Mapping[str, Any]] = None,
        cover: Optional[Cover] = None
    ) -> str:
        return self.render_frontmatter(metadata, cover) + self.render(elements)
