"""Inline run formatter turning styled Google Docs runs into markdown strings."""

import logging
import re
from typing import Any, Dict, Iterable, Optional

from models import ImageElement

from .document_tree import get_in

logger = logging.getLogger('google_docs_markdown.converters.text_formatter')

DEFAULT_CODE_FONTS = ('Consolas',)


class TextRunFormatter:
    """
    Renders one paragraph element (text run or inline image) to markdown.

    Style markers wrap only the word sequence of a run, so surrounding
    spaces stay outside ``**bold**`` or ``_italic_`` spans.
    """

    CONTENT_PATTERN = re.compile(r'^( *)(\w+(?: \w+)*)( *)\Z')
    LEADING_SPACES_PATTERN = re.compile(r'^ {4}')

    def __init__(
        self,
        inline_objects: Optional[Dict[str, Any]] = None,
        code_fonts: Optional[Iterable[str]] = None,
        logger: logging.Logger = None
    ):
        """
        Initialize the formatter.

        Args:
            inline_objects: The document's ``inlineObjects`` table
            code_fonts: Font families rendered as inline code
            logger: Logger instance
        """
        self.inline_objects = inline_objects or {}
        self.code_fonts = set(code_fonts or DEFAULT_CODE_FONTS)
        self.logger = logger or logging.getLogger('google_docs_markdown.converters.text_formatter')

    def get_image(self, element: Any) -> Optional[ImageElement]:
        """Resolve an inline object element to its image, if any."""
        object_id = get_in(element, ['inlineObjectElement', 'inlineObjectId'])
        if object_id is None:
            return None

        embedded = get_in(self.inline_objects, [object_id, 'inlineObjectProperties', 'embeddedObject'])
        if not isinstance(embedded, dict):
            self.logger.debug(f"Inline object {object_id} has no embedded object")
            return None

        source = get_in(embedded, ['imageProperties', 'contentUri'])
        if source is None:
            return None

        return ImageElement(
            source=source,
            title=embedded.get('title') or "",
            alt=embedded.get('description') or ""
        )

    def format(self, element: Any, with_bold: bool = True) -> str:
        """
        Format one paragraph element.

        Args:
            element: A paragraph element (``textRun`` or ``inlineObjectElement``)
            with_bold: Apply bold markers; headings pass False

        Returns:
            Markdown inline string, empty when there is nothing to render
        """
        if not isinstance(element, dict):
            return ""

        if element.get('inlineObjectElement'):
            image = self.get_image(element)
            if image is None:
                return ""
            return f'![{image.alt}]({image.source} "{image.title}")'

        content = get_in(element, ['textRun', 'content'])
        if not isinstance(content, str) or not content or content == "\n":
            return ""

        text_style = get_in(element, ['textRun', 'textStyle'], {})
        if not isinstance(text_style, dict):
            text_style = {}

        before, text, after = self._split_content(content)
        if text.endswith("\n"):
            text = text[:-1]

        font_family = get_in(text_style, ['weightedFontFamily', 'fontFamily'])
        if font_family in self.code_fonts:
            return f"`{text}`"

        link = get_in(text_style, ['link', 'url'])
        text = self._apply_styles(text, text_style, has_link=bool(link), with_bold=with_bold)

        full_text = before + text + after

        if link:
            return f"[{full_text}]({link})"

        return self._guard_leading_whitespace(full_text)

    def format_all(self, elements: Iterable[Any], with_bold: bool = True) -> str:
        return "".join(self.format(el, with_bold=with_bold) for el in elements)

    def _split_content(self, content: str):
        match = self.CONTENT_PATTERN.match(content)
        if match:
            return match.group(1), match.group(2), match.group(3)
        return "", content, ""

    @staticmethod
    def _apply_styles(text: str, style: Dict[str, Any], has_link: bool, with_bold: bool) -> str:
        text = text.replace('*', '\\*').replace('_', '\\_')

        baseline_offset = style.get('baselineOffset')
        if baseline_offset == 'SUPERSCRIPT':
            text = f"<sup>{text}</sup>"
        elif baseline_offset == 'SUBSCRIPT':
            text = f"<sub>{text}</sub>"

        if style.get('underline') and not has_link:
            text = f"<ins>{text}</ins>"

        if style.get('italic'):
            text = f"_{text}_"

        if style.get('bold') and with_bold:
            text = f"**{text}**"

        if style.get('strikethrough'):
            text = f"~~{text}~~"

        return text

    def _guard_leading_whitespace(self, text: str) -> str:
        # Leading whitespace would otherwise open an indented code block
        if text.startswith("\t"):
            return "&#9;" + text[1:]
        if self.LEADING_SPACES_PATTERN.match(text):
            return "&#20;" + text[1:]
        return text
