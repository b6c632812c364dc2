"""Post-processing applied to the element sequence on every output request."""

import json
import logging
import re
from typing import Dict, List, Sequence

from models import MAX_HEADING_LEVEL, Element, HeadingElement, HeadingRecord, element_from_dict

logger = logging.getLogger('google_docs_markdown.converters.transforms')

GOOGLE_DOCS_URL_PATTERN = re.compile(
    r'https://docs\.google\.com/document/(?:u/\d+/)?d/([a-zA-Z0-9_-]+)(?:/edit|/preview)?'
)


def demote_headings(elements: Sequence[Element], headings: Sequence[HeadingRecord]) -> List[Element]:
    """
    Shift every recorded heading one level down (h1 -> h2, ..., h6 stays h6).

    Args:
        elements: Element sequence, left untouched
        headings: Heading records pointing into ``elements``

    Returns:
        A new element list
    """
    demoted = list(elements)

    for index in sorted({heading.index for heading in headings}):
        if not 0 <= index < len(demoted):
            continue
        element = demoted[index]
        # Indented headings may have been turned into blockquotes
        if not isinstance(element, HeadingElement):
            continue
        demoted[index] = HeadingElement(
            level=min(element.level + 1, MAX_HEADING_LEVEL),
            text=element.text
        )

    return demoted


def rewrite_crosslinks(elements: Sequence[Element], crosslinks_paths: Dict[str, str]) -> List[Element]:
    """
    Replace absolute Google Docs URLs with relative paths.

    Links to documents missing from ``crosslinks_paths`` are kept as-is.

    Args:
        elements: Element sequence
        crosslinks_paths: Document id -> output-relative path

    Returns:
        A new element list
    """
    if not crosslinks_paths:
        return list(elements)

    serialized = json.dumps([element.to_dict() for element in elements], ensure_ascii=False)
    rewritten = 0

    def replace_url(match):
        nonlocal rewritten
        path = crosslinks_paths.get(match.group(1))
        if path is None:
            return match.group(0)
        rewritten += 1
        # Keep the JSON document valid
        return json.dumps(path, ensure_ascii=False)[1:-1]

    serialized = GOOGLE_DOCS_URL_PATTERN.sub(replace_url, serialized)
    logger.debug(f"Rewrote {rewritten} cross-document links")

    return [element_from_dict(data) for data in json.loads(serialized)]
