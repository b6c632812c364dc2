"""Converters package turning Google Docs document trees into markdown elements."""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from metadata import crosslinks_paths
from models import ConversionOptions

from .google_document import GoogleDocument
from .list_builder import ListBuilder
from .table_interpreter import TableInterpreter, is_code_block, is_quote
from .text_formatter import TextRunFormatter
from .transforms import demote_headings, rewrite_crosslinks

logger = logging.getLogger('google_docs_markdown.converters')


def convert_document(
    document: Dict[str, Any],
    metadata: Optional[Mapping[str, Any]] = None,
    options: Union[ConversionOptions, Mapping[str, Any], None] = None
) -> GoogleDocument:
    """
    Convenience function to convert one Google Docs document.

    Args:
        document: Raw Google Docs API document
        metadata: Metadata emitted as frontmatter
        options: Conversion options

    Returns:
        The converted GoogleDocument

    Example:
        >>> from converters import convert_document
        >>> markdown = convert_document(raw, {'id': raw['documentId']}).to_markdown()
    """
    return GoogleDocument(document, metadata, options)


def convert_documents(
    items: Iterable[Tuple[Dict[str, Any], Mapping[str, Any]]],
    options: Union[ConversionOptions, Mapping[str, Any], None] = None
) -> List[GoogleDocument]:
    """
    Convert a batch of documents, linking them to each other.

    Links between documents of the batch are rewritten to the target
    document's ``path``; paths configured in ``options`` take precedence.

    Args:
        items: (document, metadata) pairs
        options: Conversion options shared by the batch

    Returns:
        Converted documents in input order
    """
    items = list(items)
    if not isinstance(options, ConversionOptions):
        options = ConversionOptions.from_dict(options)

    paths = crosslinks_paths(metadata for _, metadata in items)
    paths.update(options.crosslinks_paths)
    batch_options = ConversionOptions(
        demote_headings=options.demote_headings,
        indented_blockquotes=options.indented_blockquotes,
        crosslinks_paths=paths,
        code_fonts=list(options.code_fonts)
    )

    logger.info(f"Converting {len(items)} documents ({len(paths)} cross-link paths)")
    return [GoogleDocument(document, metadata, batch_options) for document, metadata in items]


__all__ = [
    'convert_document',
    'convert_documents',
    'GoogleDocument',
    'ListBuilder',
    'TableInterpreter',
    'TextRunFormatter',
    'demote_headings',
    'rewrite_crosslinks',
    'is_code_block',
    'is_quote'
]
