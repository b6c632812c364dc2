"""Markdown rendering and export for converted Google Docs documents.

Package Structure:
- markdown_renderer: Element sequence and frontmatter to markdown text
- markdown_exporter: Writes rendered documents under an output directory
"""

from .markdown_exporter import MarkdownExporter
from .markdown_renderer import MarkdownRenderer, default_rules

__all__ = [
    'MarkdownExporter',
    'MarkdownRenderer',
    'default_rules'
]
