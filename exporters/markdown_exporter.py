"""Writes converted documents to local markdown files."""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from logger import ProgressTracker

logger = logging.getLogger('google_docs_markdown.exporters.markdown_exporter')


class MarkdownExporter:
    """
    Exports converted documents to ``<output_directory><path>.md``.

    Each document's ``metadata['path']`` decides where it lands, so the
    folder hierarchy of the source drive is preserved.
    """

    def __init__(self, output_directory: str, logger: Optional[logging.Logger] = None):
        """
        Initialize the markdown exporter.

        Args:
            output_directory: Base directory for exported files
            logger: Logger instance
        """
        self.output_directory = Path(output_directory)
        self.logger = logger or logging.getLogger('google_docs_markdown.exporters.markdown_exporter')
        self.exported_files: List[Path] = []
        self.stats = {
            'total_documents_exported': 0,
            'total_errors': 0,
        }

    def get_document_file(self, metadata: Dict[str, Any]) -> Path:
        """
        Target file for a document, derived from its metadata path.

        Raises:
            ValueError: If the path points outside the output directory
        """
        path = (metadata.get('path') or '').strip('/')
        if not path:
            path = str(metadata.get('id') or 'index')

        target = self.output_directory / f"{path}.md"
        root = self.output_directory.resolve()
        if root not in target.resolve().parents:
            raise ValueError(f"Document path '{metadata.get('path')}' escapes {self.output_directory}")
        return target

    def export_document(self, document) -> Path:
        """
        Write one converted document.

        Args:
            document: A GoogleDocument instance

        Returns:
            Path of the written file
        """
        target = self.get_document_file(document.metadata)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(document.to_markdown(), encoding='utf-8')

        self.exported_files.append(target)
        self.stats['total_documents_exported'] += 1
        self.logger.debug(f"Wrote {target}")
        return target

    def export_documents(self, documents: Iterable[Any]) -> Dict[str, Any]:
        """
        Write a batch of converted documents.

        Args:
            documents: GoogleDocument instances

        Returns:
            Statistics dictionary with export results
        """
        documents = list(documents)
        self.logger.info(f"Exporting {len(documents)} documents to {self.output_directory}")
        self.output_directory.mkdir(parents=True, exist_ok=True)

        with ProgressTracker(total_items=len(documents), item_type='documents') as tracker:
            for document in documents:
                try:
                    self.export_document(document)
                    tracker.increment(success=True)
                except (OSError, ValueError) as e:
                    self.logger.error(f"Failed to export document '{document.metadata.get('id')}': {e}")
                    self.stats['total_errors'] += 1
                    tracker.increment(success=False)

        return self.stats.copy()
