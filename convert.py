#!/usr/bin/env python3
"""
Google Docs to Markdown - command-line entry point

Converts Google Docs API document exports (JSON) into markdown files with
a YAML frontmatter header.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from config_loader import ConfigLoader, get_nested
from converters import convert_documents
from exporters import MarkdownExporter
from logger import log_config, log_section, setup_logging
from metadata import document_path, update_metadata

__version__ = "1.0.0"

logger = logging.getLogger('google_docs_markdown.convert')


def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog='gdocs2md',
        description="Convert Google Docs documents (API JSON) to Markdown",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print one document as markdown
  gdocs2md document.json

  # Print the element list instead
  gdocs2md document.json --json

  # Convert a batch, linking documents to each other
  gdocs2md docs/*.json --metadata metadata.yaml --output-dir ./content

  # Headings shifted one level down, indented text as quotes
  gdocs2md document.json --demote-headings --indented-blockquotes
        """
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    parser.add_argument(
        'documents',
        nargs='+',
        help='Google Docs API document JSON files'
    )

    parser.add_argument(
        '--config',
        type=str,
        help='Path to configuration YAML file'
    )

    parser.add_argument(
        '--metadata',
        type=str,
        help='YAML file mapping document ids to metadata records'
    )

    parser.add_argument(
        '-o', '--output-dir',
        type=str,
        help='Write <output-dir><path>.md files instead of printing'
    )

    parser.add_argument(
        '--demote-headings',
        action='store_true',
        help='Shift every heading one level down (h1 -> h2, ...)'
    )

    parser.add_argument(
        '--indented-blockquotes',
        action='store_true',
        help='Render indented paragraphs as blockquotes'
    )

    parser.add_argument(
        '--json',
        action='store_true',
        help='Print elements, metadata and cover as JSON instead of markdown'
    )

    parser.add_argument(
        '--log-file',
        type=str,
        help='Also write logs to this file'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='count',
        default=0,
        help='Increase verbosity (-v for INFO, -vv for DEBUG)'
    )

    return parser


def load_metadata_records(path: Optional[str]) -> Dict[str, Dict[str, Any]]:
    """
    Load the document id -> metadata mapping.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not a mapping of mappings
    """
    if not path:
        return {}

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict) or not all(isinstance(value, dict) for value in data.values()):
        raise ValueError(f"Metadata file must map document ids to mappings: {path}")

    return data


def build_metadata(document: Dict[str, Any], record: Dict[str, Any], config: Dict[str, Any]) -> Dict[str, Any]:
    """Default metadata from the document itself, completed by the record."""
    title = document.get('title') or document.get('documentId') or 'untitled'
    metadata = {
        'id': document.get('documentId'),
        'name': title,
        'path': document_path('', title),
    }
    metadata.update(record)

    return update_metadata(
        metadata,
        fields_default=get_nested(config, 'metadata.fields_default', {}),
        fields_mapper=get_nested(config, 'metadata.fields_mapper', {})
    )


def load_documents(paths: Sequence[str]) -> List[Dict[str, Any]]:
    documents = []
    for path in paths:
        logger.debug(f"Reading {path}")
        with open(path, 'r', encoding='utf-8') as f:
            document = json.load(f)
        if not isinstance(document, dict):
            raise ValueError(f"Document file does not contain a JSON object: {path}")
        documents.append(document)
    return documents


def run_conversion(config: Dict[str, Any], args: argparse.Namespace) -> int:
    """Convert the requested documents and print or write them."""
    documents = load_documents(args.documents)
    records = load_metadata_records(args.metadata)

    items = [
        (document, build_metadata(document, records.get(document.get('documentId'), {}), config))
        for document in documents
    ]

    converted = convert_documents(items, ConfigLoader.to_conversion_options(config))
    output_dir = get_nested(config, 'export.output_directory')

    if output_dir:
        stats = MarkdownExporter(output_dir).export_documents(converted)
        return 1 if stats['total_errors'] else 0

    if len(converted) > 1:
        logger.error("Converting several documents requires --output-dir")
        return 2

    document = converted[0]
    if args.json:
        print(json.dumps(document.to_object(), indent=2, ensure_ascii=False, default=str))
    else:
        sys.stdout.write(document.to_markdown())
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    try:
        setup_logging(verbosity=args.verbose, log_file=args.log_file)

        log_section("Google Docs to Markdown")
        logger.info(f"Version: {__version__}")

        config = ConfigLoader.load(args.config) if args.config else {}
        config = ConfigLoader.merge_with_args(config, args)
        ConfigLoader.validate(config)

        level = get_nested(config, 'logging.level')
        if level:
            setup_logging(level=level, log_file=get_nested(config, 'logging.file'))

        log_config(config)

        return run_conversion(config, args)

    except FileNotFoundError as e:
        print(f"ERROR: File not found: {e}", file=sys.stderr)
        return 2
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        print(f"ERROR: Could not parse input: {e}", file=sys.stderr)
        return 2
    except ValueError as e:
        print(f"ERROR: Configuration error: {e}", file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        print("\nConversion interrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
