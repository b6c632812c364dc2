"""Metadata preparation for documents before conversion."""

import logging
from typing import Any, Dict, Iterable, Mapping, Optional

import yaml
from slugify import slugify

logger = logging.getLogger('google_docs_markdown.metadata')

INDEX_DOCUMENT_NAME = 'index'


def document_path(parent_path: str, name: str) -> str:
    """
    Build the output path of a document from its folder path and name.

    Args:
        parent_path: Path of the containing folder ("" for the root)
        name: Document or folder name

    Returns:
        Path such as ``/guides/getting-started``
    """
    return f"{parent_path or ''}/{slugify(name or '', separator='-')}"


def update_metadata(
    metadata: Mapping[str, Any],
    fields_default: Optional[Mapping[str, Any]] = None,
    fields_mapper: Optional[Mapping[str, str]] = None
) -> Dict[str, Any]:
    """
    Complete a document's metadata record.

    - ``breadcrumb`` lists the path segments.
    - A document named ``index`` takes the name and path of its folder.
    - ``fields_default`` values are assigned, ``fields_mapper`` renames keys.
    - A YAML mapping in ``description`` is merged into the record.

    Args:
        metadata: Record with at least ``name`` and ``path``
        fields_default: Values assigned to every record
        fields_mapper: Old key -> new key

    Returns:
        A new metadata dict
    """
    updated = dict(metadata)
    path = updated.get('path') or ''
    breadcrumb = [segment for segment in path.split('/') if segment]

    if updated.get('name') == INDEX_DOCUMENT_NAME and breadcrumb:
        breadcrumb.pop()
        if breadcrumb:
            updated['name'] = breadcrumb.pop()
            updated['path'] = (
                f"/{'/'.join(breadcrumb)}/{updated['name']}" if breadcrumb else f"/{updated['name']}"
            )
        else:
            # Root index document
            updated['path'] = '/'

    for key, value in (fields_default or {}).items():
        updated[key] = value

    for old_key, new_key in (fields_mapper or {}).items():
        updated[new_key] = updated.get(old_key)
        updated.pop(old_key, None)

    description = updated.get('description')
    if isinstance(description, str) and description:
        try:
            description_data = yaml.safe_load(description)
        except yaml.YAMLError:
            # Plain text description
            description_data = None
        if isinstance(description_data, dict):
            logger.debug(f"Merging YAML description into metadata of {updated.get('id')}")
            updated.update(description_data)

    updated['breadcrumb'] = breadcrumb
    return updated


def crosslinks_paths(records: Iterable[Mapping[str, Any]]) -> Dict[str, str]:
    """Map each record's document id to its output path."""
    paths = {}
    for record in records:
        document_id = record.get('id')
        path = record.get('path')
        if document_id and path:
            paths[document_id] = path
    return paths
