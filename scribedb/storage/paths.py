"""Mapping of (collection, resource) pairs onto the on-disk layout.

    <root>/<collection>/<resource>.json
    <root>/<collection>/<resource>.json.tmp   (only while a write is in flight)
"""
from pathlib import Path
from typing import Optional

from .errors import InvalidArgument

EXTENSION = ".json"
TEMP_SUFFIX = ".tmp"


def require_names(collection: str, resource: str):
    if not collection:
        raise InvalidArgument("missing collection - no place to save record")
    if not resource:
        raise InvalidArgument("missing resource - unable to save record (no name)")


def collection_dir(root: Path, collection: str) -> Path:
    return Path(root) / collection


def record_path(root: Path, collection: str, resource: str) -> Path:
    return collection_dir(root, collection) / f"{resource}{EXTENSION}"


def temp_path(final: Path) -> Path:
    return final.with_name(final.name + TEMP_SUFFIX)


def resolve_record(root: Path, collection: str, resource: str) -> Optional[Path]:
    """Return the existing record file for ``resource`` or None.

    Callers may pass the bare name (``zoro``) or the stored file name
    (``zoro.json``).
    """
    candidates = [record_path(root, collection, resource)]
    if resource.endswith(EXTENSION):
        candidates.append(collection_dir(root, collection) / resource)
    for path in candidates:
        if path.is_file():
            return path
    return None
