"""Source tree loading for utxo-spec entries.

Reads ``<src>/<entryId>/index.yaml`` and every sub-spec it declares,
then enriches photo-carrying records with the photo variants found on disk
and sorts speakers by name.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List

import yaml
from pydantic import ValidationError as PydanticValidationError
from pyuca import Collator

from utxo_spec.config import IMAGE_TYPES, EngineConfig
from utxo_spec.models import (
    PHOTO_SPEC_TYPES,
    RECORD_MODELS,
    Entry,
    IndexDescriptor,
    MalformedInputError,
    MissingFileError,
)

logger = logging.getLogger("utxo_spec.loader")

_ENTRY_DIR_RE = re.compile(r"[0-9]+")


@lru_cache(maxsize=1)
def _collator() -> Collator:
    return Collator()


def name_sort_key(name: str | None) -> tuple[int, ...]:
    """Locale-aware collation key for a display name."""
    return _collator().sort_key(name or "")


def load_yaml(path: Path) -> Any:
    """Parse a YAML file.

    Raises:
        MissingFileError: If *path* does not exist.
        MalformedInputError: If the file is not valid YAML.
    """
    if not path.is_file():
        raise MissingFileError(f"Source file does not exist: {path}")
    try:
        with open(path, "r", encoding="utf-8") as fh:
            return yaml.safe_load(fh)
    except yaml.YAMLError as e:
        raise MalformedInputError(f"Invalid YAML in {path}: {e}") from e


def discover_photos(photos_dir: Path, record_id: str) -> List[str]:
    """Return photo tags for *record_id* found in *photos_dir*.

    Tags follow the fixed ``IMAGE_TYPES`` order, not directory listing order.
    """
    tags: List[str] = []
    for variant, fmt in IMAGE_TYPES:
        if (photos_dir / f"{record_id}-{variant}.{fmt}").exists():
            tags.append(f"{variant}:{fmt}")
    return tags


def _parse_records(
    spec_type: str, document: List[Any], source: Path, photos_dir: Path
) -> List[Any]:
    """Build typed records for a known sub-spec type."""
    model = RECORD_MODELS[spec_type]
    records: List[Any] = []
    for position, raw in enumerate(document):
        if not isinstance(raw, dict):
            raise MalformedInputError(
                f"Record #{position} in {source} is not a mapping"
            )
        data = dict(raw)
        if spec_type in PHOTO_SPEC_TYPES:
            photos = list(data.get("photos") or [])
            record_id = data.get("id")
            if record_id is not None:
                photos.extend(discover_photos(photos_dir, str(record_id)))
            data["photos"] = photos
        try:
            records.append(model.model_validate(data))
        except PydanticValidationError as e:
            raise MalformedInputError(
                f"Record #{position} in {source} does not match "
                f"{model.__name__}: {e}"
            ) from e
    return records


def load_entry(src_dir: Path, entry_id: str) -> Entry:
    """Load a single entry directory.

    Raises:
        MissingFileError: If ``index.yaml`` or a declared sub-spec is missing.
        MalformedInputError: If a document cannot be parsed or validated,
            or is not a list of records.
    """
    entry_dir = src_dir / entry_id
    index_path = entry_dir / "index.yaml"
    raw_index = load_yaml(index_path)
    if not isinstance(raw_index, dict):
        raise MalformedInputError(f"Expected a mapping in {index_path}")
    try:
        index = IndexDescriptor.model_validate(raw_index)
    except PydanticValidationError as e:
        raise MalformedInputError(f"Invalid index descriptor {index_path}: {e}") from e

    entry = Entry(entry_id=entry_id, index=index)
    for spec_type in index.declared_types():
        source = entry_dir / f"{spec_type}.yaml"
        document = load_yaml(source)
        if not isinstance(document, list):
            raise MalformedInputError(
                f"Expected a list of records in {source}, "
                f"got {type(document).__name__}"
            )
        if spec_type in RECORD_MODELS:
            document = _parse_records(
                spec_type, document, source, entry_dir / "photos" / spec_type
            )
        if spec_type == "speakers":
            # sorted() is stable, ties keep source order
            document = sorted(document, key=lambda s: name_sort_key(s.name))
        entry.specs[spec_type] = document
    return entry


def load_entries(config: EngineConfig) -> Dict[str, Entry]:
    """Load every numeric entry directory under ``config.src_dir``.

    Returns:
        Mapping of entry id to :class:`Entry`, in directory-name order.

    Raises:
        MissingFileError: If the source root or any required file is missing.
        MalformedInputError: If any document cannot be parsed or validated.
    """
    src_dir = Path(config.src_dir)
    if not src_dir.is_dir():
        raise MissingFileError(f"Source directory does not exist: {src_dir}")

    entries: Dict[str, Entry] = {}
    for child in sorted(src_dir.iterdir(), key=lambda p: p.name):
        if not child.is_dir() or not _ENTRY_DIR_RE.fullmatch(child.name):
            continue
        entries[child.name] = load_entry(src_dir, child.name)

    logger.info("UTXO entries: [ %s ]", ", ".join(entries))
    return entries
