"""Versioned JSON Schema definitions for published utxo-spec documents.

Definitions live as YAML files under ``<schema_dir>/<version>/<name>.yaml``
and are published as JSON with a canonical ``$id``.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from utxo_spec.config import BASE_URL, DEFAULT_SCHEMA_VERSION, SCHEMA_DIR
from utxo_spec.loader import load_yaml
from utxo_spec.models import MalformedInputError, MissingFileError, SchemaDocument
from utxo_spec.output import empty_dir, write_json

logger = logging.getLogger("utxo_spec.schemas")

BUNDLE_NAME = "bundle"


def schema_url(
    base_url: str = BASE_URL,
    version: str = DEFAULT_SCHEMA_VERSION,
    name: str = "index",
) -> str:
    """Return the canonical URL of a published schema."""
    return f"{base_url}/schema/{version}/{name}.json"


def schema_version_dir(
    version: str = DEFAULT_SCHEMA_VERSION, schema_dir: Optional[Path] = None
) -> Path:
    """Return the definitions directory for *version*."""
    path = Path(schema_dir or SCHEMA_DIR) / version
    if not path.is_dir():
        raise MissingFileError(f"No schema definitions for version {version!r}: {path}")
    return path


def list_schemas(
    version: str = DEFAULT_SCHEMA_VERSION, schema_dir: Optional[Path] = None
) -> List[str]:
    """List all schema names available for *version*."""
    return sorted(p.stem for p in schema_version_dir(version, schema_dir).glob("*.yaml"))


def load_schemas(
    version: str = DEFAULT_SCHEMA_VERSION,
    base_url: str = BASE_URL,
    schema_dir: Optional[Path] = None,
) -> List[SchemaDocument]:
    """Load every schema definition of *version*, sorted by name.

    Each schema gets the computed ``$id`` as its first key; an ``$id``
    present in the source file is replaced.

    Raises:
        MissingFileError: If the version directory does not exist.
        MalformedInputError: If a definition is not a YAML mapping or is
            named ``bundle``.
    """
    version_dir = schema_version_dir(version, schema_dir)
    documents: List[SchemaDocument] = []
    for name in list_schemas(version, schema_dir):
        path = version_dir / f"{name}.yaml"
        if name == BUNDLE_NAME:
            raise MalformedInputError(
                f"Schema definition {path} clashes with the combined {BUNDLE_NAME}.json"
            )
        raw = load_yaml(path)
        if not isinstance(raw, dict):
            raise MalformedInputError(f"Schema definition {path} is not a mapping")
        schema: Dict[str, Any] = {"$id": schema_url(base_url, version, name)}
        schema.update((k, v) for k, v in raw.items() if k != "$id")
        documents.append(SchemaDocument(name=name, schema=schema))
    return documents


def schema_bundle(schemas: List[SchemaDocument]) -> Dict[str, Any]:
    """Combine schemas into a single ``definitions`` document."""
    return {"definitions": {doc.name: doc.schema for doc in schemas}}


def publish_schemas(
    output_dir: Path,
    version: str = DEFAULT_SCHEMA_VERSION,
    base_url: str = BASE_URL,
    schema_dir: Optional[Path] = None,
) -> List[SchemaDocument]:
    """Write every schema of *version* and their bundle under ``schema/<version>``.

    Args:
        output_dir: Root of the published tree
        version: Schema version to publish
        base_url: Public URL the tree is served from
        schema_dir: Definitions root, defaults to the bundled definitions

    Returns:
        The published schemas, sorted by name
    """
    schemas = load_schemas(version, base_url, schema_dir)
    version_out = empty_dir(Path(output_dir) / "schema" / version)
    logger.info("UTXO: writing schema (v%s) ..", version)

    for doc in schemas:
        write_json(version_out / f"{doc.name}.json", doc.schema)
    write_json(version_out / f"{BUNDLE_NAME}.json", schema_bundle(schemas))
    return schemas
