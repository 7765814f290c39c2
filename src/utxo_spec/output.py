"""Output tree primitives: JSON serialization, directory reset, tree copy."""
from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path
from typing import Any

from pydantic import BaseModel
from pydantic_core import to_jsonable_python

from utxo_spec.models import SpecRecord

logger = logging.getLogger("utxo_spec.output")


def to_jsonable(data: Any) -> Any:
    """Convert documents (records, lists, YAML dates) to plain JSON values."""
    if isinstance(data, SpecRecord):
        return data.to_dict()
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True)
    if isinstance(data, list):
        return [to_jsonable(item) for item in data]
    if isinstance(data, dict):
        return {key: to_jsonable(value) for key, value in data.items()}
    return to_jsonable_python(data)


def document_to_json(data: Any) -> str:
    """Serialize a document to a 2-space indented JSON string.

    Returns:
        Formatted JSON string with trailing newline
    """
    return json.dumps(to_jsonable(data), indent=2, ensure_ascii=False) + "\n"


def write_json(path: Path, data: Any) -> Path:
    """Write *data* as JSON to *path*."""
    path.write_text(document_to_json(data), encoding="utf-8")
    logger.debug("%s written", path)
    return path


def empty_dir(path: Path) -> Path:
    """Ensure *path* exists and is empty."""
    if path.is_dir():
        for child in path.iterdir():
            if child.is_dir() and not child.is_symlink():
                shutil.rmtree(child)
            else:
                child.unlink()
    else:
        path.mkdir(parents=True)
    return path


def copy_tree(src: Path, dest: Path) -> Path:
    """Copy *src* recursively into *dest*, overwriting existing files."""
    shutil.copytree(src, dest, dirs_exist_ok=True)
    logger.debug("copied %s to %s", src, dest)
    return dest
