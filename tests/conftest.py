"""Shared pytest fixtures for all tests."""
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Optional

import pytest
import yaml

from utxo_spec import EngineConfig

FIXED_TIME = datetime(2024, 6, 1, 9, 30, 0, 123000, tzinfo=timezone.utc)


def fixed_clock() -> datetime:
    return FIXED_TIME


class SourceTree:
    """Builds a source directory of numeric entries under a temp root."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.root.mkdir(parents=True, exist_ok=True)

    def write_yaml(self, path: Path, data: Any) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            yaml.safe_dump(data, allow_unicode=True, sort_keys=False),
            encoding="utf-8",
        )
        return path

    def add_entry(
        self,
        entry_id: str,
        specs: Dict[str, Any],
        index: Optional[Dict[str, Any]] = None,
        photos: Optional[Dict[str, Iterable[str]]] = None,
        media_kit: Optional[Iterable[str]] = None,
        with_photos_dir: bool = True,
    ) -> Path:
        """Create ``<root>/<entry_id>`` with index, sub-specs and assets.

        Sub-specs are declared in ``specs`` order unless ``index`` already
        carries a ``specDef``.
        """
        entry_dir = self.root / entry_id
        descriptor: Dict[str, Any] = {"id": f"utxo{entry_id}", "name": f"UTXO.{entry_id}"}
        descriptor.update(index or {})
        descriptor.setdefault("specDef", [{"type": t} for t in specs])
        self.write_yaml(entry_dir / "index.yaml", descriptor)
        for spec_type, document in specs.items():
            self.write_yaml(entry_dir / f"{spec_type}.yaml", document)

        if with_photos_dir:
            (entry_dir / "photos").mkdir(parents=True, exist_ok=True)
        for spec_type, names in (photos or {}).items():
            type_dir = entry_dir / "photos" / spec_type
            type_dir.mkdir(parents=True, exist_ok=True)
            for name in names:
                (type_dir / name).write_bytes(b"img:" + name.encode())

        if media_kit is not None:
            kit_dir = entry_dir / "media-kit"
            kit_dir.mkdir(parents=True, exist_ok=True)
            for name in media_kit:
                (kit_dir / name).write_bytes(b"kit:" + name.encode())
        return entry_dir

    def config(self, **overrides: Any) -> EngineConfig:
        return EngineConfig(src_dir=self.root, silent=True, **overrides)


@pytest.fixture
def source_tree(tmp_path: Path) -> SourceTree:
    """Empty source tree under a temporary directory."""
    return SourceTree(tmp_path / "spec")


@pytest.fixture
def clock() -> Callable[[], datetime]:
    """Deterministic clock for the ``time`` field."""
    return fixed_clock


@pytest.fixture
def sample_specs() -> Dict[str, Any]:
    """A small but complete set of sub-specs for one entry."""
    return {
        "speakers": [
            {"id": "zoe", "name": "Zoë Adams", "country": "cz"},
            {"id": "42", "name": "Alice Novák", "bio": "Researcher"},
            {"id": "bob", "name": "bob builder"},
        ],
        "projects": [
            {"id": "lightning-labs", "name": "Lightning Labs"},
        ],
        "partners": [
            {"id": "acme", "name": "ACME", "photos": ["custom:gif"]},
        ],
        "events": [
            {"id": "e1", "type": "talk", "name": "Intro"},
            {"id": "e2", "type": "lightning", "name": "Quick one"},
            {"id": "e3", "type": "workshop", "name": "Hands on"},
        ],
        "schedule": [
            {"id": "s2", "event": "e3", "period": "11:00-12:00"},
            {"id": "s1", "event": "e1", "period": "10:00-10:30"},
        ],
        "tracks": [
            {"id": "main", "name": "Main stage"},
        ],
    }
