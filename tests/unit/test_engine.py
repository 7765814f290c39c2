"""Unit tests for the SpecEngine facade and its configuration."""
from pathlib import Path
from typing import Any, Dict, List

import pydantic
import pytest

from utxo_spec import EngineConfig, SpecEngine, UtxoSpecError
from utxo_spec.config import BANNER, SCHEMA_DIR


class TestEngineConfig:
    def test_defaults(self) -> None:
        config = EngineConfig()
        assert config.base_url == "https://spec.utxo.cz"
        assert config.src_dir == Path("./spec")
        assert config.schema_dir == SCHEMA_DIR
        assert config.default_schema_version == "1"
        assert config.silent is False

    def test_trailing_slash_stripped(self) -> None:
        config = EngineConfig(base_url="https://example.org/")
        assert config.spec_url("2024", "speakers") == "https://example.org/2024/speakers.json"
        assert config.entry_url("2024") == "https://example.org/2024/"

    def test_frozen(self) -> None:
        config = EngineConfig()
        with pytest.raises(pydantic.ValidationError):
            config.silent = True  # type: ignore[misc]


class TestBanner:
    def test_banner_sent_to_echo(self) -> None:
        lines: List[str] = []
        SpecEngine(EngineConfig(), echo=lines.append)
        assert lines == [BANNER]

    def test_silent_suppresses_banner(self) -> None:
        lines: List[str] = []
        SpecEngine(EngineConfig(silent=True), echo=lines.append)
        assert lines == []


class TestSpecEngine:
    def test_entries_before_load(self) -> None:
        engine = SpecEngine(EngineConfig(silent=True))
        with pytest.raises(UtxoSpecError):
            engine.entries_list()

    def test_load_and_list(self, source_tree: Any) -> None:
        source_tree.add_entry("2023", {"events": []})
        source_tree.add_entry("2024", {"events": []})
        engine = SpecEngine(source_tree.config())
        engine.load()
        assert engine.entries_list() == ["2023", "2024"]

    def test_qa_summary(self, source_tree: Any, sample_specs: Dict[str, Any]) -> None:
        source_tree.add_entry("2024", sample_specs)
        engine = SpecEngine(source_tree.config())
        engine.load()
        assert [item.event_id for item in engine.qa_summary("2024")] == ["e1", "e3"]
        with pytest.raises(UtxoSpecError):
            engine.qa_summary("1999")

    def test_schema_url(self) -> None:
        engine = SpecEngine(EngineConfig(base_url="https://example.org", silent=True))
        assert engine.schema_url() == "https://example.org/schema/1/index.json"
        assert engine.schema_url("2", "events") == "https://example.org/schema/2/events.json"
