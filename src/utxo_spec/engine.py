"""High-level facade: load a source tree once, build it on demand."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from utxo_spec.config import BANNER, DEFAULT_OUTPUT_DIR, EngineConfig
from utxo_spec.loader import load_entries
from utxo_spec.models import Entry, GlobalIndexEntry, QASummaryItem, UtxoSpecError
from utxo_spec.publisher import Clock, build
from utxo_spec.qa import qa_summary
from utxo_spec.schemas import schema_url

logger = logging.getLogger("utxo_spec.engine")


class SpecEngine:
    """Loads entries from ``config.src_dir`` and publishes them.

    Example:
        >>> engine = SpecEngine(EngineConfig(src_dir="./spec", silent=True))
        >>> engine.load()
        >>> engine.build("./dist")

    Args:
        config: Engine configuration, defaults to :class:`EngineConfig`.
        echo: Optional sink for the console banner. Nothing is printed when
            it is None or ``config.silent`` is set.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        echo: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.config = config or EngineConfig()
        self._echo = echo
        self._entries: Optional[Dict[str, Entry]] = None
        if echo is not None and not self.config.silent:
            echo(BANNER)

    @property
    def entries(self) -> Dict[str, Entry]:
        """Loaded entries keyed by entry id."""
        if self._entries is None:
            raise UtxoSpecError("Entries are not loaded, call load() first")
        return self._entries

    def load(self) -> Dict[str, Entry]:
        """Read the source tree into memory."""
        self._entries = load_entries(self.config)
        return self._entries

    def entries_list(self) -> List[str]:
        """Return loaded entry ids in load order."""
        return list(self.entries)

    def qa_summary(self, entry_id: str) -> List[QASummaryItem]:
        """Return the QA summary of a loaded entry."""
        if entry_id not in self.entries:
            raise UtxoSpecError(
                f"Unknown entry: {entry_id!r}. Loaded: {self.entries_list()}"
            )
        return qa_summary(self.entries[entry_id])

    def schema_url(self, version: Optional[str] = None, name: str = "index") -> str:
        """Return the canonical URL of a published schema."""
        return schema_url(
            self.config.base_url, version or self.config.default_schema_version, name
        )

    def build(
        self,
        output_dir: Union[str, Path] = DEFAULT_OUTPUT_DIR,
        now: Optional[Clock] = None,
    ) -> List[GlobalIndexEntry]:
        """Publish the loaded entries into *output_dir*."""
        logger.debug("Building %d entries into %s", len(self.entries), output_dir)
        return build(self.entries, Path(output_dir), self.config, now=now)
