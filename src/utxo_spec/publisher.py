"""Publishing of loaded entries into a static JSON tree.

Output layout::

    <out>/index.json                        global index
    <out>/<entryId>/index.json              entry summary with sub-spec URLs
    <out>/<entryId>/bundle.json             entry summary with inline sub-specs
    <out>/<entryId>/<type>.json             one per sub-spec
    <out>/<entryId>/qa-summary.json         only when a schedule is declared
    <out>/<entryId>/photos/, media-kit/     copied assets
    <out>/schema/<version>/                 schema definitions and bundle
"""
from __future__ import annotations

import copy
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from utxo_spec.config import EngineConfig
from utxo_spec.models import (
    Entry,
    GlobalIndexEntry,
    MissingFileError,
    QASummaryItem,
)
from utxo_spec.output import copy_tree, empty_dir, write_json
from utxo_spec.qa import qa_summary
from utxo_spec.schemas import publish_schemas, schema_version_dir

logger = logging.getLogger("utxo_spec.publisher")

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """Format *moment* as UTC ISO-8601 with milliseconds and a ``Z`` suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def resolve_schema_version(entry: Entry, config: EngineConfig) -> str:
    """Return the schema version an entry is published against."""
    version = entry.index.schema_version
    if version is None or version == "":
        return config.default_schema_version
    return str(version)


def schema_versions(entries: Dict[str, Entry], config: EngineConfig) -> List[str]:
    """Return every schema version a build publishes, sorted."""
    versions = {config.default_schema_version}
    versions.update(resolve_schema_version(e, config) for e in entries.values())
    return sorted(versions)


def build_index_document(
    entry: Entry,
    spec_urls: Dict[str, str],
    generated_at: str,
) -> Dict[str, Any]:
    """Build the published ``index.json`` of an entry.

    Args:
        entry: Loaded entry
        spec_urls: Published URL of every sub-spec, keyed by type
        generated_at: Formatted generation timestamp

    Returns:
        Index fields without ``specDef``, plus ``spec``, ``stats`` and ``time``
    """
    document = entry.index.published_fields()
    document["spec"] = dict(spec_urls)
    document["stats"] = {
        "counts": {spec_type: len(doc) for spec_type, doc in entry.specs.items()}
    }
    document["time"] = generated_at
    return document


def build_bundle_document(
    entry: Entry,
    index_document: Dict[str, Any],
) -> Dict[str, Any]:
    """Build the self-contained ``bundle.json`` of an entry.

    Same fields as *index_document*, with ``spec`` holding the sub-spec
    documents themselves instead of their URLs.
    """
    bundle: Dict[str, Any] = {}
    for key, value in index_document.items():
        if key == "spec":
            bundle[key] = dict(entry.specs)
        else:
            bundle[key] = copy.deepcopy(value)
    return bundle


def _photos_source(config: EngineConfig, entry_id: str) -> Path:
    return Path(config.src_dir) / entry_id / "photos"


def preflight(
    entries: Dict[str, Entry], config: EngineConfig
) -> Dict[str, List[QASummaryItem]]:
    """Check every entry can be published before the output tree is touched.

    Returns:
        QA summaries of the entries that declare a schedule

    Raises:
        IntegrityViolation: If a QA summary cannot be correlated.
        MissingFileError: If an entry has no photos directory or a schema
            version has no definitions.
    """
    for version in schema_versions(entries, config):
        schema_version_dir(version, config.schema_dir)

    summaries: Dict[str, List[QASummaryItem]] = {}
    for entry_id, entry in entries.items():
        photos = _photos_source(config, entry_id)
        if not photos.is_dir():
            raise MissingFileError(f"Photos directory does not exist: {photos}")
        if entry.declares("schedule"):
            summaries[entry_id] = qa_summary(entry)
    return summaries


def publish_entry(
    entry: Entry,
    output_dir: Path,
    config: EngineConfig,
    generated_at: str,
    qa: Optional[List[QASummaryItem]] = None,
) -> GlobalIndexEntry:
    """Write every document and asset of one entry.

    Returns:
        The entry's row of the global index
    """
    entry_id = entry.entry_id
    logger.info("UTXO.%s: building specs ..", entry_id)
    entry_dir = empty_dir(Path(output_dir) / entry_id)

    spec_urls: Dict[str, str] = {}
    for spec_type, document in entry.specs.items():
        write_json(entry_dir / f"{spec_type}.json", document)
        spec_urls[spec_type] = config.spec_url(entry_id, spec_type)

    index_document = build_index_document(entry, spec_urls, generated_at)
    write_json(entry_dir / "index.json", index_document)
    write_json(entry_dir / "bundle.json", build_bundle_document(entry, index_document))

    src_entry_dir = Path(config.src_dir) / entry_id
    photos = _photos_source(config, entry_id)
    if not photos.is_dir():
        raise MissingFileError(f"Photos directory does not exist: {photos}")
    logger.info("UTXO.%s: copying photos ..", entry_id)
    copy_tree(photos, entry_dir / "photos")

    media_kit = src_entry_dir / "media-kit"
    if media_kit.is_dir():
        logger.info("UTXO.%s: copying media-kit ..", entry_id)
        copy_tree(media_kit, entry_dir / "media-kit")

    if entry.declares("schedule"):
        if qa is None:
            qa = qa_summary(entry)
        write_json(entry_dir / "qa-summary.json", qa)

    return GlobalIndexEntry(
        id=f"utxo{entry_id}",
        entry_id=entry_id,
        url=config.entry_url(entry_id),
        schema_url=f"{config.base_url}/schema/{resolve_schema_version(entry, config)}/",
    )


def build(
    entries: Dict[str, Entry],
    output_dir: Path,
    config: EngineConfig,
    now: Optional[Clock] = None,
) -> List[GlobalIndexEntry]:
    """Publish all entries, the schemas and the global index into *output_dir*.

    The output directory is emptied first; every run is a full rebuild.
    Nothing is written when a preflight check fails.

    Args:
        entries: Loaded entries, published in mapping order
        output_dir: Root of the published tree
        config: Engine configuration
        now: Clock used for the ``time`` field, defaults to UTC now

    Returns:
        Rows of the global index

    Raises:
        IntegrityViolation: If a schedule cannot be correlated.
        MissingFileError: If photos or schema definitions are missing.
    """
    clock = now or _utc_now
    output_dir = Path(output_dir)
    summaries = preflight(entries, config)

    empty_dir(output_dir)
    global_index: List[GlobalIndexEntry] = []
    for entry_id, entry in entries.items():
        global_index.append(
            publish_entry(
                entry,
                output_dir,
                config,
                format_timestamp(clock()),
                qa=summaries.get(entry_id),
            )
        )

    for version in schema_versions(entries, config):
        publish_schemas(output_dir, version, config.base_url, config.schema_dir)

    write_json(output_dir / "index.json", global_index)
    logger.info("Build done")
    return global_index
