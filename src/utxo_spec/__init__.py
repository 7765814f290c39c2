"""
utxo-spec: static JSON publisher for UTXO event specs.

Loads per-event YAML sources (speakers, projects, partners, events,
schedule, ...) from numeric entry directories and publishes them as JSON
documents, bundles, QA summaries and versioned JSON Schema definitions.

Example:
    >>> from utxo_spec import EngineConfig, SpecEngine
    >>> engine = SpecEngine(EngineConfig(src_dir="./spec"))
    >>> engine.load()
    >>> engine.build("./dist")
"""

__version__ = "1.0.0"

# Configuration
from utxo_spec.config import (
    BASE_URL,
    DEFAULT_SCHEMA_VERSION,
    IMAGE_TYPES,
    EngineConfig,
)

# Core data models
from utxo_spec.models import (
    Entry,
    EventItem,
    GlobalIndexEntry,
    IndexDescriptor,
    IntegrityViolation,
    MalformedInputError,
    MissingFileError,
    Partner,
    PhotoRecord,
    Project,
    QASummaryItem,
    ScheduleItem,
    SchemaDocument,
    Speaker,
    SpecDef,
    SpecRecord,
    UtxoSpecError,
)

# Loading
from utxo_spec.loader import (
    discover_photos,
    load_entries,
    load_entry,
    load_yaml,
)

# QA summary
from utxo_spec.qa import qa_summary

# Publishing
from utxo_spec.publisher import (
    build,
    build_bundle_document,
    build_index_document,
    publish_entry,
)

# Schemas
from utxo_spec.schemas import (
    list_schemas,
    load_schemas,
    publish_schemas,
    schema_url,
)

# Facade
from utxo_spec.engine import SpecEngine

__all__ = [
    # Configuration
    "BASE_URL",
    "DEFAULT_SCHEMA_VERSION",
    "IMAGE_TYPES",
    "EngineConfig",
    # Models
    "Entry",
    "EventItem",
    "GlobalIndexEntry",
    "IndexDescriptor",
    "Partner",
    "PhotoRecord",
    "Project",
    "QASummaryItem",
    "ScheduleItem",
    "SchemaDocument",
    "Speaker",
    "SpecDef",
    "SpecRecord",
    # Exceptions
    "UtxoSpecError",
    "MissingFileError",
    "MalformedInputError",
    "IntegrityViolation",
    # Loading
    "discover_photos",
    "load_entries",
    "load_entry",
    "load_yaml",
    # QA summary
    "qa_summary",
    # Publishing
    "build",
    "build_bundle_document",
    "build_index_document",
    "publish_entry",
    # Schemas
    "list_schemas",
    "load_schemas",
    "publish_schemas",
    "schema_url",
    # Facade
    "SpecEngine",
]
