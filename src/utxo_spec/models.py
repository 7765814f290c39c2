"""Core data models for utxo-spec sources and published documents."""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Type, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    ValidatorFunctionWrapHandler,
    field_validator,
    model_validator,
)


# ---------------------------------------------------------------------------
# Source records
# ---------------------------------------------------------------------------


def _unset_fields(model: BaseModel) -> Set[str]:
    """Declared fields the source did not provide; extras are always kept."""
    return set(type(model).model_fields) - model.model_fields_set


def _number_to_str(v: object) -> object:
    # YAML reads unquoted ids such as `id: 42` as ints
    if isinstance(v, int) and not isinstance(v, bool):
        return str(v)
    return v


class SourceModel(BaseModel):
    """Model that publishes its fields in the key order of its source mapping."""

    model_config = ConfigDict(frozen=True, extra="allow")

    _source_keys: List[str] = PrivateAttr(default_factory=list)

    @model_validator(mode="wrap")
    @classmethod
    def _remember_key_order(
        cls, data: Any, handler: ValidatorFunctionWrapHandler
    ) -> "SourceModel":
        model = handler(data)
        if isinstance(data, dict):
            model._source_keys = [str(key) for key in data]
        return model

    def _dump_in_source_order(self, exclude: Set[str]) -> Dict[str, Any]:
        dumped = self.model_dump(mode="json", by_alias=True, exclude=exclude)
        ordered = {key: dumped.pop(key) for key in self._source_keys if key in dumped}
        ordered.update(dumped)
        return ordered


class SpecRecord(SourceModel):
    """Base for a single record of a sub-spec document.

    Unknown fields are kept as extras so that arbitrary YAML content
    survives the round trip to JSON, in the order the source lists them.
    """

    id: str = Field(..., min_length=1, description="Stable record identifier")

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, v: object) -> object:
        return _number_to_str(v)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-ready dict containing only fields present in the source."""
        return self._dump_in_source_order(_unset_fields(self))


class PhotoRecord(SpecRecord):
    """Record that carries discovered photo variant tags."""

    name: Optional[str] = Field(None, description="Display name")
    photos: List[str] = Field(
        default_factory=list,
        description="Photo variant tags in '<variant>:<format>' form",
    )

    @field_validator("name", mode="before")
    @classmethod
    def _name_to_str(cls, v: object) -> object:
        return _number_to_str(v)


class Speaker(PhotoRecord):
    """A conference speaker."""

    pass


class Project(PhotoRecord):
    """A project presented at the event."""

    pass


class Partner(PhotoRecord):
    """An event partner or sponsor."""

    pass


class EventItem(SpecRecord):
    """A programme item (talk, workshop, lightning talk, ...)."""

    type: Optional[str] = Field(None, description="Event kind, e.g. 'talk'")
    name: Optional[str] = Field(None, description="Event title")

    @field_validator("name", mode="before")
    @classmethod
    def _name_to_str(cls, v: object) -> object:
        return _number_to_str(v)


class ScheduleItem(SpecRecord):
    """A schedule slot binding an event to a time period."""

    event: Optional[str] = Field(None, description="Id of the scheduled event")
    period: Any = Field(None, description="Time range of the slot")

    @field_validator("event", mode="before")
    @classmethod
    def _event_to_str(cls, v: object) -> object:
        return _number_to_str(v)


RECORD_MODELS: Dict[str, Type[SpecRecord]] = {
    "speakers": Speaker,
    "projects": Project,
    "partners": Partner,
    "events": EventItem,
    "schedule": ScheduleItem,
}

PHOTO_SPEC_TYPES = frozenset({"speakers", "projects", "partners"})


# ---------------------------------------------------------------------------
# Index descriptor
# ---------------------------------------------------------------------------


class SpecDef(BaseModel):
    """Declaration of a sub-spec inside ``index.yaml``."""

    model_config = ConfigDict(frozen=True, extra="allow")

    type: str = Field(..., min_length=1, description="Sub-spec type name")


class IndexDescriptor(SourceModel):
    """Parsed ``index.yaml`` of an entry."""

    model_config = ConfigDict(populate_by_name=True)

    spec_def: List[SpecDef] = Field(
        ..., alias="specDef", description="Declared sub-specs, in order"
    )
    # Published as written; `schemaVersion: 2` stays an integer
    schema_version: Optional[Union[str, int]] = Field(
        None, alias="schemaVersion", description="Schema version override"
    )

    def declared_types(self) -> List[str]:
        """Return declared sub-spec type names in declaration order."""
        return [sd.type for sd in self.spec_def]

    def published_fields(self) -> Dict[str, Any]:
        """Return the descriptor fields carried into the published index."""
        return self._dump_in_source_order(_unset_fields(self) | {"spec_def"})


@dataclass
class Entry:
    """A loaded event entry: its index descriptor and sub-spec documents."""

    entry_id: str
    index: IndexDescriptor
    specs: Dict[str, Any] = field(default_factory=dict)

    def declares(self, spec_type: str) -> bool:
        """Return True if ``index.yaml`` declares a sub-spec of this type."""
        return spec_type in self.index.declared_types()

    def __repr__(self) -> str:
        """Human-readable representation."""
        return f"Entry(entry_id={self.entry_id}, specs={list(self.specs)})"


# ---------------------------------------------------------------------------
# Derived documents
# ---------------------------------------------------------------------------


class QASummaryItem(BaseModel):
    """One non-lightning event correlated with its schedule slot."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., description="Schedule record id")
    event_id: str = Field(..., alias="eventId", description="Event id")
    name: Optional[str] = Field(None, description="Event title")
    period: Any = Field(None, description="Scheduled time range")


class GlobalIndexEntry(BaseModel):
    """Row of the global ``index.json`` listing every published entry."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., description="Global identifier, 'utxo' + entry id")
    entry_id: str = Field(..., alias="entryId")
    url: str = Field(..., description="Base URL of the published entry")
    schema_url: str = Field(..., alias="schema", description="Schema base URL")


@dataclass(frozen=True)
class SchemaDocument:
    """A named JSON Schema loaded from the schema definitions directory."""

    name: str
    schema: Dict[str, Any]


# Custom Exceptions
class UtxoSpecError(Exception):
    """Base exception for all utxo-spec errors."""
    pass


class MissingFileError(UtxoSpecError, FileNotFoundError):
    """A required source file or directory does not exist."""
    pass


class MalformedInputError(UtxoSpecError):
    """A source document could not be parsed or has an unexpected shape."""
    pass


class IntegrityViolation(UtxoSpecError):
    """Cross-references between sub-specs are inconsistent."""
    pass
