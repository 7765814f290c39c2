"""Engine configuration and built-in constants."""
from pathlib import Path
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

BASE_URL: str = "https://spec.utxo.cz"

DEFAULT_SCHEMA_VERSION: str = "1"

DEFAULT_SRC_DIR: Path = Path("./spec")

DEFAULT_OUTPUT_DIR: Path = Path("./dist")

# Bundled schema definitions: <SCHEMA_DIR>/<version>/<name>.yaml
SCHEMA_DIR: Path = Path(__file__).parent / "schemas"

# (variant, format) pairs probed for every photo-carrying record, in tag order
IMAGE_TYPES: Tuple[Tuple[str, str], ...] = (
    ("web", "svg"),
    ("web", "png"),
    ("web", "webp"),
    ("web", "jpg"),
    ("sm", "png"),
    ("sm", "webp"),
    ("twitter", "jpg"),
)

BANNER: str = """
██╗░░░██╗████████╗██╗░░██╗░█████╗░
██║░░░██║╚══██╔══╝╚██╗██╔╝██╔══██╗
██║░░░██║░░░██║░░░░╚███╔╝░██║░░██║
██║░░░██║░░░██║░░░░██╔██╗░██║░░██║
╚██████╔╝░░░██║░░░██╔╝╚██╗╚█████╔╝
░╚═════╝░░░░╚═╝░░░╚═╝░░╚═╝░╚════╝░
"""


class EngineConfig(BaseModel):
    """Settings shared by the loader and the publisher."""

    model_config = ConfigDict(frozen=True)

    src_dir: Path = Field(
        default=DEFAULT_SRC_DIR,
        description="Root directory holding numeric entry directories",
    )
    base_url: str = Field(
        default=BASE_URL,
        min_length=1,
        description="Public URL the output tree is served from (no trailing slash)",
    )
    schema_dir: Path = Field(
        default=SCHEMA_DIR,
        description="Directory holding versioned schema definitions",
    )
    default_schema_version: str = Field(
        default=DEFAULT_SCHEMA_VERSION,
        min_length=1,
        description="Schema version used when an entry does not override it",
    )
    silent: bool = Field(
        default=False,
        description="Suppress the banner",
    )

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    def entry_url(self, entry_id: str) -> str:
        """Return the published base URL of an entry."""
        return f"{self.base_url}/{entry_id}/"

    def spec_url(self, entry_id: str, spec_type: str) -> str:
        """Return the published URL of a sub-spec document."""
        return f"{self.base_url}/{entry_id}/{spec_type}.json"
