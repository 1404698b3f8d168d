"""App Search Contract v1.

Defines the canonical types for:
  - Catalog entries (CatalogItem)
  - Presentation grouping (SectionDescriptor, SectionType)
  - Emitted result rows (HeaderResult, AppEntryResult, ResultItem)
  - Matching policies (MatchPolicy, EmptyQueryPolicy)

List adapters consume ResultItem rows and group/style them by section without
knowing how the rows were matched.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ---------------------------------------------------------------------------
# Policies
# ---------------------------------------------------------------------------


class MatchPolicy(StrEnum):
    """Where a query token may land inside a title."""

    WORD_PREFIX = "word_prefix"  # token must start at a word boundary
    SUBSTRING = "substring"  # token may start anywhere


class EmptyQueryPolicy(StrEnum):
    """What a query with no tokens matches."""

    MATCH_ALL = "match_all"
    MATCH_NONE = "match_none"


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


class CatalogItem(BaseModel):
    """One searchable application entry."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(description="Stable identity, e.g. a component name")
    title: str = Field(default="", description="Display title matched against queries")
    payload: Any = Field(
        default=None,
        description="Application-specific data carried through unmodified",
    )


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------


class SectionType(StrEnum):
    HEADER = "header"
    APPS = "apps"


class SectionDescriptor(BaseModel):
    """Logical grouping for presentation. Shared read-only across queries."""

    model_config = ConfigDict(frozen=True)

    section_type: SectionType
    title: str | None = Field(
        default=None, description="Resolved label; only the header carries one"
    )
    decoration: Any = Field(
        default=None, description="Opaque decoration handle for the list renderer"
    )


# ---------------------------------------------------------------------------
# Result rows
# ---------------------------------------------------------------------------


class ResultKind(StrEnum):
    HEADER = "header"
    APP_ENTRY = "app_entry"


class HeaderResult(BaseModel):
    """Section title row. Always at position 0 when present."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[ResultKind.HEADER] = ResultKind.HEADER
    section: SectionDescriptor
    position: int = Field(ge=0, description="0-based offset in the emitted list")


class AppEntryResult(BaseModel):
    """One matched application row."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[ResultKind.APP_ENTRY] = ResultKind.APP_ENTRY
    section: SectionDescriptor
    position: int = Field(ge=0, description="0-based offset in the emitted list")
    rank: int = Field(ge=0, description="0-based offset among app rows only")
    item: CatalogItem

    @field_validator("position")
    @classmethod
    def _validate_position(cls, value: int) -> int:
        if value == 0:
            raise ValueError("position 0 is reserved for the section header")
        return value


ResultItem = Annotated[HeaderResult | AppEntryResult, Field(discriminator="kind")]
