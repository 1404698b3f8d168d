"""App search contract v1: shared types for catalog entries, sections, and result rows."""

from appsearch.contracts.app_search_v1 import (
    AppEntryResult,
    CatalogItem,
    EmptyQueryPolicy,
    HeaderResult,
    MatchPolicy,
    ResultItem,
    ResultKind,
    SectionDescriptor,
    SectionType,
)

__all__ = [
    "AppEntryResult",
    "CatalogItem",
    "EmptyQueryPolicy",
    "HeaderResult",
    "MatchPolicy",
    "ResultItem",
    "ResultKind",
    "SectionDescriptor",
    "SectionType",
]
