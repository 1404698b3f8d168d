"""App search: title matching over the live app catalog."""

from appsearch.search.catalog import AppCatalog, CatalogModel
from appsearch.search.interface import DictStringResolver, SearchPipeline, StringResolver
from appsearch.search.matcher import NormalizedQuery, StringMatcher
from appsearch.search.pipeline import AppsSearchPipeline

__all__ = [
    "AppCatalog",
    "AppsSearchPipeline",
    "CatalogModel",
    "DictStringResolver",
    "NormalizedQuery",
    "SearchPipeline",
    "StringMatcher",
    "StringResolver",
]
