"""Title filter: keeps catalog items whose titles match every query token."""

from collections.abc import Iterable

from appsearch.contracts.app_search_v1 import CatalogItem
from appsearch.search.matcher import StringMatcher


def get_title_match_result(
    items: Iterable[CatalogItem],
    query: str,
    matcher: StringMatcher,
) -> list[CatalogItem]:
    """Filter `items` to those matching `query`, in their given order.

    The query is normalized once for the whole pass. Duplicates are kept and
    nothing is re-ranked.
    """
    normalized = matcher.normalize_query(query)
    return [item for item in items if matcher.matches(item.title, normalized)]
