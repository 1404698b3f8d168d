"""Result assembler: caps matched apps and lays them out under a section header."""

import logging
from collections.abc import Sequence

from appsearch.contracts.app_search_v1 import (
    AppEntryResult,
    CatalogItem,
    HeaderResult,
    ResultItem,
    SectionDescriptor,
)
from appsearch.search.constants import MAX_RESULTS_COUNT

logger = logging.getLogger(__name__)


def assemble_results(
    matched: Sequence[CatalogItem],
    header_section: SectionDescriptor,
    apps_section: SectionDescriptor,
    limit: int = MAX_RESULTS_COUNT,
) -> list[ResultItem]:
    """Build the result rows for one search.

    Args:
        matched: Matching items in catalog order.
        header_section: Section bound to the title row.
        apps_section: Section bound to every app row.
        limit: Maximum number of app rows; extra matches are dropped.

    Returns:
        [] when there is nothing to show, otherwise a header at position 0
        followed by up to `limit` app rows.
    """
    if limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")
    count = min(len(matched), limit)
    if count == 0:
        return []

    items: list[ResultItem] = [HeaderResult(section=header_section, position=0)]
    existing = len(items)
    for i in range(count):
        items.append(
            AppEntryResult(
                section=apps_section,
                position=i + existing,
                rank=i,
                item=matched[i],
            )
        )
    if len(matched) > count:
        logger.debug("Assembler: dropped %s matches over cap %s", len(matched) - count, limit)
    return items
