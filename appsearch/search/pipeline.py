"""App search pipeline: title matching over the live catalog, capped and sectioned."""

import asyncio
import time
from collections.abc import Callable, Sequence
from concurrent.futures import Future
from typing import Any

from appsearch.contracts.app_search_v1 import (
    CatalogItem,
    ResultItem,
    SectionDescriptor,
    SectionType,
)
from appsearch.core.config import config
from appsearch.core.logger import logger
from appsearch.search.assembler import assemble_results
from appsearch.search.catalog import CatalogModel
from appsearch.search.constants import DEFAULT_STRINGS, SEARCH_CORPUS_APPS
from appsearch.search.interface import DictStringResolver, SearchPipeline, StringResolver
from appsearch.search.matcher import StringMatcher
from appsearch.search.query_filter import get_title_match_result


class AppsSearchPipeline(SearchPipeline):
    """Searches installed apps by title.

    Matching runs as a read task on the catalog model's worker, so it is
    serialized with catalog updates. Callbacks run on that worker too; UI
    callers must hop back to their own thread.
    """

    def __init__(
        self,
        model: CatalogModel,
        strings: StringResolver | None = None,
        decoration_factory: Callable[[], Any] | None = None,
        matcher: StringMatcher | None = None,
        max_results: int | None = None,
    ) -> None:
        self._model = model
        self._matcher = matcher or StringMatcher.from_config(config)
        self._max_results = config.max_results if max_results is None else max_results
        if self._max_results < 0:
            raise ValueError(f"max_results must be >= 0, got {self._max_results}")
        strings = strings or DictStringResolver(DEFAULT_STRINGS)
        self._header_section = SectionDescriptor(
            section_type=SectionType.HEADER,
            title=strings.get_string(SEARCH_CORPUS_APPS),
        )
        self._apps_section = SectionDescriptor(
            section_type=SectionType.APPS,
            decoration=decoration_factory() if decoration_factory else None,
        )

    @property
    def header_section(self) -> SectionDescriptor:
        return self._header_section

    @property
    def apps_section(self) -> SectionDescriptor:
        return self._apps_section

    @property
    def max_results(self) -> int:
        return self._max_results

    def get_title_match_result(
        self, items: Sequence[CatalogItem], query: str
    ) -> list[CatalogItem]:
        """Filters catalog items matching `query` with this pipeline's matcher."""
        return get_title_match_result(items, query, self._matcher)

    def _build(self, query: str, snapshot: Sequence[CatalogItem]) -> list[ResultItem]:
        start = time.monotonic()
        matched = self.get_title_match_result(snapshot, query)
        results = assemble_results(
            matched, self._header_section, self._apps_section, self._max_results
        )
        logger.search_completed(query, len(matched), len(results), time.monotonic() - start)
        return results

    def _build_or_empty(self, query: str, snapshot: Sequence[CatalogItem]) -> list[ResultItem]:
        try:
            return self._build(query, snapshot)
        except Exception as e:
            logger.error(f"App search failed for query {query[:80]!r}", exception=e)
            return []

    def perform_search(
        self,
        query: str,
        callback: Callable[[list[ResultItem]], None],
    ) -> Future:
        """Queue a search; returns at once and calls `callback` exactly once.

        If the catalog model is already closed the search cannot be queued;
        the callback then runs inline on the caller's thread with [].
        """
        logger.search_submitted(query)

        def task(snapshot: Sequence[CatalogItem]) -> list[ResultItem]:
            results = self._build_or_empty(query, snapshot)
            try:
                callback(results)
            except Exception:
                logger.exception("App search callback raised")
                raise
            return results

        try:
            return self._model.enqueue_read_task(task)
        except RuntimeError as e:
            logger.warning(f"App search not queued, catalog model unavailable: {e}")

        future: Future = Future()
        try:
            future.set_result(task(()))
        except Exception as e:
            future.set_exception(e)
        return future

    async def search(self, query: str) -> list[ResultItem]:
        logger.search_submitted(query)
        future = self._model.enqueue_read_task(
            lambda snapshot: self._build_or_empty(query, snapshot)
        )
        return await asyncio.wrap_future(future)

    def search_sync(self, query: str) -> list[ResultItem]:
        logger.search_submitted(query)
        return self._model.with_snapshot(
            lambda snapshot: self._build_or_empty(query, snapshot)
        )
