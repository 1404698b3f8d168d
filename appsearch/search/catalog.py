"""App catalog store and its serialized execution context.

All reads for search and all writes by the catalog owner run as tasks on one
worker thread, so a reader always sees the catalog either fully before or fully
after any update.
"""

import logging
import threading
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from typing import TypeVar

from appsearch.contracts.app_search_v1 import CatalogItem
from appsearch.core.logger import logger as event_logger

logger = logging.getLogger(__name__)

T = TypeVar("T")

CatalogSnapshot = tuple[CatalogItem, ...]


class AppCatalog:
    """Mutable list of catalog items. Only touched from the model worker."""

    def __init__(self, items: Iterable[CatalogItem] = ()) -> None:
        self.data: list[CatalogItem] = list(items)

    def __len__(self) -> int:
        return len(self.data)

    def snapshot(self) -> CatalogSnapshot:
        return tuple(self.data)

    def replace_all(self, items: Iterable[CatalogItem]) -> None:
        self.data = list(items)

    def add(self, item: CatalogItem) -> None:
        self.data.append(item)

    def remove(self, key: str) -> int:
        """Remove every entry with `key`; returns how many were removed."""
        before = len(self.data)
        self.data = [item for item in self.data if item.key != key]
        return before - len(self.data)

    def update(self, item: CatalogItem) -> None:
        """Replace entries sharing `item.key` in place, or append if none exist."""
        replaced = False
        for idx, existing in enumerate(self.data):
            if existing.key == item.key:
                self.data[idx] = item
                replaced = True
        if not replaced:
            self.data.append(item)


class CatalogModel:
    """Owns the app catalog and serializes every read and write against it."""

    def __init__(self, thread_name: str = "catalog-model") -> None:
        self._catalog: AppCatalog | None = None
        self._worker_ident: int | None = None
        self._executor = ThreadPoolExecutor(
            max_workers=1,
            thread_name_prefix=thread_name,
            initializer=self._record_worker,
        )

    def _record_worker(self) -> None:
        self._worker_ident = threading.get_ident()

    @property
    def is_loaded(self) -> bool:
        return self._catalog is not None

    def on_worker_thread(self) -> bool:
        return self._worker_ident is not None and threading.get_ident() == self._worker_ident

    def _snapshot(self) -> CatalogSnapshot:
        if self._catalog is None:
            return ()
        return self._catalog.snapshot()

    # -----------------------------------------------------------------------
    # Reads
    # -----------------------------------------------------------------------

    def enqueue_read_task(self, task: Callable[[Sequence[CatalogItem]], T]) -> Future:
        """Run `task(snapshot)` on the worker without blocking the caller."""
        return self._executor.submit(lambda: task(self._snapshot()))

    def with_snapshot(self, fn: Callable[[Sequence[CatalogItem]], T]) -> T:
        """Run `fn(snapshot)` with no concurrent catalog write in flight.

        Blocks until done when called from outside the worker. An unloaded
        catalog yields an empty snapshot.
        """
        if self.on_worker_thread():
            return fn(self._snapshot())
        return self.enqueue_read_task(fn).result()

    # -----------------------------------------------------------------------
    # Writes
    # -----------------------------------------------------------------------

    def enqueue_update_task(self, task: Callable[[AppCatalog], T]) -> Future:
        """Run `task(catalog)` with write access, creating the catalog if needed."""

        def run() -> T:
            if self._catalog is None:
                self._catalog = AppCatalog()
            return task(self._catalog)

        return self._executor.submit(run)

    def load(self, items: Iterable[CatalogItem]) -> Future:
        items = list(items)

        def task(catalog: AppCatalog) -> None:
            catalog.replace_all(items)
            event_logger.catalog_updated("load", len(catalog))

        return self.enqueue_update_task(task)

    def add_items(self, items: Iterable[CatalogItem]) -> Future:
        items = list(items)

        def task(catalog: AppCatalog) -> None:
            for item in items:
                catalog.add(item)
            event_logger.catalog_updated("add", len(catalog))

        return self.enqueue_update_task(task)

    def remove_items(self, keys: Iterable[str]) -> Future:
        keys = list(keys)

        def task(catalog: AppCatalog) -> int:
            removed = sum(catalog.remove(key) for key in keys)
            logger.debug("Catalog: removed %s entries for %s keys", removed, len(keys))
            event_logger.catalog_updated("remove", len(catalog))
            return removed

        return self.enqueue_update_task(task)

    def update_item(self, item: CatalogItem) -> Future:
        def task(catalog: AppCatalog) -> None:
            catalog.update(item)
            event_logger.catalog_updated("update", len(catalog))

        return self.enqueue_update_task(task)

    # -----------------------------------------------------------------------
    # Lifecycle
    # -----------------------------------------------------------------------

    def close(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "CatalogModel":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
