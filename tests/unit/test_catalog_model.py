import threading
import time

import pytest

from appsearch.contracts.app_search_v1 import CatalogItem
from appsearch.search.catalog import AppCatalog, CatalogModel


class TestAppCatalog:
    def test_update_replaces_in_place_or_appends(self):
        catalog = AppCatalog([CatalogItem(key="a", title="Camera"), CatalogItem(key="b", title="Clock")])

        catalog.update(CatalogItem(key="a", title="Camera Pro"))
        catalog.update(CatalogItem(key="c", title="Chess"))

        assert [i.title for i in catalog.data] == ["Camera Pro", "Clock", "Chess"]

    def test_remove_drops_every_entry_with_key(self):
        catalog = AppCatalog(
            [
                CatalogItem(key="a", title="Camera"),
                CatalogItem(key="b", title="Clock"),
                CatalogItem(key="a", title="Camera"),
            ]
        )

        assert catalog.remove("a") == 2
        assert catalog.remove("missing") == 0
        assert [i.key for i in catalog.data] == ["b"]

    def test_snapshot_is_detached_from_later_writes(self):
        catalog = AppCatalog([CatalogItem(key="a", title="Camera")])

        snapshot = catalog.snapshot()
        catalog.add(CatalogItem(key="b", title="Clock"))

        assert isinstance(snapshot, tuple)
        assert len(snapshot) == 1
        assert len(catalog) == 2


@pytest.mark.concurrency
class TestCatalogModel:
    def test_unloaded_catalog_yields_empty_snapshot(self):
        with CatalogModel() as model:
            assert not model.is_loaded
            assert model.with_snapshot(list) == []

    def test_with_snapshot_sees_loaded_items(self, model, sample_items):
        assert model.is_loaded
        assert model.with_snapshot(lambda items: [i.key for i in items]) == [
            i.key for i in sample_items
        ]

    def test_reads_observe_earlier_writes(self, model):
        model.add_items([CatalogItem(key="new", title="Contacts")])
        removed = model.remove_items(["app0"])
        model.update_item(CatalogItem(key="app1", title="Calendar 2"))

        titles = model.enqueue_read_task(lambda items: [i.title for i in items]).result(timeout=5)

        assert removed.result(timeout=5) == 1
        assert titles == ["Calendar 2", "Calculator", "Clock", "Chrome", "Chess", "Contacts"]

    def test_snapshot_is_never_torn_by_a_running_update(self, model):
        started = threading.Event()

        def slow_rebuild(catalog):
            started.set()
            catalog.data.clear()
            time.sleep(0.05)
            catalog.data.extend(
                CatalogItem(key=f"new{i}", title=f"New {i}") for i in range(3)
            )

        model.enqueue_update_task(slow_rebuild)
        assert started.wait(timeout=5)

        keys = model.with_snapshot(lambda items: [i.key for i in items])

        assert keys == ["new0", "new1", "new2"]

    def test_with_snapshot_runs_inline_on_worker(self, model):
        def nested(items):
            assert model.on_worker_thread()
            return model.with_snapshot(len)

        assert model.enqueue_read_task(nested).result(timeout=5) == 6
        assert not model.on_worker_thread()

    def test_update_task_initializes_catalog(self):
        with CatalogModel() as model:
            model.enqueue_update_task(lambda catalog: catalog.add(CatalogItem(key="a", title="Camera")))

            assert model.with_snapshot(len) == 1
            assert model.is_loaded

    def test_closed_model_rejects_new_tasks(self):
        model = CatalogModel()
        model.close()

        with pytest.raises(RuntimeError):
            model.enqueue_read_task(len)
