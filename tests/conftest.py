from collections.abc import Iterator, Sequence

import pytest

from appsearch.contracts.app_search_v1 import CatalogItem
from appsearch.search.catalog import CatalogModel

SAMPLE_TITLES = ["Camera", "Calendar", "Calculator", "Clock", "Chrome", "Chess"]


def make_items(titles: Sequence[str]) -> list[CatalogItem]:
    return [
        CatalogItem(key=f"app{idx}", title=title, payload={"index": idx})
        for idx, title in enumerate(titles)
    ]


@pytest.fixture
def sample_items() -> list[CatalogItem]:
    return make_items(SAMPLE_TITLES)


@pytest.fixture
def model(sample_items: list[CatalogItem]) -> Iterator[CatalogModel]:
    """Catalog model loaded with the sample apps; shut down after the test."""
    instance = CatalogModel()
    instance.load(sample_items).result(timeout=5)
    try:
        yield instance
    finally:
        instance.close()


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "property: property-based deterministic tests")
    config.addinivalue_line(
        "markers", "concurrency: exercises the catalog worker thread"
    )
