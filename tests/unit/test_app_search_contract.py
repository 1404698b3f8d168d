import pytest
from pydantic import TypeAdapter, ValidationError

from appsearch.contracts.app_search_v1 import (
    AppEntryResult,
    CatalogItem,
    HeaderResult,
    ResultItem,
    ResultKind,
    SectionDescriptor,
    SectionType,
)

APPS = SectionDescriptor(section_type=SectionType.APPS)


def test_catalog_item_defaults_are_explicit():
    item = CatalogItem(key="com.example/.Main")

    assert item.title == ""
    assert item.payload is None


def test_catalog_item_is_immutable():
    item = CatalogItem(key="a", title="Camera")

    with pytest.raises(ValidationError):
        item.title = "Clock"


def test_app_entry_rejects_header_position():
    with pytest.raises(ValidationError):
        AppEntryResult(section=APPS, position=0, rank=0, item=CatalogItem(key="a"))


def test_app_entry_rejects_negative_rank():
    with pytest.raises(ValidationError):
        AppEntryResult(section=APPS, position=1, rank=-1, item=CatalogItem(key="a"))


def test_app_entry_carries_item_unmodified():
    payload = {"intent": "launch"}
    item = CatalogItem(key="a", title="Camera", payload=payload)

    entry = AppEntryResult(section=APPS, position=1, rank=0, item=item)

    assert entry.item is item
    assert entry.item.payload is payload


def test_result_rows_dump_with_kind_tags():
    header = HeaderResult(
        section=SectionDescriptor(section_type=SectionType.HEADER, title="Apps"),
        position=0,
    )

    dumped = header.model_dump(mode="json")

    assert dumped["kind"] == "header"
    assert dumped["section"]["section_type"] == "header"
    assert dumped["section"]["title"] == "Apps"


def test_result_item_union_is_discriminated_by_kind():
    adapter = TypeAdapter(ResultItem)

    row = adapter.validate_python(
        {
            "kind": "app_entry",
            "section": {"section_type": "apps"},
            "position": 2,
            "rank": 1,
            "item": {"key": "a", "title": "Camera"},
        }
    )

    assert isinstance(row, AppEntryResult)
    assert row.kind == ResultKind.APP_ENTRY
    assert row.item.title == "Camera"


def test_result_item_union_rejects_unknown_kind():
    with pytest.raises(ValidationError):
        TypeAdapter(ResultItem).validate_python(
            {"kind": "divider", "section": {"section_type": "apps"}, "position": 0}
        )
