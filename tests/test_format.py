"""Tests for pagetoc.utils.format module."""
from pagetoc.models.overrides import GetTocResult
from pagetoc.models.toc import TocItem
from pagetoc.utils.format import (
    format_toc_item,
    format_toc_result,
    overrides_from_items,
    visible_items,
)

ITEMS = [
    TocItem(key="intro::1", level=1, text="Intro", anchor_id="Intro", hidden=True, label="Intro"),
    TocItem(key="setup::1", level=2, text="Setup", anchor_id="s", hidden=False, label="Setup Guide"),
    TocItem(key="usage::1", level=1, text="Usage", anchor_id="Usage", hidden=False, label="Usage"),
]


class TestVisibleItems:
    def test_filters_hidden(self) -> None:
        assert [i.key for i in visible_items(ITEMS)] == ["setup::1", "usage::1"]


class TestOverridesFromItems:
    def test_inverse_of_merge(self) -> None:
        assert overrides_from_items(ITEMS) == {
            "hiddenKeys": ["intro::1"],
            "labelByKey": {"setup::1": "Setup Guide"},
        }

    def test_empty(self) -> None:
        assert overrides_from_items([]) == {"hiddenKeys": [], "labelByKey": {}}


class TestFormatToc:
    def test_item_line(self) -> None:
        line = format_toc_item(ITEMS[1], show_keys=True)
        assert line.startswith("  - Setup Guide")
        assert "Setup" in line
        assert "<setup::1 #s>" in line

    def test_hidden_marker(self) -> None:
        assert format_toc_item(ITEMS[0]).endswith("[숨김]")

    def test_result_hides_hidden_by_default(self) -> None:
        result = GetTocResult(
            schema_version="1",
            document_id="5",
            can_edit=True,
            page_url="/wiki/5.html",
            items=ITEMS,
        )
        text = format_toc_result(result)
        assert "/wiki/5.html" in text
        assert "- Intro" not in text
        assert "- Usage" in text

        text_all = format_toc_result(result, include_hidden=True)
        assert "- Intro" in text_all

    def test_result_without_items(self) -> None:
        result = GetTocResult(
            schema_version="1", document_id=None, can_edit=False, page_url=None
        )
        assert "목차 항목이 없습니다." in format_toc_result(result)
