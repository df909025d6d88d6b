from services.normalizer import MAX_ITEMS_PER_SOURCE, normalize, normalize_items

from tests.conftest import raw_item


def test_fields_pass_through():
    item = normalize(
        raw_item(title="T", link="https://x.vn/a", pub_date="Mon, 06 Oct 2025 08:00:00 +0700",
                 content_snippet="snippet"),
        "Tuổi Trẻ",
    )
    assert item.title == "T"
    assert item.link == "https://x.vn/a"
    assert item.pub_date == "Mon, 06 Oct 2025 08:00:00 +0700"
    assert item.content_snippet == "snippet"
    assert item.source == "Tuổi Trẻ"


def test_snippet_falls_back_to_summary_then_none():
    assert normalize(raw_item(summary="tóm tắt"), "A").content_snippet == "tóm tắt"
    assert normalize(raw_item(content_snippet="chính", summary="phụ"), "A").content_snippet == "chính"
    assert normalize(raw_item(), "A").content_snippet is None


def test_limit_keeps_leading_items():
    raws = [raw_item(title=str(i)) for i in range(MAX_ITEMS_PER_SOURCE + 10)]
    capped = normalize_items(raws, "A", limit=MAX_ITEMS_PER_SOURCE)
    assert len(capped) == 50
    assert capped[0].title == "0"
    assert capped[-1].title == "49"
    assert len(normalize_items(raws, "A")) == 60
