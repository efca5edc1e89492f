"""Tests for the closed-page history."""

from dustman.autoclose.history import accumulate_history, truncate_history
from dustman.autoclose.models import ClosedPageRecord, TabSnapshot


def _closed(tab_id, url, title="Title", **kwargs):
    return TabSnapshot(id=tab_id, window_id=1, last_accessed=0, title=title, url=url, **kwargs)


def test_prepends_newest_first():
    old = [ClosedPageRecord(title="A", url="https://a.example/")]
    new = accumulate_history(old, [_closed(1, "https://b.example/", title="B")], 2)
    assert [r.url for r in new] == ["https://b.example/", "https://a.example/"]


def test_truncates_oldest():
    old = [ClosedPageRecord(title=str(i), url=f"https://{i}.example/") for i in range(3)]
    new = accumulate_history(old, [_closed(1, "https://new.example/")], 3)
    assert len(new) == 3
    assert new[0].url == "https://new.example/"
    assert new[-1].url == "https://1.example/"


def test_zero_capacity_always_empty():
    old = [ClosedPageRecord(title="A", url="https://a.example/")]
    assert accumulate_history(old, [_closed(1, "https://b.example/")], 0) == []


def test_skips_unsaveable_tabs():
    tabs = [
        _closed(1, "about:blank"),
        _closed(2, "https://private.example/", incognito=True),
        _closed(3, "https://ok.example/", fav_icon_url="https://ok.example/favicon.ico"),
    ]
    new = accumulate_history([], tabs, 10)
    assert new == [
        ClosedPageRecord(
            title="Title",
            url="https://ok.example/",
            fav_icon_url="https://ok.example/favicon.ico",
        )
    ]


def test_does_not_mutate_input():
    old = [ClosedPageRecord(title="A", url="https://a.example/")]
    accumulate_history(old, [_closed(1, "https://b.example/")], 5)
    assert len(old) == 1


def test_truncate_history():
    old = [ClosedPageRecord(title=str(i), url=f"https://{i}.example/") for i in range(5)]
    assert len(truncate_history(old, 2)) == 2
    assert truncate_history(old, 0) == []
    assert truncate_history(old, 10) == old


def test_bare_urls_are_recorded():
    old = [ClosedPageRecord(title="A", url="a")]
    new = accumulate_history(old, [_closed(1, "b", title="B")], 2)
    assert [r.url for r in new] == ["b", "a"]


def test_malformed_url_is_skipped():
    tabs = [_closed(1, "http://[::1/"), _closed(2, "https://ok.example/")]
    assert [r.url for r in accumulate_history([], tabs, 10)] == ["https://ok.example/"]
