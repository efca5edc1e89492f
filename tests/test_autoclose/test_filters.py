"""Tests for tab eligibility and saveability."""

from dustman.autoclose.filters import is_candidate, is_saveable
from dustman.autoclose.models import NO_GROUP, Settings, TabSnapshot


def _tab(**kwargs):
    defaults = {"id": 1, "window_id": 1, "last_accessed": 0}
    defaults.update(kwargs)
    return TabSnapshot(**defaults)


def test_plain_tab_is_candidate():
    assert is_candidate(_tab(), Settings())


def test_audible_tab_is_not_candidate():
    assert not is_candidate(_tab(audible=True), Settings())


def test_pinned_tab_is_not_candidate():
    assert not is_candidate(_tab(pinned=True), Settings())


def test_unknown_last_accessed_is_not_candidate():
    assert not is_candidate(_tab(last_accessed=None), Settings())
    assert not is_candidate(_tab(last_accessed=float("inf")), Settings())
    assert not is_candidate(_tab(last_accessed=float("nan")), Settings())


def test_grouped_tab_excluded_only_when_configured():
    grouped = _tab(group_id=7)
    assert is_candidate(grouped, Settings(exclude_tabs_in_groups=False))
    assert not is_candidate(grouped, Settings(exclude_tabs_in_groups=True))


def test_no_group_sentinels_not_excluded():
    settings = Settings(exclude_tabs_in_groups=True)
    assert is_candidate(_tab(group_id=NO_GROUP), settings)
    assert is_candidate(_tab(group_id=None), settings)


def test_saveable_regular_page():
    tab = _tab(title="Example", url="https://example.com/")
    assert is_saveable(tab)


def test_not_saveable_without_title_or_url():
    assert not is_saveable(_tab(url="https://example.com/"))
    assert not is_saveable(_tab(title="Example"))


def test_not_saveable_internal_schemes():
    for url in [
        "chrome://settings",
        "javascript:void(0)",
        "data:text/html,hi",
        "file:///tmp/x.html",
        "about:blank",
        "ABOUT:blank",
    ]:
        assert not is_saveable(_tab(title="t", url=url)), url


def test_saveable_without_scheme():
    assert is_saveable(_tab(title="t", url="example.com/page"))


def test_not_saveable_incognito():
    assert not is_saveable(_tab(title="t", url="https://example.com/", incognito=True))


def test_not_saveable_malformed_url():
    assert not is_saveable(_tab(title="t", url="http://[::1/"))
