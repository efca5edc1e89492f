"""Tests for the in-memory tab inventory."""

from dustman.autoclose.models import TabSnapshot
from dustman.host.inventory import InMemoryTabInventory


def test_list_filters_window_type():
    inventory = InMemoryTabInventory([
        TabSnapshot(id=1, window_id=1),
        TabSnapshot(id=2, window_id=2, window_type="popup"),
    ])
    assert [t.id for t in inventory.list_tabs()] == [1]
    assert [t.id for t in inventory.list_tabs(window_type=None)] == [1, 2]


def test_close_is_best_effort():
    inventory = InMemoryTabInventory([TabSnapshot(id=1, window_id=1), TabSnapshot(id=2, window_id=1)])
    assert inventory.close_tabs([1, 99, 2]) == {1, 2}
    assert inventory.list_tabs() == []


def test_update_tab():
    inventory = InMemoryTabInventory([TabSnapshot(id=1, window_id=1, pinned=True)])
    inventory.update_tab(1, pinned=False)
    assert inventory.list_tabs()[0].pinned is False
