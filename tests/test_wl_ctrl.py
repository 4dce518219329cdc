import pytest

pytest.importorskip("PyQt5.QtWidgets")

from PyQt5.QtTest import QTest

from core.playback import PlaybackClock
from wordlist.wl_ctrl import WordListController
from wordlist.wl_render import EMPTY_LINE, format_word_list


@pytest.fixture
def ctrl(qapp):
    controller = WordListController(PlaybackClock(3.0))
    controller.listings = []
    controller.listingChanged.connect(controller.listings.append)
    yield controller
    controller.view.stop_animations()


def _settle(controller):
    # let the next operation through without waiting for the animation
    controller.view.stop_animations()
    assert not controller._panel_locked


def test_parse_words_commas_and_spaces():
    assert WordListController._parse_words("bbb, ddd aaa,,bbb") == ["bbb", "ddd", "aaa", "bbb"]


def test_parse_words_fullwidth_comma():
    assert WordListController._parse_words("one，two") == ["one", "two"]


def test_parse_words_empty():
    assert WordListController._parse_words("") == []
    assert WordListController._parse_words("  ,  ") == []


def test_load_words_feeds_sorted_and_publishes(ctrl):
    ctrl.load_words(["bbb", "ddd", "aaa", "bbb"])
    assert ctrl.model.counts() == [("aaa", 1), ("bbb", 2), ("ddd", 1)]
    assert ctrl.listings[-1] == format_word_list(ctrl.model)
    assert sorted(ctrl.view.node_items) == sorted(n["id"] for n in ctrl.model.snapshot())


def test_insert_sorted_merges_from_panel(ctrl):
    ctrl.load_words(["b", "a"])
    _settle(ctrl)
    ctrl.sorted_word_edit.setText("b")
    ctrl._on_insert_sorted()
    assert ctrl.model.counts() == [("a", 1), ("b", 2)]
    assert ctrl.sorted_word_edit.text() == ""
    assert "occurrences [2]" in ctrl.listings[-1]


def test_insert_at_slot_from_panel(ctrl):
    ctrl.load_words(["a", "c"])
    _settle(ctrl)
    ctrl.slot_word_edit.setText("zz")
    ctrl.slot_index_spin.setValue(1)
    ctrl._on_insert_at_slot()
    assert ctrl.model.words() == ["a", "zz", "c"]
    assert ctrl.slot_index_spin.maximum() == 3
    assert ctrl.listings[-1] == format_word_list(ctrl.model)


def test_delete_from_panel_and_node_menu(ctrl):
    ctrl.load_words(["a", "b", "c", "d"])
    _settle(ctrl)
    ctrl.delete_index_spin.setValue(1)
    ctrl._on_delete()
    assert ctrl.model.words() == ["a", "c", "d"]

    _settle(ctrl)
    ctrl._handle_delete_from_node(0)
    assert ctrl.model.words() == ["c", "d"]
    assert ctrl.delete_index_spin.maximum() == 1
    assert ctrl.listings[-1] == format_word_list(ctrl.model)


def test_clear_deletes_list(ctrl):
    ctrl.load_words(["a", "b"])
    _settle(ctrl)
    ctrl._on_clear()
    assert len(ctrl.model) == 0
    assert ctrl.listings[-1] == EMPTY_LINE
    assert ctrl.view.node_items == {}
    assert not ctrl.delete_btn.isEnabled()


def test_operations_refused_while_animating(ctrl):
    ctrl.load_words(["b", "a", "c"])
    _settle(ctrl)
    ctrl.sorted_word_edit.setText("b")
    ctrl._on_insert_sorted()
    assert ctrl.view.locked
    assert ctrl._panel_locked
    assert not ctrl.feed_btn.isEnabled()

    ctrl.view.clearAllRequested.emit()
    ctrl._on_clear()
    ctrl.slot_word_edit.setText("x")
    ctrl._on_insert_at_slot()
    ctrl._on_delete()
    assert ctrl.model.counts() == [("a", 1), ("b", 2), ("c", 1)]

    # the merge animation keeps running against live items
    QTest.qWait(200)
    assert sorted(ctrl.view.node_items) == sorted(n["id"] for n in ctrl.model.snapshot())


def test_view_reset_halts_running_animations(ctrl):
    ctrl.load_words(["b", "a", "c"])
    _settle(ctrl)
    ctrl.sorted_word_edit.setText("b")
    ctrl._on_insert_sorted()
    assert ctrl.view.locked

    ctrl.view.reset()
    assert not ctrl.view.locked
    assert not ctrl._panel_locked
    assert ctrl.view._running == []
    # halted animations must not touch the items the reset deleted
    QTest.qWait(200)
    assert ctrl.view.node_items == {}
