import logging
import re

from PyQt5.QtCore import pyqtSignal
from PyQt5.QtWidgets import (
    QFormLayout,
    QGridLayout,
    QGroupBox,
    QInputDialog,
    QLineEdit,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from wordlist.wl_model import WordList
from wordlist.wl_render import format_word_list
from wordlist.wl_view import WordListView

logger = logging.getLogger(__name__)


class WordListController(QWidget):
    """
    Operation panel for the word list: UI events -> WordList -> view, and a
    text listing of the list after every change.
    """

    listingChanged = pyqtSignal(str)

    def __init__(self, clock):
        super().__init__()
        self.model = WordList()
        self.view = WordListView(clock)
        self._panel_locked = False

        self._build_inputs()
        self.panel = self._create_panel()

        self.view.interactionLocked.connect(self._on_lock_state)
        self.view.deleteRequested.connect(self._handle_delete_from_node)
        self.view.clearAllRequested.connect(self._on_clear)

        self._refresh_spins()

    # ---------- Panel UI ----------

    def _create_panel(self):
        container = QWidget()
        layout = QGridLayout(container)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setHorizontalSpacing(12)
        layout.setVerticalSpacing(12)
        layout.setColumnStretch(0, 1)
        layout.setColumnStretch(1, 1)

        feed_btn = QPushButton("Feed Words")
        feed_btn.clicked.connect(self._on_feed)
        layout.addWidget(self._single_button_group("Sorted Feed", feed_btn), 0, 0)

        clear_btn = QPushButton("Delete List")
        clear_btn.clicked.connect(self._on_clear)
        layout.addWidget(self._single_button_group("Clear", clear_btn), 1, 0)

        sorted_btn = QPushButton("Insert Sorted")
        sorted_btn.clicked.connect(self._on_insert_sorted)
        sorted_group = self._form_group(
            "Insert Sorted", [("Word:", self.sorted_word_edit)], sorted_btn
        )
        layout.addWidget(sorted_group, 2, 0)

        slot_btn = QPushButton("Insert")
        slot_btn.clicked.connect(self._on_insert_at_slot)
        slot_group = self._form_group(
            "Insert At Slot",
            [("Slot:", self.slot_index_spin), ("Word:", self.slot_word_edit)],
            slot_btn,
        )
        layout.addWidget(slot_group, 0, 1, 2, 1)

        delete_btn = QPushButton("Delete")
        delete_btn.clicked.connect(self._on_delete)
        delete_group = self._form_group(
            "Delete At", [("Index:", self.delete_index_spin)], delete_btn
        )
        layout.addWidget(delete_group, 2, 1)

        layout.setRowStretch(3, 1)

        self.feed_btn = feed_btn
        self.clear_btn = clear_btn
        self.sorted_btn = sorted_btn
        self.slot_btn = slot_btn
        self.delete_btn = delete_btn
        return container

    @staticmethod
    def _single_button_group(title, button):
        group = QGroupBox(title)
        group.setStyleSheet("QGroupBox { color: white; }")
        vlayout = QVBoxLayout(group)
        vlayout.setContentsMargins(12, 10, 12, 12)
        vlayout.setSpacing(6)
        vlayout.addWidget(button)
        return group

    @staticmethod
    def _form_group(title, rows, button):
        group = QGroupBox(title)
        group.setStyleSheet("QGroupBox { color: white; }")
        form = QFormLayout()
        form.setContentsMargins(12, 8, 12, 12)
        form.setSpacing(6)
        for label, widget in rows:
            form.addRow(label, widget)
        form.addRow(button)
        group.setLayout(form)
        return group

    def _build_inputs(self):
        self.sorted_word_edit = QLineEdit()
        self.sorted_word_edit.setPlaceholderText("Word")
        self.sorted_word_edit.returnPressed.connect(self._on_insert_sorted)

        self.slot_index_spin = QSpinBox()
        self.slot_index_spin.setRange(0, 0)
        self.slot_word_edit = QLineEdit()
        self.slot_word_edit.setPlaceholderText("Word")

        self.delete_index_spin = QSpinBox()
        self.delete_index_spin.setRange(0, 0)

    def _refresh_spins(self):
        length = len(self.model)
        # slot index may point one past the tail
        self.slot_index_spin.setMaximum(length)
        self.delete_index_spin.setMaximum(max(0, length - 1))

        can_delete = length > 0 and not self._panel_locked
        self.delete_index_spin.setDisabled(not can_delete)
        self.delete_btn.setDisabled(not can_delete)

    def _publish(self):
        self._refresh_spins()
        self.listingChanged.emit(format_word_list(self.model))

    # ---------- Controller lifecycle ----------

    def on_activate(self, graphics_view):
        self.view.bind_canvas(graphics_view)
        self.listingChanged.emit(format_word_list(self.model))

    def build_panel(self):
        return self.panel

    def load_words(self, words):
        """Sorted-insert ``words`` in one go and redraw the whole chain."""
        for word in words:
            self.model.insert_word_sorted(word)
        logger.info("fed %d words, list now holds %d entries", len(words), len(self.model))
        snapshot = self.model.snapshot()
        if snapshot:
            self.view.animate_build(snapshot)
        else:
            self.view.reset()
        self._publish()

    # ---------- UI handlers ----------

    def _on_feed(self):
        text, ok = QInputDialog.getText(
            self, "Feed Words", "Words (comma or space separated):"
        )
        if not ok:
            return
        words = self._parse_words(text)
        if words:
            self.load_words(words)

    def _on_insert_sorted(self):
        if self._panel_locked:
            return
        word = self.sorted_word_edit.text().strip()
        if not word:
            return
        result = self.model.insert_word_sorted(word)
        snapshot = self.model.snapshot()
        if result.merged:
            logger.debug("merged %r at index %d", word, result.index)
            self.view.animate_merge(snapshot, result.node_id, walked=result.index + 1)
        else:
            logger.debug("inserted %r at index %d", word, result.index)
            self.view.animate_insert(snapshot, result.node_id, result.index, walked=result.index)
        self.sorted_word_edit.clear()
        self._publish()

    def _on_insert_at_slot(self):
        if self._panel_locked:
            return
        word = self.slot_word_edit.text().strip()
        if not word:
            return
        index = self.slot_index_spin.value()
        node_id = self.model.insert_word_unordered(word, self.model.slot_at(index))
        logger.debug("inserted %r unordered at slot %d", word, index)
        self.view.animate_insert(self.model.snapshot(), node_id, index, walked=index)
        self._publish()

    def _on_delete(self):
        if self._panel_locked or len(self.model) == 0:
            return
        index = self.delete_index_spin.value()
        removed = self.model.delete_node(self.model.slot_at(index))
        if removed is None:
            return
        logger.debug("deleted node %d at index %d", removed["id"], index)
        self.view.animate_delete(self.model.snapshot(), removed["id"])
        self._publish()

    def _handle_delete_from_node(self, index):
        self.delete_index_spin.setValue(index)
        self._on_delete()

    def _on_clear(self):
        if self._panel_locked:
            return
        self.model.delete_list()
        logger.info("word list deleted")
        self.view.reset()
        self._publish()

    def _on_lock_state(self, locked):
        self._panel_locked = locked
        for widget in (
            self.feed_btn,
            self.clear_btn,
            self.sorted_btn,
            self.slot_btn,
            self.sorted_word_edit,
            self.slot_word_edit,
            self.slot_index_spin,
        ):
            widget.setDisabled(locked)
        self._refresh_spins()

    # ---------- Helpers ----------

    @staticmethod
    def _parse_words(text: str):
        if not text:
            return []
        normalized = text.replace("，", ",")
        return [part for part in re.split(r"[,\s]+", normalized) if part]
