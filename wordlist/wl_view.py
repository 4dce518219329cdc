import math

from PyQt5.QtCore import QEvent, QPointF, QRectF, Qt, QTimer, pyqtSignal
from PyQt5.QtGui import QBrush, QColor, QFont, QFontMetrics, QPainterPath, QPen, QTransform
from PyQt5.QtWidgets import (
    QGraphicsItem,
    QGraphicsObject,
    QGraphicsPathItem,
    QGraphicsSimpleTextItem,
    QMenu,
)

from core.base_view import SceneView

WALK_COLOR = "#4fc3f7"
NEW_COLOR = "#ff4d4d"
MERGE_COLOR = "#66bb6a"
DELETE_COLOR = "#ff1744"


class WordListView(SceneView):
    """
    Draws the chain left to right, wrapping into rows, and animates the
    three things a word list does: grow, merge a count, drop a node.
    """

    deleteRequested = pyqtSignal(int)
    clearAllRequested = pyqtSignal()

    per_row = 5
    column_gap = 90
    row_gap = 130

    def __init__(self, clock):
        super().__init__(clock)
        self.scene.installEventFilter(self)
        self.node_items = {}  # node id -> WordNodeItem
        self.order = []
        self.arrow_items = {}  # (start id, end id) -> ArrowItem
        self._head_label = None
        self._create_head_label()

    # ---------- Scene lifecycle ----------

    def bind_canvas(self, canvas):
        super().bind_canvas(canvas)
        if self._canvas:
            QTimer.singleShot(0, self.fit_to_items)

    def reset(self):
        # running animations hold setters bound to the items about to go
        self.stop_animations()
        self.scene.clear()
        self.node_items.clear()
        self.order.clear()
        self.arrow_items.clear()
        self._create_head_label()

    def animate_build(self, nodes):
        """nodes: ordered snapshot dicts {id, word, occurrences, next}"""
        self.reset()
        seq = self.anim.sequential()
        for index, info in enumerate(nodes):
            item = self._add_node_item(info)
            target = self.slot_position(index)
            item.setPos(target - QPointF(0, 90))
            item.setOpacity(0.0)
            self.order.append(info["id"])
            seq.addAnimation(
                self.anim.parallel(
                    self.anim.fade_item(item, 0.0, 1.0, duration=300),
                    self.anim.move_item(item, target, duration=400),
                )
            )
        self.fit_to_items()
        self.play(seq, finalizer=self._refresh_connectivity)

    def animate_insert(self, nodes, inserted_id, index, walked):
        """
        walked: how many existing nodes the insert compared against before
        settling on ``index``.
        """
        info = next(node for node in nodes if node["id"] == inserted_id)
        traversal = self._build_traversal_anim(walked)

        new_item = self._add_node_item(info)
        target = self.slot_position(index)
        new_item.setPos(target - QPointF(0, 110))
        new_item.setOpacity(0.0)

        new_order = [node["id"] for node in nodes]
        shifts = [
            self.anim.move_item(self.node_items[node_id], self.slot_position(pos), duration=450)
            for pos, node_id in enumerate(new_order)
            if node_id != inserted_id and node_id in self.node_items
        ]

        drop_in = self.anim.parallel(
            self.anim.fade_item(new_item, 0.0, 1.0, duration=500),
            self.anim.move_item(new_item, target, duration=500),
        )
        flash = self.anim.flash_brush(
            new_item.setFillColor, new_item.fillColor, NEW_COLOR, duration=320, loops=2
        )

        self._clear_arrows()
        combined = self.anim.sequential(
            traversal,
            self.anim.parallel(*shifts) if shifts else None,
            drop_in,
            flash,
        )

        def _finalizer():
            self.order = new_order
            self._refresh_connectivity()
            self.fit_to_items()

        self.play(combined, finalizer=_finalizer)

    def animate_merge(self, nodes, node_id, walked):
        item = self.node_items.get(node_id)
        info = next((node for node in nodes if node["id"] == node_id), None)
        if item is None or info is None:
            self.animate_build(nodes)
            return

        traversal = self._build_traversal_anim(walked)
        bump = self.anim.pause(10)
        bump.finished.connect(lambda: item.set_occurrences(info["occurrences"]))
        flash = self.anim.flash_brush(
            item.setFillColor, item.fillColor, MERGE_COLOR, duration=320, loops=2
        )
        self.play(self.anim.sequential(traversal, bump, flash))

    def animate_delete(self, nodes, removed_id):
        item = self.node_items.get(removed_id)
        if item is None:
            self.animate_build(nodes)
            return

        flash = self.anim.flash_brush(
            item.setFillColor, item.fillColor, DELETE_COLOR, duration=300, loops=2
        )
        fading = [self.anim.fade_item(item, 1.0, 0.0, duration=380)]
        for (start_id, end_id), arrow in self.arrow_items.items():
            if removed_id in (start_id, end_id):
                # path items are not QObjects, so no property animation
                fading.append(
                    self.anim.progress(
                        lambda t, target=arrow: target.setOpacity(1.0 - t), duration=380
                    )
                )

        new_order = [node["id"] for node in nodes]
        shifts = [
            self.anim.move_item(self.node_items[node_id], self.slot_position(pos), duration=450)
            for pos, node_id in enumerate(new_order)
            if node_id in self.node_items
        ]

        def _drop_removed():
            self._clear_arrows()
            stale = self.node_items.pop(removed_id, None)
            if stale is not None and stale.scene() is self.scene:
                self.scene.removeItem(stale)

        fade_phase = self.anim.parallel(*fading)
        fade_phase.finished.connect(_drop_removed)

        def _finalizer():
            self.order = new_order
            self._refresh_connectivity()
            self.fit_to_items()

        self.play(
            self.anim.sequential(
                flash,
                fade_phase,
                self.anim.parallel(*shifts) if shifts else None,
            ),
            finalizer=_finalizer,
        )

    # ---------- Layout ----------

    def slot_position(self, index):
        row, col = divmod(index, self.per_row)
        x = col * (WordNodeItem.width + self.column_gap)
        y = row * self.row_gap
        return QPointF(x, y)

    def index_of(self, node_id):
        return self.order.index(node_id) if node_id in self.order else -1

    def _add_node_item(self, info):
        item = WordNodeItem(info["id"], info["word"], info["occurrences"])
        item.contextDelete.connect(self._emit_delete)
        item.positionChanged.connect(self._refresh_arrow_paths)
        self.scene.addItem(item)
        self.node_items[info["id"]] = item
        return item

    def _build_traversal_anim(self, walked):
        if walked <= 0:
            return self.anim.pause(60)
        seq = self.anim.sequential()
        for node_id in self.order[:walked]:
            item = self.node_items.get(node_id)
            if item is None:
                continue
            seq.addAnimation(
                self.anim.flash_brush(item.setFillColor, item.fillColor, WALK_COLOR, duration=200)
            )
        return seq

    # ---------- Arrows ----------

    def _refresh_connectivity(self):
        self._clear_arrows()
        for start_id, end_id in zip(self.order, self.order[1:]):
            if start_id not in self.node_items or end_id not in self.node_items:
                continue
            arrow = ArrowItem(self.node_items[start_id], self.node_items[end_id])
            self.scene.addItem(arrow)
            self.arrow_items[(start_id, end_id)] = arrow

        tail_id = self.order[-1] if self.order else None
        for node_id, item in self.node_items.items():
            item.set_tail(node_id == tail_id)
        self._update_head_label()

    def _refresh_arrow_paths(self):
        for arrow in self.arrow_items.values():
            arrow.update_path()
        self._update_head_label()

    def _clear_arrows(self):
        for arrow in self.arrow_items.values():
            if arrow.scene() is self.scene:
                self.scene.removeItem(arrow)
        self.arrow_items.clear()

    def _create_head_label(self):
        label = QGraphicsSimpleTextItem("head")
        label.setBrush(QColor("#ff6b3b"))
        font = label.font()
        font.setBold(True)
        label.setFont(font)
        label.setZValue(50)
        label.setVisible(False)
        self.scene.addItem(label)
        self._head_label = label

    def _update_head_label(self):
        head_item = self.node_items.get(self.order[0]) if self.order else None
        if head_item is None:
            self._head_label.setVisible(False)
            return
        rect = self._head_label.boundingRect()
        anchor = head_item.mapToScene(QPointF(0, 0))
        self._head_label.setPos(anchor.x(), anchor.y() - rect.height() - 6)
        self._head_label.setVisible(True)

    # ---------- Context menus ----------

    def _emit_delete(self, node_id):
        idx = self.index_of(node_id)
        if idx != -1 and not self.locked:
            self.deleteRequested.emit(idx)

    def eventFilter(self, watched, event):
        if watched is self.scene and event.type() == QEvent.GraphicsSceneContextMenu:
            if self.scene.itemAt(event.scenePos(), QTransform()) is None:
                menu = QMenu()
                clear_action = menu.addAction("Clear All")
                clear_action.setEnabled(not self.locked)
                if menu.exec_(event.screenPos()) == clear_action and not self.locked:
                    self.clearAllRequested.emit()
                event.accept()
                return True
        return super().eventFilter(watched, event)


class WordNodeItem(QGraphicsObject):
    """Node box: the word, its count badge, and the next-pointer cell."""

    positionChanged = pyqtSignal()
    contextDelete = pyqtSignal(int)

    height = 56
    pointer_size = 48
    data_width = 140
    width = data_width + pointer_size

    def __init__(self, node_id, word, occurrences):
        super().__init__()
        self.node_id = node_id
        self.word = str(word)
        self.occurrences = occurrences
        self.fillColor = QColor("#e9e9ef")
        self.strokeColor = QColor("#4a4a52")
        self.textColor = QColor("#1f1f24")
        self._font = QFont()
        self._font.setPointSize(13)
        self._is_tail = False

        self.setFlags(
            QGraphicsItem.ItemIsMovable
            | QGraphicsItem.ItemIsSelectable
            | QGraphicsItem.ItemSendsGeometryChanges
        )
        self.setZValue(10)
        self.setToolTip(f"node@{node_id:04d}")

    def boundingRect(self):
        return QRectF(0, 0, self.width, self.height)

    def paint(self, painter, option, widget=None):
        painter.setRenderHint(painter.Antialiasing)

        painter.setPen(QPen(self.strokeColor, 2.2))
        painter.setBrush(QBrush(self.fillColor))
        painter.drawRect(self.boundingRect())
        painter.setPen(QPen(self.strokeColor, 1.8))
        painter.drawLine(
            QPointF(self.data_width, 1.0), QPointF(self.data_width, self.height - 1.0)
        )

        painter.setFont(self._font)
        painter.setPen(self.textColor)
        text_rect = QRectF(0, 0, self.data_width, self.height - 16).adjusted(8, 4, -8, 0)
        label = QFontMetrics(self._font).elidedText(self.word, Qt.ElideRight, int(text_rect.width()))
        painter.drawText(text_rect, Qt.AlignCenter, label)

        badge_font = QFont(self._font)
        badge_font.setPointSize(9)
        painter.setFont(badge_font)
        painter.setPen(self.strokeColor)
        badge_rect = QRectF(0, self.height - 20, self.data_width, 18)
        painter.drawText(badge_rect, Qt.AlignCenter, f"x{self.occurrences}")

        if self._is_tail:
            tail_font = QFont(self._font)
            tail_font.setPointSize(7)
            tail_font.setBold(True)
            painter.setFont(tail_font)
            painter.drawText(self.pointer_rect().adjusted(4, 4, -4, -4), Qt.AlignCenter, "NULL")

    def set_occurrences(self, occurrences):
        self.occurrences = occurrences
        self.update()

    def setFillColor(self, color: QColor):
        self.fillColor = QColor(color)
        self.update()

    def set_tail(self, is_tail: bool):
        if self._is_tail != is_tail:
            self._is_tail = is_tail
            self.update()

    def pointer_rect(self):
        return QRectF(self.data_width, (self.height - self.pointer_size) / 2.0, self.pointer_size, self.pointer_size)

    def pointer_center(self):
        return QPointF(self.data_width + self.pointer_size / 2.0, self.height / 2.0)

    def entry_point(self):
        return QPointF(0.0, self.height / 2.0)

    def itemChange(self, change, value):
        if change == QGraphicsItem.ItemPositionHasChanged:
            self.positionChanged.emit()
        return super().itemChange(change, value)

    def contextMenuEvent(self, event):
        menu = QMenu()
        delete_action = menu.addAction("Delete")
        if menu.exec_(event.screenPos()) == delete_action:
            self.contextDelete.emit(self.node_id)


class ArrowItem(QGraphicsPathItem):
    """next pointer: straight within a row, a curve when the chain wraps."""

    head_length = 14
    head_angle = 26

    def __init__(self, start_item: WordNodeItem, end_item: WordNodeItem):
        super().__init__()
        self.start_item = start_item
        self.end_item = end_item
        self._head_path = QPainterPath()

        pen = QPen(QColor("#ff8c00"), 3)
        pen.setCapStyle(Qt.RoundCap)
        pen.setJoinStyle(Qt.RoundJoin)
        self.setPen(pen)
        self.setZValue(5)
        self.update_path()

    def update_path(self):
        start = self.start_item.mapToScene(self.start_item.pointer_center())
        end = self.end_item.mapToScene(self.end_item.entry_point())

        path = QPainterPath(start)
        if abs(end.y() - start.y()) < 1.0 and end.x() > start.x():
            path.lineTo(end)
        else:
            drop = max(40.0, abs(end.y() - start.y()) / 2.0)
            path.cubicTo(
                QPointF(start.x() + 80, start.y() + drop),
                QPointF(end.x() - 80, end.y() - drop),
                end,
            )

        self.prepareGeometryChange()
        self.setPath(path)
        self._head_path = self._build_head(path)

    def _build_head(self, path):
        tip = path.pointAtPercent(1.0)
        tangent = path.angleAtPercent(1.0)
        head = QPainterPath()
        for sign in (-1, 1):
            angle = math.radians(tangent + 180 + sign * self.head_angle)
            head.moveTo(tip)
            head.lineTo(
                tip.x() + self.head_length * math.cos(angle),
                tip.y() - self.head_length * math.sin(angle),
            )
        return head

    def boundingRect(self):
        return super().boundingRect().united(self._head_path.boundingRect()).adjusted(-4, -4, 4, 4)

    def paint(self, painter, option, widget=None):
        painter.setRenderHint(painter.Antialiasing, True)
        painter.setPen(self.pen())
        painter.drawPath(self.path())
        painter.drawPath(self._head_path)
