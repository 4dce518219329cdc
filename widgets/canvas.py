from PyQt5.QtCore import Qt
from PyQt5.QtGui import QPainter, QWheelEvent
from PyQt5.QtWidgets import QGraphicsView


class WordCanvas(QGraphicsView):
    """
    Canvas for the chain. The wheel pans vertically (long lists wrap into
    rows), Ctrl + wheel zooms within ``min_zoom``..``max_zoom``.
    """

    zoom_step = 1.1
    min_zoom = 0.1
    max_zoom = 4.0

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setRenderHints(QPainter.Antialiasing | QPainter.TextAntialiasing)
        self.setDragMode(QGraphicsView.ScrollHandDrag)
        self.setTransformationAnchor(QGraphicsView.AnchorUnderMouse)
        self.setViewportUpdateMode(QGraphicsView.FullViewportUpdate)

    def wheelEvent(self, event: QWheelEvent):
        delta = event.angleDelta().y()
        if event.modifiers() & Qt.ControlModifier:
            factor = self.zoom_step if delta > 0 else 1 / self.zoom_step
            zoom = self.transform().m11() * factor
            if self.min_zoom <= zoom <= self.max_zoom:
                self.scale(factor, factor)
        else:
            self.translate(0, delta * 0.2)
        event.accept()
