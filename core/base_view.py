import math

from PyQt5.QtCore import QObject, QPointF, QRectF, pyqtSignal
from PyQt5.QtWidgets import QGraphicsScene

from core.playback import AnimationToolkit


class SceneView(QObject):
    """
    Owns the QGraphicsScene of one structure and keeps its animations alive.
    While anything is playing the view reports itself locked, so the
    controller can disable operations that would race the animation.
    """

    interactionLocked = pyqtSignal(bool)

    def __init__(self, clock):
        super().__init__()
        self.scene = QGraphicsScene()
        self._base_rect = QRectF(-200, -200, 1200, 700)
        self.scene.setSceneRect(self._base_rect)
        self.anim = AnimationToolkit(clock)
        self._canvas = None
        self._running = []
        self._locked = False
        self._view_anim = None
        self._max_scale = 1.0

    @property
    def locked(self) -> bool:
        return self._locked

    def bind_canvas(self, canvas):
        self._stop_view_anim()
        self._canvas = canvas
        if canvas:
            canvas.setScene(self.scene)
            canvas.resetTransform()

    # ---------- Camera ----------

    def fit_to_items(self, padding=120):
        if not self._canvas:
            return
        items_rect = self.scene.itemsBoundingRect()
        if items_rect.isNull():
            target = QRectF(self._base_rect)
        else:
            target = items_rect.adjusted(-padding, -padding, padding, padding)
            if self._base_rect.contains(target):
                target = QRectF(self._base_rect)
        self.scene.setSceneRect(target)
        self._glide_to(target)

    def _glide_to(self, target, duration=360):
        viewport = self._canvas.viewport().rect()
        if viewport.isNull():
            return

        start_center = self._canvas.mapToScene(viewport.center())
        start_scale = self._canvas.transform().m11()
        if not math.isfinite(start_scale) or abs(start_scale) < 1e-4:
            start_scale = 1.0

        end_center = target.center()
        end_scale = min(
            viewport.width() / max(target.width(), 1.0),
            viewport.height() / max(target.height(), 1.0),
        )
        end_scale = min(max(0.05, end_scale), self._max_scale)

        if (end_center - start_center).manhattanLength() < 1e-6 and abs(end_scale - start_scale) < 1e-6:
            return

        self._stop_view_anim()

        def _step(t):
            scale = start_scale + (end_scale - start_scale) * t
            center = start_center + (end_center - start_center) * t
            self._apply_camera(scale, QPointF(center))

        anim = self.anim.progress(_step, duration)
        anim.setParent(self)
        anim.finished.connect(lambda: self._apply_camera(end_scale, end_center))
        self._view_anim = anim
        anim.start()

    def _apply_camera(self, scale, center):
        if not self._canvas:
            return
        self._canvas.resetTransform()
        self._canvas.scale(scale, scale)
        self._canvas.centerOn(center)

    def _stop_view_anim(self):
        if self._view_anim:
            self._view_anim.stop()
            self._view_anim = None

    # ---------- Animation lifecycle ----------

    def _set_locked(self, locked):
        if self._locked != locked:
            self._locked = locked
            self.interactionLocked.emit(locked)

    def stop_animations(self):
        """Halt everything still playing. Finalizers of halted animations do not run."""
        running, self._running = self._running, []
        for animation in running:
            animation.stop()
        self._set_locked(False)

    def play(self, animation, finalizer=None):
        """Start ``animation``, holding a reference until it finishes."""
        if animation is None:
            if finalizer:
                finalizer()
            return

        self._set_locked(True)
        self._running.append(animation)

        def _done():
            if animation in self._running:
                self._running.remove(animation)
            if finalizer:
                finalizer()
            if not self._running:
                self._set_locked(False)

        animation.finished.connect(_done)
        animation.start()
