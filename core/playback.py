from PyQt5.QtCore import (
    QEasingCurve,
    QObject,
    QParallelAnimationGroup,
    QPropertyAnimation,
    QSequentialAnimationGroup,
    QVariantAnimation,
    pyqtSignal,
)
from PyQt5.QtGui import QColor

MIN_SPEED = 0.5
MAX_SPEED = 3.0


class PlaybackClock(QObject):
    """
    Shared animation speed. Every duration handed to Qt goes through
    ``duration`` so the speed slider affects all running views alike.
    """

    speedChanged = pyqtSignal(float)

    def __init__(self, speed=1.0):
        super().__init__()
        self._speed = self._clamp(speed)

    @staticmethod
    def _clamp(value):
        return max(MIN_SPEED, min(MAX_SPEED, float(value)))

    @property
    def speed(self) -> float:
        return self._speed

    def set_speed(self, value: float):
        value = self._clamp(value)
        if abs(value - self._speed) > 1e-3:
            self._speed = value
            self.speedChanged.emit(self._speed)

    def duration(self, base_ms: int) -> int:
        return max(1, int(base_ms / self._speed))


class AnimationToolkit:
    """Factory for the animations the word list view chains together."""

    def __init__(self, clock: PlaybackClock):
        self.clock = clock

    def _property(self, item, name, start, end, duration, easing):
        anim = QPropertyAnimation(item, name)
        anim.setDuration(self.clock.duration(duration))
        if start is not None:
            anim.setStartValue(start)
        anim.setEndValue(end)
        anim.setEasingCurve(easing)
        return anim

    def move_item(self, item, end_pos, duration=700):
        return self._property(item, b"pos", None, end_pos, duration, QEasingCurve.InOutCubic)

    def fade_item(self, item, start=0.0, end=1.0, duration=600):
        return self._property(item, b"opacity", start, end, duration, QEasingCurve.InOutQuad)

    def progress(self, step, duration=500):
        """0.0 -> 1.0 driver for hand-interpolated effects such as arrow growth."""
        anim = QVariantAnimation()
        anim.setDuration(self.clock.duration(duration))
        anim.setStartValue(0.0)
        anim.setEndValue(1.0)
        anim.valueChanged.connect(step)
        return anim

    def flash_brush(self, setter, base_color, flash_color, duration=360, loops=1):
        """
        Blink ``setter`` (e.g. node.setFillColor) to ``flash_color`` and back,
        ``loops`` times, always ending on ``base_color``.
        """
        base_color = QColor(base_color)
        flash_color = QColor(flash_color)

        def _tween(start, end):
            anim = QVariantAnimation()
            anim.setDuration(self.clock.duration(duration))
            anim.setStartValue(start)
            anim.setEndValue(end)
            anim.setEasingCurve(QEasingCurve.InOutQuad)
            anim.valueChanged.connect(
                lambda value: setter(value) if isinstance(value, QColor) else None
            )
            return anim

        seq = QSequentialAnimationGroup()
        for _ in range(max(1, loops)):
            seq.addAnimation(_tween(base_color, flash_color))
            seq.addAnimation(_tween(flash_color, base_color))
        return seq

    def pause(self, duration=150):
        return self.progress(lambda _value: None, duration)

    @staticmethod
    def parallel(*animations):
        group = QParallelAnimationGroup()
        for anim in animations:
            if anim:
                group.addAnimation(anim)
        return group

    @staticmethod
    def sequential(*animations):
        group = QSequentialAnimationGroup()
        for anim in animations:
            if anim:
                group.addAnimation(anim)
        return group
