import argparse
import logging
import sys

from PyQt5.QtCore import Qt
from PyQt5.QtGui import QFont
from PyQt5.QtWidgets import (
    QApplication,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QSlider,
    QTextEdit,
    QVBoxLayout,
    QWidget,
)

from core.playback import MAX_SPEED, MIN_SPEED, PlaybackClock
from widgets.canvas import WordCanvas
from wordlist.wl_ctrl import WordListController
from wordlist.wl_render import run_demo

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Canvas and operation panel on the left, text listing on the right."""

    def __init__(self, speed=1.0):
        super().__init__()
        self.setWindowTitle("Word Frequency List")
        self.resize(1280, 760)

        self.clock = PlaybackClock(speed)
        self.controller = WordListController(self.clock)
        self._build_ui()
        self._connect_signals()
        self.controller.on_activate(self.canvas)

    def _build_ui(self):
        central = QWidget(self)
        self.setCentralWidget(central)
        root_layout = QHBoxLayout(central)
        root_layout.setContentsMargins(8, 8, 8, 8)
        root_layout.setSpacing(8)

        left_panel = QWidget()
        left_layout = QVBoxLayout(left_panel)
        left_layout.setContentsMargins(0, 0, 0, 0)
        left_layout.setSpacing(6)

        self.canvas = WordCanvas()
        left_layout.addWidget(self.canvas, 1)

        speed_layout = QHBoxLayout()
        self.speed_value_label = QLabel()
        self.speed_slider = QSlider(Qt.Horizontal)
        self.speed_slider.setRange(int(MIN_SPEED * 100), int(MAX_SPEED * 100))
        self.speed_slider.setValue(int(self.clock.speed * 100))
        self._on_speed_changed(self.clock.speed)
        speed_layout.addWidget(QLabel("Animation Speed"))
        speed_layout.addWidget(self.speed_slider, 1)
        speed_layout.addWidget(self.speed_value_label)
        left_layout.addLayout(speed_layout)
        left_layout.addWidget(self.controller.build_panel(), 0)

        right_panel = QWidget()
        right_layout = QVBoxLayout(right_panel)
        right_layout.setContentsMargins(0, 0, 0, 0)
        self.listing = QTextEdit()
        self.listing.setReadOnly(True)
        self.listing.setFont(QFont("Monospace"))
        right_layout.addWidget(QLabel("Listing"))
        right_layout.addWidget(self.listing, 1)

        root_layout.addWidget(left_panel, 14)
        root_layout.addWidget(right_panel, 6)

    def _connect_signals(self):
        self.speed_slider.valueChanged.connect(self._on_speed_slider_changed)
        self.clock.speedChanged.connect(self._on_speed_changed)
        self.controller.listingChanged.connect(self.listing.setPlainText)

    def _on_speed_slider_changed(self, value):
        self.clock.set_speed(value / 100.0)

    def _on_speed_changed(self, speed):
        self.speed_value_label.setText(f"{speed:.1f}×")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Sorted word-frequency list with an animated visualizer."
    )
    parser.add_argument(
        "--demo",
        action="store_true",
        help="print the console walkthrough instead of opening the window",
    )
    parser.add_argument(
        "--words",
        default="",
        help="comma or space separated words to sorted-insert on startup",
    )
    parser.add_argument(
        "--speed",
        type=float,
        default=1.0,
        help="initial animation speed multiplier (0.5 - 3.0)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.demo:
        run_demo()
        return 0

    app = QApplication(sys.argv[:1])
    window = MainWindow(args.speed)
    words = WordListController._parse_words(args.words)
    if words:
        window.controller.load_words(words)
    window.show()
    logger.debug("window shown")
    return app.exec_()


if __name__ == "__main__":
    sys.exit(main())
