"""
Overlay Display Module for Chunk Finder

Small always-on-top readout window showing the last read position, its
dig spot and the distance between them. Drag with the left mouse button
to move it; right-click to open the settings.
"""

import logging
import threading
from typing import List, Optional

from PyQt5.QtCore import QPoint, QRect, Qt, pyqtSignal
from PyQt5.QtGui import QColor, QFont, QPainter
from PyQt5.QtWidgets import QApplication, QWidget

from .grid import ChunkReading, idle_lines
from .settings import OVERLAY_HEIGHT, OVERLAY_WIDTH, resolve_overlay_position

# Configure module logger
logger = logging.getLogger(__name__)


BACKGROUND_COLOR = QColor(0, 0, 0)
TEXT_COLOR = QColor(255, 255, 255)
WINDOW_OPACITY = 220 / 255
TEXT_MARGIN = 5
FONT_POINT_SIZE = 8


class OverlayWindow(QWidget):
    """
    Frameless readout window.

    Signals:
        position_changed(int, int): Emitted after a drag ends
        settings_requested(): Emitted on right-click
        closed(): Emitted when the window is closed (e.g. Alt+F4)
    """

    position_changed = pyqtSignal(int, int)
    settings_requested = pyqtSignal()
    closed = pyqtSignal()

    def __init__(self, hotkey_label: str = "F8"):
        super().__init__()

        self._reading: Optional[ChunkReading] = None
        self._hotkey_label = hotkey_label
        self._drag_offset: Optional[QPoint] = None
        self._lock = threading.Lock()

        self._setup_window()

    def _setup_window(self):
        """Configure window properties."""
        # Frameless, always on top, tool window (no taskbar icon)
        self.setWindowFlags(
            Qt.FramelessWindowHint |
            Qt.WindowStaysOnTopHint |
            Qt.Tool
        )
        self.setWindowTitle("Chunk Finder")
        self.setFixedSize(OVERLAY_WIDTH, OVERLAY_HEIGHT)
        self.setWindowOpacity(WINDOW_OPACITY)

        font = QFont()
        font.setPointSize(FONT_POINT_SIZE)
        self.setFont(font)

    def place(self, x: int, y: int):
        """
        Move to a saved position, or the default one if it is off-screen.

        Args:
            x: Saved left edge (-1 for default)
            y: Saved top edge (-1 for default)
        """
        primary = QApplication.primaryScreen()
        virtual = primary.virtualGeometry() if primary else QRect()
        primary_width = primary.geometry().width() if primary else OVERLAY_WIDTH
        x, y = resolve_overlay_position(
            x, y,
            (virtual.x(), virtual.y(), virtual.width(), virtual.height()),
            primary_width
        )
        self.move(x, y)

    def show_reading(self, reading: Optional[ChunkReading]):
        """
        Display a reading, or the idle hint when None.

        A hidden overlay is shown again on the first successful reading.

        Args:
            reading: Latest reading from the worker
        """
        with self._lock:
            self._reading = reading
        if reading is not None and not self.isVisible():
            logger.info("Showing hidden overlay for new reading")
            self.show()
        self.update()  # Trigger repaint

    def set_hotkey_label(self, label: str):
        """Update the hotkey named in the idle hint."""
        with self._lock:
            self._hotkey_label = label
        self.update()

    def text_lines(self) -> List[str]:
        with self._lock:
            reading = self._reading
            label = self._hotkey_label
        if reading is None:
            return idle_lines(label)
        return reading.lines()

    def paintEvent(self, event):
        """Paint background and text."""
        painter = QPainter(self)
        painter.fillRect(self.rect(), BACKGROUND_COLOR)
        painter.setPen(TEXT_COLOR)
        text_rect = self.rect().adjusted(TEXT_MARGIN, TEXT_MARGIN, -TEXT_MARGIN, -TEXT_MARGIN)
        painter.drawText(
            text_rect,
            Qt.AlignLeft | Qt.AlignTop | Qt.TextWordWrap,
            "\n".join(self.text_lines())
        )
        painter.end()

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            self._drag_offset = event.globalPos() - self.frameGeometry().topLeft()
            event.accept()
        else:
            super().mousePressEvent(event)

    def mouseMoveEvent(self, event):
        if self._drag_offset is not None and event.buttons() & Qt.LeftButton:
            self.move(event.globalPos() - self._drag_offset)
            event.accept()
        else:
            super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event):
        if event.button() == Qt.LeftButton and self._drag_offset is not None:
            self._drag_offset = None
            pos = self.pos()
            logger.debug(f"Overlay moved to ({pos.x()}, {pos.y()})")
            self.position_changed.emit(pos.x(), pos.y())
            event.accept()
        elif event.button() == Qt.RightButton:
            self.settings_requested.emit()
            event.accept()
        else:
            super().mouseReleaseEvent(event)

    def closeEvent(self, event):
        self.closed.emit()
        event.accept()
