"""
Settings Dialog Module for Chunk Finder

Provides a PyQt5 dialog for rebinding the read hotkey. Changes to the
modifier or key apply immediately; Save writes them to the settings file.
"""

from typing import Optional

from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtGui import QFont
from PyQt5.QtWidgets import (
    QComboBox, QDialog, QHBoxLayout, QLabel, QLineEdit, QPushButton, QVBoxLayout
)

from .keys import (
    CAPTURE_CANCEL_KEYS, DEFAULT_KEY, DEFAULT_MODIFIER, MODIFIER_LABELS, MODIFIERS, key_label
)


_QT_NAMED_KEYS = {
    **{getattr(Qt, f"Key_F{n}"): f"f{n}" for n in range(1, 13)},
    Qt.Key_Space: "space",
    Qt.Key_Return: "enter",
    Qt.Key_Enter: "enter",
    Qt.Key_Escape: "esc",
    Qt.Key_Tab: "tab",
    Qt.Key_Backspace: "backspace",
    Qt.Key_Delete: "delete",
    Qt.Key_Insert: "insert",
    Qt.Key_Home: "home",
    Qt.Key_End: "end",
    Qt.Key_PageUp: "page_up",
    Qt.Key_PageDown: "page_down",
}


def qt_key_name(qt_key: int) -> Optional[str]:
    """
    Stored key name for a Qt key code.

    Returns:
        Key name, or None for keys that cannot be bound (e.g. bare modifiers)
    """
    if qt_key in _QT_NAMED_KEYS:
        return _QT_NAMED_KEYS[qt_key]
    if Qt.Key_A <= qt_key <= Qt.Key_Z or Qt.Key_0 <= qt_key <= Qt.Key_9:
        return chr(qt_key).lower()
    return None


class KeyCaptureEdit(QLineEdit):
    """
    Read-only field that records the next key press after a click.

    Signals:
        key_captured(str): Stored key name of the captured key
    """

    key_captured = pyqtSignal(str)

    def __init__(self, key: str, parent=None):
        super().__init__(parent)
        self._key = key
        self._capturing = False
        self.setReadOnly(True)
        self.setAlignment(Qt.AlignCenter)
        self.setText(key_label(key))

    def set_key(self, key: str):
        self._key = key
        self._capturing = False
        self.setText(key_label(key))

    def mousePressEvent(self, event):
        if not self._capturing:
            self._capturing = True
            self.setText("Press a key...")
            self.setFocus()
        super().mousePressEvent(event)

    def keyPressEvent(self, event):
        if not self._capturing:
            super().keyPressEvent(event)
            return

        name = qt_key_name(event.key())
        if name is None:
            return

        if name in CAPTURE_CANCEL_KEYS:
            # Navigation keys end the capture without rebinding
            self._capturing = False
            self.setText("Click to set key")
            super().keyPressEvent(event)
            return

        self._capturing = False
        self._key = name
        self.setText(key_label(name))
        self.key_captured.emit(name)
        event.accept()

    def focusOutEvent(self, event):
        if self._capturing:
            self._capturing = False
            self.setText(key_label(self._key))
        super().focusOutEvent(event)


class SettingsDialog(QDialog):
    """
    Hotkey settings window.

    Signals:
        binding_changed(str, str): (modifier, key) after any edit
        save_requested(): Save button clicked
        quit_requested(): Quit button clicked
    """

    binding_changed = pyqtSignal(str, str)
    save_requested = pyqtSignal()
    quit_requested = pyqtSignal()

    def __init__(self, modifier: str, key: str, parent=None):
        super().__init__(parent)
        self._modifier = modifier
        self._key = key
        self._init_ui()

    def _init_ui(self):
        """Initialize the user interface components."""
        self.setWindowTitle("Chunk Finder - Hotkey Settings")
        self.setFixedSize(400, 250)
        self.setWindowFlags(self.windowFlags() | Qt.WindowStaysOnTopHint)

        layout = QVBoxLayout()
        layout.setSpacing(10)
        layout.setContentsMargins(20, 20, 20, 20)
        self.setLayout(layout)

        title = QLabel("Configure your hotkey settings:")
        title_font = QFont()
        title_font.setBold(True)
        title.setFont(title_font)
        layout.addWidget(title)

        # Modifier selector
        modifier_layout = QHBoxLayout()
        modifier_layout.addWidget(QLabel("Modifier key:"))
        self.modifier_combo = QComboBox()
        for name in MODIFIERS:
            self.modifier_combo.addItem(MODIFIER_LABELS[name], name)
        self.modifier_combo.setCurrentIndex(self._modifier_index(self._modifier))
        self.modifier_combo.currentIndexChanged.connect(self._on_modifier_changed)
        modifier_layout.addWidget(self.modifier_combo, 1)
        layout.addLayout(modifier_layout)

        # Key capture field
        key_layout = QHBoxLayout()
        key_layout.addWidget(QLabel("Key:"))
        self.key_edit = KeyCaptureEdit(self._key)
        self.key_edit.key_captured.connect(self._on_key_captured)
        key_layout.addWidget(self.key_edit, 1)
        layout.addLayout(key_layout)

        layout.addWidget(QLabel("Click on the key field and press a key to set it"))
        layout.addStretch()

        # Buttons
        button_layout = QHBoxLayout()
        self.save_button = QPushButton("Save Settings")
        self.save_button.setDefault(True)
        self.save_button.clicked.connect(self.save_requested.emit)
        self.defaults_button = QPushButton("Defaults")
        self.defaults_button.clicked.connect(self._on_defaults_clicked)
        self.close_button = QPushButton("Close")
        self.close_button.clicked.connect(self.close)
        self.quit_button = QPushButton("Quit")
        self.quit_button.clicked.connect(self.quit_requested.emit)
        for button in (self.save_button, self.defaults_button, self.close_button, self.quit_button):
            button.setMinimumHeight(30)
            button_layout.addWidget(button)
        layout.addLayout(button_layout)

    @staticmethod
    def _modifier_index(modifier: str) -> int:
        return MODIFIERS.index(modifier) if modifier in MODIFIERS else 0

    def _on_modifier_changed(self, index: int):
        """Handle modifier dropdown selection change."""
        modifier = self.modifier_combo.itemData(index)
        if modifier and modifier != self._modifier:
            self._modifier = modifier
            self.binding_changed.emit(self._modifier, self._key)

    def _on_key_captured(self, key: str):
        self._key = key
        self.binding_changed.emit(self._modifier, self._key)

    def _on_defaults_clicked(self):
        """Reset to F8 with no modifier."""
        self.set_binding(DEFAULT_MODIFIER, DEFAULT_KEY)
        self.binding_changed.emit(self._modifier, self._key)

    def set_binding(self, modifier: str, key: str):
        """Show a binding without emitting binding_changed."""
        self._modifier = modifier
        self._key = key
        self.modifier_combo.blockSignals(True)
        self.modifier_combo.setCurrentIndex(self._modifier_index(modifier))
        self.modifier_combo.blockSignals(False)
        self.key_edit.set_key(key)
