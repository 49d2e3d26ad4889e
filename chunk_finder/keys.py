"""
Hotkey Names

Conversions between the stored hotkey settings, display labels and pynput
hotkey strings. Keys are stored as pynput key names ("f8", "page_up") or
single lowercase letters and digits.
"""

from typing import Dict, Tuple


DEFAULT_KEY = "f8"
DEFAULT_MODIFIER = "none"

MODIFIERS: Tuple[str, ...] = ("none", "ctrl", "alt", "shift")

MODIFIER_LABELS: Dict[str, str] = {
    "none": "None",
    "ctrl": "Ctrl",
    "alt": "Alt",
    "shift": "Shift",
}

NAMED_KEYS: Dict[str, str] = {
    **{f"f{n}": f"F{n}" for n in range(1, 13)},
    "space": "Space",
    "enter": "Enter",
    "esc": "Escape",
    "tab": "Tab",
    "backspace": "Backspace",
    "delete": "Delete",
    "insert": "Insert",
    "home": "Home",
    "end": "End",
    "page_up": "Page Up",
    "page_down": "Page Down",
}

# Pressing one of these while capturing cancels the capture
CAPTURE_CANCEL_KEYS = frozenset({"tab", "enter", "esc"})


def normalize_key(key: str) -> str:
    """
    Validate and normalize a key name.

    Raises:
        ValueError: If the key cannot be bound
    """
    name = key.strip().lower()
    if name in NAMED_KEYS:
        return name
    if len(name) == 1 and name.isascii() and name.isalnum():
        return name
    raise ValueError(f"Unsupported hotkey key: {key!r}")


def normalize_modifier(modifier: str) -> str:
    """
    Validate and normalize a modifier name.

    Raises:
        ValueError: If the modifier is unknown
    """
    name = modifier.strip().lower()
    if name not in MODIFIERS:
        raise ValueError(f"Unsupported hotkey modifier: {modifier!r}")
    return name


def key_label(key: str) -> str:
    """Display name for a key, e.g. "F8" or "Page Up"."""
    try:
        name = normalize_key(key)
    except ValueError:
        return "Unknown"
    return NAMED_KEYS.get(name, name.upper())


def hotkey_label(modifier: str, key: str) -> str:
    """Display name for a binding, e.g. "Ctrl+F8"."""
    prefix = ""
    if modifier != "none" and modifier in MODIFIER_LABELS:
        prefix = MODIFIER_LABELS[modifier] + "+"
    return prefix + key_label(key)


def validate_binding(modifier: str, key: str) -> Tuple[str, str]:
    """
    Normalize a modifier and key pair that pynput can match.

    Shift changes the character pynput reports for letters and digits
    ("1" arrives as "!"), so Shift is only allowed with named keys.

    Raises:
        ValueError: If the binding is invalid
    """
    modifier = normalize_modifier(modifier)
    key = normalize_key(key)
    if modifier == "shift" and key not in NAMED_KEYS:
        raise ValueError(f"Shift cannot be combined with the character key {key!r}")
    return modifier, key


def pynput_hotkey(modifier: str, key: str) -> str:
    """
    pynput GlobalHotKeys string for a binding, e.g. "<ctrl>+<f8>".

    Raises:
        ValueError: If the binding is invalid
    """
    modifier, key = validate_binding(modifier, key)
    key_part = f"<{key}>" if key in NAMED_KEYS else key
    if modifier == "none":
        return key_part
    return f"<{modifier}>+{key_part}"
