"""
Window Capture Module for Chunk Finder

Provides functionality to find and capture the game window as a PixelBuffer.
Uses the Windows API via ctypes for window management, psutil for process
lookup and mss as a screen-capture fallback.
"""

import ctypes
import logging
from ctypes import wintypes
from dataclasses import dataclass
from typing import List, Optional, Tuple

import mss
from mss.exception import ScreenShotError
import psutil

from .ocr import PixelBuffer

logger = logging.getLogger(__name__)


# ShowWindow constants
SW_RESTORE = 9

# PrintWindow constants
PW_RENDERFULLCONTENT = 2

# GDI constants
DIB_RGB_COLORS = 0
BI_RGB = 0


@dataclass
class WindowInfo:
    """Information about a detected window."""
    hwnd: int
    pid: int
    title: str
    rect: Tuple[int, int, int, int]  # (x, y, width, height)


class BITMAPINFOHEADER(ctypes.Structure):
    _fields_ = [
        ('biSize', wintypes.DWORD),
        ('biWidth', wintypes.LONG),
        ('biHeight', wintypes.LONG),
        ('biPlanes', wintypes.WORD),
        ('biBitCount', wintypes.WORD),
        ('biCompression', wintypes.DWORD),
        ('biSizeImage', wintypes.DWORD),
        ('biXPelsPerMeter', wintypes.LONG),
        ('biYPelsPerMeter', wintypes.LONG),
        ('biClrUsed', wintypes.DWORD),
        ('biClrImportant', wintypes.DWORD),
    ]


def get_process_ids(process_name: str) -> List[int]:
    """
    Get all process IDs for a given process name.

    Args:
        process_name: Name of the process to find (e.g. "javaw.exe")

    Returns:
        List of process IDs matching the name
    """
    pids = []
    process_name_lower = process_name.lower()
    for proc in psutil.process_iter(['pid', 'name']):
        try:
            if (proc.info['name'] or '').lower() == process_name_lower:
                pids.append(proc.info['pid'])
        except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
            continue
    return pids


def _get_window_thread_process_id(hwnd: int) -> int:
    """Get the process ID associated with a window handle."""
    pid = wintypes.DWORD()
    ctypes.windll.user32.GetWindowThreadProcessId(hwnd, ctypes.byref(pid))
    return pid.value


def _get_window_text(hwnd: int) -> str:
    """Get the title text of a window."""
    length = ctypes.windll.user32.GetWindowTextLengthW(hwnd) + 1
    buffer = ctypes.create_unicode_buffer(length)
    ctypes.windll.user32.GetWindowTextW(hwnd, buffer, length)
    return buffer.value


def _get_window_rect_raw(hwnd: int) -> Optional[Tuple[int, int, int, int]]:
    """
    Get the bounding rectangle of a window.

    Returns:
        Tuple of (left, top, right, bottom) or None if failed
    """
    rect = wintypes.RECT()
    if ctypes.windll.user32.GetWindowRect(hwnd, ctypes.byref(rect)):
        return (rect.left, rect.top, rect.right, rect.bottom)
    return None


def get_window_rect(hwnd: int) -> Optional[Tuple[int, int, int, int]]:
    """
    Get the current position and size of a window.

    Args:
        hwnd: Window handle

    Returns:
        Tuple of (x, y, width, height) or None if window not found
    """
    rect_raw = _get_window_rect_raw(hwnd)
    if rect_raw:
        left, top, right, bottom = rect_raw
        return (left, top, right - left, bottom - top)
    return None


def _window_info(hwnd: int) -> Optional[WindowInfo]:
    """Describe a window, or None if it has no usable size."""
    rect = get_window_rect(hwnd)
    if not rect or rect[2] <= 0 or rect[3] <= 0:
        return None
    return WindowInfo(
        hwnd=hwnd,
        pid=_get_window_thread_process_id(hwnd),
        title=_get_window_text(hwnd),
        rect=rect
    )


def find_window_by_class(class_name: str) -> Optional[int]:
    """Find a top-level window by class name (e.g. "LWJGL")."""
    hwnd = ctypes.windll.user32.FindWindowW(class_name, None)
    return hwnd or None


def find_window_by_title(title: str) -> Optional[int]:
    """Find a top-level window by exact title."""
    hwnd = ctypes.windll.user32.FindWindowW(None, title)
    return hwnd or None


def find_process_window(process_name: str) -> Optional[int]:
    """
    Find the first visible window belonging to a process.

    Args:
        process_name: Name of the process to find

    Returns:
        Window handle or None
    """
    pids = get_process_ids(process_name)
    if not pids:
        return None

    windows = []
    enum_callback = ctypes.WINFUNCTYPE(
        ctypes.c_bool,
        wintypes.HWND,
        wintypes.LPARAM
    )

    @enum_callback
    def callback(hwnd, lparam):
        if ctypes.windll.user32.IsWindowVisible(hwnd):
            windows.append(hwnd)
        return True

    ctypes.windll.user32.EnumWindows(callback, 0)

    for hwnd in windows:
        if _get_window_thread_process_id(hwnd) in pids:
            return hwnd
    return None


def find_game_window(
    window_class: str = "LWJGL",
    window_title: str = "Minecraft",
    process_name: str = ""
) -> Optional[WindowInfo]:
    """
    Find the game window.

    Tries the window class first, then the exact title, then (if given) any
    visible window owned by the named process.

    Returns:
        WindowInfo object if found, None otherwise
    """
    candidates = []
    if window_class:
        candidates.append(lambda: find_window_by_class(window_class))
    if window_title:
        candidates.append(lambda: find_window_by_title(window_title))
    if process_name:
        candidates.append(lambda: find_process_window(process_name))

    for find in candidates:
        hwnd = find()
        if hwnd and is_window_valid(hwnd):
            info = _window_info(hwnd)
            if info:
                return info
    return None


def is_window_valid(hwnd: int) -> bool:
    """
    Check if a window handle is still valid.

    Args:
        hwnd: Window handle to check

    Returns:
        True if window exists and is valid, False otherwise
    """
    return bool(ctypes.windll.user32.IsWindow(hwnd))


def is_window_minimized(hwnd: int) -> bool:
    """
    Check if a window is minimized.

    Args:
        hwnd: Window handle to check

    Returns:
        True if window is minimized, False otherwise
    """
    return bool(ctypes.windll.user32.IsIconic(hwnd))


def restore_window(hwnd: int) -> None:
    """
    Ask a minimized window to restore so it can be rendered.

    The restore may still be in progress when this returns.
    """
    ctypes.windll.user32.ShowWindow(hwnd, SW_RESTORE)


def _capture_with_printwindow(hwnd: int, width: int, height: int) -> Optional[PixelBuffer]:
    """
    Capture window using PrintWindow API (excludes overlays).

    Args:
        hwnd: Window handle
        width: Window width
        height: Window height

    Returns:
        PixelBuffer or None if failed
    """
    gdi32 = ctypes.windll.gdi32
    user32 = ctypes.windll.user32

    hwnd_dc = user32.GetWindowDC(hwnd)
    if not hwnd_dc:
        return None

    try:
        mem_dc = gdi32.CreateCompatibleDC(hwnd_dc)
        if not mem_dc:
            return None

        try:
            bitmap = gdi32.CreateCompatibleBitmap(hwnd_dc, width, height)
            if not bitmap:
                return None

            try:
                old_bitmap = gdi32.SelectObject(mem_dc, bitmap)

                # PW_RENDERFULLCONTENT works better for DWM-composed windows
                result = user32.PrintWindow(hwnd, mem_dc, PW_RENDERFULLCONTENT)
                if not result:
                    result = user32.PrintWindow(hwnd, mem_dc, 0)

                if not result:
                    gdi32.SelectObject(mem_dc, old_bitmap)
                    return None

                bmi = BITMAPINFOHEADER()
                bmi.biSize = ctypes.sizeof(BITMAPINFOHEADER)
                bmi.biWidth = width
                bmi.biHeight = -height  # Negative for top-down DIB
                bmi.biPlanes = 1
                bmi.biBitCount = 32
                bmi.biCompression = BI_RGB
                bmi.biSizeImage = width * height * 4

                buffer = ctypes.create_string_buffer(width * height * 4)

                lines = gdi32.GetDIBits(
                    mem_dc, bitmap, 0, height,
                    buffer, ctypes.byref(bmi), DIB_RGB_COLORS
                )

                gdi32.SelectObject(mem_dc, old_bitmap)

                if lines == 0:
                    return None

                return PixelBuffer.from_bgra_bytes(buffer.raw, width, height)

            finally:
                gdi32.DeleteObject(bitmap)
        finally:
            gdi32.DeleteDC(mem_dc)
    finally:
        user32.ReleaseDC(hwnd, hwnd_dc)


def _capture_with_mss(x: int, y: int, width: int, height: int) -> Optional[PixelBuffer]:
    """
    Capture screen region using mss (fallback method).

    Note: This captures screen pixels including any overlays.

    Returns:
        PixelBuffer or None if failed
    """
    try:
        with mss.mss() as sct:
            monitor = {
                "left": x,
                "top": y,
                "width": width,
                "height": height
            }
            screenshot = sct.grab(monitor)
            return PixelBuffer.from_bgra_bytes(
                screenshot.bgra, screenshot.width, screenshot.height
            )
    except ScreenShotError as e:
        logger.warning(f"Screen grab failed: {e}")
        return None


def capture_window(hwnd: int) -> Optional[PixelBuffer]:
    """
    Capture the contents of a window as a PixelBuffer.

    Restores the window first if it is minimized. Uses PrintWindow to
    capture the window content directly, falling back to an mss screen
    grab if PrintWindow fails.

    Args:
        hwnd: Window handle to capture

    Returns:
        PixelBuffer of window contents, or None if no buffer is available
    """
    if not is_window_valid(hwnd):
        return None

    if is_window_minimized(hwnd):
        logger.debug("Restoring minimized window before capture")
        restore_window(hwnd)

    rect = get_window_rect(hwnd)
    if not rect:
        return None

    x, y, width, height = rect
    if width <= 0 or height <= 0:
        return None

    buffer = _capture_with_printwindow(hwnd, width, height)
    if buffer is not None:
        return buffer

    return _capture_with_mss(x, y, width, height)


class WindowCapture:
    """
    Tracks the game window and captures buffers from it.

    Example:
        >>> capture = WindowCapture()
        >>> if capture.find_window():
        ...     buffer = capture.grab_buffer()
    """

    def __init__(self, window_class: str = "LWJGL", window_title: str = "Minecraft",
                 process_name: str = ""):
        """
        Initialize WindowCapture.

        Args:
            window_class: Window class to look for
            window_title: Exact window title to look for
            process_name: Process whose window is used as a last resort
        """
        self.window_class = window_class
        self.window_title = window_title
        self.process_name = process_name
        self.window_info: Optional[WindowInfo] = None

    def find_window(self) -> bool:
        """
        Attempt to find and lock onto the game window.

        Returns:
            True if window was found, False otherwise
        """
        self.window_info = find_game_window(
            self.window_class, self.window_title, self.process_name
        )
        return self.window_info is not None

    def is_active(self) -> bool:
        """
        Check if the tracked window still exists.

        Returns:
            True if window handle is valid
        """
        if not self.window_info:
            return False
        return is_window_valid(self.window_info.hwnd)

    def grab_buffer(self) -> Optional[PixelBuffer]:
        """
        Capture the current window contents.

        Returns:
            PixelBuffer of the window, or None if capture failed
        """
        if not self.window_info:
            return None
        buffer = capture_window(self.window_info.hwnd)
        if buffer is not None:
            self.window_info.rect = get_window_rect(self.window_info.hwnd) or self.window_info.rect
        return buffer

    def release(self):
        """Release the tracked window."""
        self.window_info = None

    def get_status_string(self) -> str:
        """
        Get a human-readable status string for UI display.

        Returns:
            Status string like "Minecraft (1920x1080)" or "Not detected"
        """
        if not self.window_info:
            return "Not detected"

        if not self.is_active():
            return "Window lost"

        _, _, width, height = self.window_info.rect
        return f"{self.window_info.title or self.window_title} ({width}x{height})"
