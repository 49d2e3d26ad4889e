"""
Coordinate Worker Module for Chunk Finder

Provides a background QThread worker that runs the capture/decode/anchor
cycle whenever a read is requested (hotkey) or the auto-refresh interval
elapses. Communicates with the UI via Qt signals.
"""

import logging
import threading
import time
from datetime import datetime
from typing import Optional

from PyQt5.QtCore import QThread, pyqtSignal

from .grid import ChunkReading
from .ocr import (
    DecodeResult, PixelBuffer, create_decoder, debug_image_paths, save_clean_image, save_debug_image
)
from .window_capture import WindowCapture


# Configure module logger
logger = logging.getLogger(__name__)


class CoordinateWorker(QThread):
    """
    Background worker thread for the read pipeline.

    Each cycle:
    1. Locates the game window (if not already tracked)
    2. Captures a buffer from it
    3. Decodes the coordinate label
    4. Computes the nearest dig spot and emits the reading

    Signals:
        status_changed(str): Worker status changes
        window_changed(str): Window detection status changes
        reading_ready(object): ChunkReading, or None when nothing was read
        error_occurred(str): A cycle raised an error

    Example:
        worker = CoordinateWorker()
        worker.reading_ready.connect(overlay.show_reading)
        worker.start()
        worker.request_read()
        # ...
        worker.request_stop()
        worker.wait()
    """

    status_changed = pyqtSignal(str)
    window_changed = pyqtSignal(str)
    reading_ready = pyqtSignal(object)
    error_occurred = pyqtSignal(str)

    # How often the loop wakes to check for stop / auto-refresh
    IDLE_WAIT_S = 0.1

    def __init__(
        self,
        window_class: str = "LWJGL",
        window_title: str = "Minecraft",
        process_name: str = "",
        auto_refresh_ms: int = 0,
        decoder_type: str = "glyph_column",
        debug_mode: bool = False
    ):
        """
        Initialize the worker.

        Args:
            window_class: Game window class
            window_title: Game window title
            process_name: Game process name (fallback lookup)
            auto_refresh_ms: Read interval; 0 reads only on request
            decoder_type: Decoder type to use (default: "glyph_column")
            debug_mode: Save an annotated debug image for every read
        """
        super().__init__()
        self.window_class = window_class
        self.window_title = window_title
        self.process_name = process_name
        self._auto_refresh_ms = auto_refresh_ms
        self._debug_mode = debug_mode

        self._running = False
        self._read_requested = threading.Event()
        self._capture: Optional[WindowCapture] = None
        self._decoder = create_decoder(decoder_type)
        self._last_cycle = 0.0

        # Debug image support
        self._last_buffer: Optional[PixelBuffer] = None
        self._last_result: Optional[DecodeResult] = None

    def run(self):
        """
        Main worker loop. Called when thread starts.

        Sleeps until a read is requested or the auto-refresh interval
        elapses, then runs one cycle.
        """
        self._running = True
        self._capture = WindowCapture(self.window_class, self.window_title, self.process_name)

        logger.info("Coordinate worker started")
        self.status_changed.emit("Running")

        while self._running:
            triggered = self._read_requested.wait(self.IDLE_WAIT_S)
            if not self._running:
                break

            if triggered:
                self._read_requested.clear()
            elif not self._auto_refresh_due():
                continue

            self._last_cycle = time.perf_counter()
            try:
                self._process_cycle()
            except Exception as e:
                logger.exception("Error in worker cycle")
                self.error_occurred.emit(str(e))

        self._capture.release()
        self._capture = None
        logger.info("Coordinate worker stopped")

    def _auto_refresh_due(self) -> bool:
        if self._auto_refresh_ms <= 0:
            return False
        elapsed_ms = (time.perf_counter() - self._last_cycle) * 1000
        return elapsed_ms >= self._auto_refresh_ms

    def _process_cycle(self):
        """Single capture/decode/anchor pass."""
        if not self._capture.is_active():
            if self._capture.find_window():
                logger.info(f"Found window: {self._capture.window_info.title}")
                self.window_changed.emit(self._capture.get_status_string())
            else:
                self.window_changed.emit("Not detected")
                self.reading_ready.emit(None)
                return

        buffer = self._capture.grab_buffer()
        if buffer is None:
            logger.info("No buffer available from window")
            self.window_changed.emit("Capture failed")
            self.reading_ready.emit(None)
            return

        start = time.perf_counter()
        result = self._decoder.decode(buffer)
        decode_ms = (time.perf_counter() - start) * 1000

        self._last_buffer = buffer
        self._last_result = result
        self.window_changed.emit(self._capture.get_status_string())

        if self._debug_mode:
            self.save_debug_image()

        if result.found:
            reading = ChunkReading.from_position(result.coordinate)
            logger.info(
                f"Read {reading.position} -> dig spot {reading.anchor}, "
                f"{reading.distance:.2f} blocks ({decode_ms:.1f}ms)"
            )
            self.reading_ready.emit(reading)
        else:
            logger.info(f"Coordinates not found: {result.reason} ({decode_ms:.1f}ms)")
            self.reading_ready.emit(None)

    def request_read(self):
        """
        Ask for a read on the next loop iteration.

        Safe to call from any thread (the hotkey listener calls it directly).
        """
        self._read_requested.set()

    def request_stop(self):
        """
        Request the worker to stop gracefully.

        The worker will complete its current cycle before stopping.
        Use wait() after calling this to block until stopped.
        """
        logger.info("Stop requested")
        self._running = False
        self._read_requested.set()

    def set_auto_refresh(self, interval_ms: int):
        """Change the auto-refresh interval (0 disables it)."""
        self._auto_refresh_ms = max(0, int(interval_ms))

    def set_debug_mode(self, enabled: bool):
        self._debug_mode = enabled

    def is_running(self) -> bool:
        """
        Check if the worker is currently running.

        Returns:
            True if worker loop is active, False otherwise
        """
        return self._running

    def save_debug_image(self) -> Optional[str]:
        """
        Save the last captured buffer twice: a clean copy that can be
        decoded again offline, and one with decoder annotations.

        Returns:
            Path to the annotated file, or None if no buffer available
        """
        if self._last_buffer is None:
            logger.warning("No buffer available for debug image")
            return None

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")[:-3]
        filepath, clean_filepath = debug_image_paths(timestamp)

        try:
            save_clean_image(self._last_buffer, str(clean_filepath))
            save_debug_image(self._last_buffer, self._last_result, str(filepath))
        except OSError as e:
            logger.warning(f"Failed to save debug image: {e}")
            return None

        logger.info(f"Debug images saved: {filepath} (clean: {clean_filepath})")
        return str(filepath)
