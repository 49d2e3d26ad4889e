"""
Chunk Finder - Entry Point

Shows the readout overlay, listens for the read hotkey and runs the
coordinate worker thread.

Example:
    python main.py
    python main.py --auto-refresh 500           # Also read twice a second
    python main.py --process javaw.exe --debug  # Find window by process, save debug images
"""

import sys
import logging
import argparse
from pathlib import Path
from typing import Optional

from PyQt5.QtWidgets import QApplication, QMessageBox

from chunk_finder.coordinate_worker import CoordinateWorker
from chunk_finder.hotkey import HotkeyManager
from chunk_finder.keys import validate_binding, DEFAULT_KEY, DEFAULT_MODIFIER
from chunk_finder.overlay_display import OverlayWindow
from chunk_finder.settings import load_settings, save_settings, SETTINGS_FILE
from chunk_finder.settings_dialog import SettingsDialog


logger = logging.getLogger(__name__)


def configure_logging(debug: bool):
    """Log to both console and file."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler("chunk_finder.log", mode='w', encoding='utf-8')
        ]
    )


class Application:
    """
    Main application controller.

    Owns the overlay, settings dialog, hotkey listener and worker thread,
    and connects their signals.
    """

    def __init__(self, settings_path: Path = SETTINGS_FILE, debug_mode: bool = False,
                 window_title: Optional[str] = None, process_name: Optional[str] = None,
                 auto_refresh_ms: Optional[int] = None):
        """
        Initialize the application.

        Args:
            settings_path: Settings file to load and save
            debug_mode: Enable debug images via CLI (overrides saved setting)
            window_title: Window title override
            process_name: Process name override
            auto_refresh_ms: Auto-refresh override
        """
        self.settings_path = settings_path
        self.settings = load_settings(settings_path)

        # CLI flags override saved settings for this run only
        self.debug_mode = debug_mode or bool(self.settings.get("debug_enabled", False))
        self.window_title = window_title if window_title is not None else self.settings["window_title"]
        self.process_name = process_name if process_name is not None else self.settings["process_name"]
        self.auto_refresh_ms = (auto_refresh_ms if auto_refresh_ms is not None
                                else int(self.settings.get("auto_refresh_ms", 0)))

        self.modifier, self.key = self._load_binding()

        self.overlay: Optional[OverlayWindow] = None
        self.dialog: Optional[SettingsDialog] = None
        self.worker: Optional[CoordinateWorker] = None
        self.hotkey: Optional[HotkeyManager] = None

    def _load_binding(self):
        """Saved hotkey binding, or the default if it is invalid."""
        try:
            return validate_binding(str(self.settings["hotkey_modifier"]),
                                    str(self.settings["hotkey_key"]))
        except ValueError as e:
            logger.warning(f"Invalid saved hotkey ({e}), using default")
            return DEFAULT_MODIFIER, DEFAULT_KEY

    def setup(self):
        """Create the overlay, worker and hotkey listener."""
        self.worker = CoordinateWorker(
            window_class=self.settings["window_class"],
            window_title=self.window_title,
            process_name=self.process_name,
            auto_refresh_ms=self.auto_refresh_ms,
            debug_mode=self.debug_mode
        )
        self.worker.error_occurred.connect(self._on_error)
        self.worker.window_changed.connect(lambda info: logger.debug(f"Window: {info}"))

        self.hotkey = HotkeyManager(self.modifier, self.key, self.worker.request_read)

        self.overlay = OverlayWindow(hotkey_label=self.hotkey.label)
        self.overlay.place(int(self.settings["overlay_x"]), int(self.settings["overlay_y"]))
        self.overlay.position_changed.connect(self._on_overlay_moved)
        self.overlay.settings_requested.connect(self._on_settings_requested)
        self.overlay.closed.connect(QApplication.quit)
        self.worker.reading_ready.connect(self.overlay.show_reading)

        if self.debug_mode:
            logger.info("Debug mode enabled - debug images will be saved for every read")

        logger.info(f"Application initialized, looking for window: {self.window_title}")

    def run(self):
        """Show the overlay and start the background threads."""
        if self.settings.get("overlay_visible", True):
            self.overlay.show()
        else:
            logger.info("Overlay hidden by settings until the first successful read")

        self.worker.start()
        if not self.hotkey.start():
            logger.warning("Hotkey unavailable - use --auto-refresh or rebind in settings")

    def shutdown(self):
        """Stop threads and persist settings."""
        logger.info("Shutting down")
        if self.hotkey:
            self.hotkey.stop()

        if self.worker and self.worker.isRunning():
            self.worker.request_stop()
            self.worker.wait(2000)  # 2 second timeout
            if self.worker.isRunning():
                logger.warning("Worker did not stop gracefully, terminating")
                self.worker.terminate()
                self.worker.wait()

        if self.overlay:
            pos = self.overlay.pos()
            self.settings["overlay_x"] = pos.x()
            self.settings["overlay_y"] = pos.y()
        save_settings(self.settings, self.settings_path)

    def _on_error(self, error_msg: str):
        """Handle worker error."""
        logger.error(f"Worker error: {error_msg}")

    def _on_overlay_moved(self, x: int, y: int):
        """Persist the overlay position after a drag."""
        self.settings["overlay_x"] = x
        self.settings["overlay_y"] = y
        save_settings(self.settings, self.settings_path)

    def _on_settings_requested(self):
        """Open a fresh settings dialog."""
        if self.dialog is not None:
            self.dialog.close()

        self.dialog = SettingsDialog(self.modifier, self.key)
        self.dialog.binding_changed.connect(self._on_binding_changed)
        self.dialog.save_requested.connect(self._on_save_requested)
        self.dialog.quit_requested.connect(QApplication.quit)
        self.dialog.show()
        self.dialog.raise_()
        self.dialog.activateWindow()

    def _on_binding_changed(self, modifier: str, key: str):
        """Apply a new hotkey immediately, or put the old one back if invalid."""
        try:
            modifier, key = validate_binding(modifier, key)
        except ValueError as e:
            logger.warning(f"Rejected hotkey: {e}")
            QMessageBox.warning(self.dialog, "Hotkey", f"{e}. Keeping the current hotkey.")
            self.dialog.set_binding(self.modifier, self.key)
            return

        logger.info(f"Hotkey changed to: {modifier}+{key}")
        self.modifier, self.key = modifier, key
        self.settings["hotkey_modifier"] = modifier
        self.settings["hotkey_key"] = key
        self.hotkey.set_binding(modifier, key)
        self.overlay.set_hotkey_label(self.hotkey.label)

    def _on_save_requested(self):
        """Write settings and confirm."""
        pos = self.overlay.pos()
        self.settings["overlay_x"] = pos.x()
        self.settings["overlay_y"] = pos.y()
        if save_settings(self.settings, self.settings_path):
            QMessageBox.information(self.dialog, "Settings", "Settings saved successfully!")
        else:
            QMessageBox.warning(self.dialog, "Settings", "Failed to save settings.")


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Chunk Finder - reads your coordinates and shows the nearest 4x4 dig spot"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=SETTINGS_FILE,
        help="Settings file (default: config.json)"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug logging and save an annotated image for every read"
    )
    parser.add_argument(
        "--window-title", "-w",
        default=None,
        help="Game window title (default: from settings, 'Minecraft')"
    )
    parser.add_argument(
        "--process", "-p",
        default=None,
        help="Game process name used when the window is not found by class or title"
    )
    parser.add_argument(
        "--auto-refresh", "-r",
        type=int,
        default=None,
        metavar="MS",
        help="Also read every MS milliseconds (0 = hotkey only)"
    )
    return parser.parse_args()


def main():
    """Initialize and run Chunk Finder."""
    args = parse_args()
    configure_logging(args.debug)

    app = QApplication(sys.argv)
    app.setQuitOnLastWindowClosed(False)

    application = Application(
        settings_path=args.config,
        debug_mode=args.debug,
        window_title=args.window_title,
        process_name=args.process,
        auto_refresh_ms=args.auto_refresh
    )
    application.setup()
    application.run()
    app.aboutToQuit.connect(application.shutdown)

    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
