"""Application entry point and setup for the Vegam typing practice tool."""

import logging
import sys

from PySide6.QtGui import QGuiApplication
from PySide6.QtWidgets import QApplication

from vegam.core.passages import PassageRepository
from vegam.core.settings import load_settings
from vegam.ui.main_window import MainWindow


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def run() -> None:
    """Load settings and the passage catalog, then show the main window."""
    configure_logging()
    app = QApplication(sys.argv)
    app.setApplicationName("Vegam")
    app.setApplicationDisplayName("Vegam")

    settings = load_settings()
    passages = PassageRepository()
    logging.info("Loaded %d passages", len(passages))

    window = MainWindow(passages=passages, settings=settings)
    screen = QGuiApplication.primaryScreen()
    if screen is not None:
        geometry = screen.availableGeometry()
        window.resize(min(1200, geometry.width()), min(820, geometry.height()))
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
