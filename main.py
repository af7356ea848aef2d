"""
main.py – FreePlay application entry point.
Bootstraps the PySide6 QApplication and launches the main window.
"""

import logging
import sys

from PySide6.QtWidgets import QApplication
from PySide6.QtCore import Qt

from controllers.catalog_controller import wait_for_detached_loaders
from main_window import MainWindow
from services.settings import load_settings


def main() -> None:
    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )

    QApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )

    app = QApplication(sys.argv)
    app.setApplicationName("FreePlay")
    app.setApplicationDisplayName("FreePlay – Free-to-Play Games")
    app.setOrganizationName("FreePlay")

    if not settings.api_key:
        logging.getLogger(__name__).warning(
            "FREEPLAY_API_KEY is not set; the games API will refuse requests."
        )

    window = MainWindow(settings)
    window.show()

    code = app.exec()
    wait_for_detached_loaders()
    sys.exit(code)


if __name__ == "__main__":
    main()
