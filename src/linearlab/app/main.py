"""
Run with: python -m linearlab [shared-link-or-token]
"""
from __future__ import annotations

import logging
import sys

import pyqtgraph as pg

from linearlab.app.application import create_app
from linearlab.app.state import Store
from linearlab.app.ui.main_window import MainWindow
from linearlab.config import LOG_FILE, LOG_LEVEL
from linearlab.logging_config import setup_logging

pg.setConfigOption("background", "w")
pg.setConfigOption("foreground", "k")
pg.setConfigOptions(antialias=True)

logger = logging.getLogger(__name__)


def main() -> int:
    """Main entry point for the application."""
    setup_logging(level=LOG_LEVEL, log_file=LOG_FILE)

    app = create_app()
    store = Store()

    # A shared link passed on the command line restores that scene
    args = app.arguments()[1:]
    if args and not store.restore(args[0]):
        logger.warning("Starting with the default scene.")

    win = MainWindow(store)
    win.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
