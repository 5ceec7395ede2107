"""
Currency Rates - PyQt6 Desktop Application
Main entry point.
"""

import logging
import os
import sys
from dataclasses import dataclass
from typing import Optional

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QApplication

from config.settings import AppSettings, get_settings_manager
from core.logger import resolve_log_level, setup_logging
from core.models import default_currencies
from core.poller import PollerThread
from core.rates_client import RatesClient
from core.store import RatesStore
from ui.main_window import MainWindow

logger = logging.getLogger(__name__)


@dataclass
class AppComponents:
    """Store, window and poller wired together for one app run."""

    store: RatesStore
    window: MainWindow
    poller: PollerThread

    def start(self):
        self.poller.start()
        self.window.show()

    def shutdown(self) -> bool:
        """Stop the poller and wait for it; True if it exited cleanly."""
        logger.info("Window closed, stopping poller...")
        return self.poller.stop()


def create_app_components(
    settings: AppSettings, client: Optional[RatesClient] = None
) -> AppComponents:
    """
    Build the store, window and poller for the default pairs.

    The poller only sees the pair identities. Its updates reach the store
    through a queued connection, so apply() runs on the thread owning the
    store (the UI thread).
    """
    currencies = default_currencies()
    store = RatesStore(currencies)
    window = MainWindow(store, settings)

    poller = PollerThread(currencies, interval=settings.update_period_seconds, client=client)
    poller.currencies_updated.connect(store.apply, Qt.ConnectionType.QueuedConnection)

    return AppComponents(store=store, window=window, poller=poller)


def main() -> int:
    """Main application entry point."""
    setup_logging(log_level=resolve_log_level(os.environ.get("LOG_LEVEL")))

    settings = get_settings_manager().settings

    # Enable high DPI scaling
    QApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )

    app = QApplication(sys.argv)
    app.setApplicationName("Currency Rates")

    try:
        components = create_app_components(settings)
    except Exception:
        logger.critical("Failed to create main window", exc_info=True)
        return 1

    components.start()
    exit_code = app.exec()

    components.shutdown()
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
