"""
Main application window: a header row and a scrollable list of currency rates.
"""

import logging
from typing import List, Optional

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QMainWindow, QVBoxLayout, QWidget
from qfluentwidgets import ScrollArea, Theme, setTheme

from config.settings import AppSettings, get_settings_manager
from core.models import Currency
from core.store import RatesStore
from ui.widgets.currency_row import CurrencyRow, HeaderRow

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Window rendering the contents of a RatesStore."""

    WINDOW_TITLE = "Currency Rates"
    WINDOW_WIDTH = 240
    WINDOW_HEIGHT = 170
    LIST_WIDTH = 200

    def __init__(self, store: RatesStore, settings: Optional[AppSettings] = None):
        super().__init__()

        self._store = store
        self._settings = settings or get_settings_manager().settings
        self._rows: List[CurrencyRow] = []

        setTheme(Theme.DARK if self._settings.theme_mode == "dark" else Theme.LIGHT)

        self._setup_ui()
        self._store.currencies_changed.connect(self._on_currencies_changed)
        self._render(self._store.currencies())

    def _setup_ui(self):
        """Setup the window: fixed header plus scrollable rows."""
        if self._settings.always_on_top:
            self.setWindowFlags(self.windowFlags() | Qt.WindowType.WindowStaysOnTopHint)

        self.setWindowTitle(self.WINDOW_TITLE)
        self.setFixedSize(self.WINDOW_WIDTH, self.WINDOW_HEIGHT)

        central = QWidget()
        bg_color = "#1B2636" if self._settings.theme_mode == "dark" else "#FAFAFA"
        central.setStyleSheet(f"QWidget {{ background-color: {bg_color}; }}")
        self.setCentralWidget(central)

        layout = QVBoxLayout(central)
        layout.setContentsMargins(10, 8, 10, 8)
        layout.setSpacing(4)
        layout.setAlignment(Qt.AlignmentFlag.AlignTop | Qt.AlignmentFlag.AlignHCenter)

        self.header = HeaderRow()
        self.header.setFixedWidth(self.LIST_WIDTH)
        layout.addWidget(self.header)

        self.scroll_area = ScrollArea()
        self.scroll_area.setWidgetResizable(True)
        self.scroll_area.setFixedWidth(self.LIST_WIDTH)
        self.scroll_area.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.scroll_area.setStyleSheet("QScrollArea { border: none; background: transparent; }")

        self.rows_container = QWidget()
        self.rows_layout = QVBoxLayout(self.rows_container)
        self.rows_layout.setContentsMargins(0, 0, 0, 0)
        self.rows_layout.setSpacing(4)
        self.rows_layout.addStretch()

        self.scroll_area.setWidget(self.rows_container)
        layout.addWidget(self.scroll_area, 1)

    def _on_currencies_changed(self, currencies: list):
        self._render(currencies)

    def _render(self, currencies: List[Currency]):
        """Render rows for the given list, reusing rows while the pairs are the same."""
        same_pairs = len(currencies) == len(self._rows) and all(
            row.currency.pair_key == currency.pair_key
            for row, currency in zip(self._rows, currencies)
        )

        if not same_pairs:
            self._rebuild_rows(currencies)
            return

        for row, currency in zip(self._rows, currencies):
            row.set_currency(currency)

    def _rebuild_rows(self, currencies: List[Currency]):
        logger.debug(f"Building {len(currencies)} rate rows")

        # Clear existing rows, keep the stretch
        while self.rows_layout.count() > 1:
            item = self.rows_layout.takeAt(0)
            if item.widget():
                item.widget().deleteLater()

        self._rows = []
        for currency in currencies:
            row = CurrencyRow(currency)
            self.rows_layout.insertWidget(self.rows_layout.count() - 1, row)
            self._rows.append(row)

    def rows(self) -> List[CurrencyRow]:
        return list(self._rows)
