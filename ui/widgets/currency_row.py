"""
Row widgets for the rates list: the column header and one row per currency pair.
"""

from typing import Optional
from PyQt6.QtWidgets import QHBoxLayout, QWidget
from qfluentwidgets import BodyLabel, StrongBodyLabel, getFont

from core.models import Currency
from core.utils import format_rate

GUI_TEXT_SIZE = 16
PAIR_COLUMN_WIDTH = 80
RATE_COLUMN_WIDTH = 60


def _row_layout(widget: QWidget) -> QHBoxLayout:
    layout = QHBoxLayout(widget)
    layout.setContentsMargins(0, 0, 0, 0)
    layout.setSpacing(0)
    return layout


class HeaderRow(QWidget):
    """Fixed column labels above the list."""

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        layout = _row_layout(self)

        for text, width in (
            ("", PAIR_COLUMN_WIDTH),
            ("ASK", RATE_COLUMN_WIDTH),
            ("BID", RATE_COLUMN_WIDTH),
        ):
            label = StrongBodyLabel(text, self)
            label.setFixedWidth(width)
            layout.addWidget(label)

        layout.addStretch()


class CurrencyRow(QWidget):
    """Displays one pair as "BASE/TARGET", ask, bid."""

    def __init__(self, currency: Currency, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.currency = currency
        self._setup_ui()
        self.set_currency(currency)

    def _setup_ui(self):
        layout = _row_layout(self)

        self.pair_label = self._make_label(PAIR_COLUMN_WIDTH)
        self.ask_label = self._make_label(RATE_COLUMN_WIDTH)
        self.bid_label = self._make_label(RATE_COLUMN_WIDTH)

        layout.addWidget(self.pair_label)
        layout.addWidget(self.ask_label)
        layout.addWidget(self.bid_label)
        layout.addStretch()

    def _make_label(self, width: int) -> BodyLabel:
        label = BodyLabel(self)
        label.setFont(getFont(GUI_TEXT_SIZE))
        label.setFixedWidth(width)
        return label

    def set_currency(self, currency: Currency):
        """Render the given record."""
        self.currency = currency
        self.pair_label.setText(currency.label)
        self.ask_label.setText(format_rate(currency.ask))
        self.bid_label.setText(format_rate(currency.bid))
