"""
Application state store using Qt signals for reactive updates.
"""

import logging
import time
from typing import Iterable, Optional

from PyQt6.QtCore import QObject, pyqtSignal

from core.models import Currency

logger = logging.getLogger(__name__)


class RatesStore(QObject):
    """
    Holds the list of currencies shown by the view.

    The list is only ever replaced wholesale through apply(); readers always
    see a complete tuple. apply() is meant to run on the UI thread, which is
    where queued signals from the poller are delivered.
    """

    # Emitted with the new list whenever it differs from the previous one
    currencies_changed = pyqtSignal(list)

    def __init__(self, currencies: Iterable[Currency] = (), parent: Optional[QObject] = None):
        super().__init__(parent)
        self._currencies: tuple[Currency, ...] = tuple(currencies)
        self._last_updated: Optional[float] = None

    def currencies(self) -> tuple[Currency, ...]:
        return self._currencies

    def last_updated(self) -> Optional[float]:
        """Time of the last applied change, or None before the first."""
        return self._last_updated

    def apply(self, currencies: Iterable[Currency]) -> bool:
        """
        Replace the stored list.

        Returns:
            True if the list changed and observers were notified.
        """
        new_currencies = tuple(currencies)
        if new_currencies == self._currencies:
            logger.debug("Rates unchanged, skipping re-render")
            return False

        self._currencies = new_currencies
        self._last_updated = time.time()
        self.currencies_changed.emit(list(new_currencies))
        return True
