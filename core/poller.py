import logging
import threading
from typing import Callable, Iterable, Optional

from PyQt6.QtCore import QObject, QThread, pyqtSignal

from core.models import Currency
from core.rates_client import RatesClient, RatesError

logger = logging.getLogger(__name__)

UPDATE_PERIOD_SECONDS = 60


def poll_once(
    currencies: list[Currency],
    client: RatesClient,
    publish: Callable[[list[Currency]], None],
) -> list[Currency]:
    """
    Run a single fetch cycle.

    Publishes the updated list on success. Any failure is logged and the
    previous list is returned unchanged, so the caller's working copy only
    advances on a published cycle.
    """
    try:
        updated = client.fetch(currencies)
    except RatesError as e:
        logger.error(f"Polling failed: {e}")
        return currencies
    except Exception as e:
        logger.error(f"Polling error details: {e}", exc_info=True)
        return currencies

    logger.debug(f"Poll success: {', '.join(f'{c.label} {c.bid}/{c.ask}' for c in updated)}")
    publish(updated)
    return updated


def run_poller(
    pairs: Iterable[Currency],
    interval: float,
    publish: Callable[[list[Currency]], None],
    client: Optional[RatesClient] = None,
    stop_event: Optional[threading.Event] = None,
) -> None:
    """
    Poll the rates API forever, or until stop_event is set.

    Args:
        pairs: Tracked pairs; only base/target are used to build requests.
        interval: Seconds to wait between cycles.
        publish: Receives each newly built list.
        client: Rates client, created from global settings when omitted.
        stop_event: Interrupts the wait between cycles when set.
    """
    if client is None:
        client = RatesClient()
    if stop_event is None:
        stop_event = threading.Event()

    currencies = [c.identity() for c in pairs]
    logger.info(
        f"Starting rates polling for {', '.join(c.label for c in currencies)} every {interval}s"
    )

    while not stop_event.is_set():
        currencies = poll_once(currencies, client, publish)
        if stop_event.wait(interval):
            break

    logger.info("Rates polling stopped")


class PollerThread(QThread):
    """
    Worker thread running the poll loop.
    Updated lists are emitted on currencies_updated; connected slots on the
    UI thread receive them through Qt's queued connection.
    """

    currencies_updated = pyqtSignal(list)

    def __init__(
        self,
        pairs: Iterable[Currency],
        interval: float = UPDATE_PERIOD_SECONDS,
        client: Optional[RatesClient] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._pairs = [c.identity() for c in pairs]
        self._interval = interval
        self._client = client
        self._stop_event = threading.Event()

    def run(self):
        client = self._client or RatesClient()
        try:
            run_poller(
                self._pairs,
                self._interval,
                self.currencies_updated.emit,
                client=client,
                stop_event=self._stop_event,
            )
        finally:
            client.close()

    def stop(self, timeout_ms: int = 15000) -> bool:
        """
        Stop the loop and wait for the thread to finish.

        A thread still blocked after timeout_ms (e.g. in a hung request) is
        terminated so it never outlives its QThread object.

        Returns:
            True if the loop exited on its own.
        """
        self._stop_event.set()
        if not self.isRunning() or self.wait(timeout_ms):
            return True

        logger.warning(f"Poller thread did not finish within {timeout_ms} ms, terminating")
        self.terminate()
        self.wait()
        return False
