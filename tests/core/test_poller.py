import threading
import time
from unittest.mock import MagicMock, patch

import pytest
import requests
from PyQt6.QtCore import Qt

from config.settings import AppSettings
from core.models import Currency
from core.poller import PollerThread, poll_once, run_poller
from core.rates_client import RatesClient, RatesRequestError, RatesResponseError
from core.store import RatesStore

EUR_USD = Currency("EUR", "USD")


def quote_response(bid, ask):
    response = MagicMock()
    response.status_code = 200
    response.ok = True
    response.json.return_value = {"EURUSD": {"bid": bid, "ask": ask}}
    return response


class TestPollOnce:
    def test_success_publishes_new_list(self):
        client = MagicMock()
        client.fetch.return_value = [EUR_USD.with_quote(1.0, 2.0)]
        publish = MagicMock()

        result = poll_once([EUR_USD], client, publish)

        publish.assert_called_once_with([EUR_USD.with_quote(1.0, 2.0)])
        assert result == [EUR_USD.with_quote(1.0, 2.0)]

    @pytest.mark.parametrize(
        "error",
        [
            RatesRequestError("Unexpected error: HTTP 500", status_code=500),
            RatesResponseError("Invalid JSON"),
            RuntimeError("unexpected"),
        ],
    )
    def test_failure_publishes_nothing(self, error):
        client = MagicMock()
        client.fetch.side_effect = error
        publish = MagicMock()
        currencies = [EUR_USD.with_quote(1.0, 2.0)]

        result = poll_once(currencies, client, publish)

        publish.assert_not_called()
        assert result is currencies


class TestRunPoller:
    def test_stops_when_event_set(self):
        stop_event = threading.Event()
        client = MagicMock()
        calls = []

        def fetch(currencies):
            calls.append(list(currencies))
            if len(calls) == 3:
                stop_event.set()
            return [c.with_quote(len(calls), len(calls)) for c in currencies]

        client.fetch.side_effect = fetch
        published = []

        run_poller([EUR_USD], 0, published.append, client=client, stop_event=stop_event)

        assert len(calls) == 3
        assert [lst[0].bid for lst in published] == [1, 2, 3]

    def test_requests_use_pair_identities_only(self):
        stop_event = threading.Event()
        client = MagicMock()

        def fetch(currencies):
            stop_event.set()
            return currencies

        client.fetch.side_effect = fetch

        run_poller(
            [EUR_USD.with_quote(9.0, 9.0)], 0, MagicMock(), client=client, stop_event=stop_event
        )

        client.fetch.assert_called_once_with([EUR_USD])

    def test_failed_cycle_does_not_stop_loop(self):
        stop_event = threading.Event()
        client = MagicMock()
        client.fetch.side_effect = [
            RatesRequestError("Request failed"),
            [EUR_USD.with_quote(1.0, 2.0)],
        ]
        publish = MagicMock(side_effect=lambda _: stop_event.set())

        run_poller([EUR_USD], 0, publish, client=client, stop_event=stop_event)

        assert client.fetch.call_count == 2
        publish.assert_called_once_with([EUR_USD.with_quote(1.0, 2.0)])


def test_end_to_end_cycles_update_store(qapp):
    session = MagicMock(spec=requests.Session)
    session.get.side_effect = [
        quote_response("5.10", "5.20"),
        requests.ConnectionError("network down"),
        quote_response("5.30", "5.40"),
    ]
    client = RatesClient(settings=AppSettings(), session=session)
    store = RatesStore([EUR_USD])
    currencies = list(store.currencies())

    currencies = poll_once(currencies, client, store.apply)
    assert store.currencies() == (EUR_USD.with_quote(5.10, 5.20),)

    currencies = poll_once(currencies, client, store.apply)
    assert store.currencies() == (EUR_USD.with_quote(5.10, 5.20),)

    poll_once(currencies, client, store.apply)
    assert store.currencies() == (EUR_USD.with_quote(5.30, 5.40),)


def test_non_success_status_leaves_store_unchanged(qapp):
    response = MagicMock()
    response.status_code = 503
    response.ok = False
    session = MagicMock(spec=requests.Session)
    session.get.return_value = response
    client = RatesClient(settings=AppSettings(), session=session)
    before = (EUR_USD.with_quote(1.0, 2.0),)
    store = RatesStore(before)

    poll_once(list(before), client, store.apply)

    assert store.currencies() == before


def test_poller_thread_runs_cycle_and_stops(qapp):
    fetched = threading.Event()
    client = MagicMock()

    def fetch(currencies):
        fetched.set()
        return [c.with_quote(1.0, 2.0) for c in currencies]

    client.fetch.side_effect = fetch
    thread = PollerThread([EUR_USD.with_quote(3.0, 4.0)], interval=60, client=client)

    thread.start()
    assert fetched.wait(5)
    thread.stop()

    assert thread.isFinished()
    client.fetch.assert_called_once_with([EUR_USD])
    client.close.assert_called_once()


def test_queued_updates_reach_store_on_ui_thread(qapp):
    client = MagicMock()
    client.fetch.return_value = [EUR_USD.with_quote(1.5, 2.5)]
    store = RatesStore([EUR_USD])
    applied_on = []
    store.currencies_changed.connect(
        lambda _: applied_on.append(threading.current_thread()), Qt.ConnectionType.DirectConnection
    )
    thread = PollerThread([EUR_USD], interval=60, client=client)
    thread.currencies_updated.connect(store.apply, Qt.ConnectionType.QueuedConnection)

    thread.start()
    deadline = time.monotonic() + 5
    while store.currencies() == (EUR_USD,) and time.monotonic() < deadline:
        qapp.processEvents()
        time.sleep(0.01)
    thread.stop()

    assert store.currencies() == (EUR_USD.with_quote(1.5, 2.5),)
    assert applied_on == [threading.main_thread()]


def test_stop_terminates_thread_that_does_not_finish(qapp):
    thread = PollerThread([EUR_USD], interval=60, client=MagicMock())

    with (
        patch.object(thread, "isRunning", return_value=True),
        patch.object(thread, "wait", side_effect=[False, True]) as wait,
        patch.object(thread, "terminate") as terminate,
    ):
        assert thread.stop(timeout_ms=100) is False

    terminate.assert_called_once_with()
    assert wait.call_count == 2


def test_stop_on_idle_thread_returns_true(qapp):
    thread = PollerThread([EUR_USD], interval=60, client=MagicMock())

    assert thread.stop() is True
