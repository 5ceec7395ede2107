import pytest

from core.models import Currency
from core.store import RatesStore

EUR_USD = Currency("EUR", "USD")
BTC_USD = Currency("BTC", "USD")


@pytest.fixture
def store(qapp):
    return RatesStore([EUR_USD, BTC_USD])


def test_initial_state(store):
    assert store.currencies() == (EUR_USD, BTC_USD)
    assert store.last_updated() is None


def test_apply_replaces_list_and_notifies(store):
    received = []
    store.currencies_changed.connect(received.append)
    new_list = [EUR_USD.with_quote(5.1, 5.2), BTC_USD]

    assert store.apply(new_list) is True

    assert store.currencies() == tuple(new_list)
    assert received == [new_list]
    assert store.last_updated() is not None


def test_apply_same_values_does_not_notify(store):
    received = []
    store.currencies_changed.connect(received.append)

    assert store.apply([Currency("EUR", "USD"), Currency("BTC", "USD")]) is False

    assert received == []
    assert store.last_updated() is None


def test_apply_does_not_share_callers_list(store):
    new_list = [EUR_USD.with_quote(1.0, 1.0)]
    store.apply(new_list)

    new_list.append(BTC_USD)

    assert store.currencies() == (EUR_USD.with_quote(1.0, 1.0),)
