"""
REST client for the AwesomeAPI quote endpoint.
"""

import logging
import math
from typing import Any, Iterable

import requests

from config.settings import AppSettings, get_settings_manager
from core.models import Currency

logger = logging.getLogger(__name__)

BID_FIELD = "bid"
ASK_FIELD = "ask"


class RatesError(Exception):
    """A fetch cycle could not produce quotes."""


class RatesRequestError(RatesError):
    """Transport failure or non-success HTTP status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class RatesResponseError(RatesError):
    """The response body is not a JSON object."""


def build_pair_param(currencies: Iterable[Currency]) -> str:
    return ",".join(c.pair_param for c in currencies)


def build_url(api_url: str, currencies: Iterable[Currency]) -> str:
    return f"{api_url.rstrip('/')}/{build_pair_param(currencies)}"


def _parse_price(value: Any) -> float:
    price = float(value)
    if not math.isfinite(price):
        raise ValueError(f"non-finite price {value!r}")
    return price


def _read_quote(payload: dict[str, Any], currency: Currency) -> tuple[float, float]:
    entry = payload[currency.pair_key]
    return _parse_price(entry[BID_FIELD]), _parse_price(entry[ASK_FIELD])


def parse_quotes(currencies: Iterable[Currency], payload: dict[str, Any]) -> list[Currency]:
    """
    Map a decoded response onto the tracked pairs.

    Each pair is looked up by its concatenated key (e.g. "EURUSD") and its
    "bid"/"ask" strings are parsed as floats. A pair whose entry is missing or
    malformed keeps its previous values; the other pairs are still updated.

    Args:
        currencies: Tracked pairs, in display order.
        payload: Decoded JSON object.

    Returns:
        New list of records in the same order.
    """
    updated = []
    for currency in currencies:
        try:
            bid, ask = _read_quote(payload, currency)
        except KeyError as e:
            logger.warning(f"No {e} in response for {currency.label}, keeping last quote")
            updated.append(currency)
            continue
        except (TypeError, ValueError) as e:
            logger.warning(f"Malformed quote for {currency.label}: {e}")
            updated.append(currency)
            continue

        updated.append(currency.with_quote(bid=bid, ask=ask))
    return updated


class RatesClient:
    """Fetches the latest bid/ask for a list of pairs with a single GET."""

    def __init__(self, settings: AppSettings | None = None, session: requests.Session | None = None):
        self._settings = settings or get_settings_manager().settings
        self._session = session or requests.Session()
        self._configure_proxy()

    def _configure_proxy(self):
        proxy_url = self._settings.proxy.get_proxy_url()
        if proxy_url:
            logger.debug(f"Configuring proxy for RatesClient: {proxy_url}")
            self._session.proxies = {"http": proxy_url, "https": proxy_url}
        else:
            self._session.proxies = {}

    def fetch(self, currencies: list[Currency]) -> list[Currency]:
        """
        Fetch quotes for the given pairs (synchronous/blocking).

        Raises:
            RatesRequestError: connection failure, timeout or non-success status.
            RatesResponseError: body is not a JSON object.
        """
        url = build_url(self._settings.api_url, currencies)
        logger.debug(f"Fetching quotes from {url}")

        try:
            resp = self._session.get(url, timeout=self._settings.request_timeout)
        except requests.RequestException as e:
            raise RatesRequestError(f"Request failed: {e}") from e

        if not resp.ok:
            raise RatesRequestError(
                f"Unexpected error: HTTP {resp.status_code}", status_code=resp.status_code
            )

        try:
            data = resp.json()
        except ValueError as e:
            logger.debug(f"Raw response: {resp.text[:500]}")
            raise RatesResponseError(f"Invalid JSON in response: {e}") from e

        if not isinstance(data, dict):
            raise RatesResponseError(f"Expected a JSON object, got {type(data).__name__}")

        return parse_quotes(currencies, data)

    def close(self):
        self._session.close()
