"""
Standard data models for the application.
"""

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Currency:
    """A tracked currency pair with its last known quote."""

    base: str
    target: str
    bid: float = 0.0
    ask: float = 0.0

    def __post_init__(self):
        if not self.base or not self.target:
            raise ValueError("Currency codes must not be empty")
        object.__setattr__(self, "base", self.base.upper())
        object.__setattr__(self, "target", self.target.upper())

    @property
    def pair_param(self) -> str:
        """Pair as used in the request path, e.g. EUR-USD."""
        return f"{self.base}-{self.target}"

    @property
    def pair_key(self) -> str:
        """Pair as keyed in the API response, e.g. EURUSD."""
        return f"{self.base}{self.target}"

    @property
    def label(self) -> str:
        return f"{self.base}/{self.target}"

    def with_quote(self, bid: float, ask: float) -> "Currency":
        return replace(self, bid=bid, ask=ask)

    def identity(self) -> "Currency":
        """Same pair with the quote reset to zero."""
        return Currency(self.base, self.target)


DEFAULT_PAIRS = (("EUR", "USD"), ("ETH", "USD"), ("BTC", "USD"))


def default_currencies() -> tuple[Currency, ...]:
    return tuple(Currency(base, target) for base, target in DEFAULT_PAIRS)
