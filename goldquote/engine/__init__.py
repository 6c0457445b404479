"""Quote engine — расчёт котировок buy/sell, swap fee, debounce и polling."""

from .debounce import DEFAULT_DEBOUNCE_S, Debouncer
from .polling import PollingCancelled, PollingTimeout, StatusPoller, poll_until
from .quote_engine import (
    DEFAULT_SWAP_FEE_BPS,
    SWAP_FEE_ELIGIBLE_ASSETS,
    QuoteEngine,
    QuoteEngineConfig,
    calculate_swap_fee,
    compute_buy_quote,
    compute_sell_quote,
)

__all__ = [
    "DEFAULT_SWAP_FEE_BPS",
    "SWAP_FEE_ELIGIBLE_ASSETS",
    "QuoteEngine",
    "QuoteEngineConfig",
    "calculate_swap_fee",
    "compute_buy_quote",
    "compute_sell_quote",
    "Debouncer",
    "DEFAULT_DEBOUNCE_S",
    "poll_until",
    "StatusPoller",
    "PollingTimeout",
    "PollingCancelled",
]
