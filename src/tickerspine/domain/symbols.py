"""Ticker translation between the vendor, charting and exchange systems."""

from __future__ import annotations

from tickerspine.core.protocols import ExchangeRepository, TickerRepository


class SymbolResolver:
    """Resolve one instrument's identity across ticker systems.

    Parameters:
        ticker_repo: charting ticker → vendor ticker mapping.
        exchange_repo: charting ticker → exchange-qualified ticker.
        composite_operators: characters that mark a formula ticker
            (``"NIFTY/BANKNIFTY"``, ``"GOLD*2"``), which never has mappings.
    """

    def __init__(
        self,
        ticker_repo: TickerRepository,
        exchange_repo: ExchangeRepository | None = None,
        composite_operators: str = "/*+",
    ) -> None:
        self._tickers = ticker_repo
        self._exchanges = exchange_repo
        self._operators = frozenset(composite_operators)

    def tv_to_investing(self, tv_ticker: str) -> str | None:
        return self._tickers.get_investing_ticker(tv_ticker)

    def investing_to_tv(self, investing_ticker: str) -> str | None:
        return self._tickers.get_tv_ticker(investing_ticker)

    def tv_to_exchange_ticker(self, tv_ticker: str) -> str:
        """Exchange-qualified ticker, or the charting ticker when unmapped."""
        if self._exchanges is None:
            return tv_ticker
        return self._exchanges.get(tv_ticker) or tv_ticker

    def is_composite(self, ticker: str) -> bool:
        return any(ch in self._operators for ch in ticker)
