"""Market scanner: indicators and signals for the top instruments by volume.

Each instrument is fetched and analyzed independently. A failure for one
instrument becomes a "Data error" entry; the rest of the batch is
unaffected.
"""

import asyncio
import logging
from datetime import datetime, timezone

from app.clients import BinanceRestClient
from app.config import Settings
from app.models import InstrumentResult, OrderBookSnapshot, Ticker
from core.indicators import build_snapshot
from core.models import IndicatorConfig, IndicatorSnapshot
from core.signal_classifier import classify_snapshot, error_signal

logger = logging.getLogger(__name__)


class MarketScanner:
    """Scan the top instruments and classify each one.

    The candle fetches run concurrently up to ``max_concurrent_requests``;
    results keep the ticker order (descending quote volume).
    """

    def __init__(
        self,
        client: BinanceRestClient,
        config: IndicatorConfig | None = None,
        quote_asset: str = "USDT",
        top_n: int = 30,
        interval: str = "1h",
        kline_limit: int = 500,
        max_concurrent_requests: int = 5,
        depth_limit: int = 100,
        depth_levels: int = 50,
    ):
        self.client = client
        self.config = config or IndicatorConfig()
        self.quote_asset = quote_asset
        self.top_n = top_n
        self.interval = interval
        self.kline_limit = kline_limit
        self.max_concurrent_requests = max_concurrent_requests
        self.depth_limit = depth_limit
        self.depth_levels = depth_levels

        if self.kline_limit < self.config.min_candles:
            logger.warning(
                f"kline_limit={self.kline_limit} is below the {self.config.min_candles} "
                "candles needed for a ready snapshot; every instrument will stay pending"
            )

    @classmethod
    def from_settings(
        cls,
        client: BinanceRestClient,
        settings: Settings,
        config: IndicatorConfig | None = None,
    ) -> "MarketScanner":
        return cls(
            client=client,
            config=config,
            quote_asset=settings.quote_asset,
            top_n=settings.top_n,
            interval=settings.kline_interval,
            kline_limit=settings.kline_limit,
            max_concurrent_requests=settings.max_concurrent_requests,
            depth_limit=settings.depth_limit,
            depth_levels=settings.depth_levels,
        )

    async def fetch_top_tickers(self) -> list[Ticker]:
        """Fetch 24h tickers quoted in the quote asset, top N by quote volume."""
        raw_tickers = await self.client.get_24h_tickers()

        tickers = [
            Ticker.from_binance(raw, self.quote_asset)
            for raw in raw_tickers
            if isinstance(raw.get("symbol"), str) and raw["symbol"].endswith(self.quote_asset)
        ]
        tickers.sort(key=lambda t: t.quote_volume, reverse=True)
        return tickers[: self.top_n]

    async def analyze(self, ticker: Ticker) -> InstrumentResult:
        """Compute the snapshot and signal for one instrument.

        Never raises: any failure is returned as a failed snapshot with a
        "Data error" signal.
        """
        try:
            klines = await self.client.get_klines(
                ticker.pair, self.interval, self.kline_limit
            )
            snapshot = build_snapshot(klines, self.config)
            signal = classify_snapshot(ticker.price, snapshot)
        except Exception as e:
            logger.warning(f"Failed to analyze {ticker.pair}: {e}")
            message = str(e) or type(e).__name__
            return InstrumentResult(
                ticker=ticker,
                snapshot=IndicatorSnapshot.failed(message),
                signal=error_signal(message),
            )

        return InstrumentResult(ticker=ticker, snapshot=snapshot, signal=signal)

    async def scan(self) -> list[InstrumentResult]:
        """Analyze the top instruments, ordered by descending quote volume."""
        tickers = await self.fetch_top_tickers()
        logger.info(
            f"Scanning {len(tickers)} {self.quote_asset} instruments "
            f"({self.interval} x {self.kline_limit} klines)"
        )

        semaphore = asyncio.Semaphore(self.max_concurrent_requests)

        async def _bounded(ticker: Ticker) -> InstrumentResult:
            async with semaphore:
                return await self.analyze(ticker)

        results = await asyncio.gather(*(_bounded(t) for t in tickers))

        ready = sum(1 for r in results if r.snapshot.ready)
        directional = sum(1 for r in results if r.signal.is_directional)
        logger.info(
            f"Scan complete: {ready}/{len(results)} ready, {directional} directional"
        )
        return list(results)

    async def order_book(self, symbol: str) -> OrderBookSnapshot:
        """Fetch the top of the order book for a symbol."""
        raw = await self.client.get_order_book(symbol, self.depth_limit)
        return OrderBookSnapshot.from_binance(
            symbol,
            raw,
            timestamp=datetime.now(timezone.utc),
            levels=self.depth_levels,
        )
