"""CLI entry point for the market scanner.

Usage:
    python -m app scan
    python -m app scan --limit 10 --interval 15m --candles 600
    python -m app scan --config indicators.yaml --output scan.json
    python -m app depth --symbol ETHUSDT
"""

import argparse
import asyncio
import logging
import sys
import time
from pathlib import Path

import orjson

from app.clients import BinanceRestClient
from app.config import get_settings
from app.indicator_config import load_indicator_config
from app.services import MarketScanner

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Indicator snapshots and trading signals for Binance instruments",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m app scan
  python -m app scan --limit 10 --interval 15m --candles 600
  python -m app scan --config indicators.yaml --output scan.json
  python -m app depth --symbol ETHUSDT
        """,
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    scan = subparsers.add_parser("scan", help="Classify the top instruments by volume")
    scan.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Number of instruments (default: TOP_N setting)",
    )
    scan.add_argument(
        "--interval",
        type=str,
        default=None,
        help="K-line interval (default: KLINE_INTERVAL setting)",
    )
    scan.add_argument(
        "--candles",
        type=int,
        default=None,
        help="K-lines fetched per instrument (default: KLINE_LIMIT setting)",
    )
    scan.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML file with indicator periods",
    )
    scan.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Output file path for JSON results",
    )

    depth = subparsers.add_parser("depth", help="Show the top of the order book")
    depth.add_argument(
        "--symbol",
        type=str,
        default=None,
        help="Trading pair (default: DEPTH_SYMBOL setting)",
    )
    depth.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Output file path for JSON results",
    )
    return parser.parse_args(argv)


def write_json(payload: dict, output: str | None) -> None:
    """Write payload as indented JSON to a file, or stdout."""
    data = orjson.dumps(payload, option=orjson.OPT_INDENT_2)
    if output:
        Path(output).write_bytes(data)
        logger.info(f"Results saved to {output}")
    else:
        sys.stdout.write(data.decode("utf-8") + "\n")


async def cmd_scan(args: argparse.Namespace, scanner: MarketScanner) -> None:
    if args.limit is not None:
        scanner.top_n = args.limit
    if args.interval is not None:
        scanner.interval = args.interval
    if args.candles is not None:
        scanner.kline_limit = args.candles

    results = await scanner.scan()
    write_json(
        {
            "ts": int(time.time() * 1000),
            "data": [r.model_dump(mode="json") for r in results],
        },
        args.output,
    )


async def cmd_depth(args: argparse.Namespace, scanner: MarketScanner, symbol: str) -> None:
    book = await scanner.order_book(symbol)
    write_json(
        {
            "ts": int(time.time() * 1000),
            "data": book.model_dump(mode="json"),
        },
        args.output,
    )


async def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    # Configure logging
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    settings = get_settings()

    config_path = getattr(args, "config", None)
    if config_path is None and settings.indicator_config_path:
        config_path = Path(settings.indicator_config_path)
    config = load_indicator_config(config_path)

    async with BinanceRestClient(
        spot_base_url=settings.spot_base_url,
        futures_base_url=settings.futures_base_url,
        timeout=settings.request_timeout,
        calls_per_minute=settings.calls_per_minute,
    ) as client:
        scanner = MarketScanner.from_settings(client, settings, config)

        if args.command == "scan":
            await cmd_scan(args, scanner)
        else:
            await cmd_depth(args, scanner, args.symbol or settings.depth_symbol)


if __name__ == "__main__":
    asyncio.run(main())
