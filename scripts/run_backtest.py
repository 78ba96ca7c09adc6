#!/usr/bin/env python3
"""Run a retail positioning backtest from two CSV files.

Usage:
    python scripts/run_backtest.py data/MTX_Daily.csv data/OI.csv --instrument MTX
"""

import argparse
import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from retail_flow.engine import BacktestEngine
from retail_flow.errors import ConfigurationError, DataQualityError
from retail_flow.logging.config import configure_logging


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Retail positioning trailing-stop backtest")
    parser.add_argument("price_csv", help="Daily price CSV (Date, Open, High, Low, Close)")
    parser.add_argument("oi_csv", help="Open-interest CSV (Date, total, institutional long/short)")
    parser.add_argument("--instrument", default=None, help="Instrument id in config/instruments.yaml")
    parser.add_argument("--config-dir", default=None, help="Directory holding instruments.yaml")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    parser.add_argument("--json-logs", action="store_true", help="Emit JSON log lines")
    parser.add_argument("--tail", type=int, default=5, help="Number of trailing equity samples to print")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging(level=args.log_level, format_json=args.json_logs)

    try:
        engine = BacktestEngine(config_dir=args.config_dir, instrument_id=args.instrument)
        result = engine.run_files(args.price_csv, args.oi_csv)
    except ConfigurationError as e:
        print(f"❌ Configuration error: {e}")
        return 2
    except DataQualityError as e:
        print(f"❌ Data error: {e}")
        return 1

    summary = result.summary
    print(f"📊 {summary.bars} bars, {summary.first_date} → {summary.last_date}")
    print(f"   Entries: {summary.long_entries} long / {summary.short_entries} short")
    print(f"   Exits:   {summary.long_exits} long / {summary.short_exits} short")
    print(f"   Equity:  {summary.final_equity:,.0f} "
          f"(long {summary.final_equity_long:,.0f}, short {summary.final_equity_short:,.0f})")
    print(f"   Net PnL: {summary.net_pnl:+,.0f} ({summary.return_pct:+.2f}%)")
    print(f"   Max DD:  {summary.max_drawdown_pct:.2f}%   Sharpe: {summary.final_sharpe:.2f}")

    if args.tail > 0:
        print(f"\n📋 Last {min(args.tail, len(result.equity))} equity samples:")
        for sample in result.equity[-args.tail:]:
            row = sample.to_dict()
            print(f"  {row['date']}  equity={row['equity']:>10,}  dd={row['drawdown_pct']:>7.2f}%  "
                  f"sharpe={row['rolling_sharpe']:>6}  {row['position']}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
