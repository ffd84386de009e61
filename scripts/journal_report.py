#!/usr/bin/env python3
import argparse
import json
from pathlib import Path

import performance_analytics as analytics
from journal_models import Strategy, Trade, default_strategies


def load_records(path: Path, key: str):
    """A JSON list, or an object holding the list under ``key``."""
    if not path.exists():
        print(f"[report] WARNING: {path} not found")
        return []
    try:
        data = json.loads(path.read_text())
    except Exception as e:
        print(f"[report] ERROR: Could not parse {path}: {e}")
        return []
    if isinstance(data, dict):
        data = data.get(key, [])
    return [r for r in data if isinstance(r, dict)] if isinstance(data, list) else []


def main():
    ap = argparse.ArgumentParser(description="Summarize an exported trade journal.")
    ap.add_argument("--file", default="trades.json", help="JSON list of trades (or {'trades': [...]})")
    ap.add_argument("--strategies", default="", help="Optional JSON list of strategies")
    ap.add_argument("--platform", default=analytics.ALL_PLATFORMS)
    args = ap.parse_args()

    trades = [Trade.from_dict(r) for r in load_records(Path(args.file), "trades")]
    strategies = default_strategies()
    if args.strategies:
        loaded = [Strategy.from_dict(r) for r in load_records(Path(args.strategies), "strategies")]
        strategies = loaded or strategies

    stats = analytics.dashboard_stats(trades, args.platform)
    print("Trade Journal Report")
    print("=" * 30)
    print(f"[report] platform: {stats.platform}")
    print(
        f"[report] trades={stats.total_trades} pnl={stats.total_pnl:.2f} "
        f"win_rate={stats.win_rate:.1f}% wins={stats.win_count} losses={stats.loss_count} "
        f"breakeven={stats.break_even_count} avg_win={stats.avg_win:.2f} "
        f"avg_rr={stats.avg_risk_reward:.2f}"
    )

    if stats.equity_curve:
        last = stats.equity_curve[-1]
        print(f"[report] equity: {len(stats.equity_curve) - 1} trading days, ends {last['value']:.2f} on {last['name']}")

    print("\nPlatforms (all trades)")
    print("-" * 30)
    for row in stats.platform_breakdown:
        print(f"{row['name']} | pnl={row['pnl']:.2f}")

    print("\nStrategies")
    print("-" * 30)
    for s in analytics.strategy_performance(strategies, trades):
        print(
            f"{s.title} | trades={s.count} wins={s.wins} win_rate={s.win_rate:.0f}% "
            f"total={s.total_pnl:.2f} avg={s.avg_pnl:.2f}"
        )


if __name__ == "__main__":
    main()
