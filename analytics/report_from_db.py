from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
from typing import List

from dotenv import load_dotenv

from analytics.stats import compute_statistics
from analytics.visualizations import save_charts
from database.connection import DatabasePool, PoolSettings
from database.db_manager import DatabaseManager
from models import Round, StatisticsSnapshot, TimePeriod


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Print the statistics snapshot and write chart PNGs from PostgreSQL data."
    )
    parser.add_argument(
        "--period",
        default="all",
        help="all, ytd or YYYY-MM",
    )
    parser.add_argument(
        "--outdir",
        default="analytics/output",
        help="Directory where chart PNGs are written",
    )
    parser.add_argument(
        "--dsn",
        default=None,
        help="Optional PostgreSQL DSN. If omitted, uses DATABASE_URL or connection defaults.",
    )
    return parser.parse_args()


async def _load_rounds(dsn: str | None) -> List[Round]:
    async with DatabasePool(PoolSettings.from_env(dsn)) as pool:
        result = await DatabaseManager(pool.pool).rounds.list()
    if not result.success:
        raise RuntimeError(f"Could not load rounds: {result.error}")
    return result.data


def _print_summary(snapshot: StatisticsSnapshot) -> None:
    print(f"Period:            {snapshot.period}")
    print(f"Rounds:            {snapshot.total_rounds}")
    print(f"Average score:     {snapshot.average_score:.1f}")
    print(f"Best score:        {snapshot.best_score}")
    print(f"Total spending:    {snapshot.total_spending:.0f}")
    print(f"Net wagers:        {snapshot.total_wagers:+.0f}")
    print(f"P&L:               {snapshot.net_pnl:+.0f}")
    print(f"Avg spend / month: {snapshot.avg_monthly_spending:.0f}")
    for group in snapshot.monthly:
        print(
            f"  {group.label}: {group.count} rounds, spent {group.spending:.0f}, "
            f"wagers {group.wagers:+.0f}, avg score {group.avg_score:.1f}"
        )


async def main_async() -> None:
    load_dotenv()
    args = _parse_args()
    period = TimePeriod.parse(args.period)
    if not period.success:
        raise SystemExit(period.error)

    rounds = await _load_rounds(args.dsn)
    snapshot = compute_statistics(rounds, period.data)
    _print_summary(snapshot)

    if not snapshot.total_rounds:
        print("No rounds in this period; skipping charts.")
        return

    written = save_charts(snapshot, Path(args.outdir))
    print(f"Generated {len(written)} chart(s):")
    for path in written.values():
        print(path.resolve())


def main() -> None:
    asyncio.run(main_async())


if __name__ == "__main__":
    main()
