from __future__ import annotations

from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from models.period import TimePeriod
from models.round import RoundDraft
from models.statistics import MonthlyGroup, ScorePoint, SeriesPoint, StatisticsSnapshot


def month_key(day: date) -> str:
    """YYYY-MM key; sorts chronologically as a plain string."""
    return f"{day.year:04d}-{day.month:02d}"


def month_label(day: date) -> str:
    return day.strftime("%b %Y")


def percentage_breakdown(wagers: float, spending: float) -> Tuple[float, float]:
    """
    Split |wagers| + spending into (wagers_percent, expenses_percent).

    Both are 0 when there is nothing to split.
    """
    total = abs(wagers) + spending
    if not total:
        return 0.0, 0.0
    return abs(wagers) / total * 100.0, spending / total * 100.0


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def filter_rounds(
    rounds: Iterable[RoundDraft],
    period: TimePeriod,
    *,
    today: Optional[date] = None,
) -> List[RoundDraft]:
    """Keep rounds played inside ``period``. Applying it twice changes nothing."""
    return [r for r in rounds if period.contains(r.date, today)]


def group_by_month(rounds: Iterable[RoundDraft]) -> List[MonthlyGroup]:
    """
    Roll rounds up per calendar month, oldest month first.

    Output rows:
    - count, spending, wagers, avg_score
    - pnl: wagers - spending
    - wagers_percent / expenses_percent of |wagers| + spending
    """
    by_month: Dict[str, List[RoundDraft]] = {}
    for round_obj in rounds:
        by_month.setdefault(month_key(round_obj.date), []).append(round_obj)

    results: List[MonthlyGroup] = []
    for key in sorted(by_month):
        members = by_month[key]
        spending = sum(r.get_spending() for r in members)
        wagers = sum(r.wagers for r in members)
        wagers_percent, expenses_percent = percentage_breakdown(wagers, spending)
        results.append(
            MonthlyGroup(
                key=key,
                label=month_label(members[0].date),
                count=len(members),
                spending=spending,
                wagers=wagers,
                avg_score=_mean([r.score for r in members]),
                pnl=wagers - spending,
                wagers_percent=wagers_percent,
                expenses_percent=expenses_percent,
            )
        )
    return results


def round_breakdown(round_obj: RoundDraft) -> SeriesPoint:
    """P&L and percentage split for a single round."""
    spending = round_obj.get_spending()
    wagers_percent, expenses_percent = percentage_breakdown(round_obj.wagers, spending)
    return SeriesPoint(
        key=round_obj.date.isoformat(),
        label=round_obj.date.strftime("%b %d"),
        spending=spending,
        wagers=round_obj.wagers,
        pnl=round_obj.get_pnl(),
        wagers_percent=wagers_percent,
        expenses_percent=expenses_percent,
        score=float(round_obj.score),
        course=round_obj.course,
    )


def _month_point(group: MonthlyGroup) -> SeriesPoint:
    return SeriesPoint(
        key=group.key,
        label=group.label,
        spending=group.spending,
        wagers=group.wagers,
        pnl=group.pnl,
        wagers_percent=group.wagers_percent,
        expenses_percent=group.expenses_percent,
        score=group.avg_score,
    )


def _by_date(rounds: Iterable[RoundDraft]) -> List[RoundDraft]:
    # sorted() is stable, so same-day rounds keep their input order.
    return sorted(rounds, key=lambda r: (r.date, r.time or ""))


def score_trend(rounds: Iterable[RoundDraft]) -> List[ScorePoint]:
    """Score per round, oldest first."""
    return [
        ScorePoint(label=r.date.strftime("%b %d"), date=r.date, score=r.score)
        for r in _by_date(rounds)
    ]


def available_periods(rounds: Iterable[RoundDraft]) -> List[str]:
    """Month keys that have at least one round, newest first."""
    return sorted({month_key(r.date) for r in rounds}, reverse=True)


def compute_statistics(
    rounds: Iterable[RoundDraft],
    period: Optional[TimePeriod] = None,
    *,
    today: Optional[date] = None,
) -> StatisticsSnapshot:
    """
    Aggregate rounds for one period into a dashboard snapshot.

    Pure function of its inputs. An empty period yields zeros and empty
    series.
    """
    period = period or TimePeriod.all_time()
    granularity = "round" if period.is_single_month else "month"
    selected = filter_rounds(rounds, period, today=today)
    if not selected:
        return StatisticsSnapshot(period=period.label(), series_granularity=granularity)

    count = len(selected)
    scores = [r.score for r in selected]
    total_green_fee = sum(r.green_fee for r in selected)
    total_caddy_fee = sum(r.caddy_fee for r in selected)
    total_spending = total_green_fee + total_caddy_fee
    total_wagers = sum(r.wagers for r in selected)

    monthly = group_by_month(selected)
    months_played = len(monthly)

    if period.is_single_month:
        series = [round_breakdown(r) for r in _by_date(selected)]
    else:
        series = [_month_point(group) for group in monthly]

    return StatisticsSnapshot(
        period=period.label(),
        total_rounds=count,
        average_score=_mean(scores),
        best_score=min(scores),
        total_green_fee=total_green_fee,
        total_caddy_fee=total_caddy_fee,
        total_spending=total_spending,
        total_wagers=total_wagers,
        avg_green_fee=total_green_fee / count,
        avg_caddy_fee=total_caddy_fee / count,
        net_pnl=total_wagers - total_spending,
        months_played=months_played,
        avg_monthly_spending=total_spending / months_played,
        avg_monthly_wagers=total_wagers / months_played,
        monthly=monthly,
        score_trend=score_trend(selected),
        series_granularity=granularity,
        series=series,
    )
