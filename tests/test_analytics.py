from datetime import date

import pytest

from analytics.stats import (
    available_periods,
    compute_statistics,
    filter_rounds,
    group_by_month,
    percentage_breakdown,
    score_trend,
)
from analytics.visualizations import CHARTS, render_png, save_charts, tick_positions
from models.period import TimePeriod
from models.round import RoundDraft

TODAY = date(2025, 6, 15)


def _round(day: date, *, course="Lushan", green_fee=400.0, caddy_fee=50.0, wagers=0.0, score=90, time=None):
    return RoundDraft(
        date=day,
        time=time,
        course=course,
        green_fee=green_fee,
        caddy_fee=caddy_fee,
        wagers=wagers,
        score=score,
    )


def _build_rounds():
    return [
        _round(date(2024, 12, 20), green_fee=300, caddy_fee=0, wagers=-100, score=95),
        _round(date(2025, 3, 1), green_fee=400, caddy_fee=50, wagers=200, score=90),
        _round(date(2025, 3, 15), green_fee=350, caddy_fee=50, wagers=-50, score=72),
        _round(date(2025, 5, 2), green_fee=500, caddy_fee=100, wagers=0, score=85),
    ]


def test_totals_all_time():
    snapshot = compute_statistics(_build_rounds(), today=TODAY)

    assert snapshot.period == "all"
    assert snapshot.total_rounds == 4
    assert snapshot.total_green_fee == 1550
    assert snapshot.total_caddy_fee == 200
    assert snapshot.total_spending == 1750
    assert snapshot.total_wagers == 50
    assert snapshot.net_pnl == -1700
    assert snapshot.average_score == pytest.approx(85.5)
    assert snapshot.best_score == 72
    assert snapshot.months_played == 3
    assert snapshot.avg_monthly_spending == pytest.approx(1750 / 3)


def test_total_spending_is_sum_of_fees():
    rounds = [
        _round(date(2025, 3, 1), green_fee=100, caddy_fee=20),
        _round(date(2025, 3, 2), green_fee=200, caddy_fee=30),
    ]
    snapshot = compute_statistics(rounds, today=TODAY)
    assert snapshot.total_spending == 350


def test_best_score_is_minimum():
    rounds = [_round(date(2025, 3, d), score=s) for d, s in [(1, 90), (2, 72), (3, 85)]]
    assert compute_statistics(rounds, today=TODAY).best_score == 72


def test_empty_period_yields_zeros():
    snapshot = compute_statistics(_build_rounds(), TimePeriod.for_month(2023, 1), today=TODAY)

    assert snapshot.period == "2023-01"
    assert snapshot.total_rounds == 0
    assert snapshot.average_score == 0
    assert snapshot.best_score == 0
    assert snapshot.total_spending == 0
    assert snapshot.monthly == []
    assert snapshot.score_trend == []
    assert snapshot.series == []
    assert snapshot.series_granularity == "round"


def test_no_rounds_at_all():
    snapshot = compute_statistics([], today=TODAY)
    assert snapshot.total_rounds == 0
    assert snapshot.series_granularity == "month"


def test_filter_is_idempotent():
    rounds = _build_rounds()
    period = TimePeriod.year_to_date()
    once = filter_rounds(rounds, period, today=TODAY)
    twice = filter_rounds(once, period, today=TODAY)
    assert once == twice
    assert len(once) == 3


def test_ytd_excludes_previous_year():
    snapshot = compute_statistics(_build_rounds(), TimePeriod.year_to_date(), today=TODAY)
    assert snapshot.total_rounds == 3
    assert snapshot.period == "ytd"


def test_single_month_uses_round_series():
    snapshot = compute_statistics(_build_rounds(), TimePeriod.for_month(2025, 3), today=TODAY)

    assert snapshot.total_rounds == 2
    assert snapshot.series_granularity == "round"
    assert [p.key for p in snapshot.series] == ["2025-03-01", "2025-03-15"]
    first = snapshot.series[0]
    assert first.spending == 450
    assert first.pnl == -250
    assert first.course == "Lushan"


def test_multi_month_uses_month_series():
    snapshot = compute_statistics(_build_rounds(), today=TODAY)
    assert snapshot.series_granularity == "month"
    assert [p.key for p in snapshot.series] == ["2024-12", "2025-03", "2025-05"]


def test_group_by_month():
    rounds = [
        _round(date(2025, 3, 1), score=90),
        _round(date(2025, 3, 20), score=80),
        _round(date(2025, 4, 5), score=88),
    ]
    groups = group_by_month(rounds)

    assert len(groups) == 2
    march = groups[0]
    assert march.key == "2025-03"
    assert march.label == "Mar 2025"
    assert march.count == 2
    assert march.avg_score == 85
    assert march.spending == 900
    assert groups[1].count == 1


def test_percentage_breakdown_sums_to_100():
    wagers_pct, expenses_pct = percentage_breakdown(-150, 450)
    assert wagers_pct == pytest.approx(25)
    assert expenses_pct == pytest.approx(75)
    assert wagers_pct + expenses_pct == pytest.approx(100)


def test_percentage_breakdown_zero_total():
    assert percentage_breakdown(0, 0) == (0.0, 0.0)


def test_score_trend_sorted_oldest_first():
    rounds = list(reversed(_build_rounds()))
    trend = score_trend(rounds)
    assert [p.date for p in trend] == sorted(p.date for p in trend)
    assert trend[0].score == 95


def test_available_periods_newest_first():
    assert available_periods(_build_rounds()) == ["2025-05", "2025-03", "2024-12"]


# ================================================================
# Charts
# ================================================================

def test_tick_positions_sparse():
    assert tick_positions(5) == [0, 1, 2, 3, 4]
    positions = tick_positions(30, max_labels=12)
    assert positions[0] == 0
    assert positions[-1] == 29
    assert len(positions) <= 13
    assert positions == sorted(set(positions))


def test_render_png_unknown_chart():
    with pytest.raises(ValueError):
        render_png(compute_statistics(_build_rounds(), today=TODAY), "pie")


def test_save_charts_writes_every_chart(tmp_path):
    snapshot = compute_statistics(_build_rounds(), TimePeriod.for_month(2025, 3), today=TODAY)
    written = save_charts(snapshot, tmp_path / "charts")

    assert set(written) == set(CHARTS)
    for path in written.values():
        assert path.read_bytes().startswith(b"\x89PNG")
