from .stats import (
    available_periods,
    compute_statistics,
    filter_rounds,
    group_by_month,
    percentage_breakdown,
    round_breakdown,
    score_trend,
)
from .visualizations import (
    CHARTS,
    plot_expenses,
    plot_percentage_breakdown,
    plot_pnl,
    plot_score_trend,
    render_png,
    save_charts,
)

__all__ = [
    "available_periods",
    "compute_statistics",
    "filter_rounds",
    "group_by_month",
    "percentage_breakdown",
    "round_breakdown",
    "score_trend",
    "CHARTS",
    "plot_expenses",
    "plot_percentage_breakdown",
    "plot_pnl",
    "plot_score_trend",
    "render_png",
    "save_charts",
]
