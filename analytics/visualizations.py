from __future__ import annotations

import io
from pathlib import Path
from typing import Dict, List, Sequence, Tuple

from models.statistics import StatisticsSnapshot

MAX_TICK_LABELS = 12
GAIN_COLOR = "#10b981"
LOSS_COLOR = "#ef4444"


def _load_plt():
    """Import pyplot on first use with the headless Agg backend."""
    try:
        import matplotlib  # type: ignore

        matplotlib.use("Agg")
        import matplotlib.pyplot as plt  # type: ignore
    except ImportError as exc:
        raise RuntimeError("Charts need matplotlib: pip install matplotlib") from exc
    return plt


def tick_positions(count: int, max_labels: int = MAX_TICK_LABELS) -> List[int]:
    """
    Evenly spaced x positions to label, always including the last one.

    Every position is labelled when there are at most ``max_labels`` points.
    """
    if count <= max_labels:
        return list(range(count))
    step = -(-count // max_labels)
    positions = list(range(0, count, step))
    if positions[-1] != count - 1:
        positions.append(count - 1)
    return positions


def _new_figure(title: str, ylabel: str, xlabel: str, size: Tuple[int, int] = (10, 5)):
    plt = _load_plt()
    fig, ax = plt.subplots(figsize=size)
    ax.set_title(title)
    ax.set_xlabel(xlabel)
    ax.set_ylabel(ylabel)
    return fig, ax


def _finish(fig, ax, labels: Sequence[str]):
    positions = tick_positions(len(labels))
    ax.set_xticks(positions)
    ax.set_xticklabels([labels[i] for i in positions], rotation=45, ha="right")
    ax.grid(axis="y", alpha=0.2)
    fig.tight_layout()
    return fig, ax


def _x_title(snapshot: StatisticsSnapshot) -> str:
    return "Round" if snapshot.series_granularity == "round" else "Month"


def plot_score_trend(snapshot: StatisticsSnapshot):
    """Line chart: score per round, oldest first."""
    labels = [point.label for point in snapshot.score_trend]
    fig, ax = _new_figure("Score Trend", "Score", "Round")
    ax.plot(range(len(labels)), [point.score for point in snapshot.score_trend],
            marker="o", color="#2d5016")
    return _finish(fig, ax, labels)


def plot_pnl(snapshot: StatisticsSnapshot):
    """P&L bars (green up, red down) with the wagers line on top."""
    labels = [point.label for point in snapshot.series]
    x = range(len(labels))
    pnl = [point.pnl for point in snapshot.series]

    fig, ax = _new_figure("Profit & Loss", "Amount", _x_title(snapshot), size=(11, 5))
    ax.bar(x, pnl, color=[GAIN_COLOR if v >= 0 else LOSS_COLOR for v in pnl], alpha=0.8, label="P&L")
    ax.plot(x, [point.wagers for point in snapshot.series],
            color="black", marker="o", linewidth=1.5, label="Wagers")
    ax.axhline(0, color="black", linewidth=1, alpha=0.6)
    ax.legend(loc="upper left")
    return _finish(fig, ax, labels)


def plot_expenses(snapshot: StatisticsSnapshot):
    """Spending (green + caddy fees) per month or round."""
    labels = [point.label for point in snapshot.series]
    fig, ax = _new_figure("Spending", "Green + Caddy Fees", _x_title(snapshot))
    ax.bar(range(len(labels)), [point.spending for point in snapshot.series], color=LOSS_COLOR)
    return _finish(fig, ax, labels)


def plot_percentage_breakdown(snapshot: StatisticsSnapshot):
    """Stacked bars: wagers vs expenses as a share of money moved."""
    labels = [point.label for point in snapshot.series]
    x = range(len(labels))
    wagers = [point.wagers_percent for point in snapshot.series]

    fig, ax = _new_figure("Wagers vs Expenses", "Percent", _x_title(snapshot), size=(11, 6))
    ax.bar(x, wagers, label="Wagers", color=GAIN_COLOR)
    ax.bar(x, [point.expenses_percent for point in snapshot.series],
           bottom=wagers, label="Expenses", color=LOSS_COLOR)
    ax.set_ylim(0, 100)
    ax.legend(loc="upper right", fontsize=8)
    return _finish(fig, ax, labels)


CHARTS = {
    "score_trend": plot_score_trend,
    "pnl": plot_pnl,
    "expenses": plot_expenses,
    "percentages": plot_percentage_breakdown,
}


def render_png(snapshot: StatisticsSnapshot, chart: str) -> bytes:
    """Render one named chart to PNG bytes."""
    if chart not in CHARTS:
        raise ValueError(f"Unknown chart: {chart}. Available: {', '.join(sorted(CHARTS))}")
    plt = _load_plt()
    fig = CHARTS[chart](snapshot)[0]
    try:
        buffer = io.BytesIO()
        fig.savefig(buffer, format="png", dpi=150)
        return buffer.getvalue()
    finally:
        plt.close(fig)


def save_charts(snapshot: StatisticsSnapshot, output_dir: Path) -> Dict[str, Path]:
    """Write every chart as <name>.png under output_dir."""
    output_dir.mkdir(parents=True, exist_ok=True)
    written: Dict[str, Path] = {}
    for name in CHARTS:
        path = output_dir / f"{name}.png"
        path.write_bytes(render_png(snapshot, name))
        written[name] = path
    return written
