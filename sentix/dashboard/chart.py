from dataclasses import dataclass

import plotly.graph_objects as go
import plotly.io as pio

from sentix.dashboard.schemas import ChartRange
from sentix.sentiment.schemas import SCORE_MAX, SCORE_MIN, StockSentiment

POSITIVE_COLOR = "#10b981"
NEGATIVE_COLOR = "#ef4444"
CHART_DIV_ID = "trend-chart"

_AREA_FILL = {
    POSITIVE_COLOR: "rgba(16,185,129,0.15)",
    NEGATIVE_COLOR: "rgba(239,68,68,0.15)",
}


@dataclass(frozen=True)
class TrendPoint:
    day: int  # 0 is today, negative values are days ago
    score: int


@dataclass(frozen=True)
class TrendChart:
    points: list[TrendPoint]
    color: str
    html: str

    @property
    def empty(self) -> bool:
        return not self.points


def trend_points(history: list[int], chart_range: ChartRange = ChartRange.days_90) -> list[TrendPoint]:
    window = history[-chart_range.days :]
    return [
        TrendPoint(day=index - len(window) + 1, score=score)
        for index, score in enumerate(window)
    ]


def trend_color(stock: StockSentiment) -> str:
    return POSITIVE_COLOR if stock.current_score >= 0 else NEGATIVE_COLOR


def build_figure(points: list[TrendPoint], color: str, height: int = 240) -> go.Figure:
    """Area chart of daily scores on a fixed -100..100 axis with a dashed zero line."""
    fig = go.Figure(
        go.Scatter(
            x=[p.day for p in points],
            y=[p.score for p in points],
            mode="lines",
            fill="tozeroy",
            fillcolor=_AREA_FILL[color],
            line=dict(color=color, width=2, shape="spline"),
            hovertemplate="Day %{x}<br>Score: %{y}<extra></extra>",
        )
    )
    fig.add_hline(y=0, line=dict(color="#4b5563", dash="dash", width=1))
    fig.update_layout(
        height=height,
        margin=dict(l=36, r=0, t=10, b=0),
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        showlegend=False,
        hoverlabel=dict(bgcolor="#1f2937", bordercolor="#374151", font=dict(color="#f3f4f6")),
    )
    fig.update_xaxes(visible=False)
    fig.update_yaxes(
        range=[SCORE_MIN, SCORE_MAX],
        tickvals=[-100, -50, 0, 50, 100],
        tickfont=dict(size=10, color="#9ca3af"),
        gridcolor="rgba(55,65,81,0.3)",
        griddash="dash",
        zeroline=False,
        fixedrange=True,
    )
    return fig


def build_chart(
    stock: StockSentiment,
    chart_range: ChartRange = ChartRange.days_90,
    height: int = 240,
) -> TrendChart:
    points = trend_points(stock.history, chart_range)
    color = trend_color(stock)
    if not points:
        return TrendChart(points=[], color=color, html="")

    fig = build_figure(points, color, height)
    html = pio.to_html(
        fig,
        include_plotlyjs="cdn",
        full_html=False,
        div_id=CHART_DIV_ID,
        config={"displayModeBar": False, "responsive": True},
    )
    return TrendChart(points=points, color=color, html=html)
