"""
components/charts.py - Plotly chart builders for the assessment UI.
"""

import plotly.graph_objects as go
import pandas as pd
from typing import Dict


RATING_COLORS = {
    "Good": "#16a34a",
    "Moderate": "#ca8a04",
    "Needs Improvement": "#dc2626",
}


def rating_color(pct: float, good: int = 75, moderate: int = 50) -> str:
    if pct >= good:
        return RATING_COLORS["Good"]
    if pct >= moderate:
        return RATING_COLORS["Moderate"]
    return RATING_COLORS["Needs Improvement"]


def category_bar_chart(categories_df: pd.DataFrame, good: int = 75, moderate: int = 50) -> go.Figure:
    """Horizontal bar chart of category percentages with threshold lines."""
    fig = go.Figure()

    colors = [rating_color(p, good, moderate) for p in categories_df["Percentage"]]
    fig.add_trace(go.Bar(
        x=categories_df["Percentage"], y=categories_df["Category"], orientation="h",
        marker_color=colors, text=[f"{p}%" for p in categories_df["Percentage"]],
        textposition="outside", textfont=dict(size=13, color="#1e293b"),
        customdata=categories_df[["Score", "Max"]].values,
        hovertemplate="%{y}: %{x}% (%{customdata[0]}/%{customdata[1]})<extra></extra>",
    ))

    for threshold, color in ((good, RATING_COLORS["Good"]), (moderate, RATING_COLORS["Moderate"])):
        fig.add_vline(x=threshold, line_dash="dot", line_color=color, opacity=0.6)

    fig.update_layout(
        title="Category Breakdown",
        xaxis=dict(title="Percentage", range=[0, 110]),
        yaxis=dict(autorange="reversed"),
        height=60 + 45 * len(categories_df), margin=dict(l=220, r=40, t=50, b=40),
        showlegend=False, plot_bgcolor="white",
    )
    return fig


def overall_gauge(pct: int, good: int = 75, moderate: int = 50) -> go.Figure:
    """Gauge for the overall percentage, banded by rating."""
    fig = go.Figure(go.Indicator(
        mode="gauge+number",
        value=pct,
        number=dict(suffix="%"),
        gauge=dict(
            axis=dict(range=[0, 100]),
            bar=dict(color=rating_color(pct, good, moderate)),
            steps=[
                dict(range=[0, moderate], color="#fee2e2"),
                dict(range=[moderate, good], color="#fef9c3"),
                dict(range=[good, 100], color="#dcfce7"),
            ],
        ),
    ))
    fig.update_layout(height=260, margin=dict(l=30, r=30, t=30, b=10))
    return fig


def summary_donut(summary: Dict[str, int]) -> go.Figure:
    """Donut of rating counts from the dashboard summary."""
    labels = ["Good", "Moderate", "Needs Improvement"]
    values = [summary.get("good", 0), summary.get("moderate", 0), summary.get("needsImprovement", 0)]
    fig = go.Figure(go.Pie(
        labels=labels, values=values, hole=0.55,
        marker=dict(colors=[RATING_COLORS[l] for l in labels]),
        sort=False,
    ))
    fig.update_layout(height=280, margin=dict(l=10, r=10, t=30, b=10), showlegend=True)
    return fig
