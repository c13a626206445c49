from __future__ import annotations

from habitboard.constants import STATUS_COLORS, STATUS_TO_INT, SLEEP_QUALITY_COLORS
from habitboard.grid import Status, day_dates, month_matrix
from habitboard.metrics import sleep_quality_band
from habitboard.theme import get_active_theme


def _active_theme():
    return get_active_theme()[1]


def apply_common_plot_style(fig, title, show_xgrid=True, show_ygrid=True):
    theme = _active_theme()
    fig.update_layout(
        title=title,
        title_font=dict(color=theme["text_main"], size=16, family="Crimson Text"),
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        font=dict(color=theme["text_main"], family="IBM Plex Sans"),
        margin=dict(l=40, r=20, t=40, b=30),
        xaxis=dict(
            showgrid=show_xgrid,
            gridcolor=theme["plot_grid"],
            tickfont=dict(color=theme["text_soft"]),
            zeroline=False,
            showline=True,
            linecolor=theme["border"],
            mirror=True,
        ),
        yaxis=dict(
            showgrid=show_ygrid,
            gridcolor=theme["plot_grid"],
            zeroline=False,
            tickfont=dict(color=theme["text_soft"]),
            showline=True,
            linecolor=theme["border"],
            mirror=True,
        ),
    )
    return fig


def build_habit_matrix(habits, index, year, month):
    """Numeric status matrix (habits x days) plus hover text for a heatmap."""
    import numpy as np

    days = day_dates(year, month)
    matrix = month_matrix(habits, index, year, month)
    z = np.array([[STATUS_TO_INT[status.value] for status in row] for row in matrix], dtype=float).reshape(
        len(habits), len(days)
    )
    text = [["" for _ in days] for _ in habits]
    for row, habit in enumerate(habits):
        for col, day in enumerate(days):
            status = matrix[row][col]
            text[row][col] = f"{habit['name']} • {day.isoformat()} • {status.value}"
    return z, text, [day.day for day in days], [habit["name"] for habit in habits]


def habit_heatmap(habits, index, year, month, title=""):
    import plotly.graph_objects as go

    z, hover_text, x_labels, y_labels = build_habit_matrix(habits, index, year, month)
    colorscale = [
        (0.0, STATUS_COLORS["empty"]),
        (0.333, STATUS_COLORS["empty"]),
        (0.334, STATUS_COLORS["skip"]),
        (0.666, STATUS_COLORS["skip"]),
        (0.667, STATUS_COLORS["done"]),
        (1.0, STATUS_COLORS["done"]),
    ]
    fig = go.Figure(
        data=go.Heatmap(
            z=z,
            x=x_labels,
            y=y_labels,
            text=hover_text,
            hoverinfo="text",
            colorscale=colorscale,
            showscale=False,
            zmin=0,
            zmax=2,
            xgap=2,
            ygap=2,
        )
    )
    apply_common_plot_style(fig, title, show_xgrid=False, show_ygrid=False)
    fig.update_layout(height=max(220, 36 * len(habits) + 80))
    fig.update_yaxes(autorange="reversed")
    return fig


def completion_pie(breakdown, title="Completion"):
    import plotly.graph_objects as go

    labels = [status.value for status in Status]
    values = [breakdown[label]["count"] for label in labels]
    fig = go.Figure(
        data=go.Pie(
            labels=[label.title() for label in labels],
            values=values,
            hole=0.45,
            marker=dict(colors=[STATUS_COLORS[label] for label in labels]),
            sort=False,
        )
    )
    apply_common_plot_style(fig, title)
    fig.update_layout(height=300, showlegend=True)
    return fig


def performance_bar(performance, title="Habit performance"):
    import plotly.graph_objects as go

    names = [item["name"] for item in performance]
    fig = go.Figure(
        data=[
            go.Bar(name="Done", x=names, y=[item["done_count"] for item in performance], marker_color=STATUS_COLORS["done"]),
            go.Bar(name="Skip", x=names, y=[item["skip_count"] for item in performance], marker_color=STATUS_COLORS["skip"]),
        ]
    )
    apply_common_plot_style(fig, title, show_xgrid=False)
    fig.update_layout(barmode="group", height=320)
    return fig


def sleep_duration_chart(logs, title="Sleep duration (hours)"):
    import plotly.graph_objects as go

    ordered = sorted(logs, key=lambda item: item.get("date") or "")
    dates = [item.get("date") for item in ordered]
    hours = [round((item.get("duration") or 0) / 60, 2) for item in ordered]
    colors = [SLEEP_QUALITY_COLORS[sleep_quality_band(item.get("quality"))] for item in ordered]
    fig = go.Figure(
        data=go.Scatter(
            x=dates,
            y=hours,
            mode="lines+markers",
            line=dict(color=_active_theme()["accent"], width=2),
            marker=dict(size=9, color=colors, line=dict(width=1, color=_active_theme()["plot_marker_line"])),
        )
    )
    apply_common_plot_style(fig, title)
    fig.update_layout(height=280)
    return fig


def focus_minutes_chart(sessions, title="Focus minutes per day"):
    import plotly.graph_objects as go

    totals = {}
    for session in sessions:
        day = session.get("date")
        totals[day] = totals.get(day, 0) + int(session.get("duration") or 0)
    days = sorted(totals)
    fig = go.Figure(
        data=go.Bar(
            x=days,
            y=[round(totals[day] / 60, 1) for day in days],
            marker_color=_active_theme()["accent"],
        )
    )
    apply_common_plot_style(fig, title, show_xgrid=False)
    fig.update_layout(height=260)
    return fig
