# charts.py: plotly figures fed by the transforms in transforms.py and projection.py

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

PALETTE = ["#4c51bf", "#48bb78", "#f6ad55", "#e53e3e", "#38b2ac", "#d53f8c", "#4299e1"]
INCOME_COLOR = "#48bb78"
EXPENSE_COLOR = "#e53e3e"


def _currency_axis(fig, axis="yaxis"):
    fig.update_layout(**{axis: dict(tickprefix="$", tickformat=",.0f")})
    return fig


def category_pie(groups):
    """
    Donut chart of spending by category from ``group_by_category`` output.
    """
    by_cat = pd.DataFrame(groups, columns=["category", "total_amount", "share"])
    fig = px.pie(
        by_cat,
        values="total_amount",
        names="category",
        hole=0.4,
        title="Spending by Category",
        color_discrete_sequence=PALETTE,
    )
    fig.update_traces(textposition="inside", texttemplate="%{label} (%{percent:.0%})", hovertemplate="%{label}: $%{value:,.0f}")
    return fig


def income_expense_bar(months):
    """
    Grouped bars of income vs. expenses from ``group_by_month`` output.
    """
    monthly = pd.DataFrame(months, columns=["label", "income", "expense"])

    fig = go.Figure()
    fig.add_trace(go.Bar(x=monthly["label"], y=monthly["income"], name="Income", marker_color=INCOME_COLOR))
    fig.add_trace(go.Bar(x=monthly["label"], y=monthly["expense"], name="Expenses", marker_color=EXPENSE_COLOR))

    fig.update_layout(barmode="group", title="Income vs Expenses", height=300)
    return _currency_axis(fig)


def projection_line(points):
    """Line of projected portfolio value from ``project_growth`` output."""
    df = pd.DataFrame(points, columns=["label", "value"])
    fig = px.line(df, x="label", y="value", markers=True, title="Investment Projection (10 years)")
    fig.update_traces(line_color=PALETTE[0], name="Projected Value")
    fig.update_layout(xaxis_title=None, yaxis_title=None, height=300)
    return _currency_axis(fig)


def allocation_pie(allocation):
    """Fixed vs. variable income split of a risk tier (``allocation_for`` output)."""
    df = pd.DataFrame(allocation, columns=["name", "value"])
    fig = px.pie(df, values="value", names="name", color_discrete_sequence=PALETTE[:2])
    fig.update_traces(hovertemplate="%{label}: %{value}%")
    return fig
