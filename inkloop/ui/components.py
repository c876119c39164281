import altair as alt
import pandas as pd
import plotly.express as px
import streamlit as st

from inkloop.errors import NOT_COMPUTABLE
from inkloop.formatting import display_value

PALETTE = ["#3b82f6", "#10b981", "#f59e0b", "#ef4444"]


def render_cards(cards, per_row: int = 4):
    for start in range(0, len(cards), per_row):
        row = cards[start:start + per_row]
        columns = st.columns(per_row)
        for column, card in zip(columns, row):
            delta = None
            if card.trend is not None and card.trend is not NOT_COMPUTABLE:
                delta = f"{card.trend:+}%"
            column.metric(card.title, display_value(card.value), delta=delta)
            if card.subtitle:
                column.caption(card.subtitle)


def display_table(df: pd.DataFrame) -> pd.DataFrame:
    """Replace NOT_COMPUTABLE cells so st.dataframe shows N/A."""
    return df.apply(lambda col: col.map(display_value))


def revenue_profit_chart(df: pd.DataFrame):
    fig = px.line(df, x="Month", y=["Revenue", "Profit"], markers=True, color_discrete_sequence=PALETTE)
    fig.update_layout(title="Revenue vs Profit", legend_title=None)
    return fig


def monthly_financial_chart(df: pd.DataFrame):
    fig = px.bar(
        df,
        x="Month",
        y=["Revenue", "Expenses", "Profit"],
        barmode="group",
        color_discrete_sequence=[PALETTE[0], PALETTE[3], PALETTE[1]],
    )
    fig.update_layout(title="Monthly Financial Overview", legend_title=None)
    return fig


def client_type_pie(df: pd.DataFrame, title: str = "Clients by Service Type"):
    fig = px.pie(df, names="Category", values="Clients", color_discrete_sequence=PALETTE)
    fig.update_layout(title=title)
    return fig


def project_timeline_chart(df: pd.DataFrame):
    fig = px.bar(df, x="Month", y=["Started", "Completed"], barmode="group", color_discrete_sequence=PALETTE)
    fig.update_layout(title="Project Activity Timeline", legend_title=None)
    return fig


def partner_bar_chart(df: pd.DataFrame, field: str, color: str):
    """Horizontal bar per partner for ``field`` (Hours or Revenue)."""
    chart = alt.Chart(df).mark_bar(color=color).encode(
        x=alt.X(f"{field}:Q", title=field),
        y=alt.Y("Partner:N", sort=None, title=None),
        tooltip=["Partner", "Hours", "Revenue"],
    ).properties(height=max(200, len(df) * 50))
    return chart
