import streamlit as st

from inkloop.formatting import format_currency, format_hours, format_percent, format_rate
from inkloop.ui.components import PALETTE, display_table, partner_bar_chart, render_cards


def render(view_model):
    render_cards(view_model["cards"], per_row=3)

    partners = view_model["tables"]["partners"]
    if partners.empty:
        st.info("No partner contributions recorded.")
        return

    left, right = st.columns(2)
    with left:
        st.subheader("Partner Contributions (Hours)")
        st.altair_chart(partner_bar_chart(partners, "Hours", PALETTE[0]), use_container_width=True)
    with right:
        st.subheader("Revenue by Partner")
        st.altair_chart(partner_bar_chart(partners, "Revenue", PALETTE[1]), use_container_width=True)

    st.subheader("Partner Performance Summary")
    summary = partners.assign(
        Hours=partners["Hours"].map(format_hours),
        Revenue=partners["Revenue"].map(format_currency),
        AvgRate=partners["AvgRate"].map(format_rate),
        Share=partners["Share"].map(format_percent),
    )
    st.dataframe(display_table(summary), width="stretch")
