import streamlit as st

from inkloop.ui.components import display_table, monthly_financial_chart, render_cards


def render(view_model):
    render_cards(view_model["cards"])

    monthly = view_model["tables"]["monthly_financials"]
    if monthly.empty:
        st.info("No monthly figures in the selected range.")
        return

    st.plotly_chart(monthly_financial_chart(monthly), use_container_width=True)

    mismatches = monthly[~monthly["ProfitMatches"]]
    if not mismatches.empty:
        st.warning(f"Stored profit differs from revenue - expenses in {len(mismatches)} month(s).")
    st.dataframe(display_table(monthly), width="stretch")
