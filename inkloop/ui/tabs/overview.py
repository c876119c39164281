import streamlit as st

from inkloop.ui.components import client_type_pie, render_cards, revenue_profit_chart


def render(view_model):
    render_cards(view_model["cards"])

    left, right = st.columns(2)
    with left:
        monthly = view_model["tables"]["monthly_financials"]
        if monthly.empty:
            st.info("No monthly figures in the selected range.")
        else:
            st.plotly_chart(revenue_profit_chart(monthly), use_container_width=True)
    with right:
        st.plotly_chart(client_type_pie(view_model["tables"]["client_types"]), use_container_width=True)
