import streamlit as st

from inkloop.formatting import display_value
from inkloop.ui.components import client_type_pie, render_cards

KEY_METRICS = ("Average Client Value", "Client Lifetime Value", "Growth Rate")


def render(view_model):
    cards = view_model["cards"]
    headline = [card for card in cards if card.title not in KEY_METRICS]
    key_metrics = [card for card in cards if card.title in KEY_METRICS]

    render_cards(headline)

    left, right = st.columns(2)
    with left:
        st.plotly_chart(client_type_pie(view_model["tables"]["client_types"], "Service Distribution"), use_container_width=True)
    with right:
        st.subheader("Key Client Metrics")
        for card in key_metrics:
            st.markdown(f"**{card.title}**: {display_value(card.value)}")
