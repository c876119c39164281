import streamlit as st

from inkloop.ui.components import project_timeline_chart, render_cards


def render(view_model):
    render_cards(view_model["cards"])

    timeline = view_model["tables"]["project_timeline"]
    if timeline.empty:
        st.info("No project activity in the selected range.")
    else:
        st.plotly_chart(project_timeline_chart(timeline), use_container_width=True)
