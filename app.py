import streamlit as st

from inkloop.app_data import (
    get_controller,
    load_data,
    load_settings,
    render_export,
    render_sidebar,
    render_view_selector,
)
from inkloop.metrics import derive_view
from inkloop.qa import run_qa
from inkloop.ui.tabs import clients, financial, overview, projects, team
from inkloop.utils import setting

RENDERERS = {
    "overview": overview.render,
    "financial": financial.render,
    "clients": clients.render,
    "projects": projects.render,
    "team": team.render,
}

settings = load_settings()
st.set_page_config(page_title=setting(settings, "app.title", "Inkloop Dashboard"), layout="wide")

snapshot = load_data(setting(settings, "data.snapshot_path"))
controller = get_controller(settings)

st.title(setting(settings, "app.title", "Inkloop Dashboard"))
st.caption("Business metrics for smart decisions")

render_sidebar(controller)
render_export(snapshot, settings)

qa = run_qa(snapshot)
if qa["warnings"]:
    st.sidebar.warning(f"{len(qa['warnings'])} data-quality warning(s) in {snapshot.source}")

render_view_selector(controller)

view_model = derive_view(snapshot, controller, setting(settings, "metrics.partner_share_basis", "equal"))
RENDERERS[view_model["view"]](view_model)
