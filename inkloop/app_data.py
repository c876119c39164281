import streamlit as st

from inkloop.errors import DashboardError
from inkloop.export import CSV_MIME, export_csv
from inkloop.io import load_snapshot
from inkloop.metrics import build_partner_table
from inkloop.utils import read_settings, setting, setup_logger
from inkloop.view_state import RANGE_LABELS, RANGES, VIEWS, ViewStateController


@st.cache_data
def load_data(path):
    return load_snapshot(path)


def load_settings() -> dict:
    settings = read_settings()
    setup_logger(level=setting(settings, "logging.level", "INFO"))
    return settings


def get_controller(settings: dict) -> ViewStateController:
    if "view_controller" not in st.session_state:
        st.session_state["view_controller"] = ViewStateController(
            view=setting(settings, "app.default_view", "overview"),
            range_=setting(settings, "app.default_range", "6m"),
            range_filtering=setting(settings, "filters.range_filtering", True),
        )
    return st.session_state["view_controller"]


def render_sidebar(controller: ViewStateController) -> None:
    st.sidebar.title("Filters")
    range_choice = st.sidebar.selectbox(
        "Range",
        RANGES,
        index=RANGES.index(controller.current_range()),
        format_func=RANGE_LABELS.get,
    )
    controller.select_range(range_choice)


def render_view_selector(controller: ViewStateController) -> None:
    view_choice = st.radio(
        "View",
        VIEWS,
        index=VIEWS.index(controller.current_view()),
        horizontal=True,
        format_func=str.title,
        label_visibility="collapsed",
    )
    controller.select_view(view_choice)


def _download_saver(text: str, filename: str) -> None:
    st.sidebar.download_button("Export", data=text, file_name=filename, mime=CSV_MIME)


def render_export(snapshot, settings: dict) -> None:
    table = build_partner_table(snapshot, setting(settings, "metrics.partner_share_basis", "equal"))
    try:
        export_csv(
            table,
            setting(settings, "export.partner_filename", "inkloop_partners.csv"),
            saver=_download_saver,
            quote=setting(settings, "export.quote", False),
        )
    except DashboardError as exc:
        st.sidebar.error(f"Export unavailable: {exc}")
