"""
UI
==

This module implements the dashboard UI.
"""

import logging
from datetime import datetime

import plotly.express as px
import streamlit as st
from streamlit_autorefresh import st_autorefresh

from analytics.metrics import quiz_id, quiz_overview, quiz_title
from api.transport import TransportError
from core.config import get_settings
from core.logging import setup_logging
from dashboard.data_management import load_dashboard_data, load_quiz_results, load_results_file

logger = logging.getLogger(__name__)


def initialize_session_state():
    """Initializes page config and session variables."""
    st.set_page_config(page_title="Quiz Dash", layout="wide")

    if 'dashboard_data' not in st.session_state:
        st.session_state.dashboard_data = None
    if 'last_sync' not in st.session_state:
        st.session_state.last_sync = None
    if 'last_auto_refresh' not in st.session_state:
        st.session_state.last_auto_refresh = 0


def sync_with_backend(settings):
    with st.spinner("Loading dashboard..."):
        try:
            st.session_state.dashboard_data = load_dashboard_data(settings)
            st.session_state.last_sync = datetime.now().strftime('%H:%M:%S')
        except TransportError as e:
            logger.error("Error fetching dashboard data: %s", e)
            st.session_state.dashboard_data = None
            st.error("Failed to load dashboard data")


def render_sidebar(settings):
    with st.sidebar:
        st.title("📊 Quiz Dash")
        st.caption(f"Backend: {settings.API_URL}")

        st.divider()
        st.subheader("Update Settings")
        enable_auto_sync = st.checkbox("Enable Auto-sync", value=False)
        interval = st.slider("Interval (minutes)", 1, 30, settings.AUTO_REFRESH_MINUTES,
                             disabled=not enable_auto_sync)

        if enable_auto_sync:
            refresh_count = st_autorefresh(interval=interval * 60 * 1000, key="dashboard_auto_sync")
            if refresh_count > st.session_state.last_auto_refresh:
                st.session_state.last_auto_refresh = refresh_count
                st.session_state.dashboard_data = None

        if st.button("🔄 Refresh now"):
            st.session_state.dashboard_data = None
            st.rerun()


def render_top_indicators(stats):
    """Renders the four stat cards."""
    cards = stats.as_cards()
    for column, card in zip(st.columns(len(cards)), cards):
        column.metric(card["title"], card["value"], help=card["description"])


def render_quiz_overview(quizzes):
    st.subheader("📚 Quizzes")
    overview_df = quiz_overview(quizzes)
    if overview_df.empty:
        st.info("No quizzes yet.")
        return

    st.dataframe(overview_df, width="stretch", hide_index=True)

    fig = px.bar(overview_df, x="Quiz", y="Questions")
    fig.update_layout(height=300, margin=dict(l=10, r=10, t=10, b=10))
    st.plotly_chart(fig, width="stretch", key="quiz_questions_chart")


def render_quiz_results(settings, quizzes):
    quiz_options = {
        f"{quiz_title(quiz)} ({quiz_id(quiz)})": quiz_id(quiz)
        for quiz in quizzes if quiz_id(quiz)
    }
    if not quiz_options:
        if quizzes:
            logger.warning("None of the %d quizzes carries an id; results panel hidden", len(quizzes))
        return

    st.divider()
    st.subheader("🏁 Results")
    label = st.selectbox("Quiz", list(quiz_options))
    selected_id = quiz_options[label]

    col_live, col_detailed = st.columns(2)
    live = col_live.toggle("Live results", help="Includes attempts still in progress")
    detailed = col_detailed.checkbox("Detailed export")

    if st.button("Show results"):
        try:
            st.json(load_quiz_results(settings, selected_id, live=live))
        except TransportError:
            st.error("Failed to load quiz results")

    if st.button("Prepare download"):
        try:
            content = load_results_file(settings, selected_id, detailed=detailed)
            st.session_state.results_file = (selected_id, content)
        except TransportError:
            st.error("Failed to download quiz results")

    results_file = st.session_state.get("results_file")
    if results_file and results_file[0] == selected_id:
        st.download_button("⬇️ Download results", data=results_file[1],
                           file_name=f"quiz_{selected_id}_results",
                           mime="application/octet-stream")


def run_dashboard():
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)
    initialize_session_state()

    render_sidebar(settings)

    st.title("Dashboard")
    st.caption("Welcome back! Here's an overview of your quiz management system.")

    if st.session_state.dashboard_data is None:
        sync_with_backend(settings)

    data = st.session_state.dashboard_data
    if data is None:
        return

    render_top_indicators(data.stats)
    if st.session_state.last_sync:
        st.caption(f"Last sync: {st.session_state.last_sync}")

    render_quiz_overview(data.quizzes)
    render_quiz_results(settings, data.quizzes)
