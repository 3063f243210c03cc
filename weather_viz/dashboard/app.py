"""
Main Streamlit Application Entry Point.

This module provides the page configuration shared by the dashboard and the
utility functions for launching the Streamlit server.
"""

import subprocess
import sys
from pathlib import Path

import streamlit as st

from ..core.config import DASHBOARD_PORT, DASHBOARD_TITLE


def get_dashboard_path() -> Path:
    """Get the path to the main streamlit app file."""
    return Path(__file__).parent / "streamlit_app.py"


def build_streamlit_command(port: int = DASHBOARD_PORT, headless: bool = False) -> list:
    """Command line that serves the dashboard with ``streamlit run``."""
    return [
        sys.executable, "-m", "streamlit", "run",
        str(get_dashboard_path()),
        "--server.port", str(port),
        "--server.headless", "true" if headless else "false",
        "--browser.gatherUsageStats", "false",
    ]


def run_dashboard(port: int = DASHBOARD_PORT, headless: bool = False):
    """
    Launch the Streamlit dashboard and block until it exits.

    Args:
        port: Port to run on (default 8501)
        headless: Do not let Streamlit open a browser
    """
    return subprocess.run(build_streamlit_command(port, headless))


# ============================================================================
# STREAMLIT APP CONFIGURATION
# ============================================================================

def configure_page():
    """Configure Streamlit page settings."""
    st.set_page_config(
        page_title=DASHBOARD_TITLE,
        page_icon="🌦️",
        layout="wide",
        menu_items={
            'About': f"# {DASHBOARD_TITLE}\nTen days of Berlin temperature and humidity, six ways"
        }
    )
