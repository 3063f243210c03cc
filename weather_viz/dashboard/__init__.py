"""
Weather Chart Explorer Dashboard - Streamlit Web Interface.

One page with six chart buttons, the selected chart drawn on a Plotly
surface, and the data table underneath.
"""

from .app import run_dashboard, get_dashboard_path

__all__ = ['run_dashboard', 'get_dashboard_path']
