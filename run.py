#!/usr/bin/env python3
"""
Weather Chart Explorer - Main CLI Entry Point
=============================================

This script is the single command-line entry point for the Weather Chart
Explorer.  It has two modes:

LAUNCH (default)  (launch_dashboard)
    Starts the Streamlit dashboard (weather_viz/dashboard/streamlit_app.py)
    as a managed subprocess and optionally opens the browser.  The dashboard
    fetches the Open-Meteo feed once, reduces it to one record per day and
    renders whichever of the six charts the user picks.

HEALTH CHECK  (--health-check)
    Verifies the environment without starting a server:
      1. Python version
      2. Required packages importable
      3. Weather API reachable
      4. All six charts render on a headless RecordingSurface, from the
         live feed when it is reachable, otherwise from the empty state

Usage:
    python run.py                  Launch the dashboard
    python run.py --port 8502      Use a custom port
    python run.py --no-browser     Do not open a browser tab
    python run.py --health-check   Run diagnostics and exit
    python run.py --verbose        Show INFO-level logging on the console
"""

import argparse
import atexit
import logging
import subprocess
import sys
import threading
import time
import webbrowser
from pathlib import Path

import requests
from tqdm import tqdm

# Add project root to path so the package imports without installation
sys.path.insert(0, str(Path(__file__).parent))

from weather_viz.core.config import (
    WEATHER_API_URL,
    WEATHER_API_PARAMS,
    REQUEST_TIMEOUT_SECONDS,
    DASHBOARD_PORT,
)
from weather_viz.dashboard.app import build_streamlit_command, get_dashboard_path
from weather_viz.data.fetcher import fetch_weather_data
from weather_viz.models.data_models import ChartType
from weather_viz.visualization.renderers import render_chart
from weather_viz.visualization.surface import RecordingSurface


# ==========================================
# LOGGING
# ==========================================
# Dual-output logging: a DEBUG-level log file under logs/ and a quieter
# console handler (WARNING by default, INFO with --verbose).

def setup_logging(verbose: bool = False) -> Path:
    """
    Configure the root logger with file and console handlers.

    Args:
        verbose: When True, lower the console handler to INFO level.

    Returns:
        Path: Absolute path to the newly created log file.
    """
    log_dir = Path(__file__).parent / "logs"
    log_dir.mkdir(exist_ok=True)

    timestamp = time.strftime('%Y%m%d_%H%M%S')
    log_file = log_dir / f"weather_viz_{timestamp}.log"

    file_formatter = logging.Formatter(
        '%(asctime)s | %(name)s | %(levelname)s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    console_formatter = logging.Formatter(
        '%(asctime)s | %(levelname)s | %(message)s',
        datefmt='%H:%M:%S'
    )

    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(file_formatter)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO if verbose else logging.WARNING)
    console_handler.setFormatter(console_formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # May be called twice (default, then again for --verbose)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    if verbose:
        print(f"\U0001f4dd Verbose logging enabled. Log file: {log_file}")

    return log_file


logger = logging.getLogger(__name__)


# ==========================================
# HEALTH CHECK UTILITIES
# ==========================================

def check_weather_api() -> bool:
    """
    Check that the Open-Meteo forecast endpoint answers with HTTP 200.

    Returns:
        bool: True if the API responded with a 2xx status, False otherwise.
    """
    try:
        response = requests.get(WEATHER_API_URL, params=WEATHER_API_PARAMS,
                                timeout=REQUEST_TIMEOUT_SECONDS)
        return response.ok
    except requests.RequestException as e:
        logger.warning(f"[HealthCheck] Weather API not reachable: {e}")
        return False


def check_required_packages():
    """
    Verify that core Python packages are importable.

    Returns:
        Tuple of (all_installed: bool, missing_packages: list[str]).
        missing_packages contains pip install names, not import names.
    """
    # Mapping: Python import name -> pip install name
    required = {
        'pandas': 'pandas',
        'numpy': 'numpy',
        'plotly': 'plotly',
        'streamlit': 'streamlit',
        'requests': 'requests',
        'tqdm': 'tqdm',
    }

    missing = []
    for import_name, package_name in required.items():
        try:
            __import__(import_name)
        except ImportError:
            missing.append(package_name)

    return len(missing) == 0, missing


def check_chart_rendering(records=()):
    """
    Render every chart on a headless surface and run its animations to the end.

    Args:
        records: Record set to draw; the empty set exercises the empty state.

    Returns:
        Tuple of (all_rendered: bool, failures: dict chart name -> error text).
    """
    surface = RecordingSurface()
    selection = ChartType.NONE
    failures = {}

    with tqdm(total=len(ChartType.drawable()), desc="Rendering charts", unit="chart",
              file=sys.stdout) as pbar:
        for chart_type in ChartType.drawable():
            pbar.set_postfix_str(chart_type.value)
            try:
                selection = render_chart(surface, chart_type, records, selection)
                surface.finish_animations()
                if surface.chart_types() != (chart_type,):
                    failures[chart_type.value] = f"surface holds {surface.chart_types()}"
                elif not surface.texts('title'):
                    failures[chart_type.value] = "no title drawn"
            except (ValueError, TypeError, RuntimeError, KeyError) as e:
                logger.error(f"[HealthCheck] {chart_type.value} render failed: {e}", exc_info=True)
                failures[chart_type.value] = str(e)
            pbar.update(1)

    return len(failures) == 0, failures


def health_check() -> bool:
    """
    Run a diagnostic check and print a human-readable report.

    Returns:
        bool: True if Python, packages and chart rendering are OK.  API
              reachability is reported but not critical: the dashboard
              shows the empty state with an error banner without it.
    """
    print()
    print("=" * 60)
    print("  \U0001f3e5 WEATHER CHART EXPLORER - HEALTH CHECK")
    print("=" * 60)
    print()

    # --- Python version ---
    python_version = sys.version_info
    python_ok = python_version >= (3, 9)
    status = "✅" if python_ok else "❌"
    print(f"{status} Python Version: {python_version.major}.{python_version.minor}.{python_version.micro}")
    if not python_ok:
        print("   Required: Python 3.9+")

    # --- Python packages ---
    packages_ok, missing = check_required_packages()
    status = "✅" if packages_ok else "❌"
    print(f"{status} Required Packages: {'All installed' if packages_ok else f'{len(missing)} missing'}")
    if missing:
        print(f"   Missing: {', '.join(missing)}")
        print(f"   Install with: pip install {' '.join(missing)}")

    # --- Weather API (informational) ---
    api_ok = check_weather_api()
    status = "✅" if api_ok else "⚠️ "
    print(f"{status} Weather API: {'Reachable' if api_ok else 'Not accessible'}")

    records = ()
    if api_ok:
        result = fetch_weather_data()
        records = result.records
        status = "✅" if result.ok else "⚠️ "
        print(f"{status} Weather Data: {len(records)} daily records" if result.ok
              else f"{status} Weather Data: {result.error}")

    # --- Chart rendering ---
    render_ok, failures = check_chart_rendering(records)
    status = "✅" if render_ok else "❌"
    print(f"{status} Chart Rendering: {'All six charts' if render_ok else f'{len(failures)} failed'}")
    for name, error in failures.items():
        print(f"   {name}: {error}")

    print()
    print("=" * 60)

    all_critical = python_ok and packages_ok and render_ok
    if all_critical:
        print("  ✅ All critical checks passed!")
    else:
        print("  ❌ Some critical checks failed. Please fix the issues above.")
    print("=" * 60)
    print()

    return all_critical


def parse_args(argv=None):
    """
    Parse and return command-line arguments.

    Returns:
        argparse.Namespace with the parsed flags.
    """
    parser = argparse.ArgumentParser(
        description='Weather Chart Explorer - interactive weather charts',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run.py                  Launch the dashboard
  python run.py --port 8502      Use custom port for dashboard
  python run.py --health-check   Run diagnostics and exit
        """
    )

    parser.add_argument(
        '--port',
        type=int,
        default=DASHBOARD_PORT,
        help=f'Port for Streamlit dashboard (default: {DASHBOARD_PORT})'
    )

    parser.add_argument(
        '--no-browser',
        action='store_true',
        help='Do not automatically open browser'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Show detailed logging output'
    )

    parser.add_argument(
        '--health-check',
        action='store_true',
        help='Run system health check and exit'
    )

    return parser.parse_args(argv)


def launch_dashboard(port: int = DASHBOARD_PORT, open_browser: bool = True) -> bool:
    """
    Launch the Streamlit dashboard as a managed subprocess.

    Streamlit runs headless; the browser is opened here after a short delay
    so the server has bound the port.  An atexit handler terminates the
    subprocess on exit.

    Args:
        port: TCP port for the Streamlit HTTP server.
        open_browser: Open http://localhost:{port} after startup.

    Returns:
        bool: True if the dashboard ran and exited cleanly (including Ctrl+C),
              False on errors.
    """
    dashboard_path = get_dashboard_path()
    if not dashboard_path.exists():
        print(f"❌ Error: Dashboard not found at {dashboard_path}")
        return False

    print()
    print("=" * 60)
    print("  \U0001f310 Launching Weather Chart Explorer")
    print("=" * 60)
    print(f"  \U0001f517 URL: http://localhost:{port}")
    print("  Press Ctrl+C to stop the dashboard")
    print("-" * 60)
    sys.stdout.flush()

    streamlit_process = None

    def cleanup():
        """Terminate the Streamlit subprocess; SIGKILL if it ignores SIGTERM."""
        if streamlit_process and streamlit_process.poll() is None:
            streamlit_process.terminate()
            try:
                streamlit_process.wait(timeout=5)
            except subprocess.TimeoutExpired:
                streamlit_process.kill()

    atexit.register(cleanup)

    try:
        if open_browser:
            def open_browser_delayed():
                time.sleep(3)
                try:
                    webbrowser.open(f"http://localhost:{port}")
                except webbrowser.Error as e:
                    logger.warning(f"Failed to open browser: {e}")

            threading.Thread(target=open_browser_delayed, daemon=True).start()

        logger.info(f"[Launcher] Starting Streamlit on port {port}")
        streamlit_process = subprocess.Popen(build_streamlit_command(port, headless=True))
        streamlit_process.wait()
        return streamlit_process.returncode == 0

    except KeyboardInterrupt:
        print("\n\n✅ Dashboard stopped by user.")
        cleanup()
        return True
    except FileNotFoundError:
        print("\n❌ Streamlit not found. Install with: pip install streamlit plotly")
        return False


def main(argv=None):
    """Parse CLI args and dispatch to the health check or the dashboard."""
    args = parse_args(argv)
    setup_logging(verbose=args.verbose)

    if args.health_check:
        success = health_check()
        sys.exit(0 if success else 1)

    success = launch_dashboard(port=args.port, open_browser=not args.no_browser)
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
