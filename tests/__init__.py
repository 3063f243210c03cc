"""
Weather Chart Explorer Test Suite

This package contains unit tests and fixtures for the data layer, the
chart renderers, the drawing surfaces and the CLI.

Run tests with:
    pytest tests/
    pytest tests/test_fetcher.py -v
    pytest tests/test_renderers.py::TestBarChart -v
"""

__version__ = "1.0.0"
