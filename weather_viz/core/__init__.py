"""
Core module for the Weather Chart Explorer.

Contains the configuration constants shared by every other module.
"""

from weather_viz.core.config import *
