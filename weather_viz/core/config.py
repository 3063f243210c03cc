"""
Central Configuration Module for the Weather Chart Explorer.

=== PURPOSE ===
Single source of truth for every constant used across the package: the
weather API endpoint and query, the record cap, the canvas and plot-area
geometry, per-chart paddings and headroom factors, colors, animation
durations and label offsets.  Every other module imports from here rather
than defining its own magic numbers.

=== DATA FLOW ===
  1. WEATHER_API_URL / WEATHER_API_PARAMS drive the single outbound fetch in
     weather_viz.data.fetcher.
  2. MAX_RECORDS bounds the normalized record set (and so the chart width).
  3. CANVAS_* / PLOT_* describe the drawing surface every renderer targets;
     the band axis always spans [0, PLOT_WIDTH] and value axes span
     [PLOT_HEIGHT, 0] (SVG-style, y grows downward).
  4. *_HEADROOM constants are fixed per chart type, never data-derived.
"""

# ==========================================
# WEATHER API
# ==========================================
WEATHER_API_URL = "https://api.open-meteo.com/v1/forecast"

WEATHER_API_PARAMS = {
    'latitude': 52.52,
    'longitude': 13.41,
    'hourly': 'temperature_2m,relative_humidity_2m',
    'start': '2024-05-01',
    'end': '2024-05-10',
}

# Field names inside the "hourly" block of the payload
HOURLY_KEY = 'hourly'
TIME_FIELD = 'time'
TEMPERATURE_FIELD = 'temperature_2m'
HUMIDITY_FIELD = 'relative_humidity_2m'

# Timestamps look like 2024-05-01T13:00; the date is everything before this
TIME_SEPARATOR = 'T'

# Seconds before the fetch is abandoned.  No retries are attempted.
REQUEST_TIMEOUT_SECONDS = 10

# ==========================================
# RECORD SET
# ==========================================
# Hard cap on distinct days kept from the feed
MAX_RECORDS = 10

# ==========================================
# CANVAS & PLOT AREA
# ==========================================
CANVAS_WIDTH = 830
CANVAS_HEIGHT = 450

PLOT_WIDTH = 800
PLOT_HEIGHT = 400

# Bottom axis is shifted right by this many units
X_AXIS_OFFSET = 10
TICK_SIZE = 6

TITLE_POSITION = (400, 20)
TITLE_FONT_SIZE = 18
AXIS_LABEL_FONT_SIZE = 14
TICK_FONT_SIZE = 10

# Axis title anchors: bottom title relative to the translated axis group,
# left title in canvas coordinates (rotated -90 degrees)
X_AXIS_LABEL_POSITION = (400, 40)
Y_AXIS_LABEL_POSITION = (-40, 200)

# ==========================================
# PER-CHART SCALE SETTINGS
# ==========================================
BAR_PADDING = 0.3
LINE_PADDING = 0.1
HEATMAP_X_PADDING = 0.1
HEATMAP_Y_PADDING = 0.0
HISTOGRAM_PADDING = 0.1

# Value domains are [0, max * headroom]
BAR_HEADROOM = 1.0
HEATMAP_HEADROOM = 1.0
SCATTER_X_HEADROOM = 1.0
LINE_HEADROOM = 1.2
HISTOGRAM_HEADROOM = 1.2
SCATTER_Y_HEADROOM = 1.2

# ==========================================
# COLORS
# ==========================================
PRIMARY_COLOR = '#00246B'
LINE_POINT_COLOR = '#e74c3c'
HISTOGRAM_COLOR = '#3498db'
HISTOGRAM_HOVER_COLOR = '#2980b9'
LABEL_COLOR = '#ffffff'
LEGEND_TEXT_COLOR = PRIMARY_COLOR
TABLE_HEADER_COLOR = 'rgb(76 104 159)'

# Chart canvas in the browser
CHART_BACKGROUND = '#4C689F'
CHART_FONT_COLOR = '#FFFFFF'
AXIS_COLOR = '#FFFFFF'

# Heatmap intensity runs from dark (cold) to light (warm)
HEATMAP_COLORS = ('#00246B', '#CADCFC')

# ==========================================
# SHAPES, LABELS & ANIMATION
# ==========================================
BAR_GROW_DURATION_MS = 800
PIE_SWEEP_DURATION_MS = 1000
HISTOGRAM_HOVER_DURATION_MS = 200

BAR_LABEL_OFFSET = 15
BAR_LABEL_FONT_SIZE = 8

LINE_POINT_RADIUS = 5
LINE_POINT_HOVER_RADIUS = 8
LINE_LABEL_OFFSET = 16
LINE_LABEL_FONT_SIZE = 12

SCATTER_POINT_RADIUS = 8
SCATTER_LABEL_OFFSET = 20
SCATTER_LABEL_FONT_SIZE = 9

PIE_CENTER = (400, 200)
PIE_OUTER_RADIUS = 150
PIE_INNER_RADIUS = 0

LEGEND_ORIGIN = (500, 50)
LEGEND_ROW_HEIGHT = 20
LEGEND_SWATCH_SIZE = 10
LEGEND_TEXT_OFFSET = 20

HEATMAP_CAPTION = "Temperature based on color intensity"
HEATMAP_CAPTION_POSITION = (400, 430)
HEATMAP_CAPTION_FONT_SIZE = 12

# Plotly figure: visible x starts left of the origin so the y axis fits,
# and entry animations are sampled into this many frames
FIGURE_X_MIN = -60
ANIMATION_FRAMES = 10

# ==========================================
# TABLE
# ==========================================
TABLE_HEADERS = ('Date', 'Temperature (°C)', 'Humidity (%)')

# ==========================================
# DASHBOARD
# ==========================================
DASHBOARD_PORT = 8501
DASHBOARD_TITLE = "Weather Chart Explorer"
