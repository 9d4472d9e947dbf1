"""Shared constants for the configuration module."""

# Comfort band limits in g/m³ (dry below the first, humid above the second)
DRY_BELOW = 7
HUMID_ABOVE = 12

# Display colors per comfort band
COLOR_DRY = "#FF9800"
COLOR_COMFORTABLE = "#4CAF50"
COLOR_HUMID = "#f44336"
COLOR_UNKNOWN = "#999"

OPEN_METEO_URL = "https://api.open-meteo.com/v1/forecast"
