"""
Constants for the Dice Round Timer application.

This module contains configuration constants used throughout the application.
"""

# Application metadata
APP_TITLE = "Dice Round Timer"

# Stopwatch sampling
TICK_INTERVAL_SECONDS = 0.01

# Desktop display refresh (milliseconds between label updates)
UI_REFRESH_MS = 50

# Team size limits (matches the add-team stepper)
MIN_PLAYERS = 1
MAX_PLAYERS = 20
DEFAULT_PLAYER_COUNT = 1

# Web server defaults
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 7122

# Logging
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Reset scopes accepted by the session controller and the web API
RESET_SCOPES = ("current_round", "all_rounds", "everything")
