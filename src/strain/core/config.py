"""
Configuration constants for the workout tracker.

Fixed limits and defaults live here. Seed data and user-tunable values are
loaded from YAML by config_loader.py.
"""

from typing import Final

# =============================================================================
# PERSISTENCE
# =============================================================================

STORAGE_KEY: Final[str] = "strain-data-v2"  # File stem of the saved state document
DATA_DIR_ENV: Final[str] = "STRAIN_HOME"  # Overrides the default ~/.strain
DEFAULT_DATA_DIRNAME: Final[str] = ".strain"
USER_CONFIG_FILENAME: Final[str] = "config.yaml"
BUNDLED_CONFIG_FILENAME: Final[str] = "defaults.yaml"

# =============================================================================
# BEST LIFTS
# =============================================================================

MAX_BEST_LIFTS: Final[int] = 3  # Tracked exercise names at any one time

# =============================================================================
# PROFILE
# =============================================================================

THEMES: Final[tuple[str, ...]] = ("dark", "blue", "orange")
DEFAULT_THEME: Final[str] = "dark"

# =============================================================================
# DATES
# =============================================================================

DATE_FORMAT: Final[str] = "%Y-%m-%d"

# =============================================================================
# EVENTS
# =============================================================================

EVENT_WORKOUT_STARTED: Final[str] = "workout:started"
EVENT_WORKOUT_FINISHED: Final[str] = "workout:finished"
