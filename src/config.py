import os
import logging

# --- CREDIT LIMITS ---

# Credits are clamped into this range, never rejected
MIN_CREDITS = 1
MAX_CREDITS = 5
DEFAULT_CREDITS = 3

# --- SLOT PATTERN FORMAT ---

# Canonical separator used when rendering a slot list ("A1+TG1")
SLOT_JOINER = "+"

# Accepted separators when parsing typed text: any run of '+', whitespace or ','
SLOT_DELIMITERS = r"[+\s,]+"

# --- DISPLAY GROUPS ---

MORNING = "morning"
EVENING = "evening"
CUSTOM = "custom"

PREFERRED_GROUPS = (MORNING, EVENING, CUSTOM)
DEFAULT_GROUP = MORNING

# Slot buttons per row in the toggle grid
GRID_ROW_WIDTH = 5

# --- LOGGING ---

LOG_LEVEL = getattr(
    logging,
    os.getenv("SLOT_SELECTOR_LOG_LEVEL", "INFO").upper(),
    logging.INFO,
)
