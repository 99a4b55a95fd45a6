# app/data/palette.py
from enum import Enum
from typing import Dict, List


# =====================================================================
# ENUMS
# =====================================================================

class PatternType(str, Enum):
    """Visual fill of an activity swatch."""
    SOLID = "solid"
    DOTS = "dots"
    STRIPES = "stripes"
    CROSS = "cross"
    GRID = "grid"
    DIAGONAL = "diagonal"


# =====================================================================
# GROUP COLORS
# =====================================================================

COLOR_PALETTE: List[Dict[str, str]] = [
    {"name": "Red", "value": "#ef4444"},
    {"name": "Orange", "value": "#f97316"},
    {"name": "Amber", "value": "#f59e0b"},
    {"name": "Yellow", "value": "#eab308"},
    {"name": "Lime", "value": "#84cc16"},
    {"name": "Green", "value": "#22c55e"},
    {"name": "Emerald", "value": "#10b981"},
    {"name": "Teal", "value": "#14b8a6"},
    {"name": "Cyan", "value": "#06b6d4"},
    {"name": "Sky", "value": "#0ea5e9"},
    {"name": "Blue", "value": "#3b82f6"},
    {"name": "Indigo", "value": "#6366f1"},
    {"name": "Violet", "value": "#8b5cf6"},
    {"name": "Purple", "value": "#a855f7"},
    {"name": "Fuchsia", "value": "#d946ef"},
    {"name": "Pink", "value": "#ec4899"},
    {"name": "Rose", "value": "#f43f5e"},
    {"name": "Slate", "value": "#64748b"},
    {"name": "Gray", "value": "#6b7280"},
    {"name": "Zinc", "value": "#71717a"},
]

PALETTE_VALUES = {c["value"] for c in COLOR_PALETTE}
DEFAULT_COLOR = COLOR_PALETTE[0]["value"]


# =====================================================================
# JOURNAL
# =====================================================================

DAY_QUALITY_OPTIONS: List[Dict] = [
    {"value": 1, "label": "Bad", "emoji": "😞"},
    {"value": 2, "label": "Poor", "emoji": "😕"},
    {"value": 3, "label": "Okay", "emoji": "😐"},
    {"value": 4, "label": "Good", "emoji": "😊"},
    {"value": 5, "label": "Great", "emoji": "🤩"},
]
