"""
Constants and configuration values for the adaptive layout engine.
"""

import os

# Axis indexes - allows using [axis] and [1-axis] patterns on (width, height) pairs
HORIZONTAL = 0
VERTICAL = 1
AXES = (HORIZONTAL, VERTICAL)
AXIS_NAMES = ('width', 'height')

# Alignment fractions
START = 0.0
CENTER = 0.5
END = 1.0

# Per-axis container expansion states
STATE_UNKNOWN = 'unknown'
STATE_NON_EXPANDING = 'nonExpanding'
STATE_EXPANDING = 'expanding'

# Render loop settings
MAX_RENDER_PASSES = 32			# Expansion settles one container level per pass
DEFAULT_LAYOUT_WIDTH = 400
DEFAULT_LAYOUT_HEIGHT = 300

# Text measurement defaults
DEFAULT_FONT_HEIGHT = 16
DIVIDER_THICKNESS = 1
DEFAULT_PADDING = 16

# Gap a column without explicit spacing leaves before each item after the first
TEXT_ITEM_SPACING = 20			# after a text item
DEFAULT_ITEM_SPACING = 40		# after anything else

# Diagnostics
DEBUG_NEGOTIATION = bool(os.environ.get('ADAPTIVE_LAYOUT_DEBUG'))
SETTINGS_FILE = os.environ.get('ADAPTIVE_LAYOUT_SETTINGS', 'adaptive-layout.json')
