# constants.py
"""
Application-level constants.

These values are static and do not change between simulation runs.
They cover rendering properties, default window sizes, the default
simulation parameters used when config.json leaves a key out, and the
logical key bindings.
"""

# Visualization settings
# Set to True to run in borderless fullscreen mode.
# Set to False to run in a resizable window (WINDOW_WIDTH x WINDOW_HEIGHT).
FULLSCREEN = False
WINDOW_WIDTH = 1280
WINDOW_HEIGHT = 720
WINDOW_TITLE = "Connected Dots"
FPS = 60
BACKGROUND_COLOR = (24, 24, 24) # Dark Gray

# Dots are violet, connection lines a slightly lighter violet whose
# opacity fades with distance.
DOT_COLOR = (238, 130, 238)
LINE_COLOR = (237, 130, 237) # (0.93, 0.51, 0.93)

# --- Status Text ---
INFO_TEXT_PADDING = 6 # Pixels from the top-left corner
INFO_TEXT_SIZE = 16 # Pixels
# pygame's default font renders smaller than its point size, so it is
# loaded at this size to get INFO_TEXT_SIZE pixel glyphs.
INFO_TEXT_FONT_SIZE = 20
INFO_TEXT_COLOR = (250, 235, 215) # Antique White

# --- Default Simulation Parameters ---
CONNECT_FORCE = 300.0 # Connect distance in world units
SPEED = 1.0
DOT_SIZE = 6.0
MIN_VEL = -600.0 # World units per second
MAX_VEL = 600.0
DRAG_SPAWN_INTERVAL = 0.070 # Seconds between two drag spawns

# Per-frame adjustment applied while a key is held.
CONNECT_FORCE_STEP = 2.0
SPEED_STEP = 0.04

# --- Logical Actions ---
# The visualizer maps physical keys onto these names so the simulation
# never depends on pygame.
ACTION_CONNECT_UP = "connect_up"        # I (held)
ACTION_CONNECT_DOWN = "connect_down"    # K (held)
ACTION_SPEED_UP = "speed_up"            # U (held)
ACTION_SPEED_DOWN = "speed_down"        # J (held)
ACTION_REVERSE = "reverse"              # R (just pressed)
ACTION_FREEZE = "freeze"                # P (just pressed)
ACTION_CLEAR = "clear"                  # Space (just pressed)
ACTION_EXIT = "exit"                    # Escape (held)
