"""Global constants for timerpie.

All tunables live here. No other module should hardcode radii, darken
factors, or timing values.
"""

# ── Timer ─────────────────────────────────────────────────────────────────────
MAX_MINUTES = 180          # longest timer the dial can show (three full rings)
MAX_INPUT_LENGTH = 20      # raw input strings longer than this are rejected
WATCHDOG_INTERVAL_S = 0.1  # background deadline poll
FRAME_RATE = 30            # default refresh rate of the CLI render loop

# ── Dial geometry ─────────────────────────────────────────────────────────────
CENTER = 225
RADIUS = {
    "outer":  180,
    "middle": 120,
    "inner":   60,
}

# Digital display: every ring is squeezed into the outer third (180 -> 120)
RING_ZONE_OUTER = 180
RING_ZONE_WIDTH = 60
RING_GAP = 2

TICK_MAJOR_LENGTH = 15
TICK_MINOR_LENGTH = 8
TICK_OUTER_OFFSET = 5
LABEL_OFFSET = 35

# ── Colors ────────────────────────────────────────────────────────────────────
DEFAULT_COLOR = "#ff6b35"
DARKEN_MIDDLE = 0.7
DARKEN_INNER = 0.5
DARKEN_DIGITAL_OUTER = 0.85
PREVIEW_DIM = 0.2          # opacity of the dial while not running

# ── Labels ────────────────────────────────────────────────────────────────────
APP_TITLE = "TimerPie"
