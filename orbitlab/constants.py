"""Shared constants for the orbit laboratory (simulation units throughout)."""

# --- Physics ---
G_DEFAULT = 1.0  # gravitational constant in simulation units
G_SLIDER_RANGE = (0.0, 2.0)
RADIUS_FACTOR = 5.0  # radius = RADIUS_FACTOR * mass ** (1/3)

# --- Time control ---
BASE_TIME_SCALE = 10.0  # multiplier applied to the frame delta
STEP_FRAME_DT = 0.016  # frame delta used by a single manual step
YEAR_LENGTH = 5.0  # simulation seconds per displayed year
START_YEAR = 2025

# --- Shadow system ---
SHADOW_PERTURBATION = 0.01  # offsets are drawn from [-0.005, 0.005)
CHAOS_SENSITIVITY = 5.0

# --- Orbit history / periodicity ---
HISTORY_INTERVAL = 10  # steps between snapshots
HISTORY_MAX_ENTRIES = 1000
HISTORY_MIN_ENTRIES = 50
PERIODICITY_MIN_TIME_GAP = 100  # snapshots
PERIODICITY_THRESHOLD = 10.0  # summed positional distance
PERIODICITY_DISPLAY_TIME = 3.0  # seconds

# --- Stability index weights ---
STABILITY_ENERGY_WEIGHT = 0.01
STABILITY_ANGULAR_MOMENTUM_WEIGHT = 0.01
STABILITY_COM_WEIGHT = 0.1
STABILITY_CHAOS_WEIGHT = 0.5

# --- Collisions ---
DISTURBANCE_RADIUS_FACTOR = 5.0
DISTURBANCE_FORCE_DIVISOR = 10.0
EFFECT_LIFETIME = 2.0
EFFECT_MAX_PARTICLES = 100
EFFECT_BASE_PARTICLES = 20
EFFECT_MASS_PER_PARTICLE = 10.0
PARTICLE_MIN_SPEED = 20.0
PARTICLE_SPEED_RANGE = 30.0
PARTICLE_MIN_SIZE = 2.0
PARTICLE_SIZE_RANGE = 4.0
PARTICLE_MAX_LIFETIME = 2.0
PARTICLE_VELOCITY_INHERITANCE = 0.5

# --- Interaction ---
DEFAULT_PLANET_MASS = 10.0
DEFAULT_PLANET_IMAGE = "earth"
DRAG_TIME = 0.2  # assumed duration of a mouse drag

# --- Diagnostics ---
ENERGY_HISTORY_POINTS = 500

# --- Display ---
WIDTH = 1280
HEIGHT = 720
FPS = 60
UI_SIDEBAR_WIDTH = 250
BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
GRAY = (77, 77, 77)
HIGHLIGHT = (102, 102, 179)
PANEL_BG = (26, 26, 26, 204)
SHADOW_COLOR = (128, 128, 255, 77)
NOTICE_COLOR = (51, 153, 51, 204)
DRIFT_COLOR = (255, 100, 100)
BODY_COLORS = {
    "sun": (255, 200, 60),
    "earth": (80, 140, 255),
    "jupiter": (210, 160, 110),
}
DEFAULT_BODY_COLOR = (220, 220, 220)
