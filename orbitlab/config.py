"""Per-engine tunables, defaulting to :mod:`orbitlab.constants`."""
from dataclasses import dataclass

from . import constants as C


@dataclass
class EngineConfig:
    g_constant: float = C.G_DEFAULT
    base_time_scale: float = C.BASE_TIME_SCALE
    step_frame_dt: float = C.STEP_FRAME_DT
    history_interval: int = C.HISTORY_INTERVAL
    history_max_entries: int = C.HISTORY_MAX_ENTRIES
    history_min_entries: int = C.HISTORY_MIN_ENTRIES
    periodicity_min_time_gap: int = C.PERIODICITY_MIN_TIME_GAP
    periodicity_threshold: float = C.PERIODICITY_THRESHOLD
    periodicity_display_time: float = C.PERIODICITY_DISPLAY_TIME
    shadow_perturbation: float = C.SHADOW_PERTURBATION
    default_planet_mass: float = C.DEFAULT_PLANET_MASS
    default_planet_image: str = C.DEFAULT_PLANET_IMAGE
    drag_time: float = C.DRAG_TIME
    year_length: float = C.YEAR_LENGTH
    start_year: int = C.START_YEAR
