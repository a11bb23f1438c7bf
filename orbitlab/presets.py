"""Built-in starting configurations.

Positions are relative to the centre of the view.  ``image`` is an asset key
the renderer resolves; the engine treats it as an opaque handle.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from . import constants as C


@dataclass(frozen=True)
class BodySpec:
    name: str
    mass: float
    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    image: Optional[str] = None


@dataclass(frozen=True)
class Preset:
    name: str
    bodies: List[BodySpec] = field(default_factory=list)
    time_scale: float = C.BASE_TIME_SCALE


PRESETS = {
    "Default": Preset(
        "Default",
        [
            BodySpec("Star", 1000, 0, 0, 0, 0, "sun"),
            BodySpec("Planet", 1, 100, 0, 0, 1.5, "earth"),
            BodySpec("Planet2", 500, 200, 0, 0, 1.5, "jupiter"),
        ],
    ),
    "Figure 8": Preset(
        "Figure 8",
        [
            BodySpec("Alpha", 100, -100, 0, 0.347, 0.533, "sun"),
            BodySpec("Beta", 100, 0, 0, -0.694, -1.066, "earth"),
            BodySpec("Gamma", 100, 100, 0, 0.347, 0.533, "jupiter"),
        ],
    ),
    "Solar System": Preset(
        "Solar System",
        [
            BodySpec("Sun", 1000, 0, 0, 0, 0, "sun"),
            BodySpec("Earth", 1, 150, 0, 0, 2.0, "earth"),
            BodySpec("Jupiter", 317, 350, 0, 0, 0.9, "jupiter"),
        ],
    ),
    "Broucke-Henon": Preset(
        "Broucke-Henon",
        [
            BodySpec("Alpha", 100, -100, 0, 0, 0.4645, "sun"),
            BodySpec("Beta", 100, 0, 0, -0.4083, -0.2323, "earth"),
            BodySpec("Gamma", 100, 100, 0, 0.4083, -0.2323, "jupiter"),
        ],
    ),
    "Binary Stars": Preset(
        "Binary Stars",
        [
            BodySpec("Star1", 800, -80, 0, 0, 1.0, "sun"),
            BodySpec("Star2", 800, 80, 0, 0, -1.0, "sun"),
            BodySpec("Planet", 2, 0, 200, 2.0, 0, "earth"),
        ],
    ),
}

DEFAULT_PRESET = "Figure 8"
