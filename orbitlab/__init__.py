"""N-body orbit laboratory with stability diagnostics."""

from importlib.metadata import PackageNotFoundError, version

from .physics import Body, compute_radius, system_energy, center_of_mass, angular_momentum
from .integrators import compute_accelerations, step_bodies
from .analysis import ConservationMonitor, Diagnostics, stability_index
from .history import PeriodicityDetector
from .collisions import CollisionEffect, resolve_collision
from .config import EngineConfig
from .engine import Command, SimulationEngine
from .presets import PRESETS, Preset, BodySpec
from .shadow import ShadowDesyncError

try:
    __version__ = version("orbitlab")
except PackageNotFoundError:
    # Fallback when package metadata is unavailable (e.g. running from source)
    __version__ = "0.0.0"

__all__ = [
    "Body",
    "compute_radius",
    "system_energy",
    "center_of_mass",
    "angular_momentum",
    "compute_accelerations",
    "step_bodies",
    "ConservationMonitor",
    "Diagnostics",
    "stability_index",
    "PeriodicityDetector",
    "CollisionEffect",
    "resolve_collision",
    "EngineConfig",
    "Command",
    "SimulationEngine",
    "PRESETS",
    "Preset",
    "BodySpec",
    "ShadowDesyncError",
    "__version__",
]
