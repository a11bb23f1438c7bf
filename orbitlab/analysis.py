import logging
import math
from collections import deque
from dataclasses import dataclass

import numpy as np

from . import constants as C
from .physics import angular_momentum, center_of_mass, system_energy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Diagnostics:
    """Read-only snapshot of the simulation's health."""

    kinetic_energy: float = 0.0
    potential_energy: float = 0.0
    total_energy: float = 0.0
    energy_drift: float = 0.0
    angular_momentum: float = 0.0
    angular_momentum_drift: float = 0.0
    center_of_mass: tuple = (0.0, 0.0)
    com_drift: float = 0.0
    divergence: float = 0.0
    max_divergence: float = 0.0
    chaos_level: float = 0.0
    stability_index: float = 1.0
    periodic: bool = False
    body_count: int = 0


def energy_drift_percent(current, initial):
    """Relative energy change in percent; ``nan`` when the baseline is zero."""
    if initial == 0:
        return math.nan
    return (current - initial) / abs(initial) * 100


def angular_momentum_drift_percent(current, initial):
    """Relative angular momentum change in percent; 0 when the baseline is zero."""
    if initial == 0:
        return 0.0
    return (current - initial) / abs(initial) * 100


def stability_index(energy_drift, angular_momentum_drift, com_drift, chaos):
    """Heuristic health score in ``[0, 1]``.

    The weights live in :mod:`orbitlab.constants`.  An undefined (non-finite)
    term scores the system as unstable.
    """
    penalty = (
        abs(energy_drift) * C.STABILITY_ENERGY_WEIGHT
        + abs(angular_momentum_drift) * C.STABILITY_ANGULAR_MOMENTUM_WEIGHT
        + com_drift * C.STABILITY_COM_WEIGHT
        + chaos * C.STABILITY_CHAOS_WEIGHT
    )
    if not math.isfinite(penalty):
        return 0.0
    return max(0.0, 1.0 - penalty)


class ConservationMonitor:
    """Track drift of energy, angular momentum and centre of mass."""

    def __init__(self, max_points=C.ENERGY_HISTORY_POINTS):
        self.history = deque(maxlen=max_points)
        self.initial_energy = None
        self.initial_angular_momentum = None
        self.initial_com = np.zeros(2)
        self.energy = (0.0, 0.0, 0.0)
        self.angular_momentum = 0.0
        self.com = np.zeros(2)
        self.energy_drift = 0.0
        self.angular_momentum_drift = 0.0
        self.com_drift = 0.0
        self._warned_undefined = False

    @property
    def has_baseline(self):
        return self.initial_energy is not None

    def set_baseline(self, bodies, g_constant):
        """Capture the reference values every drift is measured against."""
        self.energy = system_energy(bodies, g_constant)
        self.initial_energy = self.energy[2]
        self.angular_momentum = self.initial_angular_momentum = angular_momentum(bodies)
        self.com = center_of_mass(bodies)
        self.initial_com = self.com.copy()
        self.energy_drift = 0.0
        self.angular_momentum_drift = 0.0
        self.com_drift = 0.0
        self.history.clear()
        self._warned_undefined = False
        logger.debug(
            "Baseline captured: E0=%g L0=%g COM0=%s",
            self.initial_energy,
            self.initial_angular_momentum,
            self.initial_com.tolist(),
        )

    def update(self, bodies, g_constant):
        if not self.has_baseline:
            self.set_baseline(bodies, g_constant)
            return self.energy_drift, self.angular_momentum_drift, self.com_drift

        self.energy = system_energy(bodies, g_constant)
        self.energy_drift = energy_drift_percent(self.energy[2], self.initial_energy)
        if math.isnan(self.energy_drift) and not self._warned_undefined:
            logger.warning("Energy drift undefined: baseline energy is zero")
            self._warned_undefined = True

        self.angular_momentum = angular_momentum(bodies)
        self.angular_momentum_drift = angular_momentum_drift_percent(
            self.angular_momentum, self.initial_angular_momentum
        )

        self.com = center_of_mass(bodies)
        self.com_drift = float(np.linalg.norm(self.com - self.initial_com))

        self.history.append(self.energy_drift)
        return self.energy_drift, self.angular_momentum_drift, self.com_drift
