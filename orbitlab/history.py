"""Bounded orbit history and near-return (periodicity) detection."""
import logging
from collections import deque
from itertools import islice

import numpy as np

from . import constants as C

logger = logging.getLogger(__name__)


def snapshot(bodies):
    """Return an ``(n, 4)`` array of ``x, y, vx, vy`` per body."""
    if not bodies:
        return np.zeros((0, 4), dtype=float)
    return np.array(
        [[b.pos[0], b.pos[1], b.vel[0], b.vel[1]] for b in bodies], dtype=float
    )


def positional_distance(bodies, state):
    """Summed per-body distance between ``bodies`` and a stored snapshot."""
    positions = np.array([b.pos for b in bodies], dtype=float).reshape(-1, 2)
    return float(np.sum(np.linalg.norm(positions - state[:, :2], axis=1)))


class PeriodicityDetector:
    """Sample the system every few steps and flag returns to a past state.

    Once raised, the flag stays up for ``display_time`` seconds of real time
    (see :meth:`tick`) regardless of later matches.
    """

    def __init__(
        self,
        interval=C.HISTORY_INTERVAL,
        max_entries=C.HISTORY_MAX_ENTRIES,
        min_entries=C.HISTORY_MIN_ENTRIES,
        min_time_gap=C.PERIODICITY_MIN_TIME_GAP,
        threshold=C.PERIODICITY_THRESHOLD,
        display_time=C.PERIODICITY_DISPLAY_TIME,
    ):
        self.interval = int(interval)
        self.min_entries = int(min_entries)
        self.min_time_gap = int(min_time_gap)
        self.threshold = float(threshold)
        self.display_time = float(display_time)
        self.history = deque(maxlen=int(max_entries))
        self.step_count = 0
        self.detected = False
        self.timer = 0.0
        self.closest_return = None

    def reset(self):
        self.history.clear()
        self.step_count = 0
        self.detected = False
        self.timer = 0.0
        self.closest_return = None

    def tick(self, real_dt):
        """Count the display timer down and clear the flag when it expires."""
        if self.timer > 0:
            self.timer -= real_dt
            if self.timer <= 0:
                self.timer = 0.0
                self.detected = False

    def on_step(self, bodies):
        """Register one simulation step; returns True on a new detection."""
        self.step_count += 1
        if self.step_count % self.interval != 0:
            return False
        self.history.append(snapshot(bodies))
        if len(self.history) > self.min_entries:
            return self.check(bodies)
        return False

    def check(self, bodies):
        """Compare ``bodies`` against every snapshot old enough to count."""
        candidates = len(self.history) - self.min_time_gap
        closest = None
        for i, state in enumerate(islice(self.history, max(0, candidates))):
            if len(state) != len(bodies):
                continue
            distance = positional_distance(bodies, state)
            closest = distance if closest is None else min(closest, distance)
            if distance < self.threshold and not self.detected:
                self.detected = True
                self.timer = self.display_time
                self.closest_return = closest
                logger.info(
                    "Periodic orbit detected (distance %.3f, %d samples back)",
                    distance,
                    len(self.history) - 1 - i,
                )
                return True
        self.closest_return = closest
        return False
