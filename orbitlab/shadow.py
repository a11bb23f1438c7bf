"""Shadow system used to estimate sensitivity to initial conditions.

The shadow system is a copy of the bodies with every position nudged by a
tiny random offset.  It is advanced with the same force law and step as the
real system but only interacts with itself.  How far the two drift apart is
a cheap, display-oriented measure of chaos.
"""
import logging
import math

import numpy as np

from . import constants as C
from .integrators import step_bodies

logger = logging.getLogger(__name__)


class ShadowDesyncError(RuntimeError):
    """Raised when the shadow list no longer mirrors the body list."""


def perturb_position(pos, rng, amount=C.SHADOW_PERTURBATION):
    """Return ``pos`` offset by ``(uniform(0, 1) - 0.5) * amount`` per axis."""
    return np.asarray(pos, dtype=float) + (rng.random(2) - 0.5) * amount


def make_shadow_body(body, rng, amount=C.SHADOW_PERTURBATION):
    shadow = body.copy()
    shadow.pos = perturb_position(shadow.pos, rng, amount)
    return shadow


def create_shadow_system(bodies, rng=None, amount=C.SHADOW_PERTURBATION):
    """Deep-copy ``bodies`` and perturb every position."""
    if rng is None:
        rng = np.random.default_rng()
    shadow = [make_shadow_body(b, rng, amount) for b in bodies]
    logger.debug("Shadow system created with %d bodies", len(shadow))
    return shadow


def advance_shadow_system(shadow_bodies, dt, g_constant=C.G_DEFAULT):
    step_bodies(shadow_bodies, dt, g_constant)


def shadow_divergence(bodies, shadow_bodies):
    """Sum of distances between bodies and shadows paired by list position."""
    if len(bodies) != len(shadow_bodies):
        raise ShadowDesyncError(
            f"{len(bodies)} bodies but {len(shadow_bodies)} shadow bodies"
        )
    total = 0.0
    for body, shadow in zip(bodies, shadow_bodies):
        total += float(np.linalg.norm(body.pos - shadow.pos))
    return total


def chaos_level(divergence):
    """Squash a raw divergence into ``[0, 1]`` on a log scale."""
    return min(1.0, math.log(1.0 + divergence) / C.CHAOS_SENSITIVITY)
