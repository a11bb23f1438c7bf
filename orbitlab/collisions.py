"""Collision detection, inelastic merging and the supernova disturbance.

At most one collision is resolved per call to :func:`resolve_collision`.
Pairs are scanned from the end of the body list backward and the first
overlapping pair wins; any further overlaps are picked up on later steps.
"""
import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from . import constants as C
from .physics import Body
from .shadow import make_shadow_body

logger = logging.getLogger(__name__)


@dataclass
class Particle:
    x: float
    y: float
    vx: float
    vy: float
    size: float
    lifetime: float
    green: float
    age: float = 0.0
    alpha: float = 1.0


@dataclass
class CollisionEffect:
    """Visual debris left behind by a merge; positions are relative to ``x, y``."""

    x: float
    y: float
    particles: List[Particle] = field(default_factory=list)
    lifetime: float = C.EFFECT_LIFETIME
    age: float = 0.0

    @property
    def expired(self) -> bool:
        return self.age >= self.lifetime


@dataclass
class CollisionEvent:
    """Outcome of one resolved collision."""

    indices: tuple
    merged: Body
    effect: CollisionEffect
    explosion_energy: float


def find_collision(bodies):
    """Return the first overlapping pair ``(i, j)`` with ``i > j``, or None."""
    for i in range(len(bodies) - 1, 0, -1):
        bi = bodies[i]
        for j in range(i - 1, -1, -1):
            bj = bodies[j]
            dist = np.linalg.norm(bi.pos - bj.pos)
            if dist < bi.radius + bj.radius:
                return i, j
    return None


def particle_count(mass):
    return min(
        C.EFFECT_MAX_PARTICLES,
        int(math.floor(mass / C.EFFECT_MASS_PER_PARTICLE)) + C.EFFECT_BASE_PARTICLES,
    )


def create_collision_effect(x, y, mass, vx, vy, rng=None):
    """Spawn a burst of particles biased by the combined velocity."""
    if rng is None:
        rng = np.random.default_rng()
    effect = CollisionEffect(float(x), float(y))
    for _ in range(particle_count(mass)):
        angle = rng.random() * math.pi * 2
        speed = rng.random() * C.PARTICLE_SPEED_RANGE + C.PARTICLE_MIN_SPEED
        effect.particles.append(
            Particle(
                x=0.0,
                y=0.0,
                vx=math.cos(angle) * speed + vx * C.PARTICLE_VELOCITY_INHERITANCE,
                vy=math.sin(angle) * speed + vy * C.PARTICLE_VELOCITY_INHERITANCE,
                size=rng.random() * C.PARTICLE_SIZE_RANGE + C.PARTICLE_MIN_SIZE,
                lifetime=rng.random() * C.PARTICLE_MAX_LIFETIME,
                green=0.5 + rng.random() * 0.5,
            )
        )
    return effect


def age_effects(effects, dt):
    """Advance particles by ``dt`` and drop expired effects in place."""
    for effect in effects:
        effect.age += dt
        for p in effect.particles:
            p.age += dt
            p.x += p.vx * dt
            p.y += p.vy * dt
            if p.lifetime > 0:
                p.alpha = max(0.0, 1.0 - p.age / p.lifetime)
            else:
                p.alpha = 0.0
    effects[:] = [e for e in effects if not e.expired]


def explosion_energy(b1, b2):
    """Kinetic energy of the relative motion, ``0.5 * mu * v_rel**2``."""
    rel = b1.vel - b2.vel
    rel_sq = float(np.dot(rel, rel))
    return 0.5 * b1.mass * b2.mass * rel_sq / (b1.mass + b2.mass)


def apply_supernova_effect(bodies, point, energy, exclude=()):
    """Push bodies near ``point`` radially outward.

    Bodies inside ``energy * 5`` receive an impulse that falls off linearly
    with distance and is divided by their own mass.
    """
    radius = energy * C.DISTURBANCE_RADIUS_FACTOR
    x, y = point
    disturbed = 0
    for body in bodies:
        if any(body is other for other in exclude):
            continue
        dx = body.pos[0] - x
        dy = body.pos[1] - y
        dist = math.hypot(dx, dy)
        if dist < radius:
            magnitude = (energy / C.DISTURBANCE_FORCE_DIVISOR) * (1 - dist / radius)
            angle = math.atan2(dy, dx)
            body.vel = body.vel + np.array(
                [math.cos(angle), math.sin(angle)]
            ) * magnitude / body.mass
            disturbed += 1
    return disturbed


def merge_bodies(a, b):
    """Perfectly inelastic merge.

    Mass adds; position and velocity are mass-weighted averages.  The name
    and image come from the heavier body, ``a`` on a tie.
    """
    new_mass = a.mass + b.mass
    new_pos = (a.pos * a.mass + b.pos * b.mass) / new_mass
    new_vel = (a.vel * a.mass + b.vel * b.mass) / new_mass
    larger = a if a.mass >= b.mass else b
    return Body(new_mass, new_pos, new_vel, name=larger.name, image=larger.image)


def _replace_pair(items, i, j, new_item):
    """Remove ``items[i]`` and ``items[j]`` (``i > j``) and append ``new_item``."""
    del items[i]
    del items[j]
    items.append(new_item)


def resolve_collision(bodies, shadow_bodies=None, rng=None) -> Optional[CollisionEvent]:
    """Resolve the first colliding pair in ``bodies`` in place.

    When ``shadow_bodies`` is non-empty the same indices are merged there too
    and the merged shadow body is re-perturbed, keeping both lists parallel.
    """
    pair = find_collision(bodies)
    if pair is None:
        return None
    if rng is None:
        rng = np.random.default_rng()

    i, j = pair
    b1, b2 = bodies[i], bodies[j]
    merged = merge_bodies(b1, b2)

    effect = create_collision_effect(
        merged.pos[0], merged.pos[1], merged.mass, merged.vel[0], merged.vel[1], rng
    )
    energy = explosion_energy(b1, b2)
    apply_supernova_effect(bodies, merged.pos, energy, exclude=(b1, b2))

    _replace_pair(bodies, i, j, merged)

    if shadow_bodies:
        _replace_pair(shadow_bodies, i, j, make_shadow_body(merged, rng))

    logger.info(
        "Merged %s and %s into %s (mass %g, explosion energy %g)",
        b1.name,
        b2.name,
        merged.name,
        merged.mass,
        energy,
    )
    return CollisionEvent((i, j), merged, effect, energy)
