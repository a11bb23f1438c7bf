"""Point-mass bodies and the conserved quantities of a body set.

:class:`Body` is the single value type shared by the engine, the shadow
system and the renderer.  Its radius is not stored; it is always derived
from the mass with :func:`compute_radius`.
"""
import numpy as np

from . import constants as C


def compute_radius(mass):
    """Return the collision/drawing radius for ``mass``."""
    return C.RADIUS_FACTOR * mass ** (1.0 / 3.0)


def _as_vec2(value):
    v = np.asarray(value, dtype=float).reshape(-1)
    if v.size < 2:
        v = np.pad(v, (0, 2 - v.size))
    return v[:2].copy()


class Body:
    """A point mass with 2-D position and velocity."""

    ID_counter = 0

    def __init__(self, mass, pos, vel, name=None, image=None):
        """Create a body.

        Parameters
        ----------
        mass : float
            Positive mass in simulation units.
        pos, vel : array-like
            Position and velocity.  Missing components are padded with zeros.
        name : str, optional
            Display label.  Labels need not be unique.
        image : object, optional
            Opaque asset handle carried for the renderer.
        """
        mass = float(mass)
        if not mass > 0:
            raise ValueError(f"Body mass must be positive, got {mass}")
        self.mass = mass
        self.pos = _as_vec2(pos)
        self.vel = _as_vec2(vel)
        self.acc = np.zeros(2, dtype=np.float64)
        self.image = image
        self.id = Body.ID_counter
        Body.ID_counter += 1
        self.name = name if name else f"Body {self.id}"

    @property
    def radius(self):
        return compute_radius(self.mass)

    def copy(self):
        """Return an independent copy sharing only the name and image handle."""
        clone = Body(self.mass, self.pos, self.vel, name=self.name, image=self.image)
        clone.acc = self.acc.copy()
        return clone

    def contains(self, x, y):
        dx = x - self.pos[0]
        dy = y - self.pos[1]
        return dx * dx + dy * dy <= self.radius * self.radius

    @property
    def speed(self):
        return float(np.hypot(self.vel[0], self.vel[1]))

    def __repr__(self):
        return (
            f"Body(name={self.name!r}, mass={self.mass}, pos={self.pos.tolist()}, "
            f"vel={self.vel.tolist()})"
        )


def kinetic_energy(bodies):
    return sum(0.5 * b.mass * float(np.dot(b.vel, b.vel)) for b in bodies)


def potential_energy(bodies, g_constant=C.G_DEFAULT):
    """Pairwise potential energy, each unordered pair counted once."""
    potential = 0.0
    with np.errstate(divide="ignore", invalid="ignore"):
        for i, bi in enumerate(bodies):
            for bj in bodies[i + 1:]:
                r = np.linalg.norm(bi.pos - bj.pos)
                potential -= g_constant * bi.mass * bj.mass / r
    return float(potential)


def system_energy(bodies, g_constant=C.G_DEFAULT):
    """Return total kinetic and potential energy."""
    kinetic = kinetic_energy(bodies)
    potential = potential_energy(bodies, g_constant)
    return kinetic, potential, kinetic + potential


def center_of_mass(bodies):
    """Mass-weighted centroid; ``(0, 0)`` when there is no mass."""
    total_mass = sum(b.mass for b in bodies)
    if total_mass == 0:
        return np.zeros(2)
    weighted = np.sum([b.pos * b.mass for b in bodies], axis=0)
    return weighted / total_mass


def angular_momentum(bodies):
    """Scalar angular momentum about the centre of mass."""
    com = center_of_mass(bodies)
    total = 0.0
    for b in bodies:
        rx, ry = b.pos - com
        total += (rx * b.vel[1] - ry * b.vel[0]) * b.mass
    return float(total)
