import numpy as np
from . import constants as C


def compute_accelerations(
    positions: np.ndarray,
    masses: np.ndarray,
    g_constant: float = C.G_DEFAULT,
) -> np.ndarray:
    """Return the gravitational acceleration of every body.

    ``a_i = sum_{j != i} G * m_j * (p_j - p_i) / |p_j - p_i|**3``

    Each unordered pair is visited once and contributes equal and opposite
    terms.  There is no softening: coincident bodies yield non-finite values
    which are left for the caller to see.
    """
    positions = np.asarray(positions, dtype=np.float64)
    masses = np.asarray(masses, dtype=np.float64)
    n = len(masses)
    acc = np.zeros_like(positions, dtype=np.float64)
    if n == 0:
        return acc

    with np.errstate(divide="ignore", invalid="ignore"):
        for i in range(n):
            for j in range(i + 1, n):
                # vector from i to j
                r_vec_ij = positions[j] - positions[i]
                dist = np.sqrt(np.dot(r_vec_ij, r_vec_ij))
                inv_dist_cubed = 1.0 / (dist * dist * dist)

                acc[i] += g_constant * masses[j] * r_vec_ij * inv_dist_cubed
                acc[j] -= g_constant * masses[i] * r_vec_ij * inv_dist_cubed

    return acc


def symplectic_euler_step_arrays(
    positions,
    velocities,
    masses,
    dt,
    g_constant,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Semi-implicit Euler: kick with the current field, then drift.

    Returns the new positions, velocities and the accelerations used.
    ``dt`` may be negative to run the same scheme backward in time.
    """
    acc = compute_accelerations(positions, masses, g_constant)
    with np.errstate(invalid="ignore", over="ignore"):
        vel_new = velocities + acc * dt
        pos_new = positions + vel_new * dt
    return pos_new, vel_new, acc


def step_bodies(bodies, dt, g_constant=C.G_DEFAULT):
    """Advance ``bodies`` in place by one step of ``dt``.

    A zero ``dt`` is a pause and leaves every field untouched.
    """
    if not bodies or dt == 0:
        return

    positions = np.array([b.pos for b in bodies], dtype=float)
    velocities = np.array([b.vel for b in bodies], dtype=float)
    masses = np.array([b.mass for b in bodies], dtype=float)

    new_pos, new_vel, acc = symplectic_euler_step_arrays(
        positions, velocities, masses, dt, g_constant
    )

    for b, p, v, a in zip(bodies, new_pos, new_vel, acc):
        b.pos = p
        b.vel = v
        b.acc = a
