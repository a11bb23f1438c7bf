import math

import numpy as np
import pytest

from orbitlab.integrators import step_bodies
from orbitlab.physics import Body
from orbitlab.shadow import (
    ShadowDesyncError,
    advance_shadow_system,
    chaos_level,
    create_shadow_system,
    shadow_divergence,
)


def _bodies():
    return [
        Body(100.0, [-100.0, 0.0], [0.347, 0.533], name="Alpha", image="sun"),
        Body(100.0, [0.0, 0.0], [-0.694, -1.066], name="Beta"),
        Body(100.0, [100.0, 0.0], [0.347, 0.533], name="Gamma"),
    ]


def test_shadow_is_small_perturbed_copy():
    bodies = _bodies()
    shadow = create_shadow_system(bodies, np.random.default_rng(1))
    assert len(shadow) == len(bodies)
    for b, s in zip(bodies, shadow):
        assert s is not b
        assert s.name == b.name and s.image == b.image and s.mass == b.mass
        assert np.array_equal(s.vel, b.vel)
        assert np.all(np.abs(s.pos - b.pos) <= 0.005)
    assert shadow_divergence(bodies, shadow) > 0


def test_shadow_does_not_alias_bodies():
    bodies = _bodies()
    shadow = create_shadow_system(bodies, np.random.default_rng(2))
    shadow[0].pos[0] = 1e6
    assert bodies[0].pos[0] == -100.0


def test_shadow_evolves_with_same_law():
    bodies = _bodies()
    shadow = [b.copy() for b in bodies]
    for _ in range(50):
        step_bodies(bodies, 0.16, 1.0)
        advance_shadow_system(shadow, 0.16, 1.0)
    assert shadow_divergence(bodies, shadow) == 0.0


def test_divergence_sums_index_wise_distances():
    a = [Body(1.0, [0.0, 0.0], [0, 0]), Body(1.0, [10.0, 0.0], [0, 0])]
    b = [Body(1.0, [3.0, 4.0], [0, 0]), Body(1.0, [10.0, 1.0], [0, 0])]
    assert math.isclose(shadow_divergence(a, b), 6.0)


def test_divergence_length_mismatch_raises():
    a = [Body(1.0, [0.0, 0.0], [0, 0])]
    with pytest.raises(ShadowDesyncError):
        shadow_divergence(a, [])


def test_chaos_level_is_squashed():
    assert chaos_level(0.0) == 0.0
    assert math.isclose(chaos_level(math.e - 1), 0.2)
    assert chaos_level(1e9) == 1.0
    values = [chaos_level(d) for d in (0.1, 1.0, 10.0, 100.0)]
    assert values == sorted(values)
