import math

import numpy as np
from hypothesis import given, settings, strategies as st

from orbitlab.collisions import (
    CollisionEffect,
    Particle,
    age_effects,
    apply_supernova_effect,
    create_collision_effect,
    explosion_energy,
    find_collision,
    merge_bodies,
    particle_count,
    resolve_collision,
)
from orbitlab.physics import Body
from orbitlab.shadow import create_shadow_system


def test_merge_weighted_toward_heavier_body():
    light = Body(100.0, [0.0, 0.0], [0.0, 0.0], name="Light", image="earth")
    heavy = Body(300.0, [10.0, 0.0], [0.0, 0.0], name="Heavy", image="sun")
    bodies = [light, heavy]

    event = resolve_collision(bodies, rng=np.random.default_rng(0))

    assert event is not None
    assert len(bodies) == 1
    merged = bodies[0]
    assert merged is event.merged
    assert merged.mass == 400.0
    assert np.allclose(merged.pos, [7.5, 0.0])
    assert merged.name == "Heavy"
    assert merged.image == "sun"


@given(
    st.floats(0.1, 1000.0),
    st.floats(0.1, 1000.0),
    st.tuples(st.floats(-10, 10), st.floats(-10, 10)),
    st.tuples(st.floats(-10, 10), st.floats(-10, 10)),
)
@settings(max_examples=50)
def test_merge_conserves_mass_and_momentum(m1, m2, v1, v2):
    a = Body(m1, [0.0, 0.0], v1)
    b = Body(m2, [1.0, 0.0], v2)
    merged = merge_bodies(a, b)
    assert merged.mass == m1 + m2
    expected = (np.array(v1) * m1 + np.array(v2) * m2) / (m1 + m2)
    assert np.allclose(merged.vel, expected)
    assert merged.radius > a.radius and merged.radius > b.radius


def test_merge_tie_keeps_first_operand():
    a = Body(50.0, [0, 0], [0, 0], name="First", image="a")
    b = Body(50.0, [1, 0], [0, 0], name="Second", image="b")
    merged = merge_bodies(a, b)
    assert merged.name == "First" and merged.image == "a"


def test_find_collision_scans_from_the_end():
    bodies = [
        Body(1000.0, [0.0, 0.0], [0, 0]),
        Body(1000.0, [10.0, 0.0], [0, 0]),
        Body(1.0, [500.0, 0.0], [0, 0]),
        Body(1.0, [502.0, 0.0], [0, 0]),
    ]
    assert find_collision(bodies) == (3, 2)
    assert find_collision(bodies[:3]) == (1, 0)
    assert find_collision([bodies[0], bodies[2]]) is None


def test_only_one_collision_per_call():
    bodies = [
        Body(1000.0, [0.0, 0.0], [0, 0]),
        Body(1000.0, [10.0, 0.0], [0, 0]),
        Body(1.0, [500.0, 0.0], [0, 0]),
        Body(1.0, [502.0, 0.0], [0, 0]),
    ]
    resolve_collision(bodies, rng=np.random.default_rng(0))
    assert len(bodies) == 3
    # untouched pair stays in order, merged body is appended
    assert bodies[0].mass == 1000.0 and bodies[1].mass == 1000.0
    assert bodies[2].mass == 2.0


def test_merge_uses_pre_disturbance_velocities():
    a = Body(10.0, [0.0, 0.0], [1.0, 0.0])
    b = Body(10.0, [5.0, 0.0], [-1.0, 0.0])
    bystander = Body(1.0, [20.0, 0.0], [0.0, 0.0])
    bodies = [bystander, a, b]

    event = resolve_collision(bodies, rng=np.random.default_rng(0))

    assert np.allclose(event.merged.vel, [0.0, 0.0])
    assert math.isclose(event.explosion_energy, 0.5 * 10 * 10 * 4 / 20)
    # bystander is pushed away from the collision point
    assert bystander.vel[0] > 0
    assert math.isclose(bystander.vel[1], 0.0, abs_tol=1e-12)


def test_supernova_falls_off_and_scales_with_mass():
    near = Body(1.0, [1.0, 0.0], [0.0, 0.0])
    far = Body(1.0, [0.0, -40.0], [0.0, 0.0])
    heavy = Body(4.0, [-1.0, 0.0], [0.0, 0.0])
    outside = Body(1.0, [100.0, 0.0], [0.0, 0.0])
    count = apply_supernova_effect([near, far, heavy, outside], (0.0, 0.0), 10.0)

    # radius 50, magnitude (10 / 10) * (1 - d / 50)
    assert count == 3
    assert np.allclose(near.vel, [0.98, 0.0])
    assert np.allclose(far.vel, [0.0, -0.2])
    assert np.allclose(heavy.vel, [-0.98 / 4, 0.0])
    assert np.array_equal(outside.vel, [0.0, 0.0])


def test_supernova_excludes_merging_bodies():
    a = Body(1.0, [1.0, 0.0], [0.0, 0.0])
    b = Body(1.0, [2.0, 0.0], [0.0, 0.0])
    apply_supernova_effect([a, b], (0.0, 0.0), 10.0, exclude=(a,))
    assert np.array_equal(a.vel, [0.0, 0.0])
    assert b.vel[0] > 0


def test_zero_energy_disturbs_nothing():
    a = Body(1.0, [0.0, 0.0], [0.0, 0.0])
    assert apply_supernova_effect([a], (0.0, 0.0), 0.0) == 0


def test_explosion_energy_uses_reduced_mass():
    a = Body(2.0, [0, 0], [3.0, 0.0])
    b = Body(6.0, [0, 0], [0.0, 4.0])
    assert math.isclose(explosion_energy(a, b), 0.5 * 12 / 8 * 25)


def test_shadow_merged_in_parallel():
    rng = np.random.default_rng(3)
    bodies = [
        Body(5.0, [-300.0, 0.0], [0, 0], name="Far"),
        Body(100.0, [0.0, 0.0], [0, 0], name="A"),
        Body(300.0, [10.0, 0.0], [0, 0], name="B"),
    ]
    shadow = create_shadow_system(bodies, rng)
    event = resolve_collision(bodies, shadow, rng)
    assert event.indices == (2, 1)
    assert len(shadow) == len(bodies) == 2
    assert shadow[0].name == "Far"
    assert shadow[1].name == "B" and shadow[1].mass == 400.0
    assert shadow[1] is not bodies[1]
    assert np.all(np.abs(shadow[1].pos - bodies[1].pos) <= 0.005)


def test_collision_effect_particles():
    rng = np.random.default_rng(5)
    effect = create_collision_effect(1.0, 2.0, 400.0, 2.0, 0.0, rng)
    assert len(effect.particles) == 60
    for p in effect.particles:
        assert 2.0 <= p.size < 6.0
        assert 0.0 <= p.lifetime < 2.0
        assert 0.5 <= p.green <= 1.0
        speed = math.hypot(p.vx - 1.0, p.vy)
        assert 20.0 <= speed < 50.0 + 1e-9
    assert particle_count(5000.0) == 100
    assert particle_count(1.0) == 20


def test_age_effects_fades_and_expires():
    particle = Particle(0.0, 0.0, 10.0, 0.0, size=3.0, lifetime=1.0, green=1.0)
    effect = CollisionEffect(0.0, 0.0, [particle])
    effects = [effect]
    age_effects(effects, 0.5)
    assert math.isclose(particle.x, 5.0)
    assert math.isclose(particle.alpha, 0.5)
    age_effects(effects, 1.0)
    assert particle.alpha == 0.0
    assert effects == [effect]
    age_effects(effects, 0.5)
    assert effects == []
