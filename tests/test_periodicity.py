from orbitlab.history import PeriodicityDetector, positional_distance, snapshot
from orbitlab.physics import Body


def _static_bodies():
    return [Body(1.0, [0.0, 0.0], [0.0, 0.0]), Body(1.0, [50.0, 0.0], [0.0, 0.0])]


def _small_detector(**kwargs):
    params = dict(interval=1, max_entries=20, min_entries=2, min_time_gap=3, threshold=10.0)
    params.update(kwargs)
    return PeriodicityDetector(**params)


def test_samples_every_interval_steps():
    detector = PeriodicityDetector(interval=10)
    bodies = _static_bodies()
    for _ in range(25):
        detector.on_step(bodies)
    assert len(detector.history) == 2
    assert detector.history[0].shape == (2, 4)


def test_history_is_capped_oldest_first():
    detector = _small_detector(max_entries=5, min_entries=100)
    body = Body(1.0, [0.0, 0.0], [0.0, 0.0])
    for i in range(8):
        body.pos[0] = float(i)
        detector.on_step([body])
    assert len(detector.history) == 5
    assert detector.history[0][0][0] == 3.0


def test_static_system_is_flagged_periodic():
    detector = _small_detector()
    bodies = _static_bodies()
    results = [detector.on_step(bodies) for _ in range(4)]
    # the first comparison needs more than min_time_gap snapshots
    assert results == [False, False, False, True]
    assert detector.detected
    assert detector.timer == 3.0


def test_default_detector_needs_long_history():
    detector = PeriodicityDetector()
    bodies = _static_bodies()
    for _ in range(1000):
        detector.on_step(bodies)
    assert not detector.detected
    for _ in range(10):
        detector.on_step(bodies)
    assert detector.detected


def test_flag_clears_after_display_time():
    detector = _small_detector()
    bodies = _static_bodies()
    for _ in range(4):
        detector.on_step(bodies)
    assert detector.detected
    for _ in range(29):
        detector.tick(0.1)
    assert detector.detected
    detector.tick(0.2)
    assert not detector.detected
    assert detector.timer == 0.0


def test_flag_not_refreshed_while_raised():
    detector = _small_detector()
    bodies = _static_bodies()
    for _ in range(4):
        detector.on_step(bodies)
    detector.tick(1.0)
    assert detector.on_step(bodies) is False
    assert detector.timer == 2.0


def test_moving_system_is_not_flagged():
    detector = _small_detector()
    body = Body(1.0, [0.0, 0.0], [0.0, 0.0])
    for i in range(10):
        body.pos[0] = 100.0 * i
        detector.on_step([body])
    assert not detector.detected
    assert detector.closest_return == 300.0


def test_mismatched_snapshots_are_skipped():
    detector = _small_detector()
    three = _static_bodies() + [Body(1.0, [0.0, 80.0], [0.0, 0.0])]
    for _ in range(3):
        detector.on_step(three)
    two = _static_bodies()
    for _ in range(3):
        assert detector.on_step(two) is False
    assert not detector.detected
    assert detector.on_step(two) is True


def test_reset_clears_everything():
    detector = _small_detector()
    bodies = _static_bodies()
    for _ in range(4):
        detector.on_step(bodies)
    detector.reset()
    assert len(detector.history) == 0
    assert detector.step_count == 0
    assert not detector.detected
    assert detector.timer == 0.0


def test_velocity_is_ignored_in_comparison():
    bodies = _static_bodies()
    state = snapshot(bodies)
    bodies[0].vel[0] = 99.0
    assert positional_distance(bodies, state) == 0.0
