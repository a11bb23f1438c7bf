import math

from orbitlab.camera import Camera
from orbitlab.utils import percent_to_display, stability_label, time_scale_to_display


def test_percent_to_display():
    assert percent_to_display(0.0) == "0.0000%"
    assert percent_to_display(-1.23456) == "-1.2346%"
    assert percent_to_display(math.nan) == "undefined"
    assert percent_to_display(math.inf) == "undefined"


def test_stability_label_bands():
    assert stability_label(1.0) == "Stable"
    assert stability_label(0.8) == "Stable"
    assert stability_label(0.5) == "Marginal"
    assert stability_label(0.1) == "Unstable"
    assert stability_label(0.0) == "Breaking down"


def test_time_scale_to_display():
    assert time_scale_to_display(0) == "Paused"
    assert time_scale_to_display(10.0) == ">> x10"
    assert time_scale_to_display(-20.0) == "<< x20"


def test_camera_round_trip_centre():
    cam = Camera(1280, 720)
    assert list(cam.world_to_screen((0.0, 0.0))) == [640.0, 360.0]
    assert list(cam.screen_to_world((640, 560))) == [0.0, 200.0]
    cam.resize(800, 600)
    assert list(cam.screen_to_world((400, 300))) == [0.0, 0.0]
