"""Formatting helpers for the analytics panel."""

import math


def percent_to_display(value: float) -> str:
    if not math.isfinite(value):
        return "undefined"
    return f"{value:.4f}%"


def stability_label(index: float) -> str:
    if index >= 0.8:
        return "Stable"
    if index >= 0.5:
        return "Marginal"
    if index > 0:
        return "Unstable"
    return "Breaking down"


def time_scale_to_display(time_scale: float) -> str:
    if time_scale == 0:
        return "Paused"
    direction = "<<" if time_scale < 0 else ">>"
    return f"{direction} x{abs(time_scale):g}"
