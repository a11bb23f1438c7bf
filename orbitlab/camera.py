import numpy as np
from . import constants as C


class Camera:
    """Map world coordinates (origin at the view centre) to screen pixels."""

    def __init__(self, width=C.WIDTH, height=C.HEIGHT):
        self.resize(width, height)

    def resize(self, width, height):
        self.pan_offset = np.array([width / 2, height / 2], dtype=float)

    def world_to_screen(self, pos):
        pos = np.asarray(pos, dtype=float)
        return pos[:2] + self.pan_offset

    def screen_to_world(self, pos):
        pos = np.asarray(pos, dtype=float)
        return pos[:2] - self.pan_offset
