"""The simulation context: bodies, shadow system, diagnostics and commands.

:class:`SimulationEngine` owns every piece of mutable simulation state.  The
host calls :meth:`SimulationEngine.update` once per frame with the real
frame delta; inside, the pipeline always runs in the same order::

    integrate -> shadow -> diagnostics -> history -> collision -> stability

Setting the time scale to zero pauses the pipeline without discarding
diagnostics or history.  The periodicity banner timer and the collision
effects keep ageing in real time either way.
"""
import logging
import math
from enum import Enum

import numpy as np

from .analysis import ConservationMonitor, Diagnostics, stability_index
from .collisions import age_effects, resolve_collision
from .config import EngineConfig
from .history import PeriodicityDetector
from .integrators import step_bodies
from .physics import Body
from .presets import DEFAULT_PRESET, PRESETS, Preset
from .shadow import (
    advance_shadow_system,
    chaos_level,
    create_shadow_system,
    make_shadow_body,
    shadow_divergence,
)

logger = logging.getLogger(__name__)


class Command(Enum):
    REVERSE = "<<"
    PAUSE = "Pause"
    FORWARD = ">>"
    STEP = "Step Forward"
    RESET = "Reset"


class SimulationEngine:
    """N-body simulation with conservation, chaos and periodicity tracking."""

    def __init__(self, preset=DEFAULT_PRESET, config=None, rng=None, presets=None):
        self.config = config if config is not None else EngineConfig()
        self.presets = dict(PRESETS) if presets is None else presets
        self.rng = rng if rng is not None else np.random.default_rng()

        self.g_constant = self.config.g_constant
        self.time_scale = self.config.base_time_scale
        self.time_direction = 1
        self.simulation_time = 0.0
        self.step_count = 0

        self.bodies = []
        self.shadow_bodies = []
        self.effects = []
        self.current_preset = None

        self.monitor = ConservationMonitor()
        self.detector = PeriodicityDetector(
            interval=self.config.history_interval,
            max_entries=self.config.history_max_entries,
            min_entries=self.config.history_min_entries,
            min_time_gap=self.config.periodicity_min_time_gap,
            threshold=self.config.periodicity_threshold,
            display_time=self.config.periodicity_display_time,
        )
        self.divergence = 0.0
        self.max_divergence = 0.0
        self.chaos_level = 0.0
        self.stability_index = 1.0

        self.dragged_body = None
        self._drag_origin = None

        self._commands = {
            Command.REVERSE: self.reverse,
            Command.PAUSE: self.pause,
            Command.FORWARD: self.forward,
            Command.STEP: self.step,
            Command.RESET: self.reset,
        }

        if preset is not None:
            self.load_preset(preset)

    # ------------------------------------------------------------------
    def load_preset(self, preset) -> None:
        """Replace the bodies with those of ``preset`` (a name or a Preset)."""
        if not isinstance(preset, Preset):
            if preset not in self.presets:
                raise KeyError(f"Preset '{preset}' not found")
            preset = self.presets[preset]

        self.bodies = [
            Body(spec.mass, [spec.x, spec.y], [spec.vx, spec.vy], name=spec.name, image=spec.image)
            for spec in preset.bodies
        ]
        self.effects = []
        self.shadow_bodies = create_shadow_system(
            self.bodies, self.rng, self.config.shadow_perturbation
        )
        self.current_preset = preset
        self.time_direction = 1
        self.time_scale = preset.time_scale
        self.dragged_body = None
        self._drag_origin = None
        self.max_divergence = 0.0
        self._topology_changed()
        logger.info("Loaded preset '%s' with %d bodies", preset.name, len(self.bodies))

    def reset(self) -> None:
        """Reload the current preset, keeping the current time control."""
        if self.current_preset is None:
            return
        time_scale, direction = self.time_scale, self.time_direction
        self.load_preset(self.current_preset)
        self.time_scale, self.time_direction = time_scale, direction

    def _topology_changed(self) -> None:
        self.monitor.set_baseline(self.bodies, self.g_constant)
        self.detector.reset()
        self._refresh_chaos()
        self._refresh_stability()

    def _refresh_chaos(self) -> None:
        self.divergence = shadow_divergence(self.bodies, self.shadow_bodies)
        self.max_divergence = max(self.max_divergence, self.divergence)
        self.chaos_level = chaos_level(self.divergence)

    def _refresh_stability(self) -> None:
        self.stability_index = stability_index(
            self.monitor.energy_drift,
            self.monitor.angular_momentum_drift,
            self.monitor.com_drift,
            self.chaos_level,
        )

    # ------------------------------------------------------------------
    def update(self, real_dt) -> None:
        """Advance one frame of ``real_dt`` seconds of wall-clock time."""
        self.detector.tick(real_dt)
        age_effects(self.effects, real_dt)
        if self.time_scale == 0:
            return
        dt = real_dt * self.time_scale
        self.simulation_time += dt
        self._advance(dt)

    def _advance(self, dt) -> None:
        step_bodies(self.bodies, dt, self.g_constant)
        advance_shadow_system(self.shadow_bodies, dt, self.g_constant)
        self.step_count += 1
        self._refresh_chaos()

        self.monitor.update(self.bodies, self.g_constant)
        self.detector.on_step(self.bodies)

        event = resolve_collision(self.bodies, self.shadow_bodies, self.rng)
        if event is not None:
            self.effects.append(event.effect)
            self._follow_merge(event)
            self._topology_changed()

        self._refresh_stability()

    def _follow_merge(self, event) -> None:
        """Hand an active drag over to the body that absorbed the dragged one."""
        dragged = self.dragged_body
        if dragged is None or any(b is dragged for b in self.bodies):
            return
        self.dragged_body = event.merged
        self._drag_origin = event.merged.pos.copy()

    def step(self) -> None:
        """Advance exactly one frame at the base time scale, even when paused."""
        saved = self.time_scale
        self.time_scale = self.config.base_time_scale * self.time_direction
        try:
            self.update(self.config.step_frame_dt)
        finally:
            self.time_scale = saved

    # ------------------------------------------------------------------
    @property
    def paused(self) -> bool:
        return self.time_scale == 0

    def pause(self) -> None:
        self.time_scale = 0.0

    def forward(self) -> None:
        self.time_direction = 1
        self.time_scale = self.config.base_time_scale

    def reverse(self) -> None:
        self.time_direction = -1
        self.time_scale = -self.config.base_time_scale

    def set_speed(self, multiplier) -> None:
        """Speed keys: 0 pauses, otherwise base * multiplier in the current direction."""
        if multiplier == 0:
            self.pause()
        else:
            self.time_scale = self.config.base_time_scale * multiplier * self.time_direction

    def execute(self, command: Command) -> None:
        self._commands[command]()

    # ------------------------------------------------------------------
    def add_body(self, x, y) -> Body:
        """Insert a default planet at rest at ``(x, y)``."""
        body = Body(
            self.config.default_planet_mass,
            [x, y],
            [0.0, 0.0],
            name=f"Planet{len(self.bodies) + 1}",
            image=self.config.default_planet_image,
        )
        self.bodies.append(body)
        self.shadow_bodies.append(
            make_shadow_body(body, self.rng, self.config.shadow_perturbation)
        )
        self._topology_changed()
        logger.info("Added %s at (%.1f, %.1f)", body.name, x, y)
        return body

    def body_at(self, x, y):
        for body in self.bodies:
            if body.contains(x, y):
                return body
        return None

    def move_body(self, body, x, y) -> None:
        body.pos = np.array([x, y], dtype=float)

    def begin_drag(self, x, y):
        body = self.body_at(x, y)
        if body is not None:
            self.dragged_body = body
            self._drag_origin = body.pos.copy()
        return body

    def drag_to(self, x, y) -> bool:
        if self.dragged_body is None:
            return False
        self.move_body(self.dragged_body, x, y)
        return True

    def end_drag(self):
        """Release the dragged body, throwing it unless the simulation is paused."""
        body = self.dragged_body
        if body is None:
            return None
        if not self.paused:
            body.vel = (body.pos - self._drag_origin) / self.config.drag_time
        self.dragged_body = None
        self._drag_origin = None
        return body

    # ------------------------------------------------------------------
    @property
    def periodic(self) -> bool:
        return self.detector.detected

    @property
    def current_year(self) -> int:
        return self.config.start_year + math.floor(
            self.simulation_time / self.config.year_length
        )

    @property
    def diagnostics(self) -> Diagnostics:
        kinetic, potential, total = self.monitor.energy
        return Diagnostics(
            kinetic_energy=kinetic,
            potential_energy=potential,
            total_energy=total,
            energy_drift=self.monitor.energy_drift,
            angular_momentum=self.monitor.angular_momentum,
            angular_momentum_drift=self.monitor.angular_momentum_drift,
            center_of_mass=tuple(float(v) for v in self.monitor.com),
            com_drift=self.monitor.com_drift,
            divergence=self.divergence,
            max_divergence=self.max_divergence,
            chaos_level=self.chaos_level,
            stability_index=self.stability_index,
            periodic=self.periodic,
            body_count=len(self.bodies),
        )
