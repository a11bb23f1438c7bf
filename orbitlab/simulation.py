import argparse
import logging

import numpy as np
import pygame
import pygame_gui

from importlib.metadata import version, PackageNotFoundError

from . import constants as C
from .camera import Camera
from .config import EngineConfig
from .engine import SimulationEngine
from .presets import DEFAULT_PRESET, PRESETS
from .rendering import (
    draw_analytics_panel,
    draw_body,
    draw_body_info,
    draw_collision_effect,
    draw_drift_graph,
    draw_periodicity_notice,
    draw_shadow_bodies,
    draw_status,
    load_images,
)
from .ui_manager import Action, ControlPanel

try:
    _PACKAGE_VERSION = version("orbitlab")
except PackageNotFoundError:
    _PACKAGE_VERSION = "0.0.0"

logger = logging.getLogger(__name__)

SPEED_KEYS = {getattr(pygame, f"K_{n}"): n for n in range(10)}


class Simulation:
    """Interactive pygame host around :class:`~orbitlab.engine.SimulationEngine`."""

    def __init__(self, engine=None, init_pygame: bool = True, asset_dir=None):
        self.engine = engine if engine is not None else SimulationEngine()
        self.camera = Camera()
        self.show_analytics = True
        self.show_shadow = False
        self.adding_planet = False
        self.hovered_body = None
        self.running = False

        if init_pygame:
            pygame.init()
            self.screen = pygame.display.set_mode((C.WIDTH, C.HEIGHT), pygame.RESIZABLE)
            pygame.display.set_caption(f"Orbital Simulation v{_PACKAGE_VERSION}")
            self.clock = pygame.time.Clock()
            self.font = pygame.font.Font(None, 18)
            self.images = load_images(asset_dir)
            self.manager = pygame_gui.UIManager((C.WIDTH, C.HEIGHT))
            self.control = ControlPanel(self.manager, self.engine)
        else:
            self.screen = None
            self.clock = None
            self.font = None
            self.images = {}
            self.manager = None
            self.control = None

    # ------------------------------------------------------------------
    def apply_action(self, action: Action) -> None:
        if action is Action.ADD_PLANET:
            self.engine.pause()
            self.adding_planet = True
        elif action is Action.TOGGLE_ANALYTICS:
            self.show_analytics = not self.show_analytics
        elif action is Action.TOGGLE_SHADOW:
            self.show_shadow = not self.show_shadow

    def handle_key(self, key) -> None:
        if key in SPEED_KEYS:
            self.engine.set_speed(SPEED_KEYS[key])
        elif key == pygame.K_a:
            self.apply_action(Action.TOGGLE_ANALYTICS)
        elif key == pygame.K_s:
            self.apply_action(Action.TOGGLE_SHADOW)
        elif key == pygame.K_r:
            self.engine.reset()
        elif key == pygame.K_ESCAPE:
            self.running = False

    def handle_mouse_down(self, screen_pos) -> None:
        x, y = self.camera.screen_to_world(screen_pos)
        if self.adding_planet:
            self.adding_planet = False
            self.engine.add_body(x, y)
            self.engine.forward()
            return
        self.engine.begin_drag(x, y)

    def handle_mouse_motion(self, screen_pos) -> None:
        x, y = self.camera.screen_to_world(screen_pos)
        self.engine.drag_to(x, y)
        self.hovered_body = self.engine.body_at(x, y)

    def handle_mouse_up(self, screen_pos) -> None:
        self.engine.end_drag()

    def handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
                continue
            if self.manager is not None and self.manager.process_events(event):
                continue
            if self.control is not None:
                action = self.control.process_event(event)
                if action is not None:
                    self.apply_action(action)
                    continue
            if event.type == pygame.KEYDOWN:
                self.handle_key(event.key)
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self.handle_mouse_down(event.pos)
            elif event.type == pygame.MOUSEMOTION:
                self.handle_mouse_motion(event.pos)
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                self.handle_mouse_up(event.pos)
            elif event.type == pygame.VIDEORESIZE:
                self.camera.resize(event.w, event.h)

    # ------------------------------------------------------------------
    def draw(self) -> None:
        """Render the current frame."""
        if self.screen is None:
            return
        self.screen.fill(C.BLACK)
        engine = self.engine

        if self.show_shadow and engine.shadow_bodies:
            draw_shadow_bodies(self.screen, engine.shadow_bodies, self.camera)
        for body in engine.bodies:
            draw_body(self.screen, body, self.camera, self.images)
        for effect in engine.effects:
            draw_collision_effect(self.screen, effect, self.camera)

        draw_status(self.screen, engine, self.font)
        if self.show_analytics:
            draw_analytics_panel(self.screen, engine.diagnostics, self.font)
            draw_drift_graph(self.screen, engine.monitor.history)
        if self.hovered_body is not None and self.hovered_body in engine.bodies:
            draw_body_info(self.screen, self.hovered_body, self.font)
        if engine.periodic:
            draw_periodicity_notice(self.screen, self.font)
        if self.adding_planet:
            mx, my = pygame.mouse.get_pos()
            pygame.draw.circle(self.screen, C.HIGHLIGHT, (mx, my), 10, 1)
            pygame.draw.line(self.screen, C.HIGHLIGHT, (mx - 15, my), (mx + 15, my))
            pygame.draw.line(self.screen, C.HIGHLIGHT, (mx, my - 15), (mx, my + 15))

        self.manager.draw_ui(self.screen)
        pygame.display.flip()

    # ------------------------------------------------------------------
    def run(self) -> None:
        """Main application loop."""
        if self.screen is None or self.clock is None:
            raise RuntimeError("Simulation cannot run without pygame initialized")
        self.running = True
        while self.running:
            time_delta = self.clock.tick(C.FPS) / 1000.0
            self.handle_events()
            self.manager.update(time_delta)
            self.engine.update(time_delta)
            self.draw()
        pygame.quit()


def build_parser():
    parser = argparse.ArgumentParser(description="Orbital N-body simulation")
    parser.add_argument("--preset", default=DEFAULT_PRESET, choices=list(PRESETS))
    parser.add_argument("--gravity", type=float, default=C.G_DEFAULT, help="Gravitational constant")
    parser.add_argument(
        "--history-interval",
        type=int,
        default=C.HISTORY_INTERVAL,
        help="Steps between orbit history samples",
    )
    parser.add_argument(
        "--periodicity-threshold",
        type=float,
        default=C.PERIODICITY_THRESHOLD,
        help="Summed distance below which a periodic orbit is reported",
    )
    parser.add_argument("--seed", type=int, help="Seed for the shadow perturbations")
    parser.add_argument("--assets", help="Directory holding body images")
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    return parser


def engine_from_args(args) -> SimulationEngine:
    config = EngineConfig(
        g_constant=args.gravity,
        history_interval=args.history_interval,
        periodicity_threshold=args.periodicity_threshold,
    )
    return SimulationEngine(args.preset, config=config, rng=np.random.default_rng(args.seed))


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    sim = Simulation(engine_from_args(args), asset_dir=args.assets)
    sim.run()


if __name__ == "__main__":
    main()
