from enum import Enum

import pygame
import pygame_gui

from . import constants as C
from .engine import Command


class Action(Enum):
    """Panel actions handled by the host rather than the engine."""

    ADD_PLANET = "Add Planet"
    TOGGLE_ANALYTICS = "Analytics"
    TOGGLE_SHADOW = "Shadow"


class ControlPanel:
    """Sidebar with gravity, preset and time controls.

    Buttons map onto :class:`~orbitlab.engine.Command` or :class:`Action`
    through a lookup table instead of per-button callbacks.
    """

    def __init__(self, manager: pygame_gui.UIManager, engine, width=C.WIDTH, height=C.HEIGHT):
        self.manager = manager
        self.engine = engine
        panel_width = C.UI_SIDEBAR_WIDTH
        self.panel = pygame_gui.elements.UIPanel(
            pygame.Rect(width - panel_width, 0, panel_width, height),
            manager=manager,
            object_id="#control_panel",
        )
        inner = panel_width - 20
        y = 0
        pygame_gui.elements.UILabel(
            pygame.Rect(0, y, panel_width, 30),
            text="Control Panel",
            manager=manager,
            container=self.panel,
            object_id="#title_label",
        )
        y += 40
        self.preset_menu = pygame_gui.elements.UIDropDownMenu(
            list(engine.presets.keys()),
            engine.current_preset.name if engine.current_preset else list(engine.presets)[0],
            pygame.Rect(10, y, inner, 25),
            manager=manager,
            container=self.panel,
        )
        y += 35
        self.gravity_label = pygame_gui.elements.UILabel(
            pygame.Rect(10, y, inner, 20),
            self._gravity_text(engine.g_constant),
            manager,
            container=self.panel,
        )
        y += 20
        self.gravity_slider = pygame_gui.elements.UIHorizontalSlider(
            pygame.Rect(10, y, inner, 20),
            start_value=engine.g_constant,
            value_range=C.G_SLIDER_RANGE,
            manager=manager,
            container=self.panel,
        )
        y += 30

        self.buttons = {}
        rows = [
            [Command.REVERSE, Command.PAUSE, Command.FORWARD],
            [Command.STEP, Command.RESET],
            [Action.ADD_PLANET],
            [Action.TOGGLE_ANALYTICS, Action.TOGGLE_SHADOW],
        ]
        for row in rows:
            button_width = (inner - 10 * (len(row) - 1)) // len(row)
            for col, target in enumerate(row):
                button = pygame_gui.elements.UIButton(
                    pygame.Rect(10 + col * (button_width + 10), y, button_width, 25),
                    target.value,
                    manager,
                    container=self.panel,
                )
                self.buttons[button] = target
            y += 35

    @staticmethod
    def _gravity_text(value):
        return f"Gravity (G): {value:.2f}"

    def process_event(self, event):
        """Apply engine-level events; return an :class:`Action` for the host."""
        if event.type == pygame_gui.UI_BUTTON_PRESSED:
            target = self.buttons.get(event.ui_element)
            if isinstance(target, Command):
                self.engine.execute(target)
            elif target is not None:
                return target
        elif (
            event.type == pygame_gui.UI_HORIZONTAL_SLIDER_MOVED
            and event.ui_element == self.gravity_slider
        ):
            self.engine.g_constant = float(event.value)
            self.gravity_label.set_text(self._gravity_text(event.value))
        elif (
            event.type == pygame_gui.UI_DROP_DOWN_MENU_CHANGED
            and event.ui_element == self.preset_menu
        ):
            self.engine.load_preset(event.text)
        return None
