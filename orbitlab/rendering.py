"""Drawing helpers for bodies, shadows, collision debris and the analytics panel."""

import logging
import math
from pathlib import Path

import pygame
import pygame.gfxdraw

from . import constants as C
from .utils import percent_to_display, stability_label, time_scale_to_display

logger = logging.getLogger(__name__)

IMAGE_FILES = {
    "sun": "sun.png",
    "earth": "earth.png",
    "jupiter": "jupiter_juno.png",
}


def load_images(asset_dir):
    """Load the body images found in ``asset_dir``; missing files are skipped."""
    images = {}
    if asset_dir is None:
        return images
    asset_dir = Path(asset_dir)
    for key, filename in IMAGE_FILES.items():
        path = asset_dir / filename
        if not path.exists():
            logger.warning("Image %s not found, drawing '%s' as a circle", path, key)
            continue
        images[key] = pygame.image.load(str(path))
    return images


def draw_body(screen, body, camera, images):
    x, y = camera.world_to_screen(body.pos)
    radius = max(1, int(body.radius))
    width, height = screen.get_size()
    if not (-radius <= x <= width + radius and -radius <= y <= height + radius):
        return
    image = images.get(body.image)
    if image is not None:
        size = 2 * radius
        scaled = pygame.transform.smoothscale(image, (size, size))
        screen.blit(scaled, (int(x) - radius, int(y) - radius))
        return
    color = C.BODY_COLORS.get(body.image, C.DEFAULT_BODY_COLOR)
    pygame.gfxdraw.filled_circle(screen, int(x), int(y), radius, color)
    pygame.gfxdraw.aacircle(screen, int(x), int(y), radius, color)


def draw_shadow_bodies(screen, shadow_bodies, camera):
    overlay = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
    for body in shadow_bodies:
        x, y = camera.world_to_screen(body.pos)
        pygame.draw.circle(overlay, C.SHADOW_COLOR, (int(x), int(y)), max(1, int(body.radius)))
    screen.blit(overlay, (0, 0))


def draw_collision_effect(screen, effect, camera):
    cx, cy = camera.world_to_screen((effect.x, effect.y))
    overlay = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
    for p in effect.particles:
        if p.alpha <= 0:
            continue
        color = (255, int(255 * p.green), 0, int(255 * p.alpha))
        pygame.draw.circle(
            overlay, color, (int(cx + p.x), int(cy + p.y)), max(1, int(p.size))
        )
    screen.blit(overlay, (0, 0))


def draw_analytics_panel(screen, diagnostics, font, origin=(10, 90)):
    x, y = origin
    width, height = 220, 190
    panel = pygame.Surface((width, height), pygame.SRCALPHA)
    panel.fill(C.PANEL_BG)
    screen.blit(panel, (x, y))
    pygame.draw.rect(screen, C.GRAY, (x, y, width, height), 1)

    lines = [
        "System Analytics",
        f"Energy drift: {percent_to_display(diagnostics.energy_drift)}",
        f"Ang. mom. drift: {percent_to_display(diagnostics.angular_momentum_drift)}",
        f"COM drift: {diagnostics.com_drift:.4f}",
        f"Divergence: {diagnostics.divergence:.4f}",
        f"Stability: {diagnostics.stability_index:.2f} "
        f"({stability_label(diagnostics.stability_index)})",
        "Chaos level:",
    ]
    ty = y + 8
    for line in lines:
        screen.blit(font.render(line, True, C.WHITE), (x + 10, ty))
        ty += 20

    bar_width = width - 20
    pygame.draw.rect(screen, C.GRAY, (x + 10, ty, bar_width, 16))
    chaos = diagnostics.chaos_level
    fill = (int(255 * chaos), int(255 * (1 - chaos)), 0)
    pygame.draw.rect(screen, fill, (x + 10, ty, int(bar_width * chaos), 16))


def draw_drift_graph(screen, history, origin=(10, 290), size=(220, 60)):
    """Sparkline of the recorded energy drift, scaled to its largest excursion.

    Undefined (non-finite) samples are skipped.
    """
    values = [d for d in history if math.isfinite(d)]
    if len(values) < 2:
        return
    x, y = origin
    width, height = size
    mid = y + height / 2
    max_drift = max(max(abs(d) for d in values), 1e-9)
    step = width / (len(values) - 1)
    points = [
        (x + i * step, mid - (d / max_drift) * (height / 2 - 5))
        for i, d in enumerate(values)
    ]
    pygame.draw.line(screen, C.GRAY, (x, mid), (x + width, mid), 1)
    pygame.draw.lines(screen, C.DRIFT_COLOR, False, points, 2)


def draw_periodicity_notice(screen, font):
    width = screen.get_width()
    x, y = width // 2 - 100, 50
    notice = pygame.Surface((200, 30), pygame.SRCALPHA)
    notice.fill(C.NOTICE_COLOR)
    screen.blit(notice, (x, y))
    screen.blit(font.render("Periodic Orbit Detected!", True, C.WHITE), (x + 20, y + 7))


def draw_body_info(screen, body, font):
    x, y = screen.get_width() - C.UI_SIDEBAR_WIDTH - 160, 90
    box = pygame.Surface((150, 60), pygame.SRCALPHA)
    box.fill(C.PANEL_BG)
    screen.blit(box, (x, y))
    for i, line in enumerate(
        (f"Name: {body.name}", f"Mass: {body.mass:g}", f"Speed: {body.speed:.2f}")
    ):
        screen.blit(font.render(line, True, C.WHITE), (x + 5, y + 5 + 18 * i))


def draw_status(screen, engine, font):
    preset = engine.current_preset.name if engine.current_preset else "-"
    status = (
        f"Time Scale: {time_scale_to_display(engine.time_scale)}    "
        f"Current: {preset}    Year: {engine.current_year}"
    )
    screen.blit(font.render(status, True, C.WHITE), (10, 10))
