import numpy as np
from typing import List, Tuple, Optional, Sequence
from dataclasses import dataclass
import os

import nbody as P
from nbody.engine import Particle, World
from nbody.viewport import Viewport, fit

os.environ['PYGAME_HIDE_SUPPORT_PROMPT'] = '1'
import pygame


@dataclass
class AppearanceConfig:
    """Display-only settings; never read by the physics."""
    width: int = P.DISPLAY_WIDTH
    height: int = P.DISPLAY_HEIGHT
    bg_color: Tuple[int, int, int] = P.BG_COLOR
    inflation: float = P.VIEW_INFLATION
    min_pixel_radius: int = 1
    fps: int = P.FPS


class Renderer:
    """Maps particle snapshots → pixel frames."""

    def __init__(self, config: Optional[AppearanceConfig] = None):
        self.config = config or AppearanceConfig()
        self._display_initialized = False

    def fit(self, particles: Sequence[Particle]) -> Viewport:
        return fit(particles, self.config.width, self.config.height,
                   inflation=self.config.inflation)

    def _draw(self, surface: "pygame.Surface", particles: Sequence[Particle],
              viewport: Viewport):
        surface.fill(self.config.bg_color)
        for p in particles:
            sx, sy = viewport.to_screen(p.x, p.y)
            pr = max(self.config.min_pixel_radius,
                     int(viewport.length_to_screen(p.radius)))
            pygame.draw.circle(surface, p.color, (int(sx), int(sy)), pr)

    def render(self, particles: Sequence[Particle],
               viewport: Optional[Viewport] = None) -> np.ndarray:
        """Render single frame → (height, width, 3) uint8."""
        if viewport is None:
            viewport = self.fit(particles)
        surface = pygame.Surface((self.config.width, self.config.height))
        self._draw(surface, particles, viewport)
        return pygame.surfarray.array3d(surface).transpose(1, 0, 2)

    def play(self, world: World, dt: Optional[float] = None,
             max_frames: Optional[int] = None):
        """
        Run the world live in a pygame window. Press Q to exit.

        Each frame advances exactly one fixed tick; the measured frame
        time is only displayed.
        """
        if not self._display_initialized:
            pygame.init()
            self._display_initialized = True

        screen = pygame.display.set_mode((self.config.width, self.config.height))
        pygame.display.set_caption('N-body')
        clock = pygame.time.Clock()

        running = True
        frames = 0
        try:
            while running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        running = False
                    if event.type == pygame.KEYDOWN and event.key == pygame.K_q:
                        running = False

                world.step(dt)
                snapshot = world.particles()
                self._draw(screen, snapshot, self.fit(snapshot))
                pygame.display.flip()

                frame_ms = clock.tick(self.config.fps)
                pygame.display.set_caption(
                    f'N-body: {len(snapshot)} particles, frame dt = {frame_ms} ms')

                frames += 1
                if max_frames is not None and frames >= max_frames:
                    running = False
        finally:
            pygame.quit()
            self._display_initialized = False


def save_frames(frames: List[np.ndarray], path: str):
    """Save frames as individual PNGs."""
    os.makedirs(path, exist_ok=True)
    for t in range(len(frames)):
        surf = pygame.surfarray.make_surface(frames[t].transpose(1, 0, 2))
        pygame.image.save(surf, os.path.join(path, f'frame_{t:05d}.png'))
