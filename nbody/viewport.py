"""
Viewport fitting: uniform scale and offset that keep every particle on screen.

Pure functions of a particle snapshot; safe to call every frame.
"""

import numpy as np
from dataclasses import dataclass
from typing import Sequence, Tuple

import nbody as P
from nbody.engine import Particle
from nbody.errors import EmptyWorldError


@dataclass(frozen=True)
class Viewport:
    """sx = x * scale + offset_x, sy = offset_y - y * scale (world +y points up)"""
    scale: float
    offset_x: float
    offset_y: float

    @property
    def offset(self) -> Tuple[float, float]:
        return self.offset_x, self.offset_y

    def to_screen(self, x: float, y: float) -> Tuple[float, float]:
        return x * self.scale + self.offset_x, self.offset_y - y * self.scale

    def length_to_screen(self, length: float) -> float:
        return length * self.scale


def bounding_box(particles: Sequence[Particle]) -> Tuple[float, float, float, float]:
    """(x_min, y_min, x_max, y_max) over particle centres."""
    if len(particles) == 0:
        raise EmptyWorldError("no particles to bound")
    xs = np.array([p.x for p in particles])
    ys = np.array([p.y for p in particles])
    return float(xs.min()), float(ys.min()), float(xs.max()), float(ys.max())


def fit(particles: Sequence[Particle], display_width: float, display_height: float,
        inflation: float = P.VIEW_INFLATION) -> Viewport:
    """
    Fit the centres' bounding box, inflated for margin, into the display.

    The tighter axis sets the scale so aspect ratio is kept. Radii are
    ignored, so a large body on the edge can be partly clipped. A box
    with no extent on an axis puts no constraint on that axis; a single
    point gets scale 1.
    """
    if display_width <= 0 or display_height <= 0:
        raise ValueError(f"display must have positive size, got "
                         f"{display_width}x{display_height}")

    x_min, y_min, x_max, y_max = bounding_box(particles)
    width = (x_max - x_min) * inflation
    height = (y_max - y_min) * inflation

    scales = [d / e for d, e in ((display_width, width), (display_height, height))
              if e > 0]
    scale = min(scales) if scales else 1.0

    cx = (x_min + x_max) / 2
    cy = (y_min + y_max) / 2
    return Viewport(scale=scale,
                    offset_x=display_width / 2 - cx * scale,
                    offset_y=display_height / 2 + cy * scale)
