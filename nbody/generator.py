"""
Initial conditions: a ring of light particles on tangential orbits
around one heavy anchor at the origin.

The random source is passed in; nothing here touches global RNG state.
"""

import numpy as np
from dataclasses import dataclass
from typing import Tuple, Optional

import nbody as P
from nbody.engine import Particle, World, WorldConfig, radius_for_mass


@dataclass
class GeneratorConfig:
    n_particles_range: Tuple[int, int] = P.N_PARTICLES_RANGE
    orbit_radius_range: Tuple[float, float] = P.ORBIT_RADIUS_RANGE
    mass_range: Tuple[float, float] = P.MASS_RANGE
    tangential_speed_range: Tuple[float, float] = P.TANGENTIAL_SPEED_RANGE
    anchor_mass: float = P.ANCHOR_MASS
    seed: Optional[int] = None

    def __post_init__(self):
        for name in ('n_particles_range', 'orbit_radius_range',
                     'mass_range', 'tangential_speed_range'):
            lo, hi = getattr(self, name)
            if lo > hi:
                raise ValueError(f"{name} is inverted: ({lo}, {hi})")
        if self.n_particles_range[0] < 0:
            raise ValueError("n_particles_range must be non-negative")
        # zero orbit radius would stack a particle on the anchor
        if self.orbit_radius_range[0] <= 0 or self.mass_range[0] <= 0:
            raise ValueError("orbit_radius_range and mass_range must be positive")
        if self.anchor_mass <= 0:
            raise ValueError(f"anchor_mass must be positive, got {self.anchor_mass}")


def anchor_particle(mass: float = P.ANCHOR_MASS) -> Particle:
    return Particle(x=0.0, y=0.0, vx=0.0, vy=0.0, mass=mass,
                    color=P.ANCHOR_COLOR, fixed_radius=radius_for_mass(mass))


def _random_color(rng: np.random.RandomState) -> Tuple[int, int, int]:
    return tuple(rng.randint(80, 255, size=3).tolist())


def _random_particle(rng: np.random.RandomState, config: GeneratorConfig,
                     half_extent: float) -> Particle:
    r = rng.uniform(*config.orbit_radius_range) * half_extent
    angle = rng.uniform(0, 2 * np.pi)
    speed = rng.uniform(*config.tangential_speed_range)
    mass = rng.uniform(*config.mass_range)
    # perpendicular to the position vector, counter-clockwise
    return Particle(x=float(r * np.cos(angle)), y=float(r * np.sin(angle)),
                    vx=float(-speed * np.sin(angle)), vy=float(speed * np.cos(angle)),
                    mass=float(mass), color=_random_color(rng))


def new_world(rng: Optional[np.random.RandomState] = None,
              display_extent_hint: Tuple[float, float] = (P.DISPLAY_WIDTH, P.DISPLAY_HEIGHT),
              config: Optional[GeneratorConfig] = None,
              world_config: Optional[WorldConfig] = None) -> World:
    """
    Random count of orbiting particles plus the anchor, appended last.

    Orbit radii are fractions of half the smaller display extent, so the
    starting disc fills the hinted view.
    """
    config = config or GeneratorConfig()
    if rng is None:
        rng = np.random.RandomState(config.seed)
    if min(display_extent_hint) <= 0:
        raise ValueError(f"display_extent_hint must be positive, got {display_extent_hint}")

    half_extent = 0.5 * min(display_extent_hint)
    lo, hi = config.n_particles_range
    n = rng.randint(lo, hi + 1)

    particles = [_random_particle(rng, config, half_extent) for _ in range(n)]
    particles.append(anchor_particle(config.anchor_mass))
    return World(particles, world_config)
