"""
2D N-body engine: point masses under mutual gravity, merging on contact.

- Exhaustive pairwise attraction, G = 1 by default (dimensionless units)
- Semi-implicit Euler with a fixed tick
- Inelastic merges conserve mass and momentum
- State per particle: (x, y, vx, vy, mass), radius = 2 * sqrt(mass)
"""

import numpy as np
from dataclasses import dataclass, InitVar
from typing import List, Tuple, Optional, Dict, Sequence

import nbody as P
from nbody.errors import DegenerateDistanceError, EmptyWorldError
import copy


def radius_for_mass(mass: float) -> float:
    return 2.0 * float(np.sqrt(mass))


@dataclass
class Particle:
    """
    Physics state plus a display color the physics never reads.

    Radius is derived from mass. ``fixed_radius`` is accepted at
    construction for bodies whose size is stated up front (the anchor);
    it must agree with 2 * sqrt(mass).
    """
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    mass: float = 1.0
    color: Tuple[int, int, int] = (255, 255, 255)
    ax: float = 0.0
    ay: float = 0.0
    fixed_radius: InitVar[Optional[float]] = None

    def __post_init__(self, fixed_radius: Optional[float]):
        if not self.mass > 0:
            raise ValueError(f"mass must be positive, got {self.mass}")
        if fixed_radius is not None and not np.isclose(fixed_radius, self.radius):
            raise ValueError(
                f"radius {fixed_radius} does not match mass {self.mass} "
                f"(expected {self.radius})")

    @property
    def radius(self) -> float:
        return radius_for_mass(self.mass)

    @property
    def position(self) -> np.ndarray:
        return np.array([self.x, self.y])

    @property
    def velocity(self) -> np.ndarray:
        return np.array([self.vx, self.vy])

    @property
    def acceleration(self) -> np.ndarray:
        return np.array([self.ax, self.ay])

    @property
    def speed(self) -> float:
        return float(np.sqrt(self.vx**2 + self.vy**2))

    @property
    def momentum(self) -> np.ndarray:
        return self.mass * self.velocity

    @property
    def full_state(self) -> np.ndarray:
        return np.array([self.x, self.y, self.vx, self.vy, self.mass, self.radius])

    # Pairwise physics

    def acceleration_from(self, other: "Particle", g: float = P.G) -> np.ndarray:
        """Acceleration on self induced by ``other`` alone. Does not mutate."""
        dx = other.x - self.x
        dy = other.y - self.y
        dist = np.hypot(dx, dy)
        if dist == 0.0:
            raise DegenerateDistanceError()
        with np.errstate(over='ignore', divide='ignore', invalid='ignore'):
            force = g * self.mass * other.mass / dist**2
            acc = np.array([dx, dy]) / dist * force / self.mass
        # close enough that the pull is not representable
        if not np.all(np.isfinite(acc)):
            raise DegenerateDistanceError()
        return acc

    def compute_acceleration_from(self, other: "Particle", g: float = P.G):
        """
        Overwrite self's acceleration with the pull of ``other`` alone.

        Single-pair only: a world tick sums every other particle's
        contribution instead of calling this per pair.
        """
        self.ax, self.ay = 0.0, 0.0
        a = self.acceleration_from(other, g)
        self.ax, self.ay = float(a[0]), float(a[1])

    def integrate(self, dt: float):
        """Kick then drift: velocity first, position uses the new velocity."""
        self.vx += self.ax * dt
        self.vy += self.ay * dt
        self.x += self.vx * dt
        self.y += self.vy * dt

    def is_colliding_with(self, other: "Particle") -> bool:
        dist = np.hypot(other.x - self.x, other.y - self.y)
        return bool(dist <= self.radius + other.radius)

    def merge_with(self, other: "Particle"):
        """Absorb ``other``: mass-weighted position and velocity, summed mass."""
        total = self.mass + other.mass
        self.x = (self.x * self.mass + other.x * other.mass) / total
        self.y = (self.y * self.mass + other.y * other.mass) / total
        self.vx = (self.vx * self.mass + other.vx * other.mass) / total
        self.vy = (self.vy * self.mass + other.vy * other.mass) / total
        self.mass = total


@dataclass
class WorldConfig:
    g: float = P.G
    dt: float = P.DT


class World:
    """
    Owns the particle collection and advances it one tick at a time.

    Step: force pass → integration pass → collision pass
    """

    def __init__(self, particles: Sequence[Particle],
                 config: Optional[WorldConfig] = None):
        if len(particles) == 0:
            raise EmptyWorldError("a world needs at least one particle")
        self.config = config or WorldConfig()
        self._particles: List[Particle] = [copy.deepcopy(p) for p in particles]
        self.time: float = 0.0
        self.tick_count: int = 0
        self.merge_log: List[Dict] = []

    def __len__(self) -> int:
        return len(self._particles)

    def particles(self) -> Tuple[Particle, ...]:
        """Snapshot copies; editing them never reaches the live state."""
        return tuple(copy.deepcopy(p) for p in self._particles)

    def step(self, dt: Optional[float] = None):
        dt = self.config.dt if dt is None else dt
        if not dt > 0:
            raise ValueError(f"dt must be positive, got {dt}")

        acc = self.compute_accelerations()
        for p, a in zip(self._particles, acc):
            p.ax, p.ay = float(a[0]), float(a[1])

        for p in self._particles:
            p.integrate(dt)
        self.time += dt

        self._resolve_collisions()
        self.tick_count += 1

    def compute_accelerations(self) -> np.ndarray:
        """
        Net gravitational acceleration on every particle, (n, 2).

        Uses positions as they are now; no particle's own acceleration
        field is read, so visiting order cannot change the result.
        """
        n = len(self._particles)
        if n == 0:
            raise EmptyWorldError("force pass on an empty world")

        pos = np.array([[p.x, p.y] for p in self._particles])
        mass = np.array([p.mass for p in self._particles])

        dr = pos[None, :, :] - pos[:, None, :]      # dr[i, j] = x_j - x_i
        r2 = np.sum(dr * dr, axis=-1)
        np.fill_diagonal(r2, np.inf)

        with np.errstate(over='ignore', divide='ignore', invalid='ignore'):
            inv_r3 = r2 ** -1.5
            pair = self.config.g * (mass[None, :] * inv_r3)[..., None] * dr
            acc = np.sum(pair, axis=1)

        # coincident or near-coincident pairs give a non-finite pull
        hits = np.argwhere(~np.all(np.isfinite(pair), axis=-1))
        if hits.size:
            i, j = hits[0]
            raise DegenerateDistanceError(int(i), int(j))
        bad_rows = np.flatnonzero(~np.all(np.isfinite(acc), axis=-1))
        if bad_rows.size:
            i = int(bad_rows[0])
            raise DegenerateDistanceError(i, int(np.argmax(inv_r3[i])))
        return acc

    def _resolve_collisions(self):
        """
        Merge touching pairs, later index into earlier.

        After a removal the scan for i restarts at i + 1: i has grown and
        may now reach neighbours it missed.
        """
        ps = self._particles
        i = 0
        while i < len(ps):
            j = i + 1
            while j < len(ps):
                if ps[i].is_colliding_with(ps[j]):
                    absorbed_mass = ps[j].mass
                    ps[i].merge_with(ps[j])
                    del ps[j]
                    self.merge_log.append({
                        'time': self.time, 'tick': self.tick_count,
                        'survivor': i, 'absorbed': j,
                        'absorbed_mass': absorbed_mass, 'mass': ps[i].mass,
                    })
                    j = i + 1
                else:
                    j += 1
            i += 1

    # State access

    def get_full_state(self) -> np.ndarray:
        """(n, 6) → [x, y, vx, vy, mass, radius]"""
        return np.array([p.full_state for p in self._particles])

    # Conserved quantities

    def total_mass(self) -> float:
        return float(sum(p.mass for p in self._particles))

    def total_momentum(self) -> np.ndarray:
        px = sum(p.mass * p.vx for p in self._particles)
        py = sum(p.mass * p.vy for p in self._particles)
        return np.array([px, py])

    def center_of_mass(self) -> np.ndarray:
        total_mass = self.total_mass()
        cx = sum(p.mass * p.x for p in self._particles) / total_mass
        cy = sum(p.mass * p.y for p in self._particles) / total_mass
        return np.array([cx, cy])

    def kinetic_energy(self) -> float:
        return float(sum(0.5 * p.mass * (p.vx**2 + p.vy**2) for p in self._particles))

    def potential_energy(self) -> float:
        pos = np.array([[p.x, p.y] for p in self._particles])
        mass = np.array([p.mass for p in self._particles])
        iu = np.triu_indices(len(self._particles), 1)
        r = np.sqrt(np.sum((pos[:, None, :] - pos[None, :, :])**2, axis=-1))[iu]
        if np.any(r == 0.0):
            k = int(np.argmax(r == 0.0))
            raise DegenerateDistanceError(int(iu[0][k]), int(iu[1][k]))
        mprod = (mass[:, None] * mass[None, :])[iu]
        return float(-self.config.g * np.sum(mprod / r))

    def invariants(self) -> Dict[str, np.ndarray]:
        return {
            'mass': self.total_mass(),
            'momentum': self.total_momentum(),
            'center_of_mass': self.center_of_mass(),
            'energy': self.kinetic_energy() + self.potential_energy(),
        }


def generate_trajectory(world: World, n_steps: int = P.N_STEPS,
                        dt: Optional[float] = None) -> Dict:
    """
    Advance ``world`` in place for ``n_steps`` ticks.

    Returns dict with full_states (list, lengths shrink as particles
    merge), n_particles, mass, momentum, kinetic_energy, com, time, merges.
    """
    full_states = [world.get_full_state()]
    n_particles = [len(world)]
    mass = [world.total_mass()]
    momentum = [world.total_momentum()]
    kinetic = [world.kinetic_energy()]
    com = [world.center_of_mass()]
    times = [world.time]

    for _ in range(n_steps):
        world.step(dt)
        full_states.append(world.get_full_state())
        n_particles.append(len(world))
        mass.append(world.total_mass())
        momentum.append(world.total_momentum())
        kinetic.append(world.kinetic_energy())
        com.append(world.center_of_mass())
        times.append(world.time)

    return {
        'full_states': full_states,
        'config': world.config,
        'n_particles': np.array(n_particles),
        'mass': np.array(mass),
        'momentum': np.array(momentum),
        'kinetic_energy': np.array(kinetic),
        'com': np.array(com),
        'time': np.array(times),
        'merges': list(world.merge_log),
    }
