import numpy as np
from typing import List

# full_states: list of (n_t, 6) arrays [x, y, vx, vy, mass, radius], n_t may shrink


def compute_total_mass(full_states: List[np.ndarray]) -> np.ndarray:
    return np.array([s[:, 4].sum() for s in full_states])


def compute_momentum(full_states: List[np.ndarray]) -> np.ndarray:
    """(T, 2) total momentum vector per recorded tick."""
    return np.array([(s[:, 4:5] * s[:, 2:4]).sum(axis=0) for s in full_states])


def compute_kinetic_energy(full_states: List[np.ndarray]) -> np.ndarray:
    return np.array([(0.5 * s[:, 4] * (s[:, 2]**2 + s[:, 3]**2)).sum()
                     for s in full_states])


def relative_drift(series: np.ndarray) -> np.ndarray:
    """|x_t - x_0| / |x_0|, or absolute drift when x_0 is zero. Vectors use the norm."""
    series = np.asarray(series, dtype=float)
    diff = series - series[0]
    ref = series[0]
    if series.ndim > 1:
        diff = np.linalg.norm(diff, axis=1)
        ref = np.linalg.norm(ref)
    else:
        diff = np.abs(diff)
        ref = abs(ref)
    return diff / ref if ref > 0 else diff


def mass_drift(full_states: List[np.ndarray]) -> float:
    return float(relative_drift(compute_total_mass(full_states)).max())


def momentum_drift(full_states: List[np.ndarray]) -> float:
    """Largest absolute change of the total momentum vector."""
    p = compute_momentum(full_states)
    return float(np.linalg.norm(p - p[0], axis=1).max())
