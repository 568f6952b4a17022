from typing import Optional


class SimulationError(RuntimeError):
    """Base class for failures raised by the simulation core."""


class DegenerateDistanceError(SimulationError):
    """Two particles share a position, so the pull between them is undefined."""

    def __init__(self, i: Optional[int] = None, j: Optional[int] = None):
        self.i = i
        self.j = j
        if i is None or j is None:
            msg = "particles at identical positions"
        else:
            msg = f"particles {i} and {j} are at identical positions"
        super().__init__(msg)


class EmptyWorldError(SimulationError):
    """Operation needs at least one particle."""
