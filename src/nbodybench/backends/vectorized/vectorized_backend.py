import numpy as np
from typing import Iterable, List

from nbodybench.helpers import Body
from nbodybench.backends.backend import Backend as BaseBackend

MASS, X, Y, VX, VY = range(5)


def pack(bodies: Iterable[Body]) -> np.ndarray:
    """Bodies as a (5, n) float64 array, one row per field."""
    columns = [(b.mass, b.x, b.y, b.vx, b.vy) for b in bodies]
    if not columns:
        return np.zeros((5, 0), dtype=float)
    return np.array(columns, dtype=float).T.copy()


def unpack(state: np.ndarray) -> List[Body]:
    return [Body(*(float(v) for v in column)) for column in state.T]


def kick(state: np.ndarray, lo: int, hi: int, dt: float, softening: float) -> np.ndarray:
    """Kicked velocities (2, hi - lo) for rows lo:hi, reading every body of `state`.

    The j loop stays sequential so each body sums its contributions in the
    same order as the scalar reference loop.
    """
    mass = state[MASS, lo:hi]
    x = state[X, lo:hi]
    y = state[Y, lo:hi]
    vx = state[VX, lo:hi].copy()
    vy = state[VY, lo:hi].copy()
    for j in range(state.shape[1]):
        dx = state[X, j] - x
        dy = state[Y, j] - y
        dist_sqr = dx * dx + dy * dy + softening
        inv_dist = mass * state[MASS, j] / np.sqrt(dist_sqr)
        inv_dist3 = inv_dist * inv_dist * inv_dist
        vx += dt * dx * inv_dist3
        vy += dt * dy * inv_dist3
    return np.stack((vx, vy))


class Backend(BaseBackend):

    def __init__(self, config: dict, device: str = 'numpy'):
        super().__init__(device=device, config=config)

    def load(self, bodies: Iterable[Body]) -> np.ndarray:
        return pack(bodies)

    def unload(self, state: np.ndarray) -> List[Body]:
        return unpack(state)

    def _compute_velocities(self, state: np.ndarray) -> np.ndarray:
        next_state = state.copy()
        next_state[VX:] = kick(state, 0, state.shape[1], self.dt, self.softening)
        return next_state

    def _update_positions(self, next_state: np.ndarray) -> None:
        next_state[X] += self.dt * next_state[VX]
        next_state[Y] += self.dt * next_state[VY]
