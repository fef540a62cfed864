import math
from typing import Iterable, List

from nbodybench.helpers import Body
from nbodybench.backends.backend import Backend as BaseBackend


class Backend(BaseBackend):

    def __init__(self, config: dict):
        super().__init__(device='cpu', config=config)

    def load(self, bodies: Iterable[Body]) -> List[Body]:
        return [body.copy() for body in bodies]

    def unload(self, state: List[Body]) -> List[Body]:
        return [body.copy() for body in state]

    def _compute_velocities(self, bodies: List[Body]) -> List[Body]:
        dt = self.dt
        softening = self.softening
        next_bodies = [body.copy() for body in bodies]
        # j == i is kept: dx = dy = 0 so it adds nothing, but it is part of the pair count
        for body1, next_body in zip(bodies, next_bodies):
            for body2 in bodies:
                dx = body2.x - body1.x
                dy = body2.y - body1.y
                dist_sqr = dx * dx + dy * dy + softening
                inv_dist = body1.mass * body2.mass / math.sqrt(dist_sqr)
                inv_dist3 = inv_dist * inv_dist * inv_dist
                next_body.vx += dt * dx * inv_dist3
                next_body.vy += dt * dy * inv_dist3
        return next_bodies

    def _update_positions(self, next_bodies: List[Body]) -> None:
        dt = self.dt
        for body in next_bodies:
            body.x += dt * body.vx
            body.y += dt * body.vy
