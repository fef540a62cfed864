import math
from typing import List

from nbodybench.helpers.body import Body
from nbodybench.helpers.rng import XorShift64


def generate_bodies(nplanets: int, rng: XorShift64) -> List[Body]:
    """Draw `nplanets` bodies from `rng`.

    The five fields of a body are drawn in the order mass, x, y, vx, vy and a
    body is complete before the next one starts; changing that order changes
    every value that follows.
    """
    if nplanets < 0:
        raise ValueError(f'nplanets must be non-negative, got {nplanets}')

    spread = math.pow(1 + nplanets, 0.4)
    bodies = []
    for _ in range(nplanets):
        mass = rng.next_double() * 10 + 0.2
        x = (rng.next_double() - 0.5) * 100 * spread
        y = (rng.next_double() - 0.5) * 100 * spread
        vx = rng.next_double() * 5 - 2.5
        vy = rng.next_double() * 5 - 2.5
        bodies.append(Body(mass, x, y, vx, vy))
    return bodies
