import time
from tqdm import tqdm
from typing import Iterable
from loguru import logger

from nbodybench.backends import Backend
from nbodybench.frontends.frontend import Frontend as BaseFrontend, SimulationResult
from nbodybench.helpers import Body


class Frontend(BaseFrontend):

    def __init__(self, backend: Backend, progress: bool = False):
        super().__init__(backend)
        self.progress = progress

    def simulate(self, bodies: Iterable[Body], steps: int) -> SimulationResult:
        if steps < 0:
            raise ValueError(f'steps must be non-negative, got {steps}')

        state = self.backend.load(bodies)
        logger.debug(f'Running {steps} steps on {self.backend.device}')

        start = time.perf_counter()
        for _ in tqdm(range(steps), disable=not self.progress):
            state = self.backend.step(state)
        elapsed = time.perf_counter() - start

        logger.debug(f'Finished {steps} steps in {elapsed:.6f} s')
        return SimulationResult(bodies=self.backend.unload(state), steps=steps, elapsed=elapsed)
