import os
import numpy as np
from concurrent.futures import ProcessPoolExecutor
from loguru import logger

from nbodybench.backends.vectorized import Backend as VectorizedBackend, kick
from nbodybench.backends.vectorized.vectorized_backend import VX


class Backend(VectorizedBackend):

    def __init__(self, config: dict, workers: int | None = None):
        super().__init__(config=config, device='parallel')
        self.workers = workers if workers is not None else (os.cpu_count() or 1)
        if self.workers < 1:
            raise ValueError(f'workers must be positive, got {self.workers}')
        self._executor = None

    @property
    def executor(self) -> ProcessPoolExecutor:
        if self._executor is None:
            logger.debug(f'Starting process pool with {self.workers} workers')
            self._executor = ProcessPoolExecutor(max_workers=self.workers)
        return self._executor

    def _chunks(self, n: int):
        bounds = np.linspace(0, n, min(self.workers, n) + 1).astype(int)
        return [(int(lo), int(hi)) for lo, hi in zip(bounds[:-1], bounds[1:]) if hi > lo]

    def _compute_velocities(self, state: np.ndarray) -> np.ndarray:
        next_state = state.copy()
        chunks = self._chunks(state.shape[1])
        futures = [
            self.executor.submit(kick, state, lo, hi, self.dt, self.softening)
            for lo, hi in chunks
        ]
        for (lo, hi), future in zip(chunks, futures):
            next_state[VX:, lo:hi] = future.result()
        return next_state

    def close(self) -> None:
        if self._executor is not None:
            logger.debug('Shutting down process pool')
            self._executor.shutdown()
            self._executor = None
