from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, List

from nbodybench.backends import Backend
from nbodybench.helpers import Body


@dataclass
class SimulationResult:
    bodies: List[Body]
    steps: int
    elapsed: float

    @property
    def final_position(self):
        last = self.bodies[-1]
        return last.x, last.y


class Frontend(ABC):

    def __init__(self, backend: Backend):
        super().__init__()
        self.backend = backend

    @abstractmethod
    def simulate(self, bodies: Iterable[Body], steps: int) -> SimulationResult:
        raise NotImplementedError
