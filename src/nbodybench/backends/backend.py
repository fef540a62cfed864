from abc import ABC, abstractmethod
from typing import Any, Iterable, List

from nbodybench.helpers import Body


class Backend(ABC):

    def __init__(self, device: str, config: dict):
        super().__init__()

        self.device = device
        self.config = config

    @property
    def dt(self) -> float:
        return self.config['dt']

    @property
    def softening(self) -> float:
        return self.config['softening']

    @abstractmethod
    def load(self, bodies: Iterable[Body]) -> Any:
        raise NotImplementedError

    @abstractmethod
    def unload(self, state: Any) -> List[Body]:
        raise NotImplementedError

    @abstractmethod
    def _compute_velocities(self, state: Any) -> Any:
        raise NotImplementedError

    @abstractmethod
    def _update_positions(self, next_state: Any) -> None:
        raise NotImplementedError

    def step(self, state: Any) -> Any:
        next_state = self._compute_velocities(state)
        self._update_positions(next_state)
        return next_state

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def __repr__(self):
        return f'{type(self).__module__}.Backend(device={self.device!r})'
