MASK64 = (1 << 64) - 1
DEFAULT_SEED = 100


class XorShift64:

    def __init__(self, seed: int = DEFAULT_SEED):
        self._state = seed & MASK64

    @property
    def state(self) -> int:
        return self._state

    def next_u64(self) -> int:
        s = self._state
        s ^= (s << 21) & MASK64
        s ^= s >> 35
        s ^= (s << 4) & MASK64
        self._state = s
        return s

    def next_double(self) -> float:
        # 26 high bits of two draws
        high = self.next_u64() >> (64 - 26)
        low = self.next_u64() >> (64 - 26)
        return ((high << 27) + low) / (1 << 53)
