import numpy as np

_MASK_32 = 0xFFFFFFFF
_MASK_64 = 0xFFFFFFFFFFFFFFFF


class SeededRandom:
    """Re-seedable Mersenne Twister.

    Wraps ``numpy.random.RandomState`` (MT19937). A 64-bit seed is split into
    its high and low 32-bit words and used to seed by array, so every signed
    64-bit value is a distinct, reproducible seed.

    Not safe for concurrent use; every generator and supplier owns its own
    instance.
    """

    def __init__(self, seed: int = 0):
        self._rs = np.random.RandomState()
        self.set_seed(seed)

    def set_seed(self, seed: int) -> None:
        seed = int(seed) & _MASK_64
        self._rs.seed(np.array([(seed >> 32) & _MASK_32, seed & _MASK_32], dtype=np.uint32))

    def next_long(self) -> int:
        hi, lo = self._rs.randint(0, 1 << 32, size=2, dtype=np.uint64)
        value = (int(hi) << 32) | int(lo)
        # two's complement back to a signed 64-bit value
        return value - (1 << 64) if value >= (1 << 63) else value

    def next_int(self, bound: int) -> int:
        """Uniform integer in ``[0, bound)``."""
        if bound <= 0:
            raise ValueError(f"bound must be > 0, found {bound}")
        return int(self._rs.randint(0, bound, dtype=np.int64))

    def next_gaussian(self) -> float:
        return float(self._rs.standard_normal())

    def uniform(self, low: float, high: float) -> float:
        return float(self._rs.uniform(low, high))

    def integers(self, low: int, high: int) -> int:
        """Uniform integer in ``[low, high]``, both ends inclusive."""
        if low > high:
            raise ValueError(f"low must be <= high, found [{low}, {high}]")
        span = high - low + 1
        if span <= (1 << 62):
            return low + int(self._rs.randint(0, span, dtype=np.int64))
        # spans close to the full 64-bit range
        return low + (self.next_long() & _MASK_64) % span
