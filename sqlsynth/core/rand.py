"""
Seedable random primitives shared by all synthesizers.
"""
import random
import string
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")

_ALNUM = string.ascii_letters + string.digits


class RandomSource:
    """Uniform random draws backed by a local ``random.Random``.

    A fixed seed reproduces the same sequence of draws, and therefore the same
    sequence of synthesized statements.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        # Use a local RNG for reproducibility and isolation from global random
        self.rng = random.Random(seed)

    def rd(self, n: int) -> int:
        """Uniform integer in [0, n)."""
        if n <= 0:
            raise ValueError(f"rd() needs a positive bound, got {n}")
        return self.rng.randrange(n)

    def rd_range(self, lo: int, hi: int) -> int:
        """Uniform integer in [lo, hi]."""
        return self.rng.randint(lo, hi)

    def rd_string_char(self, n: int) -> str:
        """Random alphanumeric string of length n."""
        return ''.join(self.rng.choice(_ALNUM) for _ in range(n))

    def choice(self, seq: Sequence[T]) -> T:
        return seq[self.rd(len(seq))]

    def uniform(self, a: float, b: float) -> float:
        return self.rng.uniform(a, b)
