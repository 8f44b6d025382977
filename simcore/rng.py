import random
from typing import Dict, List, Optional, Tuple

MASK32 = 0xFFFFFFFF
TWO_32 = 2 ** 32

# name -> (a, c, m, offset)
LCG_PRESETS: Dict[str, Tuple[int, int, int, bool]] = {
    "lcg32": (1664525, 1013904223, TWO_32, False),
    "mixed": (1664525, 1013904223, TWO_32, True),
    "minstd": (16807, 1, 2147483647, False),
    "ansi": (1103515245, 12345, TWO_32, False),
}


def _entropy_seed() -> int:
    # no seed given: not reproducible on purpose
    return random.SystemRandom().getrandbits(32)


class LinearCongruential:
    """
    state = (a * state + c) mod m, output state / m.

    With m == 2**32 the recurrence is reduced with an explicit 32-bit mask so
    the sequence matches unsigned 32-bit wraparound arithmetic.
    offset=True returns (state + 1) / (m + 1), which never yields exactly 0.
    """

    def __init__(self, seed: int, a: int, c: int, m: int, offset: bool = False):
        self.a = a
        self.c = c
        self.m = m
        self.offset = offset
        self.state = int(seed) & MASK32 if m == TWO_32 else int(seed) % m

    def next(self) -> float:
        if self.m == TWO_32:
            self.state = (self.a * self.state + self.c) & MASK32
        else:
            self.state = (self.a * self.state + self.c) % self.m
        if self.offset:
            return (self.state + 1) / (self.m + 1)
        return self.state / self.m

    # lets samplers accept either a generator or random.Random
    random = next

    def sample(self, n: int) -> List[float]:
        return [self.next() for _ in range(n)]


class Mulberry32:
    """32-bit hash generator; same bit operations as the JS Math.imul version."""

    def __init__(self, seed: int):
        self.state = (int(seed) & MASK32) or 1

    def next(self) -> float:
        self.state = (self.state + 0x6D2B79F5) & MASK32
        a = self.state
        t = ((a ^ (a >> 15)) * (1 | a)) & MASK32
        t = ((t + (((t ^ (t >> 7)) * (61 | t)) & MASK32)) ^ t) & MASK32
        return ((t ^ (t >> 14)) & MASK32) / TWO_32

    random = next

    def sample(self, n: int) -> List[float]:
        return [self.next() for _ in range(n)]


def make_generator(seed: Optional[int] = None, kind: str = "lcg32"):
    """
    Fresh generator owned by a single run.
    seed=None falls back to a non-reproducible seed.
    """
    if seed is None:
        seed = _entropy_seed()

    kind = kind.strip().lower()
    if kind == "mulberry32":
        return Mulberry32(seed)
    if kind not in LCG_PRESETS:
        raise ValueError(f"Unknown generator kind: {kind}")

    a, c, m, offset = LCG_PRESETS[kind]
    return LinearCongruential(seed, a, c, m, offset=offset)
