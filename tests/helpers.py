from __future__ import annotations

from typing import Iterable, List

from tv_bingo.rng import RandomSource


class ScriptedRandomSource(RandomSource):
    """Returns queued draws from ``randint``; fails loudly when they run out."""

    def __init__(self, draws: Iterable[int]):
        super().__init__(engine="scripted")
        self._draws: List[int] = list(draws)
        self.calls: List[tuple] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        value = self._draws.pop(0)
        assert a <= value <= b, f"scripted draw {value} outside [{a}, {b}]"
        return value


def make_pool(n: int) -> List[str]:
    return [f"phrase {i:02d}" for i in range(n)]
