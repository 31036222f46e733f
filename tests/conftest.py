from collections.abc import Iterable

import pytest


class FixedRandom:
    """Deterministic stand-in for ``random.Random``.

    ``randint`` and ``choice`` replay the given sequences (cycling);
    ``shuffle`` leaves the list in its original order.
    """

    def __init__(self, numbers: Iterable[int] = (42,), symbols: Iterable[str] = ("#",)) -> None:
        self.numbers = list(numbers)
        self.symbols = list(symbols)
        self._number_idx = 0
        self._symbol_idx = 0
        self.shuffled: list[list] = []

    def randint(self, a: int, b: int) -> int:
        value = self.numbers[self._number_idx % len(self.numbers)]
        self._number_idx += 1
        return value

    def choice(self, seq):
        symbol = self.symbols[self._symbol_idx % len(self.symbols)]
        self._symbol_idx += 1
        assert symbol in seq
        return symbol

    def shuffle(self, x) -> None:
        self.shuffled.append(list(x))


@pytest.fixture
def fixed_random() -> FixedRandom:
    return FixedRandom()
