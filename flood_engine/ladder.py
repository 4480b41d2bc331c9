# flood_engine/ladder.py
from typing import Any, Callable, Generic, Iterable, Sequence, Tuple, TypeVar

T = TypeVar("T")

Rung = Tuple[Callable[..., bool], T]


class Ladder(Generic[T]):
    """
    Ordered threshold ladder: rungs are checked top to bottom and the first
    predicate that holds decides the outcome. Order encodes precedence, so
    overlapping thresholds are fine.
    """

    def __init__(self, rungs: Iterable[Rung], default: T):
        self.rungs: Sequence[Rung] = tuple(rungs)
        self.default = default

    def resolve(self, *args: Any) -> T:
        for predicate, outcome in self.rungs:
            if predicate(*args):
                return outcome
        return self.default


def above(threshold: float) -> Callable[[float], bool]:
    """Strict ``value > threshold`` predicate for single-value ladders."""
    return lambda value: value > threshold
