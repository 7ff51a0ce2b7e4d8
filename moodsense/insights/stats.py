"""Small numeric helpers shared by the analyzers."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Sequence
from statistics import mean, pvariance


def count_leading(values: Iterable[int], predicate: Callable[[int], bool]) -> int:
    """Length of the run at the start of ``values`` satisfying ``predicate``."""
    count = 0
    for value in values:
        if not predicate(value):
            break
        count += 1
    return count


def average(values: Sequence[float]) -> float:
    return float(mean(values)) if values else 0.0


def population_variance(values: Sequence[float]) -> float:
    return float(pvariance(values)) if values else 0.0


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with .5 going up (toward +inf), unlike round()'s banker's rounding."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


__all__ = ["average", "count_leading", "population_variance", "round_half_up"]
