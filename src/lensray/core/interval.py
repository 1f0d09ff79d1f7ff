"""Real-valued intervals for ray parameter ranges and colour clamping."""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Interval:
    """A range of real numbers [min, max].

    An interval with min > max is empty.

    Attributes:
        min: Lower bound.
        max: Upper bound.
    """

    min: float = math.inf
    max: float = -math.inf

    @property
    def size(self) -> float:
        return self.max - self.min

    def contains(self, x: float) -> bool:
        """Closed membership test: min <= x <= max."""
        return self.min <= x <= self.max

    def surrounds(self, x: float) -> bool:
        """Open membership test: min < x < max."""
        return self.min < x < self.max

    def clamp(self, x: float) -> float:
        if x < self.min:
            return self.min
        if x > self.max:
            return self.max
        return x

    def with_max(self, new_max: float) -> "Interval":
        """Return a copy with the upper bound replaced (closest-hit shrinking)."""
        return Interval(self.min, new_max)
