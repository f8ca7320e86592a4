"""
Exponential backoff schedule used when polling CloudFormation.
"""

from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class BackoffPolicy:
    """Exponentially growing delays bounded by a maximum total wait.

    Delays start at ``initial_delay`` and are multiplied by ``multiplier`` on
    every step. The schedule stops before the first delay that reaches
    ``max_wait``; callers also treat ``max_wait`` as a wall-clock deadline.
    """

    initial_delay: float = 1.0
    multiplier: float = 2.0
    max_wait: float = 100.0

    def __post_init__(self) -> None:
        if self.initial_delay <= 0:
            raise ValueError("initial_delay must be positive")
        if self.multiplier <= 1:
            raise ValueError("multiplier must be greater than 1")

    def delays(self) -> Iterator[float]:
        """Yield successive delays while they stay below max_wait."""
        delay = self.initial_delay
        while delay < self.max_wait:
            yield delay
            delay *= self.multiplier

    def max_attempts(self) -> int:
        """Number of delays the schedule yields."""
        return sum(1 for _ in self.delays())
