"""
Configuration for L* learning runs.

Budgets bound a run that would otherwise loop forever on a language that
needs unbounded refinement or on a teacher that never accepts.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional
from enum import Enum


class CounterexampleMode(Enum):
    """How a rejected hypothesis' counterexamples are added to S."""
    VERBATIM = "verbatim"  # each counterexample word as-is
    PREFIXES = "prefixes"  # every prefix of each counterexample word


@dataclass
class LearnerConfig:
    """Configuration for a single L* run."""

    # Budgets (None = unbounded)
    max_iterations: Optional[int] = 100  # Equivalence queries
    max_membership_queries: Optional[int] = None  # Queries actually sent to the teacher
    time_limit: Optional[float] = None  # Seconds

    # Table behaviour
    cache_queries: bool = True  # Memoize membership results across fills
    counterexample_mode: CounterexampleMode = CounterexampleMode.VERBATIM

    # Progress output
    verbose: bool = True

    def __post_init__(self):
        if isinstance(self.counterexample_mode, str):
            self.counterexample_mode = CounterexampleMode(self.counterexample_mode)
        for name in ("max_iterations", "max_membership_queries"):
            value = getattr(self, name)
            if value is not None and value < 1:
                raise ValueError(f"{name} must be positive, got {value}")
        if self.time_limit is not None and self.time_limit <= 0:
            raise ValueError(f"time_limit must be positive, got {self.time_limit}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary for serialization."""
        return {
            'max_iterations': self.max_iterations,
            'max_membership_queries': self.max_membership_queries,
            'time_limit': self.time_limit,
            'cache_queries': self.cache_queries,
            'counterexample_mode': self.counterexample_mode.value,
            'verbose': self.verbose,
        }
