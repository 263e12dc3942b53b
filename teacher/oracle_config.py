"""
Configuration and factory for equivalence oracle implementations.

This module provides a unified interface for creating and configuring the
equivalence oracle a teacher uses to check hypotheses.
"""

from dataclasses import dataclass
from typing import Any, Dict, Hashable, List, Optional
from enum import Enum

from counterexample.base_oracle import EquivalenceOracle
from counterexample.pac_oracle import PACEquivalenceOracle
from counterexample.w_method_oracle import WMethodOracle
from counterexample.bfs_oracle import BFSOracle


class OracleType(Enum):
    """Available equivalence oracle types."""
    BFS = "bfs"
    W_METHOD = "w_method"
    PAC = "pac"


@dataclass
class OracleConfig:
    """Configuration for a specific oracle implementation."""

    oracle_type: OracleType = OracleType.BFS

    # Common parameters
    time_limit: Optional[float] = None  # Seconds per equivalence query
    verbose: bool = True

    # PAC oracle parameters
    epsilon: float = 0.01  # Error tolerance
    delta: float = 0.01    # Confidence parameter
    max_length: int = 30   # Maximum word length for sampling
    distribution: str = 'geometric'  # Sampling distribution
    seed: Optional[int] = 0

    # W-method oracle parameters
    max_target_states: int = 10  # Upper bound on target automaton states

    # BFS oracle parameters
    max_depth: int = 10
    breadth_limit: int = 10000  # Max words per level

    def __post_init__(self):
        if isinstance(self.oracle_type, str):
            try:
                self.oracle_type = OracleType(self.oracle_type)
            except ValueError:
                raise ValueError(
                    f"Unknown oracle type: {self.oracle_type}. "
                    f"Available types: {[t.value for t in OracleType]}"
                ) from None

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary for serialization."""
        result = {
            'oracle_type': self.oracle_type.value,
            'time_limit': self.time_limit,
        }

        if self.oracle_type == OracleType.PAC:
            result.update({
                'epsilon': self.epsilon,
                'delta': self.delta,
                'max_length': self.max_length,
                'distribution': self.distribution,
                'seed': self.seed,
            })
        elif self.oracle_type == OracleType.W_METHOD:
            result.update({
                'max_target_states': self.max_target_states,
            })
        elif self.oracle_type == OracleType.BFS:
            result.update({
                'max_depth': self.max_depth,
                'breadth_limit': self.breadth_limit,
            })

        return result


def create_equivalence_oracle(config: OracleConfig, membership_oracle,
                              alphabet: List[Hashable]) -> EquivalenceOracle:
    """
    Factory method for creating equivalence oracles.

    Args:
        config: Oracle configuration
        membership_oracle: Oracle answering ``classify_word``
        alphabet: Input alphabet

    Returns:
        Initialized equivalence oracle
    """
    if config.oracle_type == OracleType.BFS:
        return BFSOracle(
            membership_oracle, alphabet,
            max_depth=config.max_depth,
            breadth_limit=config.breadth_limit,
            verbose=config.verbose
        )
    if config.oracle_type == OracleType.W_METHOD:
        return WMethodOracle(
            membership_oracle, alphabet,
            max_target_states=config.max_target_states,
            verbose=config.verbose
        )
    return PACEquivalenceOracle(
        membership_oracle, alphabet,
        epsilon=config.epsilon,
        delta=config.delta,
        max_length=config.max_length,
        distribution=config.distribution,
        seed=config.seed,
        verbose=config.verbose
    )


def get_default_configs() -> Dict[str, OracleConfig]:
    """Get default configurations for each oracle type."""
    return {
        "bfs": OracleConfig(
            oracle_type=OracleType.BFS,
            max_depth=10,
            breadth_limit=10000
        ),
        "w_method": OracleConfig(
            oracle_type=OracleType.W_METHOD,
            max_target_states=10
        ),
        "pac": OracleConfig(
            oracle_type=OracleType.PAC,
            epsilon=0.001,
            delta=0.001,
            distribution='uniform',
            max_length=15
        ),
    }
