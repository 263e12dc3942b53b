"""Equivalence oracle implementations for L* hypotheses."""

from .base_oracle import EquivalenceOracle
from .pac_oracle import PACEquivalenceOracle
from .w_method_oracle import WMethodOracle
from .bfs_oracle import BFSOracle

__all__ = [
    'EquivalenceOracle',
    'PACEquivalenceOracle',
    'WMethodOracle',
    'BFSOracle',
]
