"""Core components for L* algorithm."""

from .automaton import Automaton, DfaState
from .config import CounterexampleMode, LearnerConfig
from .observation_table import ObservationTable, TableBudgetExceeded
from .lstar import LStarAlgorithm, LearningBudgetExceeded, Phase, ProtocolViolation, run_lstar

__version__ = "0.1.0"
__all__ = [
    "Automaton", "DfaState",
    "CounterexampleMode", "LearnerConfig",
    "ObservationTable", "TableBudgetExceeded",
    "LStarAlgorithm", "LearningBudgetExceeded", "Phase", "ProtocolViolation", "run_lstar",
]
