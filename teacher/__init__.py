"""Teacher components for L*."""

from .base_teacher import Teacher
from .language_oracle import LanguageOracle, RegexOracle
from .oracle_config import OracleConfig, OracleType, create_equivalence_oracle, get_default_configs
from .teacher import OracleTeacher, PredicateTeacher, RegexTeacher

__all__ = [
    "Teacher",
    "LanguageOracle", "RegexOracle",
    "OracleConfig", "OracleType", "create_equivalence_oracle", "get_default_configs",
    "OracleTeacher", "PredicateTeacher", "RegexTeacher",
]
