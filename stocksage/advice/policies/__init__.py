from stocksage.advice.policies import rules  # noqa: F401  (registers policies)
from stocksage.advice.policies.registry import (
    PolicyContext,
    PolicyFinding,
    PolicySeverity,
    registry,
)

__all__ = ["PolicyContext", "PolicyFinding", "PolicySeverity", "registry"]
