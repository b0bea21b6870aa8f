"""Registry for post-hoc policy checks over validated advice."""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum

from stocksage.advice.schemas import AdviceItem, AnalysisRequest


class PolicySeverity(StrEnum):
    info = "info"
    warning = "warning"
    critical = "critical"


@dataclass(frozen=True)
class PolicyContext:
    request: AnalysisRequest
    advice: list[AdviceItem]
    concentration_threshold_pct: float = 30.0
    allocation_tolerance_pct: float = 1.0
    strict_concentration: bool = False


@dataclass(frozen=True)
class PolicyFinding:
    rule_id: str
    name: str
    triggered: bool
    severity: PolicySeverity
    message: str
    details: dict = field(default_factory=dict)

    @property
    def rejects(self) -> bool:
        return self.triggered and self.severity == PolicySeverity.critical


PolicyCheck = Callable[[PolicyContext], PolicyFinding]


@dataclass(frozen=True)
class PolicyDefinition:
    rule_id: str
    name: str
    description: str
    check_fn: PolicyCheck


class PolicyRegistry:
    def __init__(self) -> None:
        self._policies: dict[str, PolicyDefinition] = {}

    def register(
        self,
        rule_id: str,
        name: str,
        description: str = "",
    ) -> Callable[[PolicyCheck], PolicyCheck]:
        """Decorator to register a policy check."""

        def decorator(fn: PolicyCheck) -> PolicyCheck:
            self._policies[rule_id] = PolicyDefinition(
                rule_id=rule_id,
                name=name,
                description=description,
                check_fn=fn,
            )
            return fn

        return decorator

    def get_policies(self) -> list[PolicyDefinition]:
        return list(self._policies.values())

    def run_all(self, context: PolicyContext) -> list[PolicyFinding]:
        return [policy.check_fn(context) for policy in self._policies.values()]


registry = PolicyRegistry()
