"""Policies the model is instructed to follow but cannot be trusted to honor."""

from collections import Counter

from stocksage.advice.policies.registry import (
    PolicyContext,
    PolicyFinding,
    PolicySeverity,
    registry,
)
from stocksage.advice.schemas import RiskLevel


def _passed(rule_id: str, name: str, message: str) -> PolicyFinding:
    return PolicyFinding(
        rule_id=rule_id,
        name=name,
        triggered=False,
        severity=PolicySeverity.info,
        message=message,
    )


# ---------------------------------------------------------------------------
# AP-01: Ticker coverage
# ---------------------------------------------------------------------------
@registry.register(
    rule_id="AP-01",
    name="Ticker Coverage",
    description="Every portfolio ticker has exactly one advice entry and no others appear",
)
def ticker_coverage(ctx: PolicyContext) -> PolicyFinding:
    expected = set(ctx.request.tickers)
    counts = Counter(item.ticker for item in ctx.advice)

    missing = sorted(expected - counts.keys())
    duplicated = sorted(t for t, n in counts.items() if n > 1 and t in expected)
    unexpected = sorted(counts.keys() - expected)

    if not (missing or duplicated or unexpected):
        return _passed("AP-01", "Ticker Coverage", "Advice covers every holding exactly once.")

    problems = []
    if missing:
        problems.append(f"missing advice for {', '.join(missing)}")
    if duplicated:
        problems.append(f"duplicate advice for {', '.join(duplicated)}")
    if unexpected:
        problems.append(f"advice for tickers not in portfolio: {', '.join(unexpected)}")

    return PolicyFinding(
        rule_id="AP-01",
        name="Ticker Coverage",
        triggered=True,
        severity=PolicySeverity.critical,
        message="; ".join(problems),
        details={"missing": missing, "duplicated": duplicated, "unexpected": unexpected},
    )


# ---------------------------------------------------------------------------
# AP-02: Concentration risk
# ---------------------------------------------------------------------------
@registry.register(
    rule_id="AP-02",
    name="Concentration Risk",
    description="Holdings above the concentration threshold must be rated high risk",
)
def concentration_risk(ctx: PolicyContext) -> PolicyFinding:
    threshold = ctx.concentration_threshold_pct
    offenders = [
        item
        for item in ctx.advice
        if item.percentage > threshold and item.risk_level != RiskLevel.high
    ]
    if not offenders:
        return _passed(
            "AP-02", "Concentration Risk", "Concentrated holdings are rated high risk."
        )

    tickers = [item.ticker for item in offenders]
    return PolicyFinding(
        rule_id="AP-02",
        name="Concentration Risk",
        triggered=True,
        severity=PolicySeverity.critical if ctx.strict_concentration else PolicySeverity.warning,
        message=(
            f"{', '.join(tickers)} exceed {threshold:g}% of the portfolio "
            "but are not rated high risk"
        ),
        details={
            "threshold_pct": threshold,
            "holdings": [
                {
                    "ticker": item.ticker,
                    "percentage": item.percentage,
                    "risk_level": str(item.risk_level),
                }
                for item in offenders
            ],
        },
    )


# ---------------------------------------------------------------------------
# AP-03: Allocation total
# ---------------------------------------------------------------------------
@registry.register(
    rule_id="AP-03",
    name="Allocation Total",
    description="Holding percentages cannot add up to more than the whole portfolio",
)
def allocation_total(ctx: PolicyContext) -> PolicyFinding:
    total = sum(item.percentage for item in ctx.advice)
    limit = 100.0 + ctx.allocation_tolerance_pct
    if total <= limit:
        return _passed("AP-03", "Allocation Total", f"Holdings account for {total:.2f}% of value.")

    return PolicyFinding(
        rule_id="AP-03",
        name="Allocation Total",
        triggered=True,
        severity=PolicySeverity.warning,
        message=f"Holding percentages add up to {total:.2f}%, above 100% of portfolio value",
        details={"total_pct": round(total, 2)},
    )
