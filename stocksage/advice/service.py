"""Portfolio analysis orchestration.

validate request -> check market data -> render instruction -> one model call
-> validate response -> policy checks -> timestamp
"""

import json
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

import pydantic
import structlog

from stocksage.advice.policies import PolicyContext, PolicyFinding, registry
from stocksage.advice.prompts import PORTFOLIO_ANALYSIS_PROMPT_VERSION, render_instruction
from stocksage.advice.schemas import (
    AdviceResponse,
    AnalysisRequest,
    AnalysisResult,
    PolicyWarning,
)
from stocksage.config import settings
from stocksage.exceptions import (
    InvalidMarketDataError,
    InvalidRequestError,
    InvalidResponseError,
    ModelInvocationError,
)
from stocksage.llm.client import StructuredModelClient, reject_json_constant
from stocksage.market.service import MarketService

logger = structlog.get_logger()


def _violations(exc: pydantic.ValidationError) -> list[dict]:
    """Flatten a pydantic error into one entry per violated constraint."""
    return [
        {
            "field": ".".join(str(part) for part in err["loc"]) or "__root__",
            "message": err["msg"],
        }
        for err in exc.errors()
    ]


class AnalysisService:
    def __init__(
        self,
        client: StructuredModelClient,
        market_service: MarketService | None = None,
        concentration_threshold_pct: float | None = None,
        allocation_tolerance_pct: float | None = None,
        strict_concentration: bool | None = None,
    ) -> None:
        self._client = client
        self._market = market_service
        self._concentration_threshold = (
            settings.concentration_threshold_pct
            if concentration_threshold_pct is None
            else concentration_threshold_pct
        )
        self._allocation_tolerance = (
            settings.allocation_tolerance_pct
            if allocation_tolerance_pct is None
            else allocation_tolerance_pct
        )
        self._strict_concentration = (
            settings.strict_concentration_policy
            if strict_concentration is None
            else strict_concentration
        )

    async def analyze(self, request: AnalysisRequest | Any) -> AnalysisResult:
        """Run one analysis round-trip; all-or-nothing."""
        validated = self._validate_request(request)
        self._check_market_data(validated.market_data)

        instruction = render_instruction(validated, self._concentration_threshold)
        logger.info(
            "analysis_started",
            tickers=validated.tickers,
            cash=validated.cash,
            prompt_version=PORTFOLIO_ANALYSIS_PROMPT_VERSION,
        )

        try:
            raw = await self._client.generate(instruction, AdviceResponse)
        except ModelInvocationError as exc:
            logger.error("analysis_model_invocation_failed", error=exc.message)
            raise
        except InvalidResponseError as exc:
            logger.error("analysis_invalid_response", error=exc.message)
            raise

        response = self._validate_response(raw)
        warnings = self._apply_policies(validated, response)

        result = AnalysisResult(
            advice=response.advice,
            generated_at=datetime.now(UTC).isoformat(),
            warnings=warnings,
        )
        logger.info(
            "analysis_completed",
            advice_count=len(result.advice),
            warnings=len(result.warnings),
        )
        return result

    async def analyze_live(self, payload: Any) -> AnalysisResult:
        """Analyze a portfolio against a freshly generated market snapshot."""
        if self._market is None:
            raise RuntimeError("AnalysisService was built without a market service")
        if not isinstance(payload, Mapping):
            return await self.analyze(payload)
        market_data = await self._market.get_snapshot_json()
        return await self.analyze({**payload, "marketData": market_data})

    def _validate_request(self, request: AnalysisRequest | Any) -> AnalysisRequest:
        if isinstance(request, AnalysisRequest):
            return request
        try:
            return AnalysisRequest.model_validate(request)
        except pydantic.ValidationError as exc:
            violations = _violations(exc)
            logger.warning("analysis_invalid_request", violations=violations)
            raise InvalidRequestError(violations) from exc

    @staticmethod
    def _check_market_data(market_data: str) -> None:
        try:
            json.loads(market_data, parse_constant=reject_json_constant)
        except RecursionError as exc:
            logger.warning("analysis_invalid_market_data", error="nesting too deep")
            raise InvalidMarketDataError("nesting too deep") from exc
        except ValueError as exc:
            logger.warning("analysis_invalid_market_data", error=str(exc))
            raise InvalidMarketDataError(str(exc)) from exc

    @staticmethod
    def _validate_response(raw: object) -> AdviceResponse:
        try:
            return AdviceResponse.model_validate(raw)
        except pydantic.ValidationError as exc:
            violations = _violations(exc)
            logger.error("analysis_invalid_response", violations=violations)
            raise InvalidResponseError("response failed schema validation", violations) from exc

    def _apply_policies(
        self, request: AnalysisRequest, response: AdviceResponse
    ) -> list[PolicyWarning]:
        context = PolicyContext(
            request=request,
            advice=response.advice,
            concentration_threshold_pct=self._concentration_threshold,
            allocation_tolerance_pct=self._allocation_tolerance,
            strict_concentration=self._strict_concentration,
        )
        triggered: list[PolicyFinding] = [f for f in registry.run_all(context) if f.triggered]

        for finding in triggered:
            logger.warning(
                "analysis_policy_violation",
                rule_id=finding.rule_id,
                severity=str(finding.severity),
                message=finding.message,
            )

        rejected = [f for f in triggered if f.rejects]
        if rejected:
            raise InvalidResponseError(
                "; ".join(f.message for f in rejected),
                [{"field": f.rule_id, "message": f.message} for f in rejected],
            )

        return [
            PolicyWarning(
                rule_id=f.rule_id,
                name=f.name,
                message=f.message,
                details=f.details,
            )
            for f in triggered
        ]
