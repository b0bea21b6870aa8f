ANALYSIS_FAILED_MESSAGE = "Analysis Failed, please try again."


class AppError(Exception):
    def __init__(self, message: str, code: str = "INTERNAL_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class AnalysisError(AppError):
    """Base class for every way a portfolio analysis can fail.

    Subclasses stay distinguishable for logging and tests, but all of them
    are reported to the user as the same generic failure.
    """

    def __init__(self, message: str, code: str, violations: list[dict] | None = None):
        super().__init__(message, code=code)
        self.violations = violations or []


class InvalidRequestError(AnalysisError):
    def __init__(self, violations: list[dict]):
        super().__init__(
            f"Analysis request is invalid ({len(violations)} violation(s))",
            code="INVALID_REQUEST",
            violations=violations,
        )


class InvalidMarketDataError(AnalysisError):
    def __init__(self, reason: str):
        super().__init__(f"Invalid market data: {reason}", code="INVALID_MARKET_DATA")


class ModelInvocationError(AnalysisError):
    def __init__(self, reason: str):
        super().__init__(f"Model invocation failed: {reason}", code="MODEL_INVOCATION_FAILED")


class InvalidResponseError(AnalysisError):
    def __init__(self, reason: str, violations: list[dict] | None = None):
        super().__init__(
            f"Analysis failed to generate a valid result: {reason}",
            code="INVALID_RESPONSE",
            violations=violations,
        )
