from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from stocksage.exceptions import (
    ANALYSIS_FAILED_MESSAGE,
    AnalysisError,
    AppError,
    InvalidMarketDataError,
    InvalidRequestError,
    InvalidResponseError,
    ModelInvocationError,
)

_ANALYSIS_STATUS: dict[type[AnalysisError], int] = {
    InvalidRequestError: 422,
    InvalidMarketDataError: 400,
    ModelInvocationError: 502,
    InvalidResponseError: 502,
}


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={"error": exc.code, "message": exc.message},
    )


async def analysis_error_handler(request: Request, exc: AnalysisError) -> JSONResponse:
    # Every analysis failure reads the same to the user; the code tells them apart.
    return JSONResponse(
        status_code=_ANALYSIS_STATUS.get(type(exc), 500),
        content={
            "error": exc.code,
            "message": ANALYSIS_FAILED_MESSAGE,
            "details": exc.violations,
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AnalysisError, analysis_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(AppError, app_error_handler)  # type: ignore[arg-type]
