from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stocksage.advice.router import router as analysis_router
from stocksage.config import settings
from stocksage.exception_handlers import register_exception_handlers
from stocksage.logging_config import setup_logging
from stocksage.market.router import router as market_router
from stocksage.usage.router import router as usage_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    yield


app = FastAPI(
    title="StockSage",
    description="LLM-backed portfolio advice for the Indian stock market",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(analysis_router, prefix="/api/v1/analysis", tags=["analysis"])
app.include_router(market_router, prefix="/api/v1/market", tags=["market"])
app.include_router(usage_router, prefix="/api/v1/usage", tags=["usage"])


@app.get("/api/v1/health")
async def health():
    return {"status": "healthy"}
