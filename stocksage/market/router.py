from fastapi import APIRouter

from stocksage.dependencies import MarketServiceDep
from stocksage.market.schemas import MarketSnapshot

router = APIRouter()


@router.get("/snapshot", response_model=MarketSnapshot)
async def get_snapshot(service: MarketServiceDep) -> MarketSnapshot:
    return await service.get_snapshot()


@router.get("/tickers", response_model=list[str])
async def list_tickers(service: MarketServiceDep) -> list[str]:
    return service.list_tickers()
