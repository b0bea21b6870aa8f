from pydantic import BaseModel, ConfigDict, Field


class StockQuote(BaseModel):
    ticker: str
    price: float
    change: float
    change_percent: float
    volume: str  # e.g. "4.2M"
    market_cap: str  # e.g. "115.6T"


class MarketSnapshot(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    generated_at: str = Field(alias="generatedAt")
    stocks: list[StockQuote]
