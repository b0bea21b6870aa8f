"""Prompt templates used by the portfolio analysis flow.

Bump PORTFOLIO_ANALYSIS_PROMPT_VERSION whenever the guidance given to the
model changes.
"""

from stocksage.advice.schemas import AnalysisRequest

PORTFOLIO_ANALYSIS_PROMPT_VERSION = "2024-07.1"

PORTFOLIO_ANALYSIS_PROMPT = """You are a friendly and encouraging financial advisor for beginners. \
You specialize in the Indian stock market. Your goal is to provide clear, simple, and actionable advice.

Analyze the user's portfolio and provide specific buy/sell/hold/diversify recommendations for each stock.
Explain your reasoning for each recommendation in simple, easy-to-understand language. Avoid jargon.

For EACH stock, you MUST perform the following:
1. Calculate the percentage that the stock represents of the total portfolio value (including cash), \
as holding value / (total holdings value + cash) * 100. This is a required field.
2. Assess its risk as 'low', 'medium', or 'high'. If a single stock makes up more than \
{concentration_threshold:g}% of the portfolio, you MUST classify it as 'high' risk due to \
concentration and recommend selling a portion to diversify.
3. For 'buy' or 'sell' recommendations, specify a clear amount in rupees to transact.

Portfolio:
{portfolio_lines}

Available Cash: ₹{cash}

Market Data:
{market_data}

Provide your advice in JSON format. Be encouraging and focus on long-term growth and learning. \
Ensure every stock in the input portfolio has exactly one corresponding entry in the output advice, \
and do not add entries for stocks that are not in the portfolio."""


def format_number(value: float) -> str:
    """Render a number without losing precision or adding a spurious '.0'."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def render_instruction(request: AnalysisRequest, concentration_threshold: float = 30.0) -> str:
    portfolio_lines = "\n".join(
        f"  - {holding.ticker}: {format_number(holding.shares)} shares"
        for holding in request.portfolio
    )
    return PORTFOLIO_ANALYSIS_PROMPT.format(
        portfolio_lines=portfolio_lines,
        cash=format_number(request.cash),
        market_data=request.market_data,
        concentration_threshold=concentration_threshold,
    )
