"""Structured-output boundary over a LangChain chat model.

One call in, one parsed JSON value out. Validation of the value against the
requested schema is left to the caller so that schema failures can be told
apart from transport failures.
"""

import asyncio
import json
import re

import structlog
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage
from pydantic import BaseModel

from stocksage.exceptions import InvalidResponseError, ModelInvocationError

logger = structlog.get_logger()

_SCHEMA_SUFFIX = (
    "\n\nReturn ONLY a JSON object, with no other text. "
    "It must conform to this JSON schema:\n{schema}"
)


def reject_json_constant(name: str) -> object:
    """Refuse NaN and Infinity, which are not part of JSON."""
    raise ValueError(f"{name} is not valid JSON")


def parse_llm_json(text: str) -> object:
    """Parse JSON from LLM response, stripping markdown code block markers if present."""
    cleaned = text.strip()
    match = re.search(r"```(?:json)?\s*(.*?)```", cleaned, re.DOTALL)
    if match:
        cleaned = match.group(1).strip()
    return json.loads(cleaned, parse_constant=reject_json_constant)


def _message_text(content: str | list) -> str:
    """Flatten chat message content, which some providers return as blocks."""
    if isinstance(content, str):
        return content
    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


class StructuredModelClient:
    def __init__(self, llm: BaseChatModel, timeout: float | None = None) -> None:
        self._llm = llm
        self._timeout = timeout

    async def generate(self, instruction: str, output_schema: type[BaseModel]) -> object:
        """Invoke the model once and return its output parsed as JSON.

        Raises ModelInvocationError when the call itself fails or times out,
        and InvalidResponseError when the reply is not JSON.
        """
        schema = json.dumps(output_schema.model_json_schema(by_alias=True))
        prompt = instruction + _SCHEMA_SUFFIX.format(schema=schema)

        try:
            response = await asyncio.wait_for(
                self._llm.ainvoke([HumanMessage(content=prompt)]),
                timeout=self._timeout,
            )
        except TimeoutError as exc:
            logger.error("llm_invoke_timeout", timeout=self._timeout)
            raise ModelInvocationError(f"no response within {self._timeout}s") from exc
        except Exception as exc:
            logger.error("llm_invoke_error", error=str(exc))
            raise ModelInvocationError(str(exc)) from exc

        content = _message_text(response.content)
        try:
            return parse_llm_json(content)
        except (ValueError, RecursionError) as exc:
            logger.error("llm_json_parse_error", error=str(exc), preview=content[:200])
            raise InvalidResponseError("model output is not valid JSON") from exc
