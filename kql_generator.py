import json
import logging
from typing import Optional

import anthropic
from langchain_anthropic import ChatAnthropic
from langchain_core.messages import HumanMessage, SystemMessage

from config import DEFAULT_MAX_TOKENS, DEFAULT_MODEL
from models import TranslationError
from prompts import SYSTEM_PROMPT, build_user_prompt

logger = logging.getLogger(__name__)


def _first_text(content) -> str:
    # content is either a plain string or a list of content blocks
    if isinstance(content, str):
        return content
    for block in content:
        if isinstance(block, str):
            return block
        if isinstance(block, dict) and block.get("type") == "text":
            return block.get("text", "")
    return ""


class KQLGenerator:
    """Turns a natural language question into a KQL query with Claude."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        llm=None,
    ):
        if llm is None:
            llm = ChatAnthropic(
                model=model,
                api_key=api_key,
                max_tokens=max_tokens,
                max_retries=0,
            )
        self.llm = llm

    async def generate_query(self, question: str, time_range: Optional[str] = None) -> str:
        """Ask the model for a single KQL query answering ``question``.

        The first text segment of the reply is stripped and returned as is;
        it is not checked for KQL syntax.
        """
        messages = [
            SystemMessage(content=SYSTEM_PROMPT),
            HumanMessage(content=build_user_prompt(question, time_range)),
        ]
        try:
            response = await self.llm.ainvoke(messages)
        except anthropic.APIStatusError as e:
            raise TranslationError(
                f"Anthropic API Error: {e.status_code} - {json.dumps(e.body, default=str)}"
            ) from e
        except anthropic.APIError as e:
            raise TranslationError(f"Failed to generate KQL query: {e.message}") from e

        kql = _first_text(response.content).strip()
        if not kql:
            raise TranslationError("Failed to generate KQL query: the model returned no text")
        logger.debug("Generated KQL: %s", kql)
        return kql
