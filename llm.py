"""Thin wrapper over ChatOpenAI used by both composers."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from langchain_openai import ChatOpenAI

from config import TrendBotConfig

logger = logging.getLogger(__name__)


class TextGenerator:
    """
    Lazily-built chat model.

    The client is only constructed on first use so the service can start
    (and serve stored trends) without an OpenAI key.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: Optional[str] = None,
        json_mode: bool = False,
        reasoning_effort: Optional[str] = None,
    ):
        self.api_key = api_key
        self.model_name = model_name or TrendBotConfig.DEFAULT_MODEL
        self.json_mode = json_mode
        self.reasoning_effort = reasoning_effort or TrendBotConfig.REASONING_EFFORT
        self._llm: Optional[ChatOpenAI] = None

    @property
    def llm(self) -> ChatOpenAI:
        if self._llm is None:
            self._llm = ChatOpenAI(**self._llm_params())
        return self._llm

    def _llm_params(self) -> Dict[str, Any]:
        organization = TrendBotConfig.OPENAI_ORGANIZATION
        llm_params: Dict[str, Any] = {
            "api_key": self.api_key or TrendBotConfig.openai_api_key(),
            "model": self.model_name,
            "timeout": TrendBotConfig.LLM_TIMEOUT_SECONDS,
        }
        if self.reasoning_effort:
            llm_params["reasoning_effort"] = self.reasoning_effort
        if self.json_mode:
            llm_params["model_kwargs"] = {"response_format": TrendBotConfig.RESPONSE_FORMAT}
        if organization:
            llm_params["openai_organization"] = organization
        return llm_params

    def generate(self, system_prompt: str, user_prompt: str) -> str:
        """Send a system/user pair and return the reply text ('' when empty)."""
        logger.debug(f"Calling {self.model_name} (json_mode={self.json_mode}, {len(user_prompt)} chars)")
        response = self.llm.invoke([("system", system_prompt), ("human", user_prompt)])
        content = response.content
        if isinstance(content, list):
            content = "".join(part.get("text", "") if isinstance(part, dict) else str(part) for part in content)
        return content or ""
