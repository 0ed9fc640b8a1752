"""Generative text capability backed by Gemini through LangChain."""

from typing import Any, Optional

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from .config import Settings


class GeminiTextGenerator:
    """Calls Gemini in JSON response mode and returns the raw text."""

    def __init__(self, settings: Settings, llm: Optional[Any] = None) -> None:
        self.llm = llm or ChatGoogleGenerativeAI(
            model=settings.model,
            temperature=settings.temperature,
            api_key=settings.api_key,
            response_mime_type="application/json",
        )

    async def generate(self, system_prompt: str, user_prompt: str) -> str:
        messages = [SystemMessage(content=system_prompt), HumanMessage(content=user_prompt)]
        response = await self.llm.ainvoke(messages)
        content = response.content
        if isinstance(content, list):
            # Multi-part responses carry text in dict parts or bare strings.
            content = "".join(
                part.get("text", "") if isinstance(part, dict) else str(part) for part in content
            )
        return str(content)
