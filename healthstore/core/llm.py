# healthstore/core/llm.py
from typing import Dict, Optional

from openai import OpenAI

from healthstore.config import Settings


class LLMClient:
    """
    Thin wrapper over an OpenAI-compatible chat-completions endpoint.
    Built once at startup and handed to services; nothing here is global.
    """

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        model: str = "google/gemini-2.0-flash-001",
        default_headers: Optional[Dict[str, str]] = None,
    ):
        self.model = model
        self._client = OpenAI(api_key=api_key, base_url=base_url, default_headers=default_headers)

    def chat_complete(self, system: str, user: str, *, temperature: float = 0.7, max_tokens: int = 500) -> str:
        resp = self._client.chat.completions.create(
            model=self.model,
            messages=[{"role": "system", "content": system}, {"role": "user", "content": user}],
            temperature=temperature,
            max_tokens=max_tokens,
        )
        if not resp.choices:
            return ""
        return (resp.choices[0].message.content or "").strip()


def build_llm_client(settings: Settings) -> LLMClient:
    return LLMClient(
        # OpenAI() refuses an empty key at construction; requests will 401 instead
        api_key=settings.llm_api_key or "missing-api-key",
        base_url=settings.llm_api_base,
        model=settings.llm_model,
        default_headers={
            "HTTP-Referer": settings.llm_referer,
            "X-Title": settings.llm_app_title,
        },
    )
