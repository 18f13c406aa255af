# healthstore/services/keywords.py
from typing import List

from healthstore.core.llm import LLMClient
from healthstore.core.logging import get_logger

log = get_logger("keywords")


def parse_keywords(raw: str, limit: int | None = None) -> List[str]:
    """
    "Fatigue, Energy , weak" → ["fatigue", "energy", "weak"].
    Tolerates a leading "Keywords:" label and newline-separated answers.
    """
    text = (raw or "").strip()
    if text.lower().startswith("keywords:"):
        text = text[len("keywords:"):]
    parts = [p.strip().strip(".").strip().lower() for p in text.replace("\n", ",").split(",")]
    out = [p for p in parts if p]
    return out[:limit] if limit else out


def extract_keywords(llm: LLMClient, *, system: str, prompt: str, temperature: float = 0.3, max_tokens: int = 50) -> List[str]:
    """LLM keyword extraction; any failure is logged and yields []."""
    try:
        raw = llm.chat_complete(system=system, user=prompt, temperature=temperature, max_tokens=max_tokens)
    except Exception:
        log.exception("keyword extraction failed")
        return []
    return parse_keywords(raw)
