# healthstore/domain/services/matcher.py
"""
Keyword-driven product recommendation.

Two ways in:
- symptom keywords (already extracted) → SYMPTOM_MAPPING → catalog titles
- an AI reply text → product titles / whitelisted tag terms it mentions

Both return at most MAX_RECOMMENDATIONS products, in catalog order, with a
confidence score that only depends on how many keywords and matches there were.
Nothing here raises; bad input degrades to "no keywords".
"""
import math
import random
from typing import Any, Iterable, List, Optional, Sequence, Set

from healthstore.domain.symptom_mapping import (
    CATEGORY_MAP,
    DEFAULT_CATEGORY,
    FOLLOW_UP_QUESTIONS,
    REPLY_TAG_TERMS,
    SYMPTOM_MAPPING,
)
from healthstore.schemas import RecommendationResult, RecommendedProduct

MAX_RECOMMENDATIONS = 3
FOLLOW_UP_THRESHOLD = 0.6


def _title(product: Any) -> str:
    return (getattr(product, "title", "") or "").strip()


def _tags(product: Any) -> List[str]:
    return [t for t in (getattr(product, "tags", None) or []) if isinstance(t, str)]


def clean_keywords(keywords: Optional[Iterable[Any]]) -> List[str]:
    """Drop None / non-string / blank entries. Case is left alone."""
    if keywords is None or isinstance(keywords, (str, bytes)):
        return []
    try:
        return [k.strip() for k in keywords if isinstance(k, str) and k.strip()]
    except TypeError:
        return []


def _unique_by_title(products: Iterable[Any]) -> List[Any]:
    seen: Set[str] = set()
    out = []
    for p in products:
        key = _title(p).lower()
        if not key or key in seen:
            continue
        seen.add(key)
        out.append(p)
    return out


# ---------------------------------------------------------
# Symptom-keyword path
# ---------------------------------------------------------

def map_symptoms_to_products(keywords: Iterable[str]) -> Set[str]:
    names: Set[str] = set()
    for kw in keywords:
        names.update(SYMPTOM_MAPPING.get(kw, ()))
    return names


def find_matching_products(product_names: Iterable[str], catalog: Sequence[Any]) -> List[Any]:
    """Catalog products whose title contains a canonical name, or is contained by one."""
    wanted = [n.lower() for n in product_names if n]
    if not wanted:
        return []
    hits = []
    for p in catalog:
        title = _title(p).lower()
        if title and any(name in title or title in name for name in wanted):
            hits.append(p)
    return _unique_by_title(hits)


# ---------------------------------------------------------
# Free-text (AI reply) path
# ---------------------------------------------------------

def reply_terms(text: str) -> List[str]:
    lowered = (text or "").lower()
    return [term for term in REPLY_TAG_TERMS if term in lowered]


def match_products_in_text(text: str, catalog: Sequence[Any], limit: int = MAX_RECOMMENDATIONS) -> List[Any]:
    lowered = (text or "").lower()
    if not lowered:
        return []
    terms = reply_terms(lowered)

    out: List[Any] = []
    seen: Set[str] = set()
    for p in catalog:
        if len(out) >= limit:
            break
        title = _title(p).lower()
        if not title or title in seen:
            continue
        tags = {t.lower() for t in _tags(p)}
        if title in lowered or any(term in tags for term in terms):
            seen.add(title)
            out.append(p)
    return out


# ---------------------------------------------------------
# Category / confidence / follow-up
# ---------------------------------------------------------

def category_from_tags(tags: Iterable[str]) -> str:
    for tag in tags or []:
        lowered = str(tag).lower()
        for key, category in CATEGORY_MAP:
            if key in lowered:
                return category
    return DEFAULT_CATEGORY


def calculate_confidence(keyword_count: int, product_count: int) -> float:
    if keyword_count <= 0:
        return 0.3
    if product_count <= 0:
        return 0.4
    keyword_score = min(keyword_count / 3, 1) * 0.4
    product_score = min(product_count / 3, 1) * 0.6
    # half-up rounding to 2 places (round() would do banker's rounding)
    return math.floor((keyword_score + product_score) * 100 + 0.5) / 100


def pick_follow_up_question(confidence: float, rng: Optional[random.Random] = None) -> Optional[str]:
    if confidence >= FOLLOW_UP_THRESHOLD:
        return None
    return (rng or random).choice(FOLLOW_UP_QUESTIONS)


def to_recommended(product: Any) -> RecommendedProduct:
    return RecommendedProduct(
        name=_title(product),
        category=category_from_tags(_tags(product)),
        price=float(getattr(product, "price", 0) or 0),
        image=getattr(product, "image", "") or "",
        description=getattr(product, "description", "") or "",
    )


# ---------------------------------------------------------
# Entry point
# ---------------------------------------------------------

def recommend(
    keywords_or_text: Any,
    catalog: Optional[Sequence[Any]],
    rng: Optional[random.Random] = None,
) -> RecommendationResult:
    """
    A str is treated as an AI reply to scan; anything else as a keyword list.
    Confidence counts every match, the returned list is capped at three.
    """
    catalog = list(catalog or [])

    if isinstance(keywords_or_text, str):
        keywords = reply_terms(keywords_or_text)
        matched = match_products_in_text(keywords_or_text, catalog, limit=len(catalog))
    else:
        keywords = clean_keywords(keywords_or_text)
        matched = find_matching_products(map_symptoms_to_products(keywords), catalog)

    confidence = calculate_confidence(len(keywords), len(matched))
    return RecommendationResult(
        products=[to_recommended(p) for p in matched[:MAX_RECOMMENDATIONS]],
        confidence=confidence,
        follow_up_question=pick_follow_up_question(confidence, rng),
        keywords=keywords,
    )
