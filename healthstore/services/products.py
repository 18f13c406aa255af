# healthstore/services/products.py
import json
import re
from pathlib import Path
from typing import Any, Dict, List, Literal

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from healthstore.cache import cache_get, cache_set
from healthstore.config import settings
from healthstore.core.llm import LLMClient
from healthstore.core.logging import get_logger
from healthstore.db.models import Product
from healthstore.domain.symptom_mapping import DIRECT_SEARCH_MATCHES
from healthstore.schemas import ProductCreate
from healthstore.services.keywords import extract_keywords

log = get_logger("products")

CATALOG_FILE = Path(__file__).resolve().parents[1] / "data" / "product_catalog.json"

SearchType = Literal["normal", "ai"]

SEARCH_SYSTEM = "Extract supplement keywords only. Return comma-separated list."

SEARCH_PROMPT = """Extract health supplement keywords from: "{query}"

Common supplements and their keywords:
- Zinc/Zink → zinc, immune, minerals
- Vitamin C → vitamin c, immune, antioxidant
- Iron → iron, anemia, energy, blood
- Calcium → calcium, bone health, bones
- Magnesium → magnesium, muscle, sleep
- Omega-3 → omega-3, heart health, brain
- Probiotics → probiotics, digestive health, gut
- Collagen → collagen, skin health, anti-aging

Return only relevant keywords (max 3) that match actual supplement names or health benefits.
Keywords:"""


class DuplicateProductError(Exception):
    pass


def direct_matches(query: str) -> List[str]:
    """Misspellings / aliases we can resolve without an LLM call. First hit wins."""
    q = (query or "").lower().strip()
    for key, values in DIRECT_SEARCH_MATCHES:
        if key in q:
            return list(values)
    return []


def load_catalog_file(path: Path = CATALOG_FILE) -> List[Dict[str, Any]]:
    if not path.exists():
        raise FileNotFoundError(f"Could not find product catalog at: {path}")
    return json.loads(path.read_text())


class ProductService:
    def __init__(self, db: Session, llm: LLMClient | None = None):
        self.db = db
        self.llm = llm

    def get_all_products(self) -> List[Product]:
        return list(self.db.exec(select(Product).order_by(Product.id)).all())

    def search_by_title(self, query: str) -> List[Product]:
        stmt = (
            select(Product)
            .where(func.lower(Product.title).contains(query.lower(), autoescape=True))
            .order_by(Product.id)
        )
        return list(self.db.exec(stmt).all())

    def search_by_tags(self, keywords: List[str]) -> List[Product]:
        patterns = [re.compile(re.escape(k), re.IGNORECASE) for k in keywords if k]
        return [
            p for p in self.get_all_products()
            if any(pat.search(tag) for tag in (p.tags or []) for pat in patterns)
        ]

    def extract_search_keywords(self, query: str) -> List[str]:
        direct = direct_matches(query)
        if direct:
            log.info("direct matches for search: %s", direct)
            return direct
        if self.llm is None:
            return []

        cache_key = f"kw:search:{query.lower().strip()}"
        cached = cache_get(cache_key)
        if isinstance(cached, list):
            return cached

        keywords = extract_keywords(
            self.llm,
            system=SEARCH_SYSTEM,
            prompt=SEARCH_PROMPT.format(query=query),
            temperature=0.1,
        )
        log.info("extracted search keywords: %s", keywords)
        if keywords:
            cache_set(cache_key, keywords, ttl_seconds=settings.keyword_cache_ttl)
        return keywords

    def search_products(self, query: str, search_type: SearchType = "normal") -> List[Product]:
        query = (query or "").strip()
        if not query:
            return self.get_all_products()
        if search_type == "normal":
            return self.search_by_title(query)

        keywords = self.extract_search_keywords(query)
        if not keywords:
            return self.search_by_title(query)
        return self.search_by_tags(keywords)

    def create_product(self, data: ProductCreate) -> Product:
        # titles are compared case-insensitively, like the matcher does
        stmt = select(Product).where(func.lower(Product.title) == data.title.strip().lower())
        if self.db.exec(stmt).first():
            raise DuplicateProductError(data.title)
        product = Product(**data.model_dump())
        self.db.add(product)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateProductError(data.title) from e
        self.db.refresh(product)
        return product

    def seed_products(self) -> Dict[str, Any]:
        """Replace the catalog with the bundled demo products, all or nothing."""
        items = [ProductCreate(**it) for it in load_catalog_file()]

        try:
            for p in self.get_all_products():
                self.db.delete(p)
            # deletes must hit the DB before re-inserting the same unique titles
            self.db.flush()
            for it in items:
                self.db.add(Product(**it.model_dump()))
            self.db.commit()
        except Exception:
            self.db.rollback()
            log.exception("seeding failed; catalog left unchanged")
            raise
        log.info("seeded %d products", len(items))
        return {"message": "Sample products seeded successfully", "count": len(items)}
