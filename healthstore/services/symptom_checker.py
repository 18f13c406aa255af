# healthstore/services/symptom_checker.py
import random
from typing import Any, Dict, List, Optional

from sqlmodel import Session

from healthstore.core.llm import LLMClient
from healthstore.core.logging import get_logger
from healthstore.core.observability import record_recommendation
from healthstore.db.models import SymptomAnalysis
from healthstore.domain.services.matcher import recommend
from healthstore.services.keywords import extract_keywords
from healthstore.services.products import ProductService

log = get_logger("symptom_checker")

ANALYSIS_SYSTEM = "You are a helpful medical assistant. Provide supportive, non-diagnostic health information."

ANALYSIS_PROMPT = """You are a medical assistant (NOT a doctor) helping users understand their symptoms and suggesting wellness products.

User symptoms: "{symptoms}"

Provide a brief, helpful analysis that:
1. Acknowledges their symptoms with empathy
2. Explains what these symptoms are often linked to
3. Uses language like "often linked to", "may help with", "commonly used for"
4. Stays under 100 words
5. Does NOT diagnose diseases

Always end with: "This is not medical advice. Consult a healthcare professional for proper diagnosis.\""""

ANALYSIS_FALLBACK = "Unable to analyze symptoms at this time."

KEYWORD_SYSTEM = "Extract health keywords only. Return comma-separated list."

KEYWORD_PROMPT = """Extract health-related keywords from: "{symptoms}"

Return only comma-separated keywords (3-5 max) that match health conditions, symptoms, or body parts.
Examples: tired → fatigue, energy, weak
joint pain → joint, pain, arthritis
hair loss → hair, weak, nutrition

Keywords:"""


class SymptomAnalysisError(Exception):
    pass


class SymptomCheckerService:
    def __init__(self, db: Session, llm: LLMClient, rng: Optional[random.Random] = None):
        self.db = db
        self.llm = llm
        self.rng = rng
        self.products = ProductService(db, llm)

    def get_ai_analysis(self, symptoms: str) -> str:
        text = self.llm.chat_complete(
            system=ANALYSIS_SYSTEM,
            user=ANALYSIS_PROMPT.format(symptoms=symptoms),
            temperature=0.7,
            max_tokens=200,
        )
        return text or ANALYSIS_FALLBACK

    def extract_keywords(self, symptoms: str) -> List[str]:
        return extract_keywords(
            self.llm,
            system=KEYWORD_SYSTEM,
            prompt=KEYWORD_PROMPT.format(symptoms=symptoms),
            temperature=0.3,
        )

    def analyze_symptoms(self, symptoms: str, input_type: str = "text", user_id: str = "anonymous") -> Dict[str, Any]:
        try:
            analysis = self.get_ai_analysis(symptoms)
            keywords = self.extract_keywords(symptoms)
            result = recommend(keywords, self.products.get_all_products(), rng=self.rng)

            products = [p.model_dump() for p in result.products]
            self.db.add(SymptomAnalysis(
                user_id=user_id,
                symptoms=symptoms,
                analysis=analysis,
                confidence=result.confidence,
                products=products,
                follow_up_question=result.follow_up_question,
                input_type=input_type,
            ))
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            log.exception("symptom analysis failed")
            raise SymptomAnalysisError("Failed to analyze symptoms") from e

        record_recommendation("symptoms", result.follow_up_question is not None)
        log.info("symptom analysis keywords=%s matches=%d confidence=%.2f", keywords, len(products), result.confidence)
        return {
            "analysis": analysis,
            "confidence": result.confidence,
            "products": products,
            "followUpQuestion": result.follow_up_question,
        }
