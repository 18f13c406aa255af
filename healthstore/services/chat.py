# healthstore/services/chat.py
from datetime import datetime, timezone
from typing import Any, Dict, List

from sqlmodel import Session

from healthstore.core.llm import LLMClient
from healthstore.core.logging import get_logger
from healthstore.core.observability import record_recommendation
from healthstore.db.models import ChatMessage, Product
from healthstore.domain.services.matcher import recommend
from healthstore.services.products import ProductService

log = get_logger("chat")

SYSTEM_PROMPT = """You are a helpful AI assistant for "Smart Health Store", an online healthcare and wellness store. Your role is to:

1. Answer health-related questions professionally and accurately
2. Recommend products from our store that match the user's needs
3. Provide health advice (but always remind users to consult healthcare professionals for serious issues)
4. Be friendly, empathetic, and supportive

Available Products in our store:
{product_context}

Guidelines:
- When recommending products, mention the product name and price
- Always prioritize user safety and health
- For serious medical conditions, advise consulting a doctor
- Be conversational and helpful
- Keep responses concise but informative"""

EMPTY_REPLY = "Sorry, I could not generate a response."
ERROR_REPLY = "Sorry, I encountered an error. Please try again later."


def build_product_context(products: List[Product]) -> str:
    return "\n\n".join(
        f"{i}. {p.title} - ${p.price}\n   Description: {p.description}\n   Tags: {', '.join(p.tags or [])}"
        for i, p in enumerate(products, start=1)
    )


class ChatService:
    def __init__(self, db: Session, llm: LLMClient):
        self.db = db
        self.llm = llm
        self.products = ProductService(db, llm)

    def chat(self, message: str, input_type: str = "text", user_id: str = "anonymous") -> Dict[str, Any]:
        try:
            catalog = self.products.get_all_products()
            reply = self.llm.chat_complete(
                system=SYSTEM_PROMPT.format(product_context=build_product_context(catalog)),
                user=message,
                temperature=0.7,
                max_tokens=500,
            ) or EMPTY_REPLY

            # only the product list is used here; no follow-up question for chat
            result = recommend(reply, catalog)
            self.db.add(ChatMessage(user_id=user_id, message=message, response=reply, input_type=input_type))
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            log.exception("chat failed")
            return {"success": False, "message": ERROR_REPLY, "error": str(e)}

        record_recommendation("chat", False)
        return {
            "success": True,
            "message": reply,
            "products": [p.model_dump() for p in result.products],
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
