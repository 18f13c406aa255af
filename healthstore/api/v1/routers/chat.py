# healthstore/api/v1/routers/chat.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from healthstore.api.v1.deps import get_llm, get_optional_user_id
from healthstore.core.llm import LLMClient
from healthstore.db.core import get_session
from healthstore.schemas import ChatReq
from healthstore.services.chat import ChatService

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("")
def chat(
    req: ChatReq,
    user_id: str = Depends(get_optional_user_id),
    db: Session = Depends(get_session),
    llm: LLMClient = Depends(get_llm),
):
    message = (req.message or "").strip()
    if not message:
        return {"success": False, "message": "Please provide a message"}
    return ChatService(db, llm).chat(message, req.input_type, user_id)
