# healthstore/api/v1/routers/symptom_checker.py
import random

from fastapi import APIRouter, Depends
from sqlmodel import Session

from healthstore.api.v1.deps import get_llm, get_optional_user_id, get_rng
from healthstore.core.llm import LLMClient
from healthstore.db.core import get_session
from healthstore.schemas import SymptomCheckReq
from healthstore.services.symptom_checker import SymptomAnalysisError, SymptomCheckerService

router = APIRouter(prefix="/symptom-checker", tags=["symptom-checker"])


@router.post("")
def analyze_symptoms(
    req: SymptomCheckReq,
    user_id: str = Depends(get_optional_user_id),
    db: Session = Depends(get_session),
    llm: LLMClient = Depends(get_llm),
    rng: random.Random = Depends(get_rng),
):
    symptoms = (req.symptoms or "").strip()
    if not symptoms:
        return {"success": False, "message": "Please provide symptoms to analyze"}

    try:
        result = SymptomCheckerService(db, llm, rng).analyze_symptoms(symptoms, req.input_type, user_id)
    except SymptomAnalysisError as e:
        cause = e.__cause__ or e
        return {
            "success": False,
            "message": "Failed to analyze symptoms. Please try again.",
            "error": str(cause),
        }
    return {"success": True, **result}
