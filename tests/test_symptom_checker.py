import random

import pytest
from prometheus_client import REGISTRY
from sqlmodel import select

from healthstore.db.models import SymptomAnalysis
from healthstore.domain.symptom_mapping import FOLLOW_UP_QUESTIONS
from healthstore.services.symptom_checker import (
    ANALYSIS_FALLBACK,
    SymptomAnalysisError,
    SymptomCheckerService,
)
from tests.factories import FakeLLM

ANALYSIS = "Feeling tired is often linked to low iron. This is not medical advice."


def test_analyze_symptoms_recommends_and_persists(seeded):
    llm = FakeLLM({
        "medical assistant": ANALYSIS,
        "health keywords": "Tired, fatigue , energy",
    })
    result = SymptomCheckerService(seeded, llm, random.Random(0)).analyze_symptoms("always tired", "voice", "u1")

    assert result["analysis"] == ANALYSIS
    assert result["confidence"] == 1.0
    assert result["followUpQuestion"] is None
    assert [(p["name"], p["category"]) for p in result["products"]] == [
        ("Multivitamin Complex", "Vitamins"),
        ("Vitamin B Complex Energy Boost", "Vitamins"),
        ("Iron Supplement", "Health Supplements"),
    ]

    row = seeded.exec(select(SymptomAnalysis)).one()
    assert row.user_id == "u1"
    assert row.input_type == "voice"
    assert row.confidence == 1.0
    assert [p["name"] for p in row.products] == [p["name"] for p in result["products"]]


def test_prompts_carry_symptoms_and_settings(seeded):
    llm = FakeLLM({"medical assistant": ANALYSIS, "health keywords": "gut"})
    SymptomCheckerService(seeded, llm).analyze_symptoms("bloated after meals")

    analysis_call, keyword_call = llm.calls
    assert '"bloated after meals"' in analysis_call["user"]
    assert (analysis_call["temperature"], analysis_call["max_tokens"]) == (0.7, 200)
    assert (keyword_call["temperature"], keyword_call["max_tokens"]) == (0.3, 50)


def test_keyword_failure_degrades_to_floor_with_follow_up(seeded):
    llm = FakeLLM({
        "medical assistant": ANALYSIS,
        "health keywords": TimeoutError("upstream timeout"),
    })
    result = SymptomCheckerService(seeded, llm, random.Random(7)).analyze_symptoms("feel off")

    assert result["products"] == []
    assert result["confidence"] == 0.3
    assert result["followUpQuestion"] == random.Random(7).choice(FOLLOW_UP_QUESTIONS)


def test_unknown_keywords_give_low_confidence(seeded):
    llm = FakeLLM({"medical assistant": ANALYSIS, "health keywords": "elbow"})
    result = SymptomCheckerService(seeded, llm, random.Random(1)).analyze_symptoms("elbow clicks")
    assert result["confidence"] == 0.4
    assert result["followUpQuestion"] in FOLLOW_UP_QUESTIONS


def test_empty_analysis_uses_fallback_text(seeded):
    llm = FakeLLM({"health keywords": "sleep"}, default="")
    result = SymptomCheckerService(seeded, llm).analyze_symptoms("can't sleep")
    assert result["analysis"] == ANALYSIS_FALLBACK


def test_analysis_failure_raises_and_stores_nothing(seeded):
    llm = FakeLLM({"medical assistant": ConnectionError("no route to host")})
    with pytest.raises(SymptomAnalysisError):
        SymptomCheckerService(seeded, llm).analyze_symptoms("headache")
    assert seeded.exec(select(SymptomAnalysis)).all() == []


# --- HTTP ---

def test_endpoint_rejects_blank_symptoms(client):
    body = client.post("/api/v1/symptom-checker", json={"symptoms": "   "}).json()
    assert body == {"success": False, "message": "Please provide symptoms to analyze"}


def test_endpoint_success(client, fake_llm):
    client.post("/api/v1/products/seed")
    fake_llm.replies.update({"medical assistant": ANALYSIS, "health keywords": "joint, pain"})

    body = client.post("/api/v1/symptom-checker", json={"symptoms": "my knees ache", "inputType": "text"}).json()
    assert body["success"] is True
    assert [p["name"] for p in body["products"]] == ["Glucosamine Joint Support", "Turmeric Curcumin"]
    # 2 keywords, 2 products → 0.27 + 0.4
    assert body["confidence"] == 0.67
    assert body["followUpQuestion"] is None


def test_endpoint_maps_failure_to_try_again(client, fake_llm):
    fake_llm.replies["medical assistant"] = RuntimeError("boom")
    body = client.post("/api/v1/symptom-checker", json={"symptoms": "dizzy"}).json()
    assert body["success"] is False
    assert body["message"] == "Failed to analyze symptoms. Please try again."
    assert body["error"] == "boom"


def test_endpoint_records_signed_in_user(client, fake_llm, auth_headers, session):
    fake_llm.replies.update({"medical assistant": ANALYSIS, "health keywords": "stress"})
    client.post("/api/v1/symptom-checker", json={"symptoms": "stressed"}, headers=auth_headers)
    client.post("/api/v1/symptom-checker", json={"symptoms": "stressed"})

    users = sorted(r.user_id for r in session.exec(select(SymptomAnalysis)).all())
    assert users == ["1", "anonymous"]


def test_metrics_count_recommendations(client, fake_llm):
    labels = {"source": "symptoms", "follow_up": "true"}
    before = REGISTRY.get_sample_value("healthstore_recommendations_total", labels) or 0.0

    fake_llm.replies.update({"medical assistant": ANALYSIS, "health keywords": ""})
    client.post("/api/v1/symptom-checker", json={"symptoms": "meh"})

    assert REGISTRY.get_sample_value("healthstore_recommendations_total", labels) == before + 1
    assert "healthstore_recommendations_total" in client.get("/metrics").text
