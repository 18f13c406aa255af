from sqlmodel import select

from healthstore.db.models import ChatMessage
from healthstore.services.chat import ERROR_REPLY, ChatService, build_product_context
from tests.factories import FakeLLM, make_product


def test_product_context_is_numbered():
    ctx = build_product_context([
        make_product("Iron Supplement", tags=["iron", "energy"], price=14.99, description="Boosts energy."),
        make_product("Turmeric Curcumin", tags=["turmeric"], price=21.99, description="Anti-inflammatory."),
    ])
    assert ctx.startswith("1. Iron Supplement - $14.99\n   Description: Boosts energy.\n   Tags: iron, energy")
    assert "\n\n2. Turmeric Curcumin - $21.99" in ctx


def test_chat_reply_recommends_mentioned_products(seeded):
    llm = FakeLLM(default="Try our Iron Supplement ($14.99) for low energy.")
    result = ChatService(seeded, llm).chat("I feel drained", user_id="u9")

    assert result["success"] is True
    assert result["message"] == "Try our Iron Supplement ($14.99) for low energy."
    assert [p["name"] for p in result["products"]] == ["Iron Supplement"]
    assert "timestamp" in result

    call = llm.calls[0]
    assert "Smart Health Store" in call["system"]
    assert "Magnesium Glycinate - $19.99" in call["system"]
    assert (call["temperature"], call["max_tokens"]) == (0.7, 500)

    row = seeded.exec(select(ChatMessage)).one()
    assert (row.user_id, row.message, row.input_type) == ("u9", "I feel drained", "text")


def test_chat_error_is_reported_not_raised(seeded):
    llm = FakeLLM({"Smart Health Store": RuntimeError("quota exceeded")})
    result = ChatService(seeded, llm).chat("hello")
    assert result == {"success": False, "message": ERROR_REPLY, "error": "quota exceeded"}
    assert seeded.exec(select(ChatMessage)).all() == []


def test_chat_endpoint(client, fake_llm):
    assert client.post("/api/v1/chat", json={"message": ""}).json() == {
        "success": False,
        "message": "Please provide a message",
    }

    client.post("/api/v1/products/seed")
    fake_llm.default = "Melatonin and magnesium both help with sleep."
    body = client.post("/api/v1/chat", json={"message": "I can't sleep", "inputType": "voice"}).json()
    assert body["success"] is True
    assert [p["name"] for p in body["products"]] == ["Sleep Support Melatonin", "Magnesium Glycinate"]
    assert body["products"][0]["category"] == "Sleep Support"
