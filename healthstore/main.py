# healthstore/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from healthstore.config import settings
from healthstore.core.llm import build_llm_client
from healthstore.core.observability import ObservabilityMiddleware
from healthstore.db.core import init_db
from healthstore.api.v1.routers import auth, chat, products, symptom_checker

app = FastAPI(title="Smart Health Store")

app.add_middleware(ObservabilityMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

Instrumentator().instrument(app).expose(app, endpoint="/metrics", include_in_schema=False)

@app.on_event("startup")
def on_startup():
    init_db()
    app.state.llm = build_llm_client(settings)

# Routers
app.include_router(auth.router,            prefix="/api/v1")
app.include_router(products.router,        prefix="/api/v1")
app.include_router(chat.router,            prefix="/api/v1")
app.include_router(symptom_checker.router, prefix="/api/v1")

@app.get("/health")
def health():
    return {"ok": True}
