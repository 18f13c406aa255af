import os
from typing import List

from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseModel):
    app_env: str = os.getenv("APP_ENV", "dev")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Database (sqlite locally, postgres in prod)
    database_url: str = os.getenv("DATABASE_URL") or os.getenv("DB_URL") or "sqlite:///./healthstore.db"
    db_pool_size: int = int(os.getenv("DB_POOL_SIZE", "5"))
    db_max_overflow: int = int(os.getenv("DB_MAX_OVERFLOW", "10"))

    # LLM (any OpenAI-compatible endpoint, OpenRouter by default)
    llm_api_key: str = os.getenv("LLM_API_KEY") or os.getenv("OPENROUTER_API_KEY") or ""
    llm_api_base: str = os.getenv("LLM_API_BASE", "https://openrouter.ai/api/v1")
    llm_model: str = os.getenv("LLM_MODEL") or os.getenv("GEMINI_MODEL") or "google/gemini-2.0-flash-001"
    llm_referer: str = os.getenv("LLM_REFERER", "http://localhost:3001")
    llm_app_title: str = os.getenv("LLM_APP_TITLE", "Smart Health Store")

    # Cache (empty → disabled)
    redis_url: str = os.getenv("REDIS_URL", "")
    keyword_cache_ttl: int = int(os.getenv("KEYWORD_CACHE_TTL", "3600"))

    # Auth
    jwt_secret: str = os.getenv("JWT_SECRET", "dev_secret_change_me")
    jwt_algo: str = os.getenv("JWT_ALGO", "HS256")
    jwt_ttl_seconds: int = int(os.getenv("JWT_TTL_SECONDS", str(24 * 60 * 60)))

    cors_origins: str = os.getenv("CORS_ORIGINS", "")

    def cors_origin_list(self) -> List[str]:
        origins = [o.strip() for o in self.cors_origins.split(",") if o.strip()]
        return origins or ["http://localhost:5173", "http://localhost:3000"]

settings = Settings()
