from datetime import datetime, timezone
from typing import Optional, List, Dict, Any

from sqlalchemy import Index
from sqlmodel import SQLModel, Field, Column, JSON


def utc_now() -> datetime:
    return datetime.now(timezone.utc)

class User(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(index=True, unique=True)
    hashed_password: str
    created_at: datetime = Field(default_factory=utc_now)


class Product(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(index=True, unique=True)
    description: str
    price: float
    tags: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    image: str
    in_stock: bool = True
    created_at: datetime = Field(default_factory=utc_now)


class SymptomAnalysis(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(index=True)
    symptoms: str
    analysis: str
    confidence: float
    products: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON))
    follow_up_question: Optional[str] = None
    input_type: str = "text"
    created_at: datetime = Field(default_factory=utc_now)

    __table_args__ = (
        # analytics: "what did this user ask recently"
        Index("ix_symptom_analysis_user_created", "user_id", "created_at"),
    )


class ChatMessage(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(index=True)
    message: str
    response: str
    input_type: str = "text"
    created_at: datetime = Field(default_factory=utc_now)
