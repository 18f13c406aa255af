# healthstore/schemas.py
from pydantic import BaseModel, EmailStr, Field
from typing import List, Optional, Literal

InputType = Literal["text", "voice"]

# --- Products ---
class ProductCreate(BaseModel):
    title: str = Field(min_length=1)
    description: str
    price: float = Field(ge=0)
    tags: List[str] = Field(min_length=1)
    image: str
    in_stock: bool = Field(default=True, alias="inStock")

    class Config:
        populate_by_name = True

class ProductOut(BaseModel):
    id: Optional[int] = None
    title: str
    description: str
    price: float
    tags: List[str]
    image: str
    in_stock: bool = Field(alias="inStock")

    class Config:
        populate_by_name = True
        from_attributes = True

class SeedResponse(BaseModel):
    message: str
    count: int

# --- Recommendations ---
class RecommendedProduct(BaseModel):
    name: str
    category: str
    price: float
    image: str
    description: str

class RecommendationResult(BaseModel):
    products: List[RecommendedProduct] = []
    confidence: float = Field(ge=0, le=1)
    follow_up_question: Optional[str] = Field(default=None, alias="followUpQuestion")
    keywords: List[str] = []

    class Config:
        populate_by_name = True

# --- Symptom checker ---
class SymptomCheckReq(BaseModel):
    symptoms: Optional[str] = None
    input_type: InputType = Field(default="text", alias="inputType")

    class Config:
        populate_by_name = True

# --- Chat ---
class ChatReq(BaseModel):
    message: Optional[str] = None
    input_type: InputType = Field(default="text", alias="inputType")

    class Config:
        populate_by_name = True

# --- Auth ---
class RegisterReq(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)

class LoginReq(BaseModel):
    email: EmailStr
    password: str

class User(BaseModel):
    id: str | int
    email: EmailStr
