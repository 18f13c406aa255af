# healthstore/api/v1/routers/products.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session

from healthstore.api.v1.deps import get_current_user, get_llm
from healthstore.core.llm import LLMClient
from healthstore.db.core import get_session
from healthstore.schemas import ProductCreate, ProductOut, SeedResponse, User
from healthstore.services.products import DuplicateProductError, ProductService, SearchType

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=List[ProductOut])
def search_products(
    query: str = Query(default=""),
    search_type: SearchType = Query(default="normal", alias="searchType"),
    db: Session = Depends(get_session),
    llm: LLMClient = Depends(get_llm),
):
    return ProductService(db, llm).search_products(query, search_type)


@router.post("", response_model=ProductOut, status_code=201)
def create_product(
    payload: ProductCreate,
    u: User = Depends(get_current_user),
    db: Session = Depends(get_session),
):
    try:
        return ProductService(db).create_product(payload)
    except DuplicateProductError:
        raise HTTPException(status_code=409, detail=f"Product '{payload.title}' already exists")


@router.post("/seed", response_model=SeedResponse)
def seed_products(db: Session = Depends(get_session)):
    return ProductService(db).seed_products()
