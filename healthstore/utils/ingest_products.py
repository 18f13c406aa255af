# healthstore/utils/ingest_products.py
"""
Seed the demo catalog without running the API:

    python -m healthstore.utils.ingest_products
"""
from sqlmodel import Session

from healthstore.db.core import engine, init_db
from healthstore.services.products import ProductService


def main():
    init_db()  # ensure tables exist
    with Session(engine) as s:
        result = ProductService(s).seed_products()
    print(f"Products: {result['message']} (count={result['count']})")

if __name__ == "__main__":
    main()
