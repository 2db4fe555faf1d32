# catalog_service/main.py
from fastapi import FastAPI, HTTPException

from app.data.seed import DEMO_PRODUCTS

app = FastAPI(title="Catalog Service (dev mock)")


VARIANTS = {
    v["sku"]: {
        "sku": v["sku"],
        "title": p["title"],
        "price": v["price"],
        "currency": "USD",
        "stock": v["stock"],
    }
    for p in DEMO_PRODUCTS
    for v in p["variants"]
}


@app.get("/variants/{sku}")
def get_variant(sku: str):
    variant = VARIANTS.get(sku)
    if not variant:
        raise HTTPException(status_code=404, detail="Variant not found")
    return variant
