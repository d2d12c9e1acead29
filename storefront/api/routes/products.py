"""Products Routes: HTTP surface of the natural-key product store.

Invariants:
    - The {name} path segment is the product's unique name, URL-decoded
    - Renames go through PUT with a different "name" in the body
"""

from fastapi import APIRouter, Depends, status

from storefront.api.dependencies import get_product_store
from storefront.core.repository_protocols import ProductStoreLike
from storefront.schemas.product import ProductCreate, ProductUpdate

router = APIRouter(prefix="/products", tags=["products"])


@router.get("")
async def list_products(store: ProductStoreLike = Depends(get_product_store)):
    return await store.find_all()


@router.get("/{name}")
async def get_product(name: str, store: ProductStoreLike = Depends(get_product_store)):
    return await store.get(name)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_product(
    body: ProductCreate, store: ProductStoreLike = Depends(get_product_store),
):
    return await store.create(body.model_dump(exclude_unset=True))


@router.put("/{name}")
async def update_product(
    name: str, body: ProductUpdate,
    store: ProductStoreLike = Depends(get_product_store),
):
    """Update or rename a product; returns it as stored under its current name."""
    return await store.update(name, body.to_payload())


@router.delete("/{name}")
async def delete_product(
    name: str, store: ProductStoreLike = Depends(get_product_store),
):
    await store.delete(name)
    return {"message": "Product deleted successfully"}
