"""
Product Routes — Insurance catalogue and client enrollments.
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from idv.database import get_db
from idv.dependencies import get_current_user
from idv.models.user import User
from idv.schemas.schemas import (
    AttachProductRequest, ClientProductOut, ProductOut, UpdateClientProductRequest,
)
from idv.services.product_service import ProductService

router = APIRouter(prefix="/api/products", tags=["Products"])


@router.get("", response_model=List[ProductOut])
def list_products(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return ProductService.list_active(db)


@router.get("/categories", response_model=List[str])
def list_categories(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return ProductService.categories(db)


@router.get("/category/{category}", response_model=List[ProductOut])
def list_products_by_category(
    category: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return ProductService.list_by_category(db, category)


@router.post("/attach", response_model=ClientProductOut, status_code=201)
def attach_product(
    payload: AttachProductRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Enroll a registered client in a product."""
    try:
        return ProductService.attach(db, payload, current_user.user_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/client-products/{client_product_id}", response_model=ClientProductOut)
def update_client_product(
    client_product_id: str,
    payload: UpdateClientProductRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        return ProductService.update_client_product(db, client_product_id, payload)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/client-products/{client_product_id}", status_code=204)
def remove_client_product(
    client_product_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if not ProductService.remove_client_product(db, client_product_id, current_user.user_id):
        raise HTTPException(status_code=404, detail="Client product not found")
    return Response(status_code=204)


@router.get("/{product_id}", response_model=ProductOut)
def get_product(
    product_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    product = ProductService.get(db, product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product
