"""
Client Routes — Registration, lookup, update and removal of insurance clients.
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from idv.database import get_db
from idv.dependencies import get_current_user
from idv.models.user import User
from idv.schemas.schemas import (
    ClientDetails, ClientProductOut, ClientRegistrationResponse, RegisterClientRequest,
    UpdateClientRequest,
)
from idv.services.client_service import ClientService
from idv.services.product_service import ProductService

router = APIRouter(prefix="/api/clients", tags=["Clients"])


@router.post("/register", response_model=ClientRegistrationResponse)
def register_client(
    payload: RegisterClientRequest,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Register a verified person and build the EPOS payload."""
    try:
        result = ClientService.register(
            db, payload, current_user.user_id,
            ip_address=request.client.host if request.client else None,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not result.success:
        return JSONResponse(status_code=400, content=result.model_dump(by_alias=True, mode="json"))
    return result


@router.get("", response_model=List[ClientDetails])
def list_clients(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return ClientService.list_all(db)


@router.get("/search", response_model=List[ClientDetails])
def search_clients(
    q: str = Query("", description="Name, ID number, email or mobile fragment"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if not q.strip():
        return ClientService.list_all(db)
    return ClientService.search(db, q)


@router.get("/{registration_id}", response_model=ClientDetails)
def get_client(
    registration_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    client = ClientService.get_details(db, registration_id)
    if not client:
        raise HTTPException(status_code=404, detail="Client not found")
    return client


@router.put("/{registration_id}", response_model=ClientDetails)
def update_client(
    registration_id: str,
    payload: UpdateClientRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        return ClientService.update(db, registration_id, payload, current_user.user_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{registration_id}", status_code=204)
def delete_client(
    registration_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if not ClientService.delete(db, registration_id, current_user.user_id):
        raise HTTPException(status_code=404, detail="Client not found")
    return Response(status_code=204)


@router.get("/{registration_id}/products", response_model=List[ClientProductOut])
def get_client_products(
    registration_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        return ProductService.client_products(db, registration_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
