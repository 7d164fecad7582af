"""
Product Service — Insurance catalogue and client enrollments.
"""
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from idv.models.client import RegisteredClient, ClientProduct
from idv.models.product import Product
from idv.schemas.schemas import (
    AttachProductRequest, ClientProductOut, ProductOut, UpdateClientProductRequest,
)
from idv.services.audit_service import AuditService
from idv.services.client_service import generate_policy_number

CLIENT_PRODUCT_STATUSES = ("Active", "Lapsed", "Cancelled")


class ProductService:

    @staticmethod
    def list_active(db: Session) -> List[ProductOut]:
        products = (
            db.query(Product)
            .filter(Product.is_active.is_(True))
            .order_by(Product.category.asc(), Product.product_code.asc())
            .all()
        )
        return [ProductOut.model_validate(p) for p in products]

    @staticmethod
    def list_by_category(db: Session, category: str) -> List[ProductOut]:
        products = (
            db.query(Product)
            .filter(Product.category == category, Product.is_active.is_(True))
            .order_by(Product.product_code.asc())
            .all()
        )
        return [ProductOut.model_validate(p) for p in products]

    @staticmethod
    def get(db: Session, product_id: str) -> Optional[ProductOut]:
        product = (
            db.query(Product)
            .filter(Product.product_id == product_id, Product.is_active.is_(True))
            .first()
        )
        return ProductOut.model_validate(product) if product else None

    @staticmethod
    def categories(db: Session) -> List[str]:
        rows = db.query(Product.category).distinct().order_by(Product.category.asc()).all()
        return [r[0] for r in rows]

    @staticmethod
    def attach(db: Session, payload: AttachProductRequest, user_id: str) -> ClientProductOut:
        """Enroll a registered client in a product.

        Raises:
            LookupError: Unknown client or product.
            ValueError: Client already holds the product.
        """
        client = db.query(RegisteredClient).filter(
            RegisteredClient.registration_id == payload.registration_id
        ).first()
        if not client:
            raise LookupError("Client not found")

        product = db.query(Product).filter(Product.product_id == payload.product_id).first()
        if not product:
            raise LookupError("Product not found")

        existing = db.query(ClientProduct).filter(
            ClientProduct.registration_id == payload.registration_id,
            ClientProduct.product_id == payload.product_id,
        ).first()
        if existing:
            raise ValueError("Client already has this product")

        premium = payload.custom_premium_amount
        enrollment = ClientProduct(
            registration_id=client.registration_id,
            product_id=product.product_id,
            premium_amount=premium if premium is not None else product.premium_amount,
            policy_number=generate_policy_number(),
            start_date=payload.start_date,
            end_date=payload.end_date,
            notes=payload.notes,
            enrollment_date=datetime.utcnow(),
            status="Active",
        )
        db.add(enrollment)
        db.commit()
        db.refresh(enrollment)

        AuditService.log_action(
            db, user_id, "Product Attached", "ClientProduct",
            entity_id=enrollment.client_product_id,
            details=f"{product.product_name} attached to {client.full_name}",
        )
        return ClientProductOut.model_validate(enrollment)

    @staticmethod
    def client_products(db: Session, registration_id: str) -> List[ClientProductOut]:
        client = db.query(RegisteredClient).filter(RegisteredClient.registration_id == registration_id).first()
        if not client:
            raise LookupError("Client not found")
        return [ClientProductOut.model_validate(cp) for cp in client.products]

    @staticmethod
    def update_client_product(
        db: Session,
        client_product_id: str,
        payload: UpdateClientProductRequest,
    ) -> ClientProductOut:
        if payload.status not in CLIENT_PRODUCT_STATUSES:
            raise ValueError(f"Status must be one of: {', '.join(CLIENT_PRODUCT_STATUSES)}")

        enrollment = db.query(ClientProduct).filter(ClientProduct.client_product_id == client_product_id).first()
        if not enrollment:
            raise LookupError("Client product not found")

        enrollment.status = payload.status
        if payload.premium_amount is not None:
            enrollment.premium_amount = payload.premium_amount
        if payload.end_date is not None:
            enrollment.end_date = payload.end_date
        if payload.notes is not None:
            enrollment.notes = payload.notes
        db.commit()
        db.refresh(enrollment)
        return ClientProductOut.model_validate(enrollment)

    @staticmethod
    def remove_client_product(db: Session, client_product_id: str, user_id: str) -> bool:
        enrollment = db.query(ClientProduct).filter(ClientProduct.client_product_id == client_product_id).first()
        if not enrollment:
            return False

        db.delete(enrollment)
        db.commit()

        AuditService.log_action(
            db, user_id, "Product Removed", "ClientProduct",
            entity_id=client_product_id,
        )
        return True
