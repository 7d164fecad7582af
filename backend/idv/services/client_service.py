"""
Client Service — Registration of verified people as insurance clients,
plus the EPOS hand-off payload generated on registration.
"""
import logging
import random
from datetime import datetime
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from idv.models.client import RegisteredClient, ClientProduct
from idv.models.product import Product
from idv.repositories.sql import SqlSourceRecordStore
from idv.schemas.schemas import (
    ClientDetails, ClientRegistrationResponse, EposAddress, EposPayload, EposProduct,
    RegisterClientRequest, UpdateClientRequest,
)
from idv.services.audit_service import AuditService
from idv.services.source_registry import epos_source_name
from idv.utils.validators import determine_id_type, validate_email

logger = logging.getLogger(__name__)


def generate_policy_number() -> str:
    return f"POL{datetime.utcnow():%Y%m%d}{random.randint(1000, 9999)}"


class ClientService:
    """CRUD over registered clients."""

    @staticmethod
    def register(
        db: Session,
        payload: RegisterClientRequest,
        registered_by_user_id: str,
        ip_address: Optional[str] = None,
    ) -> ClientRegistrationResponse:
        """Register a client and attach the requested products.

        A duplicate ID number is reported as an unsuccessful result, not raised.

        Raises:
            ValueError: Malformed email address.
        """
        if payload.email and not validate_email(payload.email):
            raise ValueError("Invalid email address")

        existing = db.query(RegisteredClient).filter(RegisteredClient.id_number == payload.id_number).first()
        if existing:
            return ClientRegistrationResponse(
                success=False,
                message="Client with this ID number is already registered",
            )

        client = RegisteredClient(
            client_id=payload.client_id,
            id_number=payload.id_number,
            full_name=payload.full_name,
            date_of_birth=payload.date_of_birth,
            gender=payload.gender,
            mobile_number=payload.mobile_number,
            email=payload.email,
            province=payload.province,
            district=payload.district,
            postal_code=payload.postal_code,
            notes=payload.notes,
            registered_by_user_id=registered_by_user_id,
            registration_date=datetime.utcnow(),
            status="Active",
        )
        db.add(client)
        db.commit()
        db.refresh(client)

        AuditService.log_action(
            db, registered_by_user_id, "Client Registration", "Client",
            entity_id=client.registration_id,
            details=f"New client registered: {client.full_name} (ID: {client.id_number})",
            ip_address=ip_address,
        )

        attached = 0
        for product_id in payload.product_ids:
            product = db.query(Product).filter(Product.product_id == product_id).first()
            if not product:
                logger.warning("Skipping unknown product %s for client %s", product_id, client.registration_id)
                continue
            db.add(ClientProduct(
                registration_id=client.registration_id,
                product_id=product.product_id,
                premium_amount=product.premium_amount,
                policy_number=generate_policy_number(),
                start_date=datetime.utcnow(),
                status="Active",
            ))
            attached += 1
        if attached:
            db.commit()
            db.refresh(client)

        details = ClientDetails.model_validate(client)
        return ClientRegistrationResponse(
            success=True,
            message="Client registered successfully",
            registration_id=client.registration_id,
            client=details,
            epos_payload=ClientService.build_epos_payload(db, client, details),
        )

    @staticmethod
    def build_epos_payload(db: Session, client: RegisteredClient, details: ClientDetails) -> EposPayload:
        """Map a registered client into the point-of-sale payload."""
        source_record = SqlSourceRecordStore(db).get_by_id_number(client.id_number)

        return EposPayload(
            id_type=determine_id_type(client.id_number),
            id_number=client.id_number,
            full_name=client.full_name,
            date_of_birth=client.date_of_birth.strftime("%Y-%m-%d") if client.date_of_birth else "",
            gender=(client.gender or "").lower(),
            mobile_number=client.mobile_number or "",
            address=EposAddress(
                province=client.province or "",
                district=client.district or "",
                postal_code=client.postal_code or "",
            ),
            source=epos_source_name(source_record.source if source_record else None),
            captured_by="EPOS-DB",
            capture_timestamp=datetime.utcnow().strftime("%Y-%m-%dT%H:%M:%SZ"),
            products=[
                EposProduct(
                    product_id=p.product_id,
                    product_name=p.product.product_name,
                    product_code=p.product.product_code,
                    premium_amount=p.premium_amount,
                    policy_number=p.policy_number,
                    status=p.status,
                )
                for p in details.products
            ],
        )

    @staticmethod
    def get_details(db: Session, registration_id: str) -> Optional[ClientDetails]:
        client = db.query(RegisteredClient).filter(RegisteredClient.registration_id == registration_id).first()
        return ClientDetails.model_validate(client) if client else None

    @staticmethod
    def update(
        db: Session,
        registration_id: str,
        payload: UpdateClientRequest,
        user_id: str,
    ) -> ClientDetails:
        """Update contact and status fields.

        Raises:
            LookupError: No client with this registration id.
            ValueError: Malformed email address.
        """
        client = db.query(RegisteredClient).filter(RegisteredClient.registration_id == registration_id).first()
        if not client:
            raise LookupError("Client not found")
        if payload.email and not validate_email(payload.email):
            raise ValueError("Invalid email address")

        client.full_name = payload.full_name
        client.mobile_number = payload.mobile_number
        client.email = payload.email
        client.province = payload.province
        client.district = payload.district
        client.postal_code = payload.postal_code
        client.status = payload.status
        client.notes = payload.notes
        db.commit()
        db.refresh(client)

        AuditService.log_action(
            db, user_id, "Client Update", "Client",
            entity_id=client.registration_id,
            details=f"Client updated: {client.full_name}",
        )
        return ClientDetails.model_validate(client)

    @staticmethod
    def list_all(db: Session) -> List[ClientDetails]:
        clients = db.query(RegisteredClient).order_by(RegisteredClient.registration_date.desc()).all()
        return [ClientDetails.model_validate(c) for c in clients]

    @staticmethod
    def search(db: Session, term: str) -> List[ClientDetails]:
        """Case-insensitive contains-match on name, ID number, email or mobile."""
        pattern = f"%{term.strip()}%"
        clients = (
            db.query(RegisteredClient)
            .filter(or_(
                RegisteredClient.full_name.ilike(pattern),
                RegisteredClient.id_number.ilike(pattern),
                RegisteredClient.email.ilike(pattern),
                RegisteredClient.mobile_number.ilike(pattern),
            ))
            .order_by(RegisteredClient.full_name.asc())
            .all()
        )
        return [ClientDetails.model_validate(c) for c in clients]

    @staticmethod
    def delete(db: Session, registration_id: str, user_id: str) -> bool:
        client = db.query(RegisteredClient).filter(RegisteredClient.registration_id == registration_id).first()
        if not client:
            return False

        name = client.full_name
        db.delete(client)
        db.commit()

        AuditService.log_action(
            db, user_id, "Client Deletion", "Client",
            entity_id=registration_id,
            details=f"Client deleted: {name}",
        )
        return True
