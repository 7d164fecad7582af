"""
Verification Routes — Multi-source progress search, the legacy single
search, and the demo test-ID picker.

ID numbers may contain "/" (e.g. 19850615/10/1), so the ID segment takes the
rest of the path and is percent-decoded before use.
"""
import logging
from typing import List
from urllib.parse import unquote

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from idv.config import get_settings
from idv.database import get_db
from idv.dependencies import get_current_user, get_orchestrator, get_single_source_verifier
from idv.models.user import User
from idv.repositories.sql import SqlRegisteredClientStore, SqlSourceRecordStore
from idv.schemas.schemas import (
    AvailableTestId, MultiSourceVerificationResponse, SourceSearchResultOut, VerificationResponse,
)
from idv.services.verification_service import (
    MultiSourceVerificationResult, SingleSourceVerifier, VerificationOrchestrator,
    list_available_test_ids,
)
from idv.utils.validators import validate_id_number

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/verification", tags=["Verification"])


def _decode_id_number(raw: str) -> str:
    # Starlette has already decoded the path once; unquoting again keeps
    # clients that double-encode the slash (19850615%252F10%252F1) working.
    id_number = unquote(raw or "").strip()
    if not validate_id_number(id_number):
        raise HTTPException(status_code=400, detail="ID number is required")
    return id_number


def _to_response(result: MultiSourceVerificationResult) -> MultiSourceVerificationResponse:
    return MultiSourceVerificationResponse(
        success=result.success,
        id_number=result.id_number,
        source_results=[
            SourceSearchResultOut(
                source_name=entry.source_name,
                display_name=entry.display_name,
                status=entry.status.value,
                response_time=entry.response_time_ms,
                is_found=entry.is_found,
                result=entry.matched_record,
                error_message=entry.error_message,
                priority=entry.priority,
            )
            for entry in result.source_results
        ],
        final_result=result.final_result,
        total_response_time=result.total_response_time_ms,
        overall_status=result.overall_status,
    )


@router.get("/available-test-ids", response_model=List[AvailableTestId])
def available_test_ids(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Unregistered demo IDs, one per ID type and source."""
    return list_available_test_ids(
        SqlSourceRecordStore(db),
        SqlRegisteredClientStore(db),
        limit=get_settings().TEST_ID_LIMIT,
    )


@router.get("/multi-source/{id_number:path}", response_model=MultiSourceVerificationResponse)
def verify_multi_source(
    id_number: str,
    current_user: User = Depends(get_current_user),
    orchestrator: VerificationOrchestrator = Depends(get_orchestrator),
):
    """Search every source in priority order and return the per-source trace."""
    result = orchestrator.search_with_progress(_decode_id_number(id_number), current_user.user_id)
    return _to_response(result)


@router.get("/{id_number:path}", response_model=VerificationResponse)
def verify_single_source(
    id_number: str,
    current_user: User = Depends(get_current_user),
    verifier: SingleSourceVerifier = Depends(get_single_source_verifier),
):
    """Legacy lookup: one substring search across all sources."""
    decoded = _decode_id_number(id_number)
    try:
        summary = verifier.verify(decoded, current_user.user_id)
    except SQLAlchemyError as e:
        logger.error("Verification failed for %s: %s", decoded, e)
        raise HTTPException(status_code=500, detail="An error occurred during verification")

    return VerificationResponse(
        success=summary.success,
        status=summary.status,
        result_count=summary.result_count,
        response_time=summary.response_time_ms,
        source=summary.source,
        results=summary.matches,
        error_message=summary.error_message,
    )
