"""Evidence photo API endpoints."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Response, UploadFile
from sqlmodel import Session

from workshop.api.deps import get_db, get_evidence_storage
from workshop.api.presenters import evidence_read
from workshop.core.errors import WorkshopError
from workshop.models.orders import EvidenceCategory
from workshop.models.schemas import EvidenceRead, EvidenceUploaded, MessageResponse
from workshop.services import EvidenceService
from workshop.storage import EvidenceStorage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/evidence", tags=["evidence"])


@router.get("/image/{evidence_id}")
def get_evidence_image(
    evidence_id: int,
    session: Session = Depends(get_db),
    storage: EvidenceStorage = Depends(get_evidence_storage),
) -> Response:
    try:
        content, media_type = EvidenceService(session, storage).get_image(evidence_id)
        return Response(content=content, media_type=media_type)
    except WorkshopError:
        raise
    except Exception:
        logger.exception("Error reading evidence image %s", evidence_id)
        raise HTTPException(status_code=500, detail="Could not read the image")


@router.post("/{category}", response_model=EvidenceUploaded)
def upload_evidence(
    category: EvidenceCategory,
    order_id: int = Form(...),
    images: List[UploadFile] = File(...),
    descriptions: Optional[List[str]] = Form(None),
    session: Session = Depends(get_db),
    storage: EvidenceStorage = Depends(get_evidence_storage),
) -> EvidenceUploaded:
    """
    Upload reception or work photos for an order, one description per image.
    """
    try:
        files = [(image.filename or "", image.file.read()) for image in images]
        saved = EvidenceService(session, storage).upload(order_id, category, files, descriptions or [])
        return EvidenceUploaded(
            message=f"{len(saved)} image(s) saved",
            count=len(saved),
            evidence=[evidence_read(evidence) for evidence in saved],
        )
    except WorkshopError:
        raise
    except Exception:
        logger.exception("Error uploading %s evidence for order %s", category.value, order_id)
        raise HTTPException(status_code=500, detail="Could not save the images")


@router.get("/{category}/{order_id}", response_model=List[EvidenceRead])
def list_evidence(
    category: EvidenceCategory,
    order_id: int,
    session: Session = Depends(get_db),
    storage: EvidenceStorage = Depends(get_evidence_storage),
) -> List[EvidenceRead]:
    try:
        evidence = EvidenceService(session, storage).list_for_order(order_id, category)
        return [evidence_read(item) for item in evidence]
    except WorkshopError:
        raise
    except Exception:
        logger.exception("Error listing %s evidence for order %s", category.value, order_id)
        raise HTTPException(status_code=500, detail="Could not list the evidence")


@router.delete("/{evidence_id}", response_model=MessageResponse)
def delete_evidence(
    evidence_id: int,
    hard: bool = False,
    session: Session = Depends(get_db),
    storage: EvidenceStorage = Depends(get_evidence_storage),
) -> MessageResponse:
    try:
        EvidenceService(session, storage).delete(evidence_id, hard=hard)
        return MessageResponse(message="Evidence deleted" if hard else "Evidence deactivated")
    except WorkshopError:
        raise
    except Exception:
        logger.exception("Error deleting evidence %s", evidence_id)
        raise HTTPException(status_code=500, detail="Could not delete the evidence")
