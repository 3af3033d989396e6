from collections.abc import Generator

from fastapi import Header
from sqlmodel import Session

from workshop.core.config import settings
from workshop.core.db import engine
from workshop.storage import EvidenceStorage, LocalEvidenceStorage


def get_db() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


def get_current_user_id(x_user_id: int = Header(..., alias="X-User-Id")) -> int:
    """Id of the acting workshop user, sent by the front-end on every request."""
    return x_user_id


def get_evidence_storage() -> EvidenceStorage:
    return LocalEvidenceStorage(settings.EVIDENCE_STORAGE_DIR)
