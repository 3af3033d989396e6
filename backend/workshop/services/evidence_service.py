"""Photo evidence attached to orders."""

import logging
from pathlib import Path
from typing import List, Sequence, Tuple

from sqlmodel import Session, select

from workshop.core.errors import NotFoundError, ValidationError
from workshop.models.orders import Evidence, EvidenceCategory, Order
from workshop.storage import EvidenceStorage, media_type

logger = logging.getLogger(__name__)

UploadedFile = Tuple[str, bytes]


class EvidenceService:
    """Service for evidence uploads; files go to the store, rows to the database."""

    def __init__(self, session: Session, storage: EvidenceStorage):
        self.session = session
        self.storage = storage

    def upload(
        self,
        order_id: int,
        category: EvidenceCategory,
        files: List[UploadedFile],
        descriptions: List[str],
    ) -> List[Evidence]:
        """Store each non-empty file and record it against the order.

        ``files`` holds ``(filename, content)`` pairs matched by position with
        ``descriptions``.
        """
        if not files:
            raise ValidationError("No images were received")
        if len(descriptions) != len(files):
            raise ValidationError("The number of descriptions must match the number of images")

        order = self.session.get(Order, order_id)
        if order is None:
            raise NotFoundError("Order not found")

        saved = []
        for (filename, content), description in zip(files, descriptions):
            if not content:
                logger.warning("Skipping empty upload %r for order %s", filename, order.order_number)
                continue
            path = self.storage.store(
                content,
                order.order_number,
                category,
                description,
                Path(filename or "").suffix,
            )
            evidence = Evidence(
                order_id=order.id,
                file_path=path,
                description=description or "",
                is_work_evidence=category == EvidenceCategory.WORK,
            )
            self.session.add(evidence)
            saved.append(evidence)

        if saved:
            order.has_evidence = True
            self.session.add(order)
        self.session.commit()
        for evidence in saved:
            self.session.refresh(evidence)

        logger.info("Saved %d %s evidence file(s) for order %s", len(saved), category.value, order.order_number)
        return saved

    def list_for_order(self, order_id: int, category: EvidenceCategory) -> Sequence[Evidence]:
        evidence = self.session.exec(
            select(Evidence)
            .where(
                Evidence.order_id == order_id,
                Evidence.active == True,  # noqa: E712
                Evidence.is_work_evidence == (category == EvidenceCategory.WORK),
            )
            .order_by(Evidence.created_at, Evidence.id)
        ).all()
        if not evidence:
            raise NotFoundError(f"No {category.value} evidence for this order")
        return evidence

    def get_image(self, evidence_id: int) -> Tuple[bytes, str]:
        evidence = self.session.get(Evidence, evidence_id)
        if evidence is None or not evidence.active:
            raise NotFoundError("Evidence not found")
        return self.storage.retrieve(evidence.file_path), media_type(evidence.file_path)

    def delete(self, evidence_id: int, hard: bool = False) -> Evidence:
        evidence = self.session.get(Evidence, evidence_id)
        if evidence is None:
            raise NotFoundError("Evidence not found")

        if hard:
            removed = self.storage.delete(evidence.file_path)
            self.session.delete(evidence)
            logger.info("Evidence %s deleted (file removed: %s)", evidence_id, removed)
        else:
            evidence.active = False
            self.session.add(evidence)
            logger.info("Evidence %s deactivated", evidence_id)
        self.session.commit()
        return evidence
