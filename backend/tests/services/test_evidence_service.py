import pytest
from sqlmodel import Session

from workshop.core.errors import NotFoundError, ValidationError
from workshop.models.orders import Evidence, EvidenceCategory
from workshop.services import EvidenceService
from workshop.storage import LocalEvidenceStorage, media_type, sanitize_description

from tests.utils.test_utils import make_order

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


class TestEvidenceStorage:
    """Test cases for the filesystem evidence store."""

    def test_sanitize_description(self):
        assert sanitize_description("Golpe en defensa trasera") == "Golpe_en_defensa_trasera"
        assert sanitize_description("Raspón ñandú") == "Raspon_nandu"
        assert sanitize_description("../../etc/passwd") == "etc_passwd"
        assert sanitize_description("   ") == "evidence"
        assert sanitize_description("") == "evidence"

    def test_sanitize_description_is_capped(self):
        assert sanitize_description("x" * 80) == "x" * 50

    def test_media_type(self):
        assert media_type("a/b/photo.JPG") == "image/jpeg"
        assert media_type("photo.png") == "image/png"
        assert media_type("photo.tiff") == "application/octet-stream"

    def test_store_layout(self, evidence_storage: LocalEvidenceStorage):
        path = evidence_storage.store(PNG_BYTES, "SRV-000001", EvidenceCategory.RECEPTION, "Front bumper", ".png")

        assert path.startswith("SRV-000001/Reception/Front_bumper_")
        assert path.endswith(".png")
        assert evidence_storage.retrieve(path) == PNG_BYTES

    def test_work_folder(self, evidence_storage: LocalEvidenceStorage):
        path = evidence_storage.store(PNG_BYTES, "SRV-000001", EvidenceCategory.WORK, "Old pads", "jpg")

        assert path.startswith("SRV-000001/Trabajo/Old_pads_")
        assert path.endswith(".jpg")

    def test_retrieve_missing_file(self, evidence_storage: LocalEvidenceStorage):
        with pytest.raises(NotFoundError):
            evidence_storage.retrieve("SRV-000001/Reception/missing.png")

    def test_path_escape_is_rejected(self, evidence_storage: LocalEvidenceStorage):
        with pytest.raises(ValidationError):
            evidence_storage.retrieve("../outside.png")


class TestEvidenceService:
    """Test cases for evidence uploads."""

    def test_upload_records_evidence(self, db: Session, seed, evidence_storage):
        order = make_order(db, seed)
        service = EvidenceService(db, evidence_storage)

        saved = service.upload(
            order.id,
            EvidenceCategory.WORK,
            [("pads.png", PNG_BYTES), ("disc.jpg", PNG_BYTES)],
            ["Worn pads", "Scored disc"],
        )
        db.refresh(order)

        assert len(saved) == 2
        assert all(item.is_work_evidence for item in saved)
        assert order.has_evidence is True
        assert [item.description for item in service.list_for_order(order.id, EvidenceCategory.WORK)] == [
            "Worn pads",
            "Scored disc",
        ]

    def test_description_count_must_match(self, db: Session, seed, evidence_storage):
        order = make_order(db, seed)

        with pytest.raises(ValidationError):
            EvidenceService(db, evidence_storage).upload(
                order.id, EvidenceCategory.RECEPTION, [("a.png", PNG_BYTES)], []
            )

    def test_empty_files_are_skipped(self, db: Session, seed, evidence_storage):
        order = make_order(db, seed)

        saved = EvidenceService(db, evidence_storage).upload(
            order.id, EvidenceCategory.RECEPTION, [("a.png", b""), ("b.png", PNG_BYTES)], ["Empty", "Door"]
        )

        assert [item.description for item in saved] == ["Door"]

    def test_upload_to_unknown_order(self, db: Session, seed, evidence_storage):
        with pytest.raises(NotFoundError):
            EvidenceService(db, evidence_storage).upload(
                999, EvidenceCategory.RECEPTION, [("a.png", PNG_BYTES)], ["Door"]
            )

    def test_empty_category_is_not_found(self, db: Session, seed, evidence_storage):
        order = make_order(db, seed)
        service = EvidenceService(db, evidence_storage)
        service.upload(order.id, EvidenceCategory.RECEPTION, [("a.png", PNG_BYTES)], ["Door"])

        with pytest.raises(NotFoundError):
            service.list_for_order(order.id, EvidenceCategory.WORK)

    def test_get_image_with_missing_file(self, db: Session, seed, evidence_storage):
        order = make_order(db, seed)
        service = EvidenceService(db, evidence_storage)
        saved = service.upload(order.id, EvidenceCategory.RECEPTION, [("a.png", PNG_BYTES)], ["Door"])
        evidence_storage.delete(saved[0].file_path)

        with pytest.raises(NotFoundError):
            service.get_image(saved[0].id)

    def test_soft_delete_keeps_file(self, db: Session, seed, evidence_storage):
        order = make_order(db, seed)
        service = EvidenceService(db, evidence_storage)
        saved = service.upload(order.id, EvidenceCategory.RECEPTION, [("a.png", PNG_BYTES)], ["Door"])
        evidence_id, path = saved[0].id, saved[0].file_path

        service.delete(evidence_id)

        assert db.get(Evidence, evidence_id).active is False
        assert evidence_storage.retrieve(path) == PNG_BYTES
        with pytest.raises(NotFoundError):
            service.get_image(evidence_id)

    def test_hard_delete_removes_row_and_file(self, db: Session, seed, evidence_storage):
        order = make_order(db, seed)
        service = EvidenceService(db, evidence_storage)
        saved = service.upload(order.id, EvidenceCategory.RECEPTION, [("a.png", PNG_BYTES)], ["Door"])
        evidence_id, path = saved[0].id, saved[0].file_path

        service.delete(evidence_id, hard=True)

        assert db.get(Evidence, evidence_id) is None
        with pytest.raises(NotFoundError):
            evidence_storage.retrieve(path)
