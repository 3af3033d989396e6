from .evidence import EvidenceStorage, LocalEvidenceStorage, media_type, sanitize_description
