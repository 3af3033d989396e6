"""Initialize services package."""

from .catalog_service import CatalogService
from .checklist_service import ChecklistService
from .evidence_service import EvidenceService
from .history_service import HistoryService
from .inventory_service import InventoryService
from .job_service import JobService
from .order_service import OrderService
from .parts_ledger_service import PartsLedgerService
from .search_service import SearchService
