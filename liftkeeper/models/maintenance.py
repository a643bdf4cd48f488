from enum import Enum
from typing import Optional

from liftkeeper.models.base import DomainModel, Record


class MaintenanceStatus(str, Enum):
    COMPLETED = "completed"
    PENDING = "pending"
    CANCELLED = "cancelled"


class MaintenancePriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class MaintenanceRecordCreate(DomainModel):
    building_id: str
    performed_by: str
    maintenance_date: str
    maintenance_time: str
    elevator_count: int
    total_fee: float
    notes: Optional[str] = None


class MaintenanceRecord(Record, MaintenanceRecordCreate):
    """A completed maintenance visit. Its id is the link shared by history, ledger and receipt."""

    status: MaintenanceStatus = MaintenanceStatus.COMPLETED
    priority: MaintenancePriority = MaintenancePriority.MEDIUM


class MaintenanceHistory(Record):
    """Second representation of a maintenance visit, kept for the persisted format."""

    building_id: str
    maintenance_date: str
    maintenance_time: str
    performed_by: str
    maintenance_fee: float
    notes: Optional[str] = None
    related_record_id: Optional[str] = None


class ArchivedReceipt(Record):
    """Frozen HTML of a maintenance receipt."""

    building_id: str
    html_content: str
    created_date: str
    created_by: str
    maintenance_date: str
    building_name: str
    related_record_id: Optional[str] = None
