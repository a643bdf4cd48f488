from enum import Enum
from typing import Optional

from liftkeeper.models.base import DomainModel, Record
from liftkeeper.models.building import FaultSeverity


class FaultReportStatus(str, Enum):
    PENDING = "pending"
    RESOLVED = "resolved"


class FaultReportCreate(DomainModel):
    """Citizen-submitted report, e.g. from the QR code on the elevator door."""

    building_id: str
    reporter_name: str
    reporter_surname: str = ""
    reporter_phone: str = ""
    apartment_no: str = ""
    description: str


class FaultReport(Record, FaultReportCreate):
    timestamp: str
    status: FaultReportStatus = FaultReportStatus.PENDING


class FaultData(DomainModel):
    description: str
    severity: FaultSeverity = FaultSeverity.MEDIUM
    reported_by: str


class NotificationType(str, Enum):
    FAULT = "fault"
    MAINTENANCE = "maintenance"
    PAYMENT = "payment"
    SYSTEM = "system"


class NotificationCreate(DomainModel):
    type: NotificationType = NotificationType.SYSTEM
    title: str
    message: str
    severity: FaultSeverity = FaultSeverity.LOW
    action_required: bool = False
    related_id: Optional[str] = None


class NotificationData(Record, NotificationCreate):
    timestamp: str
    is_read: bool = False
