from enum import Enum
from typing import Any, Dict, Optional

from liftkeeper.models.base import DomainModel, Record


class PrinterType(str, Enum):
    THERMAL = "thermal"
    INKJET = "inkjet"
    LASER = "laser"


class PrinterCreate(DomainModel):
    name: str
    ip_address: str = ""
    port: int = 9100
    is_default: bool = False
    type: PrinterType = PrinterType.THERMAL


class Printer(Record, PrinterCreate):
    pass


class SMSTemplateCreate(DomainModel):
    name: str
    content: str


class SMSTemplate(Record, SMSTemplateCreate):
    pass


class QRCodeData(Record):
    building_id: str
    content: str
    custom_fields: Dict[str, Any] = {}
    generated_date: str
    is_active: bool = True
    logo_url: Optional[str] = None
    company_name: Optional[str] = None


class AutoSaveData(Record):
    """Draft of a half-filled form, one per id."""

    form_type: str
    form_data: Any = None
    timestamp: str
    user_id: str
