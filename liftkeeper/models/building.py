from enum import Enum
from typing import Optional

from liftkeeper.models.base import DomainModel, Record


class FaultSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class BuildingLabel(str, Enum):
    GREEN = "green"
    BLUE = "blue"
    YELLOW = "yellow"
    RED = "red"


class Address(DomainModel):
    mahalle: str = ""  # neighbourhood
    sokak: str = ""    # street
    il: str = ""       # province
    ilce: str = ""     # district
    bina_no: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    def formatted(self) -> str:
        return f"{self.mahalle} {self.sokak} {self.bina_no}, {self.ilce}/{self.il}".strip()


class BuildingBase(DomainModel):
    name: str
    maintenance_fee: float = 0  # per elevator
    elevator_count: int = 1
    debt: float = 0
    contact_info: str = ""
    address: Address = Address()
    notes: str = ""

    is_maintained: bool = False
    last_maintenance_date: Optional[str] = None  # YYYY-MM-DD
    last_maintenance_time: Optional[str] = None  # HH:MM

    is_defective: bool = False
    defective_note: Optional[str] = None
    fault_severity: Optional[FaultSeverity] = None
    fault_timestamp: Optional[str] = None
    fault_reported_by: Optional[str] = None

    label: Optional[BuildingLabel] = None
    building_responsible: Optional[str] = None
    maintenance_receipt_note: Optional[str] = None


class BuildingCreate(BuildingBase):
    """Payload of ADD_BUILDING: a building without an id."""


class Building(Record, BuildingBase):

    @property
    def total_maintenance_fee(self) -> float:
        return self.maintenance_fee * self.elevator_count
