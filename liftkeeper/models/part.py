from typing import Optional

from liftkeeper.models.base import DomainModel, Record


class PartBase(DomainModel):
    name: str
    quantity: int = 0
    price: float = 0


class PartCreate(PartBase):
    pass


class Part(Record, PartBase):
    pass


class PartInstallation(Record):
    """Inventory part fitted to a building, priced as it was at install time."""

    building_id: str
    part_id: str
    part_name: str
    quantity: int
    unit_price: float
    install_date: str
    installed_by: str
    is_paid: bool = False
    payment_date: Optional[str] = None
    related_maintenance_id: Optional[str] = None


class ManualPartInstallation(Record):
    """Free-text part fitted to a building, priced by hand and not tracked in stock."""

    building_id: str
    part_name: str
    quantity: int
    unit_price: float
    total_price: float
    install_date: str
    installed_by: str
    is_paid: bool = False
    payment_date: Optional[str] = None
    related_maintenance_id: Optional[str] = None


class InstalledPartLine(DomainModel):
    """Flattened row used on receipts, either kind of installation."""

    name: str
    quantity: int
    unit_price: float
    total_price: float
