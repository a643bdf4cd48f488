"""
Ledger models - why a building's debt is what it is.

Design principles:
- One DebtRecord per debt-changing event (maintenance, part, payment)
- Append-only; previous_debt/new_debt snapshot the building at that moment
- Building.debt is the running total, DebtRecord is the explanation
- A Payment always comes with a mirrored Income and a payment DebtRecord
"""

from enum import Enum
from typing import Optional

from liftkeeper.models.base import DomainModel, Record


class DebtRecordType(str, Enum):
    MAINTENANCE = "maintenance"
    PART = "part"
    PAYMENT = "payment"


class DebtRecord(Record):
    """
    One movement of a building's debt.

    Invariants:
    - new_debt == previous_debt + amount for maintenance/part entries
    - new_debt == max(0, previous_debt - amount) for payment entries
    """
    building_id: str
    date: str
    type: DebtRecordType
    description: str = ""
    amount: float
    previous_debt: float
    new_debt: float
    performed_by: Optional[str] = None
    related_record_id: Optional[str] = None  # maintenance record or installation


class PaymentCreate(DomainModel):
    building_id: str
    amount: float
    date: str
    received_by: str
    notes: Optional[str] = None


class Payment(Record, PaymentCreate):
    pass


class IncomeCreate(DomainModel):
    building_id: str
    amount: float
    date: str
    received_by: str


class Income(Record, IncomeCreate):
    pass
