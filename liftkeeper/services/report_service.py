from typing import List

from pydantic import BaseModel

from liftkeeper.models.building import Building
from liftkeeper.models.ledger import Income
from liftkeeper.models.part import ManualPartInstallation, PartInstallation
from liftkeeper.models.state import AppState


class MonthlyIncome(BaseModel):
    year: int
    month: int
    total: float
    incomes: List[Income]


class MaintenanceStats(BaseModel):
    year: int
    month: int
    maintenance_count: int
    elevator_count: int
    revenue: float
    maintained_buildings: int
    pending_buildings: int


class MonthlyParts(BaseModel):
    year: int
    month: int
    part_installations: List[PartInstallation]
    manual_part_installations: List[ManualPartInstallation]
    total_cost: float


class MonthlyReport(BaseModel):
    income: MonthlyIncome
    maintenance: MaintenanceStats
    parts: MonthlyParts
    expected_income: float
    defective_buildings: List[Building]


def _in_month(value: str, year: int, month: int) -> bool:
    """Dates are stored as YYYY-MM-DD or full ISO timestamps."""
    return value[:7] == f"{year:04d}-{month:02d}"


class ReportService:
    @staticmethod
    def monthly_income(state: AppState, year: int, month: int) -> MonthlyIncome:
        incomes = [i for i in state.incomes if _in_month(i.date, year, month)]
        return MonthlyIncome(
            year=year,
            month=month,
            total=sum(i.amount for i in incomes),
            incomes=incomes,
        )

    @staticmethod
    def maintenance_stats(state: AppState, year: int, month: int) -> MaintenanceStats:
        records = [
            r for r in state.maintenance_records
            if _in_month(r.maintenance_date, year, month)
        ]
        maintained = sum(1 for b in state.buildings if b.is_maintained)
        return MaintenanceStats(
            year=year,
            month=month,
            maintenance_count=len(records),
            elevator_count=sum(r.elevator_count for r in records),
            revenue=sum(r.total_fee for r in records),
            maintained_buildings=maintained,
            pending_buildings=len(state.buildings) - maintained,
        )

    @staticmethod
    def monthly_parts(state: AppState, year: int, month: int) -> MonthlyParts:
        installations = [
            i for i in state.part_installations if _in_month(i.install_date, year, month)
        ]
        manual = [
            i for i in state.manual_part_installations if _in_month(i.install_date, year, month)
        ]
        total = sum(i.unit_price * i.quantity for i in installations)
        total += sum(i.total_price for i in manual)
        return MonthlyParts(
            year=year,
            month=month,
            part_installations=installations,
            manual_part_installations=manual,
            total_cost=total,
        )

    @staticmethod
    def expected_income(state: AppState) -> float:
        """Outstanding debt across all buildings."""
        return sum(b.debt for b in state.buildings)

    @staticmethod
    def defective_buildings(state: AppState) -> List[Building]:
        return [b for b in state.buildings if b.is_defective]

    @staticmethod
    def monthly_report(state: AppState, year: int, month: int) -> MonthlyReport:
        return MonthlyReport(
            income=ReportService.monthly_income(state, year, month),
            maintenance=ReportService.maintenance_stats(state, year, month),
            parts=ReportService.monthly_parts(state, year, month),
            expected_income=ReportService.expected_income(state),
            defective_buildings=ReportService.defective_buildings(state),
        )
