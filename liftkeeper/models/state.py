"""
AppState - the whole domain snapshot.

Every collection is owned here and nowhere else; entities refer to each
other only by id, resolved at read time. Session-local fields (current user,
sidebar, transient notifications, modal visibility) never reach the
persisted snapshot.
"""

from typing import List, Optional

from liftkeeper.models.app_settings import AppSettings, default_settings
from liftkeeper.models.base import DomainModel
from liftkeeper.models.building import Building
from liftkeeper.models.document import AutoSaveData, Printer, QRCodeData, SMSTemplate
from liftkeeper.models.fault import FaultReport, NotificationData
from liftkeeper.models.ledger import DebtRecord, Income, Payment
from liftkeeper.models.maintenance import ArchivedReceipt, MaintenanceHistory, MaintenanceRecord
from liftkeeper.models.part import ManualPartInstallation, Part, PartInstallation
from liftkeeper.models.proposal import Proposal, ProposalTemplate
from liftkeeper.models.user import Update, User

SESSION_FIELDS = frozenset({
    "current_user",
    "sidebar_open",
    "notifications",
    "unread_notifications",
    "show_receipt_modal",
    "receipt_modal_html",
    "show_printer_selection_modal",
    "printer_selection_content",
})


class AppState(DomainModel):
    buildings: List[Building] = []
    parts: List[Part] = []
    part_installations: List[PartInstallation] = []
    manual_part_installations: List[ManualPartInstallation] = []
    updates: List[Update] = []  # newest first
    incomes: List[Income] = []
    users: List[User] = []
    settings: AppSettings = AppSettings()
    last_maintenance_reset: Optional[str] = None
    fault_reports: List[FaultReport] = []
    maintenance_history: List[MaintenanceHistory] = []
    maintenance_records: List[MaintenanceRecord] = []
    printers: List[Printer] = []
    sms_templates: List[SMSTemplate] = []
    proposals: List[Proposal] = []
    payments: List[Payment] = []
    debt_records: List[DebtRecord] = []
    proposal_templates: List[ProposalTemplate] = []
    qr_codes: List[QRCodeData] = []
    system_notifications: List[NotificationData] = []
    auto_save_data: List[AutoSaveData] = []
    last_auto_save: Optional[str] = None
    archived_receipts: List[ArchivedReceipt] = []

    # Session-local
    current_user: Optional[User] = None
    sidebar_open: bool = True
    notifications: List[str] = []
    unread_notifications: int = 0
    show_receipt_modal: bool = False
    receipt_modal_html: Optional[str] = None
    show_printer_selection_modal: bool = False
    printer_selection_content: Optional[str] = None

    def find_building(self, building_id: str) -> Optional[Building]:
        return next((b for b in self.buildings if b.id == building_id), None)

    def find_part(self, part_id: str) -> Optional[Part]:
        return next((p for p in self.parts if p.id == part_id), None)

    def persisted(self) -> dict:
        """JSON-ready document without the session-local fields."""
        return self.model_dump(mode="json", by_alias=True, exclude=set(SESSION_FIELDS))


def initial_state() -> AppState:
    return AppState(
        users=[
            User(id="1", name="Admin User"),
            User(id="2", name="Technician 1"),
            User(id="3", name="Technician 2"),
        ],
        settings=default_settings(),
    )
