"""
Commands - the closed set of operations the store accepts.

Every command is `{type, payload}` on the wire. `type` selects the model,
the model validates the payload. Callers in Python build the models
directly, e.g. `InstallPart(payload=InstallPartPayload(...))`.
"""

from typing import Any, Dict, List, Literal, Optional, Type

from liftkeeper.models.base import DomainModel
from liftkeeper.models.building import Building, BuildingCreate
from liftkeeper.models.document import (
    AutoSaveData,
    Printer,
    PrinterCreate,
    QRCodeData,
    SMSTemplate,
    SMSTemplateCreate,
)
from liftkeeper.models.fault import FaultData, FaultReportCreate, NotificationCreate
from liftkeeper.models.ledger import IncomeCreate, PaymentCreate
from liftkeeper.models.maintenance import MaintenanceRecordCreate
from liftkeeper.models.part import Part, PartCreate
from liftkeeper.models.proposal import (
    Proposal,
    ProposalCreate,
    ProposalTemplate,
    ProposalTemplateCreate,
)
from liftkeeper.models.user import UpdateCreate, User, UserCreate


class Command(DomainModel):
    type: str
    payload: Any = None


# ===== PAYLOADS =====

class ReportFaultPayload(DomainModel):
    building_id: str
    fault_data: FaultData


class InstallPartPayload(DomainModel):
    building_id: str
    part_id: str
    quantity: int
    install_date: str


class InstallManualPartPayload(DomainModel):
    building_id: str
    part_name: str
    quantity: int
    unit_price: float
    total_price: float
    install_date: str


class MarkPartAsPaidPayload(DomainModel):
    installation_id: str
    is_manual: bool = False


class ToggleMaintenancePayload(DomainModel):
    building_id: str
    show_receipt: bool = False


class MessageDispatchPayload(DomainModel):
    template_id: str
    building_ids: List[str] = []


# ===== BUILDINGS =====

class AddBuilding(Command):
    type: Literal["ADD_BUILDING"] = "ADD_BUILDING"
    payload: BuildingCreate


class UpdateBuilding(Command):
    type: Literal["UPDATE_BUILDING"] = "UPDATE_BUILDING"
    payload: Building


class DeleteBuilding(Command):
    type: Literal["DELETE_BUILDING"] = "DELETE_BUILDING"
    payload: str


class ReportFault(Command):
    type: Literal["REPORT_FAULT"] = "REPORT_FAULT"
    payload: ReportFaultPayload


class MarkAsRepaired(Command):
    type: Literal["MARK_AS_REPAIRED"] = "MARK_AS_REPAIRED"
    payload: str


# ===== PARTS =====

class AddPart(Command):
    type: Literal["ADD_PART"] = "ADD_PART"
    payload: PartCreate


class UpdatePart(Command):
    type: Literal["UPDATE_PART"] = "UPDATE_PART"
    payload: Part


class DeletePart(Command):
    type: Literal["DELETE_PART"] = "DELETE_PART"
    payload: str


class IncreasePrices(Command):
    type: Literal["INCREASE_PRICES"] = "INCREASE_PRICES"
    payload: float  # percentage


class InstallPart(Command):
    type: Literal["INSTALL_PART"] = "INSTALL_PART"
    payload: InstallPartPayload


class InstallManualPart(Command):
    type: Literal["INSTALL_MANUAL_PART"] = "INSTALL_MANUAL_PART"
    payload: InstallManualPartPayload


class MarkPartAsPaid(Command):
    type: Literal["MARK_PART_AS_PAID"] = "MARK_PART_AS_PAID"
    payload: MarkPartAsPaidPayload


# ===== MAINTENANCE =====

class ToggleMaintenance(Command):
    type: Literal["TOGGLE_MAINTENANCE"] = "TOGGLE_MAINTENANCE"
    payload: ToggleMaintenancePayload


class RevertMaintenance(Command):
    type: Literal["REVERT_MAINTENANCE"] = "REVERT_MAINTENANCE"
    payload: str


class ResetAllMaintenance(Command):
    type: Literal["RESET_ALL_MAINTENANCE"] = "RESET_ALL_MAINTENANCE"
    payload: None = None


class AddMaintenanceRecord(Command):
    type: Literal["ADD_MAINTENANCE_RECORD"] = "ADD_MAINTENANCE_RECORD"
    payload: MaintenanceRecordCreate


# ===== LEDGER =====

class AddPayment(Command):
    type: Literal["ADD_PAYMENT"] = "ADD_PAYMENT"
    payload: PaymentCreate


class AddIncome(Command):
    type: Literal["ADD_INCOME"] = "ADD_INCOME"
    payload: IncomeCreate


# ===== FAULT REPORTS =====

class AddFaultReport(Command):
    type: Literal["ADD_FAULT_REPORT"] = "ADD_FAULT_REPORT"
    payload: FaultReportCreate


class ResolveFaultReport(Command):
    type: Literal["RESOLVE_FAULT_REPORT"] = "RESOLVE_FAULT_REPORT"
    payload: str


# ===== USERS =====

class SetUser(Command):
    type: Literal["SET_USER"] = "SET_USER"
    payload: str  # display name


class AddUser(Command):
    type: Literal["ADD_USER"] = "ADD_USER"
    payload: UserCreate


class UpdateUser(Command):
    type: Literal["UPDATE_USER"] = "UPDATE_USER"
    payload: User


class DeleteUser(Command):
    type: Literal["DELETE_USER"] = "DELETE_USER"
    payload: str


# ===== SETTINGS & SESSION =====

class UpdateSettings(Command):
    type: Literal["UPDATE_SETTINGS"] = "UPDATE_SETTINGS"
    payload: Dict[str, Any]


class ResetSettings(Command):
    type: Literal["RESET_SETTINGS"] = "RESET_SETTINGS"
    payload: None = None


class ToggleSidebar(Command):
    type: Literal["TOGGLE_SIDEBAR"] = "TOGGLE_SIDEBAR"
    payload: None = None


class AddNotification(Command):
    type: Literal["ADD_NOTIFICATION"] = "ADD_NOTIFICATION"
    payload: str


class ClearNotifications(Command):
    type: Literal["CLEAR_NOTIFICATIONS"] = "CLEAR_NOTIFICATIONS"
    payload: None = None


class AddSystemNotification(Command):
    type: Literal["ADD_SYSTEM_NOTIFICATION"] = "ADD_SYSTEM_NOTIFICATION"
    payload: NotificationCreate


class MarkNotificationRead(Command):
    type: Literal["MARK_NOTIFICATION_READ"] = "MARK_NOTIFICATION_READ"
    payload: str


class RemoveSystemNotification(Command):
    type: Literal["REMOVE_SYSTEM_NOTIFICATION"] = "REMOVE_SYSTEM_NOTIFICATION"
    payload: str


class AddUpdate(Command):
    type: Literal["ADD_UPDATE"] = "ADD_UPDATE"
    payload: UpdateCreate


class ShowReceiptModal(Command):
    type: Literal["SHOW_RECEIPT_MODAL"] = "SHOW_RECEIPT_MODAL"
    payload: str


class CloseReceiptModal(Command):
    type: Literal["CLOSE_RECEIPT_MODAL"] = "CLOSE_RECEIPT_MODAL"
    payload: None = None


class ShowPrinterSelection(Command):
    type: Literal["SHOW_PRINTER_SELECTION"] = "SHOW_PRINTER_SELECTION"
    payload: str


class ClosePrinterSelection(Command):
    type: Literal["CLOSE_PRINTER_SELECTION"] = "CLOSE_PRINTER_SELECTION"
    payload: None = None


# ===== DOCUMENTS =====

class AddPrinter(Command):
    type: Literal["ADD_PRINTER"] = "ADD_PRINTER"
    payload: PrinterCreate


class UpdatePrinter(Command):
    type: Literal["UPDATE_PRINTER"] = "UPDATE_PRINTER"
    payload: Printer


class DeletePrinter(Command):
    type: Literal["DELETE_PRINTER"] = "DELETE_PRINTER"
    payload: str


class AddSMSTemplate(Command):
    type: Literal["ADD_SMS_TEMPLATE"] = "ADD_SMS_TEMPLATE"
    payload: SMSTemplateCreate


class UpdateSMSTemplate(Command):
    type: Literal["UPDATE_SMS_TEMPLATE"] = "UPDATE_SMS_TEMPLATE"
    payload: SMSTemplate


class DeleteSMSTemplate(Command):
    type: Literal["DELETE_SMS_TEMPLATE"] = "DELETE_SMS_TEMPLATE"
    payload: str


class SendBulkSMS(Command):
    type: Literal["SEND_BULK_SMS"] = "SEND_BULK_SMS"
    payload: MessageDispatchPayload


class SendWhatsApp(Command):
    type: Literal["SEND_WHATSAPP"] = "SEND_WHATSAPP"
    payload: MessageDispatchPayload


class AddProposal(Command):
    type: Literal["ADD_PROPOSAL"] = "ADD_PROPOSAL"
    payload: ProposalCreate


class UpdateProposal(Command):
    type: Literal["UPDATE_PROPOSAL"] = "UPDATE_PROPOSAL"
    payload: Proposal


class DeleteProposal(Command):
    type: Literal["DELETE_PROPOSAL"] = "DELETE_PROPOSAL"
    payload: str


class AddProposalTemplate(Command):
    type: Literal["ADD_PROPOSAL_TEMPLATE"] = "ADD_PROPOSAL_TEMPLATE"
    payload: ProposalTemplateCreate


class UpdateProposalTemplate(Command):
    type: Literal["UPDATE_PROPOSAL_TEMPLATE"] = "UPDATE_PROPOSAL_TEMPLATE"
    payload: ProposalTemplate


class DeleteProposalTemplate(Command):
    type: Literal["DELETE_PROPOSAL_TEMPLATE"] = "DELETE_PROPOSAL_TEMPLATE"
    payload: str


class AddQRCodeData(Command):
    type: Literal["ADD_QR_CODE_DATA"] = "ADD_QR_CODE_DATA"
    payload: QRCodeData


class UpdateAutoSaveData(Command):
    type: Literal["UPDATE_AUTO_SAVE_DATA"] = "UPDATE_AUTO_SAVE_DATA"
    payload: AutoSaveData


COMMAND_TYPES: Dict[str, Type[Command]] = {
    cls.model_fields["type"].default: cls
    for cls in Command.__subclasses__()
}


def parse_command(raw: Dict[str, Any]) -> Optional[Command]:
    """
    Build a command from its wire form.

    Returns None for an unknown `type`; raises pydantic.ValidationError
    when the type is known but the payload does not fit.
    """
    command_cls = COMMAND_TYPES.get(raw.get("type"))
    if command_cls is None:
        return None
    return command_cls.model_validate(raw)
