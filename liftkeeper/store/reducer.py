"""
Reducer - maps every command type to its transition.

Each transition is `(state, command, ctx) -> TransitionResult` and never
mutates its input; AppState and its records are frozen models.
"""

import logging
from typing import Callable, Dict, Optional

from liftkeeper.models.state import AppState
from liftkeeper.store.commands import Command
from liftkeeper.store.context import TransitionContext
from liftkeeper.store.result import TransitionResult, rejected
from liftkeeper.store.transitions import (
    buildings,
    documents,
    faults,
    ledger,
    maintenance,
    parts,
    settings,
    users,
)

logger = logging.getLogger(__name__)

Transition = Callable[[AppState, Command, TransitionContext], TransitionResult]

TRANSITIONS: Dict[str, Transition] = {
    # Buildings
    "ADD_BUILDING": buildings.add_building,
    "UPDATE_BUILDING": buildings.update_building,
    "DELETE_BUILDING": buildings.delete_building,
    "REPORT_FAULT": buildings.report_fault,
    "MARK_AS_REPAIRED": buildings.mark_as_repaired,
    # Parts
    "ADD_PART": parts.add_part,
    "UPDATE_PART": parts.update_part,
    "DELETE_PART": parts.delete_part,
    "INCREASE_PRICES": parts.increase_prices,
    "INSTALL_PART": parts.install_part,
    "INSTALL_MANUAL_PART": parts.install_manual_part,
    "MARK_PART_AS_PAID": parts.mark_part_as_paid,
    # Maintenance
    "TOGGLE_MAINTENANCE": maintenance.toggle_maintenance,
    "REVERT_MAINTENANCE": maintenance.revert_maintenance,
    "RESET_ALL_MAINTENANCE": maintenance.reset_all_maintenance,
    "ADD_MAINTENANCE_RECORD": maintenance.add_maintenance_record,
    # Ledger
    "ADD_PAYMENT": ledger.add_payment,
    "ADD_INCOME": ledger.add_income,
    # Fault reports
    "ADD_FAULT_REPORT": faults.add_fault_report,
    "RESOLVE_FAULT_REPORT": faults.resolve_fault_report,
    # Users
    "SET_USER": users.set_user,
    "ADD_USER": users.add_user,
    "UPDATE_USER": users.update_user,
    "DELETE_USER": users.delete_user,
    # Settings & session
    "UPDATE_SETTINGS": settings.update_settings,
    "RESET_SETTINGS": settings.reset_settings,
    "TOGGLE_SIDEBAR": settings.toggle_sidebar,
    "ADD_NOTIFICATION": settings.add_notification,
    "CLEAR_NOTIFICATIONS": settings.clear_notifications,
    "ADD_SYSTEM_NOTIFICATION": settings.add_system_notification,
    "MARK_NOTIFICATION_READ": settings.mark_notification_read,
    "REMOVE_SYSTEM_NOTIFICATION": settings.remove_system_notification,
    "ADD_UPDATE": settings.add_update,
    "SHOW_RECEIPT_MODAL": settings.show_receipt_modal,
    "CLOSE_RECEIPT_MODAL": settings.close_receipt_modal,
    "SHOW_PRINTER_SELECTION": settings.show_printer_selection,
    "CLOSE_PRINTER_SELECTION": settings.close_printer_selection,
    # Documents
    "ADD_PRINTER": documents.add_printer,
    "UPDATE_PRINTER": documents.update_printer,
    "DELETE_PRINTER": documents.delete_printer,
    "ADD_SMS_TEMPLATE": documents.add_sms_template,
    "UPDATE_SMS_TEMPLATE": documents.update_sms_template,
    "DELETE_SMS_TEMPLATE": documents.delete_sms_template,
    "SEND_BULK_SMS": documents.send_bulk_sms,
    "SEND_WHATSAPP": documents.send_whatsapp,
    "ADD_PROPOSAL": documents.add_proposal,
    "UPDATE_PROPOSAL": documents.update_proposal,
    "DELETE_PROPOSAL": documents.delete_proposal,
    "ADD_PROPOSAL_TEMPLATE": documents.add_proposal_template,
    "UPDATE_PROPOSAL_TEMPLATE": documents.update_proposal_template,
    "DELETE_PROPOSAL_TEMPLATE": documents.delete_proposal_template,
    "ADD_QR_CODE_DATA": documents.add_qr_code_data,
    "UPDATE_AUTO_SAVE_DATA": documents.update_auto_save_data,
}


def apply_command(
    state: AppState,
    command: Command,
    ctx: Optional[TransitionContext] = None,
) -> TransitionResult:
    """Apply one command; unknown types leave the state untouched."""
    transition = TRANSITIONS.get(command.type)
    if transition is None:
        logger.warning("Ignoring unknown command type %s", command.type)
        return rejected(state, f"unknown command type {command.type}")

    result = transition(state, command, ctx or TransitionContext())
    if result.rejected:
        logger.info("%s rejected: %s", command.type, result.reason)
    return result
