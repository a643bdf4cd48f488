import logging
from datetime import date
from typing import Optional, Tuple

from liftkeeper.models.ledger import DebtRecord, DebtRecordType
from liftkeeper.models.maintenance import (
    ArchivedReceipt,
    MaintenanceHistory,
    MaintenanceRecord,
)
from liftkeeper.models.state import AppState
from liftkeeper.services.receipt_service import ReceiptService
from liftkeeper.store.commands import (
    AddMaintenanceRecord,
    ResetAllMaintenance,
    RevertMaintenance,
    ToggleMaintenance,
)
from liftkeeper.store.context import TransitionContext
from liftkeeper.store.result import TransitionResult, applied, rejected
from liftkeeper.store.transitions.common import actor, log_update, replace_by_id

logger = logging.getLogger(__name__)


def _link_installations(installations, building_id: str, record_id: str):
    return [
        item.model_copy(update={"related_maintenance_id": record_id})
        if item.building_id == building_id and not item.is_paid and item.related_maintenance_id is None
        else item
        for item in installations
    ]


def _unlink_installations(installations, record_id: str):
    return [
        item.model_copy(update={"related_maintenance_id": None})
        if item.related_maintenance_id == record_id
        else item
        for item in installations
    ]


def _bill_maintenance(state: AppState, command: ToggleMaintenance, ctx: TransitionContext) -> TransitionResult:
    building = state.find_building(command.payload.building_id)
    performed_by = actor(state, ctx)
    today, clock = ctx.today(), ctx.clock_time()
    fee = building.total_maintenance_fee
    new_debt = building.debt + fee

    record = MaintenanceRecord(
        id=ctx.new_id(),
        building_id=building.id,
        performed_by=performed_by,
        maintenance_date=today,
        maintenance_time=clock,
        elevator_count=building.elevator_count,
        total_fee=fee,
    )
    history = MaintenanceHistory(
        id=ctx.new_id(),
        building_id=building.id,
        maintenance_date=today,
        maintenance_time=clock,
        performed_by=performed_by,
        maintenance_fee=fee,
        related_record_id=record.id,
    )
    debt_record = DebtRecord(
        id=ctx.new_id(),
        building_id=building.id,
        date=today,
        type=DebtRecordType.MAINTENANCE,
        description=f"Maintenance fee ({building.elevator_count} elevator(s))",
        amount=fee,
        previous_debt=building.debt,
        new_debt=new_debt,
        performed_by=performed_by,
        related_record_id=record.id,
    )
    maintained = building.model_copy(update={
        "debt": new_debt,
        "is_maintained": True,
        "last_maintenance_date": today,
        "last_maintenance_time": clock,
        "is_defective": False,
    })

    linked = state.model_copy(update={
        "part_installations": _link_installations(state.part_installations, building.id, record.id),
        "manual_part_installations": _link_installations(
            state.manual_part_installations, building.id, record.id
        ),
    })
    html = ReceiptService.render_maintenance_receipt(
        building=maintained,
        settings=state.settings,
        parts=ReceiptService.collect_parts(linked, building.id, record.id),
        technician=performed_by,
        previous_debt=building.debt,
        issued_at=ctx.now(),
        currency_symbol=ctx.currency_symbol,
    )
    receipt = ArchivedReceipt(
        id=ctx.new_id(),
        building_id=building.id,
        html_content=html,
        created_date=ctx.timestamp(),
        created_by=performed_by,
        maintenance_date=today,
        building_name=building.name,
        related_record_id=record.id,
    )

    return applied(linked.model_copy(update={
        "buildings": replace_by_id(state.buildings, maintained),
        "maintenance_records": [*state.maintenance_records, record],
        "maintenance_history": [*state.maintenance_history, history],
        "debt_records": [*state.debt_records, debt_record],
        "archived_receipts": [*state.archived_receipts, receipt],
        "show_receipt_modal": True,
        "receipt_modal_html": html,
        "updates": log_update(
            state, ctx, "Maintenance Completed",
            f"Maintenance of building {building.name} was completed. Fee: {fee:g}",
        ),
    }))


def toggle_maintenance(state: AppState, command: ToggleMaintenance, ctx: TransitionContext) -> TransitionResult:
    """
    Record a maintenance visit.

    With `show_receipt` the visit is billed: a record, a history entry and a
    debt record are written and the receipt is archived. Without it only the
    flag flips, with no fee charged.
    """
    building = state.find_building(command.payload.building_id)
    if building is None:
        return rejected(state, f"building {command.payload.building_id} not found")

    if command.payload.show_receipt:
        return _bill_maintenance(state, command, ctx)

    becoming_maintained = not building.is_maintained
    changes = {"is_maintained": becoming_maintained, "is_defective": False}
    if becoming_maintained:
        changes.update(last_maintenance_date=ctx.today(), last_maintenance_time=ctx.clock_time())
        action, details = "Maintenance Completed", f"Building {building.name} was marked as maintained."
    else:
        action, details = "Maintenance Cancelled", f"Maintenance mark of building {building.name} was cleared."

    return applied(state.model_copy(update={
        "buildings": replace_by_id(state.buildings, building.model_copy(update=changes)),
        "updates": log_update(state, ctx, action, details),
    }))


def _parsed_date(value: str) -> date:
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return date.min


def _latest_record(state: AppState, building_id: str) -> Optional[MaintenanceRecord]:
    candidates = [
        (index, record)
        for index, record in enumerate(state.maintenance_records)
        if record.building_id == building_id
    ]
    if not candidates:
        return None

    def sort_key(entry: Tuple[int, MaintenanceRecord]):
        index, record = entry
        return _parsed_date(record.maintenance_date), record.maintenance_time, index

    return max(candidates, key=sort_key)[1]


def revert_maintenance(state: AppState, command: RevertMaintenance, ctx: TransitionContext) -> TransitionResult:
    """
    Undo the latest maintenance of a building.

    Removes its fee from the debt (never below zero) and deletes every
    artefact sharing the record id: history, debt records and receipt.
    """
    building = state.find_building(command.payload)
    if building is None:
        return rejected(state, f"building {command.payload} not found")
    if not building.is_maintained:
        return rejected(state, f"building {building.name} is not marked as maintained")

    changes = {
        "is_maintained": False,
        "last_maintenance_date": None,
        "last_maintenance_time": None,
    }
    update = {}

    record = _latest_record(state, building.id)
    if record is None:
        logger.info("Reverting maintenance of %s with no billed record", building.id)
        details = f"Maintenance mark of building {building.name} was reverted."
    else:
        changes["debt"] = max(0, building.debt - record.total_fee)
        update = {
            "maintenance_records": [r for r in state.maintenance_records if r.id != record.id],
            "maintenance_history": [
                h for h in state.maintenance_history if h.related_record_id != record.id
            ],
            "debt_records": [d for d in state.debt_records if d.related_record_id != record.id],
            "archived_receipts": [
                a for a in state.archived_receipts if a.related_record_id != record.id
            ],
            "part_installations": _unlink_installations(state.part_installations, record.id),
            "manual_part_installations": _unlink_installations(
                state.manual_part_installations, record.id
            ),
        }
        details = (
            f"Maintenance of building {building.name} on {record.maintenance_date} "
            f"was reverted. {record.total_fee:g} removed from debt."
        )

    return applied(state.model_copy(update={
        **update,
        "buildings": replace_by_id(state.buildings, building.model_copy(update=changes)),
        "updates": log_update(state, ctx, "Maintenance Reverted", details),
    }))


def reset_all_maintenance(state: AppState, command: ResetAllMaintenance, ctx: TransitionContext) -> TransitionResult:
    buildings = [
        b.model_copy(update={
            "is_maintained": False,
            "last_maintenance_date": None,
            "last_maintenance_time": None,
        })
        for b in state.buildings
    ]
    return applied(state.model_copy(update={
        "buildings": buildings,
        "last_maintenance_reset": ctx.timestamp(),
        "updates": log_update(
            state, ctx, "Maintenance Reset", "Maintenance status of all buildings was reset."
        ),
    }))


def add_maintenance_record(state: AppState, command: AddMaintenanceRecord, ctx: TransitionContext) -> TransitionResult:
    # Manual entry, the debt is left alone.
    record = MaintenanceRecord(id=ctx.new_id(), **dict(command.payload))
    return applied(state.model_copy(update={
        "maintenance_records": [*state.maintenance_records, record],
    }))
