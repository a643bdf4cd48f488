import logging

from liftkeeper.models.building import Building
from liftkeeper.models.state import AppState
from liftkeeper.store.commands import (
    AddBuilding,
    DeleteBuilding,
    MarkAsRepaired,
    ReportFault,
    UpdateBuilding,
)
from liftkeeper.store.context import TransitionContext
from liftkeeper.store.result import TransitionResult, applied, rejected
from liftkeeper.store.transitions.common import (
    log_update,
    push_notification,
    remove_by_id,
    replace_by_id,
)

logger = logging.getLogger(__name__)


def add_building(state: AppState, command: AddBuilding, ctx: TransitionContext) -> TransitionResult:
    building = Building(id=ctx.new_id(), **dict(command.payload))
    return applied(state.model_copy(update={
        "buildings": [*state.buildings, building],
        "updates": log_update(
            state, ctx, "Building Added", f"Building {building.name} was added to the system."
        ),
    }))


def update_building(state: AppState, command: UpdateBuilding, ctx: TransitionContext) -> TransitionResult:
    building = command.payload
    if state.find_building(building.id) is None:
        # The entry is still written; see DESIGN.md, "audit entries for missing ids".
        logger.warning("UPDATE_BUILDING for unknown building %s", building.id)
    return applied(state.model_copy(update={
        "buildings": replace_by_id(state.buildings, building),
        "updates": log_update(state, ctx, "Building Updated", f"Building {building.name} was updated."),
    }))


def delete_building(state: AppState, command: DeleteBuilding, ctx: TransitionContext) -> TransitionResult:
    building = state.find_building(command.payload)
    name = building.name if building else "unknown"
    return applied(state.model_copy(update={
        "buildings": remove_by_id(state.buildings, command.payload),
        "updates": log_update(state, ctx, "Building Deleted", f"Building {name} was removed from the system."),
    }))


def report_fault(state: AppState, command: ReportFault, ctx: TransitionContext) -> TransitionResult:
    building = state.find_building(command.payload.building_id)
    if building is None:
        return rejected(state, f"building {command.payload.building_id} not found")

    fault = command.payload.fault_data
    updated = building.model_copy(update={
        "is_defective": True,
        "fault_severity": fault.severity,
        "fault_timestamp": ctx.timestamp(),
        "fault_reported_by": fault.reported_by,
        "defective_note": fault.description,
    })
    return applied(state.model_copy(update={
        "buildings": replace_by_id(state.buildings, updated),
        "updates": log_update(
            state, ctx, "Building Marked Defective",
            f"Building {building.name} was marked defective. Reported by: {fault.reported_by}",
        ),
        **push_notification(state, ctx, f"Building {building.name} was marked defective!"),
    }))


def mark_as_repaired(state: AppState, command: MarkAsRepaired, ctx: TransitionContext) -> TransitionResult:
    building = state.find_building(command.payload)
    if building is None:
        return rejected(state, f"building {command.payload} not found")

    updated = building.model_copy(update={
        "is_defective": False,
        "fault_severity": None,
        "fault_timestamp": None,
        "fault_reported_by": None,
        "defective_note": None,
    })
    return applied(state.model_copy(update={
        "buildings": replace_by_id(state.buildings, updated),
        "updates": log_update(state, ctx, "Fault Repaired", f"The fault in building {building.name} was repaired."),
    }))
