from liftkeeper.models.fault import FaultReport, FaultReportStatus
from liftkeeper.models.state import AppState
from liftkeeper.store.commands import AddFaultReport, ResolveFaultReport
from liftkeeper.store.context import TransitionContext
from liftkeeper.store.result import TransitionResult, applied, rejected
from liftkeeper.store.transitions.common import find_by_id, log_update, replace_by_id

SYSTEM_USER = "System"


def add_fault_report(state: AppState, command: AddFaultReport, ctx: TransitionContext) -> TransitionResult:
    """Citizen report from the public form; it does not mark the building defective."""
    report = FaultReport(id=ctx.new_id(), timestamp=ctx.timestamp(), **dict(command.payload))
    building = state.find_building(report.building_id)
    name = building.name if building else "unknown"
    reporter = f"{report.reporter_name} {report.reporter_surname}".strip()
    return applied(state.model_copy(update={
        "fault_reports": [*state.fault_reports, report],
        "unread_notifications": state.unread_notifications + 1,
        "updates": log_update(
            state, ctx, "New Fault Report",
            f"Fault reported for building {name} by {reporter}.",
            user=SYSTEM_USER,
        ),
    }))


def resolve_fault_report(state: AppState, command: ResolveFaultReport, ctx: TransitionContext) -> TransitionResult:
    report = find_by_id(state.fault_reports, command.payload)
    if report is None:
        return rejected(state, f"fault report {command.payload} not found")
    if report.status is FaultReportStatus.RESOLVED:
        return rejected(state, f"fault report {report.id} is already resolved")

    resolved = report.model_copy(update={"status": FaultReportStatus.RESOLVED})
    return applied(state.model_copy(update={
        "fault_reports": replace_by_id(state.fault_reports, resolved),
        "updates": log_update(state, ctx, "Fault Report Resolved", f"Fault report {report.id} was resolved."),
    }))
