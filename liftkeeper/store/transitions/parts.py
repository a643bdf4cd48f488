import logging

from liftkeeper.models.ledger import DebtRecord, DebtRecordType
from liftkeeper.models.part import ManualPartInstallation, Part, PartInstallation
from liftkeeper.models.state import AppState
from liftkeeper.store.commands import (
    AddPart,
    DeletePart,
    IncreasePrices,
    InstallManualPart,
    InstallPart,
    MarkPartAsPaid,
    UpdatePart,
)
from liftkeeper.store.context import TransitionContext
from liftkeeper.store.result import TransitionResult, applied, rejected
from liftkeeper.store.transitions.common import (
    actor,
    find_by_id,
    log_update,
    remove_by_id,
    replace_by_id,
)
from liftkeeper.utils.formatting import round_to_step

logger = logging.getLogger(__name__)

PRICE_ROUNDING_STEP = 50


def add_part(state: AppState, command: AddPart, ctx: TransitionContext) -> TransitionResult:
    part = Part(id=ctx.new_id(), **dict(command.payload))
    return applied(state.model_copy(update={
        "parts": [*state.parts, part],
        "updates": log_update(state, ctx, "Part Added", f"Part {part.name} was added to stock."),
    }))


def update_part(state: AppState, command: UpdatePart, ctx: TransitionContext) -> TransitionResult:
    part = command.payload
    if state.find_part(part.id) is None:
        logger.warning("UPDATE_PART for unknown part %s", part.id)
    return applied(state.model_copy(update={
        "parts": replace_by_id(state.parts, part),
        "updates": log_update(state, ctx, "Part Updated", f"Part {part.name} was updated."),
    }))


def delete_part(state: AppState, command: DeletePart, ctx: TransitionContext) -> TransitionResult:
    part = state.find_part(command.payload)
    name = part.name if part else "unknown"
    return applied(state.model_copy(update={
        "parts": remove_by_id(state.parts, command.payload),
        "updates": log_update(state, ctx, "Part Deleted", f"Part {name} was removed from stock."),
    }))


def increase_prices(state: AppState, command: IncreasePrices, ctx: TransitionContext) -> TransitionResult:
    """Raise every part price by a percentage, rounded to the nearest 50."""
    percentage = command.payload
    factor = 1 + percentage / 100
    parts = [
        part.model_copy(update={"price": round_to_step(part.price * factor, PRICE_ROUNDING_STEP)})
        for part in state.parts
    ]
    return applied(state.model_copy(update={
        "parts": parts,
        "updates": log_update(
            state, ctx, "Price Increase",
            f"All part prices were increased by {percentage:g}% and rounded "
            f"to the nearest multiple of {PRICE_ROUNDING_STEP}.",
        ),
    }))


def install_part(state: AppState, command: InstallPart, ctx: TransitionContext) -> TransitionResult:
    """
    Fit stock parts to a building and bill them straight onto its debt.

    Rejected unless both the building and the part exist and there is
    enough stock for the whole quantity.
    """
    payload = command.payload
    building = state.find_building(payload.building_id)
    part = state.find_part(payload.part_id)

    if building is None:
        return rejected(state, f"building {payload.building_id} not found")
    if part is None:
        return rejected(state, f"part {payload.part_id} not found")
    if payload.quantity <= 0:
        return rejected(state, "quantity must be positive")
    if part.quantity < payload.quantity:
        return rejected(
            state, f"insufficient stock for {part.name}: {part.quantity} < {payload.quantity}"
        )

    performed_by = actor(state, ctx)
    total_cost = part.price * payload.quantity
    new_debt = building.debt + total_cost

    installation = PartInstallation(
        id=ctx.new_id(),
        building_id=building.id,
        part_id=part.id,
        part_name=part.name,
        quantity=payload.quantity,
        unit_price=part.price,
        install_date=payload.install_date,
        installed_by=performed_by,
    )
    debt_record = DebtRecord(
        id=ctx.new_id(),
        building_id=building.id,
        date=payload.install_date,
        type=DebtRecordType.PART,
        description=f"{payload.quantity} x {part.name} installed",
        amount=total_cost,
        previous_debt=building.debt,
        new_debt=new_debt,
        performed_by=performed_by,
        related_record_id=installation.id,
    )

    return applied(state.model_copy(update={
        "parts": replace_by_id(
            state.parts, part.model_copy(update={"quantity": part.quantity - payload.quantity})
        ),
        "buildings": replace_by_id(state.buildings, building.model_copy(update={"debt": new_debt})),
        "part_installations": [*state.part_installations, installation],
        "debt_records": [*state.debt_records, debt_record],
        "updates": log_update(
            state, ctx, "Part Installed",
            f"{payload.quantity} x {part.name} installed in building {building.name}.",
        ),
    }))


def install_manual_part(state: AppState, command: InstallManualPart, ctx: TransitionContext) -> TransitionResult:
    """Same as install_part for a hand-priced part; no stock is involved."""
    payload = command.payload
    building = state.find_building(payload.building_id)
    if building is None:
        return rejected(state, f"building {payload.building_id} not found")

    performed_by = actor(state, ctx)
    new_debt = building.debt + payload.total_price

    installation = ManualPartInstallation(
        id=ctx.new_id(),
        building_id=building.id,
        part_name=payload.part_name,
        quantity=payload.quantity,
        unit_price=payload.unit_price,
        total_price=payload.total_price,
        install_date=payload.install_date,
        installed_by=performed_by,
    )
    debt_record = DebtRecord(
        id=ctx.new_id(),
        building_id=building.id,
        date=payload.install_date,
        type=DebtRecordType.PART,
        description=f"{payload.quantity} x {payload.part_name} installed (manual)",
        amount=payload.total_price,
        previous_debt=building.debt,
        new_debt=new_debt,
        performed_by=performed_by,
        related_record_id=installation.id,
    )

    return applied(state.model_copy(update={
        "buildings": replace_by_id(state.buildings, building.model_copy(update={"debt": new_debt})),
        "manual_part_installations": [*state.manual_part_installations, installation],
        "debt_records": [*state.debt_records, debt_record],
        "updates": log_update(
            state, ctx, "Manual Part Installed",
            f"{payload.quantity} x {payload.part_name} installed in building {building.name} (manual).",
        ),
    }))


def mark_part_as_paid(state: AppState, command: MarkPartAsPaid, ctx: TransitionContext) -> TransitionResult:
    # Debt is settled separately through ADD_PAYMENT.
    payload = command.payload
    field = "manual_part_installations" if payload.is_manual else "part_installations"
    installations = getattr(state, field)

    installation = find_by_id(installations, payload.installation_id)
    if installation is None:
        return rejected(state, f"installation {payload.installation_id} not found")

    paid = installation.model_copy(update={"is_paid": True, "payment_date": ctx.timestamp()})
    return applied(state.model_copy(update={field: replace_by_id(installations, paid)}))
