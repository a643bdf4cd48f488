from liftkeeper.models.ledger import DebtRecord, DebtRecordType, Income, Payment
from liftkeeper.models.state import AppState
from liftkeeper.store.commands import AddIncome, AddPayment
from liftkeeper.store.context import TransitionContext
from liftkeeper.store.result import TransitionResult, applied, rejected
from liftkeeper.store.transitions.common import log_update, replace_by_id
from liftkeeper.utils.formatting import format_money


def add_payment(state: AppState, command: AddPayment, ctx: TransitionContext) -> TransitionResult:
    """
    Record money received from a building.

    Writes the payment, a mirrored income entry and a payment debt record.
    Overpayment floors the debt at zero; the excess is not carried as credit.
    """
    payload = command.payload
    building = state.find_building(payload.building_id)
    if building is None:
        return rejected(state, f"building {payload.building_id} not found")
    if payload.amount <= 0:
        return rejected(state, "payment amount must be positive")

    new_debt = max(0, building.debt - payload.amount)
    payment = Payment(id=ctx.new_id(), **dict(payload))
    income = Income(
        id=ctx.new_id(),
        building_id=payload.building_id,
        amount=payload.amount,
        date=payload.date,
        received_by=payload.received_by,
    )
    debt_record = DebtRecord(
        id=ctx.new_id(),
        building_id=building.id,
        date=payload.date,
        type=DebtRecordType.PAYMENT,
        description=payload.notes or "Payment received",
        amount=payload.amount,
        previous_debt=building.debt,
        new_debt=new_debt,
        performed_by=payload.received_by,
        related_record_id=payment.id,
    )

    return applied(state.model_copy(update={
        "buildings": replace_by_id(state.buildings, building.model_copy(update={"debt": new_debt})),
        "payments": [*state.payments, payment],
        "incomes": [*state.incomes, income],
        "debt_records": [*state.debt_records, debt_record],
        "updates": log_update(
            state, ctx, "Payment Received",
            f"{format_money(payload.amount, ctx.currency_symbol)} received from building {building.name}.",
        ),
    }))


def add_income(state: AppState, command: AddIncome, ctx: TransitionContext) -> TransitionResult:
    income = Income(id=ctx.new_id(), **dict(command.payload))
    building = state.find_building(income.building_id)
    name = building.name if building else "unknown"
    return applied(state.model_copy(update={
        "incomes": [*state.incomes, income],
        "updates": log_update(
            state, ctx, "Income Added",
            f"{format_money(income.amount, ctx.currency_symbol)} income recorded for building {name}.",
        ),
    }))
