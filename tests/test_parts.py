from liftkeeper.models.ledger import DebtRecordType
from liftkeeper.models.part import PartCreate
from liftkeeper.store.commands import (
    AddPart,
    DeletePart,
    IncreasePrices,
    InstallManualPart,
    InstallManualPartPayload,
    InstallPart,
    InstallPartPayload,
    MarkPartAsPaid,
    MarkPartAsPaidPayload,
    UpdatePart,
)


def _install(building, part, quantity=2):
    return InstallPart(payload=InstallPartPayload(
        building_id=building.id,
        part_id=part.id,
        quantity=quantity,
        install_date="2024-03-10",
    ))


def test_increase_prices_rounds_to_nearest_fifty(store):
    for name, price in [("Rope", 437), ("Button", 100), ("Relay", 475)]:
        store.dispatch_or_raise(AddPart(payload=PartCreate(name=name, quantity=1, price=price)))
    updates_before = len(store.state.updates)

    store.dispatch_or_raise(IncreasePrices(payload=10))

    prices = {p.name: p.price for p in store.state.parts}
    assert prices["Rope"] == 500  # 480.7
    assert prices["Button"] == 100  # 110
    assert prices["Relay"] == 500  # 522.5
    assert len(store.state.updates) == updates_before + 1
    assert store.state.updates[0].action == "Price Increase"


def test_increase_prices_rounds_half_up(store):
    store.dispatch_or_raise(AddPart(payload=PartCreate(name="Pulley", quantity=1, price=475)))

    store.dispatch_or_raise(IncreasePrices(payload=0))

    assert store.state.parts[0].price == 500


def test_install_part_moves_stock_into_debt(store, building, part):
    store.dispatch_or_raise(_install(building, part))

    assert store.state.find_part(part.id).quantity == 3
    assert store.state.find_building(building.id).debt == 200

    installation = store.state.part_installations[-1]
    assert installation.quantity == 2
    assert installation.is_paid is False
    assert installation.related_maintenance_id is None

    record = store.state.debt_records[-1]
    assert record.type == DebtRecordType.PART
    assert record.amount == 200
    assert record.previous_debt == 0
    assert record.new_debt == 200
    assert record.related_record_id == installation.id


def test_install_part_with_insufficient_stock_is_rejected(store, building, part):
    before = store.state

    result = store.dispatch(_install(building, part, quantity=6))

    assert result.rejected
    assert "insufficient stock" in result.reason
    assert store.state is before


def test_install_part_requires_positive_quantity(store, building, part):
    assert store.dispatch(_install(building, part, quantity=0)).rejected


def test_install_part_requires_existing_part(store, building, part):
    missing = part.model_copy(update={"id": "missing"})
    assert store.dispatch(_install(building, missing)).rejected


def test_install_manual_part_leaves_stock_alone(store, building, part):
    store.dispatch_or_raise(InstallManualPart(payload=InstallManualPartPayload(
        building_id=building.id,
        part_name="Custom bracket",
        quantity=1,
        unit_price=750,
        total_price=750,
        install_date="2024-03-11",
    )))

    assert store.state.find_building(building.id).debt == 750
    assert store.state.find_part(part.id).quantity == 5
    assert store.state.manual_part_installations[-1].part_name == "Custom bracket"
    assert store.state.debt_records[-1].new_debt == 750


def test_mark_part_as_paid_does_not_touch_debt(store, building, part):
    store.dispatch_or_raise(_install(building, part))
    installation = store.state.part_installations[-1]

    store.dispatch_or_raise(MarkPartAsPaid(payload=MarkPartAsPaidPayload(installation_id=installation.id)))

    paid = store.state.part_installations[-1]
    assert paid.is_paid is True
    assert paid.payment_date == "2024-03-15T10:30:00+00:00"
    assert store.state.find_building(building.id).debt == 200


def test_mark_unknown_installation_as_paid_is_rejected(store):
    result = store.dispatch(MarkPartAsPaid(payload=MarkPartAsPaidPayload(installation_id="x", is_manual=True)))
    assert result.rejected


def test_update_and_delete_part(store, part):
    store.dispatch_or_raise(UpdatePart(payload=part.model_copy(update={"price": 120})))
    assert store.state.find_part(part.id).price == 120

    store.dispatch_or_raise(DeletePart(payload=part.id))
    assert store.state.parts == []
    assert store.state.updates[0].details == "Part Door sensor was removed from stock."
