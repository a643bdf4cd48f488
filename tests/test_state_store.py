import pytest

from liftkeeper.core.errors import CommandRejected
from liftkeeper.models.building import BuildingCreate
from liftkeeper.models.fault import FaultReportCreate, FaultReportStatus
from liftkeeper.models.user import User, UserCreate
from liftkeeper.store.commands import (
    COMMAND_TYPES,
    AddBuilding,
    AddFaultReport,
    AddNotification,
    AddUser,
    ClearNotifications,
    Command,
    DeleteUser,
    InstallPart,
    InstallPartPayload,
    MarkAsRepaired,
    MarkPartAsPaid,
    MarkPartAsPaidPayload,
    ResolveFaultReport,
    SetUser,
    ToggleMaintenance,
    ToggleMaintenancePayload,
    ToggleSidebar,
    UpdateUser,
    parse_command,
)
from liftkeeper.store.reducer import TRANSITIONS, apply_command


def test_every_command_type_has_a_transition():
    assert set(COMMAND_TYPES) == set(TRANSITIONS)


def test_unknown_command_leaves_state_untouched(state, ctx):
    result = apply_command(state, Command(type="LAUNCH_ROCKET"), ctx)

    assert result.rejected
    assert result.state is state


def test_parse_command_from_wire_form():
    command = parse_command({"type": "ADD_BUILDING", "payload": {"name": "Lale", "maintenanceFee": 350}})

    assert isinstance(command, AddBuilding)
    assert command.payload.maintenance_fee == 350
    assert parse_command({"type": "NOPE"}) is None


def test_updates_log_is_capped_at_fifty(store):
    for i in range(60):
        store.dispatch_or_raise(AddBuilding(payload=BuildingCreate(name=f"Building {i}")))

    assert len(store.state.updates) == 50
    assert store.state.updates[0].details == "Building Building 59 was added to the system."
    assert len(store.state.buildings) == 60


def test_notifications_are_capped_at_ten(store):
    for i in range(12):
        store.dispatch_or_raise(AddNotification(payload=f"message {i}"))

    assert len(store.state.notifications) == 10
    assert store.state.notifications[0] == "message 11"
    assert store.state.unread_notifications == 12

    store.dispatch_or_raise(ClearNotifications())
    assert store.state.notifications == []
    assert store.state.unread_notifications == 0


def test_set_user_twice_reuses_the_same_user(store):
    store.dispatch_or_raise(SetUser(payload="Mehmet"))
    first = store.state.current_user
    store.dispatch_or_raise(SetUser(payload="Mehmet"))

    assert store.state.current_user.id == first.id
    assert [u.name for u in store.state.users].count("Mehmet") == 1


def test_set_user_matches_seeded_user(store):
    store.dispatch_or_raise(SetUser(payload="Admin User"))

    assert store.state.current_user == User(id="1", name="Admin User")
    assert len(store.state.users) == 3


def test_acting_user_is_recorded_in_updates(store):
    store.dispatch_or_raise(SetUser(payload="Technician 2"))
    store.dispatch_or_raise(AddBuilding(payload=BuildingCreate(name="Papatya")))

    assert store.state.updates[0].user == "Technician 2"


def test_update_and_delete_current_user(store):
    store.dispatch_or_raise(AddUser(payload=UserCreate(name="Zeynep")))
    zeynep = store.state.users[-1]
    store.dispatch_or_raise(SetUser(payload="Zeynep"))

    store.dispatch_or_raise(UpdateUser(payload=zeynep.model_copy(update={"name": "Zeynep K."})))
    assert store.state.current_user.name == "Zeynep K."

    store.dispatch_or_raise(DeleteUser(payload=zeynep.id))
    assert store.state.current_user is None
    assert zeynep.id not in [u.id for u in store.state.users]


def test_fault_report_resolution_is_one_way(store, building):
    store.dispatch_or_raise(AddFaultReport(payload=FaultReportCreate(
        building_id=building.id,
        reporter_name="Elif",
        reporter_surname="Demir",
        apartment_no="7",
        description="Elevator stops between floors",
    )))
    report = store.state.fault_reports[-1]
    assert report.status == FaultReportStatus.PENDING
    assert store.state.updates[0].user == "System"
    assert store.state.unread_notifications == 1
    # A citizen report does not flag the building
    assert store.state.find_building(building.id).is_defective is False

    store.dispatch_or_raise(ResolveFaultReport(payload=report.id))
    assert store.state.fault_reports[-1].status == FaultReportStatus.RESOLVED

    assert store.dispatch(ResolveFaultReport(payload=report.id)).rejected
    assert store.dispatch(ResolveFaultReport(payload="unknown")).rejected


def test_dispatch_or_raise_raises_on_rejection(store):
    with pytest.raises(CommandRejected) as excinfo:
        store.dispatch_or_raise(MarkAsRepaired(payload="missing"))

    assert excinfo.value.command_type == "MARK_AS_REPAIRED"


def test_listeners_only_see_applied_commands(store):
    seen = []
    unsubscribe = store.subscribe(seen.append)

    store.dispatch(ToggleSidebar())
    store.dispatch(MarkAsRepaired(payload="missing"))
    unsubscribe()
    store.dispatch(ToggleSidebar())

    assert len(seen) == 1
    assert seen[0].sidebar_open is False


def test_persisted_state_excludes_session_fields(store):
    store.dispatch_or_raise(SetUser(payload="Admin User"))
    store.dispatch_or_raise(AddNotification(payload="hello"))

    persisted = store.state.persisted()

    for key in ("currentUser", "sidebarOpen", "notifications", "unreadNotifications",
                "showReceiptModal", "receiptModalHtml"):
        assert key not in persisted
    assert persisted["users"][0] == {"id": "1", "name": "Admin User"}


def test_building_queries(store, building, part):
    for _ in range(2):
        store.dispatch_or_raise(InstallPart(payload=InstallPartPayload(
            building_id=building.id, part_id=part.id, quantity=1, install_date="2024-03-12",
        )))
    first = store.state.part_installations[0]
    store.dispatch_or_raise(MarkPartAsPaid(payload=MarkPartAsPaidPayload(installation_id=first.id)))
    assert store.latest_receipt_html(building.id) is None

    store.dispatch_or_raise(ToggleMaintenance(payload=ToggleMaintenancePayload(
        building_id=building.id, show_receipt=True,
    )))

    assert [i.id for i in store.unpaid_installations(building.id)] == [store.state.part_installations[1].id]
    assert [r.new_debt for r in store.debt_history(building.id)] == [100, 200, 1200]
    assert store.latest_receipt_html(building.id) == store.state.archived_receipts[-1].html_content
    assert store.unpaid_installations("missing") == []
