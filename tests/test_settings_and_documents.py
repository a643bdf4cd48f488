from liftkeeper.models.document import AutoSaveData, PrinterCreate, SMSTemplateCreate
from liftkeeper.models.fault import NotificationCreate
from liftkeeper.models.proposal import ProposalCreate, ProposalType
from liftkeeper.models.user import UpdateCreate
from liftkeeper.store.commands import (
    AddPrinter,
    AddProposal,
    AddSMSTemplate,
    AddSystemNotification,
    AddUpdate,
    CloseReceiptModal,
    MarkNotificationRead,
    MessageDispatchPayload,
    RemoveSystemNotification,
    ResetSettings,
    SendBulkSMS,
    SendWhatsApp,
    SetUser,
    ShowReceiptModal,
    UpdateAutoSaveData,
    UpdatePrinter,
    UpdateSettings,
)


def test_update_settings_merges_camel_and_snake_keys(store):
    store.dispatch_or_raise(UpdateSettings(payload={"companyName": "Yukselis Asansor", "auto_save_interval": 30}))

    settings = store.state.settings
    assert settings.company_name == "Yukselis Asansor"
    assert settings.auto_save_interval == 30
    # Untouched keys survive the merge
    assert settings.company_phone == "0555 123 45 67"


def test_update_settings_with_bad_value_is_rejected(store):
    before = store.state

    result = store.dispatch(UpdateSettings(payload={"autoSaveInterval": "often"}))

    assert result.rejected
    assert store.state is before


def test_reset_settings_restores_defaults(store):
    store.dispatch_or_raise(UpdateSettings(payload={"companyName": "Other"}))

    store.dispatch_or_raise(ResetSettings())

    assert store.state.settings.company_name == "TKNLIFT"


def test_default_printer_is_exclusive(store):
    store.dispatch_or_raise(AddPrinter(payload=PrinterCreate(name="Office", is_default=True)))
    store.dispatch_or_raise(AddPrinter(payload=PrinterCreate(name="Van", is_default=True)))

    defaults = [p.name for p in store.state.printers if p.is_default]
    assert defaults == ["Van"]

    office = store.state.printers[0]
    store.dispatch_or_raise(UpdatePrinter(payload=office.model_copy(update={"is_default": True})))
    defaults = [p.name for p in store.state.printers if p.is_default]
    assert defaults == ["Office"]


def test_message_dispatch_requires_known_template(store, building):
    store.dispatch_or_raise(AddSMSTemplate(payload=SMSTemplateCreate(name="Reminder", content="Please pay")))
    template = store.state.sms_templates[-1]

    store.dispatch_or_raise(SendBulkSMS(payload=MessageDispatchPayload(
        template_id=template.id, building_ids=[building.id],
    )))
    assert store.state.updates[0].details == "SMS message 'Reminder' sent to 1 building(s)."

    result = store.dispatch(SendWhatsApp(payload=MessageDispatchPayload(template_id="missing")))
    assert result.rejected


def test_add_proposal_stamps_author_and_date(store):
    store.dispatch_or_raise(SetUser(payload="Admin User"))

    store.dispatch_or_raise(AddProposal(payload=ProposalCreate(
        type=ProposalType.REVISION, title="Cabin renewal", total_amount=45000,
    )))

    proposal = store.state.proposals[-1]
    assert proposal.created_by == "Admin User"
    assert proposal.created_date == "2024-03-15T10:30:00+00:00"


def test_auto_save_keeps_newest_draft_first(store):
    first = AutoSaveData(id="draft-1", form_type="building", form_data={"name": "A"},
                         timestamp="2024-03-15T10:00:00", user_id="1")
    second = AutoSaveData(id="draft-2", form_type="part", timestamp="2024-03-15T10:05:00", user_id="1")

    store.dispatch_or_raise(UpdateAutoSaveData(payload=first))
    store.dispatch_or_raise(UpdateAutoSaveData(payload=second))
    store.dispatch_or_raise(UpdateAutoSaveData(payload=first.model_copy(update={"timestamp": "2024-03-15T10:10:00"})))

    assert [d.id for d in store.state.auto_save_data] == ["draft-1", "draft-2"]
    assert store.state.last_auto_save == "2024-03-15T10:10:00"


def test_system_notifications_lifecycle(store):
    store.dispatch_or_raise(AddSystemNotification(payload=NotificationCreate(title="Backup", message="Saved")))
    notification = store.state.system_notifications[0]
    assert notification.is_read is False

    store.dispatch_or_raise(MarkNotificationRead(payload=notification.id))
    assert store.state.system_notifications[0].is_read is True

    store.dispatch_or_raise(RemoveSystemNotification(payload=notification.id))
    assert store.state.system_notifications == []


def test_add_update_is_prepended(store):
    store.dispatch_or_raise(AddUpdate(payload=UpdateCreate(
        action="Manual Note", user="Admin User", timestamp="2024-03-15T09:00:00", details="Checked stock",
    )))

    assert store.state.updates[0].action == "Manual Note"


def test_receipt_modal_round_trip(store):
    store.dispatch_or_raise(ShowReceiptModal(payload="<p>receipt</p>"))
    assert store.state.show_receipt_modal is True

    store.dispatch_or_raise(CloseReceiptModal())
    assert store.state.show_receipt_modal is False
    assert store.state.receipt_modal_html is None
