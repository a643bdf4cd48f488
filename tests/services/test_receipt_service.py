from datetime import datetime

from liftkeeper.models.app_settings import default_settings
from liftkeeper.models.building import Address, Building
from liftkeeper.models.part import InstalledPartLine
from liftkeeper.models.proposal import Proposal, ProposalTemplate, ProposalType
from liftkeeper.services.receipt_service import ReceiptService
from liftkeeper.store.commands import InstallPart, InstallPartPayload

ISSUED_AT = datetime(2024, 3, 15, 10, 30)


def _building(**overrides):
    fields = dict(
        id="b-1",
        name="Kule Apartmani",
        maintenance_fee=500,
        elevator_count=2,
        debt=1200,
        contact_info="0555 000 00 00",
        address=Address(mahalle="Moda", sokak="Bahariye", bina_no="4", ilce="Kadikoy", il="Istanbul"),
        last_maintenance_date="2024-03-15",
        last_maintenance_time="10:30",
    )
    fields.update(overrides)
    return Building(**fields)


def test_receipt_contains_amounts_and_building():
    html = ReceiptService.render_maintenance_receipt(
        building=_building(),
        settings=default_settings(),
        parts=[],
        technician="Technician 1",
        previous_debt=200,
        issued_at=ISSUED_AT,
    )

    assert "Kule Apartmani" in html
    assert "1.000 ₺" in html  # this maintenance
    assert "1.200 ₺" in html  # new total
    assert "200 ₺" in html
    assert "Technician 1" in html
    assert "15.03.2024 10:30" in html
    assert "{{" not in html


def test_receipt_omits_empty_sections():
    settings = default_settings().model_copy(update={"default_maintenance_note": None, "logo": None})

    html = ReceiptService.render_maintenance_receipt(
        building=_building(),
        settings=settings,
        parts=[],
        technician="Technician 1",
        previous_debt=0,
        issued_at=ISSUED_AT,
    )

    assert "parts-table" not in html.split("</style>")[1]
    assert "notes-section" not in html.split("</style>")[1]
    assert '<img src' not in html


def test_receipt_lists_parts_and_note():
    parts = [InstalledPartLine(name="Door sensor", quantity=2, unit_price=1500, total_price=3000)]

    html = ReceiptService.render_maintenance_receipt(
        building=_building(maintenance_receipt_note="Rope replaced"),
        settings=default_settings(),
        parts=parts,
        technician="Technician 1",
        previous_debt=0,
        issued_at=ISSUED_AT,
    )

    assert "Door sensor" in html
    assert "1.500 ₺" in html
    assert "3.000 ₺" in html
    assert "Rope replaced" in html


def test_receipt_escapes_user_input():
    html = ReceiptService.render_maintenance_receipt(
        building=_building(name="<script>alert(1)</script>"),
        settings=default_settings(),
        parts=[],
        technician="A & B",
        previous_debt=0,
        issued_at=ISSUED_AT,
    )

    assert "<script>" not in html
    assert "&lt;script&gt;" in html
    assert "A &amp; B" in html


def test_collect_parts_without_record_takes_unpaid_unlinked(store, building, part):
    store.dispatch_or_raise(InstallPart(payload=InstallPartPayload(
        building_id=building.id, part_id=part.id, quantity=2, install_date="2024-03-12",
    )))

    lines = ReceiptService.collect_parts(store.state, building.id)

    assert lines == [InstalledPartLine(name="Door sensor", quantity=2, unit_price=100, total_price=200)]
    assert ReceiptService.collect_parts(store.state, building.id, maintenance_id="other") == []


def test_fault_report_form_fills_company_and_building():
    html = ReceiptService.render_fault_report_form(_building(), default_settings())

    assert "TKNLIFT" in html
    assert "Kule Apartmani" in html
    assert "Moda Bahariye 4, Kadikoy/Istanbul" in html


def test_proposal_preview_uses_template_fields():
    template = ProposalTemplate(
        id="t-1",
        type=ProposalType.INSTALLATION,
        name="Installation",
        content="<h1>{{PROPOSAL_TITLE}}</h1><p>{{floors}} floors for {{BUILDING_NAME}}, {{TOTAL_AMOUNT}}</p>",
    )
    proposal = Proposal(
        id="p-1",
        type=ProposalType.INSTALLATION,
        template_id="t-1",
        building_name="Lale Sitesi",
        title="New elevator",
        field_values={"floors": 8},
        total_amount=250000,
        created_date="2024-03-15T10:30:00",
        created_by="Admin User",
    )

    html = ReceiptService.render_proposal(proposal, default_settings(), template=template)

    assert html == "<h1>New elevator</h1><p>8 floors for Lale Sitesi, 250.000 ₺</p>"
