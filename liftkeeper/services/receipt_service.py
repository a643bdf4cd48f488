"""
ReceiptService - HTML documents built by `{{TOKEN}}` substitution.

Used by TOGGLE_MAINTENANCE (billed maintenance) to freeze a receipt, and by
the API for fault report forms and proposal previews. Nothing here touches
the store; callers pass in the records to print.
"""

from datetime import datetime
from html import escape
from pathlib import Path
from typing import Dict, List, Optional

from liftkeeper.core.config import settings as app_config
from liftkeeper.models.app_settings import AppSettings
from liftkeeper.models.building import Building
from liftkeeper.models.part import InstalledPartLine
from liftkeeper.models.proposal import Proposal, ProposalTemplate
from liftkeeper.models.state import AppState
from liftkeeper.utils.formatting import format_money
from liftkeeper.utils.templating import fill_template

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
NOT_SPECIFIED = "Not specified"


def _load_template(name: str) -> str:
    return (TEMPLATE_DIR / name).read_text(encoding="utf-8")


def _company_tokens(settings: AppSettings) -> Dict[str, str]:
    logo = (
        f'<img src="{escape(settings.logo)}" alt="Logo" class="logo">'
        if settings.logo else ""
    )
    return {
        "LOGO": logo,
        "COMPANY_NAME": escape(settings.company_name),
        "COMPANY_SLOGAN": escape(settings.company_slogan or ""),
        "COMPANY_ADDRESS": escape(settings.company_address.formatted()),
        "COMPANY_PHONE": escape(settings.company_phone),
    }


def _building_tokens(building: Building) -> Dict[str, str]:
    return {
        "BUILDING_NAME": escape(building.name),
        "BUILDING_ADDRESS": escape(building.address.formatted() or NOT_SPECIFIED),
        "BUILDING_RESPONSIBLE": escape(building.building_responsible or NOT_SPECIFIED),
        "CONTACT_PHONE": escape(building.contact_info),
        "ELEVATOR_COUNT": str(building.elevator_count),
    }


class ReceiptService:
    @staticmethod
    def collect_parts(
        state: AppState,
        building_id: str,
        maintenance_id: Optional[str] = None,
    ) -> List[InstalledPartLine]:
        """
        Parts to print on a maintenance receipt.

        With `maintenance_id`, the installations linked to that visit.
        Without it, the building's unpaid installations not yet linked to any visit.
        """
        def wanted(installation) -> bool:
            if installation.building_id != building_id:
                return False
            if maintenance_id is not None:
                return installation.related_maintenance_id == maintenance_id
            return not installation.is_paid and installation.related_maintenance_id is None

        lines: List[InstalledPartLine] = []
        for installation in state.part_installations:
            if not wanted(installation):
                continue
            lines.append(InstalledPartLine(
                name=installation.part_name,
                quantity=installation.quantity,
                unit_price=installation.unit_price,
                total_price=installation.unit_price * installation.quantity,
            ))
        for installation in state.manual_part_installations:
            if not wanted(installation):
                continue
            lines.append(InstalledPartLine(
                name=installation.part_name,
                quantity=installation.quantity,
                unit_price=installation.unit_price,
                total_price=installation.total_price,
            ))
        return lines

    @staticmethod
    def render_maintenance_receipt(
        building: Building,
        settings: AppSettings,
        parts: List[InstalledPartLine],
        technician: str,
        previous_debt: float,
        issued_at: datetime,
        currency_symbol: str = app_config.CURRENCY_SYMBOL,
    ) -> str:
        """
        Render the receipt of one billed maintenance visit.

        `building` is the building after billing, so `building.debt` is the
        new total; `previous_debt` is what it owed before this visit.
        """
        def money(value: float) -> str:
            return escape(format_money(value, currency_symbol))

        parts_total = sum(line.total_price for line in parts)

        parts_section = ""
        if parts:
            rows = "".join(
                f"<tr><td>{escape(line.name)}</td><td>{line.quantity}</td>"
                f"<td>{money(line.unit_price)}</td><td>{money(line.total_price)}</td></tr>"
                for line in parts
            )
            parts_section = (
                '<div class="parts-section"><h3>Parts installed since the last maintenance</h3>'
                '<table class="parts-table"><thead><tr><th>Part</th><th>Quantity</th>'
                "<th>Unit price</th><th>Total</th></tr></thead>"
                f"<tbody>{rows}</tbody></table></div>"
            )

        parts_cost_row = ""
        if parts_total > 0:
            parts_cost_row = (
                '<div class="calc-row"><span>Parts (included in previous debt):</span>'
                f"<span>{money(parts_total)}</span></div>"
            )

        note = building.maintenance_receipt_note or settings.default_maintenance_note
        notes_section = (
            f'<div class="notes-section"><h3>Notes</h3><p>{escape(note)}</p></div>'
            if note else ""
        )

        certificates = "".join(
            f'<img src="{escape(cert)}" alt="Certificate" class="certificate" />'
            for cert in settings.certificates
        )
        watermark = f'<div class="watermark">{escape(settings.company_name or "MAINTENANCE RECEIPT")}</div>'

        tokens = {
            **_company_tokens(settings),
            **_building_tokens(building),
            "WATERMARK": watermark,
            "CERTIFICATES_IMAGES": certificates,
            "MAINTENANCE_DATE": escape(building.last_maintenance_date or issued_at.strftime("%Y-%m-%d")),
            "MAINTENANCE_TIME": escape(building.last_maintenance_time or issued_at.strftime("%H:%M")),
            "TECHNICIAN_NAME": escape(technician),
            "MAINTENANCE_FEE_PER_ELEVATOR": money(building.maintenance_fee),
            "THIS_MAINTENANCE_FEE": money(building.total_maintenance_fee),
            "PREVIOUS_DEBT": money(previous_debt),
            "NEW_TOTAL_DEBT": money(building.debt),
            "PARTS_COST_ROW": parts_cost_row,
            "PARTS_SECTION": parts_section,
            "NOTES_SECTION": notes_section,
            "ISSUED_AT": issued_at.strftime("%d.%m.%Y %H:%M"),
        }
        template = settings.receipt_template or _load_template("maintenance_receipt.html")
        return fill_template(template, tokens)

    @staticmethod
    def render_fault_report_form(building: Building, settings: AppSettings) -> str:
        """Printable form posted in the building, pointing residents to the company."""
        return fill_template(
            settings.fault_report_template,
            {**_company_tokens(settings), **_building_tokens(building)},
        )

    @staticmethod
    def render_proposal(
        proposal: Proposal,
        settings: AppSettings,
        template: Optional[ProposalTemplate] = None,
        building: Optional[Building] = None,
    ) -> str:
        """
        Preview of a proposal.

        The body comes from the proposal template (or the settings template of
        the same type); `{{field}}` tokens take the proposal's field values.
        """
        if template is not None and template.content:
            body = template.content
        else:
            body = getattr(settings, f"{proposal.type.value}_proposal_template", "")

        values = {
            key: escape(str(value))
            for key, value in {**proposal.field_values, **proposal.template_field_values}.items()
        }
        tokens = {
            **_company_tokens(settings),
            **(_building_tokens(building) if building else {"BUILDING_NAME": escape(proposal.building_name)}),
            "PROPOSAL_TITLE": escape(proposal.title),
            "PROPOSAL_DESCRIPTION": escape(proposal.description),
            "PROPOSAL_DATE": escape(proposal.created_date),
            "TOTAL_AMOUNT": escape(format_money(proposal.total_amount, app_config.CURRENCY_SYMBOL)),
            **values,
        }
        return fill_template(body, tokens)
