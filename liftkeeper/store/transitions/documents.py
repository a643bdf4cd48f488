"""
Transitions for the configuration and document collections.

These have no cross-entity invariants: create with a generated id,
replace by id, filter out by id. Printers keep a single default.
"""

from typing import List

from liftkeeper.models.document import Printer, SMSTemplate
from liftkeeper.models.proposal import Proposal, ProposalTemplate
from liftkeeper.models.state import AppState
from liftkeeper.store.commands import (
    AddPrinter,
    AddProposal,
    AddProposalTemplate,
    AddQRCodeData,
    AddSMSTemplate,
    DeletePrinter,
    DeleteProposal,
    DeleteProposalTemplate,
    DeleteSMSTemplate,
    SendBulkSMS,
    SendWhatsApp,
    UpdateAutoSaveData,
    UpdatePrinter,
    UpdateProposal,
    UpdateProposalTemplate,
    UpdateSMSTemplate,
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


# ===== PRINTERS =====

def _single_default(printers: List[Printer], saved: Printer) -> List[Printer]:
    if not saved.is_default:
        return printers
    return [
        p if p.id == saved.id or not p.is_default else p.model_copy(update={"is_default": False})
        for p in printers
    ]


def add_printer(state: AppState, command: AddPrinter, ctx: TransitionContext) -> TransitionResult:
    printer = Printer(id=ctx.new_id(), **dict(command.payload))
    return applied(state.model_copy(update={
        "printers": _single_default([*state.printers, printer], printer),
        "updates": log_update(state, ctx, "Printer Added", f"Printer {printer.name} was added."),
    }))


def update_printer(state: AppState, command: UpdatePrinter, ctx: TransitionContext) -> TransitionResult:
    printer = command.payload
    return applied(state.model_copy(update={
        "printers": _single_default(replace_by_id(state.printers, printer), printer),
        "updates": log_update(state, ctx, "Printer Updated", f"Printer {printer.name} was updated."),
    }))


def delete_printer(state: AppState, command: DeletePrinter, ctx: TransitionContext) -> TransitionResult:
    printer = find_by_id(state.printers, command.payload)
    name = printer.name if printer else "unknown"
    return applied(state.model_copy(update={
        "printers": remove_by_id(state.printers, command.payload),
        "updates": log_update(state, ctx, "Printer Deleted", f"Printer {name} was removed."),
    }))


# ===== SMS =====

def add_sms_template(state: AppState, command: AddSMSTemplate, ctx: TransitionContext) -> TransitionResult:
    template = SMSTemplate(id=ctx.new_id(), **dict(command.payload))
    return applied(state.model_copy(update={
        "sms_templates": [*state.sms_templates, template],
        "updates": log_update(state, ctx, "SMS Template Added", f"SMS template {template.name} was added."),
    }))


def update_sms_template(state: AppState, command: UpdateSMSTemplate, ctx: TransitionContext) -> TransitionResult:
    return applied(state.model_copy(update={
        "sms_templates": replace_by_id(state.sms_templates, command.payload),
    }))


def delete_sms_template(state: AppState, command: DeleteSMSTemplate, ctx: TransitionContext) -> TransitionResult:
    return applied(state.model_copy(update={
        "sms_templates": remove_by_id(state.sms_templates, command.payload),
    }))


def _dispatch_message(state: AppState, ctx: TransitionContext, payload, channel: str) -> TransitionResult:
    # Delivery happens outside the store; only the audit trail is kept.
    template = find_by_id(state.sms_templates, payload.template_id)
    if template is None:
        return rejected(state, f"template {payload.template_id} not found")
    return applied(state.model_copy(update={
        "updates": log_update(
            state, ctx, f"{channel} Sent",
            f"{channel} message '{template.name}' sent to {len(payload.building_ids)} building(s).",
        ),
    }))


def send_bulk_sms(state: AppState, command: SendBulkSMS, ctx: TransitionContext) -> TransitionResult:
    return _dispatch_message(state, ctx, command.payload, "SMS")


def send_whatsapp(state: AppState, command: SendWhatsApp, ctx: TransitionContext) -> TransitionResult:
    return _dispatch_message(state, ctx, command.payload, "WhatsApp")


# ===== PROPOSALS =====

def add_proposal(state: AppState, command: AddProposal, ctx: TransitionContext) -> TransitionResult:
    proposal = Proposal(
        id=ctx.new_id(),
        created_date=ctx.timestamp(),
        created_by=actor(state, ctx),
        **dict(command.payload),
    )
    return applied(state.model_copy(update={
        "proposals": [*state.proposals, proposal],
        "updates": log_update(state, ctx, "Proposal Created", f"Proposal {proposal.title} was created."),
    }))


def update_proposal(state: AppState, command: UpdateProposal, ctx: TransitionContext) -> TransitionResult:
    proposal = command.payload
    return applied(state.model_copy(update={
        "proposals": replace_by_id(state.proposals, proposal),
        "updates": log_update(state, ctx, "Proposal Updated", f"Proposal {proposal.title} was updated."),
    }))


def delete_proposal(state: AppState, command: DeleteProposal, ctx: TransitionContext) -> TransitionResult:
    proposal = find_by_id(state.proposals, command.payload)
    title = proposal.title if proposal else "unknown"
    return applied(state.model_copy(update={
        "proposals": remove_by_id(state.proposals, command.payload),
        "updates": log_update(state, ctx, "Proposal Deleted", f"Proposal {title} was removed."),
    }))


def add_proposal_template(state: AppState, command: AddProposalTemplate, ctx: TransitionContext) -> TransitionResult:
    template = ProposalTemplate(id=ctx.new_id(), **dict(command.payload))
    return applied(state.model_copy(update={
        "proposal_templates": [*state.proposal_templates, template],
    }))


def update_proposal_template(
    state: AppState, command: UpdateProposalTemplate, ctx: TransitionContext
) -> TransitionResult:
    return applied(state.model_copy(update={
        "proposal_templates": replace_by_id(state.proposal_templates, command.payload),
    }))


def delete_proposal_template(
    state: AppState, command: DeleteProposalTemplate, ctx: TransitionContext
) -> TransitionResult:
    return applied(state.model_copy(update={
        "proposal_templates": remove_by_id(state.proposal_templates, command.payload),
    }))


# ===== QR CODES & DRAFTS =====

def add_qr_code_data(state: AppState, command: AddQRCodeData, ctx: TransitionContext) -> TransitionResult:
    return applied(state.model_copy(update={"qr_codes": [*state.qr_codes, command.payload]}))


def update_auto_save_data(state: AppState, command: UpdateAutoSaveData, ctx: TransitionContext) -> TransitionResult:
    draft = command.payload
    return applied(state.model_copy(update={
        "auto_save_data": [draft, *remove_by_id(state.auto_save_data, draft.id)],
        "last_auto_save": draft.timestamp,
    }))
