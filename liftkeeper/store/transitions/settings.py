import logging

from pydantic import ValidationError

from liftkeeper.models.app_settings import AppSettings, default_settings
from liftkeeper.models.fault import NotificationData
from liftkeeper.models.state import AppState
from liftkeeper.models.user import Update
from liftkeeper.store.commands import (
    AddNotification,
    AddSystemNotification,
    AddUpdate,
    ClearNotifications,
    ClosePrinterSelection,
    CloseReceiptModal,
    MarkNotificationRead,
    RemoveSystemNotification,
    ResetSettings,
    ShowPrinterSelection,
    ShowReceiptModal,
    ToggleSidebar,
    UpdateSettings,
)
from liftkeeper.store.context import TransitionContext
from liftkeeper.store.result import TransitionResult, applied, rejected
from liftkeeper.store.transitions.common import log_update, push_notification, remove_by_id

logger = logging.getLogger(__name__)


def _wire_key(key: str) -> str:
    field = AppSettings.model_fields.get(key)
    return field.alias if field is not None and field.alias else key


def update_settings(state: AppState, command: UpdateSettings, ctx: TransitionContext) -> TransitionResult:
    """Shallow merge; keys may be given as field names or camelCase aliases."""
    merged = state.settings.model_dump(by_alias=True)
    merged.update({_wire_key(key): value for key, value in command.payload.items()})
    try:
        settings = AppSettings.model_validate(merged)
    except ValidationError as exc:
        logger.warning("UPDATE_SETTINGS rejected: %s", exc)
        return rejected(state, f"invalid settings: {exc.error_count()} error(s)")
    return applied(state.model_copy(update={"settings": settings}))


def reset_settings(state: AppState, command: ResetSettings, ctx: TransitionContext) -> TransitionResult:
    return applied(state.model_copy(update={
        "settings": default_settings(),
        "updates": log_update(state, ctx, "Settings Reset", "Application settings were restored to defaults."),
    }))


def toggle_sidebar(state: AppState, command: ToggleSidebar, ctx: TransitionContext) -> TransitionResult:
    return applied(state.model_copy(update={"sidebar_open": not state.sidebar_open}))


def add_notification(state: AppState, command: AddNotification, ctx: TransitionContext) -> TransitionResult:
    return applied(state.model_copy(update=push_notification(state, ctx, command.payload)))


def clear_notifications(state: AppState, command: ClearNotifications, ctx: TransitionContext) -> TransitionResult:
    return applied(state.model_copy(update={"notifications": [], "unread_notifications": 0}))


def add_system_notification(
    state: AppState, command: AddSystemNotification, ctx: TransitionContext
) -> TransitionResult:
    notification = NotificationData(id=ctx.new_id(), timestamp=ctx.timestamp(), **dict(command.payload))
    return applied(state.model_copy(update={
        "system_notifications": [notification, *state.system_notifications],
    }))


def mark_notification_read(
    state: AppState, command: MarkNotificationRead, ctx: TransitionContext
) -> TransitionResult:
    notifications = [
        n.model_copy(update={"is_read": True}) if n.id == command.payload else n
        for n in state.system_notifications
    ]
    return applied(state.model_copy(update={"system_notifications": notifications}))


def remove_system_notification(
    state: AppState, command: RemoveSystemNotification, ctx: TransitionContext
) -> TransitionResult:
    return applied(state.model_copy(update={
        "system_notifications": remove_by_id(state.system_notifications, command.payload),
    }))


def add_update(state: AppState, command: AddUpdate, ctx: TransitionContext) -> TransitionResult:
    entry = Update(id=ctx.new_id(), **dict(command.payload))
    return applied(state.model_copy(update={
        "updates": [entry, *state.updates][:ctx.updates_limit],
    }))


def show_receipt_modal(state: AppState, command: ShowReceiptModal, ctx: TransitionContext) -> TransitionResult:
    return applied(state.model_copy(update={
        "show_receipt_modal": True,
        "receipt_modal_html": command.payload,
    }))


def close_receipt_modal(state: AppState, command: CloseReceiptModal, ctx: TransitionContext) -> TransitionResult:
    return applied(state.model_copy(update={
        "show_receipt_modal": False,
        "receipt_modal_html": None,
    }))


def show_printer_selection(
    state: AppState, command: ShowPrinterSelection, ctx: TransitionContext
) -> TransitionResult:
    return applied(state.model_copy(update={
        "show_printer_selection_modal": True,
        "printer_selection_content": command.payload,
    }))


def close_printer_selection(
    state: AppState, command: ClosePrinterSelection, ctx: TransitionContext
) -> TransitionResult:
    return applied(state.model_copy(update={
        "show_printer_selection_modal": False,
        "printer_selection_content": None,
    }))
