from typing import List, Sequence, TypeVar

from liftkeeper.models.base import Record
from liftkeeper.models.state import AppState
from liftkeeper.models.user import Update
from liftkeeper.store.context import TransitionContext

R = TypeVar("R", bound=Record)


def actor(state: AppState, ctx: TransitionContext) -> str:
    """Name of whoever is acting, as it appears in audit entries."""
    if state.current_user is not None:
        return state.current_user.name
    return ctx.unknown_user


def log_update(
    state: AppState,
    ctx: TransitionContext,
    action: str,
    details: str,
    user: str | None = None,
) -> List[Update]:
    """Prepend one audit entry, keeping only the newest `ctx.updates_limit`."""
    entry = Update(
        id=ctx.new_id(),
        action=action,
        user=user if user is not None else actor(state, ctx),
        timestamp=ctx.timestamp(),
        details=details,
    )
    return [entry, *state.updates][:ctx.updates_limit]


def push_notification(state: AppState, ctx: TransitionContext, message: str) -> dict:
    return {
        "notifications": [message, *state.notifications][:ctx.notifications_limit],
        "unread_notifications": state.unread_notifications + 1,
    }


def replace_by_id(items: Sequence[R], item: R) -> List[R]:
    return [item if existing.id == item.id else existing for existing in items]


def remove_by_id(items: Sequence[R], item_id: str) -> List[R]:
    return [existing for existing in items if existing.id != item_id]


def find_by_id(items: Sequence[R], item_id: str) -> R | None:
    return next((existing for existing in items if existing.id == item_id), None)
