from liftkeeper.models.state import AppState
from liftkeeper.models.user import User
from liftkeeper.store.commands import AddUser, DeleteUser, SetUser, UpdateUser
from liftkeeper.store.context import TransitionContext
from liftkeeper.store.result import TransitionResult, applied
from liftkeeper.store.transitions.common import find_by_id, log_update, remove_by_id, replace_by_id


def set_user(state: AppState, command: SetUser, ctx: TransitionContext) -> TransitionResult:
    """Switch the acting user by display name, registering the name on first use."""
    name = command.payload
    user = next((u for u in state.users if u.name == name), None)
    users = state.users
    if user is None:
        user = User(id=ctx.new_id(), name=name)
        users = [*state.users, user]
    return applied(state.model_copy(update={"users": users, "current_user": user}))


def add_user(state: AppState, command: AddUser, ctx: TransitionContext) -> TransitionResult:
    user = User(id=ctx.new_id(), name=command.payload.name)
    return applied(state.model_copy(update={
        "users": [*state.users, user],
        "updates": log_update(state, ctx, "User Added", f"User {user.name} was added."),
    }))


def update_user(state: AppState, command: UpdateUser, ctx: TransitionContext) -> TransitionResult:
    user = command.payload
    current = state.current_user
    if current is not None and current.id == user.id:
        current = user
    return applied(state.model_copy(update={
        "users": replace_by_id(state.users, user),
        "current_user": current,
        "updates": log_update(state, ctx, "User Updated", f"User {user.name} was updated."),
    }))


def delete_user(state: AppState, command: DeleteUser, ctx: TransitionContext) -> TransitionResult:
    user = find_by_id(state.users, command.payload)
    name = user.name if user else "unknown"
    current = state.current_user
    if current is not None and current.id == command.payload:
        current = None
    return applied(state.model_copy(update={
        "users": remove_by_id(state.users, command.payload),
        "current_user": current,
        "updates": log_update(state, ctx, "User Deleted", f"User {name} was removed."),
    }))
