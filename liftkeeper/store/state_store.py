import logging
from typing import Callable, List, Optional, Union

from liftkeeper.core.errors import CommandRejected
from liftkeeper.models.ledger import DebtRecord
from liftkeeper.models.part import ManualPartInstallation, PartInstallation
from liftkeeper.models.state import AppState, initial_state
from liftkeeper.store.commands import Command
from liftkeeper.store.context import TransitionContext
from liftkeeper.store.reducer import apply_command
from liftkeeper.store.result import TransitionResult

logger = logging.getLogger(__name__)

Listener = Callable[[AppState], None]


class StateStore:
    """
    Holds the current AppState and applies commands to it one at a time.

    Listeners are called with the new state after every applied command;
    rejected commands leave the state and listeners untouched.
    """

    def __init__(self, state: Optional[AppState] = None, ctx: Optional[TransitionContext] = None):
        self._state = state if state is not None else initial_state()
        self._ctx = ctx or TransitionContext()
        self._listeners: List[Listener] = []

    @property
    def state(self) -> AppState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def replace_state(self, state: AppState) -> None:
        """Swap in a loaded snapshot, keeping the current session fields."""
        self._state = state.model_copy(update={
            "current_user": self._state.current_user,
            "sidebar_open": self._state.sidebar_open,
        })

    def dispatch(self, command: Command) -> TransitionResult:
        result = apply_command(self._state, command, self._ctx)
        if result.applied:
            self._state = result.state
            for listener in list(self._listeners):
                listener(self._state)
        return result

    def dispatch_or_raise(self, command: Command) -> AppState:
        result = self.dispatch(command)
        if result.rejected:
            raise CommandRejected(command.type, result.reason)
        return result.state

    # ===== QUERIES =====

    def latest_receipt_html(self, building_id: str) -> Optional[str]:
        receipts = [r for r in self._state.archived_receipts if r.building_id == building_id]
        if not receipts:
            return None
        return max(receipts, key=lambda r: r.created_date).html_content

    def unpaid_installations(
        self, building_id: str
    ) -> List[Union[PartInstallation, ManualPartInstallation]]:
        return [
            item
            for item in [*self._state.part_installations, *self._state.manual_part_installations]
            if item.building_id == building_id and not item.is_paid
        ]

    def debt_history(self, building_id: str) -> List[DebtRecord]:
        """Debt records of a building, oldest first."""
        return [r for r in self._state.debt_records if r.building_id == building_id]
