from dataclasses import dataclass
from typing import Optional

from liftkeeper.models.state import AppState


@dataclass(frozen=True)
class TransitionResult:
    """
    Outcome of applying one command.

    Either the command fully applied (`applied=True`, new state) or it was
    rejected (`applied=False`, `reason` set, the very same input state).
    """
    state: AppState
    applied: bool
    reason: Optional[str] = None

    @property
    def rejected(self) -> bool:
        return not self.applied


def applied(state: AppState) -> TransitionResult:
    return TransitionResult(state=state, applied=True)


def rejected(state: AppState, reason: str) -> TransitionResult:
    return TransitionResult(state=state, applied=False, reason=reason)
