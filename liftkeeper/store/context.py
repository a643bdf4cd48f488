from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable

from liftkeeper.core.config import settings
from liftkeeper.models.base import new_id


def _local_now() -> datetime:
    return datetime.now().astimezone()


@dataclass(frozen=True)
class TransitionContext:
    """Clock, id source and limits a transition may consult."""

    now: Callable[[], datetime] = _local_now
    new_id: Callable[[], str] = new_id
    updates_limit: int = field(default_factory=lambda: settings.UPDATES_LIMIT)
    notifications_limit: int = field(default_factory=lambda: settings.NOTIFICATIONS_LIMIT)
    unknown_user: str = field(default_factory=lambda: settings.UNKNOWN_USER_NAME)
    currency_symbol: str = field(default_factory=lambda: settings.CURRENCY_SYMBOL)

    def timestamp(self) -> str:
        return self.now().isoformat()

    def today(self) -> str:
        return self.now().strftime("%Y-%m-%d")

    def clock_time(self) -> str:
        return self.now().strftime("%H:%M")
