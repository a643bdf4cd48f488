"""Exceptions raised at the edges of the store (never inside a transition)."""


class CommandRejected(Exception):
    """A command was valid in shape but its preconditions did not hold."""

    def __init__(self, command_type: str, reason: str):
        self.command_type = command_type
        self.reason = reason
        super().__init__(f"{command_type} rejected: {reason}")


class SnapshotVersionError(Exception):
    """Persisted snapshot does not match the current schema (other version or drifted content)."""
    pass
