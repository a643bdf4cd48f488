from liftkeeper.models.base import DomainModel, Record


class UserCreate(DomainModel):
    name: str


class User(Record, UserCreate):
    pass


class UpdateCreate(DomainModel):
    action: str
    user: str
    timestamp: str
    details: str = ""


class Update(Record, UpdateCreate):
    """Human-readable audit log entry. Never consulted for any decision."""
