import uuid

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def new_id() -> str:
    return str(uuid.uuid4())


class DomainModel(BaseModel):
    """Immutable value with camelCase field names on the wire."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        from_attributes=True,
    )


class Record(DomainModel):
    """Domain entity keyed by an opaque id, replaced wholesale on update."""

    id: str = Field(default_factory=new_id)
