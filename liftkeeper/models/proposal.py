from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import Field

from liftkeeper.models.base import DomainModel, Record, new_id


class ProposalType(str, Enum):
    INSTALLATION = "installation"
    MAINTENANCE = "maintenance"
    REVISION = "revision"


class ProposalStatus(str, Enum):
    DRAFT = "draft"
    SENT = "sent"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class FieldType(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    TEXTAREA = "textarea"


class ProposalField(DomainModel):
    id: str = Field(default_factory=new_id)
    name: str
    label: str
    type: FieldType = FieldType.TEXT
    required: bool = False
    placeholder: Optional[str] = None


class ProposalItem(DomainModel):
    id: str = Field(default_factory=new_id)
    description: str
    quantity: float = 1
    unit_price: float = 0
    total_price: float = 0


class ProposalTemplateCreate(DomainModel):
    type: ProposalType
    name: str
    content: str = ""
    fields: List[ProposalField] = []
    file_attachment: Optional[str] = None
    document_file: Optional[str] = None
    fillable_fields: List[ProposalField] = []


class ProposalTemplate(Record, ProposalTemplateCreate):
    pass


class ProposalCreate(DomainModel):
    type: ProposalType
    template_id: str = ""
    building_name: str = ""
    building_id: Optional[str] = None
    title: str
    description: str = ""
    field_values: Dict[str, Any] = {}
    template_field_values: Dict[str, Any] = {}
    items: List[ProposalItem] = []
    total_amount: float = 0
    status: ProposalStatus = ProposalStatus.DRAFT
    pdf_attachment: Optional[str] = None
    generated_document: Optional[str] = None


class Proposal(Record, ProposalCreate):
    created_date: str
    created_by: str
