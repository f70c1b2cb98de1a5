# This project was developed with assistance from AI tools.
"""Requirements checklist response schemas."""

import enum
from datetime import date, datetime
from typing import Any

from db.enums import DeliveredDocumentStatus, EntityType, FieldType, ValidityType
from pydantic import BaseModel, Field


class CompletionStatus(str, enum.Enum):
    COMPLETED = "completed"
    PARTIAL = "partial"
    PENDING = "pending"


class ChecklistItemType(str, enum.Enum):
    DOCUMENT = "document"
    DOCUMENT_WITH_INFO = "document_with_info"
    INFO = "info"


class ValidityStatus(str, enum.Enum):
    VALID = "valid"
    EXPIRING_SOON = "expiring_soon"
    EXPIRED = "expired"
    MISSING_DATE = "missing_date"
    NO_RULE = "no_rule"

    @classmethod
    def passing(cls) -> frozenset["ValidityStatus"]:
        """Verdicts that let a delivered document count as complete."""
        return frozenset({cls.VALID, cls.NO_RULE})


class ValidityCheckResult(BaseModel):
    """Outcome of checking a document's dates against its validity policy."""

    status: ValidityStatus
    message_key: str
    days_value: int | None = None


class DeliveredDocumentSummary(BaseModel):
    id: int
    status: DeliveredDocumentStatus
    file_name: str | None = None
    uploaded_at: datetime | None = None


class ConditionState(BaseModel):
    name: str
    is_fulfilled: bool
    expires_at: date | None = None


class DocumentDetails(BaseModel):
    """Document-specific payload of a checklist item."""

    document_type_id: int
    document_type_name: str
    document_type_code: str | None = None
    workflow_type: str
    validity_days: int | None = None
    validity_type: ValidityType | None = None
    validity_check: ValidityCheckResult | None = None
    delivered_document: DeliveredDocumentSummary | None = None
    conditions: list[ConditionState] = []


class InfoField(BaseModel):
    """One entity field with its resolved value."""

    # Stored configuration value; may name an entity type this API does not know
    entity_type: str
    field_path: str
    label: str
    label_en: str | None = None
    field_type: FieldType = FieldType.TEXT
    current_value: Any = None
    is_filled: bool = False


class LinkedDocumentType(BaseModel):
    document_type_id: int
    name: str


class ChecklistItem(BaseModel):
    """A single requirement with its computed completion status."""

    type: ChecklistItemType
    label: str
    sort_order: int
    responsible_party: str
    is_required: bool
    completion_status: CompletionStatus
    document: DocumentDetails | None = None
    info_fields: list[InfoField] | None = None
    linked_document_type: LinkedDocumentType | None = None


class ChecklistSummary(BaseModel):
    total: int = Field(default=0, ge=0)
    completed: int = Field(default=0, ge=0)
    partial: int = Field(default=0, ge=0)
    pending: int = Field(default=0, ge=0)


class ChecklistResponse(BaseModel):
    """Ordered checklist for an individual process plus status counts."""

    items: list[ChecklistItem]
    summary: ChecklistSummary


class FieldWithValue(InfoField):
    """Field mapping of a document type resolved against a case."""

    is_required: bool = False


class LinkedDocumentRef(BaseModel):
    """Document type backing an entity field, for one case."""

    document_type_id: int
    document_type_name: str
    delivered_document_id: int | None = None


class FieldRegistryEntry(BaseModel):
    """A declared (entity_type, field_path) pair that can be configured."""

    entity_type: EntityType
    field_path: str
    label: str
    label_en: str
    field_type: FieldType
