# This project was developed with assistance from AI tools.
"""Standalone info requirements of a legal framework, resolved for one case."""

import asyncio
import logging

from db import LegalFrameworkInfoRequirement
from db.enums import FieldType

from ..schemas.checklist import (
    ChecklistItem,
    ChecklistItemType,
    CompletionStatus,
    InfoField,
    LinkedDocumentType,
)
from .checklist_store import ChecklistStore
from .document_requirements import DEFAULT_RESPONSIBLE_PARTY, DEFAULT_SORT_ORDER
from .field_values import CaseContext, is_filled, resolve_field_value

logger = logging.getLogger(__name__)


async def _find_linked_document_type(
    store: ChecklistStore, req: LegalFrameworkInfoRequirement,
) -> LinkedDocumentType | None:
    """First active document type whose field mappings cover this field."""
    mappings = await store.list_field_mappings_for_field(req.entity_type, req.field_path)
    for mapping in mappings:
        if not mapping.is_active:
            continue
        doc_type = await store.get_document_type(mapping.document_type_id)
        if doc_type is None or doc_type.is_active is False:
            continue
        return LinkedDocumentType(document_type_id=doc_type.id, name=doc_type.name)
    return None


async def _build_info_item(
    store: ChecklistStore,
    context: CaseContext,
    req: LegalFrameworkInfoRequirement,
) -> ChecklistItem:
    value = resolve_field_value(req.entity_type, req.field_path, context)
    filled = is_filled(value)
    linked = await _find_linked_document_type(store, req)

    return ChecklistItem(
        type=ChecklistItemType.INFO,
        label=req.label,
        sort_order=req.sort_order if req.sort_order is not None else DEFAULT_SORT_ORDER,
        responsible_party=req.responsible_party or DEFAULT_RESPONSIBLE_PARTY,
        is_required=bool(req.is_required),
        # Standalone fields have no partial state
        completion_status=CompletionStatus.COMPLETED if filled else CompletionStatus.PENDING,
        info_fields=[
            InfoField(
                entity_type=req.entity_type,
                field_path=req.field_path,
                label=req.label,
                label_en=req.label_en,
                field_type=req.field_type or FieldType.TEXT,
                current_value=value,
                is_filled=filled,
            )
        ],
        linked_document_type=linked,
    )


async def build_info_items(
    store: ChecklistStore,
    context: CaseContext,
    legal_framework_id: int,
) -> list[ChecklistItem]:
    """Build one checklist item per active info requirement."""
    requirements = await store.list_info_requirements(legal_framework_id)
    active = [r for r in requirements if r.is_active]
    return list(await asyncio.gather(*(_build_info_item(store, context, r) for r in active)))
