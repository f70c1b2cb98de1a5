# This project was developed with assistance from AI tools.
"""Field-mapping views for one case.

Used by the document review screen to show the fields a document type
carries, and by entity forms to flag fields that are backed by a document.
"""

import asyncio
import logging

from db.enums import FieldType

from ..schemas.checklist import FieldWithValue, LinkedDocumentRef
from .checklist import ChecklistNotFoundError, load_case_context
from .checklist_store import ChecklistStore
from .field_values import is_filled, resolve_field_value

logger = logging.getLogger(__name__)


async def get_fields_with_values(
    store: ChecklistStore,
    case_id: int,
    document_type_id: int,
) -> list[FieldWithValue]:
    """Active field mappings of a document type with the case's current values.

    Returns an empty list when the case or its person does not exist.
    """
    try:
        context = await load_case_context(store, case_id)
    except ChecklistNotFoundError as exc:
        logger.info("No field values for document type %s: %s", document_type_id, exc)
        return []

    mappings = await store.list_field_mappings(document_type_id)
    active = sorted((m for m in mappings if m.is_active), key=lambda m: m.sort_order or 0)

    fields = []
    for mapping in active:
        value = resolve_field_value(mapping.entity_type, mapping.field_path, context)
        fields.append(
            FieldWithValue(
                entity_type=mapping.entity_type,
                field_path=mapping.field_path,
                label=mapping.label,
                label_en=mapping.label_en,
                field_type=mapping.field_type or FieldType.TEXT,
                is_required=bool(mapping.is_required),
                current_value=value,
                is_filled=is_filled(value),
            )
        )
    return fields


async def get_linked_fields_map(
    store: ChecklistStore,
    case_id: int,
) -> dict[str, list[LinkedDocumentRef]]:
    """Map ``"entityType:fieldPath"`` to the document types backing it.

    Document types come from the case's legal framework associations and
    from any document delivered for the case. Inactive document types are
    skipped. Returns ``{}`` when the case does not exist.
    """
    case = await store.get_individual_process(case_id)
    if case is None:
        return {}

    document_type_ids: list[int] = []

    if case.legal_framework_id is not None:
        for assoc in await store.list_document_associations(case.legal_framework_id):
            if assoc.document_type_id not in document_type_ids:
                document_type_ids.append(assoc.document_type_id)

    delivered = await store.list_delivered_documents(case_id)
    latest_delivered_by_type: dict[int, int] = {}
    for doc in delivered:
        if doc.document_type_id is None:
            continue
        if doc.document_type_id not in document_type_ids:
            document_type_ids.append(doc.document_type_id)
        # Rows are ordered by id, so the last one per type wins
        latest_delivered_by_type[doc.document_type_id] = doc.id

    if not document_type_ids:
        return {}

    document_types = await asyncio.gather(
        *(store.get_document_type(dt_id) for dt_id in document_type_ids)
    )
    mappings_per_type = await asyncio.gather(
        *(store.list_field_mappings(dt_id) for dt_id in document_type_ids)
    )

    linked: dict[str, list[LinkedDocumentRef]] = {}
    for document_type, mappings in zip(document_types, mappings_per_type):
        if document_type is None or document_type.is_active is False:
            continue
        for mapping in mappings:
            if not mapping.is_active:
                continue
            key = f"{mapping.entity_type}:{mapping.field_path}"
            refs = linked.setdefault(key, [])
            if any(r.document_type_id == document_type.id for r in refs):
                continue
            refs.append(
                LinkedDocumentRef(
                    document_type_id=document_type.id,
                    document_type_name=document_type.name,
                    delivered_document_id=latest_delivered_by_type.get(document_type.id),
                )
            )
    return linked
