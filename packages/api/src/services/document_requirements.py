# This project was developed with assistance from AI tools.
"""Document requirements of a legal framework, resolved for one case.

Each document-type association becomes one checklist item. Its status
combines whether the latest delivered document exists, the document type's
extra info fields, the delivered document's conditions, and the validity
verdict for the document's dates.
"""

import asyncio
import logging
from datetime import date

from db import (
    UNORDERED_SORT_ORDER,
    DeliveredDocument,
    DeliveredDocumentCondition,
    DocumentTypeLegalFramework,
)
from db.enums import DeliveredDocumentStatus, FieldType

from ..core.config import settings
from ..schemas.checklist import (
    ChecklistItem,
    ChecklistItemType,
    CompletionStatus,
    ConditionState,
    DeliveredDocumentSummary,
    DocumentDetails,
    InfoField,
    ValidityCheckResult,
    ValidityStatus,
)
from .checklist_store import ChecklistStore
from .field_values import CaseContext, is_filled, resolve_field_value
from .validity import check_validity

logger = logging.getLogger(__name__)

DEFAULT_SORT_ORDER = UNORDERED_SORT_ORDER

DEFAULT_RESPONSIBLE_PARTY = "client"
DEFAULT_WORKFLOW_TYPE = "upload"


def has_delivered_file(doc: DeliveredDocument | None) -> bool:
    """True when the latest row is an actual delivery, not a placeholder."""
    return doc is not None and doc.status not in DeliveredDocumentStatus.awaiting_upload()


def classify_document_item(
    *,
    has_document: bool,
    info_fields: list[InfoField],
    conditions: list[ConditionState],
    validity_check: ValidityCheckResult | None,
) -> CompletionStatus:
    """Completion status of a document requirement.

    A populated item only ever reaches ``partial`` or ``completed``; any
    unmet info field, condition or validity verdict keeps it at ``partial``.
    """
    has_info_fields = bool(info_fields)
    all_info_filled = all(f.is_filled for f in info_fields)
    all_conditions_met = all(c.is_fulfilled for c in conditions)
    validity_ok = validity_check is None or validity_check.status in ValidityStatus.passing()

    if has_document:
        if all_conditions_met and validity_ok and (not has_info_fields or all_info_filled):
            return CompletionStatus.COMPLETED
        return CompletionStatus.PARTIAL
    if has_info_fields and all_info_filled:
        # Information captured, document still pending
        return CompletionStatus.PARTIAL
    if any(f.is_filled for f in info_fields):
        return CompletionStatus.PARTIAL
    return CompletionStatus.PENDING


async def _resolve_condition(
    store: ChecklistStore, delivered: DeliveredDocumentCondition,
) -> ConditionState:
    condition = await store.get_document_type_condition(delivered.document_type_condition_id)
    return ConditionState(
        name=condition.name if condition else "",
        is_fulfilled=bool(delivered.is_fulfilled),
        expires_at=delivered.expires_at,
    )


async def _load_conditions(
    store: ChecklistStore, latest_doc: DeliveredDocument | None,
) -> list[ConditionState]:
    if latest_doc is None:
        return []
    rows = await store.list_delivered_conditions(latest_doc.id)
    return list(await asyncio.gather(*(_resolve_condition(store, r) for r in rows)))


def _build_info_fields(mappings, context: CaseContext) -> list[InfoField]:
    fields = []
    for mapping in mappings:
        value = resolve_field_value(mapping.entity_type, mapping.field_path, context)
        fields.append(
            InfoField(
                entity_type=mapping.entity_type,
                field_path=mapping.field_path,
                label=mapping.label,
                label_en=mapping.label_en,
                field_type=mapping.field_type or FieldType.TEXT,
                current_value=value,
                is_filled=is_filled(value),
            )
        )
    return fields


async def _build_document_item(
    store: ChecklistStore,
    context: CaseContext,
    assoc: DocumentTypeLegalFramework,
    reference_date: date | None,
) -> ChecklistItem | None:
    document_type = await store.get_document_type(assoc.document_type_id)
    if document_type is None or document_type.is_active is False:
        logger.debug(
            "Skipping association %s: document type %s missing or inactive",
            assoc.id,
            assoc.document_type_id,
        )
        return None

    case_id = context.individual_process.id
    mappings, latest_doc = await asyncio.gather(
        store.list_field_mappings(assoc.document_type_id),
        store.get_latest_delivered_document(case_id, assoc.document_type_id),
    )
    active_mappings = sorted((m for m in mappings if m.is_active), key=lambda m: m.sort_order or 0)

    conditions = await _load_conditions(store, latest_doc)

    validity_check = None
    if assoc.validity_type and assoc.validity_days and latest_doc is not None:
        validity_check = check_validity(
            assoc.validity_type,
            assoc.validity_days,
            latest_doc.issue_date,
            latest_doc.expiry_date,
            reference_date=reference_date,
            expiring_soon_days=settings.VALIDITY_EXPIRING_SOON_DAYS,
        )

    info_fields = _build_info_fields(active_mappings, context)
    status = classify_document_item(
        has_document=has_delivered_file(latest_doc),
        info_fields=info_fields,
        conditions=conditions,
        validity_check=validity_check,
    )

    delivered_summary = None
    if latest_doc is not None:
        delivered_summary = DeliveredDocumentSummary(
            id=latest_doc.id,
            status=latest_doc.status,
            file_name=latest_doc.file_name,
            uploaded_at=latest_doc.uploaded_at,
        )

    return ChecklistItem(
        type=ChecklistItemType.DOCUMENT_WITH_INFO if info_fields else ChecklistItemType.DOCUMENT,
        label=document_type.name,
        sort_order=assoc.sort_order if assoc.sort_order is not None else DEFAULT_SORT_ORDER,
        responsible_party=assoc.responsible_party or DEFAULT_RESPONSIBLE_PARTY,
        is_required=bool(assoc.is_required),
        completion_status=status,
        document=DocumentDetails(
            document_type_id=document_type.id,
            document_type_name=document_type.name,
            document_type_code=document_type.code,
            workflow_type=assoc.workflow_type or DEFAULT_WORKFLOW_TYPE,
            validity_days=assoc.validity_days,
            validity_type=assoc.validity_type,
            validity_check=validity_check,
            delivered_document=delivered_summary,
            conditions=conditions,
        ),
        info_fields=info_fields or None,
    )


async def build_document_items(
    store: ChecklistStore,
    context: CaseContext,
    legal_framework_id: int,
    *,
    reference_date: date | None = None,
) -> list[ChecklistItem]:
    """Build one checklist item per active document-type association.

    Associations whose document type is missing or deactivated are dropped.
    Items come back in association order; the caller sorts.
    """
    associations = await store.list_document_associations(legal_framework_id)
    items = await asyncio.gather(
        *(_build_document_item(store, context, a, reference_date) for a in associations)
    )
    return [item for item in items if item is not None]
