# This project was developed with assistance from AI tools.
"""Requirements checklist routes for individual processes."""

import logging

from db import get_db
from db.enums import EntityType
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.checklist import (
    ChecklistResponse,
    FieldRegistryEntry,
    FieldWithValue,
    LinkedDocumentRef,
)
from ..services.checklist import ChecklistNotFoundError, get_checklist
from ..services.checklist_store import ChecklistStore
from ..services.field_mappings import get_fields_with_values, get_linked_fields_map
from ..services.field_values import list_field_registry

logger = logging.getLogger(__name__)

router = APIRouter()


def get_checklist_store(session: AsyncSession = Depends(get_db)) -> ChecklistStore:
    return ChecklistStore(session)


@router.get(
    "/individual-processes/{case_id}/checklist",
    response_model=ChecklistResponse,
)
async def read_checklist(
    case_id: int,
    store: ChecklistStore = Depends(get_checklist_store),
) -> ChecklistResponse:
    """Requirements checklist (documents + info fields) for an individual process."""
    try:
        return await get_checklist(store, case_id)
    except ChecklistNotFoundError as exc:
        logger.info("Checklist for individual process %s unavailable: %s", case_id, exc)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc


@router.get(
    "/individual-processes/{case_id}/document-types/{document_type_id}/fields",
    response_model=list[FieldWithValue],
)
async def read_document_fields(
    case_id: int,
    document_type_id: int,
    store: ChecklistStore = Depends(get_checklist_store),
) -> list[FieldWithValue]:
    """Fields mapped to a document type, with the case's current values."""
    return await get_fields_with_values(store, case_id, document_type_id)


@router.get(
    "/individual-processes/{case_id}/linked-fields",
    response_model=dict[str, list[LinkedDocumentRef]],
)
async def read_linked_fields(
    case_id: int,
    store: ChecklistStore = Depends(get_checklist_store),
) -> dict[str, list[LinkedDocumentRef]]:
    """Entity fields of the case that are backed by a document type."""
    return await get_linked_fields_map(store, case_id)


@router.get("/field-registry", response_model=list[FieldRegistryEntry])
async def read_field_registry(entity_type: EntityType | None = None) -> list[FieldRegistryEntry]:
    """Entity fields that info requirements and field mappings may point at."""
    return list_field_registry(entity_type)
