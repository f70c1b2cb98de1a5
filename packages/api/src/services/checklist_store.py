# This project was developed with assistance from AI tools.
"""Read-only lookups used by the requirements checklist.

Every lookup goes through one AsyncSession so a checklist is computed from a
single transaction snapshot. AsyncSession does not support concurrent use,
so callers may fan out with ``asyncio.gather`` while the store serialises
the round trips behind a lock.
"""

import asyncio
import logging

from db import (
    CollectiveProcess,
    Company,
    DeliveredDocument,
    DeliveredDocumentCondition,
    DocumentType,
    DocumentTypeCondition,
    DocumentTypeFieldMapping,
    DocumentTypeLegalFramework,
    IndividualProcess,
    LegalFramework,
    LegalFrameworkInfoRequirement,
    Passport,
    Person,
)
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


class ChecklistStore:
    """Indexed read access to case, configuration and delivery records."""

    def __init__(self, session: AsyncSession):
        self._session = session
        self._lock = asyncio.Lock()

    async def _get(self, model, pk: int | None):
        if pk is None:
            return None
        async with self._lock:
            return await self._session.get(model, pk)

    async def _all(self, stmt) -> list:
        async with self._lock:
            result = await self._session.execute(stmt)
        return list(result.scalars().all())

    # -- Records by id --

    async def get_individual_process(self, pk: int) -> IndividualProcess | None:
        return await self._get(IndividualProcess, pk)

    async def get_person(self, pk: int | None) -> Person | None:
        return await self._get(Person, pk)

    async def get_passport(self, pk: int | None) -> Passport | None:
        return await self._get(Passport, pk)

    async def get_company(self, pk: int | None) -> Company | None:
        return await self._get(Company, pk)

    async def get_collective_process(self, pk: int | None) -> CollectiveProcess | None:
        return await self._get(CollectiveProcess, pk)

    async def get_legal_framework(self, pk: int | None) -> LegalFramework | None:
        return await self._get(LegalFramework, pk)

    async def get_document_type(self, pk: int | None) -> DocumentType | None:
        return await self._get(DocumentType, pk)

    async def get_document_type_condition(self, pk: int | None) -> DocumentTypeCondition | None:
        return await self._get(DocumentTypeCondition, pk)

    # -- Indexed queries --

    async def list_document_associations(
        self, legal_framework_id: int,
    ) -> list[DocumentTypeLegalFramework]:
        stmt = (
            select(DocumentTypeLegalFramework)
            .where(DocumentTypeLegalFramework.legal_framework_id == legal_framework_id)
            .order_by(DocumentTypeLegalFramework.id)
        )
        return await self._all(stmt)

    async def list_info_requirements(
        self, legal_framework_id: int,
    ) -> list[LegalFrameworkInfoRequirement]:
        stmt = (
            select(LegalFrameworkInfoRequirement)
            .where(LegalFrameworkInfoRequirement.legal_framework_id == legal_framework_id)
            .order_by(LegalFrameworkInfoRequirement.id)
        )
        return await self._all(stmt)

    async def list_field_mappings(self, document_type_id: int) -> list[DocumentTypeFieldMapping]:
        stmt = (
            select(DocumentTypeFieldMapping)
            .where(DocumentTypeFieldMapping.document_type_id == document_type_id)
            .order_by(DocumentTypeFieldMapping.id)
        )
        return await self._all(stmt)

    async def list_field_mappings_for_field(
        self, entity_type: str, field_path: str,
    ) -> list[DocumentTypeFieldMapping]:
        stmt = (
            select(DocumentTypeFieldMapping)
            .where(
                DocumentTypeFieldMapping.entity_type == entity_type,
                DocumentTypeFieldMapping.field_path == field_path,
            )
            .order_by(DocumentTypeFieldMapping.id)
        )
        return await self._all(stmt)

    async def list_delivered_documents(self, individual_process_id: int) -> list[DeliveredDocument]:
        stmt = (
            select(DeliveredDocument)
            .where(DeliveredDocument.individual_process_id == individual_process_id)
            .order_by(DeliveredDocument.id)
        )
        return await self._all(stmt)

    async def get_latest_delivered_document(
        self, individual_process_id: int, document_type_id: int,
    ) -> DeliveredDocument | None:
        """The authoritative ``is_latest`` row for a case and document type."""
        stmt = (
            select(DeliveredDocument)
            .where(
                DeliveredDocument.individual_process_id == individual_process_id,
                DeliveredDocument.document_type_id == document_type_id,
                DeliveredDocument.is_latest.is_(True),
            )
            .order_by(DeliveredDocument.id.desc())
            .limit(1)
        )
        rows = await self._all(stmt)
        return rows[0] if rows else None

    async def list_delivered_conditions(
        self, delivered_document_id: int,
    ) -> list[DeliveredDocumentCondition]:
        stmt = (
            select(DeliveredDocumentCondition)
            .where(DeliveredDocumentCondition.delivered_document_id == delivered_document_id)
            .order_by(DeliveredDocumentCondition.id)
        )
        return await self._all(stmt)
