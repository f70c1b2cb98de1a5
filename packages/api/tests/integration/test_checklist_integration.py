# This project was developed with assistance from AI tools.
"""Checklist computed against real PostgreSQL."""

from datetime import date

import pytest
from db import DeliveredDocument
from db.enums import DeliveredDocumentStatus, EntityType, ValidityType
from sqlalchemy.exc import IntegrityError

from src.schemas.checklist import CompletionStatus, ValidityStatus
from src.services.checklist import CaseNotFoundError, get_checklist
from src.services.checklist_store import ChecklistStore
from src.services.field_mappings import get_linked_fields_map
from tests.factories import (
    make_association,
    make_case,
    make_condition,
    make_delivered_condition,
    make_delivered_document,
    make_document_type,
    make_field_mapping,
    make_info_requirement,
    make_legal_framework,
    make_passport,
    make_person,
)

pytestmark = pytest.mark.integration

TODAY = date(2026, 10, 18)


async def _seed(session):
    """Framework 1 with two documents and one info requirement for case 100."""
    # Flush in dependency order; FK columns are not backed by relationships everywhere
    session.add_all([
        make_legal_framework(),
        make_person(profession="Geologist"),
        make_document_type(id=10, name="Passport copy", code="PASSPORT"),
        make_document_type(id=11, name="Criminal record", code="CRIMINAL"),
    ])
    await session.flush()
    session.add_all([
        make_passport(id=1, person_id=1, expiry_date=date(2031, 1, 1)),
        make_condition(id=1, name="Sworn translation", document_type_id=11),
    ])
    await session.flush()
    session.add_all([
        make_case(passport_id=1),
        make_association(
            id=1, document_type_id=10, sort_order=1,
            validity_type=ValidityType.ABSOLUTE, validity_days=180,
        ),
        make_association(
            id=2, document_type_id=11, sort_order=2,
            validity_type=ValidityType.RELATIVE, validity_days=90,
        ),
        make_field_mapping(id=1, document_type_id=10, field_path="passport_number"),
        make_info_requirement(id=1, entity_type=EntityType.PERSON, field_path="profession", sort_order=3),
    ])
    await session.flush()
    session.add_all([
        make_delivered_document(id=500, document_type_id=10, expiry_date=date(2031, 1, 1)),
        make_delivered_document(
            id=501, document_type_id=11, issue_date=date(2026, 10, 1),
            file_name="criminal-record.pdf",
        ),
    ])
    await session.flush()
    session.add(make_delivered_condition(id=1, delivered_document_id=501, document_type_condition_id=1))
    await session.flush()


async def test_checklist_from_database(db_session):
    await _seed(db_session)

    result = await get_checklist(ChecklistStore(db_session), 100, reference_date=TODAY)

    assert [i.label for i in result.items] == ["Passport copy", "Criminal record", "Profissao"]
    passport_item, record_item, info_item = result.items
    assert passport_item.completion_status == CompletionStatus.COMPLETED
    assert passport_item.document.validity_check.status == ValidityStatus.VALID
    assert passport_item.info_fields[0].current_value == "XK123456"
    # Condition still open
    assert record_item.completion_status == CompletionStatus.PARTIAL
    assert record_item.document.conditions[0].name == "Sworn translation"
    assert info_item.completion_status == CompletionStatus.COMPLETED
    assert result.summary.total == 3
    assert result.summary.completed == 2
    assert result.summary.partial == 1


async def test_superseded_version_ignored(db_session):
    await _seed(db_session)
    passport_doc = await db_session.get(DeliveredDocument, 500)
    passport_doc.is_latest = False
    await db_session.flush()
    db_session.add(
        make_delivered_document(
            id=502, document_type_id=10, status=DeliveredDocumentStatus.PENDING_UPLOAD,
            version=2, file_name=None,
        )
    )
    await db_session.flush()

    result = await get_checklist(ChecklistStore(db_session), 100, reference_date=TODAY)

    passport_item = result.items[0]
    assert passport_item.document.delivered_document.id == 502
    # Info field filled, document awaiting upload
    assert passport_item.completion_status == CompletionStatus.PARTIAL


async def test_only_one_latest_version_per_type(db_session):
    await _seed(db_session)
    db_session.add(make_delivered_document(id=503, document_type_id=10, version=2))

    with pytest.raises(IntegrityError):
        await db_session.flush()
    await db_session.rollback()


async def test_unknown_stored_entity_type_loads(db_session):
    await _seed(db_session)
    db_session.add(
        make_info_requirement(id=2, entity_type="employer", field_path="name", label="Empregador")
    )
    await db_session.flush()

    store = ChecklistStore(db_session)
    requirements = await store.list_info_requirements(1)
    result = await get_checklist(store, 100, reference_date=TODAY)

    assert [r.entity_type for r in requirements] == ["person", "employer"]
    employer_item = next(i for i in result.items if i.label == "Empregador")
    assert employer_item.info_fields[0].current_value is None
    assert employer_item.completion_status == CompletionStatus.PENDING


@pytest.mark.parametrize("sort_order", [999, 1000])
async def test_sort_order_must_stay_below_unordered_default(db_session, sort_order):
    await _seed(db_session)
    db_session.add(make_association(id=3, document_type_id=11, sort_order=sort_order))

    with pytest.raises(IntegrityError):
        await db_session.flush()
    await db_session.rollback()


async def test_unknown_case(db_session):
    with pytest.raises(CaseNotFoundError):
        await get_checklist(ChecklistStore(db_session), 424242)


async def test_linked_fields_from_database(db_session):
    await _seed(db_session)

    linked = await get_linked_fields_map(ChecklistStore(db_session), 100)

    assert list(linked) == ["passport:passport_number"]
    assert linked["passport:passport_number"][0].delivered_document_id == 500


async def test_checklist_endpoint(db_session, api_client):
    await _seed(db_session)

    resp = await api_client.get("/api/individual-processes/100/checklist")

    assert resp.status_code == 200
    assert resp.json()["summary"]["total"] == 3


async def test_checklist_endpoint_not_found(api_client):
    resp = await api_client.get("/api/individual-processes/424242/checklist")

    assert resp.status_code == 404
    assert resp.json()["status"] == 404


async def test_readiness_against_database(api_client):
    resp = await api_client.get("/health/ready")

    assert resp.status_code == 200
    assert resp.json()["database"] == "ok"
