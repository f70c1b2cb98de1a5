# This project was developed with assistance from AI tools.
"""Tests for document requirement items."""

from datetime import date

from db.enums import DeliveredDocumentStatus, EntityType, ValidityType

from src.schemas.checklist import (
    ChecklistItemType,
    CompletionStatus,
    ConditionState,
    InfoField,
    ValidityCheckResult,
    ValidityStatus,
)
from src.services.document_requirements import (
    DEFAULT_SORT_ORDER,
    build_document_items,
    classify_document_item,
    has_delivered_file,
)
from src.services.field_values import CaseContext
from tests.factories import (
    make_association,
    make_base_store,
    make_case,
    make_condition,
    make_delivered_condition,
    make_delivered_document,
    make_document_type,
    make_field_mapping,
    make_passport,
    make_person,
)

TODAY = date(2026, 10, 18)


def _info_field(filled: bool) -> InfoField:
    return InfoField(
        entity_type=EntityType.PERSON,
        field_path="profession",
        label="Profissao",
        current_value="Engineer" if filled else None,
        is_filled=filled,
    )


def _condition(fulfilled: bool) -> ConditionState:
    return ConditionState(name="Apostille", is_fulfilled=fulfilled)


def _validity(status: ValidityStatus) -> ValidityCheckResult:
    return ValidityCheckResult(status=status, message_key="validity.x")


def _context(passport=None) -> CaseContext:
    return CaseContext(
        individual_process=make_case(passport_id=passport.id if passport else None),
        person=make_person(),
        passport=passport,
    )


# ---------------------------------------------------------------------------
# classify_document_item
# ---------------------------------------------------------------------------


class TestClassifyDocumentItem:
    def test_document_only_completed(self):
        status = classify_document_item(
            has_document=True, info_fields=[], conditions=[], validity_check=None,
        )
        assert status == CompletionStatus.COMPLETED

    def test_nothing_is_pending(self):
        status = classify_document_item(
            has_document=False, info_fields=[], conditions=[], validity_check=None,
        )
        assert status == CompletionStatus.PENDING

    def test_document_with_unfilled_info_is_partial(self):
        status = classify_document_item(
            has_document=True,
            info_fields=[_info_field(True), _info_field(False)],
            conditions=[],
            validity_check=None,
        )
        assert status == CompletionStatus.PARTIAL

    def test_document_with_all_info_is_completed(self):
        status = classify_document_item(
            has_document=True,
            info_fields=[_info_field(True), _info_field(True)],
            conditions=[],
            validity_check=None,
        )
        assert status == CompletionStatus.COMPLETED

    def test_all_info_without_document_is_partial(self):
        status = classify_document_item(
            has_document=False, info_fields=[_info_field(True)], conditions=[], validity_check=None,
        )
        assert status == CompletionStatus.PARTIAL

    def test_some_info_without_document_is_partial(self):
        status = classify_document_item(
            has_document=False,
            info_fields=[_info_field(True), _info_field(False)],
            conditions=[],
            validity_check=None,
        )
        assert status == CompletionStatus.PARTIAL

    def test_no_info_without_document_is_pending(self):
        status = classify_document_item(
            has_document=False, info_fields=[_info_field(False)], conditions=[], validity_check=None,
        )
        assert status == CompletionStatus.PENDING

    def test_unmet_condition_is_partial(self):
        status = classify_document_item(
            has_document=True,
            info_fields=[],
            conditions=[_condition(True), _condition(False)],
            validity_check=None,
        )
        assert status == CompletionStatus.PARTIAL

    def test_no_rule_validity_counts_as_valid(self):
        status = classify_document_item(
            has_document=True,
            info_fields=[],
            conditions=[],
            validity_check=_validity(ValidityStatus.NO_RULE),
        )
        assert status == CompletionStatus.COMPLETED

    def test_failing_validity_is_partial(self):
        for verdict in (
            ValidityStatus.EXPIRED,
            ValidityStatus.EXPIRING_SOON,
            ValidityStatus.MISSING_DATE,
        ):
            status = classify_document_item(
                has_document=True,
                info_fields=[],
                conditions=[],
                validity_check=_validity(verdict),
            )
            assert status == CompletionStatus.PARTIAL, verdict


def test_has_delivered_file():
    assert has_delivered_file(make_delivered_document())
    assert has_delivered_file(make_delivered_document(status=DeliveredDocumentStatus.REJECTED))
    assert not has_delivered_file(None)
    assert not has_delivered_file(
        make_delivered_document(status=DeliveredDocumentStatus.PENDING_UPLOAD)
    )
    assert not has_delivered_file(
        make_delivered_document(status=DeliveredDocumentStatus.NOT_STARTED)
    )


# ---------------------------------------------------------------------------
# build_document_items
# ---------------------------------------------------------------------------


async def test_document_item_without_delivery_is_pending():
    store = make_base_store(make_document_type(), make_association(sort_order=2))

    items = await build_document_items(store, _context(), 1, reference_date=TODAY)

    assert len(items) == 1
    item = items[0]
    assert item.type == ChecklistItemType.DOCUMENT
    assert item.label == "Passport copy"
    assert item.sort_order == 2
    assert item.responsible_party == "client"
    assert item.completion_status == CompletionStatus.PENDING
    assert item.info_fields is None
    assert item.document.document_type_code == "PASSPORT"
    assert item.document.workflow_type == "upload"
    assert item.document.delivered_document is None
    assert item.document.validity_check is None


async def test_delivered_document_completes_item():
    store = make_base_store(
        make_document_type(),
        make_association(responsible_party="company", workflow_type="sign"),
        make_delivered_document(),
    )

    items = await build_document_items(store, _context(), 1, reference_date=TODAY)

    item = items[0]
    assert item.completion_status == CompletionStatus.COMPLETED
    assert item.sort_order == DEFAULT_SORT_ORDER
    assert item.responsible_party == "company"
    assert item.document.workflow_type == "sign"
    assert item.document.delivered_document.id == 500
    assert item.document.delivered_document.file_name == "passport.pdf"


async def test_placeholder_delivery_does_not_count():
    store = make_base_store(
        make_document_type(),
        make_association(),
        make_delivered_document(status=DeliveredDocumentStatus.PENDING_UPLOAD, file_name=None),
    )

    items = await build_document_items(store, _context(), 1, reference_date=TODAY)

    assert items[0].completion_status == CompletionStatus.PENDING
    assert items[0].document.delivered_document.status == DeliveredDocumentStatus.PENDING_UPLOAD


async def test_only_latest_version_is_considered():
    """A superseded approved version does not satisfy the requirement."""
    store = make_base_store(
        make_document_type(),
        make_association(),
        make_delivered_document(id=500, is_latest=False),
        make_delivered_document(
            id=501, status=DeliveredDocumentStatus.NOT_STARTED, version=2, file_name=None,
        ),
    )

    items = await build_document_items(store, _context(), 1, reference_date=TODAY)

    assert items[0].document.delivered_document.id == 501
    assert items[0].completion_status == CompletionStatus.PENDING


async def test_deactivated_document_type_is_skipped():
    store = make_base_store(
        make_document_type(id=10, is_active=False),
        make_document_type(id=11, name="Birth certificate", code="BIRTH"),
        make_association(id=1, document_type_id=10),
        make_association(id=2, document_type_id=11),
    )

    items = await build_document_items(store, _context(), 1, reference_date=TODAY)

    assert [i.label for i in items] == ["Birth certificate"]


async def test_missing_document_type_is_skipped():
    store = make_base_store(make_association(document_type_id=99))

    items = await build_document_items(store, _context(), 1, reference_date=TODAY)

    assert items == []


async def test_document_with_info_fields():
    passport = make_passport(passport_number="XK123456", expiry_date=None)
    store = make_base_store(
        passport,
        make_document_type(),
        make_association(),
        make_field_mapping(id=1, field_path="passport_number", sort_order=2),
        make_field_mapping(id=2, field_path="expiry_date", label="Valido ate", sort_order=1),
        make_field_mapping(id=3, field_path="issue_date", label="Expedicao", is_active=False),
    )

    items = await build_document_items(store, _context(passport), 1, reference_date=TODAY)

    item = items[0]
    assert item.type == ChecklistItemType.DOCUMENT_WITH_INFO
    assert [f.field_path for f in item.info_fields] == ["expiry_date", "passport_number"]
    assert [f.is_filled for f in item.info_fields] == [False, True]
    assert item.info_fields[1].current_value == "XK123456"
    # Some info captured, no document yet
    assert item.completion_status == CompletionStatus.PARTIAL


async def test_unfulfilled_condition_keeps_item_partial():
    store = make_base_store(
        make_document_type(),
        make_association(),
        make_condition(id=1, name="Sworn translation"),
        make_condition(id=2, name="Apostille"),
        make_delivered_document(),
        make_delivered_condition(id=1, document_type_condition_id=1, is_fulfilled=True),
        make_delivered_condition(
            id=2, document_type_condition_id=2, is_fulfilled=False, expires_at=date(2026, 12, 1),
        ),
    )

    items = await build_document_items(store, _context(), 1, reference_date=TODAY)

    item = items[0]
    assert item.completion_status == CompletionStatus.PARTIAL
    assert [(c.name, c.is_fulfilled) for c in item.document.conditions] == [
        ("Sworn translation", True),
        ("Apostille", False),
    ]
    assert item.document.conditions[1].expires_at == date(2026, 12, 1)


async def test_fulfilled_conditions_complete_item():
    store = make_base_store(
        make_document_type(),
        make_association(),
        make_condition(),
        make_delivered_document(),
        make_delivered_condition(is_fulfilled=True),
    )

    items = await build_document_items(store, _context(), 1, reference_date=TODAY)

    assert items[0].completion_status == CompletionStatus.COMPLETED


async def test_expired_document_is_partial():
    store = make_base_store(
        make_document_type(name="Criminal record", code="CRIMINAL"),
        make_association(validity_type=ValidityType.RELATIVE, validity_days=90),
        make_delivered_document(issue_date=date(2026, 1, 10)),
    )

    items = await build_document_items(store, _context(), 1, reference_date=TODAY)

    item = items[0]
    assert item.completion_status == CompletionStatus.PARTIAL
    assert item.document.validity_type == ValidityType.RELATIVE
    assert item.document.validity_days == 90
    assert item.document.validity_check.status == ValidityStatus.EXPIRED
    assert item.document.validity_check.message_key == "validity.maxAgeExceeded"


async def test_valid_document_is_completed():
    store = make_base_store(
        make_document_type(),
        make_association(validity_type=ValidityType.ABSOLUTE, validity_days=180),
        make_delivered_document(expiry_date=date(2030, 5, 1)),
    )

    items = await build_document_items(store, _context(), 1, reference_date=TODAY)

    assert items[0].document.validity_check.status == ValidityStatus.VALID
    assert items[0].completion_status == CompletionStatus.COMPLETED


async def test_missing_date_blocks_completion():
    store = make_base_store(
        make_document_type(),
        make_association(validity_type=ValidityType.ABSOLUTE, validity_days=180),
        make_delivered_document(expiry_date=None),
    )

    items = await build_document_items(store, _context(), 1, reference_date=TODAY)

    assert items[0].document.validity_check.status == ValidityStatus.MISSING_DATE
    assert items[0].completion_status == CompletionStatus.PARTIAL


async def test_validity_not_checked_without_delivery():
    store = make_base_store(
        make_document_type(),
        make_association(validity_type=ValidityType.ABSOLUTE, validity_days=180),
    )

    items = await build_document_items(store, _context(), 1, reference_date=TODAY)

    assert items[0].document.validity_check is None
    assert items[0].document.validity_type == ValidityType.ABSOLUTE


async def test_other_framework_associations_ignored():
    store = make_base_store(make_document_type(), make_association(legal_framework_id=2))

    items = await build_document_items(store, _context(), 1, reference_date=TODAY)

    assert items == []
