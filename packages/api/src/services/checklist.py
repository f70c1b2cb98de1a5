# This project was developed with assistance from AI tools.
"""Requirements checklist for an individual process.

Combines the document requirements and the standalone info requirements of
the case's legal framework into one list ordered by sort order, with a
completion summary. Nothing is cached: every call recomputes from the store.
"""

import asyncio
import logging
from collections import Counter
from datetime import date

from ..schemas.checklist import (
    ChecklistItem,
    ChecklistResponse,
    ChecklistSummary,
    CompletionStatus,
)
from .checklist_store import ChecklistStore
from .document_requirements import DEFAULT_SORT_ORDER, build_document_items
from .field_values import CaseContext
from .info_requirements import build_info_items

logger = logging.getLogger(__name__)


class ChecklistNotFoundError(LookupError):
    """A record the checklist cannot be computed without is missing."""


class CaseNotFoundError(ChecklistNotFoundError):
    def __init__(self, case_id: int):
        super().__init__(f"Individual process {case_id} not found")
        self.case_id = case_id


class PersonNotFoundError(ChecklistNotFoundError):
    def __init__(self, person_id: int | None):
        super().__init__(f"Person {person_id} not found")
        self.person_id = person_id


async def load_case_context(store: ChecklistStore, case_id: int) -> CaseContext:
    """Load a case with its person, passport and company.

    The company is the case's own applicant company, falling back to the
    company of its collective process.

    Raises:
        CaseNotFoundError: the individual process does not exist.
        PersonNotFoundError: the case's person does not exist.
    """
    case = await store.get_individual_process(case_id)
    if case is None:
        raise CaseNotFoundError(case_id)
    return await _load_related(store, case)


async def _load_company(store: ChecklistStore, case):
    if case.company_applicant_id is not None:
        return await store.get_company(case.company_applicant_id)
    if case.collective_process_id is not None:
        collective = await store.get_collective_process(case.collective_process_id)
        if collective is not None and collective.company_id is not None:
            return await store.get_company(collective.company_id)
    return None


async def _load_related(store: ChecklistStore, case) -> CaseContext:
    person, passport, company = await asyncio.gather(
        store.get_person(case.person_id),
        store.get_passport(case.passport_id),
        _load_company(store, case),
    )
    if person is None:
        raise PersonNotFoundError(case.person_id)
    return CaseContext(individual_process=case, person=person, passport=passport, company=company)


def summarize(items: list[ChecklistItem]) -> ChecklistSummary:
    counts = Counter(item.completion_status for item in items)
    return ChecklistSummary(
        total=len(items),
        completed=counts[CompletionStatus.COMPLETED],
        partial=counts[CompletionStatus.PARTIAL],
        pending=counts[CompletionStatus.PENDING],
    )


def _sort_key(item: ChecklistItem) -> tuple[bool, int]:
    # Unordered items go last even if a stored order reaches the default
    return item.sort_order == DEFAULT_SORT_ORDER, item.sort_order


def _empty_checklist() -> ChecklistResponse:
    return ChecklistResponse(items=[], summary=ChecklistSummary())


async def get_checklist(
    store: ChecklistStore,
    case_id: int,
    *,
    reference_date: date | None = None,
) -> ChecklistResponse:
    """Compute the requirements checklist for an individual process.

    Args:
        store: Read access bound to the caller's session.
        case_id: Individual process id.
        reference_date: Date validity rules are judged against (defaults to
            today).

    Returns:
        Items sorted by sort order (stable, documents before info items on
        ties) and their summary. A case with no legal framework, or one
        whose framework record no longer exists, gets an empty checklist.

    Raises:
        CaseNotFoundError: the individual process does not exist.
        PersonNotFoundError: the case's person does not exist.
    """
    case = await store.get_individual_process(case_id)
    if case is None:
        raise CaseNotFoundError(case_id)

    if case.legal_framework_id is None:
        logger.info("Individual process %s has no legal framework; empty checklist", case_id)
        return _empty_checklist()

    framework = await store.get_legal_framework(case.legal_framework_id)
    if framework is None:
        logger.info(
            "Legal framework %s of individual process %s not found; empty checklist",
            case.legal_framework_id,
            case_id,
        )
        return _empty_checklist()

    context = await _load_related(store, case)

    document_items, info_items = await asyncio.gather(
        build_document_items(store, context, framework.id, reference_date=reference_date),
        build_info_items(store, context, framework.id),
    )
    items = sorted([*document_items, *info_items], key=_sort_key)

    summary = summarize(items)
    logger.debug(
        "Checklist for individual process %s: %d items (%d completed, %d partial, %d pending)",
        case_id,
        summary.total,
        summary.completed,
        summary.partial,
        summary.pending,
    )
    return ChecklistResponse(items=items, summary=summary)
