# This project was developed with assistance from AI tools.
"""Document validity checking.

Pure function that judges a delivered document's issue/expiry dates against
the validity policy configured on its legal-framework association. No DB
access; the caller passes plain dates and an optional reference date.
"""

import logging
from datetime import date, datetime

from db.enums import ValidityType

from ..schemas.checklist import ValidityCheckResult, ValidityStatus

logger = logging.getLogger(__name__)

# Days before the validity limit at which a document starts being flagged
EXPIRING_SOON_THRESHOLD_DAYS = 30


def _as_date(value: date | datetime | None) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    return value


def check_validity(
    validity_type: ValidityType | None,
    validity_days: int | None,
    issue_date: date | datetime | None,
    expiry_date: date | datetime | None,
    *,
    reference_date: date | None = None,
    expiring_soon_days: int = EXPIRING_SOON_THRESHOLD_DAYS,
) -> ValidityCheckResult:
    """Check a document's dates against a validity policy.

    Args:
        validity_type: ABSOLUTE (at least ``validity_days`` left before the
            expiry date) or RELATIVE (issued within the last
            ``validity_days``). None means no policy.
        validity_days: Number of days for the rule.
        issue_date: When the document was issued.
        expiry_date: When the document expires.
        reference_date: Date to compare against (defaults to today).
        expiring_soon_days: Warning window before the validity limit.

    Returns:
        A ValidityCheckResult. Never raises: a missing policy yields
        ``no_rule`` and a missing date the policy needs yields
        ``missing_date``.
    """
    if not validity_type or not validity_days:
        return ValidityCheckResult(status=ValidityStatus.NO_RULE, message_key="validity.noRule")

    today = reference_date or date.today()

    if validity_type == ValidityType.ABSOLUTE:
        expiry = _as_date(expiry_date)
        if expiry is None:
            return ValidityCheckResult(
                status=ValidityStatus.MISSING_DATE, message_key="validity.missingExpiryDate"
            )

        days_remaining = (expiry - today).days
        if days_remaining < 0:
            return ValidityCheckResult(
                status=ValidityStatus.EXPIRED,
                message_key="validity.expired",
                days_value=abs(days_remaining),
            )
        if days_remaining < validity_days:
            return ValidityCheckResult(
                status=ValidityStatus.EXPIRED,
                message_key="validity.insufficientRemaining",
                days_value=days_remaining,
            )
        if days_remaining < validity_days + expiring_soon_days:
            return ValidityCheckResult(
                status=ValidityStatus.EXPIRING_SOON,
                message_key="validity.expiringSoon",
                days_value=days_remaining,
            )
        return ValidityCheckResult(
            status=ValidityStatus.VALID, message_key="validity.valid", days_value=days_remaining
        )

    if validity_type == ValidityType.RELATIVE:
        issued = _as_date(issue_date)
        if issued is None:
            return ValidityCheckResult(
                status=ValidityStatus.MISSING_DATE, message_key="validity.missingIssueDate"
            )

        days_left = validity_days - (today - issued).days
        if days_left < 0:
            return ValidityCheckResult(
                status=ValidityStatus.EXPIRED,
                message_key="validity.maxAgeExceeded",
                days_value=abs(days_left),
            )
        if days_left < expiring_soon_days:
            return ValidityCheckResult(
                status=ValidityStatus.EXPIRING_SOON,
                message_key="validity.expiringSoon",
                days_value=days_left,
            )
        return ValidityCheckResult(
            status=ValidityStatus.VALID, message_key="validity.valid", days_value=days_left
        )

    logger.warning("Unknown validity type '%s', treating as no rule", validity_type)
    return ValidityCheckResult(status=ValidityStatus.NO_RULE, message_key="validity.noRule")
