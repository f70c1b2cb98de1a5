# This project was developed with assistance from AI tools.
"""
Domain enums for immigration case tracking.

Shared domain types used by both SQLAlchemy models (db package)
and Pydantic schemas (api package).
"""

import enum


class EntityType(str, enum.Enum):
    """Record kinds an info requirement or field mapping can point at."""

    PERSON = "person"
    INDIVIDUAL_PROCESS = "individualProcess"
    PASSPORT = "passport"
    COMPANY = "company"


class ValidityType(str, enum.Enum):
    """How a document's dates are judged against ``validity_days``.

    ABSOLUTE: the expiry date must still be at least ``validity_days`` away.
    RELATIVE: the document must have been issued within ``validity_days``.
    """

    ABSOLUTE = "absolute"
    RELATIVE = "relative"


class DeliveredDocumentStatus(str, enum.Enum):
    NOT_STARTED = "not_started"
    PENDING_UPLOAD = "pending_upload"
    UPLOADED = "uploaded"
    UNDER_REVIEW = "under_review"
    DELIVERED = "delivered"
    APPROVED = "approved"
    REJECTED = "rejected"
    EXPIRED = "expired"

    @classmethod
    def awaiting_upload(cls) -> frozenset["DeliveredDocumentStatus"]:
        """Statuses of placeholder rows that do not count as a delivered file."""
        return frozenset({cls.NOT_STARTED, cls.PENDING_UPLOAD})


class FieldType(str, enum.Enum):
    TEXT = "text"
    DATE = "date"
    NUMBER = "number"
    SELECT = "select"
    CITY = "city"
    COUNTRY = "country"
