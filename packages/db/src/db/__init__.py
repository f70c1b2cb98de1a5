# This project was developed with assistance from AI tools.
__version__ = "0.1.0"

from .database import Base, DatabaseService, get_db, get_db_service
from .enums import (
    DeliveredDocumentStatus,
    EntityType,
    FieldType,
    ValidityType,
)
from .models import (
    UNORDERED_SORT_ORDER,
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

__all__ = [
    "Base",
    "DatabaseService",
    "get_db",
    "get_db_service",
    "__version__",
    # Enums
    "DeliveredDocumentStatus",
    "EntityType",
    "FieldType",
    "ValidityType",
    # Models
    "CollectiveProcess",
    "Company",
    "DeliveredDocument",
    "DeliveredDocumentCondition",
    "DocumentType",
    "DocumentTypeCondition",
    "DocumentTypeFieldMapping",
    "DocumentTypeLegalFramework",
    "IndividualProcess",
    "LegalFramework",
    "LegalFrameworkInfoRequirement",
    "Passport",
    "Person",
    "UNORDERED_SORT_ORDER",
]
