# This project was developed with assistance from AI tools.
"""
Casework back office -- domain models

Individual and collective immigration processes, the people, passports and
companies they reference, and the legal-framework configuration (document
type associations, info requirements, field mappings, conditions) that
drives the requirements checklist.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    func,
    text,
)
from sqlalchemy.orm import relationship

from .database import Base
from .enums import DeliveredDocumentStatus, FieldType, ValidityType

# Sort order given to unordered associations and info requirements; configured
# orders must stay below it so unordered entries sort last
UNORDERED_SORT_ORDER = 999


class LegalFramework(Base):
    """Regulatory basis a case is filed under."""

    __tablename__ = "legal_frameworks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    document_type_associations = relationship(
        "DocumentTypeLegalFramework", back_populates="legal_framework", cascade="all, delete-orphan",
    )
    info_requirements = relationship(
        "LegalFrameworkInfoRequirement", back_populates="legal_framework",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<LegalFramework(id={self.id}, name='{self.name}')>"


class Person(Base):
    """Foreign national a case is opened for."""

    __tablename__ = "people"

    id = Column(Integer, primary_key=True, autoincrement=True)
    given_names = Column(String(255), nullable=False)
    middle_name = Column(String(255), nullable=True)
    surname = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True, index=True)
    cpf = Column(String(20), nullable=True, index=True)
    birth_date = Column(Date, nullable=True)
    birth_city_id = Column(Integer, nullable=True)
    nationality_id = Column(Integer, nullable=True, index=True)
    marital_status = Column(String(50), nullable=True)
    profession = Column(String(255), nullable=True)
    cargo = Column(String(255), nullable=True)
    current_city_id = Column(Integer, nullable=True)
    residence_since = Column(Date, nullable=True)
    mother_name = Column(String(255), nullable=True)
    father_name = Column(String(255), nullable=True)
    phone_number = Column(String(50), nullable=True)
    address = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    passports = relationship("Passport", back_populates="person")

    @property
    def full_name(self) -> str:
        return " ".join(p for p in (self.given_names, self.middle_name, self.surname) if p)

    def __repr__(self):
        return f"<Person(id={self.id}, name='{self.full_name}')>"


class Company(Base):
    """Employer or sponsoring company applying on behalf of a person."""

    __tablename__ = "companies"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    tax_id = Column(String(30), nullable=True, index=True)
    website = Column(String(255), nullable=True)
    address = Column(Text, nullable=True)
    email = Column(String(255), nullable=True)
    phone_number = Column(String(50), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<Company(id={self.id}, name='{self.name}')>"


class Passport(Base):
    """Passport on file for a person."""

    __tablename__ = "passports"

    id = Column(Integer, primary_key=True, autoincrement=True)
    person_id = Column(
        Integer, ForeignKey("people.id", ondelete="SET NULL"), nullable=True, index=True,
    )
    passport_number = Column(String(50), nullable=False, index=True)
    issuing_country_id = Column(Integer, nullable=True)
    issue_date = Column(Date, nullable=True)
    expiry_date = Column(Date, nullable=True, index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    person = relationship("Person", back_populates="passports")

    def __repr__(self):
        return f"<Passport(id={self.id}, number='{self.passport_number}')>"


class CollectiveProcess(Base):
    """Group of individual processes filed together for one company."""

    __tablename__ = "collective_processes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    reference_number = Column(String(100), nullable=False, index=True)
    company_id = Column(
        Integer, ForeignKey("companies.id", ondelete="SET NULL"), nullable=True, index=True,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    individual_processes = relationship("IndividualProcess", back_populates="collective_process")

    def __repr__(self):
        return f"<CollectiveProcess(id={self.id}, ref='{self.reference_number}')>"


class IndividualProcess(Base):
    """A single person's case under a legal framework."""

    __tablename__ = "individual_processes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    person_id = Column(
        Integer, ForeignKey("people.id", ondelete="RESTRICT"), nullable=False, index=True,
    )
    passport_id = Column(
        Integer, ForeignKey("passports.id", ondelete="SET NULL"), nullable=True, index=True,
    )
    company_applicant_id = Column(
        Integer, ForeignKey("companies.id", ondelete="SET NULL"), nullable=True, index=True,
    )
    collective_process_id = Column(
        Integer, ForeignKey("collective_processes.id", ondelete="SET NULL"),
        nullable=True, index=True,
    )
    legal_framework_id = Column(
        Integer, ForeignKey("legal_frameworks.id", ondelete="SET NULL"), nullable=True, index=True,
    )
    funcao = Column(String(255), nullable=True)
    monthly_amount_to_receive = Column(Numeric(12, 2), nullable=True)
    first_entry_date = Column(Date, nullable=True)
    qualification = Column(String(100), nullable=True)
    professional_experience_since = Column(Date, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    collective_process = relationship("CollectiveProcess", back_populates="individual_processes")
    delivered_documents = relationship(
        "DeliveredDocument", back_populates="individual_process", cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<IndividualProcess(id={self.id}, person_id={self.person_id})>"


class DocumentType(Base):
    """Kind of document a framework can require (passport copy, diploma...)."""

    __tablename__ = "document_types"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    code = Column(String(50), nullable=True, index=True)
    category = Column(String(100), nullable=True, index=True)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    field_mappings = relationship(
        "DocumentTypeFieldMapping", back_populates="document_type", cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<DocumentType(id={self.id}, code='{self.code}')>"


class DocumentTypeLegalFramework(Base):
    """Document type required (or accepted) under a legal framework."""

    __tablename__ = "document_types_legal_frameworks"
    __table_args__ = (
        CheckConstraint(
            f"sort_order < {UNORDERED_SORT_ORDER}", name="ck_doc_type_frameworks_sort_order",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    document_type_id = Column(
        Integer, ForeignKey("document_types.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    legal_framework_id = Column(
        Integer, ForeignKey("legal_frameworks.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    is_required = Column(Boolean, nullable=False, default=True)
    responsible_party = Column(String(50), nullable=True)
    workflow_type = Column(String(50), nullable=True)
    validity_type = Column(
        Enum(ValidityType, name="validity_type", native_enum=False),
        nullable=True,
    )
    validity_days = Column(Integer, nullable=True)
    sort_order = Column(Integer, nullable=True)
    description = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    legal_framework = relationship("LegalFramework", back_populates="document_type_associations")
    document_type = relationship("DocumentType")

    def __repr__(self):
        return (
            f"<DocumentTypeLegalFramework(doc_type_id={self.document_type_id}, "
            f"framework_id={self.legal_framework_id})>"
        )


class LegalFrameworkInfoRequirement(Base):
    """Standalone field that must be recorded for cases under a framework."""

    __tablename__ = "legal_framework_info_requirements"
    __table_args__ = (
        CheckConstraint(
            f"sort_order < {UNORDERED_SORT_ORDER}", name="ck_info_requirements_sort_order",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    legal_framework_id = Column(
        Integer, ForeignKey("legal_frameworks.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    # EntityType value; unknown values are kept and resolve to null
    entity_type = Column(String(50), nullable=False)
    field_path = Column(String(100), nullable=False)
    label = Column(String(255), nullable=False)
    label_en = Column(String(255), nullable=True)
    field_type = Column(
        Enum(FieldType, name="field_type", native_enum=False),
        nullable=True,
    )
    responsible_party = Column(String(50), nullable=True)
    is_required = Column(Boolean, nullable=False, default=True)
    sort_order = Column(Integer, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    legal_framework = relationship("LegalFramework", back_populates="info_requirements")

    def __repr__(self):
        return f"<LegalFrameworkInfoRequirement(id={self.id}, field='{self.field_path}')>"


class DocumentTypeFieldMapping(Base):
    """Entity field captured alongside (or backed by) a document type."""

    __tablename__ = "document_type_field_mappings"
    __table_args__ = (
        Index("ix_field_mappings_entity_field", "entity_type", "field_path"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    document_type_id = Column(
        Integer, ForeignKey("document_types.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    # EntityType value; unknown values are kept and resolve to null
    entity_type = Column(String(50), nullable=False)
    field_path = Column(String(100), nullable=False)
    label = Column(String(255), nullable=False)
    label_en = Column(String(255), nullable=True)
    field_type = Column(
        Enum(FieldType, name="field_type", native_enum=False),
        nullable=True,
    )
    is_required = Column(Boolean, nullable=False, default=False)
    sort_order = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    document_type = relationship("DocumentType", back_populates="field_mappings")

    def __repr__(self):
        return (
            f"<DocumentTypeFieldMapping(doc_type_id={self.document_type_id}, "
            f"field='{self.entity_type}:{self.field_path}')>"
        )


class DocumentTypeCondition(Base):
    """Check a delivered document must pass (translated, apostilled...)."""

    __tablename__ = "document_type_conditions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    document_type_id = Column(
        Integer, ForeignKey("document_types.id", ondelete="CASCADE"), nullable=True, index=True,
    )
    name = Column(String(255), nullable=False)
    code = Column(String(50), nullable=True)
    description = Column(Text, nullable=True)
    is_required = Column(Boolean, nullable=False, default=True)
    relative_expiration_days = Column(Integer, nullable=True)
    sort_order = Column(Integer, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    def __repr__(self):
        return f"<DocumentTypeCondition(id={self.id}, name='{self.name}')>"


class DeliveredDocument(Base):
    """Tracked document instance for a case; one ``is_latest`` row per type."""

    __tablename__ = "documents_delivered"
    __table_args__ = (
        Index(
            "uq_documents_delivered_latest",
            "individual_process_id",
            "document_type_id",
            unique=True,
            postgresql_where=text("is_latest"),
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    individual_process_id = Column(
        Integer, ForeignKey("individual_processes.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    document_type_id = Column(
        Integer, ForeignKey("document_types.id", ondelete="RESTRICT"), nullable=False, index=True,
    )
    status = Column(
        Enum(DeliveredDocumentStatus, name="delivered_document_status", native_enum=False),
        nullable=False,
        default=DeliveredDocumentStatus.NOT_STARTED,
    )
    file_name = Column(String(500), nullable=True)
    file_url = Column(String(1000), nullable=True)
    file_size = Column(Integer, nullable=True)
    mime_type = Column(String(100), nullable=True)
    uploaded_by = Column(String(255), nullable=True)
    uploaded_at = Column(DateTime(timezone=True), nullable=True)
    issue_date = Column(Date, nullable=True)
    expiry_date = Column(Date, nullable=True)
    rejection_reason = Column(Text, nullable=True)
    version = Column(Integer, nullable=False, default=1)
    is_latest = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    individual_process = relationship("IndividualProcess", back_populates="delivered_documents")
    conditions = relationship(
        "DeliveredDocumentCondition", back_populates="delivered_document",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return (
            f"<DeliveredDocument(id={self.id}, doc_type_id={self.document_type_id}, "
            f"status='{self.status}', latest={self.is_latest})>"
        )


class DeliveredDocumentCondition(Base):
    """Fulfilment state of one condition on a delivered document."""

    __tablename__ = "document_delivered_conditions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    delivered_document_id = Column(
        Integer, ForeignKey("documents_delivered.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    document_type_condition_id = Column(
        Integer, ForeignKey("document_type_conditions.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    is_fulfilled = Column(Boolean, nullable=False, default=False)
    fulfilled_at = Column(DateTime(timezone=True), nullable=True)
    expires_at = Column(Date, nullable=True)
    notes = Column(Text, nullable=True)

    delivered_document = relationship("DeliveredDocument", back_populates="conditions")
    condition = relationship("DocumentTypeCondition")

    def __repr__(self):
        return (
            f"<DeliveredDocumentCondition(doc_id={self.delivered_document_id}, "
            f"fulfilled={self.is_fulfilled})>"
        )
