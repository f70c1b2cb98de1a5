# This project was developed with assistance from AI tools.
"""Entity field registry and value resolution.

Info requirements and document field mappings point at entity fields by an
``(entity_type, field_path)`` pair stored as configuration. Only pairs
declared in FIELD_REGISTRY can be read; anything else resolves to None so a
bad configuration row degrades one field instead of the whole checklist.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from operator import attrgetter
from typing import Any

from db import Company, IndividualProcess, Passport, Person
from db.enums import EntityType, FieldType

from ..schemas.checklist import FieldRegistryEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldDefinition:
    entity_type: EntityType
    field_path: str
    label: str
    label_en: str
    field_type: FieldType
    accessor: Callable[[Any], Any]

    def to_entry(self) -> FieldRegistryEntry:
        return FieldRegistryEntry(
            entity_type=self.entity_type,
            field_path=self.field_path,
            label=self.label,
            label_en=self.label_en,
            field_type=self.field_type,
        )


def _field(
    entity_type: EntityType,
    field_path: str,
    label: str,
    label_en: str,
    field_type: FieldType = FieldType.TEXT,
) -> FieldDefinition:
    return FieldDefinition(
        entity_type=entity_type,
        field_path=field_path,
        label=label,
        label_en=label_en,
        field_type=field_type,
        accessor=attrgetter(field_path),
    )


_P = EntityType.PERSON
_IP = EntityType.INDIVIDUAL_PROCESS
_PP = EntityType.PASSPORT
_C = EntityType.COMPANY

_DEFINITIONS: tuple[FieldDefinition, ...] = (
    _field(_P, "given_names", "Nome(s)", "Given name(s)"),
    _field(_P, "middle_name", "Nome do meio", "Middle name"),
    _field(_P, "surname", "Sobrenome", "Surname"),
    _field(_P, "email", "E-mail", "Email"),
    _field(_P, "cpf", "CPF", "CPF"),
    _field(_P, "birth_date", "Data de nascimento", "Date of birth", FieldType.DATE),
    _field(_P, "birth_city_id", "Cidade de nascimento", "City of birth", FieldType.CITY),
    _field(_P, "nationality_id", "Nacionalidade", "Nationality", FieldType.COUNTRY),
    _field(_P, "marital_status", "Estado civil", "Marital status", FieldType.SELECT),
    _field(_P, "profession", "Profissao", "Profession"),
    _field(_P, "cargo", "Cargo", "Position"),
    _field(_P, "current_city_id", "Cidade de residencia", "City of residence", FieldType.CITY),
    _field(_P, "residence_since", "Desde quando reside", "Residing since", FieldType.DATE),
    _field(_P, "mother_name", "Nome da mae", "Mother's name"),
    _field(_P, "father_name", "Nome do pai", "Father's name"),
    _field(_P, "phone_number", "Telefone", "Phone number"),
    _field(_P, "address", "Endereco", "Address"),
    _field(_IP, "funcao", "Funcao / Duty", "Function / Duty"),
    _field(
        _IP, "monthly_amount_to_receive", "Salario mensal (BRL)", "Monthly salary (BRL)",
        FieldType.NUMBER,
    ),
    _field(
        _IP, "first_entry_date", "Data do 1o ingresso no Brasil", "Date of 1st entry in Brazil",
        FieldType.DATE,
    ),
    _field(_IP, "qualification", "Qualificacao", "Qualification", FieldType.SELECT),
    _field(
        _IP, "professional_experience_since", "Experiencia profissional desde",
        "Professional experience since", FieldType.DATE,
    ),
    _field(_PP, "passport_number", "Numero do passaporte", "Passport number"),
    _field(_PP, "issue_date", "Data de expedicao", "Issue date", FieldType.DATE),
    _field(_PP, "expiry_date", "Valido ate", "Valid until", FieldType.DATE),
    _field(_PP, "issuing_country_id", "Pais emissor", "Issuing country", FieldType.COUNTRY),
    _field(_C, "tax_id", "CNPJ", "Tax ID (CNPJ)"),
    _field(_C, "name", "Razao social", "Company name"),
    _field(_C, "email", "E-mail da empresa", "Company email"),
    _field(_C, "phone_number", "Telefone da empresa", "Company phone"),
)

FIELD_REGISTRY: dict[tuple[EntityType, str], FieldDefinition] = {
    (d.entity_type, d.field_path): d for d in _DEFINITIONS
}


@dataclass(frozen=True)
class CaseContext:
    """Records a case's fields can be read from.

    The individual process and its person are always loaded; passport and
    company are None when the case does not reference one.
    """

    individual_process: IndividualProcess
    person: Person
    passport: Passport | None = None
    company: Company | None = None

    def entity(self, entity_type: EntityType) -> Any | None:
        if entity_type == EntityType.PERSON:
            return self.person
        if entity_type == EntityType.INDIVIDUAL_PROCESS:
            return self.individual_process
        if entity_type == EntityType.PASSPORT:
            return self.passport
        if entity_type == EntityType.COMPANY:
            return self.company
        return None


def _coerce_entity_type(entity_type: EntityType | str) -> EntityType | None:
    try:
        return EntityType(entity_type)
    except ValueError:
        return None


def get_field_definition(entity_type: EntityType | str, field_path: str) -> FieldDefinition | None:
    """Look up a declared field, or None if the pair is not registered."""
    et = _coerce_entity_type(entity_type)
    if et is None:
        return None
    return FIELD_REGISTRY.get((et, field_path))


def resolve_field_value(
    entity_type: EntityType | str,
    field_path: str,
    context: CaseContext,
) -> Any | None:
    """Return the current value of a configured field, or None.

    None is returned for unregistered pairs and for entities the case does
    not have (e.g. no passport on file).
    """
    definition = get_field_definition(entity_type, field_path)
    if definition is None:
        logger.debug("Unregistered field %s:%s resolves to None", entity_type, field_path)
        return None

    record = context.entity(definition.entity_type)
    if record is None:
        return None
    return definition.accessor(record)


def is_filled(value: Any) -> bool:
    """A field counts as filled unless it is None or an empty string."""
    return value is not None and value != ""


def list_field_registry(entity_type: EntityType | str | None = None) -> list[FieldRegistryEntry]:
    """Registry entries, optionally restricted to one entity type."""
    if entity_type is None:
        return [d.to_entry() for d in _DEFINITIONS]
    et = _coerce_entity_type(entity_type)
    return [d.to_entry() for d in _DEFINITIONS if d.entity_type == et]
