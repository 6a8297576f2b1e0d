"""Spec Dictionary, accessor, validation, import and filtering."""

from rigcheck.specs.accessor import get_spec_value
from rigcheck.specs.dictionary import (
    SPEC_DICTIONARY,
    SpecDefinition,
    get_spec_definition,
    get_specs_by_group,
    get_specs_by_importance,
    get_specs_for_category,
)
from rigcheck.specs.validator import ValidationResult, validate_part, validate_parts

__all__ = [
    "SPEC_DICTIONARY",
    "SpecDefinition",
    "ValidationResult",
    "get_spec_definition",
    "get_spec_value",
    "get_specs_by_group",
    "get_specs_by_importance",
    "get_specs_for_category",
    "validate_part",
    "validate_parts",
]
