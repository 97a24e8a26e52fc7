"""Statement parsing, property lookup and normalization."""

from .normalizer import (
    NormalizationResult,
    StatementNormalizer,
    build_entity_lookup,
    normalize_statements,
)
from .process_flow import (
    ProcessForm,
    ProcessMaterial,
    build_process_statements,
    validate_process_form,
)
from .properties import (
    extract_custom_properties,
    get_property_value,
    lookup_material_field,
    lookup_property,
    parse_quantity,
    parse_statements,
)

__all__ = [
    "NormalizationResult",
    "StatementNormalizer",
    "build_entity_lookup",
    "normalize_statements",
    "ProcessForm",
    "ProcessMaterial",
    "build_process_statements",
    "validate_process_form",
    "extract_custom_properties",
    "get_property_value",
    "lookup_material_field",
    "lookup_property",
    "parse_quantity",
    "parse_statements",
]
