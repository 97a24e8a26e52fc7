"""Shared constant values used across the material flow graph pipeline."""

from __future__ import annotations

from typing import Final

IS_INPUT_OF: Final[str] = "IS_INPUT_OF"

LIFECYCLE_STAGES: Final[tuple[str, ...]] = (
    "PRIMARY_INPUT",
    "SECONDARY_INPUT",
    "REUSED_COMPONENT",
    "PROCESSING",
    "COMPONENT",
    "PRODUCT",
    "USE_PHASE",
    "WASTE",
    "DISPOSAL",
)

FLOW_CATEGORIES: Final[tuple[str, ...]] = (
    "STANDARD",
    "RECYCLING",
    "REUSE",
    "DOWNCYCLING",
    "CIRCULAR",
    "WASTE_FLOW",
)

# Flow categories rendered as circular (recycling) flows.
CIRCULAR_FLOW_CATEGORIES: Final[frozenset[str]] = frozenset(
    {"RECYCLING", "CIRCULAR", "REUSE", "DOWNCYCLING"}
)

PROCESS_CATEGORIES: Final[tuple[str, ...]] = (
    "CONSTRUCTION",
    "DECONSTRUCTION",
    "SORTING",
    "RECYCLING",
    "REFURBISHMENT",
    "TRANSPORT",
    "DEMOLITION",
    "DISPOSAL",
)

QUALITY_CHANGE_CODES: Final[tuple[str, ...]] = ("UP", "SAME", "DOWN")
QUALITY_CHANGE_ALIASES: Final[dict[str, str]] = {
    "UPCYCLED": "UP",
    "DOWNCYCLED": "DOWN",
}

# Ordinal layout axis. Stages must sort left to right in this order.
STAGE_LAYERS: Final[dict[str, float]] = {
    "PRIMARY_INPUT": 0.0,
    "SECONDARY_INPUT": 0.2,
    "REUSED_COMPONENT": 0.8,
    "PROCESSING": 1.5,
    "COMPONENT": 3.0,
    "PRODUCT": 3.5,
    "USE_PHASE": 3.7,
    "WASTE": 4.2,
    "DISPOSAL": 4.8,
}
ROLE_LAYERS: Final[dict[str, float]] = {
    "input": 0.0,
    "intermediate": 2.0,
    "output": 3.5,
}
DEFAULT_LAYER: Final[float] = 2.0

ROLE_DEFAULT_STAGES: Final[dict[str, str]] = {
    "input": "PRIMARY_INPUT",
    "output": "PRODUCT",
    "intermediate": "PROCESSING",
}

# Candidate property keys per (side, logical field), tried in order:
# namespaced, legacy double-namespaced, bare legacy.
MATERIAL_FIELD_ALIASES: Final[dict[tuple[str, str], tuple[str, ...]]] = {
    ("input", "quantity"): ("input_quantity", "input_inputQuantity", "quantity"),
    ("output", "quantity"): ("output_quantity", "output_outputQuantity", "quantity"),
    ("input", "unit"): ("input_unit", "input_inputUnit", "unit"),
    ("output", "unit"): ("output_unit", "output_outputUnit", "unit"),
    ("input", "lifecycleStage"): (
        "input_lifecycleStage",
        "input_inputLifecycleStage",
        "inputLifecycleStage",
    ),
    ("output", "lifecycleStage"): (
        "output_lifecycleStage",
        "output_outputLifecycleStage",
        "outputLifecycleStage",
    ),
    ("input", "categoryCode"): (
        "input_categoryCode",
        "input_inputCategoryCode",
        "inputCategoryCode",
    ),
    ("output", "categoryCode"): (
        "output_categoryCode",
        "output_outputCategoryCode",
        "outputCategoryCode",
    ),
    ("input", "isReusedInput"): ("input_isReusedInput", "isReusedInput"),
    ("output", "isReusedInput"): ("output_isReusedInput",),
    ("input", "isRecyclingMaterial"): ("input_isRecyclingMaterial", "isRecyclingMaterial"),
    ("output", "isRecyclingMaterial"): ("output_isRecyclingMaterial",),
}

# Process-level keys are stored without a namespace.
PROCESS_FIELD_KEYS: Final[tuple[str, ...]] = (
    "processName",
    "processType",
    "processCategory",
    "flowCategory",
    "isRecycling",
    "isDeconstruction",
    "isCircular",
    "emissionsTotal",
    "emissionsUnit",
    "materialLossPercent",
    "qualityChangeCode",
    "notes",
    "sourceBuildingUuid",
    "targetBuildingUuid",
    "sourceEntityRef",
    "targetEntityRef",
)

SOURCE_REF_KEYS: Final[tuple[str, ...]] = ("sourceEntityRef", "sourceBuildingUuid")
TARGET_REF_KEYS: Final[tuple[str, ...]] = ("targetEntityRef", "targetBuildingUuid")
CIRCULAR_FLAG_KEYS: Final[tuple[str, ...]] = ("isCircular", "isRecycling", "isDeconstruction")

KNOWN_PROPERTY_KEYS: Final[frozenset[str]] = frozenset(
    PROCESS_FIELD_KEYS
    + tuple(key for aliases in MATERIAL_FIELD_ALIASES.values() for key in aliases)
)

PLACEHOLDER_PROCESS_NAMES: Final[frozenset[str]] = frozenset({"", "unknown process"})
