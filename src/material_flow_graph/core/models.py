"""Shared data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Mapping

GraphRole = Literal["input", "output", "intermediate"]
LifecycleStage = Literal[
    "PRIMARY_INPUT",
    "SECONDARY_INPUT",
    "REUSED_COMPONENT",
    "PROCESSING",
    "COMPONENT",
    "PRODUCT",
    "USE_PHASE",
    "WASTE",
    "DISPOSAL",
]
FlowCategory = Literal["STANDARD", "RECYCLING", "REUSE", "DOWNCYCLING", "CIRCULAR", "WASTE_FLOW"]
ProcessCategory = Literal[
    "CONSTRUCTION",
    "DECONSTRUCTION",
    "SORTING",
    "RECYCLING",
    "REFURBISHMENT",
    "TRANSPORT",
    "DEMOLITION",
    "DISPOSAL",
]
QualityChangeCode = Literal["UP", "SAME", "DOWN"]
SkipReason = Literal["missing_process_name", "invalid_quantity", "dangling_entity", "duplicate"]

DedupKey = tuple[str, str, str, float, str]
EdgeKey = tuple[str, str]


@dataclass(slots=True, frozen=True)
class Entity:
    id: str
    name: str | None = None
    description: str | None = None


@dataclass(slots=True, frozen=True)
class StatementProperty:
    key: str
    values: tuple[str, ...] = ()


@dataclass(slots=True, frozen=True)
class Statement:
    subject_id: str
    predicate: str
    object_id: str
    properties: tuple[StatementProperty, ...] = ()
    statement_id: str | None = None


@dataclass(slots=True, frozen=True)
class MaterialSide:
    """Material data recorded for one side (input or output) of a statement."""

    quantity: float | None = None
    unit: str = ""
    lifecycle_stage: LifecycleStage | None = None
    category_code: str | None = None
    is_reused_input: bool = False
    is_recycling_material: bool = False
    custom_properties: Mapping[str, str] = field(default_factory=dict)

    def as_payload(self) -> dict[str, Any]:
        return {
            "quantity": self.quantity,
            "unit": self.unit,
            "lifecycleStage": self.lifecycle_stage,
            "categoryCode": self.category_code,
            "customProperties": dict(self.custom_properties),
        }


@dataclass(slots=True, frozen=True)
class NormalizedStatement:
    """A statement that passed validation, with typed fields extracted."""

    statement: Statement
    process_name: str
    input_material: MaterialSide
    output_material: MaterialSide
    process_type: str | None = None
    process_category: ProcessCategory | None = None
    flow_category: FlowCategory | None = None
    is_circular: bool = False
    emissions_total: float | None = None
    emissions_unit: str | None = None
    material_loss_percent: float | None = None
    quality_change_code: QualityChangeCode | None = None
    notes: str | None = None
    source_entity_ref: str | None = None
    target_entity_ref: str | None = None

    @property
    def subject_id(self) -> str:
        return self.statement.subject_id

    @property
    def object_id(self) -> str:
        return self.statement.object_id

    def side_for(self, entity_id: str) -> MaterialSide | None:
        """Return the material side describing ``entity_id`` in this statement."""
        if entity_id == self.statement.subject_id:
            return self.input_material
        if entity_id == self.statement.object_id:
            return self.output_material
        return None


@dataclass(slots=True, frozen=True)
class SkippedStatement:
    """Diagnostic for a statement excluded from the graph."""

    reason: SkipReason
    subject_id: str
    object_id: str
    statement_id: str | None = None
    detail: str | None = None


@dataclass(slots=True)
class MaterialNode:
    id: str
    display_name: str
    graph_role: GraphRole
    lifecycle_stage: LifecycleStage | None = None
    category_code: str | None = None
    description: str | None = None
    source_entity_ref: str | None = None
    target_entity_ref: str | None = None

    @property
    def is_reused_component(self) -> bool:
        return self.lifecycle_stage == "REUSED_COMPONENT"

    @property
    def is_recycling_material(self) -> bool:
        return self.lifecycle_stage == "SECONDARY_INPUT"

    def as_payload(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "displayName": self.display_name,
            "graphRole": self.graph_role,
            "lifecycleStage": self.lifecycle_stage,
            "isReusedComponent": self.is_reused_component,
            "isRecyclingMaterial": self.is_recycling_material,
            "categoryCode": self.category_code,
            "description": self.description,
            "sourceEntityRef": self.source_entity_ref,
            "targetEntityRef": self.target_entity_ref,
        }


@dataclass(slots=True, frozen=True)
class MaterialRelationship:
    subject_id: str
    subject_name: str
    object_id: str
    object_name: str
    process_name: str
    input_material: MaterialSide
    output_material: MaterialSide
    predicate: str = "IS_INPUT_OF"
    process_category: ProcessCategory | None = None
    flow_category: FlowCategory | None = None
    is_circular: bool = False
    emissions_total: float | None = None
    emissions_unit: str | None = None
    material_loss_percent: float | None = None
    quality_change_code: QualityChangeCode | None = None
    notes: str | None = None

    @property
    def input_quantity(self) -> float:
        return self.input_material.quantity or 0.0

    @property
    def input_unit(self) -> str:
        return self.input_material.unit

    @property
    def output_quantity(self) -> float | None:
        return self.output_material.quantity

    @property
    def output_unit(self) -> str:
        return self.output_material.unit

    @property
    def edge_key(self) -> EdgeKey:
        return (self.subject_id, self.object_id)

    @property
    def dedup_key(self) -> DedupKey:
        return (
            self.subject_id,
            self.object_id,
            self.process_name,
            self.input_quantity,
            self.input_unit,
        )

    def as_payload(self) -> dict[str, Any]:
        return {
            "predicate": self.predicate,
            "subject": {"id": self.subject_id, "name": self.subject_name},
            "object": {"id": self.object_id, "name": self.object_name},
            "processName": self.process_name,
            "processCategory": self.process_category,
            "flowCategory": self.flow_category,
            "isCircular": self.is_circular,
            "inputQuantity": self.input_quantity,
            "inputUnit": self.input_unit,
            "outputQuantity": self.output_quantity,
            "outputUnit": self.output_unit,
            "emissionsTotal": self.emissions_total,
            "emissionsUnit": self.emissions_unit,
            "materialLossPercent": self.material_loss_percent,
            "qualityChangeCode": self.quality_change_code,
            "notes": self.notes,
            "inputMaterial": self.input_material.as_payload(),
            "outputMaterial": self.output_material.as_payload(),
        }


@dataclass(slots=True)
class CycleReport:
    cycles: list[list[str]] = field(default_factory=list)
    cycle_labels: list[list[str]] = field(default_factory=list)
    cyclic_edges: list[EdgeKey] = field(default_factory=list)
    removed_count: int = 0

    @property
    def total_cycles(self) -> int:
        return len(self.cycles)

    def as_payload(self) -> dict[str, Any]:
        return {
            "cycles": self.cycle_labels,
            "removedCount": self.removed_count,
            "totalCycles": self.total_cycles,
        }


@dataclass(slots=True)
class CyclePruneResult:
    valid_edges: list[MaterialRelationship]
    removed_edges: list[MaterialRelationship]
    cycle_report: CycleReport


@dataclass(slots=True, frozen=True)
class FlowStats:
    total_flows: int = 0
    recycling_flows: int = 0
    recycling_rate: int = 0
    total_quantity: float = 0.0
    recycling_quantity: float = 0.0

    def as_payload(self) -> dict[str, Any]:
        return {
            "totalFlows": self.total_flows,
            "recyclingFlows": self.recycling_flows,
            "recyclingRate": self.recycling_rate,
            "totalQuantity": self.total_quantity,
            "recyclingQuantity": self.recycling_quantity,
        }


@dataclass(slots=True)
class EnvironmentalImpact:
    total_emissions: float = 0.0
    total_material_loss: float = 0.0
    material_loss_count: int = 0
    upcycled_processes: int = 0
    downcycled_processes: int = 0

    @property
    def average_material_loss(self) -> float:
        if not self.material_loss_count:
            return 0.0
        return self.total_material_loss / self.material_loss_count


@dataclass(slots=True)
class FlowDashboard:
    total_flows: int
    circular_flows: int
    circularity_rate: int
    total_materials: int
    reused_components: int
    process_categories: dict[str, int] = field(default_factory=dict)
    lifecycle_stages: dict[str, int] = field(default_factory=dict)
    environmental: EnvironmentalImpact = field(default_factory=EnvironmentalImpact)


@dataclass(slots=True)
class FlowGraph:
    nodes: list[MaterialNode]
    edges: list[MaterialRelationship]
    removed_edges: list[MaterialRelationship] = field(default_factory=list)
    cycle_report: CycleReport = field(default_factory=CycleReport)
    diagnostics: list[SkippedStatement] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class LayoutNode:
    node: MaterialNode
    layer: float

    def as_payload(self) -> dict[str, Any]:
        payload = self.node.as_payload()
        payload["layer"] = self.layer
        return payload


@dataclass(slots=True)
class LayoutGraph:
    nodes: list[LayoutNode]
    edges: list[MaterialRelationship]
    standard_flows: list[MaterialRelationship]
    recycling_flows: list[MaterialRelationship]
    stats: FlowStats
    cycle_report: CycleReport = field(default_factory=CycleReport)
    diagnostics: list[SkippedStatement] = field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        """Render the camelCase structure consumed by chart components."""
        return {
            "nodes": [node.as_payload() for node in self.nodes],
            "edges": [edge.as_payload() for edge in self.edges],
            "recyclingFlows": [edge.as_payload() for edge in self.recycling_flows],
            "stats": self.stats.as_payload(),
            "cycleReport": self.cycle_report.as_payload(),
        }
