"""Boundary fetch of statements and entities from the statement store."""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Callable, Protocol, Sequence

from tenacity import Retrying, stop_after_attempt, wait_exponential

from material_flow_graph.core.config import Settings, get_settings
from material_flow_graph.core.exceptions import StatementFetchError
from material_flow_graph.core.logging import get_logger
from material_flow_graph.core.models import LayoutGraph

from .pipeline import FlowGraphPipeline

LOGGER = get_logger(__name__)


class StatementSource(Protocol):
    """Minimal protocol implemented by statement store clients."""

    def get_statements(
        self,
        *,
        subject: str | None = None,
        object: str | None = None,  # noqa: A002 - mirrors the store query parameter
        predicate: str | None = None,
    ) -> list[dict[str, Any]]: ...

    def get_entities(self, ids: Sequence[str]) -> list[dict[str, Any]]: ...


@dataclass(slots=True)
class StatementFetchResult:
    as_subject: list[dict[str, Any]] = field(default_factory=list)
    as_object: list[dict[str, Any]] = field(default_factory=list)
    failed_directions: list[str] = field(default_factory=list)

    @property
    def combined(self) -> list[dict[str, Any]]:
        """Both directions merged; self-loops already returned by subject are not repeated."""
        if "subject" in self.failed_directions:
            return list(self.as_object)
        return [*self.as_subject, *(item for item in self.as_object if not _is_self_loop(item))]

    @property
    def total(self) -> int:
        return len(self.as_subject) + len(self.as_object)


class MaterialFlowService:
    """Fetches statements and entities, then runs the flow graph pipeline.

    The two directional statement queries of an entity run in parallel; a
    direction that still fails after retries counts as empty.
    """

    def __init__(
        self,
        source: StatementSource,
        settings: Settings | None = None,
        *,
        pipeline: FlowGraphPipeline | None = None,
    ) -> None:
        self._source = source
        self._settings = settings or get_settings()
        self._pipeline = pipeline or FlowGraphPipeline(self._settings)
        self._executor_instance: ThreadPoolExecutor | None = None

    def fetch_entity_statements(self, entity_id: str, *, predicate: str | None = None) -> StatementFetchResult:
        predicate = predicate or self._settings.statement_predicate
        jobs: dict[str, Future[list[dict[str, Any]]]] = {
            "subject": self._executor.submit(
                self._call_with_retry, self._source.get_statements, subject=entity_id, predicate=predicate
            ),
            "object": self._executor.submit(
                self._call_with_retry, self._source.get_statements, object=entity_id, predicate=predicate
            ),
        }
        result = StatementFetchResult()
        for direction, future in jobs.items():
            try:
                statements = list(future.result() or [])
            except Exception as exc:  # pylint: disable=broad-except
                LOGGER.warning(
                    "fetch.direction_failed",
                    entity=entity_id,
                    direction=direction,
                    error=str(exc),
                )
                result.failed_directions.append(direction)
                continue
            if direction == "subject":
                result.as_subject = statements
            else:
                result.as_object = statements

        if len(result.failed_directions) == len(jobs):
            raise StatementFetchError(f"Statement fetch failed in both directions for {entity_id}")
        LOGGER.info(
            "fetch.entity_statements",
            entity=entity_id,
            as_subject=len(result.as_subject),
            as_object=len(result.as_object),
        )
        return result

    def fetch_statements(self, entity_id: str | None = None, *, predicate: str | None = None) -> list[dict[str, Any]]:
        if entity_id:
            return self.fetch_entity_statements(entity_id, predicate=predicate).combined
        predicate = predicate or self._settings.statement_predicate
        try:
            return list(self._call_with_retry(self._source.get_statements, predicate=predicate) or [])
        except Exception as exc:  # pylint: disable=broad-except
            raise StatementFetchError(f"Statement fetch failed for predicate {predicate}") from exc

    def fetch_entities(self, statements: Sequence[dict[str, Any]]) -> list[dict[str, Any]]:
        ids = participating_ids(statements)
        if not ids:
            return []
        try:
            return list(self._call_with_retry(self._source.get_entities, ids) or [])
        except Exception as exc:  # pylint: disable=broad-except
            raise StatementFetchError("Entity lookup failed") from exc

    def load_layout_graph(self, entity_id: str | None = None, *, predicate: str | None = None) -> LayoutGraph:
        """Fetch the current statement set and rebuild the layout graph from scratch."""
        statements = self.fetch_statements(entity_id, predicate=predicate)
        entities = self.fetch_entities(statements)
        return self._pipeline.build_layout(statements, entities)

    def _call_with_retry(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        retryer = Retrying(
            stop=stop_after_attempt(max(1, self._settings.fetch_max_retries)),
            wait=wait_exponential(multiplier=max(self._settings.fetch_retry_backoff, 0.0), max=8),
            reraise=True,
        )
        for attempt in retryer:
            with attempt:
                return fn(*args, **kwargs)
        return None

    @property
    def _executor(self) -> ThreadPoolExecutor:
        if self._executor_instance is None:
            workers = max(1, self._settings.fetch_max_parallel)
            self._executor_instance = ThreadPoolExecutor(max_workers=workers)
        return self._executor_instance

    def close(self) -> None:
        if self._executor_instance is not None:
            self._executor_instance.shutdown(wait=True)
            self._executor_instance = None


def participating_ids(statements: Sequence[Any]) -> list[str]:
    """Return subject and object ids of ``statements`` in first-appearance order."""
    ids: dict[str, None] = {}
    for statement in statements:
        for key in ("subject", "object"):
            value = _reference_id(statement, key)
            if value:
                ids[value] = None
    return list(ids)


def _reference_id(statement: Any, key: str) -> str | None:
    value = statement.get(key) if isinstance(statement, dict) else None
    if isinstance(value, dict):
        value = value.get("uuid") or value.get("id")
    return str(value) if value else None


def _is_self_loop(statement: Any) -> bool:
    subject = _reference_id(statement, "subject")
    return subject is not None and subject == _reference_id(statement, "object")
