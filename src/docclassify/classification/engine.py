"""Classification engine: scores a document against every catalog type."""

from __future__ import annotations

import asyncio
import inspect
import logging
import threading
from datetime import UTC, datetime
from functools import partial
from typing import Any, Protocol

from docclassify.catalog.registry import TypeRegistry
from docclassify.classification.confidence import (
    build_reasons,
    compute_confidence,
    detect_ambiguity,
)
from docclassify.classification.events import (
    AmbiguousEvent,
    CandidateScoredEvent,
    CompletedEvent,
    ErrorEvent,
    EventBus,
    RankedEvent,
    StartedEvent,
)
from docclassify.classification.result import create_result, validate_result
from docclassify.concurrency.pool import ScoringPool
from docclassify.config.schema import ClassificationConfig
from docclassify.errors.exceptions import (
    ClassificationTimeout,
    InvalidResult,
    RegistryUnavailable,
)
from docclassify.ranking.ranker import get_ranking_analysis
from docclassify.scoring.composite import score_candidate
from docclassify.storage.base import ResultStorage
from docclassify.storage.memory import MemoryResultStorage
from docclassify.types import (
    AmbiguityLevel,
    ClassificationCandidate,
    ClassificationResult,
    Document,
    EngineStatistics,
    RankingSummary,
    TypeDefinition,
)

logger = logging.getLogger(__name__)

_CLEAR_LEVELS = {AmbiguityLevel.NONE, AmbiguityLevel.LOW}
_ALERT_LEVELS = {AmbiguityLevel.HIGH, AmbiguityLevel.VERY_HIGH}


class TypeCatalog(Protocol):
    """Anything that can list type definitions, synchronously or not."""

    def get_all_types(self) -> Any: ...


class ClassificationEngine:
    """Ranks every known document type for a document.

    Args:
        registry: Type catalog. When None, the built-in catalog is used
            unless ``use_builtin_catalog`` is False.
        config: Thresholds, weights and engine behaviour.
        storage: Optional persistent store; results are saved when
            ``config.auto_save_results`` is set.
        use_builtin_catalog: Fall back to the packaged catalog when no
            registry is supplied.
    """

    def __init__(
        self,
        registry: TypeCatalog | None = None,
        config: ClassificationConfig | None = None,
        storage: ResultStorage | None = None,
        use_builtin_catalog: bool = True,
    ) -> None:
        self._config = config or ClassificationConfig()
        if registry is None and use_builtin_catalog:
            registry = TypeRegistry()
        self._registry = registry
        self._storage = storage
        self._events = EventBus(self._config.max_listener_failures)
        self._pool = ScoringPool(self._config.max_workers)

        # Shared mutable state, guarded by one lock
        self._lock = threading.Lock()
        self._cache = MemoryResultStorage(self._config.cache_max_entries)
        self._stats = EngineStatistics()
        self._in_flight = 0

    @property
    def config(self) -> ClassificationConfig:
        return self._config

    @property
    def events(self) -> EventBus:
        return self._events

    @property
    def registry(self) -> TypeCatalog | None:
        return self._registry

    @property
    def is_processing(self) -> bool:
        with self._lock:
            return self._in_flight > 0

    # ── Public API ──

    async def classify(
        self,
        document: Document,
        timeout: float | None = None,
    ) -> ClassificationResult:
        """Classify a document.

        Raises:
            RegistryUnavailable: no type catalog could be obtained.
            InvalidResult: the assembled result broke its invariants.
            ClassificationTimeout: ``timeout`` (or the configured default)
                expired; nothing is stored or counted.
        """
        timeout = timeout if timeout is not None else self._config.timeout_seconds
        with self._lock:
            self._in_flight += 1
        try:
            try:
                if timeout is None:
                    result = await self._compute(document)
                else:
                    result = await asyncio.wait_for(self._compute(document), timeout)
            except TimeoutError as e:
                message = f"Classification of {document.id} timed out after {timeout}s"
                self._emit_error(document.id, "ClassificationTimeout", message)
                raise ClassificationTimeout(message, document_id=document.id, timeout=timeout) from e
            self._commit(result)
            return result
        finally:
            with self._lock:
                self._in_flight -= 1

    def classify_sync(
        self,
        document: Document,
        timeout: float | None = None,
    ) -> ClassificationResult:
        """Blocking wrapper around classify()."""
        return asyncio.run(self.classify(document, timeout=timeout))

    def get_result(self, result_id: str) -> ClassificationResult | None:
        with self._lock:
            result = self._cache.get(result_id)
        if result is None and self._storage is not None:
            result = self._storage.get(result_id)
        return result

    def get_results_for_document(self, document_id: str) -> list[ClassificationResult]:
        """Cached and stored results for a document, newest first."""
        with self._lock:
            found = {r.id: r for r in self._cache.find_by_document_id(document_id)}
        if self._storage is not None:
            for r in self._storage.find_by_document_id(document_id):
                found.setdefault(r.id, r)
        return sorted(found.values(), key=lambda r: r.timestamps.completed, reverse=True)

    def get_statistics(self) -> EngineStatistics:
        with self._lock:
            return self._stats.model_copy(update={"active_results": len(self._cache)})

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()

    # ── Pipeline ──

    async def _compute(self, document: Document) -> ClassificationResult:
        """Everything up to a validated result. No shared state is touched."""
        started = datetime.now(UTC)
        self._events.emit(StartedEvent(document_id=document.id))
        try:
            types = await self._fetch_types()
            candidates = await self._score_all(document, types)

            # Primary ranking: stable, ties keep catalog order
            primary = sorted(candidates, key=lambda c: c.composite_score, reverse=True)
            confidence = compute_confidence(primary)
            ambiguity = detect_ambiguity(primary, confidence, self._config)
            reasons = build_reasons(primary, ambiguity)

            ranked, summary = self._apply_ranking(primary, reasons)
            self._events.emit(
                RankedEvent(
                    document_id=document.id,
                    candidate_count=len(ranked),
                    top_type_id=ranked[0].type_id if ranked else None,
                    ranking_applied=summary is not None,
                )
            )

            detected = (
                ranked[0].type_id
                if ranked and confidence >= self._config.confidence_threshold
                else None
            )
            result = create_result(
                document_id=document.id,
                candidates=ranked,
                confidence=confidence,
                ambiguity=ambiguity,
                reasons=reasons,
                started=started,
                completed=datetime.now(UTC),
                detected_type_id=detected,
                types_considered=len(types),
                ranking_summary=summary,
            )
            errors = validate_result(result)
            if errors:
                raise InvalidResult(
                    f"Invalid classification result: {'; '.join(errors)}",
                    errors=errors,
                    result_id=result.id,
                )
            return result
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self._emit_error(document.id, type(e).__name__, str(e))
            raise

    async def _fetch_types(self) -> list[TypeDefinition]:
        if self._registry is None:
            raise RegistryUnavailable(
                "No type registry supplied and the built-in catalog is disabled"
            )
        try:
            types = self._registry.get_all_types()
            if inspect.isawaitable(types):
                types = await types
            types = list(types or [])
        except Exception as e:
            raise RegistryUnavailable(f"Type registry failed: {e}", original=e) from e
        if not types:
            logger.warning("Type catalog is empty; nothing to classify against")
        return types

    async def _score_all(
        self,
        document: Document,
        types: list[TypeDefinition],
    ) -> list[ClassificationCandidate]:
        score = partial(
            score_candidate,
            document,
            weights=self._config.scoring_weights,
            config=self._config.scorer,
        )
        candidates = await self._pool.map(score, types)
        for candidate in candidates:
            self._events.emit(
                CandidateScoredEvent(
                    document_id=document.id,
                    type_id=candidate.type_id,
                    composite_score=candidate.composite_score,
                )
            )
        return candidates

    def _apply_ranking(
        self,
        primary: list[ClassificationCandidate],
        reasons: list[str],
    ) -> tuple[list[ClassificationCandidate], RankingSummary | None]:
        if not self._config.apply_ranking or not primary:
            return primary, None
        analysis = get_ranking_analysis(primary, self._config.ranking)
        ranked = analysis.ranked_candidates
        if ranked[0].type_id != primary[0].type_id:
            reasons.append(
                f"Candidate ranker preferred {ranked[0].type_id} over {primary[0].type_id} "
                "for breakdown consistency"
            )
        return ranked, analysis.summary

    def _commit(self, result: ClassificationResult) -> None:
        """Persist, count, and announce a finished result.

        A storage failure is reported as an ErrorEvent but does not discard
        the result: it is still cached, counted and returned.
        """
        if self._storage is not None and self._config.auto_save_results:
            try:
                self._storage.save(result)
            except Exception as e:
                logger.warning("Failed to store result %s: %s", result.id, e)
                self._emit_error(
                    result.document_id,
                    type(e).__name__,
                    f"Failed to store result {result.id}: {e}",
                )

        with self._lock:
            self._cache.save(result)
            clear = result.ambiguity_level in _CLEAR_LEVELS
            self._stats = self._stats.model_copy(
                update={
                    "total_classifications": self._stats.total_classifications + 1,
                    "total_clear_classifications": self._stats.total_clear_classifications
                    + int(clear),
                    "total_ambiguous_classifications": self._stats.total_ambiguous_classifications
                    + int(not clear),
                }
            )

        if result.ambiguity_level in _ALERT_LEVELS:
            self._events.emit(
                AmbiguousEvent(
                    document_id=result.document_id,
                    result_id=result.id,
                    ambiguity_level=result.ambiguity_level,
                    top_type_ids=[c.type_id for c in result.ranked_candidates[:3]],
                )
            )
        self._events.emit(
            CompletedEvent(
                document_id=result.document_id,
                result_id=result.id,
                detected_type_id=result.detected_type_id,
                confidence_score=result.confidence_score,
                ambiguity_level=result.ambiguity_level,
            )
        )
        logger.info(
            "Classified %s as %s (confidence %.2f, ambiguity %s)",
            result.document_id,
            result.detected_type_id or "undetermined",
            result.confidence_score,
            result.ambiguity_level,
        )

    def _emit_error(self, document_id: str, error_type: str, message: str) -> None:
        self._events.emit(
            ErrorEvent(document_id=document_id, error_type=error_type, message=message)
        )
