from __future__ import annotations

import itertools
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Hashable, Iterable

from pattern_annotations.config import AnnotatorConfig, PerformanceStrategy
from pattern_annotations.core import AnnotationResult, evaluate
from pattern_annotations.model import PatternAnnotation

logger = logging.getLogger(__name__)


def _rule_tuple(rules: PatternAnnotation | Iterable[PatternAnnotation]) -> tuple[PatternAnnotation, ...]:
    if isinstance(rules, PatternAnnotation):
        return (rules,)
    return tuple(rules)


class PatternAnnotator:
    """Memoizes annotation results for the latest ``(text, rules)`` pair.

    With the immediate strategy a changed input is evaluated on the caller's
    thread. With the performant strategy the caller gets the previous result (an
    unstyled one the first time) and evaluation runs on a single worker thread;
    ``on_update`` is called with the new result once it is applied. Every
    submission is numbered and only the latest number may publish its result, so
    a slow evaluation of an older input never replaces a newer one.
    """

    def __init__(
        self,
        config: AnnotatorConfig | None = None,
        on_update: Callable[[AnnotationResult], None] | None = None,
    ) -> None:
        self.config = config or AnnotatorConfig()
        self._on_update = on_update
        self._key: tuple[str, tuple[Hashable, ...]] | None = None
        self._result: AnnotationResult | None = None
        self._sequence = itertools.count(1)
        self._latest = 0
        self._pending: Future[AnnotationResult] | None = None
        self._executor: ThreadPoolExecutor | None = None

    @property
    def strategy(self) -> PerformanceStrategy:
        return self.config.strategy

    @property
    def result(self) -> AnnotationResult | None:
        return self._result

    def annotate(self, text: str, rules: PatternAnnotation | Iterable[PatternAnnotation]) -> AnnotationResult:
        rule_tuple = _rule_tuple(rules)
        key = (text, rule_tuple)
        if key == self._key and self._result is not None:
            return self._result

        if self.strategy is PerformanceStrategy.IMMEDIATE:
            logger.debug(f"Recomputing annotations for {len(text)} chars with {len(rule_tuple)} rules")
            self._result = evaluate(rule_tuple, text)
            self._key = key
            return self._result

        self._key = key
        if self._result is None:
            self._result = AnnotationResult.unstyled(text)
        current = self._result
        self._submit(text, rule_tuple)
        return current

    def _submit(self, text: str, rules: tuple[PatternAnnotation, ...]) -> None:
        sequence = next(self._sequence)
        self._latest = sequence
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=self.config.thread_name_prefix)
        logger.debug(f"Submitting deferred annotation #{sequence} for {len(text)} chars")
        self._pending = self._executor.submit(self._run, sequence, text, rules)

    def _run(self, sequence: int, text: str, rules: tuple[PatternAnnotation, ...]) -> AnnotationResult:
        try:
            result = evaluate(rules, text)
        except Exception:
            logger.exception(f"Deferred annotation #{sequence} failed")
            if sequence == self._latest:
                self._key = None
            raise
        if sequence != self._latest:
            logger.debug(f"Discarding stale annotation #{sequence}, latest is #{self._latest}")
            return result
        self._result = result
        if self._on_update is not None:
            self._on_update(result)
        return result

    def wait(self, timeout: float | None = None) -> AnnotationResult | None:
        """Block until the latest deferred submission has been applied and return the current result.

        Re-raises an exception raised while evaluating that submission.
        """
        if self._pending is not None:
            self._pending.result(timeout=timeout if timeout is not None else self.config.wait_timeout_seconds)
        return self._result

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self) -> PatternAnnotator:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def pattern_annotated_string(
    text: str,
    rules: PatternAnnotation | Iterable[PatternAnnotation],
    strategy: PerformanceStrategy = PerformanceStrategy.IMMEDIATE,
) -> AnnotationResult:
    """One-shot annotation. The performant strategy waits for the worker before returning."""
    with PatternAnnotator(AnnotatorConfig(strategy=strategy)) as annotator:
        annotator.annotate(text, rules)
        return annotator.wait()
