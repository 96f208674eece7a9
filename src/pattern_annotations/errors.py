"""Error types raised while building rules and resolving backgrounds."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pattern_annotations.core import BackgroundRegion


class PatternAnnotationError(Exception):
    """Base class for errors raised by this package."""


class InvalidPatternError(PatternAnnotationError, ValueError):
    """A rule's regular expression could not be compiled."""

    def __init__(self, pattern: object, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"invalid pattern {pattern!r}: {reason}")


class OverlappingParagraphRegionError(PatternAnnotationError):
    """Two background regions resolve to overlapping line spans."""

    def __init__(self, first: BackgroundRegion, second: BackgroundRegion) -> None:
        self.first = first
        self.second = second
        super().__init__(
            f"background regions [{first.start}, {first.end}] and "
            f"[{second.start}, {second.end}] cover overlapping lines"
        )
