from __future__ import annotations

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from pattern_annotations.errors import InvalidPatternError


class PerformanceStrategy(str, Enum):
    """How ``PatternAnnotator`` schedules recomputation."""

    IMMEDIATE = "immediate"
    PERFORMANT = "performant"


class PatternOptions(BaseModel):
    """Compilation options for a rule's pattern, resolved once at construction.

    Attributes:
        case_sensitive: Match case exactly. Rules are case-insensitive by default.
        literal: Treat the pattern as plain text rather than a regular expression.
        multiline: ``^`` and ``$`` match at every line boundary.
        dot_all: ``.`` also matches newlines.
    """

    model_config = ConfigDict(frozen=True)

    case_sensitive: bool = Field(default=False, description="Match case exactly")
    literal: bool = Field(default=False, description="Escape the pattern before compiling")
    multiline: bool = Field(default=False, description="Anchors match at line boundaries")
    dot_all: bool = Field(default=False, description="Dot matches newlines")

    def flags(self) -> int:
        flags = 0
        if not self.case_sensitive:
            flags |= re.IGNORECASE
        if self.multiline:
            flags |= re.MULTILINE
        if self.dot_all:
            flags |= re.DOTALL
        return flags

    def compile(self, pattern: str | re.Pattern[str]) -> re.Pattern[str]:
        """Compile ``pattern`` with these options.

        An already compiled pattern is returned unchanged, its own flags win.

        Raises:
            InvalidPatternError: The pattern is not a valid regular expression
                over text, or is neither a string nor a compiled pattern.
        """
        if isinstance(pattern, re.Pattern):
            if not isinstance(pattern.pattern, str):
                raise InvalidPatternError(pattern, "compiled pattern does not match text")
            return pattern
        if not isinstance(pattern, str):
            raise InvalidPatternError(pattern, f"expected a string or compiled pattern, got {type(pattern).__name__}")
        source = re.escape(pattern) if self.literal else pattern
        try:
            return re.compile(source, self.flags())
        except re.error as exc:
            raise InvalidPatternError(pattern, str(exc)) from exc


DEFAULT_PATTERN_OPTIONS = PatternOptions()


class AnnotatorConfig(BaseModel):
    """Settings for the result cache and its background worker.

    Attributes:
        strategy: ``immediate`` recomputes on the caller's thread; ``performant``
            returns the previous result and recomputes on a worker thread.
        thread_name_prefix: Name prefix for the worker thread.
        wait_timeout_seconds: Default timeout for ``PatternAnnotator.wait``.
    """

    strategy: PerformanceStrategy = Field(
        default=PerformanceStrategy.IMMEDIATE, description="Recomputation scheduling strategy"
    )
    thread_name_prefix: str = Field(
        default="pattern-annotations", min_length=1, description="Worker thread name prefix"
    )
    wait_timeout_seconds: float | None = Field(
        default=None, gt=0, description="Default timeout when waiting for a deferred result"
    )
