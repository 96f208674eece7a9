"""Background geometry: turns background regions into rectangles once line layout is known.

Backgrounds need a two-pass render. The first pass lays out the text with the
styles from the ranged annotations; the host then hands that layout to
``resolve`` (or ``ParagraphBackgrounds.on_text_layout``) and paints the
resulting rectangles behind the text in a second pass.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Iterable, Protocol, Sequence

from pattern_annotations.core import BackgroundRegion
from pattern_annotations.errors import OverlappingParagraphRegionError
from pattern_annotations.model import OnDrawBackground

logger = logging.getLogger(__name__)


class LineLayout(Protocol):
    """Line metrics supplied by the host's text layout."""

    def line_for_offset(self, offset: int) -> int: ...

    def line_left(self, line: int) -> float: ...

    def line_top(self, line: int) -> float: ...

    def line_right(self, line: int) -> float: ...

    def line_bottom(self, line: int) -> float: ...


@dataclass(frozen=True)
class Rect:
    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    def copy(self, **changes: float) -> Rect:
        return replace(self, **changes)


@dataclass(frozen=True)
class BackgroundToDraw:
    rect: Rect
    on_draw: OnDrawBackground
    start_line: int
    end_line: int


def paragraph_bounds(layout: LineLayout, start_line: int, end_line: int) -> Rect:
    """Bounding box from the top-left of ``start_line`` to the bottom-right of ``end_line``."""
    return Rect(
        left=layout.line_left(start_line),
        top=layout.line_top(start_line),
        right=layout.line_right(end_line),
        bottom=layout.line_bottom(end_line),
    )


def resolve(background_regions: Iterable[BackgroundRegion], layout: LineLayout) -> list[BackgroundToDraw]:
    """Project each region onto the lines containing its first and last characters.

    Regions are resolved independently; overlapping regions are not detected here.
    """
    out: list[BackgroundToDraw] = []
    for region in background_regions:
        start_line = layout.line_for_offset(region.start)
        end_line = layout.line_for_offset(region.end)
        out.append(
            BackgroundToDraw(
                rect=paragraph_bounds(layout, start_line, end_line),
                on_draw=region.on_draw,
                start_line=start_line,
                end_line=end_line,
            )
        )
    return out


def _check_overlaps(regions: Sequence[BackgroundRegion], resolved: Sequence[BackgroundToDraw]) -> None:
    spans = sorted(zip(resolved, regions), key=lambda pair: (pair[0].start_line, pair[0].end_line))
    for (prev, prev_region), (cur, cur_region) in zip(spans, spans[1:]):
        if cur.start_line <= prev.end_line:
            raise OverlappingParagraphRegionError(prev_region, cur_region)


class ParagraphBackgrounds:
    """Host-side holder for the backgrounds of one annotated text.

    Call ``on_text_layout`` from the layout callback of the first pass, then
    ``draw`` while painting behind the text. Both run on the rendering thread.
    """

    def __init__(self, background_regions: Sequence[BackgroundRegion], reject_overlaps: bool = True) -> None:
        self._regions = tuple(background_regions)
        self._reject_overlaps = reject_overlaps
        self._to_draw: list[BackgroundToDraw] = []

    @property
    def backgrounds_to_draw(self) -> list[BackgroundToDraw]:
        return list(self._to_draw)

    def on_text_layout(self, layout: LineLayout) -> list[BackgroundToDraw]:
        """Recompute rectangles for a new layout.

        Raises:
            OverlappingParagraphRegionError: Two regions cover a common line and
                ``reject_overlaps`` is set.
        """
        resolved = resolve(self._regions, layout)
        if self._reject_overlaps:
            _check_overlaps(self._regions, resolved)
        self._to_draw = resolved
        logger.debug(f"Resolved {len(resolved)} paragraph backgrounds")
        return self.backgrounds_to_draw

    def draw(self, scope: Any, painter: Callable[[Any, Rect, Any], None] | None = None) -> None:
        """Paint every resolved background.

        Callable directives are called as ``on_draw(scope, rect)``. Anything else
        is passed to ``painter(scope, rect, directive)``; without a painter,
        symbolic directives raise ``TypeError``.
        """
        for item in self._to_draw:
            if callable(item.on_draw):
                item.on_draw(scope, item.rect)
            elif painter is not None:
                painter(scope, item.rect, item.on_draw)
            else:
                raise TypeError(f"no painter for background directive {item.on_draw!r}")


class MonospaceLineLayout:
    """Fixed-pitch line layout for hosts without a layout engine of their own.

    Lines break at ``\\n`` and, when ``max_chars_per_line`` is set, every
    ``max_chars_per_line`` characters. A newline belongs to the line it ends.
    """

    def __init__(
        self,
        text: str,
        char_width: float = 1.0,
        line_height: float = 1.0,
        max_chars_per_line: int | None = None,
    ) -> None:
        if char_width <= 0 or line_height <= 0:
            raise ValueError("char_width and line_height must be positive")
        if max_chars_per_line is not None and max_chars_per_line < 1:
            raise ValueError("max_chars_per_line must be at least 1")
        self.text = text
        self.char_width = char_width
        self.line_height = line_height
        self._lines = self._break_lines(text, max_chars_per_line)

    @staticmethod
    def _break_lines(text: str, max_chars: int | None) -> list[tuple[int, int]]:
        lines: list[tuple[int, int]] = []
        start = 0
        for raw in text.split("\n"):
            end = start + len(raw)
            if max_chars is None or len(raw) <= max_chars:
                lines.append((start, end))
            else:
                for chunk in range(start, end, max_chars):
                    lines.append((chunk, min(chunk + max_chars, end)))
            start = end + 1
        return lines

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def line_for_offset(self, offset: int) -> int:
        if offset <= 0:
            return 0
        for index, (start, end) in enumerate(self._lines):
            # a newline sits at ``end`` and belongs to this line
            if start <= offset <= end:
                if offset == end and index + 1 < len(self._lines) and self._lines[index + 1][0] == end:
                    continue
                return index
        return len(self._lines) - 1

    def line_left(self, line: int) -> float:
        return 0.0

    def line_top(self, line: int) -> float:
        return line * self.line_height

    def line_right(self, line: int) -> float:
        start, end = self._lines[line]
        return (end - start) * self.char_width

    def line_bottom(self, line: int) -> float:
        return (line + 1) * self.line_height
