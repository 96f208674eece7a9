"""Renderer-agnostic style payloads and inline content descriptors.

Values here are plain data. A host renderer maps them onto its own text
attributes; the engine only passes them through.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Callable, Literal

VerticalAlign = Literal["top", "center", "bottom", "text_top", "text_bottom", "text_center"]


def _overlay(base: Any, other: Any) -> Any:
    changes = {f.name: getattr(other, f.name) for f in fields(other) if getattr(other, f.name) is not None}
    return replace(base, **changes)


@dataclass(frozen=True)
class SpanStyle:
    """Character-level appearance. ``None`` fields are left to the renderer."""

    color: str | None = None
    background: str | None = None
    font_family: str | None = None
    font_size: float | None = None
    font_weight: str | None = None
    font_style: str | None = None
    text_decoration: str | None = None

    def merge(self, other: SpanStyle | None) -> SpanStyle:
        """Return this style with the set fields of ``other`` laid on top."""
        if other is None:
            return self
        return _overlay(self, other)


@dataclass(frozen=True)
class ParagraphStyle:
    """Line-level layout for the paragraphs a match spans."""

    text_align: str | None = None
    line_height: float | None = None
    text_indent_first_line: float | None = None
    text_indent_rest_line: float | None = None
    line_break: str | None = None

    def merge(self, other: ParagraphStyle | None) -> ParagraphStyle:
        if other is None:
            return self
        return _overlay(self, other)


@dataclass(frozen=True)
class LinkStyles:
    """Style bundle for a link in its resting and interaction states."""

    style: SpanStyle | None = None
    focused_style: SpanStyle | None = None
    hovered_style: SpanStyle | None = None
    pressed_style: SpanStyle | None = None


UNDERLINE = SpanStyle(text_decoration="underline")


@dataclass(frozen=True)
class Placeholder:
    """Space reserved in the text flow for inline content, sized in em."""

    width: float
    height: float
    vertical_align: VerticalAlign = "center"


@dataclass(frozen=True)
class InlineTextContent:
    placeholder: Placeholder
    content: Callable[[str], Any]


def inline_text_content(
    content: Callable[[str], Any],
    width: float = 1.0,
    height: float = 1.0,
    vertical_align: VerticalAlign = "center",
) -> InlineTextContent:
    """Build inline content that occupies a ``width`` x ``height`` em box.

    ``content`` is called by the host with the alternate text of the placeholder
    (the matched text or the rule's tag) and returns whatever the host renders.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"placeholder size must be positive, got {width}x{height}")
    return InlineTextContent(Placeholder(width, height, vertical_align), content)
