"""Ready-made rules for a handful of markdown constructs.

These only decorate; the markdown syntax characters stay in the text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from pattern_annotations.model import MatchDetails, PatternAnnotation
from pattern_annotations.styles import ParagraphStyle, SpanStyle


@dataclass(frozen=True)
class RoundedBackground:
    """Symbolic background directive: a rounded rectangle behind the paragraph.

    ``full_width`` stretches the rectangle to the width of the text box;
    ``bar_width`` draws only a bar of that width along the left edge.
    """

    color: str = "lightgray"
    corner_radius: float = 10.0
    full_width: bool = False
    bar_width: float | None = None


def _header_style(details: MatchDetails) -> SpanStyle:
    level = len(details.group or "")
    return SpanStyle(font_weight="bold", font_size=float(34 - level * 3))


QUOTE_BLOCK = PatternAnnotation(
    pattern=re.compile(r"^>.*\n?", re.MULTILINE),
    span_style=lambda _: SpanStyle(font_size=16.0),
    paragraph_style=lambda _: ParagraphStyle(
        line_height=2.0,
        text_indent_first_line=20.0,
        text_indent_rest_line=20.0,
    ),
    draw_paragraph_background=RoundedBackground(full_width=True),
)

INLINE_CODE = PatternAnnotation(
    pattern=re.compile(r"`[^`\s]+`|(?<=[^`])``(?=[^`])"),
    span_style=lambda _: SpanStyle(font_family="monospace"),
)

CODE_BLOCK = PatternAnnotation(
    pattern=re.compile(r"```[^` ][^`]*[^ ]?```"),
    span_style=lambda _: SpanStyle(font_family="monospace"),
    paragraph_style=lambda _: ParagraphStyle(
        line_height=2.0,
        text_indent_first_line=10.0,
        text_indent_rest_line=10.0,
    ),
    draw_paragraph_background=RoundedBackground(bar_width=4.0),
)

# header level comes from the captured run of '#'
HEADERS = PatternAnnotation(
    pattern=re.compile(r"^(#{1,6}) .*$", re.MULTILINE),
    span_style=_header_style,
)

MARKDOWN_PATTERN_ANNOTATIONS: list[PatternAnnotation] = [
    QUOTE_BLOCK,
    INLINE_CODE,
    CODE_BLOCK,
    HEADERS,
]
