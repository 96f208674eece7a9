# SPDX-License-Identifier: Apache-2.0
"""Pattern-driven text annotations.

Describe decorations as rules ("wherever this regex matches, apply this style,
paint this background, insert this inline content or attach this link") and
compute the resulting ranges for a text without changing it.

Usage::

    from pattern_annotations import SpanStyle, basic_pattern_annotation, evaluate

    italics = basic_pattern_annotation("_.*?_", span_style=SpanStyle(font_style="italic"))
    result = evaluate([italics], "I _love_ italics")
"""

from pattern_annotations.annotator import PatternAnnotator, pattern_annotated_string
from pattern_annotations.config import AnnotatorConfig, PatternOptions, PerformanceStrategy
from pattern_annotations.core import (
    AnnotationResult,
    BackgroundRegion,
    DiscoveredInlineContent,
    InlinePlaceholderRange,
    LinkAnnotation,
    LinkRange,
    ParagraphStyleRange,
    RangedAnnotation,
    SpanStyleRange,
    TextSegment,
    annotated_with,
    evaluate,
)
from pattern_annotations.errors import InvalidPatternError, OverlappingParagraphRegionError, PatternAnnotationError
from pattern_annotations.geometry import (
    BackgroundToDraw,
    LineLayout,
    MonospaceLineLayout,
    ParagraphBackgrounds,
    Rect,
    paragraph_bounds,
    resolve,
)
from pattern_annotations.model import (
    LinkPlan,
    MatchDetails,
    PatternAnnotation,
    basic_pattern_annotation,
    clickable_pattern_annotation,
    inline_content_pattern_annotation,
    link_pattern_annotation,
    paragraph_pattern_annotation,
)
from pattern_annotations.styles import (
    InlineTextContent,
    LinkStyles,
    ParagraphStyle,
    Placeholder,
    SpanStyle,
    inline_text_content,
)

__all__ = [
    "AnnotationResult",
    "AnnotatorConfig",
    "BackgroundRegion",
    "BackgroundToDraw",
    "DiscoveredInlineContent",
    "InlinePlaceholderRange",
    "InlineTextContent",
    "InvalidPatternError",
    "LineLayout",
    "LinkAnnotation",
    "LinkPlan",
    "LinkRange",
    "LinkStyles",
    "MatchDetails",
    "MonospaceLineLayout",
    "OverlappingParagraphRegionError",
    "ParagraphBackgrounds",
    "ParagraphStyle",
    "ParagraphStyleRange",
    "PatternAnnotation",
    "PatternAnnotationError",
    "PatternAnnotator",
    "PatternOptions",
    "PerformanceStrategy",
    "Placeholder",
    "RangedAnnotation",
    "Rect",
    "SpanStyle",
    "SpanStyleRange",
    "TextSegment",
    "annotated_with",
    "basic_pattern_annotation",
    "clickable_pattern_annotation",
    "evaluate",
    "inline_content_pattern_annotation",
    "inline_text_content",
    "link_pattern_annotation",
    "paragraph_bounds",
    "paragraph_pattern_annotation",
    "pattern_annotated_string",
    "resolve",
]
