"""Rule model: what to decorate and how, independent of any text."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Union

from pattern_annotations.config import DEFAULT_PATTERN_OPTIONS, PatternOptions
from pattern_annotations.styles import UNDERLINE, InlineTextContent, ParagraphStyle, SpanStyle


@dataclass(frozen=True)
class MatchDetails:
    """Context handed to per-match style functions.

    ``group`` is the text of the pattern's last capturing group, or ``None`` when
    the pattern has no groups or that group did not take part in the match.
    """

    start: int
    end: int
    group: str | None


SpanStyleFunction = Callable[[MatchDetails], SpanStyle]
ParagraphStyleFunction = Callable[[MatchDetails], ParagraphStyle]
InlineContentFunction = Callable[[str], InlineTextContent]
# Either a callable ``(scope, rect) -> None`` or a symbolic value the host understands.
OnDrawBackground = Any
PatternSource = Union[str, re.Pattern]


@dataclass(frozen=True)
class LinkPlan:
    """Turns a rule into a link rule. ``on_click`` makes the link clickable instead of a URL."""

    url_or_tag: Callable[[str], str]
    on_click: Callable[[str], None] | None = None
    focused_style: SpanStyle | None = None
    hovered_style: SpanStyle | None = None
    pressed_style: SpanStyle | None = None

    @property
    def clickable(self) -> bool:
        return self.on_click is not None


@dataclass(frozen=True, eq=False)
class PatternAnnotation:
    """Describes how to decorate every match of ``pattern``.

    Rules compare and hash by identity so a rule list can key a result cache
    regardless of what its paint directives are.

    A rule with a ``link_plan`` is a link rule: its matches become links and the
    paragraph, background and inline fields are not evaluated.
    """

    pattern: re.Pattern[str]
    span_style: SpanStyleFunction | None = None
    paragraph_style: ParagraphStyleFunction | None = None
    draw_paragraph_background: OnDrawBackground | None = None
    inline_content_tag: str | None = None
    inline_content: InlineContentFunction | None = None
    link_plan: LinkPlan | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "pattern", DEFAULT_PATTERN_OPTIONS.compile(self.pattern))

    @property
    def is_link(self) -> bool:
        return self.link_plan is not None


def _constant(value: Any) -> Callable[[MatchDetails], Any] | None:
    if value is None:
        return None
    return lambda _details: value


def _compile(pattern: PatternSource, case_sensitive: bool, literal_pattern: bool) -> re.Pattern[str]:
    return PatternOptions(case_sensitive=case_sensitive, literal=literal_pattern).compile(pattern)


def basic_pattern_annotation(
    pattern: PatternSource,
    span_style: SpanStyle | None = None,
    paragraph_style: ParagraphStyle | None = None,
    inline_content_tag: str | None = None,
    case_sensitive: bool = False,
    literal_pattern: bool = False,
) -> PatternAnnotation:
    """Style every match with fixed styles.

    Example::

        italics = basic_pattern_annotation("_.*?_", span_style=SpanStyle(font_style="italic"))
    """
    return PatternAnnotation(
        pattern=_compile(pattern, case_sensitive, literal_pattern),
        span_style=_constant(span_style),
        paragraph_style=_constant(paragraph_style),
        inline_content_tag=inline_content_tag,
    )


def paragraph_pattern_annotation(
    pattern: PatternSource,
    paragraph_style: ParagraphStyle | None = None,
    span_style: SpanStyle | None = None,
    on_draw_paragraph_background: OnDrawBackground | None = None,
    case_sensitive: bool = False,
    literal_pattern: bool = False,
) -> PatternAnnotation:
    """Apply paragraph layout, and optionally a background, to the paragraphs a match spans.

    Background regions from different rules must not cover the same lines.
    """
    return PatternAnnotation(
        pattern=_compile(pattern, case_sensitive, literal_pattern),
        span_style=_constant(span_style),
        paragraph_style=_constant(paragraph_style),
        draw_paragraph_background=on_draw_paragraph_background,
    )


def inline_content_pattern_annotation(
    pattern: PatternSource,
    inline_content: InlineContentFunction | None = None,
    inline_content_tag: str | None = None,
    case_sensitive: bool = False,
    literal_pattern: bool = False,
) -> PatternAnnotation:
    """Replace every match with inline content.

    ``inline_content`` builds the content from the matched text and is called
    once per distinct match. ``inline_content_tag`` instead names content the
    caller supplies itself.
    """
    if inline_content is None and inline_content_tag is None:
        raise ValueError("inline_content or inline_content_tag is required")
    return PatternAnnotation(
        pattern=_compile(pattern, case_sensitive, literal_pattern),
        inline_content=inline_content,
        inline_content_tag=inline_content_tag,
    )


def link_pattern_annotation(
    pattern: PatternSource,
    url: str | Callable[[str], str],
    span_style: SpanStyle | None = UNDERLINE,
    focused_style: SpanStyle | None = None,
    hovered_style: SpanStyle | None = None,
    pressed_style: SpanStyle | None = None,
    case_sensitive: bool = False,
    literal_pattern: bool = False,
) -> PatternAnnotation:
    """Link every match to ``url``, a fixed address or a function of the matched text."""
    url_fn = url if callable(url) else _constant_url(url)
    return PatternAnnotation(
        pattern=_compile(pattern, case_sensitive, literal_pattern),
        span_style=_constant(span_style),
        link_plan=LinkPlan(
            url_or_tag=url_fn,
            focused_style=focused_style,
            hovered_style=hovered_style,
            pressed_style=pressed_style,
        ),
    )


def clickable_pattern_annotation(
    pattern: PatternSource,
    on_click: Callable[[str], None],
    tag: str | Callable[[str], str] | None = None,
    span_style: SpanStyle | None = UNDERLINE,
    focused_style: SpanStyle | None = None,
    hovered_style: SpanStyle | None = None,
    pressed_style: SpanStyle | None = None,
    case_sensitive: bool = False,
    literal_pattern: bool = False,
) -> PatternAnnotation:
    """Make every match clickable. ``on_click`` receives the tag, which defaults to the matched text."""
    if tag is None:
        tag_fn: Callable[[str], str] = _identity
    elif callable(tag):
        tag_fn = tag
    else:
        tag_fn = _constant_url(tag)
    return PatternAnnotation(
        pattern=_compile(pattern, case_sensitive, literal_pattern),
        span_style=_constant(span_style),
        link_plan=LinkPlan(
            url_or_tag=tag_fn,
            on_click=on_click,
            focused_style=focused_style,
            hovered_style=hovered_style,
            pressed_style=pressed_style,
        ),
    )


def _identity(matched: str) -> str:
    return matched


def _constant_url(value: str) -> Callable[[str], str]:
    return lambda _matched: value
