# Pattern annotation engine.
#
# Runs every rule's compiled pattern over the text, in rule order, and returns the
# resulting style, link and inline-placeholder ranges, background regions and
# inline content without touching the text itself.

from __future__ import annotations

import logging
import re
from dataclasses import asdict, dataclass, field, is_dataclass
from itertools import chain
from types import MappingProxyType
from typing import Any, Callable, ClassVar, Iterable, Mapping, Sequence, Union

from pattern_annotations.model import MatchDetails, OnDrawBackground, PatternAnnotation
from pattern_annotations.styles import InlineTextContent, LinkStyles, ParagraphStyle, SpanStyle

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Ranged annotations
# ---------------------------------------------------------------------------


def _style_payload(style: Any) -> Any:
    if style is None:
        return None
    if is_dataclass(style) and not isinstance(style, type):
        return {k: v for k, v in asdict(style).items() if v is not None}
    return style


@dataclass(frozen=True)
class SpanStyleRange:
    kind: ClassVar[str] = "span_style"

    start: int
    end: int
    style: SpanStyle

    def to_payload(self) -> dict[str, object]:
        return {"type": self.kind, "start": self.start, "end": self.end, "style": _style_payload(self.style)}


@dataclass(frozen=True)
class ParagraphStyleRange:
    kind: ClassVar[str] = "paragraph_style"

    start: int
    end: int
    style: ParagraphStyle

    def to_payload(self) -> dict[str, object]:
        return {"type": self.kind, "start": self.start, "end": self.end, "style": _style_payload(self.style)}


@dataclass(frozen=True)
class LinkAnnotation:
    """Link target plus styles. Clickable when ``on_click`` is set, a plain URL otherwise."""

    url_or_tag: str
    styles: LinkStyles
    on_click: Callable[[str], None] | None = None

    @property
    def kind(self) -> str:
        return "clickable" if self.on_click is not None else "url"

    def click(self) -> None:
        """Notify the rule's click handler. URL links are opened by the host instead."""
        if self.on_click is not None:
            self.on_click(self.url_or_tag)


@dataclass(frozen=True)
class LinkRange:
    kind: ClassVar[str] = "link"

    start: int
    end: int
    link: LinkAnnotation

    def to_payload(self) -> dict[str, object]:
        styles = self.link.styles
        return {
            "type": self.kind,
            "start": self.start,
            "end": self.end,
            "link_type": self.link.kind,
            "url_or_tag": self.link.url_or_tag,
            "styles": {
                "style": _style_payload(styles.style),
                "focused_style": _style_payload(styles.focused_style),
                "hovered_style": _style_payload(styles.hovered_style),
                "pressed_style": _style_payload(styles.pressed_style),
            },
        }


@dataclass(frozen=True)
class InlinePlaceholderRange:
    """Text to be replaced by inline content. ``key`` is looked up in the inline content map or by tag."""

    kind: ClassVar[str] = "inline_placeholder"

    start: int
    end: int
    key: str

    def to_payload(self) -> dict[str, object]:
        return {"type": self.kind, "start": self.start, "end": self.end, "key": self.key}


RangedAnnotation = Union[SpanStyleRange, ParagraphStyleRange, LinkRange, InlinePlaceholderRange]


@dataclass(frozen=True)
class BackgroundRegion:
    """Background to paint behind the paragraphs spanning ``start``..``end``.

    ``end`` is the last included character, not one past it.
    """

    start: int
    end: int
    on_draw: OnDrawBackground


@dataclass(frozen=True)
class DiscoveredInlineContent:
    """An inline placeholder found for a tagged rule: the matched text and the rule's tag."""

    content_id: str
    pattern_tag: str


@dataclass(frozen=True)
class TextSegment:
    """A run of text with the same set of ranges covering all of it."""

    start: int
    end: int
    text: str
    annotations: tuple[RangedAnnotation, ...]


@dataclass(frozen=True)
class AnnotationResult:
    """Everything a set of rules produced for one text.

    Built fresh for every evaluation and never mutated. ``styled`` is ``False``
    only for the placeholder handed out while a deferred evaluation is pending.
    """

    text: str
    ranged_annotations: tuple[RangedAnnotation, ...] = ()
    background_regions: tuple[BackgroundRegion, ...] = ()
    inline_content_map: Mapping[str, InlineTextContent] = field(default_factory=lambda: MappingProxyType({}))
    discovered_inline_content: tuple[DiscoveredInlineContent, ...] = ()
    styled: bool = True

    @classmethod
    def unstyled(cls, text: str) -> AnnotationResult:
        return cls(text=text, styled=False)

    def span_styles(self) -> list[SpanStyleRange]:
        return [r for r in self.ranged_annotations if isinstance(r, SpanStyleRange)]

    def paragraph_styles(self) -> list[ParagraphStyleRange]:
        return [r for r in self.ranged_annotations if isinstance(r, ParagraphStyleRange)]

    def links(self) -> list[LinkRange]:
        return [r for r in self.ranged_annotations if isinstance(r, LinkRange)]

    def inline_placeholders(self) -> list[InlinePlaceholderRange]:
        return [r for r in self.ranged_annotations if isinstance(r, InlinePlaceholderRange)]

    def segments(self) -> list[TextSegment]:
        """Split the text at every range boundary.

        The segment texts concatenate back to ``text``; each segment lists the
        non-empty ranges covering it, in emission order.
        """
        boundaries = {0, len(self.text)}
        for r in self.ranged_annotations:
            boundaries.add(r.start)
            boundaries.add(r.end)
        points = sorted(boundaries)
        out: list[TextSegment] = []
        for start, end in zip(points, points[1:]):
            covering = tuple(r for r in self.ranged_annotations if r.start <= start and end <= r.end)
            out.append(TextSegment(start, end, self.text[start:end], covering))
        return out

    def to_payload(self) -> dict[str, object]:
        return {
            "text": self.text,
            "styled": self.styled,
            "ranged_annotations": [r.to_payload() for r in self.ranged_annotations],
            "background_regions": [{"start": b.start, "end": b.end} for b in self.background_regions],
            "inline_content_keys": list(self.inline_content_map),
            "discovered_inline_content": [
                {"content_id": d.content_id, "pattern_tag": d.pattern_tag} for d in self.discovered_inline_content
            ],
        }


# ---------------------------------------------------------------------------
# Evaluation state
# ---------------------------------------------------------------------------


@dataclass
class _RuleResult:
    ranges: list[RangedAnnotation]
    backgrounds: list[BackgroundRegion]
    discovered: list[DiscoveredInlineContent]
    generated: dict[str, InlineTextContent]


@dataclass(frozen=True)
class _EvaluationState:
    ranges: tuple[RangedAnnotation, ...]
    backgrounds: tuple[BackgroundRegion, ...]
    discovered: tuple[DiscoveredInlineContent, ...]
    inline_content: dict[str, InlineTextContent]

    @classmethod
    def collect(cls, results: Sequence[_RuleResult], inline_content: dict[str, InlineTextContent]) -> _EvaluationState:
        return cls(
            ranges=tuple(chain.from_iterable(r.ranges for r in results)),
            backgrounds=tuple(chain.from_iterable(r.backgrounds for r in results)),
            discovered=tuple(chain.from_iterable(r.discovered for r in results)),
            inline_content=inline_content,
        )


# ---------------------------------------------------------------------------
# Rule evaluation
# ---------------------------------------------------------------------------


def _match_details(match: re.Match[str]) -> MatchDetails:
    groups = match.re.groups
    return MatchDetails(match.start(), match.end(), match.group(groups) if groups else None)


def _link_range(rule: PatternAnnotation, matched: str, details: MatchDetails) -> LinkRange:
    plan = rule.link_plan
    url_or_tag = plan.url_or_tag(matched)
    styles = LinkStyles(
        style=rule.span_style(details) if rule.span_style is not None else None,
        focused_style=plan.focused_style,
        hovered_style=plan.hovered_style,
        pressed_style=plan.pressed_style,
    )
    return LinkRange(details.start, details.end, LinkAnnotation(url_or_tag, styles, plan.on_click))


def _evaluate_rule(rule: PatternAnnotation, text: str, inline_content: Mapping[str, InlineTextContent]) -> _RuleResult:
    result = _RuleResult(ranges=[], backgrounds=[], discovered=[], generated={})
    for m in rule.pattern.finditer(text):
        start, end = m.start(), m.end()
        matched = m.group(0)
        details = _match_details(m)

        if rule.link_plan is not None:
            result.ranges.append(_link_range(rule, matched, details))
            continue

        if rule.span_style is not None:
            result.ranges.append(SpanStyleRange(start, end, rule.span_style(details)))
        if rule.paragraph_style is not None:
            result.ranges.append(ParagraphStyleRange(start, end, rule.paragraph_style(details)))
        if rule.draw_paragraph_background is not None and end > start:
            result.backgrounds.append(BackgroundRegion(start, end - 1, rule.draw_paragraph_background))
        if rule.inline_content_tag is not None:
            result.ranges.append(InlinePlaceholderRange(start, end, rule.inline_content_tag))
            result.discovered.append(DiscoveredInlineContent(matched, rule.inline_content_tag))
        if rule.inline_content is not None:
            if matched not in inline_content and matched not in result.generated:
                result.generated[matched] = rule.inline_content(matched)
            result.ranges.append(InlinePlaceholderRange(start, end, matched))
    return result


def _run_rules(rules: Sequence[PatternAnnotation], text: str) -> _EvaluationState:
    inline_content: dict[str, InlineTextContent] = {}
    results: list[_RuleResult] = []
    for rule in rules:
        result = _evaluate_rule(rule, text, inline_content)
        inline_content.update(result.generated)
        results.append(result)
    return _EvaluationState.collect(results, inline_content)


def _as_rule_list(rules: PatternAnnotation | Iterable[PatternAnnotation]) -> list[PatternAnnotation]:
    if isinstance(rules, PatternAnnotation):
        return [rules]
    return list(rules)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def evaluate(rules: PatternAnnotation | Iterable[PatternAnnotation], text: str) -> AnnotationResult:
    """Run ``rules`` over ``text`` and collect every decoration they produce.

    Rules are applied in order and each rule's matches left to right, so a
    renderer that applies ranges in order lets later rules win where they
    overlap. Ranges always index into ``text``, which is returned unchanged.

    Args:
        rules: One rule or an ordered sequence of rules.
        text: The text to scan.

    Returns:
        An immutable ``AnnotationResult``.
    """
    rule_list = _as_rule_list(rules)
    state = _run_rules(rule_list, text)
    logger.debug(
        f"Evaluated {len(rule_list)} rules over {len(text)} chars: "
        f"{len(state.ranges)} ranges, {len(state.backgrounds)} backgrounds"
    )
    return AnnotationResult(
        text=text,
        ranged_annotations=state.ranges,
        background_regions=state.backgrounds,
        inline_content_map=MappingProxyType(state.inline_content),
        discovered_inline_content=state.discovered,
    )


def annotated_with(text: str, rules: PatternAnnotation | Iterable[PatternAnnotation]) -> AnnotationResult:
    return evaluate(rules, text)


