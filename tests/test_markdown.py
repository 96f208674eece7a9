from pattern_annotations import MonospaceLineLayout, ParagraphBackgrounds, SpanStyle, evaluate
from pattern_annotations.markdown import (
    CODE_BLOCK,
    HEADERS,
    INLINE_CODE,
    MARKDOWN_PATTERN_ANNOTATIONS,
    QUOTE_BLOCK,
    RoundedBackground,
)


class TestMarkdownPresets:
    def test_header_size_depends_on_level(self):
        result = evaluate([HEADERS], "# One\n### Three\nplain")
        assert [r.style for r in result.span_styles()] == [
            SpanStyle(font_weight="bold", font_size=31.0),
            SpanStyle(font_weight="bold", font_size=25.0),
        ]

    def test_inline_code_is_monospace(self):
        result = evaluate([INLINE_CODE], "call `run()` now")
        (code,) = result.span_styles()
        assert (code.start, code.end) == (5, 12)
        assert code.style.font_family == "monospace"

    def test_quote_lines_get_background(self):
        text = "intro\n> quoted line\nafter"
        result = evaluate([QUOTE_BLOCK], text)
        (region,) = result.background_regions
        assert text[region.start:region.end + 1] == "> quoted line\n"
        assert region.on_draw == RoundedBackground(full_width=True)
        assert [r.kind for r in result.ranged_annotations] == ["span_style", "paragraph_style"]

    def test_code_block_background_is_left_bar(self):
        result = evaluate([CODE_BLOCK], "```\nx = 1\n```")
        (region,) = result.background_regions
        assert region.on_draw.bar_width == 4.0

    def test_preset_order(self):
        assert MARKDOWN_PATTERN_ANNOTATIONS == [QUOTE_BLOCK, INLINE_CODE, CODE_BLOCK, HEADERS]

    def test_full_document_backgrounds_resolve(self):
        text = "# Title\n> a quote\n```\ncode\n```\nend"
        result = evaluate(MARKDOWN_PATTERN_ANNOTATIONS, text)
        painted = []
        backgrounds = ParagraphBackgrounds(result.background_regions)
        backgrounds.on_text_layout(MonospaceLineLayout(text))
        backgrounds.draw(None, painter=lambda scope, rect, directive: painted.append((rect.top, rect.bottom)))
        assert painted == [(1.0, 2.0), (2.0, 5.0)]
        assert result.text == text
