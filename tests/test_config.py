import re

import pytest
from pydantic import ValidationError

from pattern_annotations import AnnotatorConfig, InvalidPatternError, PatternOptions, PerformanceStrategy


class TestPatternOptions:
    def test_defaults(self):
        options = PatternOptions()
        assert options.flags() == re.IGNORECASE

    def test_flags(self):
        options = PatternOptions(case_sensitive=True, multiline=True, dot_all=True)
        assert options.flags() == re.MULTILINE | re.DOTALL

    def test_compile_literal(self):
        pattern = PatternOptions(literal=True).compile("1+1")
        assert pattern.search("1+1=2")
        assert not pattern.search("11")

    def test_compiled_pattern_passes_through(self):
        compiled = re.compile("x")
        assert PatternOptions(case_sensitive=True).compile(compiled) is compiled

    def test_invalid_pattern(self):
        with pytest.raises(InvalidPatternError):
            PatternOptions().compile("a{2,1}")

    def test_bytes_pattern_rejected(self):
        with pytest.raises(InvalidPatternError):
            PatternOptions().compile(re.compile(b"a"))

    def test_non_pattern_rejected(self):
        with pytest.raises(InvalidPatternError) as excinfo:
            PatternOptions().compile(None)
        assert excinfo.value.pattern is None

    def test_frozen(self):
        options = PatternOptions()
        with pytest.raises(ValidationError):
            options.literal = True


class TestAnnotatorConfig:
    def test_defaults(self):
        config = AnnotatorConfig()
        assert config.strategy is PerformanceStrategy.IMMEDIATE
        assert config.thread_name_prefix == "pattern-annotations"
        assert config.wait_timeout_seconds is None

    def test_strategy_from_string(self):
        assert AnnotatorConfig(strategy="performant").strategy is PerformanceStrategy.PERFORMANT

    def test_unknown_strategy_rejected(self):
        with pytest.raises(ValidationError):
            AnnotatorConfig(strategy="eventually")

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            AnnotatorConfig(wait_timeout_seconds=0)

    def test_thread_prefix_must_not_be_empty(self):
        with pytest.raises(ValidationError):
            AnnotatorConfig(thread_name_prefix="")
