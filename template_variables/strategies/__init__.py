"""Concrete strategy implementations."""

from template_variables.strategies.extractors import (
    OpenAIVariableExtractor,
    PatternVariableExtractor,
)
from template_variables.strategies.template_engine import (
    ExcerptSelector,
    TemplateAnalyzer,
    TemplateNormalizer,
)

__all__ = [
    "ExcerptSelector",
    "OpenAIVariableExtractor",
    "PatternVariableExtractor",
    "TemplateAnalyzer",
    "TemplateNormalizer",
]
