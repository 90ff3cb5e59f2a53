"""Variable extractor implementations."""

from template_variables.strategies.extractors.openai import OpenAIVariableExtractor
from template_variables.strategies.extractors.pattern import PatternVariableExtractor

__all__ = ["OpenAIVariableExtractor", "PatternVariableExtractor"]
