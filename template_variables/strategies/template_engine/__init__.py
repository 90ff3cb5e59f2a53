"""Template engine strategies.

Implements excerpt selection, position reconciliation, template analysis
and canonical-token normalization for plain-text templates.
"""

from template_variables.strategies.template_engine.analyzer import TemplateAnalyzer
from template_variables.strategies.template_engine.excerpt import ExcerptSelector
from template_variables.strategies.template_engine.models import (
    AnalysisResult,
    Excerpt,
    Occurrence,
    RawAnalysis,
    RawOccurrence,
    RawVariable,
    TemplateSummary,
    Variable,
)
from template_variables.strategies.template_engine.normalizer import (
    TemplateNormalizer,
    canonical_token,
)
from template_variables.strategies.template_engine.reconciler import find_occurrences, reconcile

__all__ = [
    "AnalysisResult",
    "Excerpt",
    "ExcerptSelector",
    "Occurrence",
    "RawAnalysis",
    "RawOccurrence",
    "RawVariable",
    "TemplateAnalyzer",
    "TemplateNormalizer",
    "TemplateSummary",
    "Variable",
    "canonical_token",
    "find_occurrences",
    "reconcile",
]
