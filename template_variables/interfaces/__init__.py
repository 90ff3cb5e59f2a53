"""Abstract base classes for template variable strategies."""

from template_variables.interfaces.extractor import (
    AdapterFailure,
    AnalysisError,
    BaseVariableExtractor,
    ExtractionRequest,
    InputError,
)
from template_variables.interfaces.template import BaseTemplateAnalyzer, BaseTemplateNormalizer

__all__ = [
    "AdapterFailure",
    "AnalysisError",
    "BaseTemplateAnalyzer",
    "BaseTemplateNormalizer",
    "BaseVariableExtractor",
    "ExtractionRequest",
    "InputError",
]
