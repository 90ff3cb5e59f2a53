"""Template variable engine.

Finds fill-in placeholders in document templates, records every exact
occurrence, and rewrites templates with canonical ``{{Label}}`` tokens.
"""

from collections.abc import Sequence

from template_variables.core.factory import get_factory
from template_variables.interfaces.extractor import (
    AdapterFailure,
    AnalysisError,
    BaseVariableExtractor,
    InputError,
)
from template_variables.strategies.template_engine.models import AnalysisResult, Variable

__version__ = "0.1.0"


async def analyze(
    content: str, extractor: BaseVariableExtractor | None = None
) -> AnalysisResult:
    """Analyze ``content`` with the configured (or given) extractor."""
    return await get_factory().get_template_analyzer(extractor).analyze(content)


def normalize(content: str, variables: Sequence[Variable]) -> str:
    """Rewrite ``content`` with a canonical token for every occurrence."""
    return get_factory().get_template_normalizer().normalize(content, variables)


__all__ = [
    "AdapterFailure",
    "AnalysisError",
    "AnalysisResult",
    "InputError",
    "Variable",
    "analyze",
    "normalize",
]
