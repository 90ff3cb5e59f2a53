"""Template analysis and normalization interfaces.

Defines abstract base classes for the template variable engine.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from template_variables.strategies.template_engine.models import (
        AnalysisResult,
        Variable,
    )


class BaseTemplateAnalyzer(ABC):
    """Abstract base class for template analysis strategies.

    Analyzes template text to detect variables and every exact offset
    at which each one occurs.
    """

    @abstractmethod
    async def analyze(self, content: str) -> "AnalysisResult":
        """Analyze template text to detect variables.

        Args:
            content: The full template text.

        Returns:
            AnalysisResult with occurrences positioned in ``content``.

        Raises:
            InputError: If content is empty.
            AdapterFailure: If extraction fails.
        """


class BaseTemplateNormalizer(ABC):
    """Abstract base class for template rewriting strategies.

    Substitutes canonical tokens for detected occurrences and fills
    canonical tokens with values.
    """

    @abstractmethod
    def normalize(self, content: str, variables: Sequence["Variable"]) -> str:
        """Replace every occurrence with its canonical token.

        Args:
            content: The template text the occurrences were located in.
            variables: Reconciled variables.

        Returns:
            The rewritten template text.
        """

    @abstractmethod
    def fill(self, content: str, values: Mapping[str, str]) -> str:
        """Replace canonical tokens with values.

        Args:
            content: A normalized template.
            values: Mapping of variable label to value.

        Returns:
            The filled document text.
        """
