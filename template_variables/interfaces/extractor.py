"""Variable extraction interfaces.

Defines the narrow request/response boundary between the engine and the
external capability that interprets template text, plus the error taxonomy
shared by every stage of the analysis pipeline.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from template_variables.strategies.template_engine.models import RawAnalysis


@dataclass(frozen=True)
class ExtractionRequest:
    """Text handed to an extractor.

    Attributes:
        text: The excerpt (or full template) to interpret.
        partial: True when ``text`` is a derived excerpt, not the whole template.
    """

    text: str
    partial: bool = False

    @property
    def note(self) -> str | None:
        """Return the wire note for partial excerpts."""
        return "partial" if self.partial else None


class BaseVariableExtractor(ABC):
    """Abstract base class for variable extraction strategies.

    Implementations return a best-effort guess. Offsets in the result are
    relative to ``request.text`` and are never trusted by the engine.
    """

    @abstractmethod
    async def extract(self, request: ExtractionRequest) -> "RawAnalysis":
        """Interpret the request text and report variables.

        Args:
            request: The excerpt and its partial flag.

        Returns:
            A validated RawAnalysis.

        Raises:
            AdapterFailure: If the call fails or the response is malformed.
        """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the strategy name."""


class AnalysisError(Exception):
    """Base exception for a failed analysis.

    Attributes:
        stage: The pipeline stage that failed ("input" or "extraction").
    """

    stage: str = "analysis"

    def __init__(self, message: str, stage: str | None = None) -> None:
        super().__init__(message)
        if stage is not None:
            self.stage = stage


class InputError(AnalysisError):
    """Raised when template content is missing or empty."""

    stage = "input"


class AdapterFailure(AnalysisError):
    """Raised when the extractor call fails or returns an unusable payload."""

    stage = "extraction"
