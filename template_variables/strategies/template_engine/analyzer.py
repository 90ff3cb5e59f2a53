"""Template analyzer strategy.

Runs the analysis pipeline for one template: excerpt selection, extraction,
and reconciliation of the extractor's answer onto exact offsets in the
full text.
"""

import logging

from template_variables.interfaces.extractor import (
    AdapterFailure,
    AnalysisError,
    BaseVariableExtractor,
    ExtractionRequest,
    InputError,
)
from template_variables.interfaces.template import BaseTemplateAnalyzer
from template_variables.strategies.template_engine.excerpt import ExcerptSelector
from template_variables.strategies.template_engine.models import AnalysisResult
from template_variables.strategies.template_engine.reconciler import (
    DEFAULT_CONTEXT_RADIUS,
    reconcile,
)

logger = logging.getLogger(__name__)


class TemplateAnalyzer(BaseTemplateAnalyzer):
    """Detects template variables and their exact occurrences.

    The analyzer holds no per-call state, so one instance can serve
    concurrent analyses.
    """

    def __init__(
        self,
        extractor: BaseVariableExtractor,
        selector: ExcerptSelector | None = None,
        context_radius: int = DEFAULT_CONTEXT_RADIUS,
        drop_ungrounded: bool = False,
    ) -> None:
        """Initialize the analyzer.

        Args:
            extractor: Strategy that interprets the excerpt.
            selector: Excerpt selector (default thresholds if None).
            context_radius: Characters of context stored with each occurrence.
            drop_ungrounded: Remove variables whose example text was not found.
        """
        self._extractor = extractor
        self._selector = selector or ExcerptSelector()
        self._context_radius = context_radius
        self._drop_ungrounded = drop_ungrounded

        logger.info(
            f"TemplateAnalyzer initialized: extractor={extractor.name}, "
            f"threshold={self._selector.threshold}, drop_ungrounded={drop_ungrounded}"
        )

    async def analyze(self, content: str) -> AnalysisResult:
        """Analyze template text to detect variables.

        Args:
            content: The full template text.

        Returns:
            AnalysisResult whose occurrences index into ``content``.

        Raises:
            InputError: If content is missing or blank.
            AdapterFailure: If the extractor fails. Unexpected extractor
                exceptions are wrapped so every failure carries its stage.
        """
        if not content or not content.strip():
            raise InputError("Template has no content to analyze")

        logger.info(f"Starting template analysis, content length: {len(content)}")

        excerpt = self._selector.select(content)

        try:
            raw = await self._extractor.extract(
                ExtractionRequest(text=excerpt.text, partial=excerpt.partial)
            )
        except AnalysisError as e:
            logger.error(f"Template analysis failed at {e.stage} stage: {e}", exc_info=True)
            raise
        except Exception as e:
            logger.error(
                f"Extractor {self._extractor.name} raised {type(e).__name__}: {e}", exc_info=True
            )
            raise AdapterFailure(f"Extractor {self._extractor.name} failed: {e}") from e

        variables = reconcile(content, raw.variables, self._context_radius)

        if self._drop_ungrounded:
            grounded = [v for v in variables if v.is_grounded]
            if len(grounded) != len(variables):
                logger.info(f"Dropped {len(variables) - len(grounded)} ungrounded variables")
            variables = grounded

        summary = raw.summary.model_copy(update={"total_variables": len(variables)})

        logger.info(
            f"Analysis complete: {len(variables)} variables, "
            f"partial_excerpt={excerpt.partial}, template_type={summary.template_type!r}"
        )
        return AnalysisResult(summary=summary, variables=variables)
