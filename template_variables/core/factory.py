"""Component Factory for strategy instantiation.

The Factory Pattern allows the engine to instantiate different
extractor implementations at runtime based on configuration or
environment variables.
"""

import logging

from template_variables.core.config import Settings, get_settings
from template_variables.interfaces.extractor import BaseVariableExtractor
from template_variables.interfaces.template import BaseTemplateAnalyzer, BaseTemplateNormalizer
from template_variables.strategies.extractors import (
    OpenAIVariableExtractor,
    PatternVariableExtractor,
)
from template_variables.strategies.template_engine import (
    ExcerptSelector,
    TemplateAnalyzer,
    TemplateNormalizer,
)

logger = logging.getLogger(__name__)


class ComponentFactory:
    """Factory for creating component instances based on configuration.

    Example:
        ```python
        factory = ComponentFactory(get_settings())

        analyzer = factory.get_template_analyzer()
        result = await analyzer.analyze(content)
        normalized = factory.get_template_normalizer().normalize(content, result.variables)
        ```
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize the factory with optional settings.

        Args:
            settings: Engine settings. If None, uses global settings.
        """
        self._settings = settings or get_settings()
        self._extractor_cache: BaseVariableExtractor | None = None
        self._template_analyzer_cache: BaseTemplateAnalyzer | None = None
        self._template_normalizer_cache: BaseTemplateNormalizer | None = None

    def get_extractor(self, extractor_type: str | None = None) -> BaseVariableExtractor:
        """Get an extractor instance based on the specified type.

        Args:
            extractor_type: The extractor type to instantiate. If None, uses settings.

        Returns:
            A BaseVariableExtractor implementation instance.

        Raises:
            ValueError: If the extractor type is unknown or misconfigured.
        """
        if self._extractor_cache is None or extractor_type is not None:
            extractor_type = extractor_type or self._settings.extractor_type

            logger.info(f"Instantiating extractor: {extractor_type}")

            match extractor_type:
                case "openai":
                    if not self._settings.openai_api_key:
                        raise ValueError("OPENAI_API_KEY is required for the openai extractor")
                    self._extractor_cache = OpenAIVariableExtractor(
                        api_key=self._settings.openai_api_key,
                        model=self._settings.llm_chat_model,
                        base_url=self._settings.openai_base_url,
                        temperature=self._settings.llm_temperature,
                        timeout=self._settings.llm_timeout,
                    )
                case "pattern":
                    self._extractor_cache = PatternVariableExtractor()
                case _:
                    raise ValueError(
                        f"Unknown extractor type: {extractor_type}. "
                        f"Valid options: 'openai', 'pattern'"
                    )

        return self._extractor_cache

    def get_excerpt_selector(self) -> ExcerptSelector:
        """Build an excerpt selector from the excerpt settings."""
        return ExcerptSelector(
            threshold=self._settings.excerpt_threshold,
            context_lines=self._settings.excerpt_context_lines,
            head_chars=self._settings.excerpt_head_chars,
            tail_chars=self._settings.excerpt_tail_chars,
        )

    def get_template_analyzer(
        self, extractor: BaseVariableExtractor | None = None
    ) -> BaseTemplateAnalyzer:
        """Get a template analyzer instance.

        Args:
            extractor: Optional extractor to use instead of the configured one.
                When provided, bypasses cache.

        Returns:
            A BaseTemplateAnalyzer implementation instance.
        """
        if extractor is not None:
            logger.info(f"Instantiating template analyzer with {extractor.name} extractor")
            return self._build_analyzer(extractor)

        if self._template_analyzer_cache is None:
            logger.info("Instantiating template analyzer")
            self._template_analyzer_cache = self._build_analyzer(self.get_extractor())

        return self._template_analyzer_cache

    def get_template_normalizer(self) -> BaseTemplateNormalizer:
        """Get a template normalizer instance."""
        if self._template_normalizer_cache is None:
            logger.info("Instantiating template normalizer")
            self._template_normalizer_cache = TemplateNormalizer()

        return self._template_normalizer_cache

    def _build_analyzer(self, extractor: BaseVariableExtractor) -> TemplateAnalyzer:
        return TemplateAnalyzer(
            extractor=extractor,
            selector=self.get_excerpt_selector(),
            context_radius=self._settings.occurrence_context_radius,
            drop_ungrounded=self._settings.drop_ungrounded_variables,
        )

    def clear_cache(self) -> None:
        """Clear all cached component instances.

        This forces new instances to be created on next access.
        Useful for testing or when settings change.
        """
        self._extractor_cache = None
        self._template_analyzer_cache = None
        self._template_normalizer_cache = None
        logger.debug("Component factory cache cleared")


# Global factory instance
_factory: ComponentFactory | None = None


def get_factory() -> ComponentFactory:
    """Get or create the global ComponentFactory instance.

    Returns:
        The singleton ComponentFactory instance.
    """
    global _factory
    if _factory is None:
        _factory = ComponentFactory()
    return _factory
