"""Application configuration using Pydantic v2 Settings.

Centralized configuration that loads from environment variables
and provides type-safe access throughout the engine.
"""

import logging
import os
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Engine settings loaded from environment variables.

    All settings have sensible defaults and can be overridden via
    environment variables or a .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # OpenAI
    openai_api_key: str = Field(
        default="",
        description="OpenAI API key for variable extraction.",
    )
    openai_base_url: str | None = Field(
        default=None,
        description="Optional custom OpenAI base URL (e.g. OpenRouter).",
    )
    llm_chat_model: str = Field(
        default="gpt-4o",
        description="Chat model used for variable extraction.",
    )
    llm_temperature: float = Field(
        default=0.3,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for extraction calls.",
    )
    llm_timeout: float = Field(
        default=60.0,
        gt=0,
        description="Timeout in seconds for a single extraction call.",
    )

    # Strategy Selection
    extractor_type: str = Field(
        default="openai",
        description="Extractor strategy to use: 'openai' or 'pattern'.",
    )

    # Excerpt selection
    excerpt_threshold: int = Field(
        default=30_000,
        gt=0,
        description="Templates up to this many characters are sent in full.",
    )
    excerpt_context_lines: int = Field(
        default=2,
        ge=0,
        description="Lines kept before and after each line with a placeholder.",
    )
    excerpt_head_chars: int = Field(
        default=15_000,
        ge=0,
        description="Leading characters kept when no placeholder line is found.",
    )
    excerpt_tail_chars: int = Field(
        default=10_000,
        ge=0,
        description="Trailing characters kept when no placeholder line is found.",
    )

    # Reconciliation
    occurrence_context_radius: int = Field(
        default=50,
        ge=0,
        description="Characters of surrounding text stored with each occurrence.",
    )
    drop_ungrounded_variables: bool = Field(
        default=False,
        description="Drop variables whose example text was not found in the template.",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR.",
    )
    log_dir: Path = Field(
        default=Path("./logs"),
        description="Directory for info.log and error.log.",
    )
    log_to_file: bool = Field(
        default=False,
        description="Also write info.log and error.log into log_dir.",
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Normalize log level to uppercase."""
        return v.upper()

    @field_validator("extractor_type")
    @classmethod
    def normalize_extractor_type(cls, v: str) -> str:
        return v.strip().lower()

    def configure_logging(self) -> None:
        """Configure global logging based on settings."""
        import structlog

        level = getattr(logging, self.log_level, logging.INFO)

        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.stdlib.PositionalArgumentsFormatter(),
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )

        logging.basicConfig(
            format="%(message)s",
            level=level,
        )

        logger.setLevel(level)

        if self.log_to_file:
            self._add_file_handlers(level)

    def _add_file_handlers(self, level: int) -> None:
        """Attach info.log (INFO and above) and error.log (ERROR and above) handlers."""
        self.log_dir.mkdir(parents=True, exist_ok=True)

        detailed_formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        root_logger = logging.getLogger()
        root_logger.setLevel(level)
        attached = {
            handler.baseFilename
            for handler in root_logger.handlers
            if isinstance(handler, logging.FileHandler)
        }

        for filename, handler_level in (("info.log", logging.INFO), ("error.log", logging.ERROR)):
            path = os.path.abspath(self.log_dir / filename)
            if path in attached:
                continue
            handler = logging.FileHandler(path, encoding="utf-8")
            handler.setLevel(handler_level)
            handler.setFormatter(detailed_formatter)
            root_logger.addHandler(handler)


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global Settings instance.

    Returns:
        The singleton Settings instance.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
        _settings.configure_logging()
    return _settings
