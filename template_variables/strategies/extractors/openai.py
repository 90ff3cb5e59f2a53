"""OpenAI-based variable extractor.

Sends the template excerpt to a chat model in JSON mode and validates the
answer against the RawAnalysis schema.
"""

import logging

from openai import AsyncOpenAI, OpenAIError
from pydantic import ValidationError

from template_variables.interfaces.extractor import (
    AdapterFailure,
    BaseVariableExtractor,
    ExtractionRequest,
)
from template_variables.strategies.template_engine.models import RawAnalysis

logger = logging.getLogger(__name__)


# =============================================================================
# Extraction Prompt
# =============================================================================

TEMPLATE_ANALYSIS_PROMPT = """You are an expert template analyst. Analyze this legal template and:

1. Provide a brief summary of what this template is for
2. Identify ALL variables/placeholders that need to be filled in

Look for patterns like:
- [Company_Name], [Date], [Amount], etc.
- Blanks or underscores: ______
- Placeholders: {{name}}, ${variable}
- Any text that clearly needs to be replaced

For each variable, the first occurrence "text" MUST be copied verbatim from the template.

Respond with this exact JSON structure:
{
  "summary": {
    "overview": "Brief description of template purpose",
    "templateType": "e.g., Service Agreement Template",
    "totalVariables": number
  },
  "variables": [
    {
      "id": "unique_id",
      "label": "User-friendly name",
      "description": "What this field is for",
      "placeholder": "Example value",
      "fieldType": "text|date|number|email|address",
      "occurrences": [
        {
          "text": "exact text found",
          "position": character_position,
          "length": text_length,
          "context": "surrounding text"
        }
      ]
    }
  ]
}"""

PARTIAL_NOTE = "\n\nNOTE: This is a partial template. Some sections may be missing."


class OpenAIVariableExtractor(BaseVariableExtractor):
    """Extractor backed by an OpenAI-compatible chat completion API.

    Failures are never recovered locally: network and status errors,
    empty answers and answers that do not match the schema all raise
    AdapterFailure.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o",
        base_url: str | None = None,
        temperature: float = 0.3,
        timeout: float = 60.0,
        client: AsyncOpenAI | None = None,
    ) -> None:
        """Initialize the extractor.

        Args:
            api_key: OpenAI/OpenRouter API key.
            model: Chat model name.
            base_url: Optional custom base URL for the API.
            temperature: Sampling temperature.
            timeout: Request timeout in seconds.
            client: Preconfigured client, mainly for tests.
        """
        self._client = client or AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
        )
        self._model = model
        self._temperature = temperature

    def build_messages(self, request: ExtractionRequest) -> list[dict[str, str]]:
        """Build the chat messages for a request."""
        system_prompt = TEMPLATE_ANALYSIS_PROMPT
        if request.note == "partial":
            system_prompt += PARTIAL_NOTE
        return [
            {"role": "system", "content": system_prompt},
            {
                "role": "user",
                "content": f"Analyze this template and identify ALL variables:\n\n{request.text}",
            },
        ]

    async def extract(self, request: ExtractionRequest) -> RawAnalysis:
        """Ask the model for variables in the excerpt.

        Args:
            request: The excerpt and its partial flag.

        Returns:
            The validated model answer.

        Raises:
            AdapterFailure: On API errors, empty or malformed responses.
        """
        logger.info(
            f"Calling {self._model} for variable extraction: "
            f"{len(request.text)} chars, note={request.note}"
        )

        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=self.build_messages(request),
                response_format={"type": "json_object"},
                temperature=self._temperature,
            )
        except OpenAIError as e:
            logger.error(f"OpenAI API error: {e}")
            raise AdapterFailure(f"Extraction request failed: {e}") from e

        if not response.choices or not response.choices[0].message.content:
            logger.error("Empty response from extraction model")
            raise AdapterFailure("Extraction model returned an empty response")

        content = response.choices[0].message.content
        logger.info(f"Extraction response received: {len(content)} chars")

        try:
            result = RawAnalysis.model_validate_json(content)
        except ValidationError as e:
            logger.error(f"Malformed extraction response: {e.error_count()} errors")
            raise AdapterFailure(f"Malformed extraction response: {e}") from e

        logger.info(f"Extraction reported {len(result.variables)} variables")
        return result

    @property
    def name(self) -> str:
        return "openai"
