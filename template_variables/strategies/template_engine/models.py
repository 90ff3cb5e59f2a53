"""Template engine domain models.

Pydantic models for analysis results. Field names are snake_case in Python
and camelCase on the wire; both spellings are accepted on input.
"""

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

FieldType = Literal["text", "date", "number", "email", "address"]


@dataclass(frozen=True)
class Excerpt:
    """Text sent to the extractor for one analysis call.

    Attributes:
        text: The excerpt itself.
        partial: True when ``text`` does not cover the whole template.
    """

    text: str
    partial: bool


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class TemplateSummary(_WireModel):
    """Short description of what the template is for."""

    overview: str = Field(description="Brief description of template purpose")
    template_type: str = Field(alias="templateType", description="e.g. Service Agreement Template")
    total_variables: int = Field(alias="totalVariables", ge=0, description="Number of variables")


# =============================================================================
# Extractor output (offsets relative to the excerpt, untrusted)
# =============================================================================


class RawOccurrence(_WireModel):
    """An example occurrence as reported by an extractor."""

    text: str = Field(description="Exact text the extractor claims to have found")
    position: int | None = Field(default=None, description="Excerpt-relative offset, may be wrong")
    length: int | None = Field(default=None, description="Reported length, may be wrong")
    context: str = Field(default="", description="Surrounding text")


class RawVariable(_WireModel):
    """A variable as reported by an extractor."""

    id: str
    label: str
    description: str = ""
    placeholder: str = ""
    field_type: FieldType = Field(alias="fieldType")
    occurrences: list[RawOccurrence] = Field(default_factory=list)

    @property
    def example_text(self) -> str | None:
        """Return the first reported literal, used as the search key."""
        if not self.occurrences:
            return None
        return self.occurrences[0].text or None


class RawAnalysis(_WireModel):
    """Validated extractor response."""

    summary: TemplateSummary
    variables: list[RawVariable] = Field(default_factory=list)


# =============================================================================
# Reconciled output (offsets relative to the full template)
# =============================================================================


class Occurrence(_WireModel):
    """One literal appearance of a variable in the full template."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    text: str = Field(description="The literal text at this span")
    position: int = Field(ge=0, description="0-based character offset")
    length: int = Field(ge=0, description="Span length in characters")
    context: str = Field(default="", description="Surrounding text window")

    @model_validator(mode="after")
    def check_length(self) -> "Occurrence":
        if len(self.text) != self.length:
            raise ValueError(
                f"length {self.length} does not match text of length {len(self.text)}"
            )
        return self

    @property
    def end(self) -> int:
        """Return the exclusive end offset."""
        return self.position + self.length


class Variable(_WireModel):
    """A placeholder field with every exact occurrence."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    label: str
    description: str = ""
    placeholder: str = ""
    field_type: FieldType = Field(alias="fieldType")
    occurrences: list[Occurrence] = Field(default_factory=list)

    @property
    def is_grounded(self) -> bool:
        """Whether at least one occurrence was found in the template."""
        return bool(self.occurrences)


class AnalysisResult(_WireModel):
    """Complete result of analyzing one template."""

    summary: TemplateSummary
    variables: list[Variable] = Field(default_factory=list)
