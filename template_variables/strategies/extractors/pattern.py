"""Pattern-based variable extractor.

A deterministic extractor that needs no API: it recognizes the explicit
placeholder shapes ([Name], ____, {{name}}, ${name}) and reports each
distinct literal as one variable.
"""

import logging
import re

from template_variables.interfaces.extractor import BaseVariableExtractor, ExtractionRequest
from template_variables.strategies.template_engine.excerpt import (
    ELISION_MARKER,
    PLACEHOLDER_PATTERNS,
)
from template_variables.strategies.template_engine.models import (
    FieldType,
    RawAnalysis,
    RawOccurrence,
    RawVariable,
    TemplateSummary,
)

logger = logging.getLogger(__name__)

# Keyword hints for field types, checked in order against the label
_FIELD_TYPE_HINTS: list[tuple[FieldType, tuple[str, ...]]] = [
    ("email", ("email", "e-mail")),
    ("date", ("date", "day", "deadline")),
    ("address", ("address", "street", "city", "postcode", "zip")),
    ("number", ("amount", "price", "fee", "number", "total", "sum", "salary", "rate", "count")),
]

_DELIMITERS = re.compile(r"^(\[|\{\{|\$\{)|(\]|\}\}|\})$")


def label_for(literal: str) -> str | None:
    """Derive a human label from a placeholder literal, or None for blanks."""
    inner = _DELIMITERS.sub("", literal)
    inner = re.sub(r"[_\s]+", " ", inner).strip()
    if not re.search(r"\w", inner):
        return None
    return inner


def guess_field_type(label: str) -> FieldType:
    lowered = label.lower()
    for field_type, keywords in _FIELD_TYPE_HINTS:
        if any(keyword in lowered for keyword in keywords):
            return field_type
    return "text"


class PatternVariableExtractor(BaseVariableExtractor):
    """Extractor that reports explicit placeholder shapes found in the text.

    Matches are claimed in pattern order; a match overlapping an earlier
    claim (e.g. the underscores inside "[____]") is ignored.
    """

    async def extract(self, request: ExtractionRequest) -> RawAnalysis:
        """Report every distinct placeholder literal in the request text.

        Args:
            request: The excerpt and its partial flag.

        Returns:
            RawAnalysis with excerpt-relative offsets.
        """
        text = request.text
        claimed: list[tuple[int, int]] = []
        first_seen: dict[str, list[RawOccurrence]] = {}
        elision = ELISION_MARKER.strip()

        for pattern in PLACEHOLDER_PATTERNS:
            for match in pattern.regex.finditer(text):
                start, end = match.span()
                if any(start < c_end and c_start < end for c_start, c_end in claimed):
                    continue
                literal = match.group(0)
                if request.partial and literal == elision:
                    continue
                claimed.append((start, end))
                first_seen.setdefault(literal, []).append(
                    RawOccurrence(
                        text=literal,
                        position=start,
                        length=end - start,
                        context=text[max(0, start - 50): end + 50],
                    )
                )

        # Report literals in document order
        ordered = sorted(first_seen.items(), key=lambda item: item[1][0].position)

        variables: list[RawVariable] = []
        blanks = 0
        for index, (literal, occurrences) in enumerate(ordered, start=1):
            label = label_for(literal)
            if label is None:
                blanks += 1
                label = f"Blank {blanks}"
            variables.append(
                RawVariable(
                    id=f"var_{index}",
                    label=label,
                    description=f"Placeholder {literal}",
                    placeholder="",
                    field_type=guess_field_type(label),
                    occurrences=occurrences,
                )
            )

        logger.info(
            f"Pattern extraction found {len(variables)} placeholders "
            f"in {len(text)} chars (partial={request.partial})"
        )

        return RawAnalysis(
            summary=TemplateSummary(
                overview=f"Template with {len(variables)} explicit placeholders",
                template_type="Unknown",
                total_variables=len(variables),
            ),
            variables=variables,
        )

    @property
    def name(self) -> str:
        return "pattern"
