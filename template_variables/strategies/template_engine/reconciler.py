"""Position reconciliation.

Extractors see an excerpt, not the template, so the offsets they report
cannot be used. Each variable's first example literal is searched for
exhaustively in the full template instead, and every hit becomes an
exact occurrence.

Matching advances one character past each hit, so a needle that overlaps
itself ("aaa" in "aaaa") is reported at every start offset. A needle that
is a substring of another variable's needle is also reported inside the
longer literal; the normalizer resolves such collisions.
"""

import logging
from collections.abc import Iterator, Sequence

from template_variables.strategies.template_engine.models import (
    Occurrence,
    RawVariable,
    Variable,
)

logger = logging.getLogger(__name__)

DEFAULT_CONTEXT_RADIUS = 50


def iter_match_positions(content: str, needle: str) -> Iterator[int]:
    """Yield every start offset of ``needle`` in ``content``, overlaps included."""
    if not needle:
        return
    cursor = 0
    while True:
        index = content.find(needle, cursor)
        if index == -1:
            return
        yield index
        cursor = index + 1


def context_window(content: str, position: int, length: int, radius: int) -> str:
    """Return ``radius`` characters around a span, clamped to the content."""
    start = max(0, position - radius)
    end = min(len(content), position + length + radius)
    return content[start:end]


def find_occurrences(
    content: str, needle: str, context_radius: int = DEFAULT_CONTEXT_RADIUS
) -> list[Occurrence]:
    """Locate every literal occurrence of ``needle`` in ``content``.

    Args:
        content: The full template text.
        needle: Literal text to search for.
        context_radius: Characters of context kept on each side.

    Returns:
        Occurrences in ascending position order.
    """
    return [
        Occurrence(
            text=needle,
            position=position,
            length=len(needle),
            context=context_window(content, position, len(needle), context_radius),
        )
        for position in iter_match_positions(content, needle)
    ]


def reconcile(
    content: str,
    raw_variables: Sequence[RawVariable],
    context_radius: int = DEFAULT_CONTEXT_RADIUS,
) -> list[Variable]:
    """Ground extractor output in the full template.

    Reported offsets are discarded. Variables without an example literal
    are dropped; variables whose literal is not found are kept with no
    occurrences.

    Args:
        content: The full template text.
        raw_variables: Variables as reported by the extractor.
        context_radius: Characters of context kept on each side of a hit.

    Returns:
        Variables with exact, exhaustive occurrences.
    """
    variables: list[Variable] = []

    for raw in raw_variables:
        needle = raw.example_text
        if needle is None:
            logger.warning(f"Dropping variable '{raw.id}': no example text to search for")
            continue

        occurrences = find_occurrences(content, needle, context_radius)
        if not occurrences:
            logger.warning(
                f"Variable '{raw.id}' not grounded: {needle!r} does not appear in the template"
            )
        else:
            logger.debug(f"Variable '{raw.id}': {len(occurrences)} occurrences of {needle!r}")

        variables.append(
            Variable(
                id=raw.id,
                label=raw.label,
                description=raw.description,
                placeholder=raw.placeholder,
                field_type=raw.field_type,
                occurrences=occurrences,
            )
        )

    logger.info(
        f"Reconciled {len(variables)}/{len(raw_variables)} variables, "
        f"{sum(len(v.occurrences) for v in variables)} occurrences"
    )
    return variables
