"""Template normalizer strategy.

Rewrites templates so that every detected occurrence becomes a canonical
``{{Label}}`` token, and fills canonical tokens with values when a
document version is generated.
"""

import logging
import re
from collections.abc import Mapping, Sequence
from itertools import groupby
from typing import NamedTuple

from template_variables.interfaces.template import BaseTemplateNormalizer
from template_variables.strategies.template_engine.models import Occurrence, Variable

logger = logging.getLogger(__name__)


def canonical_token(label: str) -> str:
    """Return the canonical token for a variable label.

    Whitespace runs become single underscores: "Company Name" -> "{{Company_Name}}".
    """
    return "{{" + re.sub(r"\s+", "_", label) + "}}"


class _Replacement(NamedTuple):
    position: int
    label: str
    occurrence: Occurrence


def _legacy_patterns(label: str) -> list[re.Pattern[str]]:
    """Placeholder shapes tried when a template was never normalized."""
    name = re.escape(label)
    return [
        re.compile(rf"\[{name}\]", re.IGNORECASE),
        re.compile(rf"\{{\{{{name}\}}\}}", re.IGNORECASE),
        re.compile(rf"<{name}>", re.IGNORECASE),
        re.compile(rf"_{name}_", re.IGNORECASE),
        re.compile(rf"\$\{{{name}\}}", re.IGNORECASE),
    ]


def _drop_contained(replacements: list[_Replacement]) -> list[_Replacement]:
    """Remove entries whose span lies inside a strictly longer span.

    Entries with identical spans are kept together so the label tie-break
    can decide between them.
    """
    ordered = sorted(replacements, key=lambda r: (r.position, -r.occurrence.end))
    kept: list[_Replacement] = []
    reach = -1
    for (_, end), group in groupby(ordered, key=lambda r: (r.position, r.occurrence.end)):
        entries = list(group)
        if end <= reach:
            logger.debug(
                f"Dropping {len(entries)} occurrences at {entries[0].position} "
                f"inside a longer span"
            )
            continue
        kept.extend(entries)
        reach = end
    return kept


class TemplateNormalizer(BaseTemplateNormalizer):
    """Substitutes canonical tokens for occurrences and values for tokens.

    Replacements are applied from the highest offset to the lowest, so an
    edit never shifts a span that is still waiting to be processed.
    """

    def normalize(self, content: str, variables: Sequence[Variable]) -> str:
        """Replace every occurrence with its variable's canonical token.

        Occurrences whose span lies inside a longer occurrence's span are
        dropped first, so a short literal never splits a longer one (a
        "____" blank inside a "________" blank). Remaining entries sharing
        a start offset are processed longest span first, then in label
        order. A span that no longer holds its literal (already rewritten
        by an overlapping entry, or offsets from another revision of the
        text) is left alone, so normalizing twice changes nothing.

        Args:
            content: The template text the occurrences were located in.
            variables: Reconciled variables.

        Returns:
            The rewritten template text.
        """
        candidates = [
            _Replacement(occurrence.position, variable.label, occurrence)
            for variable in variables
            for occurrence in variable.occurrences
            if content[occurrence.position:occurrence.end] == occurrence.text
        ]
        replacements = _drop_contained(candidates)
        # Stable two-pass sort: position descending, then longer span first,
        # then label ascending.
        replacements.sort(key=lambda r: (-r.occurrence.length, r.label))
        replacements.sort(key=lambda r: r.position, reverse=True)

        logger.info(
            f"Normalizing template with {len(variables)} variables, "
            f"{len(replacements)} of {len(candidates)} matching occurrences kept"
        )

        normalized = content
        applied = 0
        for replacement in replacements:
            occurrence = replacement.occurrence
            if normalized[occurrence.position:occurrence.end] != occurrence.text:
                logger.debug(
                    f"Skipping stale span at {occurrence.position} "
                    f"for '{replacement.label}': {occurrence.text!r} not present"
                )
                continue

            token = canonical_token(replacement.label)
            normalized = normalized[: occurrence.position] + token + normalized[occurrence.end:]
            applied += 1

        logger.info(f"Normalization complete: {applied}/{len(replacements)} replacements")
        return normalized

    def fill(self, content: str, values: Mapping[str, str]) -> str:
        """Replace canonical tokens with values.

        Tokens are matched case-insensitively. When a label's token is not
        in the text, the common raw placeholder shapes ([Label], <Label>,
        _Label_, ${Label}) are tried instead. Blank values are skipped.

        Args:
            content: A normalized template.
            values: Mapping of variable label to value.

        Returns:
            The filled document text.
        """
        filled = content
        replaced_labels = 0

        for label, value in values.items():
            if not value or not value.strip():
                continue

            token = re.compile(re.escape(canonical_token(label)), re.IGNORECASE)
            filled, count = token.subn(lambda _: value, filled)

            if count == 0:
                for pattern in _legacy_patterns(label):
                    filled, fallback_count = pattern.subn(lambda _: value, filled)
                    count += fallback_count

            if count == 0:
                logger.warning(f"Variable not found in template for replacement: {label}")
                continue

            replaced_labels += 1
            logger.debug(f"Replaced {count} occurrences of '{label}'")

        logger.info(f"Template fill complete: {replaced_labels}/{len(values)} labels replaced")
        return filled
