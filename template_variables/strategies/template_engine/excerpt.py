"""Excerpt selection strategy.

Reduces a large template to the lines most likely to hold placeholders so
that the extraction call stays within its input budget.
"""

import logging
import re
from typing import NamedTuple

from template_variables.strategies.template_engine.models import Excerpt

logger = logging.getLogger(__name__)

EXCERPT_SEPARATOR = "\n---\n"
ELISION_MARKER = "\n\n[...]\n\n"


class PlaceholderPattern(NamedTuple):
    """A named placeholder shape."""

    name: str
    regex: re.Pattern[str]


# Checked in order; the first hit decides that a line is relevant.
PLACEHOLDER_PATTERNS: tuple[PlaceholderPattern, ...] = (
    PlaceholderPattern("bracket", re.compile(r"\[.*?\]")),
    PlaceholderPattern("underscore_run", re.compile(r"_{3,}")),
    PlaceholderPattern("mustache", re.compile(r"\{\{.*?\}\}")),
    PlaceholderPattern("dollar_brace", re.compile(r"\$\{.*?\}")),
)


def match_placeholder(line: str) -> str | None:
    """Return the name of the first pattern matching ``line``, if any."""
    for pattern in PLACEHOLDER_PATTERNS:
        if pattern.regex.search(line):
            return pattern.name
    return None


class ExcerptSelector:
    """Selects the part of a template that is sent for extraction.

    Templates up to ``threshold`` characters are returned whole. Longer
    templates are reduced to windows around lines containing a placeholder
    shape, or to a head/tail slice when no line matches.
    """

    def __init__(
        self,
        threshold: int = 30_000,
        context_lines: int = 2,
        head_chars: int = 15_000,
        tail_chars: int = 10_000,
    ) -> None:
        """Initialize the selector.

        Args:
            threshold: Maximum length sent without reduction.
            context_lines: Lines kept on each side of a matching line.
            head_chars: Leading characters kept by the fallback slice.
            tail_chars: Trailing characters kept by the fallback slice.
        """
        if threshold <= 0:
            raise ValueError("threshold must be positive")
        if min(context_lines, head_chars, tail_chars) < 0:
            raise ValueError("context_lines, head_chars and tail_chars must not be negative")

        self._threshold = threshold
        self._context_lines = context_lines
        self._head_chars = head_chars
        self._tail_chars = tail_chars

    @property
    def threshold(self) -> int:
        return self._threshold

    def select(self, content: str) -> Excerpt:
        """Select the excerpt for ``content``.

        Args:
            content: The full template text.

        Returns:
            The excerpt and whether it is partial.
        """
        if len(content) <= self._threshold:
            return Excerpt(text=content, partial=False)

        logger.info(
            f"Large template detected ({len(content)} chars > {self._threshold}), "
            f"selecting placeholder windows"
        )

        windows = self._placeholder_windows(content.split("\n"))
        if windows:
            text = EXCERPT_SEPARATOR.join(windows)
            logger.info(f"Excerpt built from {len(windows)} windows: {len(text)} chars")
            return Excerpt(text=text, partial=True)

        logger.info("No placeholder lines found, falling back to head/tail slice")
        head = content[: self._head_chars]
        tail = content[len(content) - self._tail_chars:] if self._tail_chars else ""
        return Excerpt(text=head + ELISION_MARKER + tail, partial=True)

    def _placeholder_windows(self, lines: list[str]) -> list[str]:
        """Collect a window of lines around every line with a placeholder."""
        windows: list[str] = []
        for index, line in enumerate(lines):
            if match_placeholder(line) is None:
                continue
            start = max(0, index - self._context_lines)
            end = min(len(lines), index + self._context_lines + 1)
            windows.append("\n".join(lines[start:end]))
        return windows
