"""Unit tests for the template normalizer."""

import pytest

from template_variables.strategies.template_engine.models import Occurrence, Variable
from template_variables.strategies.template_engine.normalizer import (
    TemplateNormalizer,
    canonical_token,
)
from template_variables.strategies.template_engine.reconciler import find_occurrences


def variable(label: str, content: str, needle: str) -> Variable:
    """Build a variable with every occurrence of needle in content."""
    return Variable(
        id=label.lower().replace(" ", "_"),
        label=label,
        fieldType="text",
        occurrences=find_occurrences(content, needle),
    )


def occurrence(text: str, position: int) -> Occurrence:
    return Occurrence(text=text, position=position, length=len(text), context="")


@pytest.fixture
def normalizer():
    """Create a normalizer instance."""
    return TemplateNormalizer()


# =============================================================================
# Canonical Token Tests
# =============================================================================


class TestCanonicalToken:
    """Test suite for canonical_token()."""

    @pytest.mark.parametrize(
        "label, expected",
        [
            ("X", "{{X}}"),
            ("Company Name", "{{Company_Name}}"),
            ("Start  Date", "{{Start_Date}}"),
            ("Client\tAddress Line", "{{Client_Address_Line}}"),
        ],
    )
    def test_whitespace_becomes_underscore(self, label, expected):
        """Test that whitespace runs collapse to one underscore."""
        assert canonical_token(label) == expected


# =============================================================================
# Normalize Tests
# =============================================================================


class TestNormalize:
    """Test suite for TemplateNormalizer.normalize()."""

    def test_descending_order_keeps_offsets_valid(self, normalizer):
        """Test that a length-changing edit does not corrupt earlier spans."""
        content = "a [X] b [X] c"
        x = Variable(
            id="x",
            label="X",
            fieldType="text",
            occurrences=[occurrence("[X]", 2), occurrence("[X]", 8)],
        )

        assert normalizer.normalize(content, [x]) == "a {{X}} b {{X}} c"

    def test_multiple_variables(self, normalizer):
        """Test normalization across variables with different literal lengths."""
        content = "Dear [Name], pay [Amount] by [Date]. Thanks, [Name]."
        variables = [
            variable("Client Name", content, "[Name]"),
            variable("Amount", content, "[Amount]"),
            variable("Due Date", content, "[Date]"),
        ]

        result = normalizer.normalize(content, variables)

        assert result == (
            "Dear {{Client_Name}}, pay {{Amount}} by {{Due_Date}}. Thanks, {{Client_Name}}."
        )

    def test_input_order_does_not_matter(self, normalizer):
        """Test that variable and occurrence order in the input is irrelevant."""
        content = "[A] [B] [A]"
        a = variable("A", content, "[A]")
        b = variable("B", content, "[B]")
        reversed_a = a.model_copy(update={"occurrences": list(reversed(a.occurrences))})

        assert normalizer.normalize(content, [a, b]) == normalizer.normalize(
            content, [b, reversed_a]
        )

    def test_inputs_are_not_mutated(self, normalizer):
        """Test that variables are consumed without modification."""
        content = "[A] and [A]"
        a = variable("A", content, "[A]")
        before = a.model_dump()

        normalizer.normalize(content, [a])

        assert a.model_dump() == before

    def test_idempotent_once_tokens_replace_literals(self, normalizer):
        """Test that normalizing already-normalized content is a no-op."""
        content = "Between [Party A] and [Party B], dated ____."
        variables = [
            variable("Party A", content, "[Party A]"),
            variable("Party B", content, "[Party B]"),
            variable("Date", content, "____"),
        ]

        once = normalizer.normalize(content, variables)
        twice = normalizer.normalize(once, variables)

        assert twice == once

    def test_equal_positions_resolved_by_label(self, normalizer):
        """Test that the lexically smallest label wins a shared start offset."""
        content = "a [X] b"
        beta = Variable(id="b", label="Beta", fieldType="text", occurrences=[occurrence("[X]", 2)])
        alpha = Variable(id="a", label="Alpha", fieldType="text", occurrences=[occurrence("[X]", 2)])

        assert normalizer.normalize(content, [beta, alpha]) == "a {{Alpha}} b"
        assert normalizer.normalize(content, [alpha, beta]) == "a {{Alpha}} b"

    def test_equal_positions_prefer_longer_span(self, normalizer):
        """Test that the longer span wins a shared start offset regardless of label."""
        content = "Date: ________"
        alpha = Variable(id="a", label="Alpha", fieldType="text", occurrences=[occurrence("____", 6)])
        zulu = Variable(
            id="z", label="Zulu", fieldType="text", occurrences=[occurrence("________", 6)]
        )

        assert normalizer.normalize(content, [alpha, zulu]) == "Date: {{Zulu}}"

    def test_contained_span_does_not_split_longer_one(self, normalizer):
        """Test that a literal inside a longer literal is left to the longer one."""
        content = "To [Name] only"
        full = variable("Full", content, "[Name]")
        short = variable("Short", content, "Name")

        assert normalizer.normalize(content, [full, short]) == "To {{Full}} only"

    def test_blanks_of_different_lengths(self, normalizer):
        """Test that a short blank does not swallow a longer blank it is part of."""
        content = "Sign: ____ Date: ________"
        short = variable("Blank 1", content, "____")
        long = variable("Blank 2", content, "________")

        assert [o.position for o in short.occurrences] == [6, 17, 18, 19, 20, 21]
        assert normalizer.normalize(content, [short, long]) == (
            "Sign: {{Blank_1}} Date: {{Blank_2}}"
        )

    def test_partial_overlap_resolved_by_higher_offset(self, normalizer):
        """Test that the higher-offset span wins when spans only partly overlap."""
        content = "abcd"
        left = variable("Left", content, "abc")
        right = variable("Right", content, "bcd")

        assert normalizer.normalize(content, [left, right]) == "a{{Right}}"

    def test_self_overlapping_occurrences(self, normalizer):
        """Test that overlapping hits of one needle do not corrupt the text."""
        content = "xaaaay"
        a = variable("A", content, "aa")

        assert [o.position for o in a.occurrences] == [1, 2, 3]
        assert normalizer.normalize(content, [a]) == "x{{A}}{{A}}y"

    def test_stale_span_skipped(self, normalizer):
        """Test that occurrences outside the content are ignored."""
        content = "short [X]"
        x = Variable(
            id="x",
            label="X",
            fieldType="text",
            occurrences=[occurrence("[X]", 6), occurrence("[X]", 40)],
        )

        assert normalizer.normalize(content, [x]) == "short {{X}}"

    def test_ungrounded_variable_leaves_content(self, normalizer):
        """Test that a variable with no occurrences changes nothing."""
        empty = Variable(id="e", label="Empty", fieldType="text", occurrences=[])

        assert normalizer.normalize("unchanged", [empty]) == "unchanged"


# =============================================================================
# Fill Tests
# =============================================================================


class TestFill:
    """Test suite for TemplateNormalizer.fill()."""

    def test_fill_canonical_tokens(self, normalizer):
        """Test that every canonical token is replaced by its value."""
        content = "Dear {{Client_Name}}, welcome. -- {{Client_Name}}"

        result = normalizer.fill(content, {"Client Name": "Ada Lovelace"})

        assert result == "Dear Ada Lovelace, welcome. -- Ada Lovelace"

    def test_fill_is_case_insensitive(self, normalizer):
        """Test that token case differences are tolerated."""
        assert normalizer.fill("Hi {{client_name}}", {"Client Name": "Ada"}) == "Hi Ada"

    def test_blank_values_skipped(self, normalizer):
        """Test that blank values leave tokens in place."""
        content = "{{A}} and {{B}}"

        assert normalizer.fill(content, {"A": "   ", "B": ""}) == content

    def test_values_inserted_literally(self, normalizer):
        """Test that backslashes and group references are not interpreted."""
        result = normalizer.fill("Path: {{Dir}}", {"Dir": r"C:\new\1"})

        assert result == r"Path: C:\new\1"

    @pytest.mark.parametrize(
        "content",
        ["Sign [Signatory]", "Sign <Signatory>", "Sign _Signatory_", "Sign ${Signatory}"],
    )
    def test_fallback_shapes(self, normalizer, content):
        """Test that raw placeholder shapes are filled when no token exists."""
        assert normalizer.fill(content, {"Signatory": "Bob"}) == "Sign Bob"

    def test_unknown_label_leaves_content(self, normalizer):
        """Test that labels absent from the text change nothing."""
        assert normalizer.fill("Nothing here", {"Missing": "value"}) == "Nothing here"

    def test_normalize_then_fill(self, normalizer):
        """Test the normalize -> fill round trip on a small agreement."""
        content = "This Agreement between [Company] and [Vendor]. [Company] shall pay."
        variables = [
            variable("Company Name", content, "[Company]"),
            variable("Vendor", content, "[Vendor]"),
        ]

        normalized = normalizer.normalize(content, variables)
        filled = normalizer.fill(normalized, {"Company Name": "Acme", "Vendor": "Globex"})

        assert filled == "This Agreement between Acme and Globex. Acme shall pay."
