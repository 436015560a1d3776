"""Unit tests for expected-error classification and matching.

Tests cover:
- Classification order (booleans before integers, patterns before codes)
- Delimited pattern parsing, flags and negation
- Existence, count, pattern and exact-code checks
- Failure when a content check meets an absent error
- Diagnostic messages
"""

import re

import pytest

from formtester.errors import ErrorSchema, FormError
from formtester.matching import (
    MatchResult,
    classify_expectation,
    describe_field,
    match_error,
    parse_pattern,
)
from formtester.types import ExpectationKind


REQUIRED = FormError("required", "This field is required.")


class TestClassifyExpectation:
    """Test how expected values are interpreted."""

    def test_false_is_no_error(self):
        """Test that False expects no error."""
        assert classify_expectation(False) is ExpectationKind.NO_ERROR

    def test_true_is_has_error(self):
        """Test that True expects an error."""
        assert classify_expectation(True) is ExpectationKind.HAS_ERROR

    def test_int_is_count(self):
        """Test that integers are exact counts."""
        assert classify_expectation(0) is ExpectationKind.COUNT
        assert classify_expectation(3) is ExpectationKind.COUNT

    def test_delimited_string_is_pattern(self):
        """Test that delimited strings are patterns."""
        assert classify_expectation("/^req/") is ExpectationKind.PATTERN
        assert classify_expectation("!/^req/i") is ExpectationKind.PATTERN
        assert classify_expectation("#inv#") is ExpectationKind.PATTERN

    def test_plain_string_is_code(self):
        """Test that other strings are error codes."""
        assert classify_expectation("required") is ExpectationKind.CODE
        assert classify_expectation("invalid_format") is ExpectationKind.CODE

    def test_other_types_are_rejected(self):
        """Test that unsupported types raise TypeError."""
        with pytest.raises(TypeError):
            classify_expectation(None)
        with pytest.raises(TypeError):
            classify_expectation(1.5)


class TestParsePattern:
    """Test delimited pattern parsing."""

    def test_plain_pattern(self):
        """Test parsing a pattern without negation."""
        pattern = parse_pattern("/^req/")
        assert pattern.regex.pattern == "^req"
        assert pattern.negated is False
        assert pattern.source == "/^req/"

    def test_negated_pattern(self):
        """Test parsing a "!"-prefixed pattern."""
        pattern = parse_pattern("!/^inv/")
        assert pattern.negated is True
        assert pattern.regex.pattern == "^inv"

    def test_flags(self):
        """Test that i, m and s flags are applied."""
        pattern = parse_pattern("/^REQ/ims")
        assert pattern.regex.flags & re.IGNORECASE
        assert pattern.regex.flags & re.MULTILINE
        assert pattern.regex.flags & re.DOTALL

    def test_alternative_delimiter(self):
        """Test a delimiter other than the slash."""
        assert parse_pattern("#a/b#").regex.pattern == "a/b"

    def test_mismatched_delimiters_are_not_patterns(self):
        """Test that both delimiters must match."""
        assert parse_pattern("/required#") is None

    def test_alphanumeric_delimiter_is_not_a_pattern(self):
        """Test that letters cannot delimit a pattern."""
        assert parse_pattern("areqa") is None

    def test_empty_body_is_not_a_pattern(self):
        """Test that a pattern needs a body."""
        assert parse_pattern("//") is None

    def test_unknown_flag_is_not_a_pattern(self):
        """Test that unknown flags disqualify a pattern."""
        assert parse_pattern("/req/x") is None

    def test_matches_honors_negation(self):
        """Test that negated patterns invert the match."""
        assert parse_pattern("/^req/").matches("required") is True
        assert parse_pattern("!/^req/").matches("required") is False
        assert parse_pattern("!/^inv/").matches("required") is True


class TestExistenceAndCount:
    """Test boolean and integer expectations."""

    def test_no_error_expected_and_absent(self):
        """Test False against an absent error."""
        assert match_error(None, 0, False).passed is True

    def test_no_error_expected_but_present(self):
        """Test False against a present error."""
        assert match_error(REQUIRED, 1, False).passed is False

    def test_error_expected_but_absent(self):
        """Test True against an absent error."""
        assert match_error(None, 0, True).passed is False

    def test_error_expected_and_present(self):
        """Test True against a present error."""
        assert match_error(REQUIRED, 1, True).passed is True

    def test_count_mismatch(self):
        """Test a count that differs from the actual count."""
        assert match_error(REQUIRED, 1, 3).passed is False

    def test_count_mismatch_without_error(self):
        """Test a non-zero count against an absent error."""
        assert match_error(None, 0, 3).passed is False

    def test_zero_count_without_error(self):
        """Zero is a valid exact count for an absent error."""
        assert match_error(None, 0, 0).passed is True

    def test_count_match(self):
        """Test a count equal to the actual count."""
        assert match_error(REQUIRED, 1, 1).passed is True

    def test_count_on_aggregate(self):
        """Test counting the errors of an aggregate."""
        schema = ErrorSchema([FormError("invalid"), FormError("csrf")])
        assert match_error(schema, len(schema), 2).passed is True

    def test_empty_aggregate_has_no_error(self):
        """Test that an empty aggregate counts as no error."""
        schema = ErrorSchema()
        assert match_error(schema, 0, False).passed is True
        assert match_error(schema, 0, True).passed is False


class TestContentMatching:
    """Test pattern and exact-code expectations."""

    def test_exact_code(self):
        """Test an exact code match."""
        assert match_error(REQUIRED, 1, "required").passed is True

    def test_exact_code_mismatch(self):
        """Test an exact code mismatch and the reported actual code."""
        result = match_error(REQUIRED, 1, "invalid")
        assert result.passed is False
        assert result.actual_code == "required"

    def test_exact_code_is_not_a_prefix_match(self):
        """Test that codes are compared whole."""
        assert match_error(REQUIRED, 1, "req").passed is False

    def test_exact_code_without_error(self):
        """Test a code check against an absent error."""
        assert match_error(None, 0, "required").passed is False

    def test_pattern(self):
        """Test a pattern that matches the code."""
        assert match_error(REQUIRED, 1, "/^req/").passed is True

    def test_pattern_mismatch(self):
        """Test a pattern that does not match the code."""
        assert match_error(REQUIRED, 1, "/^inv/").passed is False

    def test_pattern_with_flag(self):
        """Test that the case-insensitive flag is honored."""
        assert match_error(REQUIRED, 1, "/^REQ/i").passed is True
        assert match_error(REQUIRED, 1, "/^REQ/").passed is False

    def test_negated_pattern(self):
        """Test negated patterns against a present error."""
        assert match_error(REQUIRED, 1, "!/^inv/").passed is True
        assert match_error(REQUIRED, 1, "!/^req/").passed is False

    def test_pattern_without_error(self):
        """An absent error can never match a pattern."""
        assert match_error(None, 0, "/anything/").passed is False

    def test_negated_pattern_without_error(self):
        """Test that a negated pattern still needs an error."""
        assert match_error(None, 0, "!/anything/").passed is False

    def test_pattern_against_aggregate_code(self):
        """Test a pattern against the rendered code of an aggregate."""
        schema = ErrorSchema([FormError("invalid")], {"email": FormError("required")})
        assert match_error(schema, len(schema), "/email \\[required\\]/").passed is True


class TestMessages:
    """Test diagnostic messages."""

    def test_describe_field(self):
        """Test the label used for fields and the global slot."""
        assert describe_field("email") == '"email"'
        assert describe_field(None) == "global"

    def test_no_error_message(self):
        """Test the message for a no-error check."""
        result = match_error(None, 0, False, field="email")
        assert result.message == 'the submitted form has no "email" error.'
        assert result.kind is ExpectationKind.NO_ERROR

    def test_has_error_message_for_global_slot(self):
        """Test the message for the global slot."""
        result = match_error(None, 0, True)
        assert result.message == "the submitted form has a global error."

    def test_count_message(self):
        """Test the message for a count check."""
        result = match_error(REQUIRED, 1, 2, field="email")
        assert result.message == 'the submitted form has 2 "email" error(s).'

    def test_pattern_messages(self):
        """Test the messages for pattern checks."""
        matched = match_error(REQUIRED, 1, "/^req/", field="email")
        negated = match_error(REQUIRED, 1, "!/^inv/", field="email")
        missing = match_error(None, 0, "/^req/", field="email")

        assert matched.message == 'the submitted form has a "email" error that matches "/^req/".'
        assert negated.message == 'the submitted form has a "email" error that does not match "!/^inv/".'
        assert missing.message == 'the submitted form has a "email" error.'

    def test_code_message(self):
        """Test the message for a code check."""
        result = match_error(REQUIRED, 1, "required", field="address[city]")
        assert result.message == 'the submitted form has a "address[city]" error (required).'

    def test_result_is_truthy_when_passed(self):
        """Test the truthiness of a match result."""
        assert bool(match_error(REQUIRED, 1, True)) is True
        assert bool(match_error(REQUIRED, 1, False)) is False
        assert isinstance(match_error(None, 0, False), MatchResult)
