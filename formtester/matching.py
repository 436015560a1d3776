"""Expected-error matching.

Decides whether an actual error (or its absence) satisfies the value a test
author passed to `FormTester.is_error`, and builds the diagnostic message.

Expected values are classified in this order:

1. False: the slot has no error
2. True: the slot has at least one error
3. int: the slot has exactly that many errors
4. delimited pattern such as "/^req/i" or "!/^inv/": the error code matches
   (or, with the "!" prefix, does not match) the regular expression
5. any other string: the error code equals it exactly

Content checks (4 and 5) always fail when there is no error, since nothing
can be matched against an absent error.

Usage:
    >>> from formtester.errors import FormError
    >>> result = match_error(FormError("required"), 1, "/^req/", field="email")
    >>> result.passed
    True
    >>> result.message
    'the submitted form has a "email" error that matches "/^req/".'
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Optional, Union

from formtester.types import ErrorLike, ExpectationKind

Expected = Union[bool, int, str]

_DELIMITED_RE = re.compile(r"^(!)?([^a-zA-Z0-9\\])(.+?)\2([ims]*)$", re.DOTALL)

_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
}


@dataclass(frozen=True)
class ParsedPattern:
    """A delimited pattern such as "!/^inv/i".

    Attributes:
        source: The expected value as written by the test author
        regex: The compiled regular expression
        negated: Whether the pattern was prefixed with "!"
    """
    source: str
    regex: "re.Pattern[str]"
    negated: bool = False

    def matches(self, value: str) -> bool:
        """Return True if the value satisfies the pattern, honoring negation."""
        found = self.regex.search(value) is not None
        return not found if self.negated else found


@dataclass(frozen=True)
class MatchResult:
    """Outcome of matching an actual error against an expected value.

    Attributes:
        passed: Whether the expectation is satisfied
        message: Human-readable description of what was asserted
        kind: How the expected value was interpreted
        actual_code: Code of the actual error, if any
    """
    passed: bool
    message: str
    kind: ExpectationKind
    actual_code: Optional[str] = None

    def __bool__(self) -> bool:
        return self.passed


@lru_cache(maxsize=256)
def parse_pattern(value: str) -> Optional[ParsedPattern]:
    """Parse a delimited pattern, returning None for plain strings.

    Examples:
        >>> parse_pattern("/^req/i").negated
        False
        >>> parse_pattern("!#inv#").regex.pattern
        'inv'
        >>> parse_pattern("required") is None
        True
    """
    match = _DELIMITED_RE.match(value)
    if match is None:
        return None

    negated, _, body, modifiers = match.groups()
    flags = 0
    for modifier in modifiers:
        flags |= _FLAGS[modifier]
    return ParsedPattern(source=value, regex=re.compile(body, flags), negated=bool(negated))


def classify_expectation(expected: Any) -> ExpectationKind:
    """Classify an expected value.

    Raises:
        TypeError: If the value is not a bool, int or str
    """
    # bool is checked first: it is a subclass of int
    if expected is False:
        return ExpectationKind.NO_ERROR
    if expected is True:
        return ExpectationKind.HAS_ERROR
    if isinstance(expected, int):
        return ExpectationKind.COUNT
    if isinstance(expected, str):
        if parse_pattern(expected) is not None:
            return ExpectationKind.PATTERN
        return ExpectationKind.CODE
    raise TypeError(
        f"expected error must be a bool, an int or a str, got {type(expected).__name__}"
    )


def describe_field(field: Optional[str]) -> str:
    """Label used in messages: the quoted field path, or "global"."""
    return "global" if field is None else f'"{field}"'


def match_error(
    error: Optional[ErrorLike],
    count: int,
    expected: Expected,
    field: Optional[str] = None,
) -> MatchResult:
    """Match an actual error against an expected value.

    Args:
        error: The actual error for the slot, or None
        count: Number of errors in the slot
        expected: Expected value (see module docstring)
        field: Field path being checked, None for the global slot

    Returns:
        MatchResult with the verdict and a diagnostic message
    """
    kind = classify_expectation(expected)
    label = describe_field(field)
    actual_code = error.code if error is not None and count > 0 else None

    if kind is ExpectationKind.NO_ERROR:
        return MatchResult(
            passed=count == 0,
            message=f"the submitted form has no {label} error.",
            kind=kind,
            actual_code=actual_code,
        )

    if kind is ExpectationKind.HAS_ERROR:
        return MatchResult(
            passed=count > 0,
            message=f"the submitted form has a {label} error.",
            kind=kind,
            actual_code=actual_code,
        )

    if kind is ExpectationKind.COUNT:
        return MatchResult(
            passed=count == expected,
            message=f"the submitted form has {expected} {label} error(s).",
            kind=kind,
            actual_code=actual_code,
        )

    if kind is ExpectationKind.PATTERN:
        if actual_code is None:
            return MatchResult(
                passed=False,
                message=f"the submitted form has a {label} error.",
                kind=kind,
            )
        pattern = parse_pattern(expected)
        verb = "does not match" if pattern.negated else "matches"
        return MatchResult(
            passed=pattern.matches(actual_code),
            message=f'the submitted form has a {label} error that {verb} "{expected}".',
            kind=kind,
            actual_code=actual_code,
        )

    return MatchResult(
        passed=actual_code is not None and actual_code == expected,
        message=f"the submitted form has a {label} error ({expected}).",
        kind=kind,
        actual_code=actual_code,
    )


__all__ = [
    "Expected",
    "ParsedPattern",
    "MatchResult",
    "parse_pattern",
    "classify_expectation",
    "describe_field",
    "match_error",
]
