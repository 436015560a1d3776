"""Assertion reporters.

The tester decides what to assert and which message to use; a reporter
tallies the outcome. Any object implementing the Reporter protocol can be
plugged in. Two implementations are provided:

- CollectingReporter records every outcome, so a harness can print a
  summary after the step (soft assertions)
- RaisingReporter raises AssertionError on the first failure, which is what
  a plain pytest test usually wants
"""

import re
import sys
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, TextIO

from typing_extensions import Protocol

from formtester.matching import parse_pattern


class Reporter(Protocol):
    """Generic assertion primitives consumed by the tester."""

    def assert_true(self, condition: bool, message: str) -> bool: ...

    def assert_equal(self, actual: Any, expected: Any, message: str) -> bool: ...

    def assert_matches(self, actual: str, pattern: str, message: str) -> bool: ...

    def assert_not_matches(self, actual: str, pattern: str, message: str) -> bool: ...

    def fail(self, message: str) -> bool: ...

    def diagnostic(self, text: str) -> None: ...


@dataclass(frozen=True)
class AssertionOutcome:
    """A single reported assertion.

    Attributes:
        passed: Whether the assertion held
        message: Description of what was asserted
        details: Extra context for failures (actual/expected values)
    """
    passed: bool
    message: str
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        result: Dict[str, Any] = {"passed": self.passed, "message": self.message}
        if self.details:
            result["details"] = self.details
        return result


class CollectingReporter:
    """Reporter that records every outcome.

    Examples:
        >>> reporter = CollectingReporter()
        >>> reporter.assert_equal(2, 2, "two errors")
        True
        >>> reporter.assert_matches("required", "/^inv/", "code matches")
        False
        >>> reporter.passed, reporter.failed
        (1, 1)
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream
        self.outcomes: List[AssertionOutcome] = []

    @property
    def passed(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.passed)

    @property
    def failed(self) -> int:
        return sum(1 for outcome in self.outcomes if not outcome.passed)

    @property
    def failures(self) -> List[AssertionOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.passed]

    def record(self, outcome: AssertionOutcome) -> bool:
        self.outcomes.append(outcome)
        return outcome.passed

    def assert_true(self, condition: bool, message: str) -> bool:
        return self.record(AssertionOutcome(bool(condition), message))

    def assert_equal(self, actual: Any, expected: Any, message: str) -> bool:
        details = {} if actual == expected else {"actual": actual, "expected": expected}
        return self.record(AssertionOutcome(actual == expected, message, details))

    def assert_matches(self, actual: str, pattern: str, message: str) -> bool:
        found = _compile(pattern).search(actual) is not None
        details = {} if found else {"actual": actual, "pattern": pattern}
        return self.record(AssertionOutcome(found, message, details))

    def assert_not_matches(self, actual: str, pattern: str, message: str) -> bool:
        found = _compile(pattern).search(actual) is not None
        details = {"actual": actual, "pattern": pattern} if found else {}
        return self.record(AssertionOutcome(not found, message, details))

    def fail(self, message: str) -> bool:
        return self.record(AssertionOutcome(False, message))

    def diagnostic(self, text: str) -> None:
        stream = self._stream if self._stream is not None else sys.stderr
        stream.write(text if text.endswith("\n") else text + "\n")
        stream.flush()

    def reset(self) -> None:
        self.outcomes = []


class RaisingReporter(CollectingReporter):
    """Reporter that raises AssertionError as soon as an assertion fails."""

    def record(self, outcome: AssertionOutcome) -> bool:
        super().record(outcome)
        if not outcome.passed:
            message = outcome.message
            if outcome.details:
                details = ", ".join(f"{key}={value!r}" for key, value in outcome.details.items())
                message = f"{message} ({details})"
            raise AssertionError(message)
        return True


def _compile(pattern: str) -> "re.Pattern[str]":
    """Compile a delimited pattern ("/re/i") or a plain regular expression.

    Raises:
        ValueError: For a "!"-prefixed pattern; use assert_not_matches instead
    """
    parsed = parse_pattern(pattern)
    if parsed is not None:
        if parsed.negated:
            raise ValueError(f"negated pattern {pattern!r} is not supported here, use assert_not_matches")
        return parsed.regex
    return re.compile(pattern)


__all__ = [
    "Reporter",
    "AssertionOutcome",
    "CollectingReporter",
    "RaisingReporter",
]
