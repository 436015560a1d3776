"""FormTester orchestrator.

This module provides the FormTester class, the public surface used by test
authors to assert on the validation outcome of the form submitted during a
test step. It composes the form registry, the field path resolver and the
error matcher, and forwards every verdict to a Reporter.

The harness drives it through two hooks, `action_completed` and
`filter_template_parameters`, and resets it with `prepare` at the start of
every step.

Usage:
    >>> from formtester.forms import Form
    >>> from formtester.reporter import CollectingReporter
    >>> form = Form(["email"], name="signup")
    >>> _ = form.bind({"email": "not-an-email"})
    >>> form.add_error("email", "invalid_format", "Invalid email.")
    >>> tester = FormTester(CollectingReporter())
    >>> _ = tester.action_completed({"form": form})
    >>> tester.begin().has_errors(1).is_error("email", "/^inv/").end() is tester
    True
    >>> tester.reporter.failed
    0
"""

import logging
import pprint
import sys
from typing import Any, Dict, Optional

from formtester.config import TesterConfig
from formtester.errors import ErrorSchema, NoFormSubmittedError
from formtester.matching import Expected, MatchResult, match_error, parse_pattern
from formtester.paths import resolve_field
from formtester.registry import FormRegistry, Source
from formtester.reporter import Reporter
from formtester.types import ErrorLike, ExpectationKind, FieldLike, FormLike

logger = logging.getLogger(__name__)


class FormTester:
    """Assertions on the form submitted during a test step.

    Every assertion returns the tester so calls can be chained. Assertions
    that need a form raise NoFormSubmittedError when none is current; that is
    a mistake in the test, not a failed assertion.

    Attributes:
        reporter: Receives every assertion outcome
        registry: Forms harvested during the current step
        config: Tester settings
    """

    def __init__(
        self,
        reporter: Reporter,
        registry: Optional[FormRegistry] = None,
        source: Optional[Source] = None,
        config: Optional[TesterConfig] = None,
        browser: Any = None,
    ):
        """Initialize the tester.

        Args:
            reporter: Assertion reporter
            registry: Form registry; a fresh one is created if omitted
            source: Lazy provider of the last action's exposed variables
            config: Tester settings; defaults are used if omitted
            browser: Object returned by `end()`; the tester itself if omitted
        """
        self.reporter = reporter
        self.registry = registry if registry is not None else FormRegistry()
        self.source = source
        self.config = config if config is not None else TesterConfig()
        self._browser = browser

    def prepare(self) -> None:
        """Reset state at the start of a test step."""
        self.registry.reset()

    def initialize(self) -> None:
        """Harvest the last action's variables if nothing was harvested yet."""
        self.registry.ensure_harvested(self.source)

    def begin(self, name: Optional[str] = None) -> "FormTester":
        """Begin a block of assertions, optionally on a named form.

        Raises:
            FormNotFoundError: If a name is given and no such form was harvested
        """
        self.initialize()
        if name is not None:
            self.registry.set_current(self.registry.select(name))
        return self

    def end(self) -> Any:
        """End a block of assertions and return the browser handle."""
        return self._browser if self._browser is not None else self

    def get_form(self, name: Optional[str] = None) -> Optional[FormLike]:
        """Return the named form if known, otherwise the current form."""
        return self.registry.get(name)

    def get_form_field(self, path: str) -> FieldLike:
        """Resolve a field path against the current form."""
        return resolve_field(self._require_form(), path)

    def has_errors(self, expected: Expected = True) -> "FormTester":
        """Assert that the form has errors, is valid, or has an exact error count."""
        form = self._require_form()
        schema = form.get_error_schema()

        if isinstance(expected, int) and not isinstance(expected, bool):
            message = f"the submitted form has `{expected}` errors"
            self.reporter.assert_equal(len(schema), expected, self._with_schema(message, schema))
        else:
            message = "the submitted form has some errors" if expected else "the submitted form is valid"
            self.reporter.assert_equal(form.has_errors(), bool(expected), self._with_schema(message, schema))
        return self

    def has_global_error(self, expected: Expected = True) -> "FormTester":
        """Assert on the errors that are not attached to a field."""
        return self.is_error(None, expected)

    def is_error(self, field: Optional[str], expected: Expected = True) -> "FormTester":
        """Assert on the error of a field, or on the global errors if field is None.

        Args:
            field: Field path such as "email" or "address[city]", or None
            expected: False, True, an error count, an error code or a
                delimited pattern ("/^inv/", "!/^req/i") matched against the code

        Raises:
            NoFormSubmittedError: If no form is current
            FieldNotFoundError: If the field path does not exist
        """
        form = self._require_form()

        if field is None:
            error = self._global_error(form)
        else:
            error = resolve_field(form, field).get_error()

        count = len(error) if error is not None else 0
        result = match_error(error, count, expected, field=field)
        self._report(result, expected)
        return self

    def is_instance_of(self, expected_kind: str) -> "FormTester":
        """Assert the exact kind of the current form."""
        form = self._require_form()
        actual_kind = form.form_kind
        self.reporter.assert_equal(
            actual_kind,
            expected_kind,
            f"Expected form is instance of `{expected_kind}`, got `{actual_kind}`",
        )
        return self

    def debug(self) -> None:
        """Print the submitted values and errors of the current form, then exit."""
        form = self._require_form()
        values = pprint.pformat(form.get_submitted_values(), width=sys.maxsize)

        self.reporter.diagnostic("Form debug")
        self.reporter.diagnostic(f"Submitted values: {values}")
        self.reporter.diagnostic(f"Errors: {form.get_error_schema()}")

        logger.warning("form debug requested, exiting with status %d", self.config.debug_exit_status)
        sys.exit(self.config.debug_exit_status)

    def action_completed(self, variables: Dict[str, Any]) -> int:
        """Harvest the forms exposed by a completed action."""
        return self.registry.harvest(variables)

    def filter_template_parameters(
        self, context_kind: Optional[str], parameters: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Harvest forms passed to an action template; parameters are returned unchanged."""
        kind = getattr(context_kind, "value", context_kind)
        if kind is not None and kind == self.config.action_context_kind:
            self.registry.harvest(parameters)
        return parameters

    def _require_form(self) -> FormLike:
        form = self.registry.current()
        if form is None:
            raise NoFormSubmittedError()
        return form

    def _global_error(self, form: FormLike) -> ErrorLike:
        errors = form.get_global_errors()
        if isinstance(errors, ErrorLike):
            return errors
        return ErrorSchema(errors)

    def _report(self, result: MatchResult, expected: Expected) -> None:
        """Forward a verdict, through the content primitives when there is a code to show."""
        if result.kind in (ExpectationKind.CODE, ExpectationKind.PATTERN) and result.actual_code is None:
            self.reporter.fail(result.message)
        elif result.kind is ExpectationKind.CODE:
            self.reporter.assert_equal(result.actual_code, expected, result.message)
        elif result.kind is ExpectationKind.PATTERN:
            if parse_pattern(expected).negated:
                self.reporter.assert_not_matches(result.actual_code, expected[1:], result.message)
            else:
                self.reporter.assert_matches(result.actual_code, expected, result.message)
        else:
            self.reporter.assert_true(result.passed, result.message)

    def _with_schema(self, message: str, schema: Any) -> str:
        if not self.config.include_schema_in_messages:
            return message + "."
        return f"{message}, got:\n{schema}"


__all__ = [
    "FormTester",
]
