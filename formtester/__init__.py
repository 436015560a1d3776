"""formtester: assertions on the forms submitted during functional tests.

formtester is a pluggable tester for functional-test harnesses that run
simulated requests. It provides:
- A registry that harvests the forms exposed by actions and templates and
  tracks the one that was actually submitted
- Field path resolution for nested fields ("address[city]")
- Expected-error matching by existence, count, exact code or regex pattern
- A reference form model validated with JSON Schema

Basic usage:
    >>> from formtester import FormTester, CollectingReporter, SchemaForm
    >>> schema = {
    ...     "type": "object",
    ...     "properties": {"email": {"type": "string", "format": "email"}},
    ...     "required": ["email"]
    ... }
    >>> form = SchemaForm(schema, name="newsletter")
    >>> _ = form.bind({"email": "nope"})
    >>> tester = FormTester(CollectingReporter())
    >>> _ = tester.action_completed({"form": form})
    >>> _ = tester.begin().has_errors(1).is_error("email", "invalid_format")
    >>> tester.reporter.failed
    0
"""

__version__ = "0.1.0"
__author__ = "formtester contributors"

# Version info
VERSION = (0, 1, 0)

# Core exports
from formtester.config import TesterConfig
from formtester.errors import (
    ErrorSchema,
    FieldNotFoundError,
    FormError,
    FormNotFoundError,
    FormTesterError,
    NoFormSubmittedError,
)
from formtester.forms import Form, FormField, SchemaForm
from formtester.registry import FormRegistry
from formtester.reporter import CollectingReporter, RaisingReporter
from formtester.tester import FormTester

# Package metadata
__all__ = [
    "__version__",
    "VERSION",
    "FormTester",
    "FormRegistry",
    "TesterConfig",
    "Form",
    "FormField",
    "SchemaForm",
    "FormError",
    "ErrorSchema",
    "CollectingReporter",
    "RaisingReporter",
    "FormTesterError",
    "NoFormSubmittedError",
    "FormNotFoundError",
    "FieldNotFoundError",
]
