"""Core type definitions for formtester.

This module defines the fundamental types shared by the tester components:
- ErrorCode: Symbolic codes produced by the reference validation engine
- ExpectationKind: How an expected-error value is interpreted
- ContextKind: Rendering contexts announced by the harness
- FormLike, FieldLike, ErrorLike, VariableSource: Capability protocols that
  any form library must satisfy to be inspected

The tester never depends on a concrete form class. Anything that offers the
capabilities below can be harvested and asserted against.
"""

from enum import Enum
from typing import Any, Dict, Optional

from typing_extensions import Protocol, runtime_checkable


class ErrorCode(str, Enum):
    """Validation error codes used by the reference form model."""
    REQUIRED = "required"
    INVALID_TYPE = "invalid_type"
    INVALID_FORMAT = "invalid_format"
    INVALID_VALUE = "invalid_value"
    TOO_LONG = "too_long"
    TOO_SHORT = "too_short"
    EXTRA_FIELDS = "extra_fields"
    CUSTOM = "custom"


class ExpectationKind(str, Enum):
    """Interpretation of an expected-error value, in classification order."""
    NO_ERROR = "no_error"
    HAS_ERROR = "has_error"
    COUNT = "count"
    PATTERN = "pattern"
    CODE = "code"


class ContextKind(str, Enum):
    """Rendering contexts the harness may announce before a template renders."""
    ACTION = "action"


@runtime_checkable
class ErrorLike(Protocol):
    """A single error or an aggregate of errors."""

    @property
    def code(self) -> str: ...

    @property
    def message(self) -> str: ...

    def __len__(self) -> int: ...


@runtime_checkable
class FieldLike(Protocol):
    """A field addressable by name, possibly holding nested fields."""

    @property
    def name(self) -> str: ...

    def get_child(self, name: str) -> "FieldLike": ...

    def get_error(self) -> Optional[ErrorLike]: ...


@runtime_checkable
class FormLike(Protocol):
    """Capabilities required of any value picked up by the form registry."""

    @property
    def name(self) -> str: ...

    @property
    def form_kind(self) -> str: ...

    def is_bound(self) -> bool: ...

    def has_errors(self) -> bool: ...

    def get_global_errors(self) -> Any: ...

    def get_error_schema(self) -> Any: ...

    def get_submitted_values(self) -> Dict[str, Any]: ...

    def get_child(self, name: str) -> FieldLike: ...


@runtime_checkable
class VariableSource(Protocol):
    """Provider of the variables exposed by the last completed action."""

    def get_exposed_variables(self) -> Dict[str, Any]: ...


__all__ = [
    "ErrorCode",
    "ExpectationKind",
    "ContextKind",
    "ErrorLike",
    "FieldLike",
    "FormLike",
    "VariableSource",
]
