"""Error model and exceptions for formtester.

This module defines the two kinds of "errors" the package deals with:

- Validation errors carried by a form: a single FormError (code + message)
  and the ErrorSchema aggregate that groups global errors and per-field
  errors, possibly nested for grouped fields.
- Exceptions raised by the tester itself when a test is written against
  state that does not exist (no submitted form, unknown form name, unknown
  field path). These are precondition violations and abort the test step;
  they are never reported as ordinary assertion failures.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from formtester.types import ErrorCode


@dataclass(frozen=True)
class FormError:
    """A single validation error.

    Attributes:
        code: Short symbolic code (e.g., "required", "invalid_format")
        message: Human-readable error description

    Examples:
        >>> err = FormError(code="required", message="Email is required")
        >>> err.code
        'required'
        >>> len(err)
        1
    """
    code: str
    message: str = ""

    def __post_init__(self):
        """Normalize enum codes to their string value."""
        if isinstance(self.code, ErrorCode):
            object.__setattr__(self, "code", self.code.value)

    def __len__(self) -> int:
        return 1

    def __str__(self) -> str:
        return self.message or self.code

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        return {"code": self.code, "message": self.message}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FormError":
        """Create FormError from dict."""
        return cls(code=data["code"], message=data.get("message", ""))


ErrorEntry = Union[FormError, "ErrorSchema"]


class ErrorSchema:
    """Aggregate view over a set of errors.

    An error schema holds global errors (not attached to a name) and named
    errors, where a named entry is either a FormError or a nested
    ErrorSchema for a group of fields. The length of a schema is the total
    number of leaf errors it contains.

    Examples:
        >>> schema = ErrorSchema()
        >>> schema.add(FormError("invalid", "CSRF token mismatch"))
        >>> schema.add_named(["address", "city"], FormError("required", "Required."))
        >>> len(schema)
        2
        >>> schema.code
        'invalid address [city [required]]'
        >>> str(schema).splitlines()
        ['  CSRF token mismatch', '  address [city [Required.]]']
    """

    def __init__(
        self,
        errors: Optional[Iterable[FormError]] = None,
        named: Optional[Dict[str, ErrorEntry]] = None,
    ) -> None:
        self._errors: List[FormError] = list(errors or [])
        self._named: Dict[str, ErrorEntry] = dict(named or {})

    def add(self, error: FormError) -> None:
        """Append a global error."""
        self._errors.append(error)

    def add_named(self, path: Sequence[str], error: FormError) -> None:
        """Attach an error to a (possibly nested) field path.

        The first error recorded on a slot wins; later errors for a slot that
        already holds one are ignored. An empty path records a global error.
        """
        if not path:
            self.add(error)
            return

        head, rest = str(path[0]), path[1:]
        existing = self._named.get(head)
        if not rest:
            if existing is None:
                self._named[head] = error
            return

        if existing is None:
            existing = ErrorSchema()
            self._named[head] = existing
        if isinstance(existing, ErrorSchema):
            existing.add_named(rest, error)

    def get(self, name: str) -> Optional[ErrorEntry]:
        """Return the error entry for a name, or None."""
        return self._named.get(name)

    @property
    def global_errors(self) -> List[FormError]:
        return list(self._errors)

    @property
    def named_errors(self) -> Dict[str, ErrorEntry]:
        return dict(self._named)

    @property
    def code(self) -> str:
        """Space-joined codes of every error, named ones as `name [code]`."""
        parts = [error.code for error in self._errors]
        parts.extend(f"{name} [{entry.code}]" for name, entry in self._named.items())
        return " ".join(parts)

    @property
    def message(self) -> str:
        """Space-joined messages of every error, named ones as `name [message]`."""
        parts = [str(error) for error in self._errors]
        parts.extend(f"{name} [{entry.message or entry.code}]" for name, entry in self._named.items())
        return " ".join(parts)

    def __len__(self) -> int:
        return len(self._errors) + sum(len(entry) for entry in self._named.values())

    def __bool__(self) -> bool:
        return len(self) > 0

    def __contains__(self, name: object) -> bool:
        return name in self._named

    def __iter__(self) -> Iterator[Tuple[Optional[str], ErrorEntry]]:
        """Yield (name, entry) pairs; global errors come first with a None name."""
        for error in self._errors:
            yield None, error
        yield from self._named.items()

    def __str__(self) -> str:
        lines = [f"  {error}" for error in self._errors]
        lines.extend(
            f"  {name} [{entry.message or entry.code}]" for name, entry in self._named.items()
        )
        return "\n".join(lines) + "\n" if lines else ""

    def __repr__(self) -> str:
        return f"ErrorSchema(errors={self._errors!r}, named={self._named!r})"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        return {
            "errors": [error.to_dict() for error in self._errors],
            "named": {name: entry.to_dict() for name, entry in self._named.items()},
        }


class FormTesterError(Exception):
    """Base class for precondition violations raised by the form tester."""


class NoFormSubmittedError(FormTesterError):
    """Raised when an assertion needs a current form and none is selected."""

    def __init__(self, message: str = "no form has been submitted."):
        super().__init__(message)


class FormNotFoundError(FormTesterError):
    """Raised when a form name is not known to the registry.

    Attributes:
        name: The requested form name
        available: Names of the forms that were harvested
    """

    def __init__(self, name: str, available: Optional[Iterable[str]] = None):
        self.name = name
        self.available = sorted(available or [])
        message = f"form with name `{name}` not found"
        if self.available:
            message += f" (available: {', '.join(self.available)})"
        super().__init__(message)


class FieldNotFoundError(FormTesterError, KeyError):
    """Raised when a field path segment does not exist.

    Attributes:
        path: The full path being resolved
        segment: The segment that could not be found
    """

    def __init__(self, path: str, segment: Optional[str] = None):
        self.path = path
        self.segment = segment if segment is not None else path
        if self.segment == path:
            message = f"field `{path}` not found"
        else:
            message = f"field `{self.segment}` not found while resolving `{path}`"
        super().__init__(message)

    def __str__(self) -> str:
        return str(self.args[0])


__all__ = [
    "FormError",
    "ErrorSchema",
    "FormTesterError",
    "NoFormSubmittedError",
    "FormNotFoundError",
    "FieldNotFoundError",
]
