"""JSON Schema validation engine for the reference form model.

This module provides a ValidationEngine that validates submitted values
against a JSON Schema definition and produces an ErrorSchema: errors that
can be attributed to a field are attached to that field's path, the others
become global errors.

jsonschema validation errors are translated into FormError objects with
symbolic codes from ErrorCode so that tests can assert on codes rather than
on library-specific messages.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Set, Tuple

import jsonschema
from jsonschema import Draft7Validator

from formtester.errors import ErrorSchema, FormError
from formtester.types import ErrorCode


@dataclass(frozen=True)
class ValidationResult:
    """Result of validating submitted values against a JSON Schema.

    Attributes:
        is_valid: Whether the data passed all validation checks
        errors: List of (field path, error) pairs, in validation order
        error_schema: The same errors grouped by field path

    Examples:
        >>> schema = {'type': 'object', 'properties': {'name': {'type': 'string'}}, 'required': ['name']}
        >>> engine = ValidationEngine(schema)
        >>> result = engine.validate({'name': 'test'})
        >>> result.is_valid
        True
        >>> len(result.error_schema)
        0
    """
    is_valid: bool
    errors: List[Tuple[List[str], FormError]]
    error_schema: ErrorSchema

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        return {
            "isValid": self.is_valid,
            "errors": [
                {"path": path, **error.to_dict()} for path, error in self.errors
            ],
        }


class ValidationEngine:
    """Wraps a Draft 7 validator and translates its errors.

    Examples:
        >>> schema = {
        ...     'type': 'object',
        ...     'properties': {
        ...         'name': {'type': 'string'},
        ...         'age': {'type': 'number', 'minimum': 0}
        ...     },
        ...     'required': ['name']
        ... }
        >>> engine = ValidationEngine(schema)
        >>> result = engine.validate({'age': -5})
        >>> result.is_valid
        False
        >>> result.error_schema.get('name').code
        'required'
    """

    def __init__(self, schema: Dict[str, Any]) -> None:
        """Initialize the validation engine with a JSON Schema.

        Raises:
            jsonschema.SchemaError: If the provided schema is invalid
        """
        self.schema = schema
        Draft7Validator.check_schema(schema)
        self.validator = Draft7Validator(schema, format_checker=Draft7Validator.FORMAT_CHECKER)

    def validate(self, data: Any) -> ValidationResult:
        """Validate submitted values against the schema."""
        errors = list(self.validator.iter_errors(data))

        translated: List[Tuple[List[str], FormError]] = []
        schema = ErrorSchema()
        claimed: Set[Tuple[str, ...]] = set()
        for error in errors:
            path, form_error = self._translate_error(error, claimed)
            translated.append((path, form_error))
            schema.add_named(path, form_error)

        return ValidationResult(
            is_valid=not translated,
            errors=translated,
            error_schema=schema,
        )

    def _translate_error(
        self, error: jsonschema.ValidationError, claimed: Set[Tuple[str, ...]]
    ) -> Tuple[List[str], FormError]:
        """Translate a jsonschema ValidationError into a field path and FormError.

        `claimed` holds the paths of missing properties already reported, since
        jsonschema emits one `required` error per missing property, in order.

        Error mapping:
            - 'required' -> REQUIRED, attached to the missing property
            - 'type' -> INVALID_TYPE
            - 'format' and 'pattern' -> INVALID_FORMAT
            - 'enum', 'const' and numeric bounds -> INVALID_VALUE
            - 'minLength' / 'maxLength' -> TOO_SHORT / TOO_LONG
            - anything else -> CUSTOM
        """
        path = [str(p) for p in error.path]
        label = path[0] + "".join(f"[{p}]" for p in path[1:]) if path else "form"

        if error.validator == "required":
            absent = [name for name in error.validator_value if name not in error.instance]
            missing = next(
                (name for name in absent if tuple(path + [name]) not in claimed),
                absent[0] if absent else "field",
            )
            path = path + [missing]
            claimed.add(tuple(path))
            return path, FormError(ErrorCode.REQUIRED, f"Field '{missing}' is required.")

        if error.validator == "type":
            return path, FormError(
                ErrorCode.INVALID_TYPE,
                f"Field '{label}' must be of type {error.validator_value}.",
            )

        if error.validator in ("format", "pattern"):
            return path, FormError(
                ErrorCode.INVALID_FORMAT,
                f"Field '{label}' has an invalid format.",
            )

        if error.validator in ("enum", "const"):
            return path, FormError(
                ErrorCode.INVALID_VALUE,
                f"Field '{label}' must be one of: {error.validator_value}.",
            )

        if error.validator == "minLength":
            return path, FormError(
                ErrorCode.TOO_SHORT,
                f"Field '{label}' is too short (minimum {error.validator_value} characters).",
            )

        if error.validator == "maxLength":
            return path, FormError(
                ErrorCode.TOO_LONG,
                f"Field '{label}' is too long (maximum {error.validator_value} characters).",
            )

        if error.validator in ("minimum", "maximum", "exclusiveMinimum", "exclusiveMaximum"):
            return path, FormError(
                ErrorCode.INVALID_VALUE,
                f"Field '{label}' violates {error.validator} constraint: {error.validator_value}.",
            )

        return path, FormError(ErrorCode.CUSTOM, error.message)


__all__ = [
    "ValidationEngine",
    "ValidationResult",
]
