"""Reference form model.

A small form implementation that satisfies the FormLike and FieldLike
capabilities, so the tester can be used without any other form library:

- Form: a named tree of fields that can be bound to submitted values and
  carries an ErrorSchema after validation
- FormField: a read-only view over one node of that tree
- SchemaForm: a Form whose fields and validation rules come from a JSON
  Schema, validated with the jsonschema library

Fields are declared as a nested mapping where a leaf maps to None and a
group maps to its own fields, or as a plain iterable of leaf names:

    >>> form = Form({"email": None, "address": {"city": None, "zip": None}}, name="signup")
    >>> form["address"]["city"].path
    'address[city]'
"""

from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Union

from formtester.errors import ErrorEntry, ErrorSchema, FieldNotFoundError, FormError
from formtester.paths import parse_field_path, resolve_field
from formtester.types import ErrorCode
from formtester.validation import ValidationEngine

FieldSpec = Dict[str, Optional["FieldSpec"]]
FieldsArg = Union[Mapping[str, Any], Iterable[str], None]


def normalize_fields(fields: FieldsArg) -> FieldSpec:
    """Turn a field declaration into a nested dict of name -> None or group."""
    if fields is None:
        return {}
    if isinstance(fields, Mapping):
        return {
            str(name): None if sub is None else normalize_fields(sub)
            for name, sub in fields.items()
        }
    return {str(name): None for name in fields}


def fields_from_schema(schema: Mapping[str, Any]) -> FieldSpec:
    """Derive a field declaration from a JSON Schema's properties.

    Properties of type object that declare their own properties become
    field groups; everything else is a leaf field.
    """
    spec: FieldSpec = {}
    for name, sub in schema.get("properties", {}).items():
        if isinstance(sub, Mapping) and sub.get("type") == "object" and "properties" in sub:
            spec[name] = fields_from_schema(sub)
        else:
            spec[name] = None
    return spec


class FormField:
    """Read-only view over one field of a form.

    Attributes:
        name: Name of the field within its parent
        path: Full bracketed path from the form root (e.g. "address[city]")
    """

    def __init__(
        self,
        name: str,
        spec: Optional[FieldSpec] = None,
        error: Optional[ErrorEntry] = None,
        value: Any = None,
        parent_path: Optional[str] = None,
    ) -> None:
        self.name = name
        self.path = name if parent_path is None else f"{parent_path}[{name}]"
        self._spec = spec
        self._error = error
        self._value = value

    def is_group(self) -> bool:
        return self._spec is not None

    def get_error(self) -> Optional[ErrorEntry]:
        return self._error

    def has_error(self) -> bool:
        return self._error is not None and len(self._error) > 0

    def get_value(self) -> Any:
        return self._value

    def get_child(self, name: str) -> "FormField":
        """Return a nested field.

        Raises:
            FieldNotFoundError: If this field is not a group or has no such child
        """
        if self._spec is None or name not in self._spec:
            raise FieldNotFoundError(f"{self.path}[{name}]", name)

        error = self._error.get(name) if isinstance(self._error, ErrorSchema) else None
        return FormField(
            name,
            spec=self._spec[name],
            error=error,
            value=_child_value(self._value, name),
            parent_path=self.path,
        )

    def children(self) -> List["FormField"]:
        return [self.get_child(name) for name in (self._spec or {})]

    def __getitem__(self, name: str) -> "FormField":
        return self.get_child(name)

    def __contains__(self, name: object) -> bool:
        return self._spec is not None and name in self._spec

    def __repr__(self) -> str:
        return f"FormField({self.path!r}, error={self._error!r})"


class Form:
    """A named tree of fields that can be bound to submitted values.

    `form_kind` is the discriminant used by `FormTester.is_instance_of`. A
    subclass that does not declare one gets its class name, so a subclass
    never shares its parent's kind.

    Examples:
        >>> form = Form(["username", "password"], name="login")
        >>> form.is_bound()
        False
        >>> form.bind({"username": "alice", "password": "secret", "remember": "1"})
        False
        >>> form.get_global_errors()[0].code
        'extra_fields'
    """

    form_kind = "form"

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if "form_kind" not in cls.__dict__:
            cls.form_kind = cls.__name__

    def __init__(
        self,
        fields: FieldsArg = None,
        name: str = "form",
        form_kind: Optional[str] = None,
    ) -> None:
        self.name = name
        if form_kind is not None:
            self.form_kind = form_kind
        self._fields = normalize_fields(fields)
        self._bound = False
        self._values: Dict[str, Any] = {}
        self._errors = ErrorSchema()

    def bind(self, values: Optional[Mapping[str, Any]]) -> bool:
        """Bind submitted values, run validation and return whether the form is valid."""
        self._values = dict(values or {})
        self._errors = self.validate(self._values)
        self._bound = True
        return self.is_valid()

    def validate(self, values: Dict[str, Any]) -> ErrorSchema:
        """Validate submitted values; the base form only rejects unknown fields."""
        errors = ErrorSchema()
        for name in values:
            if name not in self._fields:
                errors.add(
                    FormError(ErrorCode.EXTRA_FIELDS, f'Unexpected extra form field named "{name}".')
                )
        return errors

    def add_error(self, path: Optional[str], code: str, message: str = "") -> None:
        """Record an error from a custom check; a None path records a global error.

        Raises:
            FieldNotFoundError: If the path does not name a field of this form
        """
        error = FormError(code, message)
        if path is None:
            self._errors.add(error)
            return

        resolve_field(self, path)
        name, segments = parse_field_path(path)
        self._errors.add_named([name] + segments, error)

    def is_bound(self) -> bool:
        return self._bound

    def is_valid(self) -> bool:
        return self._bound and not self.has_errors()

    def has_errors(self) -> bool:
        return len(self._errors) > 0

    def get_global_errors(self) -> List[FormError]:
        return self._errors.global_errors

    def get_error_schema(self) -> ErrorSchema:
        return self._errors

    def get_submitted_values(self) -> Dict[str, Any]:
        return dict(self._values)

    def get_child(self, name: str) -> FormField:
        """Return a top-level field.

        Raises:
            FieldNotFoundError: If the form has no such field
        """
        if name not in self._fields:
            raise FieldNotFoundError(name)
        return FormField(
            name,
            spec=self._fields[name],
            error=self._errors.get(name),
            value=self._values.get(name),
        )

    def __getitem__(self, name: str) -> FormField:
        return self.get_child(name)

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __iter__(self) -> Iterator[FormField]:
        return iter([self.get_child(name) for name in self._fields])

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, kind={self.form_kind!r}, bound={self._bound})"


class SchemaForm(Form):
    """A form whose fields and validation rules come from a JSON Schema.

    Examples:
        >>> schema = {
        ...     "type": "object",
        ...     "properties": {"email": {"type": "string", "format": "email"}},
        ...     "required": ["email"],
        ... }
        >>> form = SchemaForm(schema, name="newsletter")
        >>> form.bind({})
        False
        >>> form["email"].get_error().code
        'required'
    """

    form_kind = "schema_form"

    def __init__(
        self,
        schema: Dict[str, Any],
        name: str = "form",
        form_kind: Optional[str] = None,
    ) -> None:
        super().__init__(fields_from_schema(schema), name=name, form_kind=form_kind)
        self.schema = schema
        self._engine = ValidationEngine(schema)

    def validate(self, values: Dict[str, Any]) -> ErrorSchema:
        return self._engine.validate(values).error_schema


def _child_value(value: Any, name: str) -> Any:
    if isinstance(value, Mapping):
        return value.get(name)
    if isinstance(value, (list, tuple)) and name.isdigit() and int(name) < len(value):
        return value[int(name)]
    return None


__all__ = [
    "Form",
    "FormField",
    "SchemaForm",
    "normalize_fields",
    "fields_from_schema",
]
