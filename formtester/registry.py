"""Registry of the forms surfaced during a test step.

The registry collects form-valued variables exposed by an action or passed
to a template, and tracks the "current" form: the most recently discovered
form that has been bound to submitted data. It is reset at the start of
every test step.

Usage:
    >>> from formtester.forms import Form
    >>> registry = FormRegistry()
    >>> login = Form(["username"], name="login")
    >>> _ = login.bind({"username": "alice"})
    >>> registry.harvest({"login": login, "title": "Sign in"})
    1
    >>> registry.current() is login
    True
"""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from formtester.errors import FormNotFoundError
from formtester.types import FormLike, VariableSource

logger = logging.getLogger(__name__)

Source = Union[VariableSource, Callable[[], Mapping[str, Any]]]


class FormRegistry:
    """Name to form mapping plus the current-form reference.

    Invariant: the current form, when set, is one of the registered forms.
    """

    def __init__(self) -> None:
        self._forms: Dict[str, FormLike] = {}
        self._current: Optional[FormLike] = None

    def reset(self) -> None:
        """Forget every harvested form and the current form."""
        self._forms = {}
        self._current = None
        logger.debug("form registry reset")

    def harvest(self, variables: Mapping[str, Any]) -> int:
        """Record every form found among the variables.

        A bound form becomes the current form; when several bound forms are
        found the last one, in iteration order, wins.

        Returns:
            Number of forms recorded
        """
        found = 0
        for name, value in variables.items():
            if not isinstance(value, FormLike):
                continue
            self._forms[name] = value
            found += 1
            if value.is_bound():
                self._current = value
                logger.debug("harvested bound form %r (%s)", name, value.form_kind)
            else:
                logger.debug("harvested form %r (%s)", name, value.form_kind)
        return found

    def ensure_harvested(self, source: Optional[Source]) -> None:
        """Harvest from the source if nothing has been harvested yet."""
        if self._forms or source is None:
            return

        if isinstance(source, VariableSource):
            variables = source.get_exposed_variables()
        else:
            variables = source()
        self.harvest(variables)

    def select(self, name: str) -> FormLike:
        """Return the form registered under a name.

        Raises:
            FormNotFoundError: If no form was harvested under that name
        """
        try:
            return self._forms[name]
        except KeyError:
            raise FormNotFoundError(name, self._forms) from None

    def set_current(self, form: FormLike) -> None:
        """Make a form current, registering it under its name if needed."""
        if not any(known is form for known in self._forms.values()):
            self._forms[form.name] = form
        self._current = form
        logger.debug("current form is now %r", form.name)

    def current(self) -> Optional[FormLike]:
        return self._current

    def get(self, name: Optional[str] = None) -> Optional[FormLike]:
        """Return the named form if known, otherwise the current form."""
        if name is not None and name in self._forms:
            return self._forms[name]
        return self._current

    def names(self) -> List[str]:
        return list(self._forms)

    def __len__(self) -> int:
        return len(self._forms)

    def __contains__(self, name: object) -> bool:
        return name in self._forms

    def __bool__(self) -> bool:
        return bool(self._forms)


__all__ = [
    "FormRegistry",
]
