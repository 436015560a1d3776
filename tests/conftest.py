"""Shared fixtures for the formtester test suite."""

import pytest

from formtester.forms import Form, SchemaForm
from formtester.reporter import CollectingReporter
from formtester.tester import FormTester


SIGNUP_SCHEMA = {
    "type": "object",
    "properties": {
        "email": {"type": "string", "format": "email"},
        "name": {"type": "string", "minLength": 2},
        "address": {
            "type": "object",
            "properties": {
                "city": {"type": "string"},
                "zip": {"type": "string", "pattern": "^[0-9]{5}$"},
                "geo": {
                    "type": "object",
                    "properties": {
                        "lat": {"type": "number"},
                        "lng": {"type": "number"},
                    },
                },
            },
            "required": ["city"],
        },
    },
    "required": ["email"],
}


@pytest.fixture
def reporter():
    return CollectingReporter()


@pytest.fixture
def tester(reporter):
    return FormTester(reporter)


@pytest.fixture
def invalid_email_form():
    """A bound form with no global errors and one `invalid_format` error on email."""
    form = Form(["email", "other_field"], name="contact")
    form.bind({"email": "not-an-email"})
    form.add_error("email", "invalid_format", "The email address is invalid.")
    return form


@pytest.fixture
def signup_form():
    return SchemaForm(SIGNUP_SCHEMA, name="signup")
