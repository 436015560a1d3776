"""Test suite for formtester.

This package contains tests for:
- Field path parsing and resolution (flat and nested)
- Expected-error classification and matching
- Form registry harvesting and current-form tracking
- Reference form model and JSON Schema validation
- Reporters and the FormTester orchestrator
- End-to-end scenarios driving the tester like a harness would
"""
