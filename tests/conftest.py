"""
Pytest configuration and fixtures for charlength tests

This module provides shared fixtures for unit and integration tests.
"""
import os

import pytest

from charlength.core.models import FieldInput, Form, FormField
from charlength.core.rules import RuleRegistry


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't require external services"
    )
    config.addinivalue_line(
        "markers", "integration: Tests that run rule files through the registry"
    )


# =======================
# HOST FIXTURES
# =======================

@pytest.fixture(scope="function")
def registry() -> RuleRegistry:
    """
    Fresh host registry for a single test

    Returns:
        Empty RuleRegistry at the default host version
    """
    return RuleRegistry()


@pytest.fixture
def text_field() -> FormField:
    """Required single-line text field #1"""
    return FormField(id=1, label="Username", is_required=True)


@pytest.fixture
def name_field() -> FormField:
    """Optional Name field #1 with First (1.3) and Last (1.6) inputs"""
    return FormField(
        id=1,
        label="Name",
        is_required=False,
        inputs=[
            FieldInput(id="1.3", label="First"),
            FieldInput(id="1.6", label="Last"),
        ],
    )


@pytest.fixture
def address_field() -> FormField:
    """Required Address field #7"""
    return FormField(
        id=7,
        label="Address",
        is_required=True,
        inputs=[
            FieldInput(id="7.1", label="Street Address"),
            FieldInput(id="7.2", label="Address Line 2"),
            FieldInput(id="7.3", label="City"),
        ],
    )


@pytest.fixture
def name_form(name_field) -> Form:
    return Form(id=746, title="Contact", fields=[name_field])


# =======================
# FILE FIXTURES
# =======================

@pytest.fixture(scope="session")
def example_rules_path() -> str:
    """
    Get path to the example rules file shipped in config/

    Returns:
        Path to config/rules.yaml
    """
    return os.path.join(os.path.dirname(os.path.dirname(__file__)), "config", "rules.yaml")


@pytest.fixture
def write_rules(tmp_path):
    """
    Write a YAML rules file into a temp directory

    Returns:
        Function taking YAML text and returning the file path
    """
    def _write(text: str, name: str = "rules.yaml") -> str:
        path = tmp_path / name
        path.write_text(text)
        return str(path)

    return _write
