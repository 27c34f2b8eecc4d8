"""Shared fixtures for initializr tests."""
import pytest

from initializr.catalog import load_catalog
from initializr.core.validation import validate_submission
from initializr.generators.templates import TemplateRegistry


@pytest.fixture(scope="session")
def catalog():
    return load_catalog()


@pytest.fixture(scope="session")
def registry():
    return TemplateRegistry.default()


@pytest.fixture
def configure(catalog):
    """Validate a form dict and return the resulting ValidationResult."""
    def _configure(**form):
        return validate_submission(form, catalog)
    return _configure
