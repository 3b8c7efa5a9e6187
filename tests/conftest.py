"""Shared fixtures: isolated catalogs so registrations never leak between tests."""

import pytest

from formforge.fields import FieldCatalog
from formforge.loader import FormLoader


@pytest.fixture
def catalog():
    return FieldCatalog()


@pytest.fixture
def loader(catalog):
    return FormLoader(catalog)
