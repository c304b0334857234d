"""
Shared fixtures for builder tests.
"""

import pytest

from tests.fakes.builders import PersonBuilder, PlainPersonBuilder


@pytest.fixture
def person_builder() -> PersonBuilder:
    """Builder with three blueprints and a running counter override."""
    return PersonBuilder.create()


@pytest.fixture
def plain_builder() -> PlainPersonBuilder:
    """Builder with two blueprints and no baseline overrides."""
    return PlainPersonBuilder.create()
