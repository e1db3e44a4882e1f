"""Shared pytest fixtures for the fieldshell test suite.

Provides reusable fixtures for:
- Sample objects being edited (car, credit card, post, person)
- Builders for each presentation variant
- A whitespace-squashing helper for comparing rendered markup
"""

from __future__ import annotations

import datetime as dt
import logging
import re
from types import SimpleNamespace
from typing import Callable

import pytest

from fieldshell import FormBuilder, SimpleFormBuilder, TableFormBuilder
from fieldshell.utils import LOGGER_NAME


# ---------------------------------------------------------------------------
# Markup helpers
# ---------------------------------------------------------------------------

@pytest.fixture
def squash() -> Callable[[str], str]:
    """Collapse template indentation so markup compares on one line."""

    def _squash(html: str) -> str:
        return re.sub(r"\n\s*", "", str(html)).strip()

    return _squash


# ---------------------------------------------------------------------------
# Objects being edited
# ---------------------------------------------------------------------------

@pytest.fixture
def car() -> SimpleNamespace:
    """A new (unsaved) car record."""
    return SimpleNamespace(color="red", make="Saab", agree=None, size="m")


@pytest.fixture
def credit_card() -> SimpleNamespace:
    return SimpleNamespace(number="123")


@pytest.fixture
def post() -> SimpleNamespace:
    """A post with no categories selected yet."""
    return SimpleNamespace(id=7, title="Hello", category_ids=[])


@pytest.fixture
def person() -> SimpleNamespace:
    return SimpleNamespace(
        first_name="Ada",
        born=dt.date(1984, 10, 5),
        born_y=1984,
        born_m=10,
        born_d=None,
        zone="UTC",
    )


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

@pytest.fixture
def form(car) -> FormBuilder:
    """Standard-variant builder for the car."""
    return FormBuilder("car", car)


@pytest.fixture
def table_form(car) -> TableFormBuilder:
    return TableFormBuilder("car", car)


@pytest.fixture
def simple_form(car) -> SimpleFormBuilder:
    return SimpleFormBuilder("car", car)


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

@pytest.fixture
def clean_package_logger():
    """Restore the package logger's handlers and level after a test."""
    logger = logging.getLogger(LOGGER_NAME)
    handlers = list(logger.handlers)
    level = logger.level
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)
