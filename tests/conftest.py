"""Shared pytest fixtures for the bindpower test suite."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from bindpower.operators import default_table


@pytest.fixture
def table():
    return default_table()


@pytest.fixture
def runner():
    return CliRunner()
