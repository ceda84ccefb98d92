"""
Pytest configuration for unit tests.
"""
import pytest
import sys
import os

# Ensure project root is in python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import structlog

from connstring.builders.postgres import PostgresConnectionString
from connstring.builders.sqlserver import SqlServerConnectionString

@pytest.fixture
def postgres():
    """Empty PostgreSQL builder."""
    return PostgresConnectionString()

@pytest.fixture
def sqlserver():
    """Empty SQL Server builder."""
    return SqlServerConnectionString()

@pytest.fixture
def reset_structlog():
    """Restore the default structlog configuration after a test reconfigures it."""
    yield
    structlog.reset_defaults()
