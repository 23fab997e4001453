"""Shared fixtures for the Calcpad test suite."""

import pytest

from calcpad.core.engine import CalculatorSession
from calcpad.server import mcp_server


@pytest.fixture
def session():
    return CalculatorSession()


@pytest.fixture
def sessions():
    """The MCP server's session manager, emptied around each test."""
    mcp_server.session_manager.clear()
    yield mcp_server.session_manager
    mcp_server.session_manager.clear()
