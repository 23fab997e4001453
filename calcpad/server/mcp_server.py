"""MCP Server for Calcpad

Exposes headless calculator sessions over MCP so that a client can type
keys, press keypad buttons and read the display.
"""

import logging
import sys
import uuid
from datetime import datetime
from typing import Any

from mcp.server.fastmcp import FastMCP
from pydantic import ValidationError

# Import apps module to trigger registration decorators
from calcpad import apps  # noqa: F401  # Required for app auto-registration
from calcpad.core.base import AppRegistry
from calcpad.core.config import CalculatorConfig
from calcpad.core.engine import CalculatorSession
from calcpad.core.keymap import split_keys

logger = logging.getLogger("calcpad.server")


class SessionManager:
    """Manages headless calculator sessions."""

    def __init__(self):
        self.sessions: dict[str, CalculatorSession] = {}
        self.created_at: dict[str, str] = {}

    def generate_session_id(self) -> str:
        """Generate a unique session ID."""
        return f"calc_{uuid.uuid4().hex[:8]}"

    def create_session(self, config: CalculatorConfig | None = None) -> str:
        session_id = self.generate_session_id()
        self.sessions[session_id] = CalculatorSession(config)
        self.created_at[session_id] = datetime.now().isoformat()
        logger.info(f"Created calculator session {session_id}")
        return session_id

    def get_session(self, session_id: str) -> CalculatorSession | None:
        return self.sessions.get(session_id)

    def close_session(self, session_id: str) -> bool:
        if self.sessions.pop(session_id, None) is None:
            logger.warning(f"Session {session_id} not found")
            return False
        self.created_at.pop(session_id, None)
        logger.info(f"Closed calculator session {session_id}")
        return True

    def describe(self, session_id: str) -> dict[str, Any]:
        """Session snapshot plus bookkeeping."""
        return {
            "session_id": session_id,
            "created_at": self.created_at.get(session_id),
            **self.sessions[session_id].snapshot()
        }

    def clear(self) -> None:
        self.sessions.clear()
        self.created_at.clear()


# Initialize MCP server and session manager
mcp = FastMCP("Calcpad MCP Server")
session_manager = SessionManager()


def _unknown_session(session_id: str) -> dict[str, Any]:
    return {
        "status": "error",
        "error": f"Session {session_id} not found",
        "session_id": session_id
    }


@mcp.tool()
def list_apps() -> list[dict[str, Any]]:
    """List all available Calcpad applications.

    Returns:
        List of application configurations with metadata.
    """
    return [config.model_dump() for config in AppRegistry.list_apps()]


@mcp.tool()
def get_app_info(app_name: str) -> dict[str, Any]:
    """Get detailed information about an application.

    Args:
        app_name: Name of the application

    Returns:
        Detailed application information.
    """
    app_class = AppRegistry.get_app_class(app_name)
    if not app_class:
        return {
            "status": "error",
            "error": f"Unknown application: {app_name}"
        }

    return {
        "status": "success",
        **app_class.get_config().model_dump(),
        "bindings": [list(binding) for binding in getattr(app_class, 'BINDINGS', [])]
    }


@mcp.tool()
def create_session(max_digits: int = 12) -> dict[str, Any]:
    """Create a headless calculator session.

    Args:
        max_digits: Maximum number of digits that can be typed into the display

    Returns:
        The new session ID and its initial state.
    """
    try:
        config = CalculatorConfig(max_digits=max_digits)
    except ValidationError as e:
        return {
            "status": "error",
            "error": f"Invalid configuration: {e.errors()[0]['msg']}"
        }

    session_id = session_manager.create_session(config)
    return {
        "status": "success",
        **session_manager.describe(session_id)
    }


@mcp.tool()
def press_keys(session_id: str, keys: str) -> dict[str, Any]:
    """Type keys into a calculator session.

    Args:
        session_id: ID of the session
        keys: Keys to type, e.g. "12+3=" or "5 / 0 Enter". Digits, ".", "+",
            "-", "*", "x", "/", "%", "=", "Enter" and "Escape" are recognized.

    Returns:
        Which keys were ignored and the resulting session state.
    """
    session = session_manager.get_session(session_id)
    if session is None:
        return _unknown_session(session_id)

    ignored = [key for key in split_keys(keys) if not session.press_key(key)]
    return {
        "status": "success",
        "ignored_keys": ignored,
        **session_manager.describe(session_id)
    }


@mcp.tool()
def press_button(session_id: str, button: str) -> dict[str, Any]:
    """Press a keypad button in a calculator session.

    Args:
        session_id: ID of the session
        button: Button ID: number-0 .. number-9, point, clear, plus-minus,
            percent, plus, minus, multiply, divide, modulo, equals

    Returns:
        The resulting session state.
    """
    session = session_manager.get_session(session_id)
    if session is None:
        return _unknown_session(session_id)

    if not session.press(button):
        return {
            "status": "error",
            "error": f"Unknown button: {button}",
            "session_id": session_id
        }
    return {
        "status": "success",
        **session_manager.describe(session_id)
    }


@mcp.tool()
def get_session_state(session_id: str) -> dict[str, Any]:
    """Get the display and evaluation state of a session."""
    if session_manager.get_session(session_id) is None:
        return _unknown_session(session_id)
    return {
        "status": "success",
        **session_manager.describe(session_id)
    }


@mcp.tool()
def clear_session(session_id: str) -> dict[str, Any]:
    """Press Clear in a session."""
    session = session_manager.get_session(session_id)
    if session is None:
        return _unknown_session(session_id)
    session.clear()
    return {
        "status": "success",
        **session_manager.describe(session_id)
    }


@mcp.tool()
def close_session(session_id: str) -> dict[str, Any]:
    """Discard a calculator session."""
    if not session_manager.close_session(session_id):
        return _unknown_session(session_id)
    return {
        "status": "success",
        "session_id": session_id,
        "closed_at": datetime.now().isoformat()
    }


@mcp.tool()
def list_sessions() -> dict[str, Any]:
    """List all open calculator sessions."""
    sessions = [session_manager.describe(session_id) for session_id in session_manager.sessions]
    return {
        "status": "success",
        "sessions": sessions,
        "count": len(sessions),
        "timestamp": datetime.now().isoformat()
    }


def main():
    """Main entry point for the MCP server."""
    # Configure logging to stderr for MCP servers
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr
    )
    try:
        logger.info(f"Starting Calcpad MCP Server with {len(AppRegistry.list_apps())} applications")
        mcp.run()
    except KeyboardInterrupt:
        logger.info("Server interrupted by user")
    finally:
        session_manager.clear()
        logger.info("Cleanup completed")


if __name__ == "__main__":
    main()
