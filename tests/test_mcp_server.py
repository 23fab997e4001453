"""Tests for the MCP tools over headless sessions."""

from calcpad.server import mcp_server


def test_list_apps():
    names = [app["name"] for app in mcp_server.list_apps()]
    assert "calculator" in names


def test_get_app_info():
    info = mcp_server.get_app_info("calculator")
    assert info["status"] == "success"
    assert info["name"] == "calculator"
    assert ["q", "quit", "Quit"] in info["bindings"]

    assert mcp_server.get_app_info("nope")["status"] == "error"


def test_create_session(sessions):
    result = mcp_server.create_session()
    assert result["status"] == "success"
    assert result["session_id"].startswith("calc_")
    assert result["display"] == "0"
    assert result["state"] == "Start"
    assert result["session_id"] in sessions.sessions


def test_create_session_rejects_bad_config(sessions):
    result = mcp_server.create_session(max_digits=1)
    assert result["status"] == "error"
    assert not sessions.sessions


def test_press_keys(sessions):
    session_id = mcp_server.create_session()["session_id"]

    result = mcp_server.press_keys(session_id, "7+3=")
    assert result["status"] == "success"
    assert result["display"] == "10"
    assert result["ignored_keys"] == []

    result = mcp_server.press_keys(session_id, "5 / 0 Enter")
    assert result["display"] == "Error"
    assert result["state"] == "ErrorState"

    result = mcp_server.press_keys(session_id, "Escape 4 q")
    assert result["display"] == "4"
    assert result["ignored_keys"] == ["q"]


def test_press_button(sessions):
    session_id = mcp_server.create_session()["session_id"]
    for button in ("number-2", "plus", "number-2", "equals"):
        result = mcp_server.press_button(session_id, button)
        assert result["status"] == "success"
    assert result["display"] == "4"
    assert result["just_evaluated"] is True

    result = mcp_server.press_button(session_id, "sqrt")
    assert result["status"] == "error"
    assert mcp_server.get_session_state(session_id)["display"] == "4"


def test_clear_and_close_session(sessions):
    session_id = mcp_server.create_session()["session_id"]
    mcp_server.press_keys(session_id, "9*")

    result = mcp_server.clear_session(session_id)
    assert result["display"] == "0"
    assert result["accumulator"] is None
    assert result["pending_operator"] is None

    assert mcp_server.close_session(session_id)["status"] == "success"
    assert mcp_server.get_session_state(session_id)["status"] == "error"
    assert mcp_server.close_session(session_id)["status"] == "error"


def test_unknown_session(sessions):
    for result in (
        mcp_server.press_keys("calc_missing", "1"),
        mcp_server.press_button("calc_missing", "number-1"),
        mcp_server.get_session_state("calc_missing"),
        mcp_server.clear_session("calc_missing"),
    ):
        assert result["status"] == "error"
        assert result["session_id"] == "calc_missing"


def test_list_sessions(sessions):
    first = mcp_server.create_session()["session_id"]
    second = mcp_server.create_session(max_digits=4)["session_id"]
    mcp_server.press_keys(second, "123456")

    result = mcp_server.list_sessions()
    assert result["count"] == 2
    displays = {entry["session_id"]: entry["display"] for entry in result["sessions"]}
    assert displays == {first: "0", second: "1234"}
