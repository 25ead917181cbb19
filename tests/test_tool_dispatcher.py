"""
Tests for ToolDispatcher: function-call routing, batch validation, and
error containment.
"""

import asyncio
import os
import sys
from unittest.mock import MagicMock

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ableton_controls.query_client import ProjectInfo, QueryTimeout
from agents.tool_dispatcher import ToolDispatcher
from agents.tools import tool_names
from osc_executor import OscBatchExecutor, PacingPolicy


class RecordingClient:
    def __init__(self):
        self.sent = []

    def send(self, address, args):
        self.sent.append((address, args))

    def close(self):
        pass


def make_dispatcher(live=None):
    client = RecordingClient()
    executor = OscBatchExecutor(pacing=PacingPolicy(), client_factory=lambda h, p: client)
    live = live or MagicMock()
    live.__enter__ = MagicMock(return_value=live)
    live.__exit__ = MagicMock(return_value=False)
    return ToolDispatcher(executor, query_client_factory=lambda: live), client, live


def dispatch(dispatcher, name, args=None):
    return asyncio.run(dispatcher.dispatch(name, args))


class TestExecuteOscCommands:
    def test_valid_batch_executes(self):
        dispatcher, client, _live = make_dispatcher()
        result = dispatch(dispatcher, "execute_osc_commands", {
            "commands": [
                {"path": "/live/song/create_midi_track", "args": [-1]},
                {"path": "/live/track/set/name", "args": [0, "Keys"]},
            ],
            "description": "keys track",
        })

        assert result["status"] == "success"
        assert result["summary"] == {"total": 2, "success": 2, "failed": 0}
        assert client.sent == [
            ("/live/song/create_midi_track", [-1]),
            ("/live/track/set/name", [0, "Keys"]),
        ]

    def test_missing_description_is_error_dict(self):
        dispatcher, client, _live = make_dispatcher()
        result = dispatch(dispatcher, "execute_osc_commands", {"commands": []})
        assert result["status"] == "error"
        assert "Invalid OSC batch" in result["message"]
        assert client.sent == []

    def test_bad_arg_type_is_error_dict(self):
        dispatcher, client, _live = make_dispatcher()
        result = dispatch(dispatcher, "execute_osc_commands", {
            "commands": [{"path": "/x", "args": [{"nested": 1}]}],
            "description": "bad",
        })
        assert result["status"] == "error"
        assert client.sent == []


class TestGetProjectInfo:
    def test_returns_info(self):
        live = MagicMock()
        live.get_project_info.return_value = ProjectInfo(
            tempo=90.0, is_playing=True, current_song_time=4.0,
            signature_numerator=6, signature_denominator=8,
            num_scenes=4, num_tracks=2,
        )
        dispatcher, _client, _live = make_dispatcher(live)
        result = dispatch(dispatcher, "get_project_info")

        assert result["status"] == "success"
        assert result["bpm"] == 90.0
        assert result["time_signature"] == "6/8"
        assert result["num_tracks"] == 2

    def test_timeout_becomes_error_dict(self):
        live = MagicMock()
        live.get_project_info.side_effect = QueryTimeout("No response from Ableton for: /live/song/get/tempo")
        dispatcher, _client, _live = make_dispatcher(live)
        result = dispatch(dispatcher, "get_project_info")

        assert result["status"] == "error"
        assert "No response from Ableton" in result["message"]


class TestRouting:
    def test_unknown_tool(self):
        dispatcher, _client, _live = make_dispatcher()
        result = dispatch(dispatcher, "launch_rocket", {})
        assert result == {"status": "error", "message": "Unknown tool: launch_rocket"}

    def test_every_declared_tool_has_a_handler(self):
        dispatcher, _client, _live = make_dispatcher()
        assert sorted(tool_names()) == sorted(dispatcher.names)
