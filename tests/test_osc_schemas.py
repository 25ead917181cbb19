"""
Tests for OSC executor Pydantic schemas.

Verifies that:
- Commands keep argument types (bool stays bool, int stays int)
- Empty paths are rejected, anything else passes through
- Batch results aggregate and serialize correctly
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from pydantic import ValidationError
from osc_executor.schemas import (
    BatchResult,
    BatchStatus,
    CommandResult,
    CommandStatus,
    OscBatch,
    OscCommand,
)


# ============================================================================
# OscCommand Tests
# ============================================================================

class TestOscCommand:
    def test_args_default_empty(self):
        c = OscCommand(path="/live/song/start_playing")
        assert c.args == []

    def test_none_args_treated_as_empty(self):
        c = OscCommand(path="/live/song/start_playing", args=None)
        assert c.args == []

    def test_arg_types_preserved(self):
        c = OscCommand(path="/live/track/set/name", args=[True, -1, 0.75, "Drums", False])
        assert c.args == [True, -1, 0.75, "Drums", False]
        assert [type(a) for a in c.args] == [bool, int, float, str, bool]

    def test_numeric_string_stays_string(self):
        c = OscCommand(path="/live/track/set/name", args=[0, "808"])
        assert c.args[1] == "808"
        assert isinstance(c.args[1], str)

    def test_empty_path_rejected(self):
        with pytest.raises(ValidationError):
            OscCommand(path="")

    def test_whitespace_path_rejected(self):
        with pytest.raises(ValidationError):
            OscCommand(path="   ")

    def test_malformed_path_passed_through(self):
        c = OscCommand(path="not/an/osc/path")
        assert c.path == "not/an/osc/path"

    def test_nested_arg_rejected(self):
        with pytest.raises(ValidationError):
            OscCommand(path="/x", args=[[1, 2]])


# ============================================================================
# OscBatch Tests
# ============================================================================

class TestOscBatch:
    def test_from_tool_args(self):
        batch = OscBatch(**{
            "commands": [
                {"path": "/live/song/create_midi_track", "args": [-1]},
                {"path": "/live/song/start_playing"},
            ],
            "description": "new track and play",
        })
        assert len(batch.commands) == 2
        assert batch.commands[1].args == []

    def test_description_required(self):
        with pytest.raises(ValidationError):
            OscBatch(commands=[])

    def test_empty_commands_allowed(self):
        batch = OscBatch(commands=[], description="nothing")
        assert batch.commands == []


# ============================================================================
# Result Tests
# ============================================================================

class TestBatchResult:
    def _batch(self):
        return OscBatch(
            commands=[OscCommand(path="/a"), OscCommand(path="/b", args=[1])],
            description="two",
        )

    def test_from_results_success(self):
        batch = self._batch()
        results = [CommandResult(command=c, status=CommandStatus.SUCCESS) for c in batch.commands]
        result = BatchResult.from_results(batch, results)

        assert result.status == BatchStatus.SUCCESS
        assert result.summary.total == 2
        assert result.summary.success == 2
        assert result.message == "Executed 2/2 commands successfully"

    def test_from_results_partial(self):
        batch = self._batch()
        results = [
            CommandResult(command=batch.commands[0], status=CommandStatus.ERROR, error="nope"),
            CommandResult(command=batch.commands[1], status=CommandStatus.SUCCESS),
        ]
        result = BatchResult.from_results(batch, results)

        assert result.status == BatchStatus.PARTIAL
        assert result.summary.failed == 1
        assert result.message == "Executed 1/2 commands successfully"

    def test_to_response_is_json_shaped(self):
        batch = self._batch()
        results = [
            CommandResult(command=batch.commands[0], status=CommandStatus.ERROR, error="nope"),
            CommandResult(command=batch.commands[1], status=CommandStatus.SUCCESS),
        ]
        data = BatchResult.from_results(batch, results).to_response()

        assert data["status"] == "partial"
        assert data["results"][0] == {
            "command": {"path": "/a", "args": []},
            "status": "error",
            "error": "nope",
        }
        assert data["summary"] == {"total": 2, "success": 1, "failed": 1}
        assert data["description"] == "two"
