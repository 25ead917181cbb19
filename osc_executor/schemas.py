"""
Pydantic schemas for the OSC command batch executor.

Input models (what the agent provides as execute_osc_commands tool args):
    - OscCommand: A single OSC address plus its ordered arguments
    - OscBatch: Ordered commands plus a description of intent

Output models (result returned to the agent as FunctionResponse):
    - CommandResult: Outcome of sending a single command
    - BatchSummary: Aggregate counts
    - BatchResult: Complete result of one batch execution
"""

from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator


# bool first so True/False are never coerced to 1/0
OscArg = Union[bool, int, float, str]


class CommandStatus(str, Enum):
    """Outcome of a single command send."""
    SUCCESS = "success"
    ERROR = "error"


class BatchStatus(str, Enum):
    """Overall outcome of a batch."""
    SUCCESS = "success"
    PARTIAL = "partial"
    ERROR = "error"


# ============================================================================
# INPUT MODELS (Agent -> Executor)
# ============================================================================

class OscCommand(BaseModel):
    """A single OSC message to send to Ableton Live.

    The path is passed through uninspected apart from the non-empty check;
    AbletonOSC is the only arbiter of whether it is valid.
    """
    path: str = Field(
        ...,
        description="OSC address like /live/song/create_audio_track"
    )
    args: List[OscArg] = Field(
        default_factory=list,
        description="Ordered arguments (string, number or boolean)"
    )

    @field_validator("path")
    @classmethod
    def path_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("OSC path must not be empty")
        return v

    @field_validator("args", mode="before")
    @classmethod
    def none_args_as_empty(cls, v):
        return [] if v is None else v


class OscBatch(BaseModel):
    """Ordered group of commands submitted together.

    This IS the argument schema for the execute_osc_commands tool.
    Later commands may depend on the effects of earlier ones, so order
    is preserved end to end.
    """
    commands: List[OscCommand] = Field(
        default_factory=list,
        description="Commands to execute, in order"
    )
    description: str = Field(
        ...,
        description="What these commands will do (e.g., 'create drum track')"
    )


# ============================================================================
# OUTPUT MODELS (Executor -> Agent)
# ============================================================================

class CommandResult(BaseModel):
    """Result of sending a single command."""
    command: OscCommand
    status: CommandStatus
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == CommandStatus.SUCCESS


class BatchSummary(BaseModel):
    total: int = 0
    success: int = 0
    failed: int = 0


class BatchResult(BaseModel):
    """Complete result of a batch execution."""
    status: BatchStatus
    message: str = ""
    description: str = ""
    commands: List[OscCommand] = Field(default_factory=list)
    results: List[CommandResult] = Field(default_factory=list)
    summary: BatchSummary = Field(default_factory=BatchSummary)
    total_time_ms: float = 0.0

    @classmethod
    def from_results(
        cls,
        batch: OscBatch,
        results: List[CommandResult],
    ) -> "BatchResult":
        """Aggregate per-command results into the batch outcome.

        Any failure makes the batch partial; nothing is rolled back.
        """
        success = sum(1 for r in results if r.ok)
        failed = len(results) - success
        total = len(batch.commands)
        return cls(
            status=BatchStatus.SUCCESS if failed == 0 else BatchStatus.PARTIAL,
            message=f"Executed {success}/{total} commands successfully",
            description=batch.description,
            commands=list(batch.commands),
            results=results,
            summary=BatchSummary(total=total, success=success, failed=failed),
        )

    def to_response(self) -> dict:
        """JSON-ready dict for a tool response."""
        return self.model_dump(mode="json")
