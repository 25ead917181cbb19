"""
OSC command batch execution for Ableton Live.

Architecture:
    User -> LLM -> execute_osc_commands({commands, description})
                   ^-- one function_call carries the whole ordered batch
                   |
                   v
              OscBatchExecutor (sequential, paced, partial-failure tolerant)
              OPEN -> SEND (in order, 100ms apart) -> CLOSE -> REPORT
"""

from osc_executor.schemas import (
    OscArg,
    OscCommand,
    OscBatch,
    CommandResult,
    CommandStatus,
    BatchResult,
    BatchStatus,
    BatchSummary,
)
from osc_executor.pacing import PacingPolicy, FixedDelayPacing
from osc_executor.transport import OscUdpClient, build_osc_message
from osc_executor.executor import OscBatchExecutor
from osc_executor.metrics import ExecutorMetrics

__all__ = [
    "OscArg",
    "OscCommand",
    "OscBatch",
    "CommandResult",
    "CommandStatus",
    "BatchResult",
    "BatchStatus",
    "BatchSummary",
    "PacingPolicy",
    "FixedDelayPacing",
    "OscUdpClient",
    "build_osc_message",
    "OscBatchExecutor",
    "ExecutorMetrics",
]
