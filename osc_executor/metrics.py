"""
Structured logging and metrics for OSC batch executions.

Tracks:
- commands sent / failed per batch
- execution_time_ms
- batch status (success / partial / error)
"""

import logging
import time
from typing import List

from osc_executor.schemas import BatchResult, BatchStatus

logger = logging.getLogger("sidekick.osc.metrics")


class ExecutorMetrics:
    """Records and reports batch execution metrics."""

    def __init__(self, max_history: int = 100):
        self._history: List[dict] = []
        self._max_history = max_history

    def record(self, result: BatchResult):
        """Record a batch result with structured logging."""
        entry = {
            "timestamp": time.time(),
            "status": result.status.value,
            "description": result.description,
            "commands_total": result.summary.total,
            "commands_ok": result.summary.success,
            "commands_failed": result.summary.failed,
            "time_ms": result.total_time_ms,
        }

        self._history.append(entry)
        if len(self._history) > self._max_history:
            self._history = self._history[-self._max_history:]

        if result.status == BatchStatus.SUCCESS:
            logger.info(
                "OSC_BATCH_OK commands=%d/%d time=%.0fms desc=%r",
                result.summary.success, result.summary.total,
                result.total_time_ms, result.description,
            )
        elif result.status == BatchStatus.PARTIAL:
            failed = [r.command.path for r in result.results if not r.ok]
            logger.warning(
                "OSC_BATCH_PARTIAL commands=%d/%d failed=%s time=%.0fms desc=%r",
                result.summary.success, result.summary.total,
                failed[:3], result.total_time_ms, result.description,
            )
        else:
            logger.warning(
                "OSC_BATCH_FAIL commands=%d message=%s time=%.0fms desc=%r",
                result.summary.total, result.message,
                result.total_time_ms, result.description,
            )

    def get_stats(self) -> dict:
        """Return aggregate stats across all recorded executions."""
        if not self._history:
            return {"total_runs": 0}

        total = len(self._history)
        successes = sum(1 for h in self._history if h["status"] == "success")
        return {
            "total_runs": total,
            "success_rate": successes / total,
            "avg_time_ms": sum(h["time_ms"] for h in self._history) / total,
            "total_commands_ok": sum(h["commands_ok"] for h in self._history),
            "total_commands_failed": sum(h["commands_failed"] for h in self._history),
        }

    @property
    def history(self) -> List[dict]:
        return list(self._history)
