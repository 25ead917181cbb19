"""
Routes model function calls to local handlers.

Handlers never raise into the agent loop: validation and runtime errors
come back as ``{"status": "error", "message": ...}`` so the model can
explain them to the user.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Optional

from pydantic import ValidationError

from ableton_controls import AbletonQueryClient
from osc_executor import OscBatch, OscBatchExecutor

logger = logging.getLogger("sidekick.agent.tools")

Handler = Callable[[Dict[str, Any]], Awaitable[dict]]


def _error(message: str) -> dict:
    return {"status": "error", "message": message}


class ToolDispatcher:
    """Maps tool names to async handlers."""

    def __init__(
        self,
        executor: OscBatchExecutor,
        query_client_factory: Optional[Callable[[], AbletonQueryClient]] = None,
    ):
        """
        Args:
            executor: Executor used by execute_osc_commands
            query_client_factory: Zero-arg callable returning a query
                client; a fresh client is opened per get_project_info call
        """
        self.executor = executor
        self.query_client_factory = query_client_factory or AbletonQueryClient
        self._handlers: Dict[str, Handler] = {
            "execute_osc_commands": self.execute_osc_commands,
            "get_project_info": self.get_project_info,
        }

    @property
    def names(self):
        return list(self._handlers)

    async def dispatch(self, name: str, args: Optional[Dict[str, Any]] = None) -> dict:
        handler = self._handlers.get(name)
        if handler is None:
            logger.warning("Unknown tool requested: %s", name)
            return _error(f"Unknown tool: {name}")
        try:
            return await handler(dict(args or {}))
        except Exception as e:
            logger.exception("Tool %s failed", name)
            return _error(f"Error executing {name}: {e}")

    async def execute_osc_commands(self, args: Dict[str, Any]) -> dict:
        """Validate the batch, then hand it to the executor."""
        try:
            batch = OscBatch(**args)
        except ValidationError as e:
            return _error(f"Invalid OSC batch: {e.error_count()} validation error(s): {e}")

        result = await self.executor.execute(batch)
        logger.info("OSC batch '%s': %s (%d/%d ok)", batch.description,
                    result.status.value, result.summary.success, result.summary.total)
        return result.to_response()

    async def get_project_info(self, args: Dict[str, Any]) -> dict:
        return await asyncio.to_thread(self._read_project_info)

    def _read_project_info(self) -> dict:
        with self.query_client_factory() as live:
            info = live.get_project_info()
        return {
            "status": "success",
            "bpm": info.tempo,
            "time_signature": info.time_signature,
            **info.model_dump(),
        }
