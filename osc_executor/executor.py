"""
OSC Command Batch Executor.

Sends an OscBatch to Ableton Live as an ordered, paced series of OSC
messages:
    OPEN    -> Construct one UDP client for the batch
    SEND    -> Each command in order; await the send, record the outcome,
               await the pacing policy (after every command, even on failure)
    CLOSE   -> Always, whatever the per-command outcomes were
    REPORT  -> Aggregate into a BatchResult

A failed send is recorded and the loop moves on; only a client that
cannot be constructed fails the whole batch. Nothing is retried.
"""

import asyncio
import logging
import time
from typing import List, Optional

from osc_executor.metrics import ExecutorMetrics
from osc_executor.pacing import FixedDelayPacing, PacingPolicy
from osc_executor.schemas import (
    BatchResult,
    BatchStatus,
    BatchSummary,
    CommandResult,
    CommandStatus,
    OscBatch,
    OscCommand,
)
from osc_executor.transport import (
    ABLETON_OSC_HOST,
    ABLETON_OSC_PORT,
    ClientFactory,
    OscUdpClient,
)

logger = logging.getLogger("sidekick.osc.executor")


class OscBatchExecutor:
    """Executes OSC command batches against a fixed endpoint.

    Holds no connection between batches; each execute() opens and closes
    its own client, so concurrent batches are independent of each other.
    """

    def __init__(
        self,
        host: str = ABLETON_OSC_HOST,
        port: int = ABLETON_OSC_PORT,
        pacing: Optional[PacingPolicy] = None,
        client_factory: Optional[ClientFactory] = None,
        metrics: Optional[ExecutorMetrics] = None,
    ):
        """Initialize the executor.

        Args:
            host: OSC destination host (AbletonOSC listens on loopback)
            port: OSC destination port
            pacing: Policy awaited after each command (100ms fixed if None)
            client_factory: Callable(host, port) returning a client with
                send(address, args) and close() (OscUdpClient if None)
            metrics: Metrics recorder (a fresh one if None)
        """
        self.host = host
        self.port = port
        self.pacing = pacing if pacing is not None else FixedDelayPacing()
        self.client_factory = client_factory or OscUdpClient
        self.metrics = metrics or ExecutorMetrics()

    async def execute(self, batch: OscBatch) -> BatchResult:
        """Execute a batch and return its aggregate result.

        Args:
            batch: Validated OscBatch

        Returns:
            BatchResult with one CommandResult per attempted command
        """
        start = time.time()
        commands = batch.commands
        logger.info("Executing %d OSC commands for: %s", len(commands), batch.description)

        if not commands:
            result = BatchResult(
                status=BatchStatus.SUCCESS,
                message="No commands to execute",
                description=batch.description,
            )
            return self._finalize(result, start)

        try:
            client = self.client_factory(self.host, self.port)
        except Exception as e:
            logger.error("Could not open OSC client to %s:%d: %s", self.host, self.port, e)
            result = BatchResult(
                status=BatchStatus.ERROR,
                message=f"Error executing commands: {e}",
                description=batch.description,
                commands=list(commands),
                summary=BatchSummary(total=len(commands)),
            )
            return self._finalize(result, start)

        results: List[CommandResult] = []
        try:
            for index, command in enumerate(commands):
                results.append(await self._send(client, command))
                await self.pacing.wait(index, len(commands))
        finally:
            self._close(client)

        logger.debug("All %d OSC commands processed", len(commands))
        return self._finalize(BatchResult.from_results(batch, results), start)

    def execute_sync(self, batch: OscBatch) -> BatchResult:
        """Blocking wrapper for callers outside an event loop."""
        return asyncio.run(self.execute(batch))

    async def _send(self, client, command: OscCommand) -> CommandResult:
        """Send one command, turning any failure into an error result."""
        logger.debug("Sending OSC %s %s", command.path, command.args)
        try:
            await asyncio.to_thread(client.send, command.path, list(command.args))
        except Exception as e:
            logger.warning("OSC send failed for %s: %s", command.path, e)
            return CommandResult(
                command=command,
                status=CommandStatus.ERROR,
                error=str(e) or type(e).__name__,
            )
        return CommandResult(command=command, status=CommandStatus.SUCCESS)

    def _close(self, client):
        try:
            client.close()
        except Exception as e:
            logger.warning("Failed to close OSC client: %s", e)

    def _finalize(self, result: BatchResult, start: float) -> BatchResult:
        """Set timing and record metrics."""
        result.total_time_ms = (time.time() - start) * 1000
        self.metrics.record(result)
        return result
