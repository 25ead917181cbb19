"""
Sidekick chat agent.

A thin loop around the Gemini API: send the user's message with the tool
declarations, run any function calls through the ToolDispatcher, feed the
results back, and stop when the model answers in text.

The genai client, API key and model id are owned by the agent instance;
there is no process-wide client.
"""

import asyncio
import logging
from typing import List, Optional

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from agents.prompts import build_system_instruction
from agents.tool_dispatcher import ToolDispatcher
from agents.tools import SIDEKICK_TOOLS
from config import DEFAULT_MODEL_ID, ConfigError

logger = logging.getLogger("sidekick.agent")


class SidekickAgent:
    """Conversation with tool calling against one Live set."""

    MAX_TOOL_ROUNDS = 5
    RATE_LIMIT_RETRIES = 3
    RATE_LIMIT_BASE_DELAY_S = 2.0
    BUDGET_EXHAUSTED_REPLY = "Stopped after too many tool calls; please try a narrower request."

    def __init__(
        self,
        dispatcher: ToolDispatcher,
        api_key: Optional[str] = None,
        model_id: str = DEFAULT_MODEL_ID,
        client=None,
        max_tool_rounds: int = MAX_TOOL_ROUNDS,
        project_context: str = "",
    ):
        """
        Args:
            dispatcher: Executes the model's function calls
            api_key: Gemini API key (required unless client is given)
            model_id: Model to converse with
            client: Pre-built genai.Client (tests, custom http options)
            max_tool_rounds: Max function-call rounds per user message
            project_context: Extra line appended to the system prompt
        """
        if client is None:
            if not api_key:
                raise ConfigError("GOOGLE_API_KEY is required to start the agent")
            client = genai.Client(api_key=api_key)
        self.client = client
        self.model_id = model_id
        self.dispatcher = dispatcher
        self.max_tool_rounds = max_tool_rounds
        self.system_instruction = build_system_instruction(project_context)
        self.config = types.GenerateContentConfig(
            system_instruction=self.system_instruction,
            tools=SIDEKICK_TOOLS,
        )
        self.history: List[types.Content] = []
        self.tool_calls_executed = 0

    def reset(self):
        """Forget the conversation."""
        self.history.clear()

    async def send(self, message: str) -> str:
        """Send a user message and return the model's final text reply."""
        self.history.append(types.Content(role="user", parts=[types.Part.from_text(text=message)]))
        turn_start = len(self.history) - 1

        try:
            for tool_round in range(self.max_tool_rounds + 1):
                response = await self._generate()
                if not response.candidates or not response.candidates[0].content:
                    logger.debug("No candidates or content in response")
                    del self.history[turn_start:]
                    return ""

                model_content = response.candidates[0].content
                function_calls = [p.function_call for p in (model_content.parts or []) if p.function_call]
                if not function_calls:
                    self.history.append(model_content)
                    return self._text_of(model_content)

                if tool_round >= self.max_tool_rounds:
                    break

                self.history.append(model_content)
                self.history.append(await self._run_function_calls(function_calls))
        except Exception:
            # Keep history consistent for the next message
            del self.history[turn_start:]
            raise

        # The last requested calls are never run; answer them with a model turn
        logger.warning("Tool round budget (%d) exhausted", self.max_tool_rounds)
        reply = self.BUDGET_EXHAUSTED_REPLY
        self.history.append(types.Content(role="model", parts=[types.Part.from_text(text=reply)]))
        return reply

    async def _run_function_calls(self, function_calls) -> types.Content:
        parts = []
        for call in function_calls:
            self.tool_calls_executed += 1
            args = dict(call.args or {})
            logger.info("TOOL CALL #%d: %s", self.tool_calls_executed, call.name)
            logger.debug("    Args: %s", args)

            result = await self.dispatcher.dispatch(call.name, args)
            logger.debug("    Result: %s", result)
            parts.append(types.Part.from_function_response(name=call.name, response=result))
        return types.Content(role="user", parts=parts)

    async def _generate(self) -> types.GenerateContentResponse:
        """generate_content with exponential backoff on 429 / RESOURCE_EXHAUSTED."""
        for attempt in range(self.RATE_LIMIT_RETRIES + 1):
            try:
                return await self.client.aio.models.generate_content(
                    model=self.model_id,
                    contents=self.history,
                    config=self.config,
                )
            except genai_errors.ClientError as e:
                rate_limited = "429" in str(e) or "RESOURCE_EXHAUSTED" in str(e)
                if not rate_limited or attempt >= self.RATE_LIMIT_RETRIES:
                    raise
                delay = self.RATE_LIMIT_BASE_DELAY_S * (2 ** attempt)
                logger.warning("Rate limit hit (429). Waiting %.0fs before retry %d/%d",
                               delay, attempt + 1, self.RATE_LIMIT_RETRIES)
                await asyncio.sleep(delay)

    @staticmethod
    def _text_of(content: types.Content) -> str:
        return "".join(p.text for p in (content.parts or []) if p.text and not p.thought).strip()
