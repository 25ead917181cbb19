"""
Sidekick agent layer.

- SidekickAgent: Gemini conversation loop with function calling
- ToolDispatcher: Routes function calls to the OSC executor / query client
- SIDEKICK_TOOLS: Function declarations exposed to the model
"""

from agents.prompts import SIDEKICK_SYSTEM_PROMPT, build_system_instruction
from agents.tool_dispatcher import ToolDispatcher
from agents.tools import SIDEKICK_TOOLS, GET_PROJECT_INFO_TOOL
from agents.sidekick_agent import SidekickAgent

__all__ = [
    "SIDEKICK_SYSTEM_PROMPT",
    "build_system_instruction",
    "ToolDispatcher",
    "SIDEKICK_TOOLS",
    "GET_PROJECT_INFO_TOOL",
    "SidekickAgent",
]
