"""
Gemini Tool Definitions for Sidekick

Defines the function declarations the model can call. Each maps to a
handler in agents.tool_dispatcher.
"""

from google.genai import types

from osc_executor.tool_definition import EXECUTE_OSC_COMMANDS_TOOL


GET_PROJECT_INFO_TOOL = types.FunctionDeclaration(
    name="get_project_info",
    description=(
        "Get current Ableton project information: tempo, time signature, "
        "transport state, track count and scene count"
    ),
    parameters=types.Schema(
        type="OBJECT",
        properties={},
        required=[]
    )
)


SIDEKICK_TOOLS = [
    types.Tool(
        function_declarations=[
            EXECUTE_OSC_COMMANDS_TOOL,
            GET_PROJECT_INFO_TOOL,
        ]
    )
]


def tool_names():
    return [fd.name for tool in SIDEKICK_TOOLS for fd in tool.function_declarations]
