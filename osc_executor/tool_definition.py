"""
Gemini FunctionDeclaration for the execute_osc_commands tool.

The schema mirrors osc_executor.schemas.OscBatch so the model emits a
whole batch in one function_call.
"""

from google.genai import types


EXECUTE_OSC_COMMANDS_TOOL = types.FunctionDeclaration(
    name="execute_osc_commands",
    description=(
        "Execute OSC commands to control Ableton Live via AbletonOSC. "
        "This tool sends the actual OSC messages, in the given order, "
        "about 100ms apart. Later commands may rely on earlier ones "
        "(e.g. create a track, then name it), so order them carefully. "
        "Indices (track_id, clip_id, scene_id, device_id) are ARGUMENTS, "
        "never part of the path: /live/track/set/name [0, 'Drums']. "
        "A failing command does not stop the rest; check summary.failed "
        "in the result and tell the user what did not apply."
    ),
    parameters=types.Schema(
        type="OBJECT",
        properties={
            "commands": types.Schema(
                type="ARRAY",
                description="Array of OSC commands to execute, in order",
                items=types.Schema(
                    type="OBJECT",
                    properties={
                        "path": types.Schema(
                            type="STRING",
                            description="OSC path like /live/song/create_audio_track"
                        ),
                        "args": types.Schema(
                            type="ARRAY",
                            description="Arguments for the command (strings, numbers, booleans)",
                            items=types.Schema(
                                any_of=[
                                    types.Schema(type="STRING"),
                                    types.Schema(type="NUMBER"),
                                    types.Schema(type="BOOLEAN"),
                                ]
                            )
                        ),
                    },
                    required=["path"]
                )
            ),
            "description": types.Schema(
                type="STRING",
                description="Description of what these commands will do"
            ),
        },
        required=["commands", "description"]
    )
)
