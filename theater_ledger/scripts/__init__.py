"""Script records, their wire codec and id generation."""

from ._types import Era, ScriptId, ScriptStatus
from .codec import SCRIPT_KEY_PREFIX, decode_script, encode_script, script_key
from .ids import ScriptIdGenerator, generate_script_id
from .script import Script

__all__ = [
    "SCRIPT_KEY_PREFIX",
    "Era",
    "Script",
    "ScriptId",
    "ScriptIdGenerator",
    "ScriptStatus",
    "decode_script",
    "encode_script",
    "generate_script_id",
    "script_key",
]
