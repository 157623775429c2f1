"""Script codec: bytes stored under ``script_{id}`` <-> Script.

Wire format is UTF-8 JSON with keys ``title``, ``content``, ``timestamp``,
``owner``, ``era``, ``status``, ``themes`` and ``characterNetwork``. The id
is not part of the payload; it comes from the key. Any other keys are kept
on the Script and written back on the next encode, so a read-modify-write
never drops fields owned by other clients.

Defaults for records written by older or partial clients are applied here
and nowhere else: a missing, null or empty ``owner``/``status``/``themes``/
``characterNetwork`` decodes to ``""``/``pending``/``[]``/``""``.
"""

import json
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from theater_ledger.exceptions import ScriptDecodeError
from theater_ledger.scripts._types import ScriptId, ScriptStatus
from theater_ledger.scripts.script import Script

SCRIPT_KEY_PREFIX = "script_"

# Keys modelled by the codec, including the legacy ``createdAt`` alias
_WIRE_KEYS = frozenset(
    {"title", "content", "timestamp", "createdAt", "owner", "era", "status", "themes", "characterNetwork"}
)


def script_key(script_id: str) -> str:
    """Ledger key holding the blob of one script."""
    return f"{SCRIPT_KEY_PREFIX}{script_id}"


class _ScriptRecord(BaseModel):
    """Validated shape of a decoded script payload."""

    model_config = ConfigDict(extra="allow")

    title: str = Field(min_length=1)
    content: str
    timestamp: int = Field(validation_alias=AliasChoices("timestamp", "createdAt"))
    owner: str = ""
    era: str = Field(min_length=1)
    status: ScriptStatus = ScriptStatus.PENDING
    themes: list[str] = Field(default_factory=list)
    characterNetwork: str = ""

    @field_validator("owner", "characterNetwork", mode="before")
    @classmethod
    def _empty_string_default(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("status", mode="before")
    @classmethod
    def _pending_default(cls, value: Any) -> Any:
        return ScriptStatus.PENDING if value in (None, "") else value

    @field_validator("themes", mode="before")
    @classmethod
    def _themes_default(cls, value: Any) -> Any:
        return [] if value is None else value


def encode_script(script: Script) -> bytes:
    """Serialize a script to canonical JSON bytes with every field present."""
    payload = {
        "title": script.title,
        "content": script.content,
        "timestamp": script.created_at,
        "owner": script.owner,
        "era": script.era,
        "status": script.status.value,
        "themes": list(script.themes),
        "characterNetwork": script.character_network,
    }
    for key, value in script.extra_fields.items():
        payload.setdefault(key, value)
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


def decode_script(script_id: str, data: bytes) -> Script:
    """Decode a script blob.

    Raises:
        ScriptDecodeError: If the payload is not UTF-8 JSON describing a valid script.
    """
    try:
        raw = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ScriptDecodeError(f"Script {script_id!r} is not valid JSON: {e}") from e
    if not isinstance(raw, dict):
        raise ScriptDecodeError(f"Script {script_id!r} payload is {type(raw).__name__}, expected object")
    try:
        record = _ScriptRecord.model_validate(raw)
    except ValidationError as e:
        raise ScriptDecodeError(f"Script {script_id!r} is malformed: {e.error_count()} invalid field(s)") from e
    return Script(
        id=ScriptId(script_id),
        title=record.title,
        content=record.content,
        created_at=record.timestamp,
        owner=record.owner,
        era=record.era,
        status=record.status,
        themes=tuple(record.themes),
        character_network=record.characterNetwork,
        extra_fields={k: v for k, v in (record.model_extra or {}).items() if k not in _WIRE_KEYS},
    )
