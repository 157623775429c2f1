"""Script record held in the ledger and in the in-memory collection."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from theater_ledger.scripts._types import ScriptId, ScriptStatus


def same_account(a: str | None, b: str | None) -> bool:
    """Case-insensitive account equality. Empty or missing accounts never match."""
    if not a or not b:
        return False
    return a.lower() == b.lower()


class Script(BaseModel):
    """A theater script as stored under ``script_{id}``.

    Immutable: lifecycle transitions return a new instance. ``content`` is the
    ciphertext token produced by the encryption collaborator and is never the
    plaintext. ``extra_fields`` holds payload keys written by other clients
    that this record does not model; they are written back unchanged.
    """

    model_config = ConfigDict(frozen=True)

    id: ScriptId
    title: str
    content: str
    created_at: int
    owner: str = ""
    era: str
    status: ScriptStatus = ScriptStatus.PENDING
    themes: tuple[str, ...] = ()
    character_network: str = ""
    extra_fields: dict[str, Any] = Field(default_factory=dict, repr=False)

    def is_owned_by(self, account: str | None) -> bool:
        return same_account(self.owner, account)

    def with_analysis(self, themes: list[str], character_network: str) -> "Script":
        return self.model_copy(
            update={
                "status": ScriptStatus.ANALYZED,
                "themes": tuple(themes),
                "character_network": character_network,
            }
        )

    def archived(self) -> "Script":
        return self.model_copy(update={"status": ScriptStatus.ARCHIVED})
