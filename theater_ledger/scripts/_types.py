"""Domain-specific types for the script ledger."""

from enum import StrEnum
from typing import NewType

ScriptId = NewType("ScriptId", str)
"""Identifier of a script, the suffix of its ledger key ``script_{id}``."""


class ScriptStatus(StrEnum):
    """Lifecycle status of a script. Transitions only move forward."""

    PENDING = "pending"
    ANALYZED = "analyzed"
    ARCHIVED = "archived"

    def can_transition_to(self, target: "ScriptStatus") -> bool:
        return target in _TRANSITIONS[self]


_TRANSITIONS: dict[ScriptStatus, frozenset[ScriptStatus]] = {
    ScriptStatus.PENDING: frozenset({ScriptStatus.ANALYZED, ScriptStatus.ARCHIVED}),
    ScriptStatus.ANALYZED: frozenset({ScriptStatus.ARCHIVED}),
    ScriptStatus.ARCHIVED: frozenset(),
}


class Era(StrEnum):
    """Historical period a script is classified under."""

    ANCIENT = "Ancient"
    MEDIEVAL = "Medieval"
    RENAISSANCE = "Renaissance"
    ELIZABETHAN = "Elizabethan"
    RESTORATION = "Restoration"
    MODERN = "Modern"


__all__ = ["Era", "ScriptId", "ScriptStatus"]
