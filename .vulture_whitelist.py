"""Vulture whitelist: methods called by frameworks, not direct code."""

# Pydantic validators, called by Pydantic while decoding script blobs
from theater_ledger.scripts.codec import _ScriptRecord

_ScriptRecord._empty_string_default
_ScriptRecord._pending_default
_ScriptRecord._themes_default

# Public lifecycle surface consumed by UI layers
from theater_ledger.lifecycle import LifecycleManager

LifecycleManager.can_analyze
LifecycleManager.can_archive
