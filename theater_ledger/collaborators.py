"""External capabilities used by the lifecycle manager.

Encryption and analysis are opaque to the core: the manager only stores and
forwards ciphertext tokens. The simulated implementations reproduce what the
web client does today, a tagged base64 envelope and a canned analysis, and
are meant to be swapped for a real FHE backend.
"""

import asyncio
import base64
import json
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

CIPHERTEXT_PREFIX = "FHE-"


@runtime_checkable
class Encryptor(Protocol):
    """Turns plaintext into an opaque ciphertext token."""

    def encrypt(self, plaintext: str) -> str: ...


class AnalysisResult(BaseModel):
    """Thematic and character-network analysis of one script."""

    model_config = ConfigDict(frozen=True)

    themes: list[str] = Field(min_length=1)
    character_network: str = ""


@runtime_checkable
class ScriptAnalyzer(Protocol):
    """Analyzes a ciphertext token without decrypting it."""

    async def analyze(self, ciphertext: str) -> AnalysisResult: ...


class SimulatedFheEncryptor:
    """Produces ``FHE-`` + base64(JSON(plaintext)). Not encryption."""

    def encrypt(self, plaintext: str) -> str:
        envelope = json.dumps(plaintext).encode("utf-8")
        return CIPHERTEXT_PREFIX + base64.b64encode(envelope).decode("ascii")

    def decrypt(self, token: str) -> str:
        if not token.startswith(CIPHERTEXT_PREFIX):
            raise ValueError("Not a simulated FHE token")
        return json.loads(base64.b64decode(token[len(CIPHERTEXT_PREFIX) :]))


class SimulatedFheAnalyzer:
    """Returns a fixed analysis after an optional delay."""

    DEFAULT_THEMES = ("Love", "Betrayal", "Power")
    DEFAULT_NETWORK = "Main: 5 connections | Supporting: 12 connections"

    def __init__(self, delay: float = 0.0) -> None:
        self._delay = delay

    async def analyze(self, ciphertext: str) -> AnalysisResult:
        if self._delay:
            await asyncio.sleep(self._delay)
        return AnalysisResult(themes=list(self.DEFAULT_THEMES), character_network=self.DEFAULT_NETWORK)
