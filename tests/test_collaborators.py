"""Tests for the simulated encryption and analysis capabilities."""

import pytest
from pydantic import ValidationError

from theater_ledger.collaborators import (
    AnalysisResult,
    Encryptor,
    ScriptAnalyzer,
    SimulatedFheAnalyzer,
    SimulatedFheEncryptor,
)


class TestSimulatedFheEncryptor:
    def test_protocol(self):
        assert isinstance(SimulatedFheEncryptor(), Encryptor)

    def test_token_hides_plaintext(self):
        token = SimulatedFheEncryptor().encrypt("To be, or not to be")
        assert token.startswith("FHE-")
        assert "To be" not in token

    def test_deterministic_and_reversible(self):
        encryptor = SimulatedFheEncryptor()
        assert encryptor.encrypt("Act I") == encryptor.encrypt("Act I")
        assert encryptor.decrypt(encryptor.encrypt("Acte I, scène 2")) == "Acte I, scène 2"

    def test_decrypt_rejects_foreign_token(self):
        with pytest.raises(ValueError):
            SimulatedFheEncryptor().decrypt("plain")


class TestSimulatedFheAnalyzer:
    def test_protocol(self):
        assert isinstance(SimulatedFheAnalyzer(), ScriptAnalyzer)

    @pytest.mark.asyncio
    async def test_returns_themes_and_network(self):
        result = await SimulatedFheAnalyzer().analyze("FHE-abc")
        assert result.themes == ["Love", "Betrayal", "Power"]
        assert "connections" in result.character_network


class TestAnalysisResult:
    def test_requires_a_theme(self):
        with pytest.raises(ValidationError):
            AnalysisResult(themes=[])
