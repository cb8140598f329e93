"""
Pytest configuration and fixtures for wit-voice-cache tests.
"""

import json
import sys
from pathlib import Path
from typing import Optional

import pytest

# Add src directory to Python path to allow importing wit_voice_cache
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from wit_voice_cache.config import WitConfiguration  # noqa: E402
from wit_voice_cache.errors import VoiceFetchError  # noqa: E402
from wit_voice_cache.store import SnapshotStore  # noqa: E402


BOB_JSON = '{"en_US":[{"name":"Bob","locale":"en_US","gender":"male","styles":["default"]}]}'

TWO_LOCALES = {
    "en_US": [
        {"name": "wit$Alex", "locale": "en_US", "gender": "male", "styles": ["default", "soft"]},
        {"name": "wit$Charlie", "locale": "en_US", "gender": "female", "styles": []},
    ],
    "fr_FR": [
        {"name": "wit$Jeanne", "locale": "fr_FR", "gender": "female", "styles": ["default"]},
    ],
}


class FakeFetcher:
    """Scripted stand-in for WitVoiceFetcher.

    Returns ``payload`` or raises ``VoiceFetchError(error)``. When
    ``gate`` is set, each request waits on it before answering.
    """

    def __init__(self, payload: str = "", error: str = "", gate=None) -> None:
        self.payload = payload
        self.error = error
        self.gate = gate
        self.calls: list[tuple[WitConfiguration, Optional[dict]]] = []

    async def request_voices(self, config, options=None) -> str:
        self.calls.append((config, options))
        if self.gate is not None:
            await self.gate.wait()
        if self.error:
            raise VoiceFetchError(self.error)
        return self.payload


@pytest.fixture
def wit_config() -> WitConfiguration:
    return WitConfiguration(server_token="test-token")


@pytest.fixture
def store(tmp_path) -> SnapshotStore:
    return SnapshotStore.for_project(tmp_path)


@pytest.fixture
def two_locales_json() -> str:
    return json.dumps(TWO_LOCALES)
