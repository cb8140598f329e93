"""
Local cache of Wit.ai text-to-speech voice metadata for editor tooling.

The cache warm-starts from a JSON snapshot under the project's settings
directory and refreshes it from the Wit ``/voices`` endpoint on demand:

- VoiceCache: single-flight load/update state machine
- SnapshotStore: snapshot file persistence
- decode_voices / encode_voices: payload codec
- WitVoiceFetcher: HTTP client for the voice list
- VoiceUpdateControls: state for an editor "Update Voice List" button
"""

from .cache import CacheState, VoiceCache, VoiceFetcher, get_default_cache
from .config import CacheSettings, WitConfiguration, load_configuration
from .controls import UpdateButtonState, VoiceUpdateControls
from .decoder import decode_voices, decode_voices_with_warnings, encode_voices
from .errors import (
    ConfigurationError,
    DecodeError,
    EmptyVoiceListError,
    SnapshotError,
    SnapshotNotFoundError,
    SnapshotReadError,
    SnapshotWriteError,
    VoiceCacheError,
    VoiceFetchError,
    VoiceParseError,
    VoiceStructureError,
)
from .fetcher import WitVoiceFetcher
from .models import DecodeWarning, VoiceCatalog, VoiceRecord
from .store import SnapshotStore, resolve_snapshot_path

try:
    from importlib.metadata import version as _get_version
    __version__ = _get_version("wit-voice-cache")
except Exception:
    __version__ = "0.1.0"  # Fallback if metadata unavailable

__all__ = [
    # Cache
    "VoiceCache",
    "VoiceFetcher",
    "CacheState",
    "get_default_cache",
    # Models
    "VoiceRecord",
    "VoiceCatalog",
    "DecodeWarning",
    # Codec
    "decode_voices",
    "decode_voices_with_warnings",
    "encode_voices",
    # Collaborators
    "SnapshotStore",
    "resolve_snapshot_path",
    "WitVoiceFetcher",
    "VoiceUpdateControls",
    "UpdateButtonState",
    # Configuration
    "WitConfiguration",
    "CacheSettings",
    "load_configuration",
    # Errors
    "VoiceCacheError",
    "SnapshotError",
    "SnapshotNotFoundError",
    "SnapshotReadError",
    "SnapshotWriteError",
    "DecodeError",
    "VoiceParseError",
    "VoiceStructureError",
    "EmptyVoiceListError",
    "VoiceFetchError",
    "ConfigurationError",
]
