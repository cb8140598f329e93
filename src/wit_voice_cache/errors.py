"""
Exceptions raised by the voice cache collaborators.

The snapshot store, the decoder and the fetcher raise these; the
VoiceCache catches them, logs them and reports a boolean outcome.
"""


class VoiceCacheError(Exception):
    """Base class for all voice cache errors."""


class SnapshotError(VoiceCacheError):
    """A local snapshot file could not be used."""

    def __init__(self, message: str, path=None) -> None:
        super().__init__(message)
        self.path = path


class SnapshotNotFoundError(SnapshotError):
    """No snapshot has been written yet. Expected on a fresh project."""


class SnapshotReadError(SnapshotError):
    """The snapshot exists but could not be read."""


class SnapshotWriteError(SnapshotError):
    """The snapshot could not be written."""


class DecodeError(VoiceCacheError):
    """A voice payload could not be turned into voice records."""


class VoiceParseError(DecodeError):
    """The payload is not valid JSON."""


class VoiceStructureError(DecodeError):
    """The payload is JSON but not a locale -> voice list mapping."""


class EmptyVoiceListError(DecodeError):
    """The payload decoded to zero voices."""


class VoiceFetchError(VoiceCacheError):
    """The remote voice list could not be retrieved.

    The message is user-facing and says what to check.
    """


class ConfigurationError(VoiceCacheError):
    """An environment setting has a value that cannot be used.

    The message names the variable to fix.
    """
