"""
Data models for cached TTS voice metadata.
"""

from __future__ import annotations

from functools import cached_property

from pydantic import BaseModel, ConfigDict, Field, computed_field


class VoiceRecord(BaseModel):
    """A single voice offered by the TTS service."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="", description="Voice identifier, unique within a locale")
    locale: str = Field(default="", description="Language-region tag, e.g. en_US")
    gender: str = Field(default="", description="Gender reported by the service")
    styles: tuple[str, ...] = Field(default=(), description="Supported speaking styles")


class DecodeWarning(BaseModel):
    """A non-fatal problem found while decoding a voice payload."""

    locale: str = Field(description="Locale key the voice was listed under")
    index: int = Field(description="Position of the voice in the locale array")
    field: str = Field(default="", description="Attribute that triggered the warning")
    message: str = Field(description="Human-readable warning message")


class VoiceCatalog(BaseModel):
    """Immutable snapshot of every known voice.

    Catalogs are never mutated; the cache swaps in a new one after each
    successful decode so readers only ever see a complete list.
    """

    model_config = ConfigDict(frozen=True)

    voices: tuple[VoiceRecord, ...] = Field(default=())

    @computed_field
    @cached_property
    def voice_names(self) -> list[str]:
        """Distinct voice names in catalog order."""
        seen: dict[str, None] = {}
        for voice in self.voices:
            seen.setdefault(voice.name, None)
        return list(seen)

    def __len__(self) -> int:
        return len(self.voices)

    def by_locale(self, locale: str) -> list[VoiceRecord]:
        """Return the voices listed for a locale, in catalog order."""
        return [v for v in self.voices if v.locale == locale]

    @property
    def locales(self) -> list[str]:
        """Distinct locales in catalog order."""
        seen: dict[str, None] = {}
        for voice in self.voices:
            seen.setdefault(voice.locale, None)
        return list(seen)
