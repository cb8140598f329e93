"""
Decode and encode the voice list payload.

The service (and the local snapshot) use the same shape: a JSON object
keyed by locale, each value an array of voice objects::

    {"en_US": [{"name": "wit$Alex", "locale": "en_US",
                "gender": "male", "styles": ["default", "soft"]}]}

Voice attributes are read through a fixed field table. Unknown keys and
wrongly typed values are reported as warnings and never abort a decode.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable

from .errors import EmptyVoiceListError, VoiceParseError, VoiceStructureError
from .models import DecodeWarning, VoiceRecord

logger = logging.getLogger("wit-voice-cache.decoder")

# Max characters of a payload echoed into log and error messages
PAYLOAD_EXCERPT_CHARS = 500


def excerpt(text: str, limit: int = PAYLOAD_EXCERPT_CHARS) -> str:
    """Shorten a payload for logging."""
    if len(text) <= limit:
        return text
    return f"{text[:limit]}... ({len(text)} chars)"


def _as_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _as_str_tuple(value: Any) -> tuple[str, ...] | None:
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return tuple(value)
    return None


# JSON attribute -> converter. A converter returns None for a bad value.
_VOICE_FIELDS: dict[str, Callable[[Any], Any]] = {
    "name": _as_str,
    "locale": _as_str,
    "gender": _as_str,
    "styles": _as_str_tuple,
}


def _decode_voice(
    raw: dict[str, Any],
    locale: str,
    index: int,
    warnings: list[DecodeWarning],
) -> VoiceRecord:
    """Map one voice object onto a VoiceRecord."""
    values: dict[str, Any] = {}

    for key, value in raw.items():
        convert = _VOICE_FIELDS.get(key)
        if convert is None:
            warnings.append(DecodeWarning(
                locale=locale, index=index, field=key,
                message=f"Unknown field: {key}",
            ))
            continue

        converted = convert(value)
        if converted is None:
            warnings.append(DecodeWarning(
                locale=locale, index=index, field=key,
                message=f"Invalid value for '{key}': {value!r}",
            ))
            continue
        values[key] = converted

    for key in _VOICE_FIELDS:
        if key not in raw:
            warnings.append(DecodeWarning(
                locale=locale, index=index, field=key,
                message=f"Missing field: {key}",
            ))

    return VoiceRecord(**values)


def decode_voices_with_warnings(
    json_text: str,
) -> tuple[list[VoiceRecord], list[DecodeWarning]]:
    """Decode a voice payload and return the records with any warnings.

    Args:
        json_text: JSON text from the service or the snapshot file.

    Returns:
        Tuple of (records in locale-then-array order, warnings).

    Raises:
        VoiceParseError: If the text is not valid JSON.
        VoiceStructureError: If the document is not a non-empty object of
            locale arrays.
        EmptyVoiceListError: If no voices were found.
    """
    try:
        document = json.loads(json_text)
    except (json.JSONDecodeError, TypeError) as e:
        raise VoiceParseError(
            f"Could not parse voice payload: {e}\n{excerpt(str(json_text))}"
        ) from None

    if not isinstance(document, dict):
        raise VoiceStructureError(
            f"Expected a JSON object keyed by locale, got {type(document).__name__}"
        )
    if not document:
        raise VoiceStructureError("No locales found")

    records: list[VoiceRecord] = []
    warnings: list[DecodeWarning] = []

    for locale, entries in document.items():
        if not isinstance(entries, list):
            raise VoiceStructureError(
                f"Expected an array of voices for locale '{locale}', "
                f"got {type(entries).__name__}"
            )
        for index, entry in enumerate(entries):
            if not isinstance(entry, dict):
                warnings.append(DecodeWarning(
                    locale=locale, index=index,
                    message=f"Skipped non-object voice entry: {entry!r}",
                ))
                continue
            records.append(_decode_voice(entry, locale, index, warnings))

    if not records:
        raise EmptyVoiceListError("Voice payload contained no voices")

    for warning in warnings:
        logger.warning(
            "Decode warning [%s #%d]: %s", warning.locale, warning.index, warning.message
        )

    if logger.isEnabledFor(logging.DEBUG):
        summary = "".join(
            f"\n{v.name}\n\tLocale: {v.locale}\n\tGender: {v.gender}\n\tStyles: {len(v.styles)}"
            for v in records
        )
        logger.debug("Decoded %d voices%s", len(records), summary)

    return records, warnings


def decode_voices(json_text: str) -> list[VoiceRecord]:
    """Decode a voice payload into records.

    See ``decode_voices_with_warnings`` for the failure modes.
    """
    records, _ = decode_voices_with_warnings(json_text)
    return records


def encode_voices(voices: list[VoiceRecord], indent: int | None = None) -> str:
    """Serialize records back into the locale-keyed payload format.

    Consecutive records with the same ``locale`` share one key. The decoder
    reads the locale from each record, not from the key, so a locale that
    shows up again later gets a suffixed key (``fr_FR#2``) and the output
    decodes to the same records in the same order.
    """
    grouped: dict[str, list[dict[str, Any]]] = {}
    run_locale: str | None = None
    run: list[dict[str, Any]] = []
    for voice in voices:
        if voice.locale != run_locale:
            run_locale = voice.locale
            key = run_locale
            suffix = 2
            while key in grouped:
                key = f"{run_locale}#{suffix}"
                suffix += 1
            run = grouped[key] = []
        run.append({
            "name": voice.name,
            "locale": voice.locale,
            "gender": voice.gender,
            "styles": list(voice.styles),
        })
    return json.dumps(grouped, indent=indent, ensure_ascii=False)
