"""Tests for the voice payload decoder and encoder."""

import json
import logging

import pytest

from wit_voice_cache.decoder import (
    decode_voices,
    decode_voices_with_warnings,
    encode_voices,
    excerpt,
)
from wit_voice_cache.errors import (
    DecodeError,
    EmptyVoiceListError,
    VoiceParseError,
    VoiceStructureError,
)
from wit_voice_cache.models import VoiceRecord

from conftest import BOB_JSON, TWO_LOCALES


class TestDecodeVoices:
    """Well-formed payloads."""

    def test_single_voice(self):
        voices = decode_voices(BOB_JSON)
        assert voices == [
            VoiceRecord(name="Bob", locale="en_US", gender="male", styles=("default",))
        ]

    def test_preserves_locale_then_array_order(self, two_locales_json):
        voices = decode_voices(two_locales_json)
        assert [v.name for v in voices] == ["wit$Alex", "wit$Charlie", "wit$Jeanne"]
        assert [v.locale for v in voices] == ["en_US", "en_US", "fr_FR"]

    def test_length_matches_total_voice_count(self, two_locales_json):
        total = sum(len(entries) for entries in TWO_LOCALES.values())
        assert len(decode_voices(two_locales_json)) == total

    def test_empty_styles_kept(self, two_locales_json):
        charlie = decode_voices(two_locales_json)[1]
        assert charlie.styles == ()

    def test_empty_locale_alongside_populated_locale(self):
        payload = json.dumps({"de_DE": [], "en_US": TWO_LOCALES["en_US"]})
        voices = decode_voices(payload)
        assert len(voices) == 2


class TestDecodeWarnings:
    """Problems inside a voice entry are warnings, not failures."""

    def test_unknown_field_is_warning(self):
        payload = json.dumps({
            "en_US": [
                {"name": "Bob", "locale": "en_US", "gender": "male",
                 "styles": ["default"], "supported_features": ["ssml"]},
                {"name": "Ann", "locale": "en_US", "gender": "female", "styles": []},
            ]
        })
        voices, warnings = decode_voices_with_warnings(payload)
        assert [v.name for v in voices] == ["Bob", "Ann"]
        assert len(warnings) == 1
        assert warnings[0].field == "supported_features"
        assert "Unknown field" in warnings[0].message

    def test_missing_field_keeps_default(self):
        payload = json.dumps({"en_US": [{"name": "Bob"}]})
        voices, warnings = decode_voices_with_warnings(payload)
        assert voices[0].name == "Bob"
        assert voices[0].locale == ""
        assert voices[0].gender == ""
        assert voices[0].styles == ()
        assert {w.field for w in warnings} == {"locale", "gender", "styles"}

    def test_wrong_type_keeps_default(self):
        payload = json.dumps({"en_US": [{"name": 42, "styles": "default"}]})
        voices, warnings = decode_voices_with_warnings(payload)
        assert voices[0].name == ""
        assert voices[0].styles == ()
        invalid = [w for w in warnings if w.message.startswith("Invalid value")]
        assert {w.field for w in invalid} == {"name", "styles"}

    def test_non_object_entry_skipped(self):
        payload = json.dumps({"en_US": ["Bob", {"name": "Ann"}]})
        voices, warnings = decode_voices_with_warnings(payload)
        assert [v.name for v in voices] == ["Ann"]
        assert warnings[0].index == 0
        assert "non-object" in warnings[0].message

    def test_warnings_are_logged(self, caplog):
        payload = json.dumps({"en_US": [{"name": "Bob", "age": 3}]})
        with caplog.at_level(logging.WARNING, logger="wit-voice-cache.decoder"):
            decode_voices(payload)
        assert "Unknown field: age" in caplog.text


class TestDecodeFailures:
    """Payloads that cannot produce a catalog."""

    def test_empty_string(self):
        with pytest.raises(VoiceParseError):
            decode_voices("")

    def test_malformed_json(self):
        with pytest.raises(VoiceParseError) as exc_info:
            decode_voices('{"en_US": [')
        assert "Could not parse" in str(exc_info.value)

    def test_empty_object(self):
        with pytest.raises(VoiceStructureError):
            decode_voices("{}")

    def test_top_level_array(self):
        with pytest.raises(VoiceStructureError):
            decode_voices("[]")

    def test_locale_value_not_array(self):
        with pytest.raises(VoiceStructureError) as exc_info:
            decode_voices('{"en_US": {"name": "Bob"}}')
        assert "en_US" in str(exc_info.value)

    def test_all_locales_empty(self):
        with pytest.raises(EmptyVoiceListError):
            decode_voices('{"en_US": [], "fr_FR": []}')

    def test_all_failures_are_decode_errors(self):
        for payload in ("", "nope", "{}", "[1]", '{"en_US": []}'):
            with pytest.raises(DecodeError):
                decode_voices(payload)


class TestEncodeVoices:
    def test_decode_of_encoded_catalog_is_equal(self, two_locales_json):
        voices = decode_voices(two_locales_json)
        assert decode_voices(encode_voices(voices)) == voices

    def test_groups_by_locale(self):
        voices = [
            VoiceRecord(name="A", locale="en_US"),
            VoiceRecord(name="B", locale="fr_FR"),
        ]
        data = json.loads(encode_voices(voices))
        assert list(data) == ["en_US", "fr_FR"]
        assert data["en_US"][0] == {"name": "A", "locale": "en_US", "gender": "", "styles": []}

    def test_interleaved_locales_keep_order(self):
        payload = json.dumps({"en_US": [
            {"name": "A", "locale": "fr_FR", "gender": "male", "styles": []},
            {"name": "B", "locale": "en_US", "gender": "female", "styles": ["soft"]},
            {"name": "C", "locale": "fr_FR", "gender": "male", "styles": []},
        ]})
        voices = decode_voices(payload)

        encoded = encode_voices(voices)

        assert list(json.loads(encoded)) == ["fr_FR", "en_US", "fr_FR#2"]
        assert decode_voices(encoded) == voices
        assert [v.name for v in decode_voices(encoded)] == ["A", "B", "C"]

    def test_missing_locale_survives(self):
        voices = decode_voices(json.dumps({"en_US": [{"name": "A"}, {"name": "B", "locale": "en_US"}]}))
        assert decode_voices(encode_voices(voices)) == voices


class TestExcerpt:
    def test_short_text_unchanged(self):
        assert excerpt("abc") == "abc"

    def test_long_text_truncated(self):
        result = excerpt("x" * 1000, limit=10)
        assert result.startswith("x" * 10 + "...")
        assert "1000 chars" in result
