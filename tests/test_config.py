"""Tests for environment-driven settings."""

from __future__ import annotations

import logging

import pytest

from skillcert.config import Settings, decode_seed, encode_seed
from tests.helpers import TEST_SEED


class TestSeedEncoding:
    def test_round_trip(self) -> None:
        assert decode_seed(encode_seed(TEST_SEED)) == TEST_SEED

    def test_padding_optional(self) -> None:
        padded = encode_seed(TEST_SEED) + "="
        assert decode_seed(padded) == TEST_SEED

    def test_wrong_length_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="skillcert.config"):
            assert decode_seed(encode_seed(b"short")) is None
        assert "SKILLCERT_SIGNING_KEY" in caplog.text

    def test_non_ascii_rejected(self) -> None:
        assert decode_seed("ключ") is None


class TestSettingsFromEnv:
    def test_defaults(self) -> None:
        settings = Settings.from_env({})
        assert settings.signing_seed is None
        assert settings.issuer == "SkillCert"

    def test_seed_and_issuer(self) -> None:
        settings = Settings.from_env({
            "SKILLCERT_SIGNING_KEY": encode_seed(TEST_SEED),
            "SKILLCERT_ISSUER": "  Acme Registry ",
        })
        assert settings.signing_seed == TEST_SEED
        assert settings.issuer == "Acme Registry"

    def test_invalid_seed_falls_back_to_ephemeral(self) -> None:
        settings = Settings.from_env({"SKILLCERT_SIGNING_KEY": "tooshort"})
        assert settings.signing_seed is None

    def test_repr_hides_seed(self) -> None:
        settings = Settings.from_env({"SKILLCERT_SIGNING_KEY": encode_seed(TEST_SEED)})
        assert "signing_seed" not in repr(settings)

    def test_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SKILLCERT_ISSUER", "From Env")
        assert Settings.from_env().issuer == "From Env"


class TestSeedAlphabet:
    """Characters outside the URL-safe alphabet make the seed unusable."""

    def test_stray_characters_are_not_dropped(self, caplog: pytest.LogCaptureFixture) -> None:
        encoded = encode_seed(TEST_SEED)
        mistyped = encoded[:10] + "!!!!" + encoded[10:]
        with caplog.at_level(logging.WARNING, logger="skillcert.config"):
            assert decode_seed(mistyped) is None
        assert "not valid base64" in caplog.text

    def test_standard_alphabet_rejected(self, caplog: pytest.LogCaptureFixture) -> None:
        encoded = encode_seed(TEST_SEED)
        with caplog.at_level(logging.WARNING, logger="skillcert.config"):
            assert decode_seed("+" + encoded[1:]) is None
        assert "URL-safe" in caplog.text
