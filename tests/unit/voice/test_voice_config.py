"""Tests for args/voice.yaml loading and validation."""

import pytest
import yaml

from voicedesk import CONFIG_PATH
from voicedesk.voice.config import SessionConfig, SpeechConfig, load_voice_config
from voicedesk.voice.models import Language


@pytest.fixture(autouse=True)
def no_base_url_override(monkeypatch):
    monkeypatch.delenv("VOICEDESK_BASE_URL", raising=False)


class TestLoadVoiceConfig:
    def test_shipped_config_is_valid(self):
        config = load_voice_config(CONFIG_PATH)
        assert config.session.language == Language.ENGLISH
        assert config.session.confidence_threshold == 0.7
        assert config.speech.locale_for(Language.ARABIC) == "ar-SA"

    def test_missing_file_uses_defaults(self, tmp_path):
        config = load_voice_config(tmp_path / "missing.yaml")
        assert config.session.continuous is True
        assert config.services.base_url == "http://localhost:5000"
        assert config.services.request_timeout_seconds == 30.0

    def test_reads_values(self, tmp_path):
        path = tmp_path / "voice.yaml"
        path.write_text(yaml.safe_dump({
            "session": {"language": "ar", "continuous": False, "confidence_threshold": 0.5},
            "services": {"base_url": "http://api.test", "request_timeout_seconds": None},
        }))

        config = load_voice_config(path)

        assert config.session.language == Language.ARABIC
        assert config.session.continuous is False
        assert config.session.confidence_threshold == 0.5
        assert config.services.base_url == "http://api.test"
        assert config.services.request_timeout_seconds is None

    def test_invalid_values_fall_back_to_defaults(self, tmp_path):
        path = tmp_path / "voice.yaml"
        path.write_text(yaml.safe_dump({"session": {"confidence_threshold": 2.0}}))

        config = load_voice_config(path)

        assert config.session.confidence_threshold == 0.7

    def test_env_overrides_base_url(self, tmp_path, monkeypatch):
        monkeypatch.setenv("VOICEDESK_BASE_URL", "http://override.test")
        config = load_voice_config(tmp_path / "missing.yaml")
        assert config.services.base_url == "http://override.test"


class TestModels:
    def test_threshold_bounds(self):
        with pytest.raises(ValueError):
            SessionConfig(confidence_threshold=1.5)

    def test_unknown_language_locale(self):
        speech = SpeechConfig(locales={"en": "en-GB"})
        assert speech.locale_for(Language.ENGLISH) == "en-GB"
        assert speech.locale_for(Language.ARABIC) == "ar"
