"""Voice session configuration.

Settings live in args/voice.yaml and are validated with pydantic. A missing
or invalid file falls back to defaults.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field

from voicedesk import CONFIG_PATH
from voicedesk.voice.models import Language

logger = logging.getLogger(__name__)


# =============================================================================
# VoiceConfig (args/voice.yaml)
# =============================================================================

class SessionConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    language: Language = Field(default=Language.ENGLISH)
    continuous: bool = Field(default=True)
    confidence_threshold: float = Field(default=0.7, ge=0.0, le=1.0)
    history_limit: int = Field(default=50, ge=1)


class ServicesConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    base_url: str = Field(default="http://localhost:5000")
    request_timeout_seconds: Optional[float] = Field(default=30.0, gt=0)
    headers: dict[str, str] = Field(default_factory=dict)


class SpeechConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    locales: dict[str, str] = Field(
        default_factory=lambda: {"en": "en-US", "ar": "ar-SA"}
    )

    def locale_for(self, language: Language) -> str:
        return self.locales.get(language.value, language.value)


class VoiceConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    session: SessionConfig = Field(default_factory=SessionConfig)
    services: ServicesConfig = Field(default_factory=ServicesConfig)
    speech: SpeechConfig = Field(default_factory=SpeechConfig)


def load_voice_config(path: Path | None = None) -> VoiceConfig:
    """Load args/voice.yaml, falling back to defaults on a missing or bad file.

    ``VOICEDESK_BASE_URL`` overrides ``services.base_url``.
    """
    yaml_path = path or CONFIG_PATH

    try:
        if yaml_path.exists():
            with open(yaml_path) as f:
                raw = yaml.safe_load(f) or {}
        else:
            raw = {}

        config = VoiceConfig.model_validate(raw)
    except Exception as e:
        logger.warning(f"Config validation failed for {yaml_path}: {e}, using defaults")
        config = VoiceConfig()

    base_url = os.environ.get("VOICEDESK_BASE_URL")
    if base_url:
        config.services.base_url = base_url

    return config


__all__ = [
    "ServicesConfig",
    "SessionConfig",
    "SpeechConfig",
    "VoiceConfig",
    "load_voice_config",
]
