from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

from gaon.backend import constants


class SettingsError(Exception):
	pass


@dataclass(frozen=True)
class CompanionSettings:
	openai_api_key: Optional[str] = None
	openai_model: str = constants.DEFAULT_OPENAI_MODEL
	openai_timeout_s: float = constants.DEFAULT_OPENAI_TIMEOUT_S
	log_level: str = constants.DEFAULT_LOG_LEVEL
	cors_allow_origins: List[str] = field(default_factory=lambda: list(constants.DEFAULT_CORS_ALLOW_ORIGINS))

	@property
	def live_mode(self) -> bool:
		return bool(self.openai_api_key)


def _openai_api_key() -> Optional[str]:
	key = os.getenv("OPENAI_API_KEY", "").strip()
	return key or None


def _openai_model() -> str:
	return os.getenv("GAON_OPENAI_MODEL", constants.DEFAULT_OPENAI_MODEL).strip() or constants.DEFAULT_OPENAI_MODEL


def _openai_timeout() -> float:
	raw = os.getenv("GAON_OPENAI_TIMEOUT_S", "").strip()
	if not raw:
		return constants.DEFAULT_OPENAI_TIMEOUT_S
	try:
		value = float(raw)
	except ValueError as exc:
		raise SettingsError("GAON_OPENAI_TIMEOUT_S must be numeric.") from exc
	if value <= 0:
		raise SettingsError("GAON_OPENAI_TIMEOUT_S must be greater than zero.")
	return value


def _log_level() -> str:
	return os.getenv("GAON_LOG_LEVEL", constants.DEFAULT_LOG_LEVEL).strip().upper() or constants.DEFAULT_LOG_LEVEL


def _cors_allow_origins() -> List[str]:
	raw = os.getenv("GAON_CORS_ALLOW_ORIGINS", "").strip()
	origins = [item.strip() for item in raw.split(",") if item.strip()]
	return origins or list(constants.DEFAULT_CORS_ALLOW_ORIGINS)


def load_settings(*, dotenv: bool = True) -> CompanionSettings:
	if dotenv:
		load_dotenv()
	return CompanionSettings(
		openai_api_key=_openai_api_key(),
		openai_model=_openai_model(),
		openai_timeout_s=_openai_timeout(),
		log_level=_log_level(),
		cors_allow_origins=_cors_allow_origins(),
	)
