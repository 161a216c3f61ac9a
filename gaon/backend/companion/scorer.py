from __future__ import annotations

import logging
import random
from typing import Any, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from gaon.backend import constants
from gaon.backend.companion import prompts
from gaon.backend.companion.errors import ExternalServiceError, MalformedModelOutput
from gaon.backend.companion.latency import SleepFn, default_sleep, simulate_latency
from gaon.backend.companion.llm import LanguageModel
from gaon.backend.companion.types import AssessmentResponse, AssessmentResult, ChatMessage, CompletionOptions


logger = logging.getLogger(__name__)

_SCORING_OPTIONS = CompletionOptions(
	temperature=constants.SCORING_TEMPERATURE,
	json_mode=True,
)


class _ScoringPayloadModel(BaseModel):
	model_config = ConfigDict(extra="ignore")

	interpretation: Optional[str] = None
	recommendations: List[str] = Field(default_factory=list)

	@field_validator("interpretation", mode="before")
	@classmethod
	def _text_or_none(cls, value: Any) -> Optional[str]:
		if not isinstance(value, str):
			return None
		return value.strip() or None

	@field_validator("recommendations", mode="before")
	@classmethod
	def _clean_recommendations(cls, value: Any) -> List[str]:
		return _string_list(value)


def total_score(responses: Sequence[AssessmentResponse]) -> int:
	total = 0
	for item in responses:
		if item.score < 0:
			raise ValueError(f"Assessment score must be non-negative, got {item.score}.")
		total += item.score
	return total


def bucket_for(total: int) -> Tuple[str, Tuple[str, ...]]:
	if total <= constants.GOOD_STANDING_MAX_SCORE:
		return prompts.GOOD_STANDING
	if total <= constants.MILD_DISTRESS_MAX_SCORE:
		return prompts.MILD_DISTRESS
	return prompts.SIGNIFICANT_BURDEN


def _string_list(value: Any) -> List[str]:
	if not isinstance(value, list):
		return []
	result: List[str] = []
	for item in value:
		if isinstance(item, str):
			cleaned = " ".join(item.split()).strip()
			if cleaned:
				result.append(cleaned)
	return result


def _result_from_payload(total: int, payload: dict) -> AssessmentResult:
	parsed = _ScoringPayloadModel.model_validate(payload)
	return AssessmentResult(
		total_score=total,
		interpretation=parsed.interpretation or prompts.DEFAULT_INTERPRETATION,
		recommendations=tuple(parsed.recommendations) or prompts.DEFAULT_RECOMMENDATIONS,
	)


class AssessmentScorer:
	"""Turns self-check answers into a total, an interpretation and recommendations.

	The total is always the local sum of the item scores. Live mode asks the
	model for the wording and falls back to fixed defaults when the reply is
	not usable JSON; only a failed call is an error.
	"""

	def __init__(
		self,
		*,
		live_mode: bool,
		language_model: Optional[LanguageModel] = None,
		rng: Optional[random.Random] = None,
		sleep: Optional[SleepFn] = None,
	):
		if live_mode and language_model is None:
			raise ValueError("Live mode requires a language model.")
		self._live_mode = live_mode
		self._language_model = language_model
		self._rng = rng or random.Random()
		self._sleep = sleep or default_sleep()

	def is_simulated(self) -> bool:
		return not self._live_mode

	async def score(self, responses: Sequence[AssessmentResponse]) -> AssessmentResult:
		total = total_score(responses)
		if not self._live_mode:
			await simulate_latency(self._rng, self._sleep, constants.SCORING_DELAY_S)
			interpretation, recommendations = bucket_for(total)
			return AssessmentResult(
				total_score=total,
				interpretation=interpretation,
				recommendations=recommendations,
			)

		messages = [
			ChatMessage(role="system", content=prompts.SCORING_SYSTEM_PROMPT),
			ChatMessage(role="user", content=prompts.scoring_prompt(responses, total)),
		]
		try:
			payload = await self._language_model.complete_json(messages, _SCORING_OPTIONS)
		except MalformedModelOutput as exc:
			logger.warning("Unusable scoring output (%s); falling back to default interpretation.", exc)
			payload = {}
		except Exception as exc:
			logger.error("Language model call failed for assessment: %s", exc)
			raise ExternalServiceError.from_exception("assessment", exc) from exc
		if not isinstance(payload, dict):
			payload = {}
		return _result_from_payload(total, payload)
