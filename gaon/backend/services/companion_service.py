from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence

from gaon.backend import constants
from gaon.backend.companion import question_bank
from gaon.backend.companion.latency import SleepFn
from gaon.backend.companion.llm import LanguageModel, OpenAILanguageModel
from gaon.backend.companion.responder import ResponseGenerator
from gaon.backend.companion.scorer import AssessmentScorer
from gaon.backend.companion.types import AssessmentResponse, ChatMessage, ReflectionResponse
from gaon.backend.settings import CompanionSettings


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompanionRuntime:
	"""Process-wide pair of components sharing one mode, fixed at construction."""

	live_mode: bool
	model_name: Optional[str]
	generator: ResponseGenerator
	scorer: AssessmentScorer

	def is_simulated(self) -> bool:
		return not self.live_mode

	@classmethod
	def build(
		cls,
		*,
		live_mode: bool,
		language_model: Optional[LanguageModel] = None,
		model_name: Optional[str] = None,
		rng: Optional[random.Random] = None,
		sleep: Optional[SleepFn] = None,
	) -> "CompanionRuntime":
		return cls(
			live_mode=live_mode,
			model_name=model_name if live_mode else None,
			generator=ResponseGenerator(live_mode=live_mode, language_model=language_model, rng=rng, sleep=sleep),
			scorer=AssessmentScorer(live_mode=live_mode, language_model=language_model, rng=rng, sleep=sleep),
		)

	@classmethod
	def from_settings(cls, settings: CompanionSettings) -> "CompanionRuntime":
		if not settings.live_mode:
			logger.info("OPENAI_API_KEY not configured; companion running in simulated (demo) mode.")
			return cls.build(live_mode=False)
		logger.info("Companion running in live mode with model %s.", settings.openai_model)
		language_model = OpenAILanguageModel(
			api_key=settings.openai_api_key or "",
			model=settings.openai_model,
			timeout_s=settings.openai_timeout_s,
		)
		return cls.build(live_mode=True, language_model=language_model, model_name=settings.openai_model)


def mode_summary(runtime: CompanionRuntime) -> Dict[str, object]:
	return {
		"status": "ok",
		"mode": "simulated" if runtime.is_simulated() else "live",
		"is_demo_mode": runtime.is_simulated(),
		"model": runtime.model_name,
	}


async def reply(runtime: CompanionRuntime, messages: Sequence[Mapping[str, str]], context: Optional[str]) -> str:
	history = [ChatMessage(role=item["role"], content=item["content"]) for item in messages]  # type: ignore[arg-type]
	return await runtime.generator.generate_reply(history, context)


async def discussion_starter(
	runtime: CompanionRuntime,
	video_title: Optional[str],
	reflections: Sequence[Mapping[str, str]],
) -> str:
	title = (video_title or "").strip() or constants.DEFAULT_VIDEO_TITLE
	items = [ReflectionResponse(question=item["question"], response=item["response"]) for item in reflections]
	return await runtime.generator.generate_discussion_starter(title, items)


async def analyze(runtime: CompanionRuntime, responses: Sequence[Mapping[str, object]]) -> Dict[str, object]:
	items = [
		AssessmentResponse(
			question=str(item["question"]),
			answer=str(item["answer"]),
			score=int(item["score"]),  # type: ignore[call-overload]
		)
		for item in responses
	]
	result = await runtime.scorer.score(items)
	return result.as_dict()


async def analyze_selections(runtime: CompanionRuntime, selections: Mapping[int, int]) -> Dict[str, object]:
	responses = question_bank.responses_from_selections(selections)
	result = await runtime.scorer.score(responses)
	return {
		"analysis": result.as_dict(),
		"responses": [item.as_dict() for item in responses],
	}


def questions() -> List[Dict[str, object]]:
	return question_bank.list_questions()
