from __future__ import annotations

import logging
import random
from typing import List, Optional, Sequence

from gaon.backend import constants
from gaon.backend.companion import prompts
from gaon.backend.companion.errors import ExternalServiceError, MalformedModelOutput
from gaon.backend.companion.latency import SleepFn, default_sleep, simulate_latency
from gaon.backend.companion.llm import LanguageModel
from gaon.backend.companion.types import ChatMessage, CompletionOptions, ReflectionResponse


logger = logging.getLogger(__name__)

_CHAT_OPTIONS = CompletionOptions(
	temperature=constants.CHAT_TEMPERATURE,
	max_tokens=constants.CHAT_MAX_TOKENS,
)
_DISCUSSION_OPTIONS = CompletionOptions(
	temperature=constants.DISCUSSION_TEMPERATURE,
	max_tokens=constants.DISCUSSION_MAX_TOKENS,
)


class ResponseGenerator:
	"""Produces persona replies and video discussion starters.

	In live mode every call goes to the language model. A failed call raises
	ExternalServiceError and is never replaced by a canned reply. In simulated
	mode a scripted reply is returned after an artificial delay.
	"""

	def __init__(
		self,
		*,
		live_mode: bool,
		language_model: Optional[LanguageModel] = None,
		rng: Optional[random.Random] = None,
		sleep: Optional[SleepFn] = None,
		replies: Sequence[str] = prompts.SIMULATED_REPLIES,
	):
		if live_mode and language_model is None:
			raise ValueError("Live mode requires a language model.")
		if not replies:
			raise ValueError("Simulated reply pool must not be empty.")
		self._live_mode = live_mode
		self._language_model = language_model
		self._rng = rng or random.Random()
		self._sleep = sleep or default_sleep()
		self._replies = tuple(replies)

	def is_simulated(self) -> bool:
		return not self._live_mode

	async def generate_reply(self, history: Sequence[ChatMessage], context: Optional[str] = None) -> str:
		if not self._live_mode:
			await simulate_latency(self._rng, self._sleep, constants.REPLY_DELAY_S)
			return self._rng.choice(self._replies)

		messages: List[ChatMessage] = [
			ChatMessage(role="system", content=prompts.persona_system_prompt(context)),
			*history,
		]
		try:
			text = await self._language_model.complete(messages, _CHAT_OPTIONS)
		except MalformedModelOutput:
			text = ""
		except Exception as exc:
			logger.error("Language model call failed for %s: %s", "chat", exc)
			raise ExternalServiceError.from_exception("chat", exc) from exc
		return text or prompts.EMPTY_REPLY_FALLBACK

	async def generate_discussion_starter(
		self,
		video_title: str,
		reflections: Sequence[ReflectionResponse],
	) -> str:
		if not self._live_mode:
			await simulate_latency(self._rng, self._sleep, constants.DISCUSSION_DELAY_S)
			return prompts.simulated_discussion_starter(video_title)

		messages = [
			ChatMessage(role="system", content=prompts.HAVRUTA_SYSTEM_PROMPT),
			ChatMessage(role="user", content=prompts.discussion_context(video_title, reflections)),
		]
		try:
			text = await self._language_model.complete(messages, _DISCUSSION_OPTIONS)
		except MalformedModelOutput:
			text = ""
		except Exception as exc:
			logger.error("Language model call failed for %s: %s", "discussion", exc)
			raise ExternalServiceError.from_exception("discussion", exc) from exc
		if not text:
			logger.warning("Empty discussion starter for video %r; using fallback line.", video_title)
			return prompts.EMPTY_DISCUSSION_FALLBACK
		return text
