from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, List, Protocol

from openai import APITimeoutError, AsyncOpenAI

from gaon.backend import constants
from gaon.backend.companion.errors import LanguageModelError, MalformedModelOutput
from gaon.backend.companion.types import ChatMessage, CompletionOptions, messages_payload


logger = logging.getLogger(__name__)


class LanguageModel(Protocol):
	async def complete(self, messages: List[ChatMessage], options: CompletionOptions) -> str:
		...

	async def complete_json(self, messages: List[ChatMessage], options: CompletionOptions) -> Dict[str, Any]:
		...


def _extract_message_text(response: Any) -> str:
	choices = getattr(response, "choices", None)
	if not choices:
		return ""
	message = getattr(choices[0], "message", None)
	content = getattr(message, "content", None)
	if isinstance(content, str):
		return content
	return ""


def extract_json_object(raw: str) -> Dict[str, Any]:
	candidate = raw.strip()
	if candidate.startswith("```"):
		candidate = re.sub(r"^```[a-zA-Z]*\s*", "", candidate)
		candidate = re.sub(r"\s*```$", "", candidate)
	start = candidate.find("{")
	end = candidate.rfind("}")
	if start == -1 or end == -1 or end <= start:
		raise MalformedModelOutput("Language model returned no JSON object.")
	try:
		parsed = json.loads(candidate[start : end + 1])
	except json.JSONDecodeError as exc:
		raise MalformedModelOutput("Language model returned invalid JSON content.") from exc
	if not isinstance(parsed, dict):
		raise MalformedModelOutput("Language model returned an unexpected payload shape.")
	return parsed


class OpenAILanguageModel:
	"""Chat-completions adapter over the OpenAI SDK.

	SDK exceptions become LanguageModelError. Empty or unparseable JSON-mode
	content becomes MalformedModelOutput.
	"""

	def __init__(
		self,
		*,
		api_key: str,
		model: str = constants.DEFAULT_OPENAI_MODEL,
		timeout_s: float = constants.DEFAULT_OPENAI_TIMEOUT_S,
		client: Any = None,
	):
		self.model = model
		self._client = client if client is not None else AsyncOpenAI(api_key=api_key, timeout=timeout_s)

	async def _create(self, messages: List[ChatMessage], options: CompletionOptions) -> Any:
		kwargs: Dict[str, Any] = {
			"model": self.model,
			"messages": messages_payload(messages),
			"temperature": options.temperature,
		}
		if options.max_tokens is not None:
			kwargs["max_tokens"] = options.max_tokens
		if options.json_mode:
			kwargs["response_format"] = {"type": "json_object"}
		try:
			return await self._client.chat.completions.create(**kwargs)
		except Exception as exc:
			timed_out = isinstance(exc, (APITimeoutError, TimeoutError))
			logger.error("OpenAI API error (model=%s, timed_out=%s): %s", self.model, timed_out, exc, exc_info=True)
			raise LanguageModelError("Language model request failed.", timed_out=timed_out) from exc

	async def complete(self, messages: List[ChatMessage], options: CompletionOptions) -> str:
		response = await self._create(messages, options)
		return _extract_message_text(response)

	async def complete_json(self, messages: List[ChatMessage], options: CompletionOptions) -> Dict[str, Any]:
		response = await self._create(messages, options)
		raw = _extract_message_text(response)
		if not raw.strip():
			raise MalformedModelOutput("Language model returned an empty response.")
		return extract_json_object(raw)
