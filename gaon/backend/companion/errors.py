from __future__ import annotations

from typing import Dict

from gaon.backend.companion.types import Operation


OPERATION_MESSAGES: Dict[str, str] = {
	"chat": "AI 상담사와의 연결에 문제가 발생했습니다. 잠시 후 다시 시도해주세요.",
	"discussion": "영상 토론을 시작할 수 없습니다. 잠시 후 다시 시도해주세요.",
	"assessment": "평가 결과를 분석할 수 없습니다.",
}


class CompanionError(Exception):
	pass


class LanguageModelError(CompanionError):
	"""The language-model call itself failed: network, auth, quota or timeout."""

	def __init__(self, message: str, *, timed_out: bool = False):
		super().__init__(message)
		self.timed_out = timed_out


class MalformedModelOutput(CompanionError):
	"""The model answered, but the content is empty or not the JSON object we asked for."""


class ExternalServiceError(CompanionError):
	def __init__(self, *, operation: Operation, status_code: int, code: str, message: str):
		super().__init__(message)
		self.operation = operation
		self.status_code = status_code
		self.code = code
		self.message = message

	@classmethod
	def from_model_error(cls, operation: Operation, exc: LanguageModelError) -> "ExternalServiceError":
		if exc.timed_out:
			return cls(
				operation=operation,
				status_code=504,
				code="companion_provider_timeout",
				message=OPERATION_MESSAGES[operation],
			)
		return cls(
			operation=operation,
			status_code=502,
			code="companion_provider_error",
			message=OPERATION_MESSAGES[operation],
		)

	@classmethod
	def from_exception(cls, operation: Operation, exc: Exception) -> "ExternalServiceError":
		if isinstance(exc, ExternalServiceError):
			return exc
		if not isinstance(exc, LanguageModelError):
			exc = LanguageModelError(str(exc), timed_out=isinstance(exc, TimeoutError))
		return cls.from_model_error(operation, exc)
