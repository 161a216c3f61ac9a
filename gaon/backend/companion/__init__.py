from gaon.backend.companion.errors import (
	CompanionError,
	ExternalServiceError,
	LanguageModelError,
	MalformedModelOutput,
)
from gaon.backend.companion.llm import LanguageModel, OpenAILanguageModel
from gaon.backend.companion.responder import ResponseGenerator
from gaon.backend.companion.scorer import AssessmentScorer
from gaon.backend.companion.types import (
	AssessmentResponse,
	AssessmentResult,
	ChatMessage,
	CompletionOptions,
	ReflectionResponse,
)

__all__ = [
	"AssessmentResponse",
	"AssessmentResult",
	"AssessmentScorer",
	"ChatMessage",
	"CompanionError",
	"CompletionOptions",
	"ExternalServiceError",
	"LanguageModel",
	"LanguageModelError",
	"MalformedModelOutput",
	"OpenAILanguageModel",
	"ReflectionResponse",
	"ResponseGenerator",
]
