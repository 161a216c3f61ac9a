from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional, Tuple


Role = Literal["user", "assistant", "system"]
Operation = Literal["chat", "discussion", "assessment"]


@dataclass(frozen=True)
class ChatMessage:
	role: Role
	content: str

	def as_dict(self) -> Dict[str, str]:
		return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class AssessmentResponse:
	question: str
	answer: str
	score: int

	def as_dict(self) -> Dict[str, object]:
		return {"question": self.question, "answer": self.answer, "score": self.score}


@dataclass(frozen=True)
class AssessmentResult:
	total_score: int
	interpretation: str
	recommendations: Tuple[str, ...] = field(default_factory=tuple)

	def as_dict(self) -> Dict[str, object]:
		return {
			"total_score": self.total_score,
			"interpretation": self.interpretation,
			"recommendations": list(self.recommendations),
		}


@dataclass(frozen=True)
class ReflectionResponse:
	question: str
	response: str

	def as_dict(self) -> Dict[str, str]:
		return {"question": self.question, "response": self.response}


@dataclass(frozen=True)
class CompletionOptions:
	temperature: float
	max_tokens: Optional[int] = None
	json_mode: bool = False


def messages_payload(messages: List[ChatMessage]) -> List[Dict[str, str]]:
	return [message.as_dict() for message in messages]
