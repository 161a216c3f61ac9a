from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class ApiError(BaseModel):
	model_config = ConfigDict(extra="forbid")

	code: str
	message: str
	evidence: List[str] = Field(default_factory=list)


class ApiEnvelope(BaseModel):
	model_config = ConfigDict(extra="allow")

	ok: bool
	generated_at: str
	request_id: Optional[str] = None
	data: Optional[Dict[str, Any]] = None
	error: Optional[ApiError] = None


class ChatMessageIn(BaseModel):
	model_config = ConfigDict(extra="forbid")

	role: Literal["user", "assistant", "system"]
	content: str


class ChatReplyRequest(BaseModel):
	model_config = ConfigDict(extra="forbid")

	messages: List[ChatMessageIn] = Field(..., min_length=1, description="Chronological conversation history.")
	context: Optional[str] = Field(default=None, description="Optional supporting context for the persona.")


class ReflectionIn(BaseModel):
	model_config = ConfigDict(extra="forbid")

	question: str
	response: str


class DiscussionStarterRequest(BaseModel):
	model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

	video_title: Optional[str] = Field(default=None, description="Title of the watched video.")
	reflections: List[ReflectionIn] = Field(default_factory=list)


class AssessmentResponseIn(BaseModel):
	model_config = ConfigDict(extra="forbid")

	question: str
	answer: str
	score: int = Field(..., ge=0, description="Item score, 0-3 for the bundled question bank.")


class AssessmentScoreRequest(BaseModel):
	model_config = ConfigDict(extra="forbid")

	responses: List[AssessmentResponseIn] = Field(default_factory=list)


class AssessmentSelectionsRequest(BaseModel):
	model_config = ConfigDict(extra="forbid")

	selections: Dict[int, int] = Field(default_factory=dict, description="question_id -> option index")

