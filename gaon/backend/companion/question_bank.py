from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping, Tuple

from gaon.backend.companion.types import AssessmentResponse


@dataclass(frozen=True)
class AnswerOption:
	text: str
	score: int


@dataclass(frozen=True)
class AssessmentQuestion:
	id: int
	question: str
	options: Tuple[AnswerOption, ...]

	def as_dict(self) -> Dict[str, object]:
		return {
			"id": self.id,
			"question": self.question,
			"options": [{"text": option.text, "score": option.score} for option in self.options],
		}


FREQUENCY_OPTIONS: Tuple[AnswerOption, ...] = (
	AnswerOption("전혀 그렇지 않다", 0),
	AnswerOption("며칠 동안", 1),
	AnswerOption("1주일 이상", 2),
	AnswerOption("거의 매일", 3),
)

# PHQ-9 based short self-check.
QUESTIONS: Tuple[AssessmentQuestion, ...] = tuple(
	AssessmentQuestion(id=index, question=text, options=FREQUENCY_OPTIONS)
	for index, text in enumerate(
		(
			"지난 2주 동안 일을 하거나 다른 활동을 하는데 흥미나 즐거움을 거의 느끼지 못했습니까?",
			"지난 2주 동안 기분이 가라앉거나, 우울하거나, 절망적이라고 느꼈습니까?",
			"지난 2주 동안 잠들기가 어렵거나, 자주 깨거나, 너무 많이 잠을 자는 문제가 있었습니까?",
			"지난 2주 동안 피곤하다고 느끼거나 기력이 거의 없다고 느꼈습니까?",
			"지난 2주 동안 식욕이 떨어지거나 과식을 하는 문제가 있었습니까?",
			"지난 2주 동안 자신이 실패자라고 느끼거나, 자신이나 가족을 실망시켰다고 느꼈습니까?",
			"지난 2주 동안 신문을 읽거나 TV를 보는 것과 같은 일에 집중하는 것이 어려웠습니까?",
		),
		start=1,
	)
)

_BY_ID: Dict[int, AssessmentQuestion] = {question.id: question for question in QUESTIONS}


def list_questions() -> List[Dict[str, object]]:
	return [question.as_dict() for question in QUESTIONS]


def responses_from_selections(selections: Mapping[int, int]) -> List[AssessmentResponse]:
	"""Map {question_id: option_index} to responses in question-bank order.

	Unanswered questions count as an empty answer with score 0.
	"""
	unknown = sorted(set(selections) - set(_BY_ID))
	if unknown:
		raise ValueError(f"Unknown assessment question id(s): {', '.join(str(qid) for qid in unknown)}.")

	responses: List[AssessmentResponse] = []
	for question in QUESTIONS:
		index = selections.get(question.id)
		if index is None:
			responses.append(AssessmentResponse(question=question.question, answer="", score=0))
			continue
		if not 0 <= index < len(question.options):
			raise ValueError(f"Option index {index} is out of range for question {question.id}.")
		option = question.options[index]
		responses.append(AssessmentResponse(question=question.question, answer=option.text, score=option.score))
	return responses
