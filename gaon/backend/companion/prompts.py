from __future__ import annotations

from typing import Iterable, Optional, Tuple

from gaon.backend.companion.types import AssessmentResponse, ReflectionResponse


PERSONA_NAME = "가온이"

SIMULATED_REPLIES: Tuple[str, ...] = (
	"가온이: 네 말씀 잘 들었어요. 조금 더 자세히 이야기해보실래요?",
	"가온이: 정말 소중한 이야기네요. 그렇게 느끼시는 건 자연스러운 일이에요.",
	"가온이: 지금 그 감정을 표현해 주셔서 감사해요.",
	"가온이: 괜찮아요. 천천히 말해도 돼요. 저는 듣고 있어요.",
)

EMPTY_REPLY_FALLBACK = "죄송해요, 응답을 생성할 수 없습니다."
EMPTY_DISCUSSION_FALLBACK = "영상에 대한 깊이 있는 대화를 시작해보겠습니다."

DEFAULT_INTERPRETATION = "결과를 분석할 수 없습니다."
DEFAULT_RECOMMENDATIONS: Tuple[str, ...] = ("전문가와 상담을 받아보세요.",)

_PERSONA_INSTRUCTIONS = """
당신은 "가온이"라는 이름의 한국어 AI 상담사입니다. 다음 지침을 따라주세요:

1. 항상 한국어로 대화하세요
2. 따뜻하고 공감적인 어조를 유지하세요
3. 전문적이면서도 친근한 말투를 사용하세요
4. 사용자의 감정을 이해하고 검증해주세요
5. 판단하지 말고 경청하는 자세를 보여주세요
6. 필요시 건설적인 조언을 제공하세요
7. 심각한 정신건강 문제가 의심되면 전문가 상담을 권하세요
8. 대화를 자연스럽게 이어가도록 질문을 포함하세요
""".strip()

_PERSONA_CLOSING = "항상 사용자의 마음 건강과 안전을 최우선으로 생각하며 대화하세요."

HAVRUTA_SYSTEM_PROMPT = """
당신은 Havruta 스타일 대화를 진행하는 AI 상담사입니다. 사용자의 영상 시청 후 성찰을 바탕으로 깊이 있는 대화를 이어가세요.

Havruta 대화의 특징:
- 질문과 답변을 통한 상호 탐구
- 서로 다른 관점 탐색
- 깊이 있는 사고 촉진
- 판단보다는 이해에 집중

한국어로 따뜻하고 지지적인 어조로 대화를 시작하세요.
""".strip()

SCORING_SYSTEM_PROMPT = (
	"당신은 정신건강 전문가입니다. 자가진단 결과를 해석하고 도움이 되는 권장사항을 제공하세요. "
	"반드시 JSON 형식으로 응답하세요."
)

# (interpretation, recommendations) per bucket, lowest bucket first.
GOOD_STANDING: Tuple[str, Tuple[str, ...]] = (
	"현재 마음 상태가 양호한 편입니다. 긍정적인 마음가짐을 유지하세요.",
	(
		"규칙적인 생활 패턴을 유지하세요",
		"취미 활동이나 운동을 통해 스트레스를 관리하세요",
		"가족이나 친구들과의 시간을 소중히 하세요",
	),
)
MILD_DISTRESS: Tuple[str, Tuple[str, ...]] = (
	"가벼운 스트레스나 우울감을 느끼고 계신 것 같습니다.",
	(
		"충분한 휴식과 수면을 취하세요",
		"신뢰할 수 있는 사람과 이야기를 나누어보세요",
		"명상이나 요가 같은 이완 활동을 시도해보세요",
		"필요시 전문가의 도움을 받는 것을 고려해보세요",
	),
)
SIGNIFICANT_BURDEN: Tuple[str, Tuple[str, ...]] = (
	"상당한 정신적 부담을 느끼고 계신 것 같습니다. 전문가의 도움을 받아보세요.",
	(
		"정신건강 전문가와 상담을 받아보세요",
		"신뢰할 수 있는 사람들에게 도움을 요청하세요",
		"규칙적인 일상을 유지하려 노력하세요",
		"무리하지 마시고 충분히 쉬세요",
		"위기상황시 정신건강 상담전화(1577-0199)를 이용하세요",
	),
)


def persona_system_prompt(context: Optional[str] = None) -> str:
	parts = [_PERSONA_INSTRUCTIONS]
	context_text = context.strip() if isinstance(context, str) else ""
	if context_text:
		parts.append(f"추가 컨텍스트: {context_text}")
	parts.append(_PERSONA_CLOSING)
	return "\n\n".join(parts)


def simulated_discussion_starter(video_title: str) -> str:
	return (
		f'가온이: "{video_title}" 영상을 보시고 깊이 있게 성찰해주셨네요. '
		"특히 인상 깊었던 부분이 있으셨나요? 그 순간에 어떤 감정을 느끼셨는지 더 자세히 말씀해주실래요?"
	)


def discussion_context(video_title: str, reflections: Iterable[ReflectionResponse]) -> str:
	blocks = "\n\n".join(f"질문: {item.question}\n답변: {item.response}" for item in reflections)
	return (
		f'사용자가 "{video_title}" 영상을 시청하고 다음과 같이 성찰했습니다:\n'
		f"{blocks}\n\n"
		"이 성찰 내용을 바탕으로 Havruta 스타일의 대화를 시작해주세요."
	)


def scoring_prompt(responses: Iterable[AssessmentResponse], total_score: int) -> str:
	blocks = "\n\n".join(
		f"질문: {item.question}\n답변: {item.answer} (점수: {item.score})" for item in responses
	)
	return "\n".join(
		[
			"다음은 정신건강 자가진단 결과입니다:",
			blocks,
			"",
			f"총점: {total_score}",
			"",
			"이 결과를 바탕으로 JSON 형식으로 다음을 제공해주세요:",
			"{",
			'  "score": 총점,',
			'  "interpretation": "점수에 대한 한국어 해석 (100자 이내)",',
			'  "recommendations": ["구체적인 권장사항들을 한국어로 배열 형태로"]',
			"}",
		]
	)
