import asyncio
import itertools
import random
from unittest import TestCase

from gaon.backend.companion import prompts
from gaon.backend.companion.errors import ExternalServiceError, LanguageModelError, MalformedModelOutput
from gaon.backend.companion.llm import extract_json_object
from gaon.backend.companion.scorer import AssessmentScorer, bucket_for
from gaon.backend.companion.types import AssessmentResponse


class _RecordingSleep:
	def __init__(self):
		self.delays = []

	async def __call__(self, delay: float) -> None:
		self.delays.append(delay)


class _FakeModel:
	def __init__(self, *, raw: str | None = None, error: Exception | None = None):
		self._raw = raw
		self._error = error
		self.calls = []

	async def complete(self, messages, options):
		raise AssertionError("scorer must request JSON output")

	async def complete_json(self, messages, options):
		self.calls.append((messages, options))
		if self._error is not None:
			raise self._error
		return extract_json_object(self._raw or "")


def _responses(*scores: int):
	return [AssessmentResponse(question=f"Q{i}", answer=f"A{i}", score=score) for i, score in enumerate(scores, start=1)]


def _simulated_scorer(sleep=None) -> AssessmentScorer:
	return AssessmentScorer(live_mode=False, rng=random.Random(7), sleep=sleep or _RecordingSleep())


class SimulatedScoringTests(TestCase):
	def test_total_is_sum_regardless_of_order(self) -> None:
		scorer = _simulated_scorer()
		items = _responses(3, 0, 2, 1, 3)
		for ordering in itertools.permutations(items):
			result = asyncio.run(scorer.score(list(ordering)))
			self.assertEqual(result.total_score, 9)

	def test_threshold_boundaries(self) -> None:
		scorer = _simulated_scorer()
		expected = {
			0: prompts.GOOD_STANDING,
			4: prompts.GOOD_STANDING,
			5: prompts.MILD_DISTRESS,
			9: prompts.MILD_DISTRESS,
			10: prompts.SIGNIFICANT_BURDEN,
			21: prompts.SIGNIFICANT_BURDEN,
		}
		for total, (interpretation, recommendations) in expected.items():
			scores = [3] * (total // 3) + ([total % 3] if total % 3 else [])
			result = asyncio.run(scorer.score(_responses(*scores)))
			self.assertEqual(result.total_score, total)
			self.assertEqual(result.interpretation, interpretation)
			self.assertEqual(result.recommendations, recommendations)

	def test_bucket_sizes(self) -> None:
		self.assertEqual(len(bucket_for(4)[1]), 3)
		self.assertEqual(len(bucket_for(5)[1]), 4)
		self.assertEqual(len(bucket_for(10)[1]), 5)
		self.assertTrue(any("1577-0199" in item for item in bucket_for(10)[1]))
		self.assertTrue(any("전문가" in item for item in bucket_for(7)[1]))

	def test_two_answers_summing_to_five_are_mild_distress(self) -> None:
		result = asyncio.run(_simulated_scorer().score(_responses(3, 2)))
		self.assertEqual(result.total_score, 5)
		self.assertEqual(result.interpretation, prompts.MILD_DISTRESS[0])
		self.assertEqual(len(result.recommendations), 4)

	def test_empty_responses_score_zero(self) -> None:
		result = asyncio.run(_simulated_scorer().score([]))
		self.assertEqual(result.total_score, 0)
		self.assertEqual(result.interpretation, prompts.GOOD_STANDING[0])

	def test_delay_within_bounds(self) -> None:
		sleep = _RecordingSleep()
		scorer = AssessmentScorer(live_mode=False, sleep=sleep)
		for _ in range(200):
			asyncio.run(scorer.score(_responses(1)))
		self.assertEqual(len(sleep.delays), 200)
		self.assertTrue(all(2.0 <= delay < 3.0 for delay in sleep.delays))

	def test_negative_score_rejected(self) -> None:
		with self.assertRaises(ValueError):
			asyncio.run(_simulated_scorer().score(_responses(2, -1)))

	def test_live_mode_requires_model(self) -> None:
		with self.assertRaises(ValueError):
			AssessmentScorer(live_mode=True)


class LiveScoringTests(TestCase):
	def _scorer(self, model: _FakeModel) -> AssessmentScorer:
		return AssessmentScorer(live_mode=True, language_model=model, sleep=_RecordingSleep())

	def test_json_payload_is_used(self) -> None:
		model = _FakeModel(
			raw='{"score": 99, "interpretation": "가벼운 스트레스", "recommendations": ["산책하기", "  충분한 수면  "]}'
		)
		result = asyncio.run(self._scorer(model).score(_responses(1, 2)))
		self.assertEqual(result.total_score, 3)
		self.assertEqual(result.interpretation, "가벼운 스트레스")
		self.assertEqual(result.recommendations, ("산책하기", "충분한 수면"))

	def test_request_carries_total_and_low_temperature_json_mode(self) -> None:
		model = _FakeModel(raw='{"interpretation": "ok", "recommendations": ["a"]}')
		asyncio.run(self._scorer(model).score(_responses(3, 3, 1)))
		messages, options = model.calls[0]
		self.assertEqual(messages[0].role, "system")
		self.assertEqual(messages[1].role, "user")
		self.assertIn("총점: 7", messages[1].content)
		self.assertIn("질문: Q1", messages[1].content)
		self.assertTrue(options.json_mode)
		self.assertAlmostEqual(options.temperature, 0.3)

	def test_not_json_degrades_to_defaults(self) -> None:
		model = _FakeModel(raw="not json")
		result = asyncio.run(self._scorer(model).score(_responses(3, 2)))
		self.assertEqual(result.total_score, 5)
		self.assertEqual(result.interpretation, prompts.DEFAULT_INTERPRETATION)
		self.assertEqual(list(result.recommendations), ["전문가와 상담을 받아보세요."])

	def test_partial_payload_fills_missing_fields(self) -> None:
		model = _FakeModel(raw='{"interpretation": "양호합니다"}')
		result = asyncio.run(self._scorer(model).score(_responses(1)))
		self.assertEqual(result.interpretation, "양호합니다")
		self.assertEqual(result.recommendations, prompts.DEFAULT_RECOMMENDATIONS)

	def test_wrongly_typed_fields_fall_back(self) -> None:
		model = _FakeModel(raw='{"interpretation": 12, "recommendations": "sleep more"}')
		result = asyncio.run(self._scorer(model).score(_responses(1)))
		self.assertEqual(result.interpretation, prompts.DEFAULT_INTERPRETATION)
		self.assertEqual(result.recommendations, prompts.DEFAULT_RECOMMENDATIONS)

	def test_malformed_output_from_model_is_recovered(self) -> None:
		model = _FakeModel(error=MalformedModelOutput("empty"))
		result = asyncio.run(self._scorer(model).score(_responses(2)))
		self.assertEqual(result.interpretation, prompts.DEFAULT_INTERPRETATION)

	def test_transport_error_raises_external_service_error(self) -> None:
		model = _FakeModel(error=LanguageModelError("connection reset"))
		with self.assertRaises(ExternalServiceError) as ctx:
			asyncio.run(self._scorer(model).score(_responses(2)))
		self.assertEqual(ctx.exception.operation, "assessment")
		self.assertEqual(ctx.exception.status_code, 502)
		self.assertEqual(ctx.exception.code, "companion_provider_error")
		self.assertEqual(ctx.exception.message, "평가 결과를 분석할 수 없습니다.")

	def test_timeout_maps_to_504(self) -> None:
		model = _FakeModel(error=LanguageModelError("timeout", timed_out=True))
		with self.assertRaises(ExternalServiceError) as ctx:
			asyncio.run(self._scorer(model).score(_responses(2)))
		self.assertEqual(ctx.exception.status_code, 504)
		self.assertEqual(ctx.exception.code, "companion_provider_timeout")

	def test_live_mode_does_not_sleep(self) -> None:
		sleep = _RecordingSleep()
		model = _FakeModel(raw='{"interpretation": "ok", "recommendations": ["a"]}')
		scorer = AssessmentScorer(live_mode=True, language_model=model, sleep=sleep)
		asyncio.run(scorer.score(_responses(1)))
		self.assertEqual(sleep.delays, [])

	def test_unwrapped_connection_error_becomes_external_service_error(self) -> None:
		model = _FakeModel(error=ConnectionError("connection refused"))
		with self.assertRaises(ExternalServiceError) as ctx:
			asyncio.run(self._scorer(model).score(_responses(2)))
		self.assertEqual(ctx.exception.operation, "assessment")
		self.assertEqual(ctx.exception.status_code, 502)
		self.assertEqual(ctx.exception.message, "평가 결과를 분석할 수 없습니다.")

	def test_bad_interpretation_keeps_valid_recommendations(self) -> None:
		model = _FakeModel(raw='{"interpretation": ["not", "text"], "recommendations": ["산책하기", 3, "  "]}')
		result = asyncio.run(self._scorer(model).score(_responses(1)))
		self.assertEqual(result.interpretation, prompts.DEFAULT_INTERPRETATION)
		self.assertEqual(result.recommendations, ("산책하기",))

	def test_blank_interpretation_uses_default(self) -> None:
		model = _FakeModel(raw='{"interpretation": "   ", "recommendations": ["a"]}')
		result = asyncio.run(self._scorer(model).score(_responses(1)))
		self.assertEqual(result.interpretation, prompts.DEFAULT_INTERPRETATION)
		self.assertEqual(result.recommendations, ("a",))
