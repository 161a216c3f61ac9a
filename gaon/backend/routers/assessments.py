from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request

from gaon.backend.companion.errors import ExternalServiceError
from gaon.backend.dependencies import external_service_http_error, get_runtime
from gaon.backend.response import success_response
from gaon.backend.schemas import ApiEnvelope, AssessmentScoreRequest, AssessmentSelectionsRequest
from gaon.backend.services import companion_service
from gaon.backend.services.companion_service import CompanionRuntime


router = APIRouter(prefix="/api/assessments", tags=["assessments"])


@router.get("/questions", response_model=ApiEnvelope)
def questions(request: Request):
	return success_response(
		request=request,
		data={"questions": companion_service.questions()},
	)


@router.post("/score", response_model=ApiEnvelope)
async def score(
	request: Request,
	payload: AssessmentScoreRequest,
	runtime: CompanionRuntime = Depends(get_runtime),
):
	try:
		analysis = await companion_service.analyze(
			runtime,
			[item.model_dump() for item in payload.responses],
		)
	except ExternalServiceError as exc:
		raise external_service_http_error(exc) from exc
	except ValueError as exc:
		raise HTTPException(status_code=400, detail=str(exc)) from exc

	return success_response(
		request=request,
		data={"analysis": analysis},
	)


@router.post("/score-selections", response_model=ApiEnvelope)
async def score_selections(
	request: Request,
	payload: AssessmentSelectionsRequest,
	runtime: CompanionRuntime = Depends(get_runtime),
):
	try:
		data = await companion_service.analyze_selections(runtime, payload.selections)
	except ExternalServiceError as exc:
		raise external_service_http_error(exc) from exc
	except ValueError as exc:
		raise HTTPException(status_code=400, detail=str(exc)) from exc

	return success_response(
		request=request,
		data=data,
	)
