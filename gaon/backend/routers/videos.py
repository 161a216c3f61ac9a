from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from gaon.backend.companion.errors import ExternalServiceError
from gaon.backend.dependencies import external_service_http_error, get_runtime
from gaon.backend.response import success_response
from gaon.backend.schemas import ApiEnvelope, DiscussionStarterRequest
from gaon.backend.services import companion_service
from gaon.backend.services.companion_service import CompanionRuntime


router = APIRouter(prefix="/api/videos", tags=["videos"])


@router.post("/discussion-starter", response_model=ApiEnvelope)
async def discussion_starter(
	request: Request,
	payload: DiscussionStarterRequest,
	runtime: CompanionRuntime = Depends(get_runtime),
):
	try:
		text = await companion_service.discussion_starter(
			runtime,
			payload.video_title,
			[reflection.model_dump() for reflection in payload.reflections],
		)
	except ExternalServiceError as exc:
		raise external_service_http_error(exc) from exc

	return success_response(
		request=request,
		data={"discussion_starter": text},
	)
