from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from gaon.backend.companion.errors import ExternalServiceError
from gaon.backend.dependencies import external_service_http_error, get_runtime
from gaon.backend.response import success_response
from gaon.backend.schemas import ApiEnvelope, ChatReplyRequest
from gaon.backend.services import companion_service
from gaon.backend.services.companion_service import CompanionRuntime


router = APIRouter(prefix="/api/chat", tags=["chat"])


@router.post("/reply", response_model=ApiEnvelope)
async def reply(
	request: Request,
	payload: ChatReplyRequest,
	runtime: CompanionRuntime = Depends(get_runtime),
):
	try:
		text = await companion_service.reply(
			runtime,
			[message.model_dump() for message in payload.messages],
			payload.context,
		)
	except ExternalServiceError as exc:
		raise external_service_http_error(exc) from exc

	return success_response(
		request=request,
		data={"reply": text},
	)
