from __future__ import annotations

from fastapi import HTTPException, Request

from gaon.backend.companion.errors import ExternalServiceError
from gaon.backend.services.companion_service import CompanionRuntime


def get_runtime(request: Request) -> CompanionRuntime:
	return request.app.state.companion


def external_service_http_error(exc: ExternalServiceError) -> HTTPException:
	return HTTPException(
		status_code=exc.status_code,
		detail={"code": exc.code, "message": exc.message},
	)
