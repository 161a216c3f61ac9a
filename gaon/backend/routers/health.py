from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from gaon.backend.dependencies import get_runtime
from gaon.backend.response import success_response
from gaon.backend.schemas import ApiEnvelope
from gaon.backend.services import companion_service
from gaon.backend.services.companion_service import CompanionRuntime


router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health/summary", response_model=ApiEnvelope)
def get_summary(request: Request, runtime: CompanionRuntime = Depends(get_runtime)):
	return success_response(
		request=request,
		data=companion_service.mode_summary(runtime),
	)


@router.get("/demo-mode", response_model=ApiEnvelope)
def demo_mode(request: Request, runtime: CompanionRuntime = Depends(get_runtime)):
	return success_response(
		request=request,
		data={"is_demo_mode": runtime.is_simulated()},
	)
