from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from routine_builder.api.schemas import ErrorBodySchema
from routine_builder.application.exceptions import InvalidRelayRequestError, TransportError, UpstreamError
from routine_builder.application.use_cases.relay_chat import RelayChatUseCase
from routine_builder.wiring.dependencies import get_relay_use_case


router = APIRouter()
logger = logging.getLogger(__name__)


def _error(status_code: int, error: str, details: str | None = None) -> JSONResponse:
    body = ErrorBodySchema(error=error, details=details).model_dump(exclude_none=True)
    return JSONResponse(body, status_code=status_code)


@router.post("/")
async def relay_chat(
    request: Request,
    use_case: RelayChatUseCase = Depends(get_relay_use_case),
) -> JSONResponse:
    body = await request.body()
    try:
        payload = json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        return _error(400, "Request body must be valid JSON")

    try:
        data = await run_in_threadpool(use_case.execute, payload)
    except InvalidRelayRequestError as e:
        logger.info("Rejected relay request", extra={"reason": str(e)})
        return _error(400, "Include a messages array in the request body")
    except UpstreamError as e:
        return _error(e.status_code, "Upstream request failed", e.details)
    except TransportError as e:
        return _error(500, "Unable to reach the upstream provider", e.details)

    return JSONResponse(data, status_code=200, headers={"Access-Control-Allow-Origin": "*"})


@router.api_route("/", methods=["GET", "HEAD", "PUT", "PATCH", "DELETE", "OPTIONS"], include_in_schema=False)
def method_not_allowed() -> JSONResponse:
    return _error(405, "Method not allowed")
