import structlog
from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from pydantic import ValidationError

from core.domain.check_batch import CheckBatch
from core.exceptions.batch_too_large_error import BatchTooLargeError
from infra.adapter.http_prober import get_http_prober
from infra.adapter.postgres_uptime_check_repository import get_uptime_check_repository
from infra.services.probe_fan_out_service import ProbeFanOutService
from infra.web.deps import require_api_key
from infra.web.routers.schemas.uptime_check import (
    CheckResultResponseDTO,
    UptimeCheckRequestDTO,
    serialize_results,
)
from use_cases.uptime_check.record_uptime_check_use_case import RecordUptimeCheckUseCase
from use_cases.uptime_check.run_uptime_checks_use_case import RunUptimeChecksUseCase

logger = structlog.stdlib.get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Uptime checks"])


@router.post(
    "",
    response_model=list[CheckResultResponseDTO],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_api_key)],
    summary="Probe a batch of websites and record the outcome",
    responses={
        status.HTTP_400_BAD_REQUEST: {"description": "Malformed body or too many URLs"},
        status.HTTP_401_UNAUTHORIZED: {"description": "Missing or invalid X-API-Key header"},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"description": "Results could not be serialized"},
    },
)
async def run_uptime_checks(request: Request) -> Response:
    # Parsed by hand so the API key dependency is resolved before the body is read.
    try:
        payload = UptimeCheckRequestDTO.model_validate_json(await request.body())
    except ValidationError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid request body")

    try:
        batch = CheckBatch(
            region=payload.region,
            targets=tuple(url.to_domain() for url in payload.urls),
        )
    except BatchTooLargeError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    use_case = RunUptimeChecksUseCase(
        fan_out_service=ProbeFanOutService(get_http_prober()),
        record_uptime_check_use_case=RecordUptimeCheckUseCase(get_uptime_check_repository()),
    )

    results = await use_case.execute(batch)

    try:
        content = serialize_results(results)
    except ValueError as e:
        logger.exception(f"Error generating response: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error generating response")

    return Response(content=content, media_type="application/json")
