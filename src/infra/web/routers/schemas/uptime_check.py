from typing import Any
from uuid import UUID

from pydantic import Field, TypeAdapter, field_validator

from core.domain.check_result import CheckResult
from core.domain.check_status import CheckStatus
from core.domain.check_target import CheckTarget
from infra.web.routers.schemas import CamelModel


class CheckTargetDTO(CamelModel):
    website_id: UUID
    url: str

    def to_domain(self) -> CheckTarget:
        return CheckTarget(id=self.website_id, url=self.url)


class UptimeCheckRequestDTO(CamelModel):
    region: str = ""
    urls: list[CheckTargetDTO] = Field(default_factory=list)

    @field_validator("region", mode="before")
    @classmethod
    def _null_region_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("urls", mode="before")
    @classmethod
    def _null_urls_to_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class CheckResultResponseDTO(CamelModel):
    website_id: UUID
    url: str
    status: CheckStatus
    status_code: int
    response_time: int

    @classmethod
    def from_domain(cls, result: CheckResult) -> "CheckResultResponseDTO":
        return cls(
            website_id=result.id,
            url=result.url,
            status=result.status,
            status_code=result.status_code,
            response_time=result.response_time_ms,
        )


_results_adapter = TypeAdapter(list[CheckResultResponseDTO])


def serialize_results(results: list[CheckResult]) -> bytes:
    return _results_adapter.dump_json(
        [CheckResultResponseDTO.from_domain(result) for result in results],
        by_alias=True,
    )
