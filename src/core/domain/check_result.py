from dataclasses import dataclass
from uuid import UUID

from core.domain.check_status import CheckStatus
from core.domain.check_target import CheckTarget


@dataclass(frozen=True)
class CheckResult:
    id: UUID
    url: str
    status: CheckStatus
    status_code: int
    response_time_ms: int

    def __post_init__(self):
        if self.response_time_ms < 0:
            raise ValueError(f"Response time must be non-negative: {self.response_time_ms}")

    @classmethod
    def for_target(
        cls,
        target: CheckTarget,
        status: CheckStatus,
        status_code: int,
        response_time_ms: int,
    ) -> "CheckResult":
        return cls(
            id=target.id,
            url=target.url,
            status=status,
            status_code=status_code,
            response_time_ms=response_time_ms,
        )
