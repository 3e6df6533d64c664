import structlog

from core.domain.check_result import CheckResult
from core.port.uptime_check_repository import UptimeCheckRepository

logger = structlog.stdlib.get_logger(__name__)


class RecordUptimeCheckUseCase:
    def __init__(self, uptime_check_repository: UptimeCheckRepository) -> None:
        self.uptime_check_repository = uptime_check_repository

    async def execute(self, result: CheckResult) -> bool:
        try:
            await self.uptime_check_repository.add_check(result)
        except Exception as e:
            logger.exception(
                f"Error inserting uptime check for '{result.url}': {e}",
                website_id=str(result.id),
            )
            return False

        return True
