from collections import Counter

import structlog
from structlog.contextvars import bound_contextvars

from core.domain.check_batch import CheckBatch, ensure_batch_size
from core.domain.check_result import CheckResult
from infra.services.probe_fan_out_service import ProbeFanOutService
from use_cases.uptime_check.record_uptime_check_use_case import RecordUptimeCheckUseCase

logger = structlog.stdlib.get_logger(__name__)


class RunUptimeChecksUseCase:
    def __init__(
        self,
        fan_out_service: ProbeFanOutService,
        record_uptime_check_use_case: RecordUptimeCheckUseCase,
    ) -> None:
        self.fan_out_service = fan_out_service
        self.record_uptime_check_use_case = record_uptime_check_use_case

    async def execute(self, batch: CheckBatch) -> list[CheckResult]:
        ensure_batch_size(len(batch.targets))

        with bound_contextvars(region=batch.region):
            collector = await self.fan_out_service.run(batch.targets)

            results: list[CheckResult] = []
            failed_writes = 0

            for result in collector.drain():
                results.append(result)

                logger.info(
                    f"WebsiteID: {result.id}, URL: {result.url}, Status: {result.status.value}, "
                    f"StatusCode: {result.status_code}, ResponseTime: {result.response_time_ms}ms"
                )

                if not await self.record_uptime_check_use_case.execute(result):
                    failed_writes += 1

            status_counts = Counter(result.status.value for result in results)

            logger.info(
                f"Checked {len(results)} targets "
                f"(up: {status_counts['up']}, degraded: {status_counts['degraded']}, "
                f"down: {status_counts['down']}, failed writes: {failed_writes})"
            )

        return results
