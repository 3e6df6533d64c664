import asyncio
from collections.abc import Sequence

import structlog

from core.domain.check_batch import ensure_batch_size
from core.domain.check_target import CheckTarget
from core.port.prober import Prober
from infra.services.result_collector import ResultCollector

logger = structlog.stdlib.get_logger(__name__)


class ProbeFanOutService:
    def __init__(self, prober: Prober) -> None:
        self.prober = prober

    async def run(self, targets: Sequence[CheckTarget]) -> ResultCollector:
        ensure_batch_size(len(targets))

        collector = ResultCollector(capacity=len(targets))

        logger.debug(f"Launching {len(targets)} probes")

        async with asyncio.TaskGroup() as task_group:
            for target in targets:
                task_group.create_task(
                    self._probe_into(target, collector),
                    name=f"probe-{target.id}",
                )

        logger.debug(f"All {collector.received} probes finished")

        return collector

    async def _probe_into(self, target: CheckTarget, collector: ResultCollector) -> None:
        result = await self.prober.probe(target)
        collector.put(result)
