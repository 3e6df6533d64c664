import time
from functools import lru_cache
from typing import Callable

import httpx
import structlog

from core.domain.check_result import CheckResult
from core.domain.check_status import CheckStatus
from core.domain.check_target import CheckTarget
from core.port.prober import Prober
from infra.config.config import get_config

logger = structlog.stdlib.get_logger(__name__)


class HttpProber(Prober):
    def __init__(
        self,
        http_client: httpx.AsyncClient,
        timeout_seconds: float,
        degraded_threshold_ms: int = 1_000,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self.http_client = http_client
        self.timeout_seconds = timeout_seconds
        self.degraded_threshold_ms = degraded_threshold_ms
        self._clock = clock

    async def probe(self, target: CheckTarget) -> CheckResult:
        started_at = self._clock()

        try:
            # Only the status line and headers are awaited; leaving the block closes the body unread.
            async with self.http_client.stream("GET", target.url, timeout=self.timeout_seconds) as response:
                response_time_ms = self._elapsed_ms(started_at)
                status_code = response.status_code

        except httpx.TimeoutException:
            response_time_ms = self._elapsed_ms(started_at)
            logger.warning(
                f"Probe timeout for '{target.url}' (timeout: {self.timeout_seconds}s)",
                website_id=str(target.id),
            )
            return self._down(target, response_time_ms)

        except (httpx.HTTPError, httpx.InvalidURL) as e:
            response_time_ms = self._elapsed_ms(started_at)
            logger.warning(
                f"Probe failed for '{target.url}': {e.__class__.__name__}: {e}",
                website_id=str(target.id),
            )
            return self._down(target, response_time_ms)

        except Exception as e:
            response_time_ms = self._elapsed_ms(started_at)
            logger.exception(f"Unexpected error probing '{target.url}': {e}", website_id=str(target.id))
            return self._down(target, response_time_ms)

        status = self._classify(response_time_ms)

        log = logger.info if status is CheckStatus.UP else logger.warning
        log(
            f"Probe '{target.url}': status_code={status_code}, "
            f"response_time={response_time_ms}ms, status={status.value}",
            website_id=str(target.id),
        )

        return CheckResult.for_target(
            target,
            status=status,
            status_code=status_code,
            response_time_ms=response_time_ms,
        )

    def _classify(self, response_time_ms: int) -> CheckStatus:
        if response_time_ms > self.degraded_threshold_ms:
            return CheckStatus.DEGRADED

        return CheckStatus.UP

    def _down(self, target: CheckTarget, response_time_ms: int) -> CheckResult:
        return CheckResult.for_target(
            target,
            status=CheckStatus.DOWN,
            status_code=0,
            response_time_ms=response_time_ms,
        )

    def _elapsed_ms(self, started_at: float) -> int:
        return max(0, int((self._clock() - started_at) * 1_000))


@lru_cache
def get_http_client() -> httpx.AsyncClient:
    probe_config = get_config().PROBE_CONFIG

    return httpx.AsyncClient(
        timeout=httpx.Timeout(probe_config.TIMEOUT_SECONDS),
        limits=httpx.Limits(
            max_keepalive_connections=probe_config.MAX_CONNECTIONS,
            max_connections=probe_config.MAX_CONNECTIONS,
        ),
        follow_redirects=probe_config.FOLLOW_REDIRECTS,
    )


async def close_http_client() -> None:
    await get_http_client().aclose()


@lru_cache
def get_http_prober() -> Prober:
    probe_config = get_config().PROBE_CONFIG

    return HttpProber(
        http_client=get_http_client(),
        timeout_seconds=probe_config.TIMEOUT_SECONDS,
        degraded_threshold_ms=probe_config.DEGRADED_THRESHOLD_MS,
    )
