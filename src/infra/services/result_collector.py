import asyncio
from collections.abc import Iterator

from core.domain.check_result import CheckResult


class ResultCollector:
    """Buffers one result per probe until the fan-out barrier has passed.

    The queue is sized to the number of probes, so ``put`` never waits on the consumer.
    ``drain`` hands back exactly ``capacity`` results in completion order and must only be
    called once every producer has finished.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError("Collector capacity must be non-negative")

        self.capacity = capacity
        self._queue: asyncio.Queue[CheckResult] = asyncio.Queue(maxsize=capacity or 1)
        self._drained = False

    def put(self, result: CheckResult) -> None:
        if self._queue.qsize() >= self.capacity:
            raise asyncio.QueueFull(f"Collector already holds {self.capacity} results")

        self._queue.put_nowait(result)

    @property
    def received(self) -> int:
        return self._queue.qsize()

    def drain(self) -> Iterator[CheckResult]:
        if self._drained:
            raise RuntimeError("Collector has already been drained")

        if self._queue.qsize() != self.capacity:
            raise RuntimeError(f"Collector drained with {self._queue.qsize()} of {self.capacity} results")

        self._drained = True

        for _ in range(self.capacity):
            yield self._queue.get_nowait()
